"""Product aggregate root with priced Variant entities."""

from datetime import UTC, datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import (
    Boolean,
    DateTime,
    Float,
    HasMany,
    Identifier,
    Integer,
    List,
    String,
    Text,
)

from patisserie.domain import patisserie

BEST_SELLER_THRESHOLD = 4
MAX_PERCENTAGE_DISCOUNT = 99


class MeasuringUnit(Enum):
    GRAM = "g"
    KILOGRAM = "kg"
    POUND = "lb"
    OUNCE = "oz"
    PIECES = "pcs"
    MILLILITRE = "ml"
    LITRE = "l"


class DiscountType(Enum):
    FLAT = "flat"
    PERCENTAGE = "percentage"


def _capped_percentage(value: float) -> float:
    return min(max(0.0, value), MAX_PERCENTAGE_DISCOUNT)


@patisserie.entity(part_of="Product")
class Variant:
    """A sellable size of a product ("500 g", "6 pcs") with its own price and stock.

    Variants are addressed by ``position``, which is the index the storefront
    sends back when adding an item to the cart.
    """

    position: Integer(default=0, min_value=0)
    quantity: Float(required=True, min_value=0)
    measuring_unit: String(choices=MeasuringUnit, default=MeasuringUnit.GRAM.value)
    price: Float(required=True, min_value=0)
    cost_price: Float(default=0.0, min_value=0)
    discount_type: String(choices=DiscountType)
    discount_value: Float(default=0.0, min_value=0)
    stock: Integer(default=0, min_value=0)
    is_stock_active: Boolean(default=False)


@patisserie.aggregate
class Product:
    code: String(max_length=20)
    name: String(required=True, max_length=200)
    description: Text()
    category_id: Identifier(required=True)
    images: List(content_type=str)
    videos: List(content_type=str)
    tags: List(content_type=str)
    is_veg: Boolean(default=True)
    has_egg: Boolean(default=False)
    badge: String(max_length=50)
    is_active: Boolean(default=True)
    cancel_offer: Boolean(default=False)
    total_order_count: Integer(default=0, min_value=0)
    last_order_count_update: DateTime()
    variants: HasMany(Variant)
    created_at: DateTime()
    updated_at: DateTime()

    @invariant.post
    def product_must_have_a_variant(self):
        if not self.variants:
            raise ValidationError({"variants": ["Product must have at least one variant"]})

    @classmethod
    def create(cls, code, name, category_id, variants, **details):
        from patisserie.product.events import ProductCreated

        now = datetime.now(UTC)
        product = cls(
            code=code,
            name=name.strip(),
            category_id=category_id,
            variants=_build_variants(variants),
            created_at=now,
            updated_at=now,
            **details,
        )
        product.raise_(
            ProductCreated(
                product_id=product.id,
                code=code,
                name=product.name,
                category_id=category_id,
            )
        )
        return product

    # -------------------------------------------------------------------
    # Pricing
    # -------------------------------------------------------------------
    @property
    def is_best_seller(self) -> bool:
        return (self.total_order_count or 0) >= BEST_SELLER_THRESHOLD

    @property
    def featured_image(self):
        return self.images[0] if self.images else None

    def ordered_variants(self) -> list:
        return sorted(self.variants, key=lambda variant: variant.position)

    def variant_at(self, index: int):
        variants = self.ordered_variants()
        if index < 0 or index >= len(variants):
            raise ValidationError({"variant_index": [f"Variant {index} does not exist"]})
        return variants[index]

    def final_price(self, index: int = 0) -> float:
        """Price the customer pays for a variant after its discount."""
        variant = self.variant_at(index)
        price = variant.price or 0.0

        if self.cancel_offer or not variant.discount_type:
            return round(price, 2)

        value = variant.discount_value or 0.0
        if variant.discount_type == DiscountType.FLAT.value:
            return round(max(0.0, price - value), 2)
        return round(price * (1 - _capped_percentage(value) / 100), 2)

    def discount_percentage(self, index: int = 0) -> float:
        variant = self.variant_at(index)
        if self.cancel_offer or not variant.discount_type:
            return 0
        if variant.discount_type == DiscountType.FLAT.value:
            return round((variant.discount_value / variant.price) * 100) if variant.price else 0
        return _capped_percentage(variant.discount_value or 0.0)

    def stock_for(self, index: int):
        """Available stock, or ``None`` when the variant does not track stock."""
        variant = self.variant_at(index)
        return variant.stock if variant.is_stock_active else None

    # -------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------
    def update_details(self, variants=None, **details):
        from patisserie.product.events import ProductUpdated

        with atomic_change(self):
            for field_name, value in details.items():
                if value is not None:
                    setattr(self, field_name, value)

            if variants:
                for variant in list(self.variants):
                    self.remove_variants(variant)
                self.add_variants(*_build_variants(variants))

            self.updated_at = datetime.now(UTC)

        self.raise_(ProductUpdated(product_id=self.id, name=self.name, is_active=self.is_active))

    def deactivate(self):
        from patisserie.product.events import ProductDeactivated

        if not self.is_active:
            raise ValidationError({"product": ["Product is already inactive"]})

        self.is_active = False
        self.updated_at = datetime.now(UTC)
        self.raise_(ProductDeactivated(product_id=self.id))

    def record_sale(self, variant_index: int, quantity: int):
        """Take ``quantity`` units out of stock and count them towards best-seller status."""
        from patisserie.product.events import ProductSold

        variant = self.variant_at(variant_index)
        if variant.is_stock_active:
            if variant.stock < quantity:
                raise ValidationError(
                    {"stock": [f"Insufficient stock for {self.name}. Only {variant.stock} left."]}
                )
            variant.stock = variant.stock - quantity

        now = datetime.now(UTC)
        self.total_order_count = (self.total_order_count or 0) + quantity
        self.last_order_count_update = now
        self.updated_at = now

        self.raise_(
            ProductSold(
                product_id=self.id,
                variant_index=variant_index,
                quantity=quantity,
                total_order_count=self.total_order_count,
            )
        )


def _build_variants(variants: list[dict]) -> list[Variant]:
    built = []
    for position, data in enumerate(variants or []):
        attributes = {key: value for key, value in data.items() if value is not None and key != "position"}
        built.append(Variant(position=position, **attributes))
    return built
