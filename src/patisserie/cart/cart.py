"""Cart aggregate: one per user, holding priced snapshots of the chosen variants.

The snapshot (name, price, image, category) is what the storefront shows;
it is refreshed from the catalogue on demand and re-checked at checkout.
"""

from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, HasMany, Identifier, Integer, String

from patisserie.domain import patisserie


@patisserie.entity(part_of="Cart")
class CartItem:
    product_id = Identifier(required=True)
    variant_index = Integer(default=0, min_value=0)
    quantity = Integer(required=True, min_value=1)
    name = String(max_length=200)
    price = Float(default=0.0, min_value=0)
    image = String(max_length=500, sanitize=False)
    category_name = String(max_length=100)
    has_egg = Boolean(default=False)
    added_at = DateTime()

    @property
    def subtotal(self) -> float:
        return round(self.price * self.quantity, 2)


@patisserie.aggregate
class Cart:
    user_id = Identifier(required=True, unique=True)
    items = HasMany(CartItem)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def create(cls, user_id):
        now = datetime.now(UTC)
        return cls(user_id=user_id, created_at=now, updated_at=now)

    @property
    def cart_total(self) -> float:
        return round(sum(item.price * item.quantity for item in self.items), 2)

    @property
    def cart_count(self) -> int:
        return sum(item.quantity for item in self.items)

    def find_item(self, product_id, variant_index=0):
        return next(
            (
                item
                for item in self.items
                if str(item.product_id) == str(product_id) and item.variant_index == variant_index
            ),
            None,
        )

    def quantity_of(self, product_id, variant_index=0) -> int:
        item = self.find_item(product_id, variant_index)
        return item.quantity if item else 0

    def add_item(self, product_id, variant_index, quantity, snapshot):
        """Add ``quantity`` units, merging with an existing line for the same variant."""
        from patisserie.cart.events import CartItemAdded

        now = datetime.now(UTC)
        existing = self.find_item(product_id, variant_index)
        if existing:
            existing.quantity = existing.quantity + quantity
            existing.price = snapshot["price"]
            existing.name = snapshot["name"]
        else:
            self.add_items(
                CartItem(
                    product_id=product_id,
                    variant_index=variant_index,
                    quantity=quantity,
                    added_at=now,
                    **snapshot,
                )
            )

        self.updated_at = now
        self.raise_(
            CartItemAdded(
                cart_id=self.id,
                user_id=self.user_id,
                product_id=product_id,
                variant_index=variant_index,
                quantity=self.quantity_of(product_id, variant_index),
            )
        )

    def update_quantity(self, product_id, quantity, variant_index=0):
        item = self.find_item(product_id, variant_index)
        if item is None:
            return False

        if quantity <= 0:
            self.remove_items(item)
        else:
            item.quantity = quantity
        self.updated_at = datetime.now(UTC)
        return True

    def remove_item(self, product_id, variant_index=0):
        item = self.find_item(product_id, variant_index)
        if item is None:
            raise ValidationError({"product_id": ["Item not found in cart"]})

        self.remove_items(item)
        self.updated_at = datetime.now(UTC)

    def clear(self):
        from patisserie.cart.events import CartCleared

        for item in list(self.items):
            self.remove_items(item)
        self.updated_at = datetime.now(UTC)
        self.raise_(CartCleared(cart_id=self.id, user_id=self.user_id))

    def refresh_item(self, item, snapshot) -> bool:
        """Bring an item's snapshot in line with the catalogue; True when something changed."""
        changed = False
        for field, value in snapshot.items():
            if getattr(item, field) != value:
                setattr(item, field, value)
                changed = True
        if changed:
            self.updated_at = datetime.now(UTC)
        return changed
