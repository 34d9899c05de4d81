"""Categories and products."""

import json

from fastapi import APIRouter, Depends, Query
from protean.utils.globals import current_domain

from patisserie.api.dependencies import Page, admin_user, page_params
from patisserie.api.responses import envelope
from patisserie.api.schemas import (
    CreateCategoryRequest,
    CreateProductRequest,
    UpdateCategoryRequest,
    UpdateProductRequest,
)
from patisserie.category.management import CreateCategory, DeleteCategory, UpdateCategory
from patisserie.category.queries import category_data, get_category, list_categories
from patisserie.product.management import CreateProduct, DeleteProduct, UpdateProduct
from patisserie.product.queries import get_product, list_products, product_data
from patisserie.utils.serialization import compact

category_router = APIRouter(prefix="/api/categories", tags=["categories"])
product_router = APIRouter(prefix="/api/products", tags=["products"])


def _json(value):
    return json.dumps(value) if value is not None else None


# --- Category endpoints ---


@category_router.get("")
async def categories(include_all: bool = Query(False, alias="all")):
    return envelope(list_categories(include_inactive=include_all))


@category_router.get("/{category_id}")
async def category_detail(category_id: str):
    return envelope(category_data(get_category(category_id)))


@category_router.get("/{category_id}/products")
async def category_products(category_id: str, paging: Page = Depends(page_params)):
    category = get_category(category_id)
    products, pagination = list_products(category_id=str(category.id), page=paging.page, limit=paging.limit)
    return envelope(products, pagination=pagination)


@category_router.post("", status_code=201, dependencies=[Depends(admin_user)])
async def create_category(body: CreateCategoryRequest):
    command = CreateCategory(
        **compact(name=body.name, description=body.description, images=body.images, videos=body.videos)
    )
    category_id = current_domain.process(command, asynchronous=False)
    return envelope(category_data(get_category(category_id)), "Category created successfully", status_code=201)


@category_router.put("/{category_id}", dependencies=[Depends(admin_user)])
async def update_category(category_id: str, body: UpdateCategoryRequest):
    command = UpdateCategory(
        **compact(
            category_id=category_id,
            name=body.name,
            description=body.description,
            images=_json(body.images),
            videos=_json(body.videos),
            is_active=body.is_active,
        )
    )
    current_domain.process(command, asynchronous=False)
    return envelope(category_data(get_category(category_id)), "Category updated successfully")


@category_router.delete("/{category_id}", dependencies=[Depends(admin_user)])
async def delete_category(category_id: str):
    current_domain.process(DeleteCategory(category_id=category_id), asynchronous=False)
    return envelope(message="Category deleted successfully")


# --- Product endpoints ---


@product_router.get("")
async def products(
    category: str | None = None,
    search: str | None = None,
    sort: str = "created_at",
    order: str = Query("desc", pattern="^(asc|desc)$"),
    paging: Page = Depends(page_params),
):
    data, pagination = list_products(
        category_id=category,
        search=search,
        sort=sort,
        order=order,
        page=paging.page,
        limit=paging.limit,
    )
    return envelope(data, pagination=pagination)


@product_router.get("/{product_id}")
async def product_detail(product_id: str):
    return envelope(product_data(get_product(product_id)))


@product_router.post("", status_code=201, dependencies=[Depends(admin_user)])
async def create_product(body: CreateProductRequest):
    command = CreateProduct(
        **compact(
            name=body.name,
            description=body.description,
            category_id=body.category_id,
            images=body.images,
            videos=body.videos,
            tags=body.tags,
            is_veg=body.is_veg,
            has_egg=body.has_egg,
            badge=body.badge,
            cancel_offer=body.cancel_offer,
            variants=[variant.model_dump(exclude_none=True) for variant in body.variants],
        )
    )
    product_id = current_domain.process(command, asynchronous=False)
    return envelope(product_data(get_product(product_id)), "Product created successfully", status_code=201)


@product_router.put("/{product_id}", dependencies=[Depends(admin_user)])
async def update_product(product_id: str, body: UpdateProductRequest):
    variants = [variant.model_dump(exclude_none=True) for variant in body.variants] if body.variants else None
    command = UpdateProduct(
        **compact(
            product_id=product_id,
            name=body.name,
            description=body.description,
            category_id=body.category_id,
            images=_json(body.images),
            videos=_json(body.videos),
            tags=_json(body.tags),
            variants=_json(variants),
            is_veg=body.is_veg,
            has_egg=body.has_egg,
            badge=body.badge,
            cancel_offer=body.cancel_offer,
            is_active=body.is_active,
        )
    )
    current_domain.process(command, asynchronous=False)
    return envelope(product_data(get_product(product_id)), "Product updated successfully")


@product_router.delete("/{product_id}", dependencies=[Depends(admin_user)])
async def delete_product(product_id: str):
    current_domain.process(DeleteProduct(product_id=product_id), asynchronous=False)
    return envelope(message="Product deleted successfully")
