"""Storefront banners and their admin management."""

import json

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from patisserie.api.dependencies import admin_user
from patisserie.api.responses import envelope
from patisserie.api.schemas import CreateBannerRequest, ReorderBannersRequest, UpdateBannerRequest
from patisserie.banner.management import CreateBanner, DeleteBanner, ReorderBanners, ToggleBanner, UpdateBanner
from patisserie.banner.queries import get_banner, list_banners
from patisserie.utils.serialization import compact, to_data

router = APIRouter(prefix="/api/banners", tags=["banners"])


@router.get("")
async def active_banners():
    return envelope(list_banners())


@router.get("/admin/all", dependencies=[Depends(admin_user)])
async def all_banners():
    return envelope(list_banners(include_inactive=True))


@router.post("/admin", status_code=201, dependencies=[Depends(admin_user)])
async def create_banner(body: CreateBannerRequest):
    command = CreateBanner(**compact(**body.model_dump()))
    banner_id = current_domain.process(command, asynchronous=False)
    return envelope(to_data(get_banner(banner_id)), "Banner created successfully", status_code=201)


@router.put("/admin/reorder", dependencies=[Depends(admin_user)])
async def reorder_banners(body: ReorderBannersRequest):
    command = ReorderBanners(positions=[position.model_dump() for position in body.banners])
    current_domain.process(command, asynchronous=False)
    return envelope(list_banners(include_inactive=True), "Banners reordered successfully")


@router.put("/admin/{banner_id}", dependencies=[Depends(admin_user)])
async def update_banner(banner_id: str, body: UpdateBannerRequest):
    command = UpdateBanner(
        **compact(
            banner_id=banner_id,
            title=body.title,
            subtitle=body.subtitle,
            description=body.description,
            media_type=body.media_type,
            src=body.src,
            alt_text=body.alt_text,
            is_active=body.is_active,
            display_order=body.display_order,
            features=json.dumps(body.features) if body.features is not None else None,
            media_metadata=json.dumps(body.media_metadata) if body.media_metadata is not None else None,
        )
    )
    current_domain.process(command, asynchronous=False)
    return envelope(to_data(get_banner(banner_id)), "Banner updated successfully")


@router.put("/admin/{banner_id}/toggle", dependencies=[Depends(admin_user)])
async def toggle_banner(banner_id: str):
    is_active = current_domain.process(ToggleBanner(banner_id=banner_id), asynchronous=False)
    state = "activated" if is_active else "deactivated"
    return envelope(to_data(get_banner(banner_id)), f"Banner {state} successfully")


@router.delete("/admin/{banner_id}", dependencies=[Depends(admin_user)])
async def delete_banner(banner_id: str):
    current_domain.process(DeleteBanner(banner_id=banner_id), asynchronous=False)
    return envelope(message="Banner deleted successfully")


@router.get("/{banner_id}")
async def banner_detail(banner_id: str):
    return envelope(to_data(get_banner(banner_id)))
