"""Banner management commands and handler."""

import json

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Boolean, Dict, Identifier, Integer, List, String, Text
from protean.utils.globals import current_domain

from patisserie.banner.banner import Banner
from patisserie.domain import patisserie


@patisserie.command(part_of="Banner")
class CreateBanner:
    title: String(required=True, max_length=100)
    subtitle: String(max_length=200)
    description: String(max_length=500)
    media_type: String(max_length=10)
    src: String(required=True, max_length=1000, sanitize=False)
    alt_text: String(max_length=200)
    is_active: Boolean(default=True)
    display_order: Integer(default=0)
    features: List(content_type=str)
    media_metadata: Dict()


@patisserie.command(part_of="Banner")
class UpdateBanner:
    banner_id: Identifier(required=True)
    title: String(max_length=100)
    subtitle: String(max_length=200)
    description: String(max_length=500)
    media_type: String(max_length=10)
    src: String(max_length=1000, sanitize=False)
    alt_text: String(max_length=200)
    is_active: Boolean()
    display_order: Integer()
    features: Text(sanitize=False)  # JSON array, omitted when unchanged
    media_metadata: Text(sanitize=False)


@patisserie.command(part_of="Banner")
class DeleteBanner:
    banner_id: Identifier(required=True)


@patisserie.command(part_of="Banner")
class ToggleBanner:
    banner_id: Identifier(required=True)


@patisserie.command(part_of="Banner")
class ReorderBanners:
    positions: List(content_type=dict)  # [{"id": ..., "display_order": ...}]


@patisserie.command_handler(part_of=Banner)
class ManageBannerHandler:
    @handle(CreateBanner)
    def create_banner(self, command):
        banner = Banner.create(
            title=command.title,
            src=command.src,
            subtitle=command.subtitle,
            description=command.description,
            media_type=command.media_type,
            alt_text=command.alt_text,
            is_active=command.is_active,
            display_order=command.display_order,
            features=command.features,
            media_metadata=command.media_metadata,
        )
        current_domain.repository_for(Banner).add(banner)
        return str(banner.id)

    @handle(UpdateBanner)
    def update_banner(self, command):
        repo = current_domain.repository_for(Banner)
        banner = repo.get(command.banner_id)
        banner.update_details(
            title=command.title,
            subtitle=command.subtitle,
            description=command.description,
            media_type=command.media_type,
            src=command.src,
            alt_text=command.alt_text,
            is_active=command.is_active,
            display_order=command.display_order,
            features=json.loads(command.features) if command.features else None,
            media_metadata=json.loads(command.media_metadata) if command.media_metadata else None,
        )
        repo.add(banner)

    @handle(DeleteBanner)
    def delete_banner(self, command):
        repo = current_domain.repository_for(Banner)
        banner = repo.get(command.banner_id)
        repo._dao.delete(banner)

    @handle(ToggleBanner)
    def toggle_banner(self, command):
        repo = current_domain.repository_for(Banner)
        banner = repo.get(command.banner_id)
        banner.toggle()
        repo.add(banner)
        return banner.is_active

    @handle(ReorderBanners)
    def reorder_banners(self, command):
        if not command.positions:
            raise ValidationError({"positions": ["Banner order list is required"]})

        repo = current_domain.repository_for(Banner)
        for position in command.positions:
            banner = repo.get(position["id"])
            banner.move_to(int(position["display_order"]))
            repo.add(banner)
