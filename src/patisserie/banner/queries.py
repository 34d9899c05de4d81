"""Read-side helpers for homepage banners."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from patisserie.banner.banner import Banner
from patisserie.utils.serialization import to_data


def list_banners(include_inactive: bool = False) -> list[dict]:
    """Banners in display order, oldest first within the same position."""
    query = current_domain.repository_for(Banner)._dao.query
    if not include_inactive:
        query = query.filter(is_active=True)
    banners = query.order_by(["display_order", "created_at"]).limit(None).all().items
    return [to_data(banner) for banner in banners]


def get_banner(banner_id: str) -> Banner:
    banner = current_domain.repository_for(Banner).get_or_none(banner_id)
    if banner is None:
        raise ObjectNotFoundError("Banner not found")
    return banner
