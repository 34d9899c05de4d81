"""Domain events for the Banner aggregate."""

from protean.fields import Boolean, Identifier, String

from patisserie.domain import patisserie


@patisserie.event(part_of="Banner")
class BannerCreated:
    __version__ = 1

    banner_id: Identifier(required=True)
    title: String(required=True)


@patisserie.event(part_of="Banner")
class BannerToggled:
    __version__ = 1

    banner_id: Identifier(required=True)
    is_active: Boolean(required=True)
