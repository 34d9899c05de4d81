"""Drop the cached shop status whenever the schedule changes."""

from protean import handle

from patisserie.domain import patisserie
from patisserie.shop.events import ShopScheduleUpdated
from patisserie.shop.queries import SHOP_STATUS_KEY
from patisserie.shop.schedule import ShopSchedule
from patisserie.utils.cache import cache


@patisserie.event_handler(part_of=ShopSchedule)
class ShopStatusCacheHandler:
    @handle(ShopScheduleUpdated)
    def invalidate(self, event: ShopScheduleUpdated) -> None:
        cache.delete(SHOP_STATUS_KEY)
