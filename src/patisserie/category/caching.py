"""Invalidate the cached public category list whenever a category changes."""

import structlog
from protean import handle

from patisserie.category.category import Category
from patisserie.category.events import CategoryCreated, CategoryDeactivated, CategoryUpdated
from patisserie.category.queries import PUBLIC_CATEGORIES_KEY
from patisserie.domain import patisserie
from patisserie.utils.cache import cache

logger = structlog.get_logger(__name__)


@patisserie.event_handler(part_of=Category)
class CategoryCacheHandler:
    def _invalidate(self, event):
        cache.delete(PUBLIC_CATEGORIES_KEY)
        logger.debug("Category cache invalidated", category_id=str(event.category_id))

    @handle(CategoryCreated)
    def on_created(self, event: CategoryCreated) -> None:
        self._invalidate(event)

    @handle(CategoryUpdated)
    def on_updated(self, event: CategoryUpdated) -> None:
        self._invalidate(event)

    @handle(CategoryDeactivated)
    def on_deactivated(self, event: CategoryDeactivated) -> None:
        self._invalidate(event)
