"""Category aggregate: the top-level grouping of the storefront menu."""

from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, List, String

from patisserie.domain import patisserie


@patisserie.aggregate
class Category:
    """A menu section such as "Cakes" or "Brownies".

    Names are unique case-insensitively among all categories. Deleting a
    category only deactivates it, so historic orders keep resolving.
    """

    name: String(required=True, max_length=100)
    description: String(max_length=500)
    images: List(content_type=str)
    videos: List(content_type=str)
    is_active: Boolean(default=True)
    created_at: DateTime()
    updated_at: DateTime()

    @property
    def featured_image(self):
        return self.images[0] if self.images else None

    @classmethod
    def create(cls, name, description=None, images=None, videos=None):
        from patisserie.category.events import CategoryCreated

        now = datetime.now(UTC)
        category = cls(
            name=name.strip(),
            description=description,
            images=images or [],
            videos=videos or [],
            created_at=now,
            updated_at=now,
        )
        category.raise_(CategoryCreated(category_id=category.id, name=category.name))
        return category

    def update_details(self, name=None, description=None, images=None, videos=None, is_active=None):
        from patisserie.category.events import CategoryUpdated

        if name is not None:
            self.name = name.strip()
        if description is not None:
            self.description = description
        if images is not None:
            self.images = images
        if videos is not None:
            self.videos = videos
        if is_active is not None:
            self.is_active = is_active

        self.updated_at = datetime.now(UTC)
        self.raise_(CategoryUpdated(category_id=self.id, name=self.name, is_active=self.is_active))

    def deactivate(self):
        from patisserie.category.events import CategoryDeactivated

        if not self.is_active:
            raise ValidationError({"category": ["Category is already inactive"]})

        now = datetime.now(UTC)
        self.is_active = False
        self.updated_at = now
        self.raise_(CategoryDeactivated(category_id=self.id, deactivated_at=now))
