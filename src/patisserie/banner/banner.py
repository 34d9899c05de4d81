"""Banner aggregate: homepage hero slides."""

from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Dict, Integer, List, String

from patisserie.domain import patisserie

MAX_FEATURES = 10
MAX_FEATURE_LENGTH = 100


class MediaType(Enum):
    IMAGE = "image"
    VIDEO = "video"


@patisserie.aggregate
class Banner:
    title: String(required=True, max_length=100)
    subtitle: String(max_length=200)
    description: String(max_length=500)
    media_type: String(choices=MediaType, default=MediaType.IMAGE.value)
    src: String(required=True, max_length=1000, sanitize=False)
    alt_text: String(max_length=200)
    is_active: Boolean(default=True)
    display_order: Integer(default=0)
    features: List(content_type=str)
    media_metadata: Dict()
    created_at: DateTime()
    updated_at: DateTime()

    @invariant.post
    def src_must_be_a_web_url(self):
        if self.src and not self.src.startswith(("http://", "https://")):
            raise ValidationError({"src": ["Banner source must be an http(s) URL"]})

    @invariant.post
    def features_must_be_short(self):
        if len(self.features or []) > MAX_FEATURES:
            raise ValidationError({"features": [f"A banner can list at most {MAX_FEATURES} features"]})
        if any(len(feature) > MAX_FEATURE_LENGTH for feature in self.features or []):
            raise ValidationError({"features": [f"Features must be at most {MAX_FEATURE_LENGTH} characters"]})

    @classmethod
    def create(cls, title, src, **details):
        from patisserie.banner.events import BannerCreated

        now = datetime.now(UTC)
        details = {key: value for key, value in details.items() if value is not None}
        banner = cls(title=title, src=src, created_at=now, updated_at=now, **details)
        banner.raise_(BannerCreated(banner_id=banner.id, title=banner.title))
        return banner

    def update_details(self, **details):
        for field_name, value in details.items():
            if value is not None:
                setattr(self, field_name, value)
        self.updated_at = datetime.now(UTC)

    def toggle(self):
        from patisserie.banner.events import BannerToggled

        self.is_active = not self.is_active
        self.updated_at = datetime.now(UTC)
        self.raise_(BannerToggled(banner_id=self.id, is_active=self.is_active))

    def move_to(self, display_order: int):
        self.display_order = display_order
        self.updated_at = datetime.now(UTC)
