import pytest
from patisserie.banner.banner import Banner
from patisserie.banner.events import BannerCreated, BannerToggled
from protean.exceptions import ValidationError

HERO = "https://cdn.example.com/hero.jpg"


class TestBannerCreation:
    def test_create_with_defaults(self):
        banner = Banner.create(title="Fresh from the oven", src=HERO)

        assert banner.is_active is True
        assert banner.media_type == "image"
        assert banner.display_order == 0
        assert isinstance(banner._events[0], BannerCreated)

    def test_source_must_be_a_web_url(self):
        with pytest.raises(ValidationError) as exc:
            Banner.create(title="Fresh", src="ftp://cdn.example.com/hero.jpg")
        assert exc.value.messages["src"] == ["Banner source must be an http(s) URL"]

    def test_at_most_ten_features(self):
        with pytest.raises(ValidationError) as exc:
            Banner.create(title="Fresh", src=HERO, features=[f"Feature {n}" for n in range(11)])
        assert exc.value.messages["features"] == ["A banner can list at most 10 features"]

    def test_features_are_short(self):
        with pytest.raises(ValidationError):
            Banner.create(title="Fresh", src=HERO, features=["x" * 101])

    def test_unknown_media_type(self):
        with pytest.raises(ValidationError):
            Banner.create(title="Fresh", src=HERO, media_type="gif")


class TestBannerChanges:
    def test_toggle_flips_visibility(self):
        banner = Banner.create(title="Fresh", src=HERO)
        banner._events.clear()

        banner.toggle()

        assert banner.is_active is False
        assert isinstance(banner._events[0], BannerToggled)
        assert banner._events[0].is_active is False

    def test_move_to(self):
        banner = Banner.create(title="Fresh", src=HERO)
        banner.move_to(3)
        assert banner.display_order == 3

    def test_update_rejects_a_bad_source(self):
        banner = Banner.create(title="Fresh", src=HERO)
        with pytest.raises(ValidationError):
            banner.update_details(src="/relative/path.jpg")
