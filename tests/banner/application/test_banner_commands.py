import pytest
from patisserie.banner.management import CreateBanner, DeleteBanner, ReorderBanners, ToggleBanner, UpdateBanner
from patisserie.banner.queries import get_banner, list_banners
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain


def _create(title, display_order=0, **details):
    return current_domain.process(
        CreateBanner(
            title=title,
            src=f"https://cdn.example.com/{title.lower()}.jpg",
            display_order=display_order,
            **details,
        ),
        asynchronous=False,
    )


class TestBannerCommands:
    def test_update_features_from_json(self):
        banner_id = _create("Cakes")

        current_domain.process(
            UpdateBanner(banner_id=banner_id, features='["Eggless", "Same day"]', media_metadata='{"width": 1920}'),
            asynchronous=False,
        )

        banner = get_banner(banner_id)
        assert banner.features == ["Eggless", "Same day"]
        assert banner.media_metadata == {"width": 1920}

    def test_toggle_returns_new_state(self):
        banner_id = _create("Cakes")

        assert current_domain.process(ToggleBanner(banner_id=banner_id), asynchronous=False) is False
        assert current_domain.process(ToggleBanner(banner_id=banner_id), asynchronous=False) is True

    def test_delete_removes_the_banner(self):
        banner_id = _create("Cakes")

        current_domain.process(DeleteBanner(banner_id=banner_id), asynchronous=False)

        with pytest.raises(ObjectNotFoundError):
            get_banner(banner_id)

    def test_reorder(self):
        first = _create("Cakes", display_order=0)
        second = _create("Cookies", display_order=1)

        current_domain.process(
            ReorderBanners(positions=[{"id": first, "display_order": 1}, {"id": second, "display_order": 0}]),
            asynchronous=False,
        )

        assert [banner["title"] for banner in list_banners()] == ["Cookies", "Cakes"]

    def test_reorder_needs_positions(self):
        with pytest.raises(ValidationError) as exc:
            current_domain.process(ReorderBanners(positions=[]), asynchronous=False)
        assert exc.value.messages["positions"] == ["Banner order list is required"]


class TestBannerQueries:
    def test_public_list_hides_inactive_banners(self):
        _create("Cakes")
        _create("Cookies", is_active=False)

        assert [banner["title"] for banner in list_banners()] == ["Cakes"]
        assert len(list_banners(include_inactive=True)) == 2

    def test_list_is_in_display_order(self):
        _create("Tarts", display_order=2)
        _create("Cakes", display_order=0)
        _create("Cookies", display_order=1)

        assert [banner["title"] for banner in list_banners()] == ["Cakes", "Cookies", "Tarts"]
