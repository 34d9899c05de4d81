import os
from pathlib import Path

import pytest
from protean.integrations.pytest import DomainFixture
from protean.utils.globals import current_domain


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Select the config overlay before any domain module is imported."""
    os.environ["PROTEAN_ENV"] = session.config.option.env


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = Path(item.fspath)

        if "/domain/" in str(test_path):
            item.add_marker(pytest.mark.domain)
        elif "/application/" in str(test_path):
            item.add_marker(pytest.mark.application)
        elif "/integration/" in str(test_path):
            item.add_marker(pytest.mark.integration)
            # Integration tests are often slower
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture(scope="session")
def patisserie_bed():
    from patisserie.domain import patisserie

    bed = DomainFixture(patisserie)
    bed.setup()
    yield bed
    bed.teardown()


def _reset_adapters():
    from patisserie.auth import reset_verifier
    from patisserie.channel import reset_channels
    from patisserie.gateway import reset_gateway
    from patisserie.utils.cache import cache
    from patisserie.utils.ratelimit import contact_rate_limit

    reset_channels()
    reset_gateway()
    reset_verifier()
    cache.clear()
    contact_rate_limit.reset()


@pytest.fixture(autouse=True)
def _ctx(patisserie_bed):
    with patisserie_bed.domain_context():
        _reset_adapters()
        yield
        _reset_adapters()


# ---------------------------------------------------------------------------
# Adapters
# ---------------------------------------------------------------------------
@pytest.fixture
def email_channel():
    """The in-memory email adapter every handler sends through."""
    from patisserie.channel import get_email_channel

    return get_email_channel()


@pytest.fixture
def gateway():
    from patisserie.gateway import get_gateway

    return get_gateway()


@pytest.fixture
def verifier():
    from patisserie.auth import get_verifier

    return get_verifier()


# ---------------------------------------------------------------------------
# HTTP
# ---------------------------------------------------------------------------
@pytest.fixture
def client(patisserie_bed):
    from fastapi.testclient import TestClient
    from patisserie.api import create_app

    return TestClient(create_app(patisserie_bed.domain))


@pytest.fixture
def auth_headers():
    def _headers(user):
        return {"Authorization": f"Bearer test-token:{user.uid}"}

    return _headers


# ---------------------------------------------------------------------------
# Accounts
# ---------------------------------------------------------------------------
@pytest.fixture
def register():
    from patisserie.identity.registration import ChangeUserRole, RegisterUser
    from patisserie.identity.user import User
    from patisserie.utils.serialization import compact

    def _register(uid, email=None, name=None, phone=None, role="user"):
        user_id = current_domain.process(
            RegisterUser(**compact(uid=uid, email=email, name=name, phone=phone)), asynchronous=False
        )
        if role != "user":
            current_domain.process(ChangeUserRole(user_id=user_id, role=role), asynchronous=False)
        return current_domain.repository_for(User).get(user_id)

    return _register


@pytest.fixture
def customer(register):
    return register("uid-asha", email="asha@example.com", name="Asha Menon", phone="9876543210")


@pytest.fixture
def admin(register):
    return register("uid-chef", email="chef@lapatisserie.shop", name="Head Chef", role="admin")


# ---------------------------------------------------------------------------
# Catalogue
# ---------------------------------------------------------------------------
@pytest.fixture
def make_category():
    from patisserie.category.category import Category
    from patisserie.category.management import CreateCategory

    def _make(name="Brownies", **details):
        category_id = current_domain.process(CreateCategory(name=name, **details), asynchronous=False)
        return current_domain.repository_for(Category).get(category_id)

    return _make


@pytest.fixture
def make_product(make_category):
    from patisserie.category.category import Category
    from patisserie.product.management import CreateProduct
    from patisserie.product.product import Product

    def _default_category():
        existing = current_domain.repository_for(Category)._dao.query.filter(name="Brownies").all().items
        return existing[0] if existing else make_category()

    def _make(name="Belgian Chocolate Brownie", category=None, variants=None, **details):
        category = category or _default_category()
        variants = variants or [{"quantity": 1, "measuring_unit": "pcs", "price": 120.0}]
        product_id = current_domain.process(
            CreateProduct(name=name, category_id=str(category.id), variants=variants, **details),
            asynchronous=False,
        )
        return current_domain.repository_for(Product).get(product_id)

    return _make


# ---------------------------------------------------------------------------
# Checkout
# ---------------------------------------------------------------------------
@pytest.fixture
def open_shop():
    """Open round the clock (identical bounds cover the whole day)."""
    from patisserie.shop.management import UpdateShopSchedule

    all_day = {"start_time": "00:00", "end_time": "00:00", "is_active": True}
    current_domain.process(UpdateShopSchedule(weekday=all_day, weekend=all_day), asynchronous=False)


@pytest.fixture
def place_order(open_shop):
    """Fill the user's cart with ``product`` and check out."""
    from patisserie.cart.management import AddToCart
    from patisserie.order.placement import PlaceOrder
    from patisserie.utils.serialization import compact

    def _place(user, product, quantity=1, payment_method="cod", variant_index=0, **details):
        current_domain.process(
            AddToCart(
                user_id=str(user.id),
                product_id=str(product.id),
                variant_index=variant_index,
                quantity=quantity,
            ),
            asynchronous=False,
        )
        return current_domain.process(
            PlaceOrder(user_id=str(user.id), payment_method=payment_method, **compact(**details)),
            asynchronous=False,
        )

    return _place
