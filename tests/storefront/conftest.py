from unittest.mock import MagicMock

import pytest
from protean.integrations.pytest import DomainFixture
from storefront.client import StorefrontClient
from storefront.client.schemas import Product
from storefront.storage import MemoryStorage


@pytest.fixture(scope="session")
def storefront_bed():
    from storefront.domain import storefront

    bed = DomainFixture(storefront)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(storefront_bed):
    with storefront_bed.domain_context():
        yield


@pytest.fixture()
def storage():
    return MemoryStorage()


@pytest.fixture()
def client():
    return MagicMock(spec=StorefrontClient)


@pytest.fixture()
def make_product():
    def _make(product_id="prod-a", price=10.0, **overrides):
        data = {
            "_id": product_id,
            "title": f"Product {product_id}",
            "slug": product_id,
            "price": price,
            "images": [f"https://cdn.example.com/{product_id}-1.jpg", f"https://cdn.example.com/{product_id}-2.jpg"],
            "category": "Pots",
            "stock": 5,
        }
        data.update(overrides)
        return Product.model_validate(data)

    return _make
