"""Home page product rails: newest arrivals and best sellers."""

from dataclasses import dataclass, field

from storefront.catalogue.filter import SortOrder
from storefront.client.schemas import Product

SHOWCASE_SIZE = 8


@dataclass
class Showcase:
    new_arrivals: list[Product] = field(default_factory=list)
    best_sellers: list[Product] = field(default_factory=list)


def load_showcase(client, size: int = SHOWCASE_SIZE) -> Showcase:
    new_arrivals = client.catalog(sort=SortOrder.NEWEST.value, limit=size)
    best_sellers = client.catalog(sort=SortOrder.PRICE_DESC.value, limit=size)
    return Showcase(new_arrivals=new_arrivals.items, best_sellers=best_sellers.items)
