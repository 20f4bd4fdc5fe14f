"""CatalogQuery: turns filter selections into catalog requests and
reconciles the returned page into pagination state.

Each issued request carries a sequence number. A response is applied only
if it answers the most recently issued request; older responses that
resolve late are discarded.
"""

import math
from dataclasses import dataclass, field

import structlog

from storefront.catalogue.filter import PAGE_SIZE, CatalogFilter
from storefront.client.schemas import CatalogPage, Product

logger = structlog.get_logger(__name__)


def page_count(total: int, page_size: int = PAGE_SIZE) -> int:
    """Number of pages for ``total`` items; never less than 1."""
    return max(1, math.ceil(total / page_size))


@dataclass(frozen=True)
class CatalogRequest:
    params: dict
    sequence: int = field(default=0, compare=False)


class CatalogQuery:
    def __init__(self, catalog_filter: CatalogFilter | None = None):
        self.filter = catalog_filter or CatalogFilter()
        self.items: list[Product] = []
        self.total = 0
        self._issued = 0

    @property
    def page_count(self) -> int:
        return page_count(self.total, self.filter.page_size)

    # -------------------------------------------------------------------
    # Selection handlers. The filter is updated before the request is built.
    # -------------------------------------------------------------------
    def select_category(self, category: str) -> CatalogRequest:
        self.filter = self.filter.with_category(category)
        return self.request()

    def select_sort(self, sort) -> CatalogRequest:
        self.filter = self.filter.with_sort(sort)
        return self.request()

    def select_page(self, page: int) -> CatalogRequest:
        self.filter = self.filter.with_page(page)
        return self.request()

    # -------------------------------------------------------------------
    # Request / response
    # -------------------------------------------------------------------
    def request(self) -> CatalogRequest:
        self._issued += 1
        return CatalogRequest(params=self.filter.to_params(), sequence=self._issued)

    def apply(self, request: CatalogRequest, page: CatalogPage) -> bool:
        """Apply a response. Returns False when it answers a superseded request."""
        if request.sequence != self._issued:
            logger.debug(
                "stale_catalog_response_discarded",
                sequence=request.sequence,
                latest=self._issued,
            )
            return False

        self.items = list(page.items)
        self.total = page.total
        return True

    def fetch(self, client, request: CatalogRequest | None = None) -> bool:
        """Issue ``request`` (or a fresh one for the current filter) and apply the result."""
        request = request or self.request()
        page = client.catalog(**request.params)
        return self.apply(request, page)
