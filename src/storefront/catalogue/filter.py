"""CatalogFilter value object: category, sort order and page selection."""

from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Integer, String

from storefront.domain import storefront

ALL_CATEGORIES = "All"
CATEGORIES = (ALL_CATEGORIES, "Accessories", "Pots", "Paintings")
PAGE_SIZE = 12


class SortOrder(Enum):
    NEWEST = "newest"
    PRICE_ASC = "price_asc"
    PRICE_DESC = "price_desc"


@storefront.value_object
class CatalogFilter:
    """Immutable filter. Changing category or sort starts again from page 1."""

    category: String(max_length=100, default=ALL_CATEGORIES)
    sort: String(choices=SortOrder, default=SortOrder.NEWEST.value)
    page: Integer(default=1)
    page_size: Integer(default=PAGE_SIZE)

    @invariant.post
    def page_must_be_positive(self):
        if self.page < 1:
            raise ValidationError({"page": ["Page must be at least 1"]})

    @invariant.post
    def page_size_must_be_positive(self):
        if self.page_size < 1:
            raise ValidationError({"page_size": ["Page size must be at least 1"]})

    def _replace(self, **changes):
        values = {
            "category": self.category,
            "sort": self.sort,
            "page": self.page,
            "page_size": self.page_size,
        }
        values.update(changes)
        return CatalogFilter(**values)

    def with_category(self, category: str):
        return self._replace(category=category, page=1)

    def with_sort(self, sort):
        return self._replace(sort=SortOrder(sort).value, page=1)

    def with_page(self, page: int):
        return self._replace(page=page)

    def to_params(self) -> dict:
        """Request parameters, in the order the backend documents them."""
        return {
            "category": self.category,
            "sort": self.sort,
            "page": self.page,
            "limit": self.page_size,
        }
