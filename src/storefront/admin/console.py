"""AdminConsole: token-gated admin operations over the backend client."""

from dataclasses import dataclass, field

import structlog

from storefront.admin.guard import LOGIN_ROUTE, SessionGuard
from storefront.client.schemas import OrderRecord, OrderStatus, Product, ProductDraft
from storefront.exceptions import LoginRequired, UnauthorizedError

logger = structlog.get_logger(__name__)

ADMIN_PRODUCT_LIMIT = 1000


@dataclass
class DashboardStats:
    total_sales: float = 0.0
    order_count: int = 0
    recent_orders: list[OrderRecord] = field(default_factory=list)


class AdminConsole:
    def __init__(self, guard: SessionGuard, client):
        self.guard = guard
        self.client = client

    def _call(self, operation, *args):
        token = self.guard.require()
        try:
            return operation(token, *args)
        except UnauthorizedError as exc:
            if not self.guard.handle_unauthorized():
                raise
            raise LoginRequired(redirect_to=LOGIN_ROUTE) from exc

    def orders(self) -> list[OrderRecord]:
        return self._call(self.client.admin_orders)

    def dashboard(self) -> DashboardStats:
        orders = self.orders()
        return DashboardStats(
            total_sales=sum(order.total for order in orders),
            order_count=len(orders),
            recent_orders=orders,
        )

    def products(self) -> list[Product]:
        self.guard.require()
        return self.client.catalog(limit=ADMIN_PRODUCT_LIMIT).items

    def create_product(self, draft: ProductDraft) -> list[Product]:
        """Create a product and return the refreshed product list."""
        self._call(self.client.admin_create_product, draft)
        logger.info("admin_product_created", slug=draft.slug)
        return self.products()

    def update_order_status(self, order_id: str, status) -> list[OrderRecord]:
        """Change an order's status and return the refreshed order list."""
        status = OrderStatus(status)
        self._call(self.client.admin_update_order_status, order_id, status)
        logger.info("admin_order_status_updated", order_id=order_id, status=status.value)
        return self.orders()
