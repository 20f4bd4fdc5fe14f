"""Order placement: submit the priced cart, clear it on acknowledgement."""

from dataclasses import dataclass

import structlog

from storefront.checkout.pricing import Customer, build_order_payload
from storefront.client.schemas import OrderRecord
from storefront.exceptions import SubmissionError, TransportError

logger = structlog.get_logger(__name__)


def confirmation_route(order_id: str) -> str:
    return f"/order/{order_id}"


@dataclass(frozen=True)
class OrderPlaced:
    order_id: str
    redirect_to: str


class CheckoutService:
    def __init__(self, cart_store, client):
        self.cart_store = cart_store
        self.client = client

    def place_order(self, customer: Customer, method=None) -> OrderPlaced:
        """Submit the cart as an order.

        An empty cart raises ``ValidationError`` before any request is made.
        A failed submission raises ``SubmissionError`` and leaves the cart as it was.
        """
        payload = build_order_payload(self.cart_store.cart, customer, method)

        try:
            receipt = self.client.submit_order(payload)
        except TransportError as exc:
            logger.error("order_submission_failed", status=exc.status_code, detail=exc.detail)
            raise SubmissionError(f"Order could not be placed: {exc.detail or exc}") from exc

        if not receipt.order_id:
            logger.error("order_submission_unacknowledged")
            raise SubmissionError("Order could not be placed: no order id returned")

        self.cart_store.clear()
        logger.info("order_placed", order_id=receipt.order_id, total=payload.total)
        return OrderPlaced(order_id=receipt.order_id, redirect_to=confirmation_route(receipt.order_id))

    def confirmation(self, order_id: str) -> OrderRecord | None:
        return self.client.order(order_id)
