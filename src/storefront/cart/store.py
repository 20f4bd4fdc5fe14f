"""CartStore: the durable owner of the shopper's cart.

Every mutation is applied to the ``Cart`` aggregate, written through to
storage and then announced to subscribers with the events it raised.
A persisted cart that cannot be decoded is replaced by an empty one.
"""

import json
from collections.abc import Callable

import structlog
from protean.exceptions import ValidationError

from storefront.cart.cart import Cart, CartLine
from storefront.client.schemas import Product
from storefront.exceptions import CartCorrupted, StorageCorrupted
from storefront.storage import dumps

logger = structlog.get_logger(__name__)

DEFAULT_CART_KEY = "handestiy_cart"


def decode_cart(raw: str) -> Cart:
    """Decode a persisted cart, raising ``CartCorrupted`` on any malformation."""
    try:
        return Cart.restore(json.loads(raw))
    except (ValueError, TypeError, KeyError, AttributeError, ValidationError) as exc:
        raise CartCorrupted(str(exc)) from exc


class CartStore:
    def __init__(self, storage, key: str = DEFAULT_CART_KEY):
        self.storage = storage
        self.key = key
        self._subscribers: list[Callable[[list], None]] = []
        self.cart = self._load()

    def _load(self) -> Cart:
        try:
            raw = self.storage.get(self.key)
            if raw is None:
                return Cart.create()
            cart = decode_cart(raw)
        except StorageCorrupted as exc:
            logger.warning("cart_restore_failed", key=self.key, error=str(exc))
            return Cart.create()

        logger.debug("cart_restored", key=self.key, lines=len(cart.lines))
        return cart

    def _commit(self) -> None:
        self.storage.set(self.key, dumps(self.cart.to_records()))

        events = list(self.cart._events)
        self.cart._events.clear()
        for callback in self._subscribers:
            callback(events)

    def subscribe(self, callback: Callable[[list], None]) -> None:
        """Register ``callback(events)`` to run after every committed mutation."""
        self._subscribers.append(callback)

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    @property
    def lines(self) -> list[CartLine]:
        return list(self.cart.lines)

    def __len__(self) -> int:
        return len(self.cart.lines)

    def is_empty(self) -> bool:
        return not self.cart.lines

    def subtotal(self) -> float:
        return self.cart.subtotal

    # -------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------
    def add(self, product: Product, quantity: int = 1) -> None:
        self.cart.add_line(
            product_id=product.id,
            title=product.title,
            unit_price=product.effective_price,
            image=product.primary_image,
            quantity=quantity,
        )
        self._commit()
        logger.info("cart_line_added", product_id=product.id, quantity=quantity)

    def remove(self, product_id: str) -> None:
        if self.cart.remove_line(product_id):
            self._commit()
            logger.info("cart_line_removed", product_id=product_id)

    def set_quantity(self, product_id: str, quantity: int) -> None:
        if self.cart.set_quantity(product_id, quantity):
            self._commit()

    def clear(self) -> None:
        self.cart.clear()
        self._commit()
        logger.info("cart_cleared", key=self.key)

    def merge(self, records: list[dict]) -> None:
        """Fold another cart's line records (e.g. from another device) into this one."""
        self.cart.merge(records)
        self._commit()
        logger.info("carts_merged", lines=len(records))
