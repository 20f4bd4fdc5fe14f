"""Order pricing: shipping by method, totals, and the submission payload.

Nothing here is cached: every figure is derived from the cart and the
selected shipping method at the moment it is read.
"""

from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Float, String, Text

from storefront.client.schemas import CustomerSchema, OrderLineSchema, OrderSubmission
from storefront.domain import storefront


class ShippingMethod(Enum):
    STANDARD = "Standard Shipping"
    EXPRESS = "Express Shipping"


SHIPPING_RATES = {
    ShippingMethod.STANDARD: 5.0,
    ShippingMethod.EXPRESS: 15.0,
}


def shipping_cost(method=None) -> float:
    """Flat rate for a shipping method; an unset method ships Standard."""
    if method is None or method == "":
        return SHIPPING_RATES[ShippingMethod.STANDARD]
    return SHIPPING_RATES[ShippingMethod(method)]


def order_total(subtotal: float, method=None) -> float:
    return subtotal + shipping_cost(method)


@storefront.value_object
class Customer:
    name: String(max_length=255, default="")
    email: String(max_length=254, default="")
    phone: String(max_length=30, default="")
    address: Text(default="")


@storefront.value_object
class PriceQuote:
    subtotal: Float(required=True, min_value=0.0)
    shipping_cost: Float(required=True, min_value=0.0)
    total: Float(required=True, min_value=0.0)

    @invariant.post
    def total_is_subtotal_plus_shipping(self):
        if self.total != self.subtotal + self.shipping_cost:
            raise ValidationError(
                {"total": [f"Total {self.total} does not equal {self.subtotal} + {self.shipping_cost}"]}
            )


def quote(subtotal: float, method=None) -> PriceQuote:
    shipping = shipping_cost(method)
    return PriceQuote(subtotal=subtotal, shipping_cost=shipping, total=subtotal + shipping)


def build_order_payload(cart, customer: Customer, method=None) -> OrderSubmission:
    """Map the cart, customer and shipping method onto the order submission contract.

    Raises ``ValidationError`` for an empty cart; no order is ever sent without lines.
    """
    if not cart.lines:
        raise ValidationError({"cart": ["Cannot check out an empty cart"]})

    method = ShippingMethod(method) if method else ShippingMethod.STANDARD
    price = quote(cart.subtotal, method)

    return OrderSubmission(
        items=[
            OrderLineSchema(
                product_id=str(line.product_id),
                title=line.title,
                price=line.unit_price,
                quantity=line.quantity,
                image=line.image,
            )
            for line in cart.lines
        ],
        subtotal=price.subtotal,
        shipping=price.shipping_cost,
        total=price.total,
        customer=CustomerSchema(
            name=customer.name or "",
            email=customer.email or "",
            phone=customer.phone or "",
            address=customer.address or "",
        ),
        shipping_method=method.value,
    )


class PricingEngine:
    """Checkout-page pricing bound to a live cart store."""

    def __init__(self, cart_store, method=None):
        self.cart_store = cart_store
        self.method = ShippingMethod(method) if method else ShippingMethod.STANDARD

    def select_method(self, method) -> None:
        self.method = ShippingMethod(method) if method else ShippingMethod.STANDARD

    @property
    def subtotal(self) -> float:
        return self.cart_store.subtotal()

    @property
    def shipping_cost(self) -> float:
        return shipping_cost(self.method)

    @property
    def total(self) -> float:
        return order_total(self.subtotal, self.method)

    def quote(self) -> PriceQuote:
        return quote(self.subtotal, self.method)

    def build_order_payload(self, customer: Customer) -> OrderSubmission:
        return build_order_payload(self.cart_store.cart, customer, self.method)
