"""Pydantic request/response schemas for the storefront backend.

These are external contracts (anti-corruption layer), kept separate from the
internal Protean aggregates and value objects. Unknown keys sent by the
backend are ignored.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class OrderStatus(Enum):
    PENDING = "Pending"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"


# ---------------------------------------------------------------------------
# Catalogue
# ---------------------------------------------------------------------------
class Product(BaseModel):
    id: str = Field(alias="_id")
    title: str
    slug: str | None = None
    price: float = Field(ge=0)
    discount_price: float | None = Field(default=None, ge=0)
    images: list[str] = Field(default_factory=list)
    category: str | None = None
    stock: int | None = None
    short_description: str | None = None
    long_description: str | None = None
    materials: str | None = None
    dimensions: str | None = None
    active: bool | None = None

    model_config = {"populate_by_name": True}

    @property
    def effective_price(self) -> float:
        """Discounted price when one is set, list price otherwise."""
        return self.discount_price if self.discount_price else self.price

    @property
    def primary_image(self) -> str | None:
        return self.images[0] if self.images else None


class CatalogPage(BaseModel):
    items: list[Product] = Field(default_factory=list)
    total: int = Field(default=0, ge=0)


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
class CustomerSchema(BaseModel):
    name: str = ""
    email: str = ""
    phone: str = ""
    address: str = ""


class OrderLineSchema(BaseModel):
    product_id: str
    title: str
    price: float = Field(ge=0)
    quantity: int = Field(ge=1)
    image: str | None = None


class OrderSubmission(BaseModel):
    items: list[OrderLineSchema]
    subtotal: float = Field(ge=0)
    shipping: float = Field(ge=0)
    total: float = Field(ge=0)
    customer: CustomerSchema
    shipping_method: str

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "items": [
                        {
                            "product_id": "65f0c0ffee",
                            "title": "Terracotta Pot",
                            "price": 24.0,
                            "quantity": 2,
                            "image": "https://cdn.example.com/pot.jpg",
                        }
                    ],
                    "subtotal": 48.0,
                    "shipping": 5.0,
                    "total": 53.0,
                    "customer": {
                        "name": "Ada",
                        "email": "ada@example.com",
                        "phone": "+1 555 0100",
                        "address": "1 Clay Street",
                    },
                    "shipping_method": "Standard Shipping",
                }
            ]
        }
    }


class OrderReceipt(BaseModel):
    order_id: str | None = None


class OrderRecord(BaseModel):
    id: str = Field(alias="_id")
    items: list[OrderLineSchema] = Field(default_factory=list)
    subtotal: float = 0.0
    shipping: float = 0.0
    total: float = 0.0
    customer: CustomerSchema = Field(default_factory=CustomerSchema)
    shipping_method: str | None = None
    status: str = OrderStatus.PENDING.value
    created_at: datetime | None = None

    model_config = {"populate_by_name": True}


# ---------------------------------------------------------------------------
# Admin
# ---------------------------------------------------------------------------
class LoginRequest(BaseModel):
    email: str
    password: str


class LoginResponse(BaseModel):
    token: str | None = None


class ProductDraft(BaseModel):
    title: str
    slug: str
    price: float = Field(ge=0)
    discount_price: float | None = Field(default=None, ge=0)
    category: str = "Accessories"
    stock: int = Field(default=1, ge=0)
    images: list[str] = Field(default_factory=list)
    short_description: str = ""
    long_description: str = ""
    materials: str = ""
    dimensions: str = ""
    active: bool = True


class StatusUpdateRequest(BaseModel):
    status: OrderStatus
