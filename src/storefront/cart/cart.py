"""Cart aggregate: the shopper's line items, one line per product.

Unit prices are captured when a product is added and never recomputed from
the catalogue afterwards.
"""

from collections import Counter

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Float, HasMany, Identifier, Integer, String, Text

from storefront.cart.events import (
    CartCleared,
    CartLineAdded,
    CartLineRemoved,
    CartQuantityChanged,
    CartsMerged,
)
from storefront.domain import storefront


@storefront.entity(part_of="Cart")
class CartLine:
    product_id = Identifier(required=True)
    title = String(required=True, max_length=255)
    unit_price = Float(required=True, min_value=0.0)
    image = Text()
    quantity = Integer(required=True, min_value=1)

    @property
    def line_total(self) -> float:
        return self.unit_price * self.quantity

    def to_record(self) -> dict:
        """Plain representation used for persistence and merging."""
        return {
            "product_id": str(self.product_id),
            "title": self.title,
            "unit_price": self.unit_price,
            "image": self.image,
            "quantity": self.quantity,
        }


@storefront.aggregate
class Cart:
    lines = HasMany(CartLine)

    @invariant.post
    def one_line_per_product(self):
        counts = Counter(str(line.product_id) for line in self.lines)
        duplicates = sorted(pid for pid, count in counts.items() if count > 1)
        if duplicates:
            raise ValidationError({"lines": [f"Duplicate cart lines for products: {', '.join(duplicates)}"]})

    # -------------------------------------------------------------------
    # Factories
    # -------------------------------------------------------------------
    @classmethod
    def create(cls):
        return cls()

    @classmethod
    def restore(cls, records):
        """Rebuild a cart from persisted line records, in their stored order.

        Raises ``ValidationError`` (or ``TypeError``/``KeyError`` for
        structurally broken records) when the data does not describe a valid cart.
        """
        if not isinstance(records, list):
            raise ValidationError({"lines": ["Persisted cart must be a list of lines"]})

        cart = cls.create()
        for record in records:
            cart.add_lines(
                CartLine(
                    product_id=record["product_id"],
                    title=record["title"],
                    unit_price=record["unit_price"],
                    image=record.get("image"),
                    quantity=record["quantity"],
                )
            )
        return cart

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    def find_line(self, product_id):
        return next((line for line in self.lines if str(line.product_id) == str(product_id)), None)

    @property
    def subtotal(self) -> float:
        return sum(line.line_total for line in self.lines)

    @property
    def item_count(self) -> int:
        return sum(line.quantity for line in self.lines)

    def to_records(self) -> list[dict]:
        return [line.to_record() for line in self.lines]

    # -------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------
    def add_line(self, product_id, title, unit_price, image=None, quantity=1):
        """Add ``quantity`` of a product. An existing line accumulates quantity."""
        if quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})

        existing = self.find_line(product_id)
        if existing:
            existing.quantity += quantity
            price = existing.unit_price
        else:
            self.add_lines(
                CartLine(
                    product_id=product_id,
                    title=title,
                    unit_price=unit_price,
                    image=image,
                    quantity=quantity,
                )
            )
            price = unit_price

        self.raise_(
            CartLineAdded(
                cart_id=str(self.id),
                product_id=str(product_id),
                quantity=quantity,
                unit_price=price,
            )
        )

    def set_quantity(self, product_id, quantity) -> bool:
        """Set a line's quantity, clamped up to 1. Returns False if no such line."""
        line = self.find_line(product_id)
        if line is None:
            return False

        previous_quantity = line.quantity
        line.quantity = max(1, int(quantity))

        self.raise_(
            CartQuantityChanged(
                cart_id=str(self.id),
                product_id=str(product_id),
                previous_quantity=previous_quantity,
                new_quantity=line.quantity,
            )
        )
        return True

    def remove_line(self, product_id) -> bool:
        """Remove a line. Returns False if no such line."""
        line = self.find_line(product_id)
        if line is None:
            return False

        self.remove_lines(line)
        self.raise_(CartLineRemoved(cart_id=str(self.id), product_id=str(product_id)))
        return True

    def clear(self):
        removed = list(self.lines)
        for line in removed:
            self.remove_lines(line)

        self.raise_(CartCleared(cart_id=str(self.id), lines_removed=len(removed)))

    def merge(self, records):
        """Fold line records from another cart into this one.

        Lines for products already in the cart accumulate quantity and keep
        this cart's unit price; the rest are appended in the given order.
        Every record is checked before the cart changes, so a malformed
        record raises ``ValidationError`` and leaves the cart as it was.
        """
        increments = []
        new_lines = {}
        try:
            for record in records:
                quantity = int(record["quantity"])
                if quantity < 1:
                    raise ValidationError({"quantity": ["Merged quantities must be at least 1"]})

                product_id = str(record["product_id"])
                existing = self.find_line(product_id)
                if existing:
                    increments.append((existing, quantity))
                elif product_id in new_lines:
                    new_lines[product_id].quantity += quantity
                else:
                    new_lines[product_id] = CartLine(
                        product_id=product_id,
                        title=record["title"],
                        unit_price=record["unit_price"],
                        image=record.get("image"),
                        quantity=quantity,
                    )
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            raise ValidationError({"lines": [f"Malformed cart line record: {exc!r}"]}) from exc

        for line, quantity in increments:
            line.quantity += quantity
        for line in new_lines.values():
            self.add_lines(line)

        self.raise_(CartsMerged(cart_id=str(self.id), lines_merged_count=len(records)))
