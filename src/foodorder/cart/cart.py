"""FoodCart aggregate — the in-memory cart owned by one ordering session.

The cart is never persisted. Lines keep their insertion position for as
long as they live; adding an item that matches an existing line by
catalogue id and customizations grows that line instead of adding one.
"""

import json
from collections.abc import Mapping
from datetime import UTC, datetime

import structlog
from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, Text

from foodorder.cart.customizations import customizations_match, normalize_customizations
from foodorder.cart.events import CartCleared, CartLineAdded, CartLineQuantityUpdated, CartLineRemoved
from foodorder.cart.menu_item import MenuItem
from foodorder.domain import foodorder

logger = structlog.get_logger(__name__)


@foodorder.entity(part_of="FoodCart")
class CartLineItem:
    """One catalogue item with a specific customization selection and quantity.

    ``name`` and ``unit_price`` are a snapshot taken when the line was
    created; later menu changes do not reach lines already in the cart.
    """

    catalog_item_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    unit_price = Float(required=True, min_value=0.0)
    quantity = Integer(required=True, min_value=1)
    customizations = Text(default="[]")  # JSON array of {option_id, choice_id}
    image_url = String(max_length=2048)
    added_at = DateTime()

    @property
    def selection(self) -> list[dict]:
        """The customization pairs, in the order they were chosen."""
        return json.loads(self.customizations) if self.customizations else []

    @property
    def line_total(self) -> float:
        return self.unit_price * self.quantity

    def matches(self, catalog_item_id, customizations) -> bool:
        """True when an add of this item/customizations should merge into this line."""
        return str(self.catalog_item_id) == str(catalog_item_id) and customizations_match(
            self.selection, customizations
        )

    def to_snapshot(self) -> dict:
        return {
            "line_id": str(self.id),
            "catalog_item_id": str(self.catalog_item_id),
            "name": self.name,
            "unit_price": self.unit_price,
            "quantity": self.quantity,
            "customizations": self.selection,
            "image_url": self.image_url,
        }


def _coerce_quantity(quantity) -> int:
    if isinstance(quantity, bool) or not isinstance(quantity, int):
        raise ValidationError({"quantity": [f"Quantity must be a whole number, got {quantity!r}"]})
    return quantity


@foodorder.aggregate
class FoodCart:
    lines = HasMany(CartLineItem)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def lines_must_have_distinct_identities(self):
        seen = []
        for line in self.lines:
            if any(other.matches(line.catalog_item_id, line.selection) for other in seen):
                raise ValidationError({"lines": [f"Duplicate cart line for item {line.catalog_item_id}"]})
            seen.append(line)

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls):
        now = datetime.now(UTC)
        return cls(created_at=now, updated_at=now)

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    @property
    def item_count(self) -> int:
        return sum(line.quantity for line in self.lines)

    @property
    def is_empty(self) -> bool:
        return not self.lines

    def find_line(self, line_id):
        return next((line for line in self.lines if str(line.id) == str(line_id)), None)

    def snapshot(self) -> list[dict]:
        """Plain-dict copy of every line, in cart order."""
        return [line.to_snapshot() for line in self.lines]

    # -------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------
    def add_item(self, menu_item, quantity=1, customizations=None):
        """Add ``quantity`` of a menu item, merging into a matching line.

        ``menu_item`` is a ``MenuItem`` or a raw menu mapping. Quantities
        below one are rejected; use ``update_quantity`` to shrink a line.
        """
        quantity = _coerce_quantity(quantity)
        if quantity < 1:
            raise ValidationError({"quantity": ["Quantity to add must be at least 1"]})

        if isinstance(menu_item, Mapping):
            menu_item = MenuItem.from_menu_data(menu_item)
        selection = normalize_customizations(customizations)

        existing = next((line for line in self.lines if line.matches(menu_item.item_id, selection)), None)
        now = datetime.now(UTC)

        if existing:
            existing.quantity += quantity
            line = existing
        else:
            line = CartLineItem(
                catalog_item_id=menu_item.item_id,
                name=menu_item.name or "Item",
                unit_price=menu_item.price or 0.0,
                quantity=quantity,
                customizations=json.dumps(selection),
                image_url=menu_item.image_url,
                added_at=now,
            )
            self.add_lines(line)
            line = self.find_line(line.id)

        self.updated_at = now

        logger.debug(
            "cart_line_added",
            cart_id=str(self.id),
            line_id=str(line.id),
            catalog_item_id=str(menu_item.item_id),
            quantity=quantity,
            merged=existing is not None,
        )
        self.raise_(
            CartLineAdded(
                cart_id=str(self.id),
                line_id=str(line.id),
                catalog_item_id=str(menu_item.item_id),
                quantity=quantity,
                merged=existing is not None,
            )
        )
        return line

    def update_quantity(self, line_id, quantity):
        """Set a line's quantity in place; zero or less removes the line.

        Unknown line ids are ignored.
        """
        quantity = _coerce_quantity(quantity)
        if quantity <= 0:
            self.remove_item(line_id)
            return

        line = self.find_line(line_id)
        if line is None:
            logger.debug("cart_line_not_found", cart_id=str(self.id), line_id=str(line_id))
            return

        previous_quantity = line.quantity
        if previous_quantity == quantity:
            return

        line.quantity = quantity
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartLineQuantityUpdated(
                cart_id=str(self.id),
                line_id=str(line.id),
                previous_quantity=previous_quantity,
                new_quantity=quantity,
            )
        )

    def remove_item(self, line_id):
        """Remove a line. Removing a line that is not there does nothing."""
        line = self.find_line(line_id)
        if line is None:
            return

        self.remove_lines(line)
        self.updated_at = datetime.now(UTC)

        self.raise_(CartLineRemoved(cart_id=str(self.id), line_id=str(line_id)))

    def clear(self):
        """Empty the cart."""
        removed = list(self.lines)
        if not removed:
            return

        for line in removed:
            self.remove_lines(line)
        self.updated_at = datetime.now(UTC)

        logger.debug("cart_cleared", cart_id=str(self.id), lines_removed=len(removed))
        self.raise_(CartCleared(cart_id=str(self.id), lines_removed=len(removed)))
