"""Menu item snapshot — what the cart copies from the catalogue on add."""

import re
from collections.abc import Mapping

from protean.exceptions import ValidationError
from protean.fields import Float, String

from foodorder.domain import foodorder

_NON_NUMERIC = re.compile(r"[^0-9.]")


def parse_price(price) -> float:
    """Coerce a catalogue price (``12.5``, ``"$12.50"``, ``None``) to a float.

    Unparseable values count as free, matching how the menu adapters
    report missing prices.
    """
    if price is None:
        return 0.0
    if isinstance(price, (int, float)):
        return float(price)
    try:
        return float(_NON_NUMERIC.sub("", str(price)))
    except ValueError:
        return 0.0


@foodorder.value_object
class MenuItem:
    """The parts of a catalogue entry a cart line needs."""

    item_id = String(required=True, max_length=100)
    name = String(max_length=255, default="Item")
    price = Float(min_value=0.0, default=0.0)
    image_url = String(max_length=2048)

    @classmethod
    def from_menu_data(cls, data: Mapping) -> "MenuItem":
        """Build from a raw menu mapping as served by the restaurant adapters."""
        item_id = data.get("catalog_item_id") or data.get("catalogItemId") or data.get("id")
        if not item_id:
            raise ValidationError({"item_id": ["Menu item has no identifier"]})
        return cls(
            item_id=str(item_id),
            name=data.get("name") or "Item",
            price=parse_price(data.get("price")),
            image_url=data.get("image_url") or data.get("imageUrl"),
        )
