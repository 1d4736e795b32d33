"""Order snapshot — built only at submission time, dropped right after."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum

from protean.fields import String

from foodorder.domain import foodorder


class OrderType(Enum):
    DELIVERY = "delivery"
    PICKUP = "pickup"


@foodorder.value_object
class CustomerInfo:
    """Contact details typed in at checkout.

    Every field is optional here; whether the order can go out with what was
    given is decided by the Order Service's validation.
    """

    name = String(max_length=255)
    phone = String(max_length=50)
    address = String(max_length=500)
    email = String(max_length=255)
    notes = String(max_length=1000)

    @classmethod
    def from_mapping(cls, data: Mapping) -> "CustomerInfo":
        return cls(
            name=data.get("name"),
            phone=data.get("phone"),
            address=data.get("address"),
            email=data.get("email"),
            notes=data.get("notes"),
        )


@dataclass(frozen=True)
class Order:
    """Everything the Order Service needs to place an order.

    ``items`` is a copy of the cart lines at the moment of submission, so
    later cart edits never change an order already on its way.
    """

    items: tuple[dict, ...] = field(default_factory=tuple)
    subtotal: float = 0.0
    tax: float = 0.0
    delivery_fee: float = 0.0
    total: float = 0.0
    customer_info: CustomerInfo | None = None
    order_type: str = OrderType.DELIVERY.value

    @property
    def item_count(self) -> int:
        return sum(item.get("quantity", 0) for item in self.items)


def delivery_fee_for(order_type, delivery_fee: float) -> float:
    """Delivery orders carry the flat fee; pickup orders carry none."""
    return delivery_fee if OrderType(order_type) == OrderType.DELIVERY else 0.0
