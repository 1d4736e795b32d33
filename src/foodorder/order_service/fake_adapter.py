"""Configurable fake order service for development and testing.

Prices, validates and "submits" orders entirely in process. Pricing and
validation rules mirror the restaurant backend: 10% tax, amounts rounded to
cents, name and phone always required, address required for delivery.
"""

import asyncio
from collections.abc import Mapping
from uuid import uuid4

from foodorder.cart.menu_item import parse_price
from foodorder.config import DEFAULT_TAX_RATE
from foodorder.order_service.port import (
    OrderServicePort,
    OrderServiceUnavailable,
    OrderTotals,
    SubmissionResult,
    ValidationOutcome,
)


def _is_blank(value) -> bool:
    return value is None or not str(value).strip()


class FakeOrderService(OrderServicePort):
    """Fake order service that accepts every valid order by default."""

    def __init__(self, tax_rate: float = DEFAULT_TAX_RATE) -> None:
        self.tax_rate = tax_rate
        self.should_succeed: bool = True
        self.failure_reason: str = "Restaurant rejected the order"
        self.raise_error: bool = False
        self.latency: float = 0.0
        self.calls: list[dict] = []
        self.submitted_orders: list = []

    def configure(
        self,
        should_succeed: bool = True,
        failure_reason: str = "Restaurant rejected the order",
        raise_error: bool = False,
        latency: float = 0.0,
    ) -> None:
        """Configure submission behavior at runtime.

        With ``raise_error`` a failing submit raises ``OrderServiceUnavailable``
        instead of returning an unsuccessful result.
        """
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason
        self.raise_error = raise_error
        self.latency = latency

    def calculate_order_totals(self, lines: list[dict], delivery_fee: float = 0.0) -> OrderTotals:
        subtotal = sum(parse_price(line.get("unit_price")) * line.get("quantity", 0) for line in lines)
        tax = subtotal * self.tax_rate
        total = subtotal + tax + delivery_fee
        return OrderTotals(
            subtotal=round(subtotal, 2),
            tax=round(tax, 2),
            delivery_fee=round(delivery_fee, 2),
            total=round(total, 2),
        )

    def validate_order(self, order) -> ValidationOutcome:
        errors = []
        customer = order.customer_info

        if not order.items:
            errors.append("Order must contain at least one item")
        if order.total <= 0:
            errors.append("Order total must be greater than zero")
        if customer is None or _is_blank(customer.name):
            errors.append("Customer name is required")
        if customer is None or _is_blank(customer.phone):
            errors.append("Phone number is required")
        if order.order_type == "delivery" and (customer is None or _is_blank(customer.address)):
            errors.append("Delivery address is required")

        return ValidationOutcome(is_valid=not errors, errors=errors)

    async def submit_order(self, order) -> SubmissionResult:
        self.calls.append(
            {
                "method": "submit_order",
                "item_count": len(order.items),
                "total": order.total,
                "order_type": order.order_type,
            }
        )

        if self.latency:
            await asyncio.sleep(self.latency)

        if not self.should_succeed:
            if self.raise_error:
                raise OrderServiceUnavailable(self.failure_reason)
            return SubmissionResult(success=False, error=self.failure_reason)

        self.submitted_orders.append(order)
        return SubmissionResult(success=True, order_id=f"fake_ord_{uuid4().hex[:12]}")

    def is_restaurant_open(self, restaurant) -> bool:
        if isinstance(restaurant, Mapping):
            return bool(restaurant.get("is_open", True))
        return bool(getattr(restaurant, "is_open", True))

    def get_estimated_delivery_time(self, restaurant, order_type: str) -> str:
        if order_type == "pickup":
            return "15-25 min"
        return "30-45 min"
