"""Checkout settings — injected into each ordering session.

Values come from the environment once, at session construction, so the
engine itself never reads process-wide state.
"""

import os
from dataclasses import dataclass

DEFAULT_DELIVERY_FEE = 5.0
DEFAULT_TAX_RATE = 0.10
DEFAULT_DELIVERY_ESTIMATE = "30-45 min"


@dataclass(frozen=True)
class CheckoutSettings:
    """Pricing and adapter settings for one ordering session."""

    delivery_fee: float = DEFAULT_DELIVERY_FEE
    tax_rate: float = DEFAULT_TAX_RATE
    default_delivery_estimate: str = DEFAULT_DELIVERY_ESTIMATE
    order_service_adapter: str = "fake"

    def __post_init__(self):
        if self.delivery_fee < 0:
            raise ValueError(f"delivery_fee must not be negative, got {self.delivery_fee}")
        if not 0 <= self.tax_rate < 1:
            raise ValueError(f"tax_rate must be in [0, 1), got {self.tax_rate}")

    @classmethod
    def from_env(cls) -> "CheckoutSettings":
        return cls(
            delivery_fee=float(os.environ.get("FOODORDER_DELIVERY_FEE", DEFAULT_DELIVERY_FEE)),
            tax_rate=float(os.environ.get("FOODORDER_TAX_RATE", DEFAULT_TAX_RATE)),
            default_delivery_estimate=os.environ.get("FOODORDER_DEFAULT_ESTIMATE", DEFAULT_DELIVERY_ESTIMATE),
            order_service_adapter=os.environ.get("ORDER_SERVICE_ADAPTER", "fake"),
        )

