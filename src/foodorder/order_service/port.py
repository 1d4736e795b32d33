"""Order Service port — pricing, validation and submission primitives.

The engine programs against this interface; the concrete adapter is
injected per session. Only ``submit_order`` is asynchronous.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field


class OrderServiceUnavailable(Exception):
    """The order backend could not be reached or refused the request."""


@dataclass(frozen=True)
class OrderTotals:
    """Derived pricing for a cart; never stored."""

    subtotal: float = 0.0
    tax: float = 0.0
    delivery_fee: float = 0.0
    total: float = 0.0


@dataclass(frozen=True)
class ValidationOutcome:
    """Result of validating an order before submission."""

    is_valid: bool
    errors: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class SubmissionResult:
    """Result of an order submission attempt."""

    success: bool
    order_id: str | None = None
    error: str | None = None


class OrderServicePort(ABC):
    """Abstract interface for order service adapters."""

    @abstractmethod
    def calculate_order_totals(self, lines: list[dict], delivery_fee: float = 0.0) -> OrderTotals:
        """Price a list of cart line snapshots.

        Each line carries at least ``unit_price`` and ``quantity``.
        """
        ...

    @abstractmethod
    def validate_order(self, order) -> ValidationOutcome:
        """Check an order is complete enough to submit."""
        ...

    @abstractmethod
    async def submit_order(self, order) -> SubmissionResult:
        """Place the order with the restaurant backend.

        May return ``success=False`` or raise; both are treated as a failed
        attempt by the caller.
        """
        ...

    @abstractmethod
    def is_restaurant_open(self, restaurant) -> bool:
        """Whether the restaurant currently accepts orders."""
        ...

    @abstractmethod
    def get_estimated_delivery_time(self, restaurant, order_type: str) -> str:
        """Human-readable time window, e.g. ``"30-45 min"``."""
        ...
