"""Order submission workflow — validate, submit once, clear or keep the cart.

States:
    idle → submitting → succeeded | failed
    succeeded / failed → submitting   (next submit_order call)

A call made while already submitting is rejected, so one checkout never
produces two orders. Validation failures end in ``failed`` without calling
the backend. Nothing is retried automatically: every attempt is a fresh
``submit_order`` call from the user. Failures are recorded as state and
never raised to the caller.

The backend call is the only ``await``. Everything after it is applied
through the lifecycle guard, so a result arriving after the screen closed
is dropped.
"""

from collections.abc import Mapping
from enum import Enum

import structlog
from protean.exceptions import ValidationError

from foodorder.cart.cart import FoodCart
from foodorder.checkout.order import CustomerInfo, Order, OrderType, delivery_fee_for
from foodorder.config import CheckoutSettings
from foodorder.lifecycle import LifecycleGuard
from foodorder.order_service.port import OrderServicePort

logger = structlog.get_logger(__name__)

DEFAULT_FAILURE_REASON = "Failed to submit order"


def _join_messages(messages) -> str:
    if isinstance(messages, Mapping):
        return ", ".join(f"{field}: {msg}" for field, msgs in messages.items() for msg in msgs)
    return str(messages)


class SubmissionStatus(Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class OrderSubmissionWorkflow:
    """Drives one cart through checkout attempts."""

    def __init__(
        self,
        cart: FoodCart,
        order_service: OrderServicePort,
        guard: LifecycleGuard,
        settings: CheckoutSettings | None = None,
    ) -> None:
        self.cart = cart
        self.order_service = order_service
        self.guard = guard
        self.settings = settings or CheckoutSettings()
        self.status = SubmissionStatus.IDLE
        self.failure_reason: str | None = None
        self.last_order_id: str | None = None

    @property
    def is_submitting(self) -> bool:
        return self.status == SubmissionStatus.SUBMITTING

    # -------------------------------------------------------------------
    # Order snapshot
    # -------------------------------------------------------------------
    def build_order(self, customer_info, order_type) -> Order:
        """Snapshot the current cart into an Order priced for ``order_type``."""
        order_type = OrderType(order_type)
        if isinstance(customer_info, Mapping):
            customer_info = CustomerInfo.from_mapping(customer_info)

        items = self.cart.snapshot()
        delivery_fee = delivery_fee_for(order_type, self.settings.delivery_fee)
        totals = self.order_service.calculate_order_totals(items, delivery_fee)

        return Order(
            items=tuple(items),
            subtotal=totals.subtotal,
            tax=totals.tax,
            delivery_fee=delivery_fee,
            total=totals.total,
            customer_info=customer_info,
            order_type=order_type.value,
        )

    # -------------------------------------------------------------------
    # Submission
    # -------------------------------------------------------------------
    async def submit_order(self, customer_info, order_type) -> bool:
        """Run one checkout attempt. Returns True only if the order was placed."""
        if self.is_submitting:
            logger.warning("order_submission_rejected", reason="already_submitting", cart_id=str(self.cart.id))
            return False

        order_type = OrderType(order_type)
        self.status = SubmissionStatus.SUBMITTING
        self.failure_reason = None
        log = logger.bind(cart_id=str(self.cart.id), order_type=order_type.value)

        try:
            order = self.build_order(customer_info, order_type)
            validation = self.order_service.validate_order(order)
        except ValidationError as exc:
            log.info("order_rejected", errors=exc.messages)
            self._fail(_join_messages(exc.messages))
            return False
        except Exception as exc:
            log.error("order_preparation_error", error=str(exc), exc_info=True)
            self._fail(str(exc) or DEFAULT_FAILURE_REASON)
            return False

        log = log.bind(total=order.total)
        log.info("order_submission_started", item_count=order.item_count)
        if not validation.is_valid:
            reason = ", ".join(validation.errors)
            log.info("order_validation_failed", errors=validation.errors)
            self._fail(reason)
            return False

        try:
            result = await self.order_service.submit_order(order)
        except Exception as exc:
            log.error("order_submission_error", error=str(exc), exc_info=True)
            self.guard.commit(self._fail, str(exc) or DEFAULT_FAILURE_REASON)
            return False

        if not result.success:
            log.warning("order_submission_failed", error=result.error)
            self.guard.commit(self._fail, result.error or DEFAULT_FAILURE_REASON)
            return False

        log.info("order_submitted", order_id=result.order_id)
        self.guard.commit(self._succeed, result.order_id)
        return True

    def clear_error(self) -> None:
        """Dismiss a failure so the screen stops showing it."""
        if self.status == SubmissionStatus.FAILED:
            self.status = SubmissionStatus.IDLE
            self.failure_reason = None

    def _succeed(self, order_id) -> None:
        self.status = SubmissionStatus.SUCCEEDED
        self.last_order_id = order_id
        self.cart.clear()

    def _fail(self, reason: str) -> None:
        self.status = SubmissionStatus.FAILED
        self.failure_reason = reason
