"""Ordering session — the cart engine as one screen sees it.

A screen creates one session, reads the cart and pricing from it, and sends
every user action through it. Closing the session (directly or by leaving a
``with`` / ``async with`` block) tears down its lifecycle guard: any write
arriving afterwards, including the result of an order still in flight, is
dropped.

The host initializes the domain once at startup (``foodorder.init()``) and
creates sessions inside ``foodorder.domain_context()``.
"""

import structlog

from foodorder.cart.cart import FoodCart
from foodorder.checkout.order import OrderType
from foodorder.checkout.submission import OrderSubmissionWorkflow, SubmissionStatus
from foodorder.config import CheckoutSettings
from foodorder.lifecycle import LifecycleGuard
from foodorder.order_service import order_service_for
from foodorder.order_service.port import OrderServicePort, OrderTotals
from foodorder.pricing import OrderPricingView

logger = structlog.get_logger(__name__)


class OrderingSession:
    def __init__(
        self,
        order_service: OrderServicePort | None = None,
        settings: CheckoutSettings | None = None,
        restaurant=None,
    ) -> None:
        self.settings = settings or CheckoutSettings.from_env()
        self.order_service = order_service or order_service_for(self.settings)
        self.guard = LifecycleGuard(owner="ordering_session")
        self._cart = FoodCart.create()
        self.submission = OrderSubmissionWorkflow(self._cart, self.order_service, self.guard, self.settings)
        self.pricing = OrderPricingView(
            self._cart, self.order_service, self.submission, self.settings, restaurant=restaurant
        )
        logger.debug("ordering_session_opened", cart_id=str(self._cart.id))

    # -------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------
    def close(self) -> None:
        self.guard.teardown()

    @property
    def is_open(self) -> bool:
        return self.guard.is_alive

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        self.close()

    # -------------------------------------------------------------------
    # Read surface
    # -------------------------------------------------------------------
    @property
    def cart(self) -> list[dict]:
        """Plain-dict snapshot of the cart lines, in cart order.

        Changing a snapshot never touches the cart; writes go through
        ``add_item``, ``update_quantity``, ``remove_item`` and ``clear``.
        """
        return self._cart.snapshot()

    @property
    def cart_id(self) -> str:
        return str(self._cart.id)

    @property
    def restaurant(self):
        return self.pricing.restaurant

    @property
    def cart_item_count(self) -> int:
        return self.pricing.cart_item_count

    @property
    def cart_total(self) -> float:
        return self.pricing.cart_total

    def order_totals(self, order_type=OrderType.DELIVERY) -> OrderTotals:
        return self.pricing.order_totals(order_type)

    @property
    def is_restaurant_open(self) -> bool:
        return self.pricing.is_restaurant_open

    @property
    def estimated_delivery_time(self) -> str:
        return self.pricing.estimated_delivery_time(OrderType.DELIVERY)

    @property
    def can_checkout(self) -> bool:
        return self.pricing.can_checkout

    @property
    def submission_status(self) -> SubmissionStatus:
        return self.submission.status

    @property
    def submission_error(self) -> str | None:
        return self.submission.failure_reason

    @property
    def is_submitting(self) -> bool:
        return self.submission.is_submitting

    @property
    def last_order_id(self) -> str | None:
        return self.submission.last_order_id

    # -------------------------------------------------------------------
    # Write surface
    # -------------------------------------------------------------------
    def add_item(self, menu_item, quantity=1, customizations=None) -> dict | None:
        """Add to the cart and return a snapshot of the affected line."""
        line = self.guard.commit(self._cart.add_item, menu_item, quantity, customizations)
        return line.to_snapshot() if line is not None else None

    def update_quantity(self, line_id, quantity) -> None:
        self.guard.commit(self._cart.update_quantity, line_id, quantity)

    def remove_item(self, line_id) -> None:
        self.guard.commit(self._cart.remove_item, line_id)

    def clear(self) -> None:
        self.guard.commit(self._cart.clear)

    def use_restaurant(self, restaurant) -> None:
        """Attach restaurant metadata once the menu adapter has loaded it."""

        def _set(value):
            self.pricing.restaurant = value

        self.guard.commit(_set, restaurant)

    def clear_error(self) -> None:
        self.guard.commit(self.submission.clear_error)

    async def submit_order(self, customer_info, order_type=OrderType.DELIVERY) -> bool:
        if not self.guard.is_alive:
            logger.debug("order_submission_skipped", reason="session_closed", cart_id=self.cart_id)
            return False
        return await self.submission.submit_order(customer_info, order_type)
