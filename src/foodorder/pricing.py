"""Order pricing view — read-only figures a screen renders from the cart.

Nothing here is cached: every property reads the cart as it is right now,
so a value read straight after a mutation already reflects it.
"""

from foodorder.cart.cart import FoodCart
from foodorder.checkout.order import OrderType, delivery_fee_for
from foodorder.checkout.submission import OrderSubmissionWorkflow
from foodorder.config import CheckoutSettings
from foodorder.order_service.port import OrderServicePort, OrderTotals


class OrderPricingView:
    def __init__(
        self,
        cart: FoodCart,
        order_service: OrderServicePort,
        submission: OrderSubmissionWorkflow,
        settings: CheckoutSettings | None = None,
        restaurant=None,
    ) -> None:
        self.cart = cart
        self.order_service = order_service
        self.submission = submission
        self.settings = settings or CheckoutSettings()
        self.restaurant = restaurant

    @property
    def cart_item_count(self) -> int:
        return self.cart.item_count

    @property
    def cart_total(self) -> float:
        """Cart total before any delivery fee, as priced by the order service."""
        return self.order_service.calculate_order_totals(self.cart.snapshot()).total

    def order_totals(self, order_type=OrderType.DELIVERY) -> OrderTotals:
        delivery_fee = delivery_fee_for(order_type, self.settings.delivery_fee)
        return self.order_service.calculate_order_totals(self.cart.snapshot(), delivery_fee)

    @property
    def is_restaurant_open(self) -> bool:
        # Optimistic until restaurant metadata arrives
        if self.restaurant is None:
            return True
        return self.order_service.is_restaurant_open(self.restaurant)

    def estimated_delivery_time(self, order_type=OrderType.DELIVERY) -> str:
        if self.restaurant is None:
            return self.settings.default_delivery_estimate
        return self.order_service.get_estimated_delivery_time(self.restaurant, OrderType(order_type).value)

    @property
    def can_checkout(self) -> bool:
        """The one gate a screen checks before navigating to checkout."""
        return self.cart_item_count > 0 and not self.submission.is_submitting
