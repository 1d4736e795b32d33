"""Tests for the derived, read-only pricing view."""

import asyncio

import pytest
from foodorder.cart.cart import FoodCart
from foodorder.checkout.submission import OrderSubmissionWorkflow, SubmissionStatus
from foodorder.config import CheckoutSettings
from foodorder.lifecycle import LifecycleGuard
from foodorder.pricing import OrderPricingView


@pytest.fixture
def cart():
    return FoodCart.create()


@pytest.fixture
def view(cart, order_service):
    workflow = OrderSubmissionWorkflow(cart, order_service, LifecycleGuard())
    return OrderPricingView(cart, order_service, workflow, CheckoutSettings())


class TestCounts:
    def test_empty(self, view):
        assert view.cart_item_count == 0
        assert view.cart_total == 0.0

    def test_recomputed_after_each_mutation(self, view, cart, pizza, soda):
        line = cart.add_item(pizza, 2)
        assert view.cart_item_count == 2
        assert view.cart_total == 27.5
        cart.add_item(soda)
        assert view.cart_item_count == 3
        assert view.cart_total == 29.7
        cart.update_quantity(line.id, 0)
        assert view.cart_item_count == 1
        assert view.cart_total == 2.2


class TestOrderTotals:
    def test_delivery_includes_fee(self, view, cart, pizza):
        cart.add_item(pizza, 2)
        totals = view.order_totals("delivery")
        assert totals.subtotal == 25.0
        assert totals.tax == 2.5
        assert totals.delivery_fee == 5.0
        assert totals.total == 32.5

    def test_pickup_has_no_fee(self, view, cart, pizza):
        cart.add_item(pizza, 2)
        totals = view.order_totals("pickup")
        assert totals.delivery_fee == 0.0
        assert totals.total == 27.5

    def test_does_not_mutate_cart(self, view, cart, pizza):
        cart.add_item(pizza)
        before = cart.snapshot()
        view.order_totals("delivery")
        view.cart_total
        assert cart.snapshot() == before


class TestRestaurantMetadata:
    def test_open_before_metadata_loads(self, view):
        assert view.is_restaurant_open is True

    def test_default_estimate_before_metadata_loads(self, view):
        assert view.estimated_delivery_time() == "30-45 min"

    def test_custom_default_estimate(self, cart, order_service):
        workflow = OrderSubmissionWorkflow(cart, order_service, LifecycleGuard())
        view = OrderPricingView(
            cart, order_service, workflow, CheckoutSettings(default_delivery_estimate="soon")
        )
        assert view.estimated_delivery_time() == "soon"

    def test_pass_through_once_loaded(self, view):
        view.restaurant = {"name": "Luigi's", "is_open": False}
        assert view.is_restaurant_open is False
        assert view.estimated_delivery_time("pickup") == "15-25 min"


class TestCanCheckout:
    def test_false_for_empty_cart(self, view):
        assert view.can_checkout is False

    def test_true_with_items(self, view, cart, pizza):
        cart.add_item(pizza)
        assert view.can_checkout is True

    def test_false_while_submitting(self, view, cart, pizza):
        cart.add_item(pizza)
        view.submission.status = SubmissionStatus.SUBMITTING
        assert view.can_checkout is False

    def test_false_for_empty_cart_after_failure(self, view, customer):
        asyncio.run(view.submission.submit_order(customer, "delivery"))
        assert view.submission.status == SubmissionStatus.FAILED
        assert view.can_checkout is False

    def test_true_after_failure_with_items(self, view, cart, order_service, pizza, customer):
        cart.add_item(pizza)
        order_service.configure(should_succeed=False)
        asyncio.run(view.submission.submit_order(customer, "delivery"))
        assert view.can_checkout is True
