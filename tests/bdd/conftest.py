"""Shared BDD fixtures and step definitions for the ordering session."""

import pytest
from foodorder.config import CheckoutSettings
from foodorder.session import OrderingSession
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, then, when

_MENU = {
    "m1": {"id": "m1", "name": "Margherita", "price": 12.5},
    "m2": {"id": "m2", "name": "Cola", "price": 2.0},
}


@pytest.fixture
def error():
    """Mutable container for capturing errors in When steps."""
    return {"exc": None}


@given("an open ordering session", target_fixture="session")
def open_session(order_service):
    return OrderingSession(order_service=order_service, settings=CheckoutSettings())


@given(parsers.cfparse('the cart holds {qty:d} of menu item "{item_id}" with size "{size}"'))
def cart_holds(session, qty, item_id, size):
    session.add_item(_MENU[item_id], qty, {"size": size})


@when(parsers.cfparse('{qty:d} of menu item "{item_id}" is added with size "{size}"'))
def add_item(session, qty, item_id, size, error):
    try:
        session.add_item(_MENU[item_id], qty, {"size": size})
    except ValidationError as exc:
        error["exc"] = exc


@then(parsers.cfparse("the cart has {count:d} line"))
def cart_has_n_lines_singular(session, count):
    assert len(session.cart) == count


@then(parsers.cfparse("the cart has {count:d} lines"))
def cart_has_n_lines(session, count):
    assert len(session.cart) == count


@then("the cart is empty")
def cart_is_empty(session):
    assert session.cart == []


@then(parsers.cfparse("the cart item count is {count:d}"))
def cart_item_count(session, count):
    assert session.cart_item_count == count


@then(parsers.cfparse('the submission status is "{status}"'))
def submission_status(session, status):
    assert session.submission_status.value == status


@then(parsers.cfparse('the submission error is "{message}"'))
def submission_error(session, message):
    assert session.submission_error == message


@then(parsers.cfparse("the backend received {count:d} orders"))
def backend_received_orders(order_service, count):
    assert len(order_service.calls) == count


@then(parsers.cfparse("the backend received {count:d} order"))
def backend_received_order(order_service, count):
    assert len(order_service.calls) == count
