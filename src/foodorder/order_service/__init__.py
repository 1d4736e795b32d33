"""Order service factory.

``order_service_for()`` builds the adapter a session's settings name.
``get_order_service()`` / ``set_order_service()`` hold a process-wide
instance; an instance installed with ``set_order_service()`` takes
precedence everywhere, which is how the host plugs in its real backend
client. FakeOrderService is the only adapter shipped.
"""

import os

from foodorder.config import DEFAULT_TAX_RATE, CheckoutSettings
from foodorder.order_service.port import OrderServicePort

_current_service: OrderServicePort | None = None
_override: OrderServicePort | None = None


def build_order_service(adapter: str, tax_rate: float = DEFAULT_TAX_RATE) -> OrderServicePort:
    """Build a new instance of the named adapter."""
    if adapter == "fake":
        from foodorder.order_service.fake_adapter import FakeOrderService

        return FakeOrderService(tax_rate=tax_rate)
    raise ValueError(f"Unknown order service adapter: {adapter}")


def order_service_for(settings: CheckoutSettings) -> OrderServicePort:
    """Service for one session: the installed override, else a fresh adapter."""
    if _override is not None:
        return _override
    return build_order_service(settings.order_service_adapter, tax_rate=settings.tax_rate)


def get_order_service(adapter: str | None = None, tax_rate: float = DEFAULT_TAX_RATE) -> OrderServicePort:
    """Return the process-wide order service (singleton).

    Uses ``adapter`` when given, else the ORDER_SERVICE_ADAPTER environment
    variable, defaulting to the fake adapter. ``tax_rate`` only applies when
    the singleton is first built.
    """
    global _current_service
    if _current_service is None:
        _current_service = build_order_service(
            adapter or os.environ.get("ORDER_SERVICE_ADAPTER", "fake"), tax_rate=tax_rate
        )
    return _current_service


def set_order_service(service: OrderServicePort) -> None:
    """Install ``service`` for every caller, sessions included."""
    global _current_service, _override
    _current_service = service
    _override = service


def reset_order_service() -> None:
    global _current_service, _override
    _current_service = None
    _override = None
