"""Food ordering bounded context — cart, pricing and order submission.

Holds the in-memory cart a screen works with, derives its pricing through
the Order Service port, and drives the asynchronous checkout submission.
"""

from protean.domain import Domain

from foodorder.utils.logging import configure_logging, get_logger

configure_logging()

logger = get_logger(__name__)

foodorder = Domain(name="foodorder")
