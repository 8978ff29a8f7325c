"""Ordering bounded context: shopping cart and checkout.

Holds the customer's private cart (line identity, merging, pricing), the
delivery fee calculation, and the order summary handed off to the shop's
messaging channel at checkout. The cart lives for one browsing session and is
never written to durable storage.
"""

import structlog
from protean.domain import Domain

ordering = Domain(name="ordering")

logger = structlog.get_logger(__name__)
