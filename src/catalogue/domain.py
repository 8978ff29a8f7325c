"""Catalogue bounded context: catalog items and their prices.

Catalog records are owned by the operator's store; this context reads them,
decides the price in force at a given instant, and derives discount prices
for the operator console.
"""

import structlog
from protean.domain import Domain

catalogue = Domain(name="catalogue")

logger = structlog.get_logger(__name__)
