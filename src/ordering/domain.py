"""Ordering bounded context: sales orders placed against the product catalog.

Owns the order lifecycle (placement, cancellation), the read-only reference
data orders are priced from (catalog items, customers), and the filtered,
paginated order listing.
"""

from protean.domain import Domain

from ordering.utils.logging import configure_logging, get_logger

configure_logging()

logger = get_logger(__name__)

ordering = Domain(name="ordering")
