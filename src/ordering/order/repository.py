"""Repository for the SalesOrder aggregate.

The base repository provides ``add`` and ``get``. Listing and the guarded
cancellation write live here.
"""

import structlog
from protean.exceptions import ExpectedVersionError, ObjectNotFoundError

from ordering.domain import ordering
from ordering.errors import ConflictError, NotFoundError
from ordering.listing.criteria import OrderQuery
from ordering.order.order import SalesOrder

logger = structlog.get_logger(__name__)


@ordering.repository(part_of=SalesOrder)
class SalesOrderRepository:
    def _matching(self, query: OrderQuery) -> list[SalesOrder]:
        queryset = self._dao.query
        for criterion in query.criteria():
            queryset = queryset.filter(criterion)

        results = queryset.all()
        if results.total > len(results.items):
            results = queryset.limit(results.total).all()
        return list(results.items)

    def find_page(self, query: OrderQuery) -> tuple[list[SalesOrder], int]:
        """Return the requested window of matching orders and the total match count.

        Date bounds are evaluated by the store. Money is stored as decimal
        strings, so ordering happens here over the matching rows only.
        """
        ordered = query.sort(self._matching(query))
        return ordered[query.offset : query.offset + query.size], len(ordered)

    def commit_cancellation(self, order: SalesOrder, expected_version: int) -> SalesOrder:
        """Persist a cancelled order only if nobody else changed it since it was read."""
        try:
            stored = self._dao.get(order.id)
        except ObjectNotFoundError as exc:
            raise NotFoundError("SalesOrder", order.id) from exc

        if stored.version != expected_version:
            logger.warning(
                "Order was modified concurrently, cancellation rejected",
                order_id=str(order.id),
                expected_version=expected_version,
                actual_version=stored.version,
            )
            raise ConflictError("SalesOrder", order.id, expected_version, stored.version)

        try:
            self.add(order)
        except ExpectedVersionError as exc:
            raise ConflictError("SalesOrder", order.id, expected_version) from exc
        return order
