"""Order listing criteria: turns caller filters into a bounded, validated query.

``OrderFilter`` is what a caller hands in (every field optional, nothing
trusted). ``translate()`` normalises it into an ``OrderQuery``: page and size
clamped, the sort field checked against an allow-list, calendar dates turned
into half-open timestamp ranges in the configured time zone. ``build_page()``
wraps a result window into the page envelope returned to callers.
"""

import math
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal

from protean.exceptions import ValidationError
from protean.utils.query import Q

from ordering.config import OrderingSettings
from ordering.shared.calendar import as_utc, start_of_day, start_of_next_day

DEFAULT_SORT_FIELD = "created_at"

# Public sort names (camelCase as sent by clients, snake_case accepted too)
# mapped to SalesOrder attributes.
SORTABLE_FIELDS = {
    "createdAt": "created_at",
    "created_at": "created_at",
    "cancelledAt": "cancelled_at",
    "cancelled_at": "cancelled_at",
    "subtotal": "subtotal",
    "vat": "vat",
    "total": "total",
    "status": "status",
    "orderReference": "order_reference",
    "order_reference": "order_reference",
    "customerId": "customer_id",
    "customer_id": "customer_id",
}

_MONEY_FIELDS = frozenset({"subtotal", "vat", "total"})
_TIMESTAMP_FIELDS = frozenset({"created_at", "cancelled_at"})


@dataclass(frozen=True)
class OrderFilter:
    """Raw listing request, as received from the caller."""

    creation_date_from: date | None = None
    creation_date_to: date | None = None
    cancellation_date_from: date | None = None
    cancellation_date_to: date | None = None
    page: int | None = None
    size: int | None = None
    sort_by: str | None = None
    sort_direction: str | None = None


@dataclass(frozen=True)
class OrderQuery:
    """A validated listing query. Lower bounds are inclusive, upper bounds exclusive."""

    page: int
    size: int
    sort_field: str = DEFAULT_SORT_FIELD
    descending: bool = True
    created_from: datetime | None = None
    created_before: datetime | None = None
    cancelled_from: datetime | None = None
    cancelled_before: datetime | None = None

    @property
    def offset(self) -> int:
        return self.page * self.size

    def criteria(self) -> list[Q]:
        """Store-side predicates for the date bounds, to be ANDed together.

        Orders that were never cancelled stay visible under cancellation bounds.
        """
        found = []
        if self.created_from is not None:
            found.append(Q(created_at__gte=self.created_from))
        if self.created_before is not None:
            found.append(Q(created_at__lt=self.created_before))
        if self.cancelled_from is not None:
            found.append(Q(cancelled_at__isnull=True) | Q(cancelled_at__gte=self.cancelled_from))
        if self.cancelled_before is not None:
            found.append(Q(cancelled_at__isnull=True) | Q(cancelled_at__lt=self.cancelled_before))
        return found

    def sort_value(self, order):
        value = getattr(order, self.sort_field)
        if value is None:
            return None
        if self.sort_field in _MONEY_FIELDS:
            return Decimal(value)
        if self.sort_field in _TIMESTAMP_FIELDS:
            return as_utc(value)
        return str(value)

    def sort(self, orders: list) -> list:
        """Order rows by the sort field; rows without a value always come last.

        Ties fall back to creation time and then id, in the same direction,
        so paging through equal values is stable.
        """

        def tiebreak(order):
            return (as_utc(order.created_at), str(order.id))

        valued = [order for order in orders if self.sort_value(order) is not None]
        missing = [order for order in orders if self.sort_value(order) is None]
        valued.sort(key=lambda order: (self.sort_value(order), *tiebreak(order)), reverse=self.descending)
        missing.sort(key=tiebreak, reverse=self.descending)
        return valued + missing


@dataclass(frozen=True)
class Page:
    """Page envelope: one window of results plus pagination metadata."""

    content: list
    page: int
    size: int
    total_elements: int
    total_pages: int
    first: bool
    last: bool


def _sort_field(sort_by: str | None) -> str:
    if sort_by is None or not sort_by.strip():
        return DEFAULT_SORT_FIELD
    field = SORTABLE_FIELDS.get(sort_by.strip())
    if field is None:
        allowed = sorted({name for name in SORTABLE_FIELDS if "_" not in name})
        raise ValidationError({"sortBy": [f"Cannot sort by '{sort_by}'. Allowed: {', '.join(allowed)}"]})
    return field


def translate(order_filter: OrderFilter, settings: OrderingSettings) -> OrderQuery:
    """Normalise a caller's filter into a bounded ``OrderQuery``."""
    page = order_filter.page if order_filter.page is not None and order_filter.page > 0 else 0

    size = order_filter.size
    if size is None or size < 1:
        size = settings.default_page_size
    size = min(size, settings.max_page_size)

    direction = (order_filter.sort_direction or "").strip().lower()
    tz = settings.tz

    return OrderQuery(
        page=page,
        size=size,
        sort_field=_sort_field(order_filter.sort_by),
        descending=direction != "asc",
        created_from=start_of_day(order_filter.creation_date_from, tz) if order_filter.creation_date_from else None,
        created_before=start_of_next_day(order_filter.creation_date_to, tz) if order_filter.creation_date_to else None,
        cancelled_from=(
            start_of_day(order_filter.cancellation_date_from, tz) if order_filter.cancellation_date_from else None
        ),
        cancelled_before=(
            start_of_next_day(order_filter.cancellation_date_to, tz) if order_filter.cancellation_date_to else None
        ),
    )


def build_page(content: list, total_elements: int, query: OrderQuery) -> Page:
    total_pages = math.ceil(total_elements / query.size) if total_elements else 0
    return Page(
        content=content,
        page=query.page,
        size=query.size,
        total_elements=total_elements,
        total_pages=total_pages,
        first=query.page == 0,
        last=query.page + 1 >= total_pages,
    )
