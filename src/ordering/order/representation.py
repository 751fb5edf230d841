"""Response shapes for orders, independent of the HTTP layer."""

from dataclasses import dataclass
from datetime import tzinfo
from decimal import Decimal

from ordering.order.order import SalesOrder
from ordering.shared.calendar import format_date


@dataclass(frozen=True)
class OrderLineView:
    id: str
    item_name: str
    item_price: Decimal
    quantity: int
    total_price: Decimal


@dataclass(frozen=True)
class OrderView:
    id: str
    order_reference: str
    customer_id: str
    customer_name: str
    items: list[OrderLineView]
    subtotal: Decimal
    vat: Decimal
    total: Decimal
    creation_date: str
    cancellation_date: str | None
    status: str


def present(order: SalesOrder, customer_name: str, tz: tzinfo) -> OrderView:
    """Build the outward representation of an order; lines keep their placement order."""
    totals = order.totals()
    return OrderView(
        id=str(order.id),
        order_reference=order.order_reference,
        customer_id=str(order.customer_id),
        customer_name=customer_name,
        items=[
            OrderLineView(
                id=str(line.id),
                item_name=line.item_name,
                item_price=Decimal(line.unit_price),
                quantity=line.quantity,
                total_price=Decimal(line.line_total),
            )
            for line in order.ordered_lines()
        ],
        subtotal=totals.subtotal,
        vat=totals.vat,
        total=totals.total,
        creation_date=format_date(order.created_at, tz),
        cancellation_date=format_date(order.cancelled_at, tz),
        status=order.status,
    )
