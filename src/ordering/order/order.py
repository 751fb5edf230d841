"""SalesOrder aggregate: an order for one customer, priced from catalog snapshots.

State Machine:
    CREATED → CANCELLED

An order is written once when placed and mutated only by cancellation. Each
persisted mutation bumps ``version``, which the repository compares on write
to detect concurrent updates. Money fields hold decimal strings so amounts
survive persistence round trips exactly.
"""

from collections.abc import Sequence
from datetime import UTC, datetime
from decimal import Decimal
from enum import Enum
from uuid import uuid4

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, HasMany, Identifier, Integer, String

from ordering.domain import ordering
from ordering.order.events import OrderCancelled, OrderPlaced
from ordering.shared import money


class OrderStatus(Enum):
    CREATED = "CREATED"
    CANCELLED = "CANCELLED"


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@ordering.entity(part_of="SalesOrder")
class OrderLine:
    """A priced line of an order.

    Item name and unit price are copied from the catalog when the order is
    placed; later catalog changes never reach an existing line.
    """

    position = Integer(required=True, min_value=1)
    catalog_item_id = Identifier(required=True)
    item_name = String(required=True, max_length=255)
    unit_price = String(required=True, max_length=32)
    quantity = Integer(required=True, min_value=1)
    line_total = String(required=True, max_length=32)


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@ordering.aggregate
class SalesOrder:
    order_reference = String(required=True, max_length=36, unique=True)
    customer_id = Identifier(required=True)
    lines = HasMany(OrderLine)
    subtotal = String(required=True, max_length=32)
    vat = String(required=True, max_length=32)
    total = String(required=True, max_length=32)
    status = String(
        choices=OrderStatus,
        default=OrderStatus.CREATED.value,
    )
    created_at = DateTime(required=True)
    cancelled_at = DateTime()
    version = Integer(default=0)

    @invariant.post
    def cancellation_timestamp_matches_status(self):
        cancelled = self.status == OrderStatus.CANCELLED.value
        if cancelled != (self.cancelled_at is not None):
            raise ValidationError({"cancelled_at": ["Cancellation timestamp must be set exactly when cancelled"]})

    @invariant.post
    def total_is_subtotal_plus_vat(self):
        if self.subtotal is None or self.vat is None or self.total is None:
            return
        if Decimal(self.total) != Decimal(self.subtotal) + Decimal(self.vat):
            raise ValidationError({"total": ["Total must equal subtotal plus VAT"]})

    # -------------------------------------------------------------------
    # Factory method
    # -------------------------------------------------------------------
    @classmethod
    def place(cls, customer_id, priced_lines: Sequence, vat_rate: Decimal):
        """Price and assemble a new order.

        Args:
            customer_id: The customer the order is placed for.
            priced_lines: ``(catalog_item, quantity)`` pairs in the order the
                caller listed them; line order is preserved.
            vat_rate: Decimal fraction applied to the subtotal.
        """
        if not priced_lines:
            raise ValidationError({"lines": ["An order needs at least one line"]})

        lines = []
        for position, (item, quantity) in enumerate(priced_lines, start=1):
            unit_price = item.unit_price()
            lines.append(
                OrderLine(
                    position=position,
                    catalog_item_id=str(item.id),
                    item_name=item.name,
                    unit_price=str(unit_price),
                    quantity=quantity,
                    line_total=str(money.line_total(unit_price, quantity)),
                )
            )

        totals = money.order_totals((Decimal(line.line_total) for line in lines), vat_rate)
        now = datetime.now(UTC)

        order = cls(
            order_reference=str(uuid4()),
            customer_id=str(customer_id),
            lines=lines,
            subtotal=str(totals.subtotal),
            vat=str(totals.vat),
            total=str(totals.total),
            status=OrderStatus.CREATED.value,
            created_at=now,
            version=0,
        )
        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                order_reference=order.order_reference,
                customer_id=str(customer_id),
                line_count=len(lines),
                subtotal=order.subtotal,
                vat=order.vat,
                total=order.total,
                placed_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    def is_cancelled(self) -> bool:
        return self.status == OrderStatus.CANCELLED.value

    def ordered_lines(self) -> list:
        """Lines in the order they were placed."""
        return sorted(self.lines or [], key=lambda line: line.position)

    def totals(self) -> money.Totals:
        return money.Totals(
            subtotal=Decimal(self.subtotal),
            vat=Decimal(self.vat),
            total=Decimal(self.total),
        )

    # -------------------------------------------------------------------
    # Cancellation
    # -------------------------------------------------------------------
    def cancel(self):
        """Cancel the order. Cancelling an already cancelled order changes nothing."""
        if self.is_cancelled():
            return

        now = datetime.now(UTC)
        with atomic_change(self):
            self.status = OrderStatus.CANCELLED.value
            self.cancelled_at = now
            self.version = (self.version or 0) + 1

        self.raise_(
            OrderCancelled(
                order_id=str(self.id),
                order_reference=self.order_reference,
                cancelled_at=now,
            )
        )
