"""Domain events for the SalesOrder aggregate."""

from protean.fields import DateTime, Identifier, Integer, String

from ordering.domain import ordering


@ordering.event(part_of="SalesOrder")
class OrderPlaced:
    """A sales order was priced and stored with all of its lines."""

    __version__ = 1

    order_id = Identifier(required=True)
    order_reference = String(required=True, max_length=36)
    customer_id = Identifier(required=True)
    line_count = Integer(required=True)
    subtotal = String(required=True, max_length=32)
    vat = String(required=True, max_length=32)
    total = String(required=True, max_length=32)
    placed_at = DateTime(required=True)


@ordering.event(part_of="SalesOrder")
class OrderCancelled:
    """A sales order moved from CREATED to CANCELLED. Raised once per order."""

    __version__ = 1

    order_id = Identifier(required=True)
    order_reference = String(required=True, max_length=36)
    cancelled_at = DateTime(required=True)
