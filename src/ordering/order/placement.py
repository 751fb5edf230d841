"""Order placement: command and handler.

Placement is all-or-nothing: the customer and every catalog item are
resolved before anything is written, and the order is persisted together
with its lines in the handler's unit of work.
"""

import json

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, Text
from protean.utils.globals import current_domain

from ordering.config import get_settings
from ordering.domain import ordering
from ordering.errors import NotFoundError
from ordering.order.order import SalesOrder
from ordering.reference.gateway import get_gateway

logger = structlog.get_logger(__name__)


@ordering.command(part_of=SalesOrder)
class PlaceOrder:
    customer_id = Identifier(required=True)
    lines = Text(required=True)  # JSON: [{"catalog_item_id": ..., "quantity": ...}, ...]


def _parse_lines(raw) -> list[tuple[str, int]]:
    entries = json.loads(raw) if isinstance(raw, str) else raw
    if not entries:
        raise ValidationError({"lines": ["An order needs at least one line"]})

    parsed = []
    for number, entry in enumerate(entries, start=1):
        catalog_item_id = entry.get("catalog_item_id")
        quantity = entry.get("quantity")
        if not catalog_item_id:
            raise ValidationError({"catalog_item_id": [f"Line {number} does not name a catalog item"]})
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
            raise ValidationError({"quantity": [f"Line {number} quantity must be a positive integer, got {quantity!r}"]})
        parsed.append((str(catalog_item_id), quantity))
    return parsed


@ordering.command_handler(part_of=SalesOrder)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        requested = _parse_lines(command.lines)
        customer_id = str(command.customer_id)
        gateway = get_gateway()

        if not gateway.customer_exists(customer_id):
            raise NotFoundError("Customer", customer_id)

        item_ids = list(dict.fromkeys(item_id for item_id, _ in requested))
        items = gateway.get_catalog_items(item_ids)
        missing = [item_id for item_id in item_ids if item_id not in items]
        if missing:
            raise NotFoundError("CatalogItem", ", ".join(missing))

        order = SalesOrder.place(
            customer_id=customer_id,
            priced_lines=[(items[item_id], quantity) for item_id, quantity in requested],
            vat_rate=get_settings().vat_rate,
        )
        current_domain.repository_for(SalesOrder).add(order)

        logger.info(
            "Order placed",
            order_id=str(order.id),
            order_reference=order.order_reference,
            customer_id=customer_id,
            line_count=len(requested),
            total=order.total,
        )
        return str(order.id)
