"""Order engine: the entry point callers use to create, read, cancel and list orders.

Writes go through the domain's command handlers (``PlaceOrder``,
``CancelOrder``); reads go straight to the repository. Every returned order
carries the customer's display name, resolved through the reference data
gateway at the time of the call.
"""

import json
from collections.abc import Iterable, Mapping

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from ordering.config import get_settings
from ordering.errors import NotFoundError, ReferenceDataUnavailable
from ordering.listing.criteria import OrderFilter, Page, build_page, translate
from ordering.order.cancellation import CancelOrder
from ordering.order.order import SalesOrder
from ordering.order.placement import PlaceOrder
from ordering.order.representation import OrderView, present
from ordering.reference.gateway import get_gateway

logger = structlog.get_logger(__name__)


def _line_payload(line) -> dict:
    if isinstance(line, Mapping):
        return {"catalog_item_id": line.get("catalog_item_id"), "quantity": line.get("quantity")}
    catalog_item_id, quantity = line
    return {"catalog_item_id": catalog_item_id, "quantity": quantity}


class OrderEngine:
    """Stateless facade over the ordering domain. Must be used inside a domain context."""

    def create_order(self, customer_id, lines: Iterable) -> OrderView:
        """Place an order.

        ``lines`` holds ``(catalog_item_id, quantity)`` pairs or mappings with
        those keys, in the order they should appear on the order.
        """
        payload = [_line_payload(line) for line in lines]
        order_id = current_domain.process(
            PlaceOrder(customer_id=customer_id, lines=json.dumps(payload, default=str)),
            asynchronous=False,
        )
        order = current_domain.repository_for(SalesOrder).get(order_id)
        # The order is already stored; a failed name lookup must not fail the call
        return self._present(order, tolerate_outage=True)

    def get_order(self, order_id) -> OrderView:
        return self._present(self._load(order_id))

    def cancel_order(self, order_id) -> OrderView:
        current_domain.process(CancelOrder(order_id=order_id), asynchronous=False)
        return self._present(self._load(order_id), tolerate_outage=True)

    def list_orders(self, order_filter: OrderFilter | None = None) -> Page:
        settings = get_settings()
        query = translate(order_filter or OrderFilter(), settings)
        rows, total = current_domain.repository_for(SalesOrder).find_page(query)

        customers = get_gateway().get_customers({str(order.customer_id) for order in rows}) if rows else {}
        content = [
            present(order, self._display_name(order, customers.get(str(order.customer_id))), settings.tz)
            for order in rows
        ]
        return build_page(content, total, query)

    def _load(self, order_id) -> SalesOrder:
        try:
            return current_domain.repository_for(SalesOrder).get(order_id)
        except ObjectNotFoundError as exc:
            raise NotFoundError("SalesOrder", order_id) from exc

    def _present(self, order: SalesOrder, tolerate_outage: bool = False) -> OrderView:
        try:
            customer = get_gateway().get_customer(str(order.customer_id))
        except ReferenceDataUnavailable:
            if not tolerate_outage:
                raise
            logger.warning(
                "Customer lookup failed after write, using placeholder name",
                order_id=str(order.id),
                customer_id=str(order.customer_id),
            )
            customer = None
        return present(order, self._display_name(order, customer), get_settings().tz)

    def _display_name(self, order: SalesOrder, customer) -> str:
        if customer is not None:
            return customer.name
        placeholder = get_settings().unknown_customer_name
        logger.info(
            "Customer no longer resolves, using placeholder name",
            order_id=str(order.id),
            customer_id=str(order.customer_id),
        )
        return placeholder
