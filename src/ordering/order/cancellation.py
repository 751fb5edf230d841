"""Order cancellation: command and handler."""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.errors import NotFoundError
from ordering.order.order import SalesOrder

logger = structlog.get_logger(__name__)


@ordering.command(part_of=SalesOrder)
class CancelOrder:
    order_id = Identifier(required=True)


@ordering.command_handler(part_of=SalesOrder)
class CancelOrderHandler:
    @handle(CancelOrder)
    def cancel_order(self, command):
        repo = current_domain.repository_for(SalesOrder)
        try:
            order = repo.get(command.order_id)
        except ObjectNotFoundError as exc:
            raise NotFoundError("SalesOrder", command.order_id) from exc

        if order.is_cancelled():
            logger.info("Order already cancelled, nothing to do", order_id=str(order.id))
            return str(order.id)

        expected_version = order.version
        order.cancel()
        repo.commit_cancellation(order, expected_version)

        logger.info(
            "Order cancelled",
            order_id=str(order.id),
            order_reference=order.order_reference,
            version=order.version,
        )
        return str(order.id)
