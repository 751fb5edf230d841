"""Reference data management: commands used by the catalog and customer admin side.

The ordering engine never issues these; they exist so catalog managers (and
local tooling) can maintain the data orders are priced from.
"""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.errors import NotFoundError
from ordering.reference.catalog import CatalogItem
from ordering.reference.customer import Customer

logger = structlog.get_logger(__name__)


@ordering.command(part_of=Customer)
class RegisterCustomer:
    """Add a customer that orders can be placed for."""

    customer_id: Identifier()
    name: String(required=True, max_length=255)


@ordering.command(part_of=Customer)
class RemoveCustomer:
    """Administratively delete a customer; existing orders keep pointing at the id."""

    customer_id: Identifier(required=True)


@ordering.command(part_of=CatalogItem)
class AddCatalogItem:
    """Put a new product on the catalog."""

    catalog_item_id: Identifier()
    sku: String(required=True, max_length=50)
    name: String(required=True, max_length=255)
    price: String(required=True, max_length=32)


@ordering.command(part_of=CatalogItem)
class RepriceCatalogItem:
    """Change a product's unit price. Orders already placed keep their snapshot."""

    catalog_item_id: Identifier(required=True)
    price: String(required=True, max_length=32)


@ordering.command_handler(part_of=Customer)
class CustomerManagementHandler:
    @handle(RegisterCustomer)
    def register_customer(self, command):
        customer = Customer.register(name=command.name, customer_id=command.customer_id)
        current_domain.repository_for(Customer).add(customer)
        return str(customer.id)

    @handle(RemoveCustomer)
    def remove_customer(self, command):
        repo = current_domain.repository_for(Customer)
        try:
            customer = repo.get(command.customer_id)
        except ObjectNotFoundError as exc:
            raise NotFoundError("Customer", command.customer_id) from exc
        repo._dao.delete(customer)
        logger.info("Customer removed", customer_id=str(command.customer_id))


@ordering.command_handler(part_of=CatalogItem)
class CatalogManagementHandler:
    @handle(AddCatalogItem)
    def add_catalog_item(self, command):
        item = CatalogItem.add(
            sku=command.sku,
            name=command.name,
            price=command.price,
            catalog_item_id=command.catalog_item_id,
        )
        current_domain.repository_for(CatalogItem).add(item)
        return str(item.id)

    @handle(RepriceCatalogItem)
    def reprice_catalog_item(self, command):
        repo = current_domain.repository_for(CatalogItem)
        try:
            item = repo.get(command.catalog_item_id)
        except ObjectNotFoundError as exc:
            raise NotFoundError("CatalogItem", command.catalog_item_id) from exc
        previous_price = item.price
        item.reprice(command.price)
        repo.add(item)
        logger.info(
            "Catalog item repriced",
            catalog_item_id=str(item.id),
            previous_price=previous_price,
            price=item.price,
        )
