"""In-memory reference data gateway for tests.

Holds customers and catalog items in plain dictionaries and can be switched
into an outage to exercise the infrastructure-failure paths of the engine.
"""

from collections.abc import Iterable

from ordering.errors import ReferenceDataUnavailable
from ordering.reference.catalog import CatalogItem
from ordering.reference.customer import Customer
from ordering.reference.gateway.port import ReferenceDataGateway


class FakeReferenceData(ReferenceDataGateway):
    """Configurable fake reference data gateway."""

    def __init__(self) -> None:
        self.customers: dict[str, Customer] = {}
        self.catalog_items: dict[str, CatalogItem] = {}
        self.available: bool = True
        self.calls: list[dict] = []

    def configure(self, available: bool) -> None:
        """Simulate the backing store going away (or coming back)."""
        self.available = available

    def add_customer(self, customer: Customer) -> Customer:
        self.customers[str(customer.id)] = customer
        return customer

    def add_catalog_item(self, item: CatalogItem) -> CatalogItem:
        self.catalog_items[str(item.id)] = item
        return item

    def _check_available(self, lookup: str) -> None:
        if not self.available:
            raise ReferenceDataUnavailable(lookup, "fake gateway configured as unavailable")

    def get_customer(self, customer_id: str) -> Customer | None:
        self.calls.append({"method": "get_customer", "customer_id": str(customer_id)})
        self._check_available("customer")
        return self.customers.get(str(customer_id))

    def get_customers(self, customer_ids: Iterable[str]) -> dict[str, Customer]:
        ids = {str(customer_id) for customer_id in customer_ids}
        self.calls.append({"method": "get_customers", "customer_ids": sorted(ids)})
        self._check_available("customers")
        return {customer_id: self.customers[customer_id] for customer_id in ids if customer_id in self.customers}

    def get_catalog_items(self, catalog_item_ids: Iterable[str]) -> dict[str, CatalogItem]:
        ids = {str(item_id) for item_id in catalog_item_ids}
        self.calls.append({"method": "get_catalog_items", "catalog_item_ids": sorted(ids)})
        self._check_available("catalog items")
        return {item_id: self.catalog_items[item_id] for item_id in ids if item_id in self.catalog_items}
