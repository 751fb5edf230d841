"""Reference data gateway port (abstract interface).

Read-only lookups of customers and catalog items. Absence is reported by
returning ``None`` or leaving an id out of a result mapping; an unreachable
backing store raises ``ReferenceDataUnavailable`` instead, so callers can tell
"customer 42 does not exist" apart from "the lookup could not be made".
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable

from ordering.reference.catalog import CatalogItem
from ordering.reference.customer import Customer


class ReferenceDataGateway(ABC):
    """Abstract reference data interface."""

    def customer_exists(self, customer_id: str) -> bool:
        return self.get_customer(customer_id) is not None

    @abstractmethod
    def get_customer(self, customer_id: str) -> Customer | None:
        """Return the customer, or ``None`` when it does not exist."""
        ...

    @abstractmethod
    def get_customers(self, customer_ids: Iterable[str]) -> dict[str, Customer]:
        """Batched lookup; ids that do not exist are absent from the result."""
        ...

    @abstractmethod
    def get_catalog_items(self, catalog_item_ids: Iterable[str]) -> dict[str, CatalogItem]:
        """Batched lookup; ids that do not exist are absent from the result."""
        ...
