"""Reference data read through the ordering domain's own repositories."""

from collections.abc import Iterable

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from ordering.errors import ReferenceDataUnavailable
from ordering.reference.catalog import CatalogItem
from ordering.reference.customer import Customer
from ordering.reference.gateway.port import ReferenceDataGateway

logger = structlog.get_logger(__name__)


def _fetch_by_ids(aggregate_cls, ids: list[str]) -> dict:
    if not ids:
        return {}
    result = current_domain.repository_for(aggregate_cls)._dao.query.filter(id__in=ids).limit(len(ids)).all()
    return {str(record.id): record for record in result.items}


class RepositoryReferenceData(ReferenceDataGateway):
    """Default gateway: every call is a fresh read, nothing is cached."""

    def get_customer(self, customer_id: str) -> Customer | None:
        try:
            return current_domain.repository_for(Customer).get(customer_id)
        except ObjectNotFoundError:
            return None
        except Exception as exc:
            logger.error("Customer lookup failed", customer_id=str(customer_id), error=str(exc))
            raise ReferenceDataUnavailable("customer", str(exc)) from exc

    def get_customers(self, customer_ids: Iterable[str]) -> dict[str, Customer]:
        ids = sorted({str(customer_id) for customer_id in customer_ids})
        try:
            return _fetch_by_ids(Customer, ids)
        except Exception as exc:
            logger.error("Customer batch lookup failed", customer_count=len(ids), error=str(exc))
            raise ReferenceDataUnavailable("customers", str(exc)) from exc

    def get_catalog_items(self, catalog_item_ids: Iterable[str]) -> dict[str, CatalogItem]:
        ids = sorted({str(item_id) for item_id in catalog_item_ids})
        try:
            return _fetch_by_ids(CatalogItem, ids)
        except Exception as exc:
            logger.error("Catalog item lookup failed", item_count=len(ids), error=str(exc))
            raise ReferenceDataUnavailable("catalog items", str(exc)) from exc
