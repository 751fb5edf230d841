"""Create and drop SQL schemas for the ordering domain's database providers.

The in-memory provider needs no schema, so both functions skip it.
"""

import structlog
from protean.domain import Domain
from sqlalchemy import create_engine

logger = structlog.get_logger(__name__)

SQL_PROVIDERS = ("sqlite", "postgresql")


def _sql_providers(domain: Domain):
    for name, provider in domain.providers.items():
        if provider.conn_info["provider"] in SQL_PROVIDERS:
            yield name, provider


def _register_tables(domain: Domain, provider_name: str) -> None:
    # Touching ``_dao`` makes the provider build the SQLAlchemy model for the class
    records = list(domain.registry.aggregates.values()) + list(domain.registry.entities.values())
    for record in records:
        if record.cls.meta_.provider == provider_name:
            domain.repository_for(record.cls)._dao  # noqa: B018


def setup_db(domain: Domain) -> None:
    """Create tables for sales orders, order lines and reference data."""
    with domain.domain_context():
        for name, provider in _sql_providers(domain):
            _register_tables(domain, name)
            provider._metadata.create_all(create_engine(provider.conn_info["database_uri"]))
            logger.info("Database schema created", provider=name)


def drop_db(domain: Domain) -> None:
    with domain.domain_context():
        for name, provider in _sql_providers(domain):
            provider._metadata.drop_all(create_engine(provider.conn_info["database_uri"]))
            logger.info("Database schema dropped", provider=name)
