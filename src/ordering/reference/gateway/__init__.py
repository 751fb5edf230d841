"""Reference data gateway factory.

Provides get_gateway() / set_gateway() to swap implementations:
- RepositoryReferenceData (default) reads the domain's repositories
- FakeReferenceData for tests that need a controllable outage
"""

from ordering.reference.gateway.port import ReferenceDataGateway
from ordering.reference.gateway.repository_adapter import RepositoryReferenceData

_current_gateway: ReferenceDataGateway | None = None


def get_gateway() -> ReferenceDataGateway:
    """Return the current reference data gateway. Defaults to the repository adapter."""
    global _current_gateway
    if _current_gateway is None:
        _current_gateway = RepositoryReferenceData()
    return _current_gateway


def set_gateway(gateway: ReferenceDataGateway) -> None:
    """Override the active gateway (useful for tests)."""
    global _current_gateway
    _current_gateway = gateway


def reset_gateway() -> None:
    """Reset to default gateway."""
    global _current_gateway
    _current_gateway = None
