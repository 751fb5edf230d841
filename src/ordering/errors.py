"""Ordering domain exceptions.

Raised by command handlers, the order engine and the reference data gateway.
The API layer translates them into HTTP responses. Invalid input is reported
with protean's ``ValidationError`` like the rest of the domain.
"""


class OrderingError(Exception):
    """Base class for ordering failures that are not input validation errors."""


class NotFoundError(OrderingError):
    """A referenced customer, catalog item or order does not exist."""

    def __init__(self, entity: str, identifier) -> None:
        self.entity = entity
        self.identifier = identifier
        super().__init__(f"{entity} not found: {identifier}")


class ConflictError(OrderingError):
    """The stored version moved on between read and write; the caller should retry."""

    def __init__(self, entity: str, identifier, expected_version=None, actual_version=None) -> None:
        self.entity = entity
        self.identifier = identifier
        self.expected_version = expected_version
        self.actual_version = actual_version
        super().__init__(
            f"{entity} {identifier} was modified concurrently "
            f"(expected version {expected_version}, found {actual_version})"
        )


class InfrastructureError(OrderingError):
    """A backing store or service could not be reached."""


class ReferenceDataUnavailable(InfrastructureError):
    """Catalog or customer lookups failed for reasons other than absence."""

    def __init__(self, lookup: str, detail: str = "") -> None:
        self.lookup = lookup
        message = f"Reference data lookup failed: {lookup}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)
