"""Customer aggregate: who an order is placed for."""

from protean.fields import String

from ordering.domain import ordering


@ordering.aggregate
class Customer:
    """A buyer known to the ordering context by id and display name."""

    name: String(required=True, max_length=255)

    @classmethod
    def register(cls, name, customer_id=None):
        if customer_id:
            return cls(id=customer_id, name=name)
        return cls(name=name)
