"""CatalogItem aggregate: the priced products orders are placed against.

Catalog items are reference data: the ordering engine only reads them and
copies name and price onto order lines at placement time.
"""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, String

from ordering.domain import ordering
from ordering.shared import money


def _utcnow():
    return datetime.now(UTC)


@ordering.aggregate
class CatalogItem:
    """A sellable product identified by its SKU, with a two-decimal unit price."""

    sku: String(required=True, max_length=50, unique=True)
    name: String(required=True, max_length=255)
    price: String(required=True, max_length=32)
    updated_at: DateTime(default=_utcnow)

    @invariant.post
    def price_must_be_a_non_negative_two_place_decimal(self):
        if self.price is None:
            return
        try:
            normalised = money.to_price(self.price)
        except ValueError as exc:
            raise ValidationError({"price": [str(exc)]}) from exc
        if str(normalised) != self.price:
            raise ValidationError({"price": [f"Price must be written with two decimal places: {self.price}"]})

    @classmethod
    def add(cls, sku, name, price, catalog_item_id=None):
        try:
            normalised = money.to_price(price)
        except ValueError as exc:
            raise ValidationError({"price": [str(exc)]}) from exc

        attributes = {"sku": sku, "name": name, "price": str(normalised), "updated_at": _utcnow()}
        if catalog_item_id:
            attributes["id"] = catalog_item_id
        return cls(**attributes)

    def reprice(self, price):
        try:
            normalised = money.to_price(price)
        except ValueError as exc:
            raise ValidationError({"price": [str(exc)]}) from exc
        self.price = str(normalised)
        self.updated_at = _utcnow()

    def unit_price(self):
        return money.to_amount(self.price)
