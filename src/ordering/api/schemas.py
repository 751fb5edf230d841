"""Pydantic request/response schemas for the Ordering API.

These are external contracts (anti-corruption layer), separate from
internal Protean commands. Field names travel as camelCase on the wire;
money travels as decimal strings.
"""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------
class OrderItemRequest(CamelModel):
    catalog_item_id: str
    quantity: int = Field(ge=1, strict=True)


class CreateOrderRequest(CamelModel):
    customer_id: str
    items: list[OrderItemRequest]

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "customerId": "cust-001",
                    "items": [{"catalogItemId": "item-001", "quantity": 2}],
                }
            ]
        },
    )


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class OrderItemResponse(CamelModel):
    id: str
    item_name: str
    item_price: Decimal
    quantity: int
    total_price: Decimal


class OrderResponse(CamelModel):
    id: str
    order_reference: str
    customer_id: str
    customer_name: str
    items: list[OrderItemResponse]
    subtotal: Decimal
    vat: Decimal
    total: Decimal
    creation_date: str
    cancellation_date: str | None = None
    status: str


class OrderPageResponse(CamelModel):
    content: list[OrderResponse]
    page: int
    size: int
    total_elements: int
    total_pages: int
    first: bool
    last: bool


class ErrorResponse(BaseModel):
    error: str
    message: str
    details: dict | list | None = None
