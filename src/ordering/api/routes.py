"""FastAPI routes for the Ordering domain: sales orders."""

from datetime import date

from fastapi import APIRouter, Query

from ordering.api.schemas import CreateOrderRequest, ErrorResponse, OrderPageResponse, OrderResponse
from ordering.listing.criteria import OrderFilter
from ordering.order.engine import OrderEngine

order_router = APIRouter(
    prefix="/orders",
    tags=["orders"],
    responses={code: {"model": ErrorResponse} for code in (400, 404, 409, 500)},
)

engine = OrderEngine()


@order_router.post("", status_code=201, response_model=OrderResponse)
async def create_order(body: CreateOrderRequest) -> OrderResponse:
    view = engine.create_order(
        body.customer_id,
        [(item.catalog_item_id, item.quantity) for item in body.items],
    )
    return OrderResponse.model_validate(view)


@order_router.get("", response_model=OrderPageResponse)
async def list_orders(
    creation_date_from: date | None = Query(None, alias="creationDateFrom"),
    creation_date_to: date | None = Query(None, alias="creationDateTo"),
    cancellation_date_from: date | None = Query(None, alias="cancellationDateFrom"),
    cancellation_date_to: date | None = Query(None, alias="cancellationDateTo"),
    page: int | None = Query(None),
    size: int | None = Query(None),
    sort_by: str | None = Query(None, alias="sortBy"),
    sort_direction: str | None = Query(None, alias="sortDirection"),
) -> OrderPageResponse:
    result = engine.list_orders(
        OrderFilter(
            creation_date_from=creation_date_from,
            creation_date_to=creation_date_to,
            cancellation_date_from=cancellation_date_from,
            cancellation_date_to=cancellation_date_to,
            page=page,
            size=size,
            sort_by=sort_by,
            sort_direction=sort_direction,
        )
    )
    return OrderPageResponse.model_validate(result)


@order_router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str) -> OrderResponse:
    return OrderResponse.model_validate(engine.get_order(order_id))


@order_router.post("/{order_id}/cancel", response_model=OrderResponse)
async def cancel_order(order_id: str) -> OrderResponse:
    return OrderResponse.model_validate(engine.cancel_order(order_id))
