"""Translate ordering exceptions into HTTP responses."""

import structlog
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import ValidationError

from ordering.api.schemas import ErrorResponse
from ordering.errors import ConflictError, InfrastructureError, NotFoundError

logger = structlog.get_logger(__name__)


def _error(status_code: int, error: str, message: str, details=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=error, message=message, details=jsonable_encoder(details)).model_dump(),
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return _error(400, "validation_error", "Request is malformed", exc.errors())


async def validation_handler(request: Request, exc: ValidationError) -> JSONResponse:
    return _error(400, "validation_error", "Request is invalid", exc.messages)


async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    return _error(404, "not_found", str(exc), {"entity": exc.entity, "id": str(exc.identifier)})


async def conflict_handler(request: Request, exc: ConflictError) -> JSONResponse:
    return _error(
        409,
        "conflict",
        str(exc),
        {"entity": exc.entity, "id": str(exc.identifier), "expectedVersion": exc.expected_version},
    )


async def server_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Request failed",
        method=request.method,
        path=request.url.path,
        error=str(exc),
        exc_info=exc,
    )
    return _error(500, "internal_error", "The request could not be completed")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(ValidationError, validation_handler)
    app.add_exception_handler(NotFoundError, not_found_handler)
    app.add_exception_handler(ConflictError, conflict_handler)
    app.add_exception_handler(InfrastructureError, server_error_handler)
    app.add_exception_handler(Exception, server_error_handler)
