"""HTTP middleware for the Ordering API."""

from fastapi import Request

from ordering.domain import ordering
from ordering.utils.logging import add_context, clear_context


async def domain_context_middleware(request: Request, call_next):
    """Push the ordering domain context and bind request details onto log lines."""
    if not request.url.path.startswith("/orders"):
        # Health check, docs, etc.
        return await call_next(request)

    add_context(method=request.method, path=request.url.path)
    try:
        with ordering.domain_context():
            return await call_next(request)
    finally:
        clear_context()
