"""Map domain exceptions to HTTP responses."""

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.exceptions import ExpectedVersionError, ObjectNotFoundError, ValidationError

from ordering.exceptions import EmptyCart, OutOfStock

logger = structlog.get_logger(__name__)


def _error_kind(exc: ValidationError) -> str:
    if isinstance(exc, OutOfStock):
        return "out_of_stock"
    if isinstance(exc, EmptyCart):
        return "empty_cart"
    return "validation_failed"


async def validation_error_handler(_request: Request, exc: ValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={"error": _error_kind(exc), "messages": exc.messages},
    )


async def not_found_handler(request: Request, exc: ObjectNotFoundError) -> JSONResponse:
    logger.info("Resource not found", path=request.url.path, error=str(exc))
    return JSONResponse(
        status_code=404,
        content={"error": "not_found", "messages": {"resource": ["Not found"]}},
    )


async def conflict_handler(request: Request, exc: ExpectedVersionError) -> JSONResponse:
    logger.warning("Write conflict", path=request.url.path, error=str(exc))
    return JSONResponse(
        status_code=409,
        content={"error": "conflict", "messages": {"resource": ["Modified concurrently, please retry"]}},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(ObjectNotFoundError, not_found_handler)
    app.add_exception_handler(ExpectedVersionError, conflict_handler)
