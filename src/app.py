"""Marketplace FastAPI application.

Serves the Ordering domain (cart, checkout, orders, read-only catalogue)
and processes commands synchronously via HTTP.

Usage:
    uvicorn src.app:app --host 0.0.0.0 --port 8000 --reload
"""

import uuid

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# The domain is initialized at module level so uvicorn workers share it.
# PROTEAN_ENV selects the config overlay in src/ordering/domain.toml:
#   - "test"       → in-memory providers, synchronous event processing
#   - "production" → PostgreSQL through DATABASE_URL
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from ordering.domain import ordering  # noqa: E402
from ordering.utils.logging import bind_request_context, clear_request_context, get_logger

ordering.init()

logger = get_logger(__name__)

# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Marketplace API",
    description="E-commerce backend: cart reconciliation and order checkout",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the Ordering domain context and bind request log context."""
    bind_request_context(
        request_id=request.headers.get("X-Request-Id") or str(uuid.uuid4()),
        method=request.method,
        path=request.url.path,
    )
    try:
        with ordering.domain_context():
            response = await call_next(request)
        return response
    finally:
        clear_request_context()


# ---------------------------------------------------------------------------
# Routers and error mapping
# ---------------------------------------------------------------------------
from ordering.api import (  # noqa: E402
    cart_router,
    order_router,
    product_router,
    register_exception_handlers,
)

register_exception_handlers(app)

app.include_router(cart_router)
app.include_router(order_router)
app.include_router(product_router)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(
        content={
            "status": "ok",
            "domains": {"ordering": {"name": ordering.name}},
        }
    )
