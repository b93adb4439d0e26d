import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from ordering.api import cart_router, order_router, product_router, register_exception_handlers


@pytest.fixture()
def client():
    app = FastAPI()
    register_exception_handlers(app)
    app.include_router(cart_router)
    app.include_router(order_router)
    app.include_router(product_router)
    return TestClient(app)


@pytest.fixture()
def customer_headers():
    return {"X-Customer-Id": "cust-api-001"}
