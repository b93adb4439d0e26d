"""The customer id resolved by the upstream auth layer.

Authentication happens before requests reach this service; the gateway
forwards the authenticated customer's id in the ``X-Customer-Id`` header.
A request without it is a guest.
"""

from fastapi import Header, HTTPException


async def optional_customer_id(x_customer_id: str | None = Header(default=None)) -> str | None:
    if x_customer_id is None or not x_customer_id.strip():
        return None
    return x_customer_id.strip()


async def required_customer_id(x_customer_id: str | None = Header(default=None)) -> str:
    customer_id = await optional_customer_id(x_customer_id)
    if customer_id is None:
        raise HTTPException(status_code=401, detail="Authentication required")
    return customer_id
