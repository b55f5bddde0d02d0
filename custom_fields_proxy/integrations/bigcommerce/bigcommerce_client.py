# custom_fields_proxy/integrations/bigcommerce/bigcommerce_client.py
import logging
import time
from typing import Any, AsyncIterator, Iterable, List, Optional

import httpx
from fastapi import Depends
from pydantic import TypeAdapter, ValidationError

from custom_fields_proxy.core.config import Settings, get_settings
from custom_fields_proxy.core.errors import UpstreamError
from custom_fields_proxy.integrations.bigcommerce.models import (
    CatalogProduct,
    CatalogProductPage,
    Channel,
    OrderProduct,
    StorefrontToken,
)

logger = logging.getLogger(__name__)

# Catalog v3 refuses page sizes above this
MAX_PAGE_SIZE = 250

_order_products = TypeAdapter(List[OrderProduct])
_catalog_page = TypeAdapter(CatalogProductPage)
_storefront_token = TypeAdapter(StorefrontToken)
_channels = TypeAdapter(List[Channel])


def auth_headers(settings: Settings) -> dict:
    return {
        "X-Auth-Token": settings.admin_api_token or "",
        "Accept": "application/json",
    }


def new_client(settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        base_url=settings.store_api_base,
        headers=auth_headers(settings),
        timeout=settings.upstream_timeout,
        transport=transport,
    )


async def get_http_client(settings: Settings = Depends(get_settings)) -> AsyncIterator[httpx.AsyncClient]:
    """FastAPI dependency: one upstream client per request."""
    async with new_client(settings) as client:
        yield client


def _raise_for_upstream(r: httpx.Response, error: str) -> None:
    if r.is_success:
        return
    logger.warning(f"BigCommerce {r.request.method} {r.request.url.path} -> {r.status_code}")
    raise UpstreamError(error, detail=r.text, status_code=r.status_code)


def _parse(adapter: TypeAdapter, payload: Any, error: str):
    try:
        return adapter.validate_python(payload)
    except ValidationError as e:
        logger.error(f"Unexpected BigCommerce payload ({error}): {e}")
        raise UpstreamError(error, detail=f"unexpected payload: {e.error_count()} validation error(s)")


def _json(r: httpx.Response, error: str) -> Any:
    try:
        return r.json()
    except ValueError:
        logger.error(f"Non-JSON BigCommerce response ({error}): {r.text[:200]!r}")
        raise UpstreamError(error, detail="response body is not JSON")


def _data(r: httpx.Response, error: str) -> Any:
    """Unwrap the {"data": ...} envelope of v3 endpoints."""
    payload = _json(r, error)
    return payload.get("data") if isinstance(payload, dict) else None


async def get_order_products(client: httpx.AsyncClient, order_id: int) -> List[OrderProduct]:
    """Line items of an order: [{id: order_product_id, product_id, ...}, ...]."""
    r = await client.get(f"/v2/orders/{order_id}/products")
    _raise_for_upstream(r, "Orders API error")
    # v2 answers 204 with no body for an order without products
    if r.status_code == 204 or not r.content:
        return []
    return _parse(_order_products, _json(r, "Orders API error"), "Orders API error")


async def get_catalog_products(client: httpx.AsyncClient, product_ids: Iterable[int]) -> List[CatalogProduct]:
    ids = list(product_ids)
    params = {
        "include": "custom_fields",
        "id:in": ",".join(str(i) for i in ids),
        "limit": min(max(len(ids), 1), MAX_PAGE_SIZE),
    }
    r = await client.get("/v3/catalog/products", params=params)
    _raise_for_upstream(r, "Catalog API error")
    return _parse(_catalog_page, _json(r, "Catalog API error"), "Catalog API error").data


async def create_storefront_token(
    client: httpx.AsyncClient,
    channel_id: int,
    origins: List[str],
    days: int = 30,
) -> StorefrontToken:
    """Mint a storefront API token locked to one channel and its CORS origins."""
    expires_at = int(time.time()) + days * 24 * 60 * 60
    r = await client.post(
        "/v3/storefront/api-token",
        json={
            "allowed_cors_origins": origins,
            "channel_ids": [channel_id],
            "expires_at": expires_at,
        },
    )
    _raise_for_upstream(r, "Storefront token API error")
    return _parse(_storefront_token, _data(r, "Storefront token API error"), "Storefront token API error")


async def list_channels(client: httpx.AsyncClient) -> List[Channel]:
    r = await client.get("/v3/channels")
    _raise_for_upstream(r, "Channels API error")
    return _parse(_channels, _data(r, "Channels API error"), "Channels API error")
