"""
Shared pytest fixtures for the custom-fields proxy tests.

The BigCommerce API is replaced by FakeBigCommerce, served through an
httpx.MockTransport, so no test touches the network.
"""

import json
from typing import Callable, Dict, List, Optional, Tuple

import httpx
import pytest
from fastapi.testclient import TestClient

from custom_fields_proxy.app import create_app
from custom_fields_proxy.core.config import Settings, get_settings
from custom_fields_proxy.integrations.bigcommerce.bigcommerce_client import get_http_client, new_client

STORE_HASH = "abc123"
ADMIN_TOKEN = "admin-token"


class FakeBigCommerce:
    """In-memory stand-in for the two BigCommerce endpoints the proxy calls."""

    def __init__(self):
        self.order_products: Dict[int, List[dict]] = {}
        self.products: Dict[int, dict] = {}
        self.failures: Dict[str, Tuple[int, str]] = {}
        self.raw_bodies: Dict[str, str] = {}
        self.requests: List[httpx.Request] = []

    def add_product(self, product_id: int, custom_fields: Optional[list] = None, **extra) -> None:
        self.products[product_id] = {"id": product_id, "custom_fields": custom_fields or [], **extra}

    def fail(self, kind: str, status: int, body: str) -> None:
        """kind is 'orders' or 'catalog'."""
        self.failures[kind] = (status, body)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        prefix = f"/stores/{STORE_HASH}"
        assert path.startswith(prefix), path
        path = path[len(prefix):]

        if path.startswith("/v2/orders/") and path.endswith("/products"):
            kind = "orders"
        elif path == "/v3/catalog/products":
            kind = "catalog"
        else:
            return httpx.Response(404, text=f"no route for {path}")

        if kind in self.failures:
            status, body = self.failures[kind]
            return httpx.Response(status, text=body)
        if kind in self.raw_bodies:
            return httpx.Response(200, text=self.raw_bodies[kind],
                                  headers={"Content-Type": "application/json"})

        if kind == "orders":
            order_id = int(path.split("/")[3])
            if order_id not in self.order_products:
                return httpx.Response(404, text=json.dumps([{"status": 404, "message": "Order not found"}]))
            return httpx.Response(200, json=self.order_products[order_id])

        wanted = [int(i) for i in request.url.params.get("id:in", "").split(",") if i]
        data = [self.products[i] for i in wanted if i in self.products]
        return httpx.Response(200, json={"data": data, "meta": {}})

    @property
    def calls(self) -> List[str]:
        return [r.url.path for r in self.requests]


@pytest.fixture
def bigcommerce() -> FakeBigCommerce:
    return FakeBigCommerce()


def make_settings(**overrides) -> Settings:
    values = {
        "store_hash": STORE_HASH,
        "admin_api_token": ADMIN_TOKEN,
        "proxy_key": None,
        "allow_origin": "*",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def settings_factory() -> Callable[..., Settings]:
    return make_settings


@pytest.fixture
def make_client(bigcommerce) -> Callable[..., TestClient]:
    """Build a TestClient for an app configured with the given settings overrides."""

    def _make(**overrides) -> TestClient:
        settings = make_settings(**overrides)
        app = create_app(settings)

        async def _http_client():
            async with new_client(settings, transport=httpx.MockTransport(bigcommerce.handler)) as client:
                yield client

        app.dependency_overrides[get_settings] = lambda: settings
        app.dependency_overrides[get_http_client] = _http_client
        return TestClient(app)

    return _make


@pytest.fixture
def client(make_client) -> TestClient:
    return make_client()
