# custom_fields_proxy/integrations/bigcommerce/models.py
"""
Typed views of the BigCommerce payloads this service reads.

Upstream JSON is validated into these models before any field is touched, so
a schema change on the BigCommerce side surfaces as an UpstreamError instead of
a KeyError deep inside the handler.
"""
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, field_validator


class _Upstream(BaseModel):
    model_config = ConfigDict(extra="ignore")


class OrderProduct(_Upstream):
    """One line item of an order (Orders v2 /orders/{id}/products)."""

    id: int                              # order_product_id
    product_id: Optional[int] = None     # 0 / null for custom (non-catalog) items


class UpstreamCustomField(_Upstream):
    name: Optional[str] = None
    value: Optional[str] = None
    text: Optional[str] = None

    @field_validator("name", "value", "text", mode="before")
    @classmethod
    def _stringify(cls, v: Any) -> Any:
        # scalars print the way the storefront JS would; objects and arrays count as absent
        if isinstance(v, bool):
            return "true" if v else "false"
        if isinstance(v, float) and v.is_integer():
            return str(int(v))
        if isinstance(v, (int, float)):
            return str(v)
        if isinstance(v, (dict, list)):
            return None
        return v


class CatalogProduct(_Upstream):
    id: int
    custom_fields: List[UpstreamCustomField] = []

    @field_validator("custom_fields", mode="before")
    @classmethod
    def _list_or_empty(cls, v: Any) -> Any:
        if not isinstance(v, list):
            return []
        # entries that aren't objects carry no name, drop them early
        return [f for f in v if isinstance(f, dict)]


class CatalogProductPage(_Upstream):
    """Catalog v3 /catalog/products response envelope."""

    data: List[CatalogProduct] = []

    @field_validator("data", mode="before")
    @classmethod
    def _none_is_empty(cls, v: Any) -> Any:
        return [] if v is None else v


class CustomField(BaseModel):
    """A filtered, normalised custom field as returned to callers."""

    name: str
    value: str


class StorefrontToken(_Upstream):
    token: str


class Channel(_Upstream):
    id: int
    name: str
    type: Optional[str] = None
    platform: Optional[str] = None
    status: Optional[str] = None
