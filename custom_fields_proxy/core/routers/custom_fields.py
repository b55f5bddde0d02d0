# custom_fields_proxy/core/routers/custom_fields.py
import logging
import re
from typing import Dict, Iterable, List, Optional, Tuple

import httpx
from fastapi import APIRouter, Depends, Response

from custom_fields_proxy.auth.proxy_key import verify_proxy_key
from custom_fields_proxy.core.config import Settings, get_settings
from custom_fields_proxy.core.errors import BadRequest, InternalError, ProxyError
from custom_fields_proxy.integrations.bigcommerce.bigcommerce_client import (
    get_catalog_products,
    get_http_client,
    get_order_products,
)
from custom_fields_proxy.integrations.bigcommerce.models import (
    CatalogProduct,
    CustomField,
    OrderProduct,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["custom-fields"])

# small client-side cache hint, data is bound to an order details page
CACHE_CONTROL = "private, max-age=60"

LEADING_INT = re.compile(r"[+-]?[0-9]+")


def parse_id_list(raw: Optional[str]) -> List[int]:
    """
    '88, 426,abc,4.5,88' -> [88, 426, 4]

    Each token yields its leading ASCII integer (so '4.5' -> 4, '1_000' -> 1);
    tokens without one are dropped. Duplicates collapse, first-seen order is kept.
    """
    seen: Dict[int, None] = {}
    for token in (raw or "").split(","):
        m = LEADING_INT.match(token.strip())
        if m:
            seen.setdefault(int(m.group()), None)
    return list(seen)


def parse_order_id(raw: Optional[str]) -> Optional[int]:
    ids = parse_id_list(raw)
    # 0 means "no order"
    return ids[0] if ids and ids[0] else None


def map_line_items(
    order_products: Iterable[OrderProduct], line_ids: Iterable[int]
) -> Tuple[Dict[int, int], List[int]]:
    """Map requested order_product_id -> product_id; also return the distinct product ids."""
    wanted = set(line_ids)
    line_to_product: Dict[int, int] = {}
    product_ids: Dict[int, None] = {}
    for op in order_products:
        if op.id in wanted and op.product_id:
            line_to_product[op.id] = op.product_id
            product_ids.setdefault(op.product_id, None)
    return line_to_product, list(product_ids)


def filter_custom_fields(product: CatalogProduct, allowed: Iterable[str]) -> List[CustomField]:
    """Lowercase names, value falls back to text then '', keep only allow-listed names."""
    allowed = frozenset(allowed)
    fields = []
    for f in product.custom_fields:
        if not f.name:
            continue
        name = f.name.lower()
        if name not in allowed:
            continue
        value = f.value if f.value is not None else (f.text if f.text is not None else "")
        fields.append(CustomField(name=name, value=value))
    return fields


def empty_result() -> dict:
    return {"customFieldsByProduct": {}, "customFieldsByLineItem": {}}


@router.get("/proxy-custom-fields", dependencies=[Depends(verify_proxy_key)])
async def proxy_custom_fields(
    response: Response,
    order_id: Optional[str] = None,
    line_ids: Optional[str] = None,
    ids: Optional[str] = None,
    settings: Settings = Depends(get_settings),
    client: httpx.AsyncClient = Depends(get_http_client),
):
    """
    GET /proxy-custom-fields?order_id=143&line_ids=88,426
        maps order_product_id(s) to product_id(s), then returns selected custom fields

    Fallback:
    GET /proxy-custom-fields?ids=5229,1234
        product_id(s) supplied directly

    Response:
    {
      "customFieldsByProduct":  {"<productId>": [{"name", "value"}, ...]},
      "customFieldsByLineItem": {"<order_product_id>": [{"name", "value"}, ...]}  # empty unless order_id used
    }
    """
    try:
        oid = parse_order_id(order_id)
        lines = parse_id_list(line_ids)
        line_to_product: Dict[int, int] = {}

        if oid and lines:
            order_products = await get_order_products(client, oid)
            line_to_product, product_ids = map_line_items(order_products, lines)
            if not product_ids:
                logger.info(f"Order {oid}: none of line items {lines} resolved to a product")
                return empty_result()
        else:
            product_ids = parse_id_list(ids)
            if not product_ids:
                raise BadRequest()

        products = await get_catalog_products(client, product_ids)

        allowed = settings.allowed_fields
        by_product = {
            str(p.id): [f.model_dump() for f in filter_custom_fields(p, allowed)]
            for p in products
        }
        by_line_item = {
            str(line_id): list(by_product.get(str(pid), []))
            for line_id, pid in line_to_product.items()
        }

        response.headers["Cache-Control"] = CACHE_CONTROL
        return {
            "customFieldsByProduct": by_product,
            "customFieldsByLineItem": by_line_item,
        }

    except ProxyError:
        raise
    except Exception as e:
        logger.exception(f"Proxy error: {e}")
        raise InternalError(detail=str(e))
