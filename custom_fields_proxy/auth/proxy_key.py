# custom_fields_proxy/auth/proxy_key.py
import hmac
from typing import Optional

from fastapi import Depends, Header, Query

from custom_fields_proxy.core.config import Settings, get_settings
from custom_fields_proxy.core.errors import Unauthorized


def verify_proxy_key(
    key: Optional[str] = Query(None),
    x_proxy_key: Optional[str] = Header(None),
    settings: Settings = Depends(get_settings),
) -> None:
    """
    Optional shared-secret check.
    When PROXY_KEY is set the caller must send it as ?key=... or X-Proxy-Key.
    Runs as a route dependency, i.e. before any BigCommerce call is made.
    """
    if not settings.proxy_key:
        return

    provided = key or x_proxy_key
    if not provided or not hmac.compare_digest(provided.encode(), settings.proxy_key.encode()):
        raise Unauthorized()
