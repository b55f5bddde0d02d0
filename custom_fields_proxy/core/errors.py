# custom_fields_proxy/core/errors.py
import logging
from typing import Optional

from fastapi import Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ProxyError(Exception):
    """Base error rendered to the caller as {"error": ..., "detail": ...}."""

    status_code = 500
    error = "Proxy failure"

    def __init__(self, error: Optional[str] = None, detail: Optional[str] = None,
                 status_code: Optional[int] = None):
        self.error = error or self.error
        self.detail = detail
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.error if detail is None else f"{self.error}: {detail}")

    def to_content(self) -> dict:
        content = {"error": self.error}
        if self.detail is not None:
            content["detail"] = self.detail
        return content


class Unauthorized(ProxyError):
    status_code = 401
    error = "Unauthorized: bad proxy key"


class BadRequest(ProxyError):
    status_code = 400
    error = "No ids provided"


class UpstreamError(ProxyError):
    """Non-success (or unparseable) response from the BigCommerce API."""

    status_code = 502
    error = "Upstream API error"


class InternalError(ProxyError):
    status_code = 500
    error = "Proxy failure"


async def proxy_error_handler(request: Request, exc: ProxyError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} -> {exc.status_code}: {exc}")
    else:
        logger.info(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.error}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_content())
