import logging
from typing import Optional

from dotenv import load_dotenv
load_dotenv()

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from custom_fields_proxy.core.config import Settings, get_settings
from custom_fields_proxy.core.errors import ProxyError, proxy_error_handler
from custom_fields_proxy.core.routers import custom_fields, health

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()

    # Basic env checks (non-fatal log)
    if not settings.store_hash:
        logger.warning("⚠️  STORE_HASH is not set")
    if not settings.admin_api_token:
        logger.warning("⚠️  ADMIN_API_TOKEN is not set")

    app = FastAPI(title="BigCommerce custom-fields proxy")

    # CORS (supports multiple origins via ALLOW_ORIGIN)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["Content-Type", "X-Requested-With", "X-Proxy-Key"],
        max_age=600,
    )

    app.add_exception_handler(ProxyError, proxy_error_handler)

    # -------------------------------
    # Router registration
    # -------------------------------
    app.include_router(health.router)
    app.include_router(custom_fields.router)

    for r in app.routes:
        logger.debug(f"ROUTE {getattr(r, 'path', '')} {getattr(r, 'methods', '')}")

    return app


app = create_app()
