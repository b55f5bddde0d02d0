# custom_fields_proxy/core/config.py
from functools import lru_cache
from typing import List, Optional, FrozenSet

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_ALLOWLIST = (
    "status,"
    "wms_available_inventory,"
    "expected_in_stock,"
    # optional fallbacks / legacy
    "current_inventory,"
    "current_inventory_cap24,"
    "imported"
)


def split_csv(raw: Optional[str]) -> List[str]:
    return [s.strip() for s in (raw or "").split(",") if s.strip()]


class Settings(BaseSettings):
    store_hash: Optional[str] = None           # e.g. "6n8c7qx3i9"
    admin_api_token: Optional[str] = None      # store-level Admin API token
    port: int = 8080
    allow_origin: str = "*"                    # comma-separated list, or "*" (dev only)
    proxy_key: Optional[str] = None            # optional shared secret
    custom_field_allowlist: str = DEFAULT_ALLOWLIST
    bigcommerce_api_base: str = "https://api.bigcommerce.com"
    upstream_timeout: float = 30.0
    log_level: str = "INFO"

    # create_storefront_token.py defaults
    storefront_channel_id: Optional[int] = None
    storefront_origins: str = ""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def cors_origins(self) -> List[str]:
        if self.allow_origin.strip() == "*":
            return ["*"]
        return split_csv(self.allow_origin)

    @property
    def allowed_fields(self) -> FrozenSet[str]:
        return frozenset(name.lower() for name in split_csv(self.custom_field_allowlist))

    @property
    def store_api_base(self) -> str:
        return f"{self.bigcommerce_api_base.rstrip('/')}/stores/{self.store_hash}"


@lru_cache
def get_settings() -> Settings:
    """Process-wide settings; FastAPI dependency (overridable in tests)."""
    return Settings()
