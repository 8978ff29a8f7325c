"""Runtime configuration for the storefront.

Values are read from ``STOREFRONT_*`` environment variables or a ``.env``
file. Store coordinates and delivery rates are operator-maintained; the
values here are the defaults used until the operator's records are loaded.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

MANILA_LAT = 14.5995
MANILA_LNG = 120.9842


class StorefrontSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="STOREFRONT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    env: str = "development"
    shop_name: str = "5J's Frozen"
    currency_code: str = "PHP"
    currency_symbol: str = "₱"

    store_lat: float | None = MANILA_LAT
    store_lng: float | None = MANILA_LNG
    delivery_rate_base: float = 50.0
    delivery_rate_per_km: float = 15.0

    messenger_page_id: str = "61584534464621"


@lru_cache
def get_settings() -> StorefrontSettings:
    """Return the process-wide settings, loaded once."""
    return StorefrontSettings()
