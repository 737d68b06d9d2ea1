from __future__ import annotations

from decimal import Decimal
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

IN_MEMORY_DATABASE_URL = "sqlite+pysqlite:///:memory:"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_prefix="DD_", extra="ignore")

    app_name: str = "Delivery Desk"
    env: str = "dev"
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    log_level: str = "INFO"

    database_url: str = IN_MEMORY_DATABASE_URL
    seed_demo_catalog_on_startup: bool = True

    # lista_a | lista_b | lista_c
    default_price_list: str = "lista_a"
    currency_decimal_places: int = Field(default=2, ge=0, le=6)
    clamp_discount: bool = False

    iva_rate: Decimal = Field(default=Decimal("0.21"), description="IVA rate applied to gross amounts")
    point_of_sale: int = Field(default=1, ge=1, le=9999)

    def model_post_init(self, __context) -> None:
        if self.env.lower() == "dev":
            return
        if self.database_url == IN_MEMORY_DATABASE_URL:
            raise ValueError("in-memory database is not allowed outside dev mode; set DD_DATABASE_URL")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
