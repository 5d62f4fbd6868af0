"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    odoo_url: str = "http://localhost:8069"
    odoo_db: str = "odoo_lab"
    odoo_login: str = "admin"
    default_partner_name: str = "Administrator"
    product_limit: int = 50
    order_line_limit: int = 200
    include_rental_fields: bool = True
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def normalize_base_url(raw: str) -> str:
    """Strip surrounding whitespace and trailing slashes from a server URL."""
    return raw.strip().rstrip("/")
