from __future__ import annotations

import os
from decimal import Decimal
from functools import lru_cache

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class BaseAppSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    APP_NAME: str = "StayTrail Reports"
    ENV: str = "dev"
    DATABASE_URL: str | None = None

    # Invoice policy
    TAX_RATE: Decimal = Decimal("0.16")  # IVA, prices are stored tax-inclusive
    INVOICE_DUE_DAYS: int = 7

    # PDF output (US Letter in points)
    PDF_OUTPUT_DIR: str = "./storage/documents"
    PDF_PAGE_WIDTH_PT: int = 612
    PDF_PAGE_HEIGHT_PT: int = 792

    # Sharing goes through object storage; when disabled the file path is reported instead
    SHARE_ENABLED: bool = False
    S3_ENDPOINT: str | None = None
    S3_ACCESS_KEY: str | None = None
    S3_SECRET_KEY: str | None = None
    S3_BUCKET: str = "staytrail-documents"
    S3_REGION: str = "us-east-1"
    S3_PRESIGN_TTL: int = 3600

    # Sentinels shown when a related record is missing
    UNKNOWN_USER_LABEL: str = "Usuario Desconocido"
    UNKNOWN_ACCOMMODATION_LABEL: str = "Alojamiento Desconocido"
    NOT_SPECIFIED_LABEL: str = "No especificado"

    CORS_ALLOW_ORIGINS: list[str] = ["*"]
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "plain"

    @field_validator("TAX_RATE", mode="after")
    @classmethod
    def _check_tax_rate(cls, v: Decimal) -> Decimal:
        if v < 0 or v >= 1:
            raise ValueError("TAX_RATE must be a fraction in [0, 1)")
        return v

    @field_validator("INVOICE_DUE_DAYS", mode="after")
    @classmethod
    def _check_due_days(cls, v: int) -> int:
        if v < 0:
            raise ValueError("INVOICE_DUE_DAYS cannot be negative")
        return v

    @model_validator(mode="after")
    def _validate_required_fields(self) -> BaseAppSettings:
        # Convert Heroku's postgres:// URL to postgresql://
        if self.DATABASE_URL and self.DATABASE_URL.startswith("postgres://"):
            self.DATABASE_URL = self.DATABASE_URL.replace("postgres://", "postgresql://", 1)

        if self.ENV.lower() == "prod":
            missing = [name for name in ("DATABASE_URL",) if not getattr(self, name)]
            if missing:
                raise ValueError(f"Missing required production settings: {', '.join(missing)}")
            if self.SHARE_ENABLED and not (self.S3_ACCESS_KEY and self.S3_SECRET_KEY):
                raise ValueError("SHARE_ENABLED requires S3_ACCESS_KEY and S3_SECRET_KEY in production")
        return self


class DevSettings(BaseAppSettings):
    ENV: str = "dev"
    DATABASE_URL: str = "sqlite:///./storage/dev.db"


class TestSettings(BaseAppSettings):
    ENV: str = "test"
    DATABASE_URL: str = "sqlite:///:memory:"
    PDF_OUTPUT_DIR: str = "./storage/test-documents"


class ProdSettings(BaseAppSettings):
    ENV: str = "prod"
    CORS_ALLOW_ORIGINS: list[str] = [
        "https://admin.staytrail.app",
        "http://localhost:8081",  # Expo dev client
    ]
    LOG_FORMAT: str = "json"


_ENV_TO_SETTINGS: dict[str, type[BaseAppSettings]] = {
    "dev": DevSettings,
    "development": DevSettings,
    "test": TestSettings,
    "testing": TestSettings,
    "prod": ProdSettings,
    "production": ProdSettings,
}


@lru_cache
def get_settings() -> BaseAppSettings:
    env_name = os.getenv("APP_ENV") or os.getenv("ENV") or "dev"
    env = env_name.lower()
    settings_cls = _ENV_TO_SETTINGS.get(env, DevSettings)
    return settings_cls()


settings = get_settings()
