from decimal import Decimal
from typing import Any

from pydantic import Field, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings backed by Pydantic BaseSettings.
    Values are read from environment variables and the optional .env file.
    """

    # Runtime
    PROJECT_NAME: str = "ERP Order Core"
    VERSION: str = "0.1.0"
    ENVIRONMENT: str = Field("development", description="Deployment environment name")
    DEBUG: bool = Field(False, description="Enable debug behaviour")

    # Logging
    LOG_LEVEL: str = Field("INFO", description="Root log level")
    LOG_FORMAT: str = Field("colored", description="Console log format: colored, json or plain")
    LOG_FILE: str | None = Field(None, description="Optional file that receives JSON log records")

    # Commerce defaults
    DEFAULT_CURRENCY: str = Field("USD", description="ISO 4217 code assigned to new orders and customers")
    DEFAULT_TAX_RATE: Decimal = Field(Decimal("0"), description="Fallback tax rate (percent) for order calculations")
    DEFAULT_PAYMENT_TERMS: str = Field("NET30", description="Payment terms assigned to new customers")
    DEFAULT_CREDIT_LIMIT: Decimal = Field(Decimal("0"), description="Credit limit assigned to new customers")

    # Order validation
    LARGE_ORDER_THRESHOLD: Decimal = Field(
        Decimal("10000"), description="Order total above which the validator emits a warning"
    )

    # Catalog
    MAX_CATEGORY_DEPTH: int = Field(5, description="Category level from which children are no longer allowed")

    model_config = SettingsConfigDict(
        case_sensitive=True,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def __init__(self, **data: Any):
        super().__init__(**data)

    @field_validator("DEFAULT_CURRENCY")
    @classmethod
    def validate_currency(cls, v):
        if len(v) != 3 or not v.isalpha() or not v.isupper():
            raise ValueError("DEFAULT_CURRENCY must be a 3-letter upper-case ISO code")
        return v

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def normalize_log_level(cls, value):
        if isinstance(value, str):
            value = value.strip().upper()
        if value not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unsupported LOG_LEVEL: {value}")
        return value

    @field_validator("LOG_FORMAT")
    @classmethod
    def validate_log_format(cls, v):
        if v not in ("colored", "json", "plain"):
            raise ValueError("LOG_FORMAT must be one of: colored, json, plain")
        return v

    @field_validator("DEFAULT_TAX_RATE")
    @classmethod
    def validate_tax_rate(cls, v):
        if v < 0 or v > 100:
            raise ValueError("DEFAULT_TAX_RATE must be between 0 and 100")
        return v

    @field_validator("DEFAULT_PAYMENT_TERMS")
    @classmethod
    def validate_payment_terms(cls, v):
        terms = v.strip().upper()
        if not terms.startswith("NET") or not terms[3:].isdigit():
            raise ValueError("DEFAULT_PAYMENT_TERMS must look like NET30")
        return terms

    @field_validator("DEFAULT_CREDIT_LIMIT")
    @classmethod
    def validate_credit_limit(cls, v):
        if v < 0:
            raise ValueError("DEFAULT_CREDIT_LIMIT cannot be negative")
        return v

    @field_validator("MAX_CATEGORY_DEPTH")
    @classmethod
    def validate_category_depth(cls, v):
        if v < 1:
            raise ValueError("MAX_CATEGORY_DEPTH must be at least 1")
        return v

    @computed_field
    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"


_settings_instance: Settings | None = None


def get_settings() -> Settings:
    """
    Return the cached settings instance.
    Environment variables are only read the first time.
    """
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance


def reset_settings() -> None:
    """Drop the cached instance so the next call re-reads the environment."""
    global _settings_instance
    _settings_instance = None
