from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator, model_validator
from typing import Any, ClassVar
import json
from pathlib import Path
import os


class Settings(BaseSettings):
    API_V1_STR: str = "/api/v1"

    # Used to sign quote acceptance links (provide a fallback for local development)
    SECRET_KEY: str = "fallback_secret_for_dev_only"

    # Database URL
    # Use an absolute path so running the app from different directories
    # (e.g., repo root or backend/) always resolves the same DB file.
    BASE_DIR: ClassVar[Path] = Path(__file__).resolve().parents[2]
    SQLALCHEMY_DATABASE_URL: str = f"sqlite:///{BASE_DIR / 'hire.db'}"

    # CORS origins
    CORS_ORIGINS: list[str] = ["http://localhost:3000"]
    CORS_ALLOW_ALL: bool = False

    # Public base URL of this API, used when building quote acceptance links
    PUBLIC_BASE_URL: str = "http://localhost:8000"

    # Shared admin password for the back-office endpoints. Empty disables them.
    ADMIN_PASSWORD: str = ""

    # Currency used for every estimate (whole pounds)
    DEFAULT_CURRENCY: str = "GBP"

    # Optional JSON file overriding the built-in price catalog
    PRICING_CATALOG_PATH: str = ""

    # Where the inquiry wizard posts completed submissions
    INQUIRY_ENDPOINT_URL: str = "http://localhost:8000/api/v1/inquiries"
    INQUIRY_SUBMIT_TIMEOUT: float = 10.0

    # SMTP email settings
    SMTP_HOST: str = "localhost"
    SMTP_PORT: int = 25
    SMTP_USERNAME: str = ""
    SMTP_PASSWORD: str = ""
    SMTP_FROM: str = "no-reply@localhost"

    # Inbox that receives new inquiry notifications
    CONTACT_EMAIL: str = ""

    LOG_LEVEL: str = "INFO"
    ENABLE_CONSOLE_TRACING: bool = False

    model_config = SettingsConfigDict(
        extra="ignore",
        case_sensitive=True,
    )

    @field_validator("CORS_ORIGINS", mode="before")
    def split_origins(cls, v: Any) -> list[str]:
        """Parse comma-separated or JSON list of origins from environment."""
        if isinstance(v, str):
            try:
                parsed = json.loads(v)
                if isinstance(parsed, list):
                    return parsed
            except json.JSONDecodeError:
                pass
            return [s.strip() for s in v.split(",") if s.strip()]
        return v

    @field_validator(
        "ADMIN_PASSWORD",
        "CONTACT_EMAIL",
        "PUBLIC_BASE_URL",
        "PRICING_CATALOG_PATH",
        mode="before",
    )
    def strip_whitespace(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator("DEFAULT_CURRENCY", mode="before")
    def upper_currency(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @model_validator(mode="after")
    def allow_all_if_requested(cls, values: "Settings") -> "Settings":
        if values.CORS_ALLOW_ALL:
            values.CORS_ORIGINS = ["*"]
        return values


def load_settings() -> "Settings":
    return Settings(_env_file=os.getenv("ENV_FILE", str(Path(__file__).resolve().parents[3] / ".env")))


settings = load_settings()


def _public_base_url() -> str:
    env_url = os.getenv("PUBLIC_BASE_URL", "").strip()
    if env_url:
        return env_url.rstrip("/")
    return (settings.PUBLIC_BASE_URL or "http://localhost:8000").rstrip("/")


PUBLIC_BASE_URL = _public_base_url()
