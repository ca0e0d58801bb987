import os
import threading
from urllib.parse import urlparse

from dotenv import load_dotenv
from pydantic import BaseModel, Field


load_dotenv()

SUPPORTED_DATABASE_SCHEMES = {"postgresql+asyncpg", "sqlite+aiosqlite"}


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in {"1", "true", "yes", "on"}:
        return True
    if value in {"0", "false", "no", "off"}:
        return False
    raise ValueError(f"{name} must be a boolean value")


def _parse_int(name: str, default: int, *, minimum: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer") from None
    if value < minimum:
        raise ValueError(f"{name} must be at least {minimum}")
    return value


class Settings(BaseModel):
    app_name: str = Field(default="Catalog Back-Office")
    debug: bool = Field(default=False)
    database_url: str = Field(default="")
    db_pool_size: int = Field(default=5)
    db_max_overflow: int = Field(default=10)
    db_pool_recycle: int = Field(default=1800)
    db_pool_pre_ping: bool = Field(default=True)
    secret_key: str | None = Field(default=None)
    access_token_expire_minutes: int = Field(default=30)
    algorithm: str = Field(default="HS256")
    default_page_size: int = Field(default=20)
    max_page_size: int = Field(default=100)

    @classmethod
    def from_env(cls) -> "Settings":
        secret_key = os.getenv("SECRET_KEY", "").strip()
        if not secret_key:
            raise ValueError("SECRET_KEY environment variable must be set")

        database_url = os.getenv("DATABASE_URL", "").strip()
        if not database_url:
            raise ValueError("DATABASE_URL environment variable must be set")

        parsed_db = urlparse(database_url)
        if parsed_db.scheme not in SUPPORTED_DATABASE_SCHEMES:
            raise ValueError(
                "DATABASE_URL must start with 'postgresql+asyncpg://' or 'sqlite+aiosqlite://'"
            )
        if parsed_db.scheme == "postgresql+asyncpg" and not parsed_db.hostname:
            raise ValueError("DATABASE_URL must include hostname")

        fields = cls.model_fields
        db_pool_size = _parse_int("DB_POOL_SIZE", fields["db_pool_size"].default, minimum=1)
        db_max_overflow = _parse_int(
            "DB_MAX_OVERFLOW", fields["db_max_overflow"].default, minimum=0
        )
        db_pool_recycle = _parse_int(
            "DB_POOL_RECYCLE", fields["db_pool_recycle"].default, minimum=1
        )

        db_pool_pre_ping = _parse_bool(
            "DB_POOL_PRE_PING",
            os.getenv("DB_POOL_PRE_PING", str(fields["db_pool_pre_ping"].default)),
        )

        access_token_expire_minutes = _parse_int(
            "ACCESS_TOKEN_EXPIRE_MINUTES", fields["access_token_expire_minutes"].default, minimum=1
        )
        max_page_size = _parse_int("MAX_PAGE_SIZE", fields["max_page_size"].default, minimum=1)
        default_page_size = _parse_int(
            "DEFAULT_PAGE_SIZE", fields["default_page_size"].default, minimum=1
        )
        if default_page_size > max_page_size:
            raise ValueError("DEFAULT_PAGE_SIZE must not exceed MAX_PAGE_SIZE")

        return cls(
            app_name=os.getenv("APP_NAME", fields["app_name"].default),
            debug=os.getenv("DEBUG", "false").lower() == "true",
            database_url=database_url,
            secret_key=secret_key,
            access_token_expire_minutes=access_token_expire_minutes,
            algorithm=os.getenv("ALGORITHM", fields["algorithm"].default),
            db_pool_size=db_pool_size,
            db_max_overflow=db_max_overflow,
            db_pool_recycle=db_pool_recycle,
            db_pool_pre_ping=db_pool_pre_ping,
            default_page_size=default_page_size,
            max_page_size=max_page_size,
        )


# Settings are validated on first access, not at import time
_settings_instance: Settings | None = None
_settings_lock = threading.Lock()


def get_settings() -> Settings:
    """Get settings instance, creating it on first access.

    Uses double-checked locking so concurrent first accesses build a single
    instance.

    Raises:
        ValueError: If required environment variables are missing or invalid
    """
    global _settings_instance

    if _settings_instance is not None:
        return _settings_instance

    with _settings_lock:
        if _settings_instance is None:
            _settings_instance = Settings.from_env()

    return _settings_instance


def reset_settings() -> None:
    """Drop the cached settings so the next access re-reads the environment."""
    global _settings_instance
    with _settings_lock:
        _settings_instance = None


class _SettingsProxy:
    """Proxy to defer settings creation until first attribute access."""

    def __getattr__(self, name: str):
        return getattr(get_settings(), name)


settings = _SettingsProxy()  # type: ignore[assignment]
