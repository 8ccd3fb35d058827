from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator
from typing import Any, ClassVar, Optional
from pathlib import Path
import os


class Settings(BaseSettings):
    # Database URL
    # Use an absolute path so running from different directories always
    # resolves the same DB file.
    BASE_DIR: ClassVar[Path] = Path(__file__).resolve().parents[2]
    SQLALCHEMY_DATABASE_URL: str = f"sqlite:///{BASE_DIR / 'sluggable.db'}"

    LOG_LEVEL: str = "INFO"

    # Process-wide slug defaults. Every key can be overridden per field in a
    # model's ``__sluggable__`` declaration.
    # Keep list-like values as plain strings to avoid JSON-only decoding of
    # lists in BaseSettings; default_slug_config() splits them.
    SLUGGABLE_SOURCE: str = ""
    SLUGGABLE_SEPARATOR: str = "-"
    SLUGGABLE_MAX_LENGTH: Optional[int] = None
    SLUGGABLE_UNIQUE: bool = True
    SLUGGABLE_ON_UPDATE: bool = False
    SLUGGABLE_RESERVED: str = ""

    @field_validator("SLUGGABLE_MAX_LENGTH", mode="before")
    def empty_max_length(cls, v: Any) -> Any:
        """Treat an empty env value as "no limit"."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator(
        "SLUGGABLE_SOURCE",
        "SLUGGABLE_RESERVED",
        "LOG_LEVEL",
        mode="before",
    )
    def strip_whitespace(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip()
        return v

    model_config = SettingsConfigDict(
        extra="ignore",
        env_file=os.getenv("ENV_FILE", str(BASE_DIR / ".env")),
        case_sensitive=True,
    )


def load_settings() -> "Settings":
    return Settings(_env_file=os.getenv("ENV_FILE", str(Path(__file__).resolve().parents[2] / ".env")))


settings = load_settings()


def _split(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def default_slug_config(cfg: Optional[Settings] = None) -> dict[str, Any]:
    """Return the process-wide slug defaults as a plain mapping.

    ``SLUGGABLE_SOURCE`` and ``SLUGGABLE_RESERVED`` are comma-separated; an
    empty value means "use the record's string form" and "no reserved words"
    respectively.
    """
    cfg = cfg or settings
    source = _split(cfg.SLUGGABLE_SOURCE)
    reserved = _split(cfg.SLUGGABLE_RESERVED)
    return {
        "source": source or None,
        "separator": cfg.SLUGGABLE_SEPARATOR,
        "max_length": cfg.SLUGGABLE_MAX_LENGTH,
        "method": None,
        "unique": cfg.SLUGGABLE_UNIQUE,
        "on_update": cfg.SLUGGABLE_ON_UPDATE,
        "reserved": reserved or None,
    }
