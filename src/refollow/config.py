from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Annotated, List

from dotenv import load_dotenv
from pydantic import Field
from pydantic import ValidationError as SettingsValidationError
from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from refollow.errors import StartupError
from refollow.logging import resolve_level


PROJECT_ROOT = Path(__file__).resolve().parents[2]
ENV_PATH = PROJECT_ROOT / ".env"


def load_environment() -> None:
    """Load environment variables from the project .env file if it exists."""
    load_dotenv(dotenv_path=ENV_PATH, override=False)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(extra="ignore")

    neynar_api_key: str = Field(..., min_length=1)
    neynar_base_url: str = "https://api.neynar.com"
    upstream_timeout_seconds: float = Field(30.0, gt=0)
    page_size: int = Field(100, ge=1, le=100)
    max_pages: int = Field(3, ge=1)
    cache_ttl_seconds: int = Field(300, ge=1)
    required_creators: Annotated[List[str], NoDecode] = Field(default_factory=list)
    creator_gate_fail_open: bool = True
    environment: str = "development"
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = Field(8787, ge=1, le=65535)

    @field_validator("neynar_base_url")
    def strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("log_level")
    def known_log_level(cls, value: str) -> str:
        resolve_level(value)
        return value.strip().upper()

    @field_validator("required_creators", mode="before")
    def split_handles(cls, value):
        if isinstance(value, str):
            value = value.split(",")
        return [handle.strip().lstrip("@") for handle in value if handle and handle.strip()]

    @property
    def cache_ttl_ms(self) -> int:
        return self.cache_ttl_seconds * 1000

    @property
    def is_production(self) -> bool:
        return self.environment.strip().lower() == "production"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    load_environment()
    try:
        return Settings()  # type: ignore[call-arg]
    except SettingsValidationError as exc:
        missing = [
            str(error["loc"][0]).upper()
            for error in exc.errors()
            if error.get("loc")
        ]
        raise StartupError(f"Invalid or missing configuration: {', '.join(missing) or exc}") from exc


__all__ = ["Settings", "get_settings", "load_environment", "PROJECT_ROOT"]
