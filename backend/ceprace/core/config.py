from __future__ import annotations

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


BRASILAPI_URL = "https://brasilapi.com.br/api/cep/v1/{postal_code}"
VIACEP_URL = "https://viacep.com.br/ws/{postal_code}/json/"


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    debug: bool = Field(False, alias="CEPRACE_DEBUG")
    log_level: str = Field("WARNING", alias="CEPRACE_LOG_LEVEL")

    per_call_timeout: float = Field(1.0, alias="CEPRACE_PER_CALL_TIMEOUT")
    overall_timeout: float = Field(2.0, alias="CEPRACE_OVERALL_TIMEOUT")

    brasilapi_url: str = Field(BRASILAPI_URL, alias="CEPRACE_BRASILAPI_URL")
    viacep_url: str = Field(VIACEP_URL, alias="CEPRACE_VIACEP_URL")
    user_agent: str = Field("ceprace", alias="CEPRACE_USER_AGENT")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        populate_by_name=True,
    )

    @field_validator("per_call_timeout", "overall_timeout")
    def _require_positive_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("timeout must be greater than zero")
        return value

    @field_validator("log_level", mode="before")
    def _normalize_log_level(cls, value: str) -> str:
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @field_validator("brasilapi_url", "viacep_url", mode="before")
    def _strip_url(cls, value: str) -> str:
        if isinstance(value, str):
            return value.strip()
        return value


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached application settings."""

    return Settings()  # type: ignore[call-arg]
