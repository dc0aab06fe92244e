from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_MAX_BODY_BYTES = 5 * 1024 * 1024
FLIGHT_MAX_BODY_BYTES = 10 * 1024 * 1024


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore", populate_by_name=True)

    gateway_base_url: str = Field(default="http://localhost:8000/api/v1", alias="LARIAN_BASE")
    gateway_email: str | None = Field(default=None, alias="LARIAN_EMAIL")
    gateway_password: str | None = Field(default=None, alias="LARIAN_PASSWORD")

    login_timeout_ms: int = Field(default=30000, alias="LARIAN_LOGIN_TIMEOUT_MS")
    reserve_timeout_ms: int = Field(default=240000, alias="LARIAN_RESERVE_TIMEOUT_MS")
    issue_timeout_ms: int = Field(default=120000, alias="LARIAN_ISSUE_TIMEOUT_MS")
    initiate_timeout_ms: int = Field(default=10000, alias="LARIAN_INITIATE_TIMEOUT_MS")

    fallback_identifier: str | None = Field(default=None, alias="LARIAN_MOCK_IDENTIFICACAO")
    force_mock: bool = Field(default=False, alias="RESERVAR_FORCE_MOCK")

    offer_ttl_seconds: int = Field(default=3600, alias="OFERTA_TTL_SECONDS")
    max_body_bytes: int = Field(default=DEFAULT_MAX_BODY_BYTES, alias="MAX_BODY_BYTES")
    flight_max_body_bytes: int = Field(default=FLIGHT_MAX_BODY_BYTES, alias="FLIGHT_MAX_BODY_BYTES")

    breaker_fail_max: int = Field(default=5, alias="GATEWAY_BREAKER_FAIL_MAX")
    breaker_reset_timeout: int = Field(default=60, alias="GATEWAY_BREAKER_RESET_TIMEOUT")

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
