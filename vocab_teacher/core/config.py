from __future__ import annotations

import os
from functools import lru_cache
from typing import Annotated, Any, Literal

from pydantic import AnyUrl, Field, SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

API_KEY_PREFIX = "sk-"
API_KEY_MIN_LENGTH = 21

CsvList = Annotated[list[str], NoDecode]


def _parse_csv_list(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, list):
        return [str(v).strip() for v in value if str(v).strip()]
    if isinstance(value, str):
        raw = value.strip()
        if not raw:
            return []
        if raw.startswith("[") and raw.endswith("]"):
            try:
                import json  # local import to avoid unused in production paths

                parsed = json.loads(raw)
                if isinstance(parsed, list):
                    return [str(v).strip() for v in parsed if str(v).strip()]
            except ValueError:
                pass
        parts = [p.strip() for p in raw.split(",")]
        return [p for p in parts if p]
    return [str(value).strip()]


class BaseAppSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=os.getenv("ENV_FILE", ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_env: Literal["dev", "prod", "test"] = Field(default="dev", validation_alias="APP_ENV")
    app_name: str = Field(default="vocab-teacher", validation_alias="APP_NAME")
    api_prefix: str = Field(default="/api", validation_alias="API_PREFIX")

    host: str = Field(default="0.0.0.0", validation_alias="HOST")
    port: int = Field(default=8000, validation_alias="PORT")

    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    log_json: bool = Field(default=True, validation_alias="LOG_JSON")

    docs_enabled: bool = Field(default=True, validation_alias="DOCS_ENABLED")

    cors_allow_origins: CsvList = Field(default_factory=list, validation_alias="CORS_ALLOW_ORIGINS")
    cors_allow_methods: CsvList = Field(default_factory=lambda: ["GET", "POST", "OPTIONS"], validation_alias="CORS_ALLOW_METHODS")
    cors_allow_headers: CsvList = Field(
        default_factory=lambda: ["Content-Type", "Accept", "X-Request-ID"],
        validation_alias="CORS_ALLOW_HEADERS",
    )
    cors_allow_credentials: bool = Field(default=False, validation_alias="CORS_ALLOW_CREDENTIALS")

    enable_security_headers: bool = Field(default=True, validation_alias="ENABLE_SECURITY_HEADERS")
    trusted_proxy_headers: bool = Field(default=False, validation_alias="TRUSTED_PROXY_HEADERS")

    openai_api_key: SecretStr | None = Field(default=None, validation_alias="OPENAI_API_KEY")
    openai_base_url: AnyUrl = Field(default="https://api.openai.com/v1", validation_alias="OPENAI_BASE_URL")
    openai_model: str = Field(default="gpt-4o-mini", validation_alias="OPENAI_MODEL")
    openai_max_completion_tokens: int = Field(default=500, validation_alias="OPENAI_MAX_COMPLETION_TOKENS")
    openai_timeout_seconds: float = Field(default=30.0, validation_alias="OPENAI_TIMEOUT_SECONDS")

    default_age: int = Field(default=10, validation_alias="DEFAULT_AGE")

    @field_validator("cors_allow_origins", "cors_allow_methods", "cors_allow_headers", mode="before")
    @classmethod
    def _validate_csv_lists(cls, v: Any) -> list[str]:
        return _parse_csv_list(v)

    @field_validator("openai_api_key", mode="before")
    @classmethod
    def _blank_key_is_missing(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @model_validator(mode="after")
    def _validate_ranges(self) -> "BaseAppSettings":
        if self.openai_max_completion_tokens <= 0:
            raise ValueError("OPENAI_MAX_COMPLETION_TOKENS must be positive")
        if self.openai_timeout_seconds <= 0:
            raise ValueError("OPENAI_TIMEOUT_SECONDS must be positive")
        if self.default_age <= 0:
            raise ValueError("DEFAULT_AGE must be positive")
        return self

    def openai_api_key_plain(self) -> str | None:
        if self.openai_api_key is None:
            return None
        return self.openai_api_key.get_secret_value()

    def api_key_configured(self) -> bool:
        return bool(self.openai_api_key_plain())

    def api_key_valid_format(self) -> bool:
        key = self.openai_api_key_plain()
        return bool(key) and key.startswith(API_KEY_PREFIX) and len(key) >= API_KEY_MIN_LENGTH


class DevSettings(BaseAppSettings):
    docs_enabled: bool = Field(default=True, validation_alias="DOCS_ENABLED")
    log_json: bool = Field(default=False, validation_alias="LOG_JSON")


class ProdSettings(BaseAppSettings):
    docs_enabled: bool = Field(default=False, validation_alias="DOCS_ENABLED")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")


Settings = BaseAppSettings


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    env = (os.getenv("APP_ENV") or "dev").strip().lower()
    if env == "prod":
        return ProdSettings()
    return DevSettings()


class ClientSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=os.getenv("ENV_FILE", ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    api_base_url: AnyUrl = Field(default="http://localhost:8000", validation_alias="VOCAB_API_BASE_URL")
    api_prefix: str = Field(default="/api", validation_alias="API_PREFIX")
    api_timeout_seconds: float = Field(default=60.0, validation_alias="VOCAB_API_TIMEOUT_SECONDS")
    tts_command: str | None = Field(default=None, validation_alias="TTS_COMMAND")
    speech_rate: float = Field(default=0.8, validation_alias="SPEECH_RATE")
    log_level: str = Field(default="WARNING", validation_alias="LOG_LEVEL")
    log_json: bool = Field(default=False, validation_alias="LOG_JSON")

    @model_validator(mode="after")
    def _validate_ranges(self) -> "ClientSettings":
        if self.api_timeout_seconds <= 0:
            raise ValueError("VOCAB_API_TIMEOUT_SECONDS must be positive")
        if self.speech_rate <= 0:
            raise ValueError("SPEECH_RATE must be positive")
        return self
