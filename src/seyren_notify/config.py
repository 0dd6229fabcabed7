from __future__ import annotations

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
        frozen=True,
    )

    base_url: str = Field(default="http://localhost:8080/seyren", alias="SEYREN_URL")

    slack_default_channel: str = Field(default="dev-ops", alias="SLACK_DEFAULT_CHANNEL")
    slack_username: str = Field(default="Seyren", alias="SLACK_USERNAME")
    slack_icon_emoji: str = Field(default=":seyren:", alias="SLACK_ICON_EMOJI")

    delivery_timeout_seconds: float = Field(default=10.0, alias="DELIVERY_TIMEOUT_SECONDS")

    smtp_host: str = Field(default="localhost", alias="SMTP_HOST")
    smtp_port: int = Field(default=25, alias="SMTP_PORT")
    smtp_from: str = Field(default="alert@seyren", alias="SMTP_FROM")
    smtp_username: str | None = Field(default=None, alias="SMTP_USERNAME")
    smtp_password: str | None = Field(default=None, alias="SMTP_PASSWORD")
    smtp_use_tls: bool = Field(default=False, alias="SMTP_USE_TLS")

    @model_validator(mode="after")
    def validate_endpoints(self) -> Settings:
        if not self.base_url.startswith(("http://", "https://")):
            raise ValueError("SEYREN_URL must be an http(s) URL")
        if not 0 < self.smtp_port < 65536:
            raise ValueError("SMTP_PORT must be between 1 and 65535")
        if self.delivery_timeout_seconds <= 0:
            raise ValueError("DELIVERY_TIMEOUT_SECONDS must be positive")
        return self

    @property
    def public_url(self) -> str:
        return self.base_url.rstrip("/")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
