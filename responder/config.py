"""Process configuration, loaded once at startup and never mutated."""

from __future__ import annotations

import os
from collections.abc import Mapping

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator


class OAuthCredentials(BaseModel):
    """Three-legged OAuth1 credentials for the write API."""

    model_config = ConfigDict(frozen=True)

    consumer_key: str = Field(min_length=1)
    consumer_secret: SecretStr
    access_token: str = Field(min_length=1)
    access_token_secret: SecretStr


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True)

    consumer_key: str = Field(min_length=1)
    consumer_secret: SecretStr
    access_token: str = Field(min_length=1)
    access_token_secret: SecretStr
    twitter_base_url: str = "https://api.twitter.com/1.1"
    joke_api_url: str = "https://icanhazdadjoke.com/"
    webhook_provider: str = Field(default="twitter", pattern=r"^[A-Za-z0-9_-]+$")
    port: int = Field(default=8080, ge=1, le=65535)
    http_timeout: float = Field(default=15.0, gt=0)
    log_level: str = "INFO"

    @field_validator("consumer_secret", "access_token_secret")
    @classmethod
    def secret_not_empty(cls, value: SecretStr) -> SecretStr:
        if not value.get_secret_value():
            raise ValueError("secret must not be empty")
        return value

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        env_file: str | None = None,
    ) -> Settings:
        """Build settings from environment variables.

        A ``.env`` file (``env_file`` or the one in the working directory) is
        loaded first when reading from ``os.environ``; variables already set
        in the process environment win.
        """
        if environ is None:
            load_dotenv(env_file or find_dotenv(usecwd=True))
            environ = os.environ

        values: dict[str, object] = {
            "consumer_key": environ.get("TWITTER_CONSUMER_KEY", ""),
            "consumer_secret": environ.get("TWITTER_CONSUMER_SECRET", ""),
            "access_token": environ.get("TWITTER_ACCESS_TOKEN", ""),
            "access_token_secret": environ.get("TWITTER_ACCESS_TOKEN_SECRET", ""),
        }
        optional = {
            "twitter_base_url": "TWITTER_BASE_URL",
            "joke_api_url": "DADJOKE_API_URL",
            "webhook_provider": "WEBHOOK_PROVIDER",
            "port": "PORT",
            "http_timeout": "HTTP_TIMEOUT_SECONDS",
            "log_level": "LOG_LEVEL",
        }
        for field_name, var in optional.items():
            if environ.get(var):
                values[field_name] = environ[var]
        return cls.model_validate(values)

    @property
    def crc_secret(self) -> bytes:
        """Shared secret keying the CRC handshake (the consumer secret)."""
        return self.consumer_secret.get_secret_value().encode()

    def oauth_credentials(self) -> OAuthCredentials:
        return OAuthCredentials(
            consumer_key=self.consumer_key,
            consumer_secret=self.consumer_secret,
            access_token=self.access_token,
            access_token_secret=self.access_token_secret,
        )
