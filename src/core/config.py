"""Core configuration.

Why here:
- Centralizes invocation inputs (pydantic-settings) without polluting the CLI.
- Lets adapters (HTTP clients, reporter) read config consistently.

GitHub Actions exposes each `with:` input as an `INPUT_<NAME>` environment
variable, so the settings prefix is `INPUT_`: `secret_id` is read from
`INPUT_SECRET_ID`, `paths` from `INPUT_PATHS` and so on.
"""

from __future__ import annotations

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """Central application configuration.

    Built once per invocation and passed explicitly to every component; there
    is no module-level instance.
    """

    model_config = SettingsConfigDict(
        env_prefix="INPUT_",
        extra="ignore",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    secret_id: SecretStr | None = Field(
        default=None,
        description="Tencent Cloud API SecretId.",
    )
    secret_key: SecretStr | None = Field(
        default=None,
        description="Tencent Cloud API SecretKey.",
    )
    action: str = Field(
        default="purgeUrls",
        description="One of purgePath, purgeUrls, pushUrls.",
    )
    paths: str = Field(
        default="",
        description="Targets, one group per line; a leading zone id targets EdgeOne.",
    )

    region: str = Field(
        default="",
        description="API region (CDN and EdgeOne are global; empty by default).",
    )
    cdn_endpoint: str = Field(
        default="cdn.tencentcloudapi.com",
        min_length=1,
        description="Host of the CDN API.",
    )
    teo_endpoint: str = Field(
        default="teo.tencentcloudapi.com",
        min_length=1,
        description="Host of the EdgeOne API.",
    )
    http_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout per request (seconds).",
    )
    user_agent: str = Field(
        default="cdn-refresh/0.1",
        min_length=1,
        description="User-Agent sent to the cloud APIs.",
    )

    def has_credentials(self) -> bool:
        return bool(
            self.secret_id
            and self.secret_id.get_secret_value()
            and self.secret_key
            and self.secret_key.get_secret_value()
        )
