"""Environment configuration for the tl;dv MCP Server.

When you run the server, use the following environment variables to
configure it:

```bash
export TLDV_API_KEY="your-api-key"
export TLDV_MAX_RETRIES=3
export TLDV_EXIT_ON_FATAL=false
```

These are rendered to the AppConfig class and can be accessed like this:

```python
from tldv_mcp_server.config import load_config
cfg = load_config()
print(cfg.base_url)
```
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..schemas import DEFAULT_BASE_URL, TldvConfig


class StartupConfig(BaseSettings):
    """Process-level switches read before the rest of the configuration.

    Kept separate so that `exit_on_fatal` is still honoured when another
    setting fails validation.
    """

    exit_on_fatal: bool = Field(
        default=False,
        description="Exit with status 1 on a fatal startup error instead of returning",
    )

    # pydantic-settings v2 config
    model_config = SettingsConfigDict(
        env_prefix="TLDV_",
        case_sensitive=False,
        env_file=(".env",),  # will read if present
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,  # make settings immutable
    )


class AppConfig(StartupConfig):
    """Application configuration settings loaded from environment variables.

    All environment variables are prefixed with TLDV_ (e.g., TLDV_API_KEY).
    The API key is not validated here; the client rejects an empty key
    when it is constructed.
    """

    # ---- credentials / endpoint ----
    api_key: str = Field(
        default="",
        description="tl;dv API key sent as the x-api-key header",
    )
    base_url: str = Field(
        default=DEFAULT_BASE_URL,
        description="Base URL of the tl;dv public API",
    )

    # ---- network tuning ----
    max_retries: int = Field(
        default=3, ge=0, description="Maximum number of retries on transient failures"
    )
    retry_delay_ms: int = Field(
        default=1_000, ge=0, description="Initial backoff delay in milliseconds"
    )
    max_retry_delay_ms: int = Field(
        default=2_000, ge=0, description="Upper bound for the backoff delay"
    )
    validate_responses: bool = Field(
        default=False,
        description="Check successful payloads against the response models",
    )

    # ---- process behavior ----
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", description="Minimum level written to stderr"
    )
    # ---- validators ----
    @field_validator("api_key", "base_url", mode="before")
    @classmethod
    def _strip(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper(cls, v):
        return v.upper() if isinstance(v, str) else v

    # ---- derived conveniences (no mutation) ----
    def to_client_config(self) -> TldvConfig:
        """Build the API client configuration.

        Raises:
            ConfigurationError: If the API key is empty.
        """
        return TldvConfig.create(
            api_key=self.api_key,
            base_url=self.base_url,
            max_retries=self.max_retries,
            retry_delay_ms=self.retry_delay_ms,
            max_retry_delay_ms=self.max_retry_delay_ms,
            validate_responses=self.validate_responses,
        )


def load_config() -> AppConfig:
    """Load and validate application configuration from environment variables.

    Variables carry the TLDV_ prefix and fall back to the documented
    defaults when unset. A `.env` file in the working directory is read
    if present.
    """
    return AppConfig()


def load_startup_config() -> StartupConfig:
    """Load only the process-level switches (currently `exit_on_fatal`)."""
    return StartupConfig()
