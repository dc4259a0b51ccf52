"""Application settings — Pydantic-based configuration with YAML and env var support.

Configuration is loaded from (in order of precedence):
  1. YAML config file (if specified)
  2. Environment variables (PROWLSTREAM_ prefix) and `.env`
  3. Default values
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings


class ServerSettings(BaseModel):
    """HTTP server configuration."""

    host: str = Field(default="0.0.0.0", description="Server bind address")
    port: int = Field(default=8080, description="Server port")
    workers: int = Field(default=1, description="Number of worker processes")
    cors_origins: list[str] = Field(default=["*"], description="Allowed CORS origins")


class ProwlarrSettings(BaseModel):
    """Default Prowlarr connection used when a caller supplies no override."""

    url: str = Field(default="http://localhost:9696", description="Prowlarr base URL")
    api_key: str = Field(default="", description="Prowlarr API key")
    name: str = Field(default="Prowlarr", description="Display name attached to streams and errors")
    addon_id: str = Field(default="prowlarr", description="Instance identifier")
    default_timeout_ms: int = Field(default=15000, gt=0, description="Request timeout in milliseconds")


class ProxySettings(BaseModel):
    """Forward proxy used for outbound adapter requests.

    Rules have the form ``<host-pattern>:<true|false>`` and are evaluated in
    order; the last matching rule decides. ``*`` matches any host and
    ``*.example.com`` matches any subdomain of ``example.com``.
    """

    url: str | None = Field(default=None, description="Proxy URL, e.g. 'http://proxy:3128'")
    rules: list[str] = Field(default_factory=list, description="Per-host proxy rules")
    log_sensitive_info: bool = Field(default=False, description="Log request URLs without redaction")

    @field_validator("rules", mode="before")
    @classmethod
    def _parse_rules(cls, v: Any) -> list[str]:
        """Parse rules from a JSON list, a comma-separated string or a list."""
        if v is None:
            return []
        if isinstance(v, str):
            import json

            try:
                parsed = json.loads(v)
                if isinstance(parsed, list):
                    return [str(r).strip() for r in parsed if str(r).strip()]
            except (json.JSONDecodeError, TypeError):
                pass
            return [r.strip() for r in v.split(",") if r.strip()]
        return [s for r in v if (s := str(r).strip())]


class ObservabilitySettings(BaseModel):
    """Observability configuration."""

    log_level: str = Field(default="info", description="Log level: debug, info, warning, error")
    log_format: str = Field(default="json", description="Log format: json, console")


class Settings(BaseSettings):
    """Root application settings.

    Configuration is loaded from environment variables with the PROWLSTREAM_ prefix.
    Nested settings use double underscores: PROWLSTREAM_SERVER__PORT=9090

    Example:
        PROWLSTREAM_PROWLARR__URL=http://prowlarr:9696
        PROWLSTREAM_PROWLARR__API_KEY=0123456789abcdef
        PROWLSTREAM_PROXY__URL=http://proxy:3128
        PROWLSTREAM_PROXY__RULES='["*:false", "*.example.com:true"]'
    """

    model_config = {
        "env_prefix": "PROWLSTREAM_",
        "env_nested_delimiter": "__",
        "case_sensitive": False,
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }

    # Application metadata
    app_name: str = Field(default="prowlstream", description="Application name")
    debug: bool = Field(default=False, description="Debug mode")

    # Component settings
    server: ServerSettings = Field(default_factory=ServerSettings)
    prowlarr: ProwlarrSettings = Field(default_factory=ProwlarrSettings)
    proxy: ProxySettings = Field(default_factory=ProxySettings)
    observability: ObservabilitySettings = Field(default_factory=ObservabilitySettings)

    @classmethod
    def from_yaml(cls, path: str | Path) -> Settings:
        """Load settings from a YAML configuration file.

        Values from the YAML file are passed as explicit arguments and win
        over environment variables; anything the file omits is still read
        from the environment.

        Args:
            path: Path to the YAML config file.

        Returns:
            Populated Settings instance.
        """
        import yaml  # type: ignore[import-untyped]

        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_path) as f:
            data = yaml.safe_load(f) or {}

        return cls(**data)
