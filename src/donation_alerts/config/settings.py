"""Application settings loaded from environment variables and config files.

Configuration is loaded from (highest priority first):
1. Environment variables (prefix: ``DONATIONS_``, nested via ``__``)
2. YAML config file (``DONATIONS_CONFIG_PATH`` env var or :meth:`AppConfig.from_yaml`)
3. Defaults defined here

Stripe credentials additionally honour the conventional ``STRIPE_SECRET_KEY``
and ``STRIPE_WEBHOOK_SECRET`` variables.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Self

import yaml
from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# ---------------------------------------------------------------------------
# Sub-config models
# ---------------------------------------------------------------------------


class ServerConfig(BaseSettings):
    """HTTP / WebSocket server settings."""

    model_config = SettingsConfigDict(
        env_prefix="DONATIONS_SERVER__",
        case_sensitive=False,
    )

    host: str = "0.0.0.0"  # noqa: S104
    port: int = 3001
    static_dir: str = Field(
        default="",
        description="Directory with overlay assets (alert.html) mounted at /",
    )
    subscriber_buffer: int = Field(
        default=0,
        ge=0,
        description="Per-subscriber queue size; 0 means unbounded",
    )


class StripeConfig(BaseSettings):
    """Stripe credentials and webhook verification settings."""

    model_config = SettingsConfigDict(
        env_prefix="STRIPE_",
        case_sensitive=False,
    )

    secret_key: str = Field(
        default="",
        description="Stripe API key; webhook verification only needs the signing secret",
    )
    webhook_secret: str = ""
    tolerance: int = Field(
        default=300,
        ge=0,
        description="Maximum age of a signed webhook timestamp in seconds",
    )


class MetricsConfig(BaseSettings):
    """Prometheus metrics settings."""

    model_config = SettingsConfigDict(
        env_prefix="DONATIONS_METRICS__",
        case_sensitive=False,
    )

    enabled: bool = True


# ---------------------------------------------------------------------------
# Top-level config
# ---------------------------------------------------------------------------


def _load_yaml(path: str | Path) -> dict[str, Any]:
    """Load a YAML configuration file and return its contents as a dict.

    Returns an empty dict if the file doesn't exist or is empty.
    """
    p = Path(path)
    if not p.exists():
        return {}
    text = p.read_text(encoding="utf-8")
    data = yaml.safe_load(text)
    return data if isinstance(data, dict) else {}


class AppConfig(BaseSettings):
    """Top-level application configuration.

    Loads settings from environment variables (``DONATIONS_`` prefix),
    an optional YAML file, and built-in defaults.
    """

    model_config = SettingsConfigDict(
        env_prefix="DONATIONS_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    debug: bool = False
    version: str = "0.1.0"
    config_path: str = ""

    server: ServerConfig = Field(default_factory=ServerConfig)
    stripe: StripeConfig = Field(default_factory=StripeConfig)
    metrics: MetricsConfig = Field(default_factory=MetricsConfig)

    @model_validator(mode="before")
    @classmethod
    def _merge_yaml(cls, values: dict[str, Any]) -> dict[str, Any]:
        """Merge YAML config file contents under the env var overrides."""
        config_path = values.get("config_path", "")
        if not config_path:
            return values
        yaml_data = _load_yaml(config_path)
        # YAML values serve as defaults; env vars (already in *values*) win.
        for key, val in yaml_data.items():
            if key not in values or values[key] is None:
                values[key] = val
            elif isinstance(val, dict) and isinstance(values.get(key), dict):
                merged = {**val, **values[key]}
                values[key] = merged
        return values

    @classmethod
    def from_yaml(cls, path: str | Path) -> Self:
        """Construct ``AppConfig`` loading defaults from a YAML file.

        Environment variables still override YAML values.
        """
        return cls(config_path=str(path))
