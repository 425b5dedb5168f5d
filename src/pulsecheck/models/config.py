"""Harness settings for pulsecheck.

Values come from (highest precedence first) an optional pulsecheck.yaml,
environment variables, a ``.env`` file, and the defaults below. Variable
names match the ones the scheduled CI job exports.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import (
    AnyHttpUrl,
    BaseModel,
    Field,
    TypeAdapter,
    ValidationError,
    ValidationInfo,
    field_validator,
)
from pydantic_settings import BaseSettings, SettingsConfigDict

from pulsecheck.errors import ConfigError

CONFIG_FILENAME = "pulsecheck.yaml"

_HTTP_URL = TypeAdapter(AnyHttpUrl)


class PerformanceTarget(BaseModel):
    """Latency ceiling for one strategy; inclusive."""

    model_config = {"extra": "forbid"}

    strategy: str
    expected_ms: int = Field(gt=0)


DEFAULT_SWEEP_STRATEGIES: list[str] = ["rag_cache", "rag_hybrid", "web_search_llm", "combined"]

DEFAULT_PERFORMANCE_TARGETS: list[PerformanceTarget] = [
    PerformanceTarget(strategy="query_cache", expected_ms=500),
    PerformanceTarget(strategy="rag_cache", expected_ms=1000),
    PerformanceTarget(strategy="rag_vector", expected_ms=3000),
]


class HarnessSettings(BaseSettings):
    """Resolved configuration consumed by the orchestrator and its probes.

    Timeouts are in milliseconds.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Search API
    pulse_api_base_url: str
    api_timeout: int = Field(default=30000, gt=0)
    health_timeout: int = Field(default=5000, gt=0)
    performance_timeout: int = Field(default=30000, gt=0)

    # Fixture store
    supabase_url: str | None = None
    supabase_service_role_key: str | None = None
    fixture_table: str = "query_cache"
    cache_lookup_timeout: int = Field(default=5000, gt=0)

    # Defaults for requests that have no fixture to replay
    test_area: str = "tampa-bay"
    test_region: str = "FL"
    test_country: str = "US"
    test_timeline: str = "today"
    default_query: str = "pizza deals today"
    sweep_query: str = "restaurants near me"
    performance_query: str = "test performance"

    sweep_strategies: list[str] = Field(default_factory=lambda: list(DEFAULT_SWEEP_STRATEGIES))
    performance_targets: list[PerformanceTarget] = Field(
        default_factory=lambda: [t.model_copy() for t in DEFAULT_PERFORMANCE_TARGETS]
    )

    # Alerting
    slack_webhook_url: str | None = None
    discord_webhook_url: str | None = None
    enable_slack_notifications: bool = False
    enable_discord_notifications: bool = False

    log_level: str = "INFO"

    @field_validator(
        "pulse_api_base_url", "supabase_url", "slack_webhook_url", "discord_webhook_url",
        mode="before",
    )
    @classmethod
    def _http_url(cls, value: Any, info: ValidationInfo) -> Any:
        """Reject anything that is not an absolute http(s) URL; blank optional URLs are unset."""
        if value is None:
            return None
        text = str(value).strip()
        if not text and info.field_name != "pulse_api_base_url":
            return None
        try:
            _HTTP_URL.validate_python(text)
        except ValidationError as exc:
            reason = exc.errors()[0]["msg"]
            raise ValueError(f"not a valid http(s) URL: {text!r} ({reason})") from None
        return text


def find_project_root(start: Path | None = None) -> Path:
    """Walk up from start (default: cwd) looking for pulsecheck.yaml.

    Returns the directory containing it, or cwd if none is found.
    """
    current = (start or Path.cwd()).resolve()
    if current.is_file():
        current = current.parent
    while current != current.parent:
        if (current / CONFIG_FILENAME).exists():
            return current
        current = current.parent
    return Path.cwd()


def _read_yaml(config_path: Path) -> dict[str, Any]:
    import yaml

    try:
        raw = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigError(f"{config_path}: invalid YAML: {exc}") from exc
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigError(f"{config_path}: expected a mapping at top level")
    return raw


def load_settings(config_path: Path | None = None) -> HarnessSettings:
    """Load and validate HarnessSettings.

    Args:
        config_path: Explicit YAML file. When None, pulsecheck.yaml in the
            project root is used if it exists.

    Raises:
        ConfigError: If the YAML file is unreadable or validation fails.
    """
    if config_path is None:
        candidate = find_project_root() / CONFIG_FILENAME
        config_path = candidate if candidate.exists() else None
    elif not config_path.exists():
        raise ConfigError(f"Config file not found: {config_path}")

    overrides = _read_yaml(config_path) if config_path is not None else {}

    try:
        return HarnessSettings(**overrides)
    except ValidationError as exc:
        errors = [
            f"{'.'.join(str(p) for p in err['loc']) or '<root>'}: {err['msg']}"
            for err in exc.errors()
        ]
        raise ConfigError("Invalid pulsecheck settings", errors=errors) from exc
