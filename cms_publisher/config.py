"""
Configuration management using YAML files and dataclasses.

This module defines all configuration dataclasses and provides loading
from YAML files with defaults. Configuration sections:
- CMSConfig: CMS API connection settings and credential sources
- MarkdownConfig: Markdown-to-HTML rendering settings
- LoggingConfig: Logging behavior
- AppConfig: Root configuration container

Credentials are resolved once at startup into an immutable CMSCredentials
value which is then handed to the CMS client.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
import os
from typing import Any, Mapping

import yaml

from .errors import ConfigError


@dataclass
class CMSConfig:
    """Configuration for the CMS REST API.

    Attributes:
        service_id: Inline service id (overrides env var)
        api_key: Inline API key (overrides env var)
        endpoint: Inline API endpoint name (overrides env var)
        service_id_env: Environment variable containing the service id
        api_key_env: Environment variable containing the API key
        endpoint_env: Environment variable containing the endpoint name
        host: CMS host; the service id is used as subdomain
        api_version: API version path segment
        api_key_header: Header carrying the API key on every request
        id_field: Content field holding the external article id
        timeout_seconds: Deadline for the whole publish batch
        trust_env: Whether to respect system proxy settings
    """

    service_id: str | None = None
    api_key: str | None = None
    endpoint: str | None = None
    service_id_env: str = "SERVICE_ID"
    api_key_env: str = "API_KEY"
    endpoint_env: str = "ENDPOINT"
    host: str = "microcms.io"
    api_version: str = "v1"
    api_key_header: str = "X-MICROCMS-API-KEY"
    id_field: str = "externalId"
    timeout_seconds: float = 10.0
    trust_env: bool = True


@dataclass
class MarkdownConfig:
    """Configuration for Markdown rendering.

    Attributes:
        plugins: mistune plugin names to enable
        escape: Whether raw HTML in the Markdown source is escaped (passed through by default)
        hard_wrap: Whether single newlines become <br>
    """

    plugins: list[str] = field(default_factory=lambda: ["table", "task_lists"])
    escape: bool = False
    hard_wrap: bool = False


@dataclass
class LoggingConfig:
    """Configuration for logging behavior.

    Attributes:
        level: Logging level ("DEBUG", "INFO", "WARNING", "ERROR")
        console: Whether to log to console
        file: Whether to log to file
        format: Log file format ("jsonl" or "plain")
        filename: Name of the log file
        dir: Directory for the log file (defaults to the working directory)
    """

    level: str = "INFO"
    console: bool = True
    file: bool = False
    format: str = "jsonl"
    filename: str = "publish.jsonl"
    dir: str | None = None


@dataclass
class AppConfig:
    """Root configuration container aggregating all config sections."""

    cms: CMSConfig = field(default_factory=CMSConfig)
    markdown: MarkdownConfig = field(default_factory=MarkdownConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


@dataclass(frozen=True)
class CMSCredentials:
    """Resolved CMS identity, immutable for the lifetime of a run."""

    service_id: str
    api_key: str
    endpoint: str


def load_config(path: str | None) -> AppConfig:
    """Load configuration from a YAML file with defaults."""
    if not path:
        return AppConfig()

    with open(path, "r", encoding="utf-8") as f:
        try:
            raw = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid config file {path}: {exc}") from exc

    if not isinstance(raw, dict):
        raise ConfigError(f"Config file must contain a mapping: {path}")
    return _merge_config(AppConfig(), raw)


def _merge_config(base: AppConfig, raw: dict[str, Any]) -> AppConfig:
    """Merge raw YAML config into base AppConfig."""
    data = asdict(base)
    for key, value in raw.items():
        if key not in data:
            continue
        if isinstance(value, dict) and isinstance(data[key], dict):
            data[key].update(value)
        else:
            data[key] = value
    try:
        return AppConfig(
            cms=CMSConfig(**data["cms"]),
            markdown=MarkdownConfig(**data["markdown"]),
            logging=LoggingConfig(**data["logging"]),
        )
    except TypeError as exc:
        raise ConfigError(f"Invalid config: {exc}") from exc


def resolve_credentials(
    cfg: CMSConfig, environ: Mapping[str, str] | None = None
) -> CMSCredentials:
    """Resolve CMS credentials from inline config or environment variables.

    Raises:
        ConfigError: If any of service id, API key or endpoint is unset
    """
    env = os.environ if environ is None else environ
    values: dict[str, str] = {}
    missing: list[str] = []
    for name, inline, env_name in (
        ("service_id", cfg.service_id, cfg.service_id_env),
        ("api_key", cfg.api_key, cfg.api_key_env),
        ("endpoint", cfg.endpoint, cfg.endpoint_env),
    ):
        value = inline or env.get(env_name)
        if not value:
            missing.append(env_name)
            continue
        values[name] = value

    if missing:
        raise ConfigError(f"{', '.join(missing)} is not set")
    return CMSCredentials(**values)
