"""
Viewer Configuration

Dataclass configuration for the catalog provider and the HTTP surface.

SOURCES (later wins):
=====================
1. Dataclass defaults
2. JSON file (explicit path, or ARTVIEW_CONFIG)
3. ARTVIEW_* environment variables
"""

from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple
import json
import logging
import os

from .contracts import RECORD_FIELDS


DEFAULT_BASE_URL = "https://api.artic.edu/api/v1"

PROVIDER_KINDS = ("artic", "mock")


class ConfigError(Exception):
    """Configuration could not be read or is invalid."""
    pass


def _check_type(name: str, value: Any, expected) -> None:
    # bool is an int subclass; only accept it where bool is expected
    expected_types = expected if isinstance(expected, tuple) else (expected,)
    if isinstance(value, bool) and bool not in expected_types:
        ok = False
    else:
        ok = isinstance(value, expected_types)
    if not ok:
        names = " or ".join(t.__name__ for t in expected_types)
        raise ConfigError(f"{name} must be {names}, got {type(value).__name__} {value!r}")


@dataclass
class CatalogConfig:
    """Remote catalog access settings."""
    base_url: str = DEFAULT_BASE_URL
    provider: str = "artic"
    rows_per_page: int = 5
    timeout_seconds: float = 15.0
    max_retries: int = 2
    backoff_initial_seconds: float = 0.5
    backoff_max_seconds: float = 4.0
    user_agent: str = "ArtCatalogViewer/1.0"
    fields: Tuple[str, ...] = RECORD_FIELDS

    # Only used by the mock provider
    mock_total_count: int = 47

    def __post_init__(self):
        _check_type("base_url", self.base_url, str)
        _check_type("provider", self.provider, str)
        _check_type("user_agent", self.user_agent, str)
        for name in ("rows_per_page", "max_retries", "mock_total_count"):
            _check_type(name, getattr(self, name), int)
        for name in ("timeout_seconds", "backoff_initial_seconds", "backoff_max_seconds"):
            _check_type(name, getattr(self, name), (int, float))

        if self.provider not in PROVIDER_KINDS:
            raise ConfigError(f"Unknown provider {self.provider!r}, expected one of {PROVIDER_KINDS}")
        if self.rows_per_page < 1:
            raise ConfigError(f"rows_per_page must be >= 1, got {self.rows_per_page}")
        if self.timeout_seconds <= 0:
            raise ConfigError(f"timeout_seconds must be > 0, got {self.timeout_seconds}")
        if self.max_retries < 0:
            raise ConfigError(f"max_retries must be >= 0, got {self.max_retries}")
        if self.mock_total_count < 0:
            raise ConfigError(f"mock_total_count must be >= 0, got {self.mock_total_count}")
        self.base_url = self.base_url.rstrip("/")
        self.fields = tuple(self.fields)


@dataclass
class ServerConfig:
    """HTTP surface settings."""
    host: str = "127.0.0.1"
    port: int = 8000
    log_level: str = "INFO"
    reload: bool = False

    def __post_init__(self):
        _check_type("host", self.host, str)
        _check_type("port", self.port, int)
        _check_type("log_level", self.log_level, str)
        _check_type("reload", self.reload, bool)

        if not 1 <= self.port <= 65535:
            raise ConfigError(f"port must be in 1-65535, got {self.port}")
        self.log_level = self.log_level.upper()
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ConfigError(f"Unknown log_level {self.log_level!r}")


@dataclass
class ViewerConfig:
    """Unified configuration for the viewer."""
    catalog: Optional[CatalogConfig] = None
    server: Optional[ServerConfig] = None

    def __post_init__(self):
        self.catalog = self.catalog or CatalogConfig()
        self.server = self.server or ServerConfig()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'ViewerConfig':
        try:
            return cls(
                catalog=CatalogConfig(**data.get("catalog", {})),
                server=ServerConfig(**data.get("server", {})),
            )
        except TypeError as e:
            raise ConfigError(f"Invalid configuration keys: {e}") from e


# Environment variable -> (section, key, converter)
_ENV_OVERRIDES: Dict[str, Tuple[str, str, Any]] = {
    "ARTVIEW_BASE_URL": ("catalog", "base_url", str),
    "ARTVIEW_PROVIDER": ("catalog", "provider", str),
    "ARTVIEW_ROWS_PER_PAGE": ("catalog", "rows_per_page", int),
    "ARTVIEW_TIMEOUT": ("catalog", "timeout_seconds", float),
    "ARTVIEW_MAX_RETRIES": ("catalog", "max_retries", int),
    "ARTVIEW_HOST": ("server", "host", str),
    "ARTVIEW_PORT": ("server", "port", int),
    "ARTVIEW_LOG_LEVEL": ("server", "log_level", str),
}


def load_config(
    path: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None
) -> ViewerConfig:
    """
    Build the viewer configuration.

    Raises ConfigError on unreadable files or invalid values.
    """
    environ = os.environ if environ is None else environ

    if path is None and environ.get("ARTVIEW_CONFIG"):
        path = Path(environ["ARTVIEW_CONFIG"])

    data: Dict[str, Dict[str, Any]] = {"catalog": {}, "server": {}}

    if path is not None:
        try:
            with open(path, 'r', encoding='utf-8') as f:
                loaded = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigError(f"Cannot read config file {path}: {e}") from e

        if not isinstance(loaded, dict):
            raise ConfigError(f"Config file {path} must contain a JSON object")

        for section in ("catalog", "server"):
            values = loaded.get(section, {})
            if not isinstance(values, dict):
                raise ConfigError(f"Config section {section!r} must be an object")
            data[section].update(values)

    for env_name, (section, key, convert) in _ENV_OVERRIDES.items():
        raw = environ.get(env_name)
        if raw is None or raw == "":
            continue
        try:
            data[section][key] = convert(raw)
        except ValueError as e:
            raise ConfigError(f"Invalid value for {env_name}: {raw!r}") from e

    return ViewerConfig.from_dict(data)
