"""
Application Configuration.

In-memory configuration objects for application startup. Values come from a
literal object (``AppConfig.from_dict``) or from IGNITION_* environment
variables (``AppConfig.from_env``). No configuration files are read.

Environment Variables:
    IGNITION_DATABASE_URL: Storage URL (default: http://localhost)
    IGNITION_CACHE_ENABLED: Enable the cache (default: true)
    IGNITION_CACHE_TTL: Cache time-to-live in seconds (default: 300)
"""

import os
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping

from .exceptions import ConfigError


MIN_CACHE_TTL_SECONDS = 60                      # Enabled caches must live at least this long
ACCEPTED_URL_SCHEMES = ("http",)                # Prefix match, so https:// passes too
DEFAULT_DATABASE_URL = "http://localhost"
DEFAULT_CACHE_ENABLED = True
DEFAULT_CACHE_TTL = 300


def _env_int(key: str, default: int) -> int:
    """Read integer from environment variable."""
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _env_bool(key: str, default: bool) -> bool:
    """Read boolean from environment variable."""
    value = os.getenv(key, "").lower()
    if value in ("true", "1", "yes"):
        return True
    if value in ("false", "0", "no"):
        return False
    return default


def _pick(data: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    for key in keys:
        if key in data:
            return data[key]
    return default


@dataclass(frozen=True)
class CacheSettings:
    """
    Cache behaviour for the application.

    The TTL policy (enabled caches need ttl >= MIN_CACHE_TTL_SECONDS) is
    enforced by validation at startup, not here, so that an invalid
    configuration can still be constructed and reported.
    """

    enabled: bool = DEFAULT_CACHE_ENABLED
    ttl: int = DEFAULT_CACHE_TTL

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CacheSettings":
        if not isinstance(data, Mapping):
            raise ConfigError(f"cacheSettings must be an object, got {type(data).__name__}")

        enabled = _pick(data, "enabled", default=DEFAULT_CACHE_ENABLED)
        ttl = _pick(data, "ttl", default=DEFAULT_CACHE_TTL)
        if not isinstance(enabled, bool):
            raise ConfigError(f"cacheSettings.enabled must be a boolean, got {enabled!r}")
        if isinstance(ttl, bool) or not isinstance(ttl, (int, float)):
            raise ConfigError(f"cacheSettings.ttl must be a number, got {ttl!r}")
        return cls(enabled=enabled, ttl=ttl)

    def to_dict(self) -> Dict[str, Any]:
        return {"enabled": self.enabled, "ttl": self.ttl}


@dataclass(frozen=True)
class AppConfig:
    """Immutable startup configuration, constructed once before ``start``."""

    database_url: str = DEFAULT_DATABASE_URL
    cache_settings: CacheSettings = field(default_factory=CacheSettings)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AppConfig":
        """
        Build a config from a literal object.

        Accepts both the camelCase form
        ``{"databaseUrl": ..., "cacheSettings": {"enabled": ..., "ttl": ...}}``
        and snake_case keys.

        Raises:
            ConfigError: If the object has the wrong shape
        """
        if not isinstance(data, Mapping):
            raise ConfigError(f"config must be an object, got {type(data).__name__}")

        database_url = _pick(data, "databaseUrl", "database_url")
        if not isinstance(database_url, str):
            raise ConfigError(f"databaseUrl must be a string, got {database_url!r}")

        cache_raw = _pick(data, "cacheSettings", "cache_settings", default={})
        return cls(
            database_url=database_url,
            cache_settings=CacheSettings.from_dict(cache_raw),
        )

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Build a config from IGNITION_* environment variables."""
        return cls(
            database_url=os.getenv("IGNITION_DATABASE_URL", DEFAULT_DATABASE_URL),
            cache_settings=CacheSettings(
                enabled=_env_bool("IGNITION_CACHE_ENABLED", DEFAULT_CACHE_ENABLED),
                ttl=_env_int("IGNITION_CACHE_TTL", DEFAULT_CACHE_TTL),
            ),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Export configuration in its literal object form (for JSON output)."""
        return {
            "databaseUrl": self.database_url,
            "cacheSettings": self.cache_settings.to_dict(),
        }


# The literal configuration the process entry point starts with
DEFAULT_APP_CONFIG = AppConfig.from_dict({
    "databaseUrl": DEFAULT_DATABASE_URL,
    "cacheSettings": {"enabled": True, "ttl": DEFAULT_CACHE_TTL},
})
