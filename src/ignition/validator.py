"""
Startup configuration checks.

All checks are pure and fail fast with a ValidationError, so nothing is
connected or registered when a configuration is rejected.
"""

from typing import Optional, Sequence

from .config import ACCEPTED_URL_SCHEMES, MIN_CACHE_TTL_SECONDS, AppConfig, CacheSettings
from .exceptions import ValidationError
from .logging_config import logger


class Validator:
    """Checks that a database URL starts with an accepted scheme token."""

    def __init__(self, accepted_schemes: Sequence[str] = ACCEPTED_URL_SCHEMES):
        self.accepted_schemes = tuple(accepted_schemes)

    def is_valid_database_url(self, url) -> bool:
        # Prefix check only; no parsing, no network access
        if not isinstance(url, str):
            return False
        return url.startswith(self.accepted_schemes)


def validate_cache_settings(settings: CacheSettings) -> None:
    """
    Enforce the cache TTL policy.

    Raises:
        ValidationError: If the cache is enabled with a TTL below the minimum
    """
    if settings.enabled and settings.ttl < MIN_CACHE_TTL_SECONDS:
        raise ValidationError("TTL too short", field="cacheSettings.ttl")


def validate_config(config: AppConfig, validator: Optional[Validator] = None) -> None:
    """
    Validate a startup configuration.

    Args:
        config: Configuration to check
        validator: URL validator (default: accepts the standard schemes)

    Raises:
        ValidationError: If the URL or the cache settings are rejected
    """
    validator = validator or Validator()
    if not validator.is_valid_database_url(config.database_url):
        raise ValidationError("Invalid DB URL", field="databaseUrl")
    validate_cache_settings(config.cache_settings)
    logger.debug(f"Configuration valid for {config.database_url}")
