# Custom exceptions for Ignition

class IgnitionError(Exception):
    """Base exception for all application-specific errors."""
    pass

class ConfigError(IgnitionError):
    """Raised for configuration-related problems."""
    pass

class ValidationError(ConfigError):
    """Raised when a configuration value fails a startup check."""

    def __init__(self, message: str, field: str = None):
        self.field = field
        self.message = message
        super().__init__(message)

class DatabaseError(IgnitionError):
    """Raised when a storage operation fails."""
    pass

class RecordDecodeError(DatabaseError):
    """Raised when a raw storage record does not match the expected schema."""

    def __init__(self, record, reason: str):
        self.record = record
        self.reason = reason
        super().__init__(f"Failed to decode record {record!r}: {reason}")

class StartupError(IgnitionError):
    """Raised when the application lifecycle is driven out of order."""
    pass

class ShutdownError(IgnitionError):
    """Raised when a shutdown hook fails after a successful startup."""
    pass


def is_configuration_error(exc: BaseException) -> bool:
    """True for errors caused by bad configuration."""
    return isinstance(exc, ConfigError)


def is_database_error(exc: BaseException) -> bool:
    """True for errors raised at the storage boundary."""
    return isinstance(exc, DatabaseError)


def classify_startup_error(exc: BaseException) -> str:
    """
    Name the kind of a startup failure.

    Returns:
        "configuration", "database" or "unknown"
    """
    if is_configuration_error(exc):
        return "configuration"
    if is_database_error(exc):
        return "database"
    return "unknown"
