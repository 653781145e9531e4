"""
Ignition - Application Startup Orchestrator

Validates configuration, connects storage, binds graceful shutdown to the
termination signals and loads the initial data.
"""

__version__ = "0.1.0"

from ignition.application import Application, StartupState, run_application
from ignition.config import AppConfig, CacheSettings, DEFAULT_APP_CONFIG
from ignition.database import Database, MockDatabase
from ignition.exceptions import (
    IgnitionError,
    ConfigError,
    ValidationError,
    DatabaseError,
    RecordDecodeError,
    StartupError,
    classify_startup_error,
)
from ignition.schemas import RawUserRecord, User
from ignition.shutdown import ShutdownCoordinator
from ignition.validator import Validator, validate_config, validate_cache_settings

__all__ = [
    "__version__",
    "Application",
    "StartupState",
    "run_application",
    "AppConfig",
    "CacheSettings",
    "DEFAULT_APP_CONFIG",
    "Database",
    "MockDatabase",
    "IgnitionError",
    "ConfigError",
    "ValidationError",
    "DatabaseError",
    "RecordDecodeError",
    "StartupError",
    "classify_startup_error",
    "RawUserRecord",
    "User",
    "ShutdownCoordinator",
    "Validator",
    "validate_config",
    "validate_cache_settings",
]
