"""
Application startup orchestration.

Startup runs as a three-state machine:

    UNINITIALIZED -> SERVICES_READY -> DATA_LOADED

with FAILED reached from either of the first two states when a stage raises.
Errors are logged and re-raised unmodified; there is no recovery.
"""

from enum import Enum
from typing import List, Optional

from .config import AppConfig, CacheSettings
from .database import Database, MockDatabase
from .exceptions import ShutdownError, StartupError, classify_startup_error
from .logging_config import logger
from .schemas import User
from .shutdown import ShutdownCoordinator
from .stages import connect_stage, load_stage, register_stage, validate_stage
from .validator import Validator, validate_cache_settings


SHUTDOWN_HOOK_NAME = "application"


class StartupState(str, Enum):
    UNINITIALIZED = "uninitialized"
    SERVICES_READY = "services_ready"
    DATA_LOADED = "data_loaded"
    FAILED = "failed"


class Application:
    """
    Wires the startup stages to one database, validator and shutdown coordinator.

    Collaborators are passed in explicitly; defaults are a MockDatabase, the
    standard Validator and a fresh ShutdownCoordinator.
    """

    def __init__(
        self,
        db: Optional[Database] = None,
        validator: Optional[Validator] = None,
        coordinator: Optional[ShutdownCoordinator] = None,
    ):
        self.db = db if db is not None else MockDatabase()
        self.validator = validator or Validator()
        self.coordinator = coordinator or ShutdownCoordinator()
        self.state = StartupState.UNINITIALIZED
        self.config: Optional[AppConfig] = None

    async def start(self, config: AppConfig) -> List[User]:
        """
        Initialize services, then load the initial data.

        Args:
            config: Startup configuration

        Returns:
            The active users loaded during startup

        Raises:
            StartupError: If this application was already started
            ValidationError: If the configuration is rejected
            DatabaseError: If storage fails
        """
        if self.state is not StartupState.UNINITIALIZED:
            raise StartupError(f"Application already started (state: {self.state.value})")

        try:
            await self.initialize_services(config)
            return await self.load_initial_data()
        except Exception as e:
            self.state = StartupState.FAILED
            logger.error(f"Startup failed [{classify_startup_error(e)}]: {e}")
            raise

    async def initialize_services(self, config: AppConfig) -> None:
        # Validation must run before anything is connected
        self.validate_config(config)
        await connect_stage(self.db, config)
        self.config = config
        self.register_shutdown_hooks()
        self.state = StartupState.SERVICES_READY
        logger.info("Services initialized")

    def validate_config(self, config: AppConfig) -> None:
        validate_stage(config, self.validator)

    def validate_cache_settings(self, settings: CacheSettings) -> None:
        validate_cache_settings(settings)

    def register_shutdown_hooks(self) -> bool:
        return register_stage(self.coordinator, SHUTDOWN_HOOK_NAME, self.graceful_shutdown)

    async def graceful_shutdown(self) -> None:
        # A failing disconnect skips cleanup
        await self.db.disconnect()
        await self.cleanup_resources()

    async def cleanup_resources(self) -> None:
        logger.info("Cleaning up...")
        self.config = None

    async def load_initial_data(self) -> List[User]:
        users = await load_stage(self.db)
        self.state = StartupState.DATA_LOADED
        return users


async def run_application(
    config: AppConfig,
    db: Optional[Database] = None,
    coordinator: Optional[ShutdownCoordinator] = None,
    wait: bool = False,
) -> List[User]:
    """
    Process entry point: start an Application and optionally serve until signalled.

    Args:
        config: Startup configuration
        db: Storage collaborator (default: MockDatabase)
        coordinator: Shutdown coordinator (default: a new one)
        wait: Block until a termination signal has been handled

    Returns:
        Users loaded during startup

    Raises:
        ShutdownError: If a shutdown hook fails while waiting
    """
    app = Application(db=db, coordinator=coordinator)
    users = await app.start(config)
    if wait:
        logger.info("Startup complete, waiting for termination signal")
        try:
            await app.coordinator.wait()
        except Exception as e:
            raise ShutdownError(f"Shutdown failed: {e}") from e
    return users
