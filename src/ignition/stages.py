"""
Startup stages.

validate -> connect -> register -> load. Each stage takes its inputs
explicitly and either returns its result or raises.
"""

from typing import List

from .config import AppConfig
from .database import Database
from .logging_config import logger
from .schemas import User
from .shutdown import ShutdownCallback, ShutdownCoordinator
from .users import fetch_active_users
from .validator import Validator, validate_config


def validate_stage(config: AppConfig, validator: Validator) -> AppConfig:
    validate_config(config, validator)
    return config


async def connect_stage(db: Database, config: AppConfig) -> Database:
    await db.connect(config.database_url)
    return db


def register_stage(
    coordinator: ShutdownCoordinator,
    name: str,
    callback: ShutdownCallback,
) -> bool:
    """Register the shutdown callback and make sure the signals are bound."""
    registered = coordinator.register(name, callback)
    coordinator.install()
    return registered


async def load_stage(db: Database) -> List[User]:
    users = await fetch_active_users(db)
    logger.info(f"Loaded {len(users)} users")
    return users
