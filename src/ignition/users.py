"""
Active-user loading.

Raw records are decoded into RawUserRecord at the storage boundary, then
transformed into User objects whose roles are the comma-split base roles
followed by the derived roles.
"""

from typing import Any, Dict, Iterable, List

from pydantic import ValidationError as PydanticValidationError

from .database import Database
from .exceptions import RecordDecodeError
from .logging_config import logger
from .schemas import RawUserRecord, User


ACTIVE_USERS_QUERY = 'SELECT * FROM users WHERE status = "active"'


def build_active_users_query() -> str:
    return ACTIVE_USERS_QUERY


def decode_user_record(raw: Dict[str, Any]) -> RawUserRecord:
    """
    Decode one raw storage record.

    Raises:
        RecordDecodeError: If the record does not match the user schema
    """
    try:
        return RawUserRecord.model_validate(raw)
    except PydanticValidationError as e:
        raise RecordDecodeError(raw, str(e)) from e


def is_admin_user(record: RawUserRecord) -> bool:
    return "admin" in record.permissions


def has_purchase_history(record: RawUserRecord) -> bool:
    return record.total_purchases > 0


def determine_additional_roles(record: RawUserRecord) -> List[str]:
    """Derived roles, admin before customer."""
    roles: List[str] = []
    if is_admin_user(record):
        roles.append("admin")
    if has_purchase_history(record):
        roles.append("customer")
    return roles


def extract_user_roles(record: RawUserRecord) -> List[str]:
    base_roles = record.roles.split(",")
    return base_roles + determine_additional_roles(record)


def process_user_data(raw_users: Iterable[Dict[str, Any]]) -> List[User]:
    """
    Transform raw storage records into users.

    Args:
        raw_users: Records as returned by Database.query

    Returns:
        One User per record, in input order

    Raises:
        RecordDecodeError: On the first record that fails to decode
    """
    users = []
    for raw in raw_users:
        record = decode_user_record(raw)
        users.append(User(
            id=record.id,
            name=record.name,
            roles=extract_user_roles(record),
        ))
    return users


async def fetch_active_users(db: Database) -> List[User]:
    """Query storage for active users and transform the results."""
    query = build_active_users_query()
    raw_users = await db.query(query)
    logger.debug(f"Fetched {len(raw_users)} raw user records")
    return process_user_data(raw_users)
