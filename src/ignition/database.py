"""
Storage boundary for Ignition.

The application talks to storage through three awaitable operations:
connect(url), query(sql) and disconnect(). MockDatabase implements them over
a fixed in-memory record set; there is no query engine.
"""

import copy
from typing import Any, Dict, List, Optional, Protocol, Sequence, runtime_checkable

from .exceptions import DatabaseError
from .logging_config import logger


# The record set every query returns unless the mock is seeded otherwise
DEFAULT_RECORDS: List[Dict[str, Any]] = [
    {"id": 1, "name": "Test", "roles": "user", "permissions": [], "totalPurchases": 0},
]


@runtime_checkable
class Database(Protocol):
    """Anything the application can connect to, query and disconnect from."""

    async def connect(self, url: str) -> None: ...

    async def disconnect(self) -> None: ...

    async def query(self, sql: str) -> List[Dict[str, Any]]: ...


class MockDatabase:
    """
    In-memory stand-in for a database driver.

    Connecting always succeeds. Every query returns a copy of the seeded
    records regardless of the SQL text.
    """

    def __init__(self, records: Optional[Sequence[Dict[str, Any]]] = None):
        self._records = list(DEFAULT_RECORDS if records is None else records)
        self.url: Optional[str] = None
        self.queries: List[str] = []

    @property
    def connected(self) -> bool:
        return self.url is not None

    async def connect(self, url: str) -> None:
        self.url = url
        logger.info(f"Connected to {url}")

    async def disconnect(self) -> None:
        if not self.connected:
            return
        logger.info(f"Disconnected from {self.url}")
        self.url = None

    async def query(self, sql: str) -> List[Dict[str, Any]]:
        """
        Execute a query string.

        Args:
            sql: Query text (recorded, not interpreted)

        Returns:
            Fresh copies of the seeded records

        Raises:
            DatabaseError: If called before connect()
        """
        if not self.connected:
            raise DatabaseError("Query attempted without an open connection")
        self.queries.append(sql)
        logger.debug(f"Query: {sql}")
        return copy.deepcopy(self._records)
