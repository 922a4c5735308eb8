"""Abstract base class for database connections."""

import logging
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Any, Generator, Mapping, Optional

logger = logging.getLogger(__name__)

# A result row with every value rendered as text.
Row = dict[str, str]


def to_text(value: Any) -> str:
    """Render a driver value as catalog text, NULL becoming empty."""
    if value is None:
        return ""
    if isinstance(value, bytes):
        return value.decode()
    return str(value)


class BaseConnection(ABC):
    """Abstract base class for database connections."""

    def __init__(self, config: Any):
        self.config = config
        self._connection = None

    @abstractmethod
    def connect(self) -> None:
        """Establish database connection."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Close database connection."""
        pass

    @property
    @abstractmethod
    def connection(self) -> Any:
        """Get the active connection."""
        pass

    @contextmanager
    def cursor(self) -> Generator[Any, None, None]:
        """Get a cursor context manager."""
        cur = self.connection.cursor()
        try:
            yield cur
        finally:
            cur.close()

    def execute(self, query: str, params: Optional[Mapping[str, str]] = None) -> list[Row]:
        """Execute a query and return all rows as text dictionaries."""
        with self.cursor() as cur:
            cur.execute(query, params)
            columns = [column[0] for column in cur.description]
            return [dict(zip(columns, map(to_text, row))) for row in cur.fetchall()]

    def execute_scalar(self, query: str, params: Optional[Mapping[str, str]] = None) -> Optional[str]:
        """Execute a query and return the first value of the first row."""
        rows = self.execute(query, params)
        if not rows:
            return None
        return next(iter(rows[0].values()), None)

    def __enter__(self) -> "BaseConnection":
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.disconnect()
