"""PostgreSQL database connection."""

import logging
from typing import Mapping, Optional

import psycopg
from psycopg.adapt import Loader

from ...base.connection import BaseConnection, Row, to_text
from ...config import CatalogConfig
from ...exceptions import ConnectionError

logger = logging.getLogger(__name__)


class BoolTextLoader(Loader):
    """Keep booleans in the server's own 't'/'f' spelling."""

    def load(self, data) -> str:
        return bytes(data).decode()


class PostgreSQLConnection(BaseConnection):
    """PostgreSQL connection using psycopg3."""

    def __init__(self, config: CatalogConfig):
        super().__init__(config)
        self._connection: Optional[psycopg.Connection] = None

    def connect(self) -> None:
        """Establish database connection."""
        try:
            conn_params = self.config.connection_params()
            logger.debug(f"Connecting to PostgreSQL: {self.config.host}:{conn_params['port']}/{self.config.database}")
            self._connection = psycopg.connect(**conn_params, autocommit=True)
        except psycopg.Error as e:
            raise ConnectionError(f"Failed to connect to database: {e}") from e
        self._connection.adapters.register_loader("bool", BoolTextLoader)
        logger.info(f"Connected to {self.config.database}")

    def disconnect(self) -> None:
        """Close database connection."""
        if self._connection:
            self._connection.close()
            self._connection = None
            logger.info("Disconnected from database")

    @property
    def connection(self) -> psycopg.Connection:
        """Get the active connection."""
        if not self._connection or self._connection.closed:
            raise ConnectionError("Not connected to database")
        return self._connection

    def execute(self, query: str, params: Optional[Mapping[str, str]] = None) -> list[Row]:
        """Execute a query and return all rows as text dictionaries."""
        try:
            with self.connection.cursor() as cur:
                cur.execute(query, params)
                if cur.description is None:
                    return []
                columns = [column.name for column in cur.description]
                return [dict(zip(columns, map(to_text, row))) for row in cur.fetchall()]
        except psycopg.Error as e:
            raise ConnectionError(f"Catalog query failed: {e}") from e

    def get_version(self) -> str:
        """Get PostgreSQL version."""
        return self.execute_scalar("SELECT version()") or "Unknown"
