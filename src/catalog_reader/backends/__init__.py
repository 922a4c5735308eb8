"""Database backend implementations."""

from typing import TYPE_CHECKING, Callable, Type

from ..exceptions import BackendNotAvailableError, ConfigurationError

if TYPE_CHECKING:
    from ..base import BaseConnection, QueryTemplateStore

SUPPORTED_BACKENDS = ["postgresql"]


def get_backend(db_type: str = "postgresql") -> tuple[Type["BaseConnection"], Callable[[], "QueryTemplateStore"]]:
    """
    Get the connection class and template store builder for a database type.

    Returns:
        Tuple of (ConnectionClass, build_template_store)
    """
    if db_type == "postgresql":
        try:
            from .postgresql import PostgreSQLConnection, build_template_store
            return PostgreSQLConnection, build_template_store
        except ImportError as e:
            raise BackendNotAvailableError(
                f"PostgreSQL backend requires psycopg. Install with: pip install 'psycopg[binary]'\n"
                f"Error: {e}"
            )

    raise ConfigurationError(
        f"Unknown database type: {db_type}. "
        f"Supported types: {', '.join(SUPPORTED_BACKENDS)}"
    )
