"""PostgreSQL backend."""

from .connection import PostgreSQLConnection
from .queries import CATALOG_SOURCES, CatalogSource, build_template_store

__all__ = [
    "CATALOG_SOURCES",
    "CatalogSource",
    "PostgreSQLConnection",
    "build_template_store",
]
