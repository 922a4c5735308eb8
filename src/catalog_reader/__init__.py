"""Catalog reader - introspect PostgreSQL system catalogs into attribute records."""

from .base.models import IMPORT_ORDER, FunctionScope, ImportStep, ObjectType, QueryType
from .catalog import Catalog
from .config import CatalogConfig
from .discovery import CatalogWalker

__version__ = "0.1.0"

__all__ = [
    "Catalog",
    "CatalogConfig",
    "CatalogWalker",
    "FunctionScope",
    "ImportStep",
    "IMPORT_ORDER",
    "ObjectType",
    "QueryType",
    "__version__",
]
