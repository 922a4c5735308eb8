"""Base classes and shared interfaces."""

from .connection import BaseConnection
from .models import (
    IMPORT_ORDER,
    AttributeRecord,
    DependencyReference,
    ExtraAttributes,
    FunctionScope,
    ImportStep,
    ObjectType,
    QueryType,
)
from .normalizer import AttributeNormalizer
from .querier import BaseQuerier
from .templates import QueryTemplateStore

__all__ = [
    "BaseConnection",
    "BaseQuerier",
    "QueryTemplateStore",
    "AttributeNormalizer",
    "AttributeRecord",
    "ExtraAttributes",
    "DependencyReference",
    "ObjectType",
    "QueryType",
    "FunctionScope",
    "ImportStep",
    "IMPORT_ORDER",
]
