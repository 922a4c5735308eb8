"""Conversion of raw catalog rows into attribute records.

Raw column names use underscores; attribute keys use dashes. Columns whose
name ends in ``_bool`` hold a server boolean literal which is recoded to the
attribute encoding: ``"1"`` for true, absent for false. Empty values are
dropped, so a normalized record passed through again comes back unchanged.
"""

import logging
from typing import Mapping, Optional

from ..exceptions import MalformedResultError
from .models import AttributeRecord, ObjectType

logger = logging.getLogger(__name__)

# Server spelling of boolean values in text results
PGSQL_TRUE = "t"
PGSQL_FALSE = "f"

BOOL_SUFFIX = "_bool"
ATTR_TRUE = "1"
ATTR_FALSE = ""

_OID_NAME = ("oid", "name")

REQUIRED_ATTRIBUTES: dict[ObjectType, tuple[str, ...]] = {
    ObjectType.ROLE: _OID_NAME,
    ObjectType.TABLESPACE: _OID_NAME,
    ObjectType.DATABASE: _OID_NAME + ("encoding",),
    ObjectType.SCHEMA: _OID_NAME,
    ObjectType.EXTENSION: _OID_NAME + ("version",),
    ObjectType.FUNCTION: _OID_NAME + ("language",),
    ObjectType.TYPE: _OID_NAME + ("configuration",),
    ObjectType.LANGUAGE: _OID_NAME,
    ObjectType.AGGREGATE: _OID_NAME + ("transition",),
    ObjectType.OPERATOR: _OID_NAME,
    ObjectType.OPCLASS: _OID_NAME + ("index-type", "family"),
    ObjectType.OPFAMILY: _OID_NAME + ("index-type",),
    ObjectType.COLLATION: _OID_NAME,
    ObjectType.CONVERSION: _OID_NAME + ("source-encoding", "destination-encoding", "function"),
    ObjectType.TABLE: _OID_NAME,
    ObjectType.COLUMN: _OID_NAME + ("table", "position", "type"),
    ObjectType.INDEX: _OID_NAME + ("table", "index-type"),
    ObjectType.RULE: _OID_NAME + ("table", "event"),
    ObjectType.TRIGGER: _OID_NAME + ("table", "definition"),
    ObjectType.CONSTRAINT: _OID_NAME + ("table", "type"),
    ObjectType.CAST: _OID_NAME + ("source-type", "destination-type"),
    ObjectType.INHERITANCE: ("name", "parent", "position"),
    ObjectType.VIEW: _OID_NAME + ("definition",),
    ObjectType.PERMISSION: ("name", "grantee", "privilege"),
}


def attribute_key(column_name: str) -> str:
    """Attribute key for a raw column name, boolean suffix removed."""
    if column_name.endswith(BOOL_SUFFIX):
        column_name = column_name[: -len(BOOL_SUFFIX)]
    return column_name.replace("_", "-")


def parameter_name(key: str) -> str:
    """Query placeholder name for an attribute key."""
    return key.replace("-", "_")


class AttributeNormalizer:
    """Turns raw result rows into attribute records."""

    def __init__(self, true_literal: str = PGSQL_TRUE, false_literal: str = PGSQL_FALSE):
        self.true_literal = true_literal
        self.false_literal = false_literal

    def convert_bool(self, column_name: str, value: Optional[str]) -> str:
        """Recode a server boolean literal to the attribute encoding."""
        if value == self.true_literal:
            return ATTR_TRUE
        if value not in (self.false_literal, "", None):
            # Unknown literals degrade to false.
            logger.warning(f"Unexpected boolean literal {value!r} in column {column_name}, treating as false")
        return ATTR_FALSE

    def normalize(
        self,
        row: Mapping[str, Optional[str]],
        extra: Optional[Mapping[str, str]] = None,
        obj_type: Optional[ObjectType] = None,
    ) -> AttributeRecord:
        """Map one raw row to one attribute record."""
        record: AttributeRecord = {}

        for column_name, value in row.items():
            if column_name.endswith(BOOL_SUFFIX):
                value = self.convert_bool(column_name, value)
            elif value is None:
                value = ""
            if value == "":
                continue
            record[attribute_key(column_name)] = str(value)

        if extra:
            record.update({key: value for key, value in extra.items() if value})

        if obj_type is not None:
            self.validate(record, obj_type)

        return record

    def validate(self, record: AttributeRecord, obj_type: ObjectType) -> None:
        """Raise if a record lacks attributes its object type always has."""
        missing = [key for key in REQUIRED_ATTRIBUTES.get(obj_type, ()) if not record.get(key)]
        if missing:
            raise MalformedResultError(
                f"{obj_type.value} record is missing required attributes: {', '.join(missing)}"
            )
