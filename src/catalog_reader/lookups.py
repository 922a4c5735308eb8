"""Lookups that enrich attribute records with related catalog data."""

import logging
from typing import Optional

from .base.models import (
    AttributeRecord,
    DependencyReference,
    ObjectType,
    QueryType,
)
from .base.normalizer import ATTR_FALSE, ATTR_TRUE, AttributeNormalizer
from .base.querier import BaseQuerier

logger = logging.getLogger(__name__)

# Attributes whose raw value is the oid of an object of the given type.
DEPENDENCY_TYPES: dict[str, ObjectType] = {
    "owner": ObjectType.ROLE,
    "tablespace": ObjectType.TABLESPACE,
    "schema": ObjectType.SCHEMA,
    "collation": ObjectType.COLLATION,
}

OID_SUFFIX = "-oid"


class DependencyResolver(BaseQuerier):
    """Resolves oids stored in attribute records to object names."""

    def resolve(self, oid: str, obj_type: ObjectType) -> str:
        """Name of the object with this oid, or "" when there is none."""
        reference = DependencyReference(oid, obj_type)
        if reference.is_none:
            return ""

        rows = self.execute_query(QueryType.DEPENDENCY_OBJECT, obj_type, {"oid": reference.oid})
        if not rows:
            self.logger.debug(f"No {obj_type.value} with oid {oid}")
            return ""
        return rows[0].get("name", "")

    def resolve_record(self, record: AttributeRecord, attributes: tuple[str, ...]) -> AttributeRecord:
        """Replace ``<attribute>-oid`` entries with resolved names.

        Each listed attribute is always set, to "" when the reference is
        unused. Values already present in the record are left alone.
        """
        for attribute in attributes:
            oid = record.pop(attribute + OID_SUFFIX, "")
            if attribute in record:
                continue
            record[attribute] = self.resolve(oid, DEPENDENCY_TYPES[attribute])
        return record


class ExtensionChecker(BaseQuerier):
    """Tells whether an object is a member of an installed extension."""

    def __init__(self, connection, templates, normalizer: Optional[AttributeNormalizer] = None):
        super().__init__(connection, templates)
        self.normalizer = normalizer or AttributeNormalizer()

    def is_from_extension(self, oid: str, obj_type: ObjectType) -> bool:
        if not oid or not self.templates.has(obj_type, QueryType.IS_FROM_EXTENSION):
            return False

        rows = self.execute_query(QueryType.IS_FROM_EXTENSION, obj_type, {"oid": oid})
        if not rows:
            return False
        return self.normalizer.normalize(rows[0]).get("from-extension") == ATTR_TRUE

    def mark_record(self, record: AttributeRecord, obj_type: ObjectType) -> AttributeRecord:
        """Flag extension members as system objects with their SQL disabled."""
        if self.is_from_extension(record.get("oid", ""), obj_type):
            record["from-extension"] = ATTR_TRUE
            record["system"] = ATTR_TRUE
            record["sql-disabled"] = ATTR_TRUE
        else:
            record["from-extension"] = ATTR_FALSE
        return record


class CommentFetcher(BaseQuerier):
    """Reads the comment attached to an object."""

    def get_comment(self, oid: str, obj_type: ObjectType, subid: str = "0") -> str:
        """Comment text, shared catalogs used for cluster-wide object types."""
        if not oid or not self.templates.has(obj_type, QueryType.COMMENT):
            return ""

        rows = self.execute_query(QueryType.COMMENT, obj_type, {"oid": oid, "subid": subid or "0"})
        if not rows:
            return ""
        return rows[0].get("comment", "")

    def attach_comment(self, record: AttributeRecord, obj_type: ObjectType) -> AttributeRecord:
        subid_attribute = self.templates.comment_subid(obj_type)
        subid = record.get(subid_attribute, "0") if subid_attribute else "0"
        record["comment"] = self.get_comment(record.get("oid", ""), obj_type, subid)
        return record
