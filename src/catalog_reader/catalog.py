"""Public entry point for reading a PostgreSQL catalog."""

import logging
from typing import Mapping, Optional

from .backends.postgresql.queries import build_template_store
from .base.connection import BaseConnection, Row
from .base.models import AttributeRecord, ExtraAttributes, ObjectType, QueryType
from .base.normalizer import AttributeNormalizer
from .base.querier import BaseQuerier
from .base.templates import QueryTemplateStore
from .exceptions import CardinalityError
from .lookups import CommentFetcher, DependencyResolver, ExtensionChecker

logger = logging.getLogger(__name__)


def _scope(schema: str = "", table: str = "", extra: Optional[Mapping[str, str]] = None) -> ExtraAttributes:
    attributes = dict(extra or {})
    if schema:
        attributes.setdefault("schema", schema)
    if table:
        attributes.setdefault("table", table)
    return attributes


class Catalog(BaseQuerier):
    """Discovers database objects and describes them as attribute records.

    Every record goes through the same steps: the attributes query runs, each
    row is normalized, oids of owners, tablespaces, schemas and collations are
    replaced by names, extension membership is flagged and the comment is
    attached. Caller supplied attributes are merged last and win.

    The catalog borrows its connection; the caller opens and closes it.
    """

    def __init__(
        self,
        connection: Optional[BaseConnection] = None,
        templates: Optional[QueryTemplateStore] = None,
        normalizer: Optional[AttributeNormalizer] = None,
    ):
        if templates is None:
            templates = build_template_store()
        super().__init__(connection, templates)
        self.normalizer = normalizer or AttributeNormalizer()
        self.dependencies = DependencyResolver(connection, templates)
        self.extensions = ExtensionChecker(connection, templates, self.normalizer)
        self.comments = CommentFetcher(connection, templates)

    def set_connection(self, connection: BaseConnection) -> None:
        """Use another session for all subsequent calls."""
        super().set_connection(connection)
        for component in (self.dependencies, self.extensions, self.comments):
            component.set_connection(connection)
        logger.debug("Catalog connection changed")

    def _list(self, obj_type: ObjectType, schema: str, table: str, extra: Optional[Mapping[str, str]]) -> list[Row]:
        return self.execute_query(QueryType.LIST, obj_type, _scope(schema, table, extra))

    def get_object_count(
        self,
        obj_type: ObjectType,
        schema: str = "",
        table: str = "",
        extra: Optional[Mapping[str, str]] = None,
    ) -> int:
        """Number of objects of a type, optionally within one schema or table."""
        return len(self._list(obj_type, schema, table, extra))

    def get_objects(
        self,
        obj_type: ObjectType,
        schema: str = "",
        table: str = "",
        extra: Optional[Mapping[str, str]] = None,
    ) -> list[str]:
        """Names of the objects of a type in catalog order."""
        names = [row["name"] for row in self._list(obj_type, schema, table, extra)]
        logger.info(f"Found {len(names)} {obj_type.value} objects")
        return names

    def get_object_oids(
        self,
        obj_type: ObjectType,
        schema: str = "",
        table: str = "",
        extra: Optional[Mapping[str, str]] = None,
    ) -> list[tuple[str, str]]:
        """(oid, name) pairs of the objects of a type in catalog order."""
        return [(row["oid"], row["name"]) for row in self._list(obj_type, schema, table, extra)]

    def _build_record(self, row: Row, obj_type: ObjectType, extra: ExtraAttributes) -> AttributeRecord:
        record = self.normalizer.normalize(row, extra, obj_type)
        self.dependencies.resolve_record(record, self.templates.dependencies(obj_type))
        self.extensions.mark_record(record, obj_type)
        self.comments.attach_comment(record, obj_type)
        record.update(extra)
        return record

    def get_multiple_attributes(
        self,
        name: str,
        obj_type: ObjectType,
        extra: Optional[Mapping[str, str]] = None,
    ) -> list[AttributeRecord]:
        """Attribute records of every object matching the name."""
        # Empty extras never reach records or filters.
        extra = {key: value for key, value in (extra or {}).items() if value}
        rows = self.execute_query(QueryType.ATTRIBUTES, obj_type, {**extra, "name": name})
        return [self._build_record(row, obj_type, extra) for row in rows]

    def get_attributes(
        self,
        name: str,
        obj_type: ObjectType,
        extra: Optional[Mapping[str, str]] = None,
    ) -> AttributeRecord:
        """Attribute record of the one object matching the name.

        Returns an empty record when nothing matches and raises
        CardinalityError when several objects do.
        """
        if not name:
            return {}
        records = self.get_multiple_attributes(name, obj_type, extra)
        if not records:
            logger.debug(f"No {obj_type.value} named '{name}'")
            return {}
        if len(records) > 1:
            raise CardinalityError(name, obj_type, len(records))
        return records[0]

    def get_attributes_by_oid(
        self,
        oid: str,
        obj_type: ObjectType,
        extra: Optional[Mapping[str, str]] = None,
    ) -> list[AttributeRecord]:
        """Attribute records of the object with this oid.

        Most object types yield one record; permissions and inheritance yield
        one per grant or parent.
        """
        if not oid:
            return []
        return self.get_multiple_attributes("", obj_type, {**(extra or {}), "oid": oid})

    def get_database_attributes(self, name: str) -> AttributeRecord:
        return self.get_attributes(name, ObjectType.DATABASE)

    def get_role_attributes(self, name: str) -> AttributeRecord:
        return self.get_attributes(name, ObjectType.ROLE)

    def get_schema_attributes(self, name: str) -> AttributeRecord:
        return self.get_attributes(name, ObjectType.SCHEMA)

    def get_tablespace_attributes(self, name: str) -> AttributeRecord:
        return self.get_attributes(name, ObjectType.TABLESPACE)

    def get_extension_attributes(self, name: str, schema: str) -> AttributeRecord:
        return self.get_attributes(name, ObjectType.EXTENSION, {"schema": schema})

    def get_function_attributes(self, name: str, schema: str) -> AttributeRecord:
        return self.get_attributes(name, ObjectType.FUNCTION, {"schema": schema})
