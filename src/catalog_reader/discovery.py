"""Discovery of a whole database in dependency order."""

import logging
from collections import Counter
from typing import Iterator, Optional

from .base.models import IMPORT_ORDER, AttributeRecord, ExtraAttributes, ImportStep, ObjectType
from .base.normalizer import ATTR_TRUE
from .catalog import Catalog
from .config import CatalogConfig

logger = logging.getLogger(__name__)


class CatalogWalker:
    """Walks every object of the catalog following ``IMPORT_ORDER``.

    Schema-scoped object types are read per included schema and table
    children per table of those schemas, so a consumer rebuilding the model
    from the yielded records never meets a reference to an object it has not
    seen yet.
    """

    def __init__(self, catalog: Catalog, config: Optional[CatalogConfig] = None):
        self.catalog = catalog
        self.config = config or CatalogConfig()
        self._schemas: Optional[list[str]] = None
        self._tables: Optional[list[tuple[str, str]]] = None

    def schemas(self) -> list[str]:
        """Names of the schemas the configuration lets through."""
        if self._schemas is None:
            self._schemas = [
                name
                for name in self.catalog.get_objects(ObjectType.SCHEMA)
                if self.config.should_include_schema(name)
            ]
        return self._schemas

    def tables(self) -> list[tuple[str, str]]:
        """(schema, table) pairs of the included schemas."""
        if self._tables is None:
            self._tables = [
                (schema, table)
                for schema in self.schemas()
                for table in self.catalog.get_objects(ObjectType.TABLE, schema)
            ]
        return self._tables

    def walk(self) -> Iterator[tuple[ImportStep, AttributeRecord]]:
        """Yield (step, record) for every object, step by step."""
        for step in IMPORT_ORDER:
            if not self.config.should_extract(step.obj_type.value):
                continue

            count = 0
            for record in self._walk_step(step):
                if self._is_skipped(step, record):
                    continue
                count += 1
                yield step, record
            logger.info(f"Discovered {count} {step.label} objects")

    def summary(self) -> dict[str, int]:
        """Number of discovered objects per import step."""
        counts = Counter(step.label for step, _ in self.walk())
        return {
            step.label: counts.get(step.label, 0)
            for step in IMPORT_ORDER
            if self.config.should_extract(step.obj_type.value)
        }

    def _walk_step(self, step: ImportStep) -> Iterator[AttributeRecord]:
        extra = step.extra_attributes()
        obj_type = step.obj_type

        if obj_type.is_table_child:
            for schema, table in self.tables():
                yield from self._fetch(obj_type, {**extra, "schema": schema, "table": table})
        elif obj_type.is_schema_scoped:
            for schema in self.schemas():
                yield from self._fetch(obj_type, {**extra, "schema": schema})
        else:
            yield from self._fetch(obj_type, extra)

    def _fetch(self, obj_type: ObjectType, scope: ExtraAttributes) -> Iterator[AttributeRecord]:
        for oid, name in self.catalog.get_object_oids(obj_type, extra=scope):
            yield from self.catalog.get_multiple_attributes(name, obj_type, {**scope, "oid": oid})

    def _is_skipped(self, step: ImportStep, record: AttributeRecord) -> bool:
        if step.obj_type == ObjectType.SCHEMA and not self.config.should_include_schema(record.get("name", "")):
            return True
        if self.config.include_system_objects:
            return False
        # Extension members stay: they are rebuilt as system objects.
        return record.get("system") == ATTR_TRUE and record.get("from-extension") != ATTR_TRUE
