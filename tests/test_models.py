"""Tests for object types, query purposes and the import order."""

import pytest
from catalog_reader.backends.postgresql.queries import build_template_store
from catalog_reader.base.models import (
    IMPORT_ORDER,
    DependencyReference,
    FunctionScope,
    ImportStep,
    ObjectType,
    QueryType,
    import_position,
)
from catalog_reader.lookups import DEPENDENCY_TYPES


class TestObjectType:
    """Tests for ObjectType."""

    def test_values_are_lowercase_names(self):
        """Test that object types parse from their text value."""
        assert ObjectType("opclass") is ObjectType.OPCLASS
        assert ObjectType.TABLE == "table"

    def test_shared_types(self):
        """Test the cluster-wide object types."""
        shared = {t for t in ObjectType if t.is_shared}
        assert shared == {ObjectType.ROLE, ObjectType.TABLESPACE, ObjectType.DATABASE}

    def test_scopes_do_not_overlap(self):
        """Test that no type is both schema-scoped and a table child."""
        for obj_type in ObjectType:
            assert not (obj_type.is_schema_scoped and obj_type.is_table_child)
            assert not (obj_type.is_shared and obj_type.is_schema_scoped)

    def test_table_children(self):
        """Test types listed per table."""
        assert ObjectType.COLUMN.is_table_child
        assert ObjectType.INHERITANCE.is_table_child
        assert not ObjectType.TABLE.is_table_child


class TestImportOrder:
    """Tests for IMPORT_ORDER."""

    def test_covers_every_object_type(self):
        """Test that every object type has a step."""
        assert {step.obj_type for step in IMPORT_ORDER} == set(ObjectType)
        assert len(IMPORT_ORDER) == len(ObjectType) + 1

    def test_starts_with_cluster_objects(self):
        """Test the leading steps."""
        assert [step.obj_type for step in IMPORT_ORDER[:4]] == [
            ObjectType.ROLE,
            ObjectType.TABLESPACE,
            ObjectType.DATABASE,
            ObjectType.SCHEMA,
        ]
        assert IMPORT_ORDER[-1].obj_type == ObjectType.PERMISSION

    def test_functions_appear_twice(self):
        """Test that builtin functions precede types and user functions follow languages."""
        scopes = [
            (position, step.function_scope)
            for position, step in enumerate(IMPORT_ORDER)
            if step.obj_type == ObjectType.FUNCTION
        ]
        assert [scope for _, scope in scopes] == [FunctionScope.BUILTIN, FunctionScope.USER]

        builtin, user = (position for position, _ in scopes)
        assert import_position(ObjectType.EXTENSION) < builtin < import_position(ObjectType.TYPE)
        assert import_position(ObjectType.LANGUAGE) < user < import_position(ObjectType.AGGREGATE)

    def test_containers_come_first(self):
        """Test that owners, tablespaces and schemas are imported before the objects using them."""
        store = build_template_store()
        for obj_type in ObjectType:
            for attribute in store.dependencies(obj_type):
                if attribute == "collation":
                    continue
                target = DEPENDENCY_TYPES[attribute]
                assert import_position(target) <= import_position(obj_type), (obj_type, attribute)

    def test_tables_before_children(self):
        """Test that table children follow tables."""
        tables = import_position(ObjectType.TABLE)
        for obj_type in ObjectType:
            if obj_type.is_table_child:
                assert import_position(obj_type) > tables

    def test_import_position_first_occurrence(self):
        """Test that the first function step is reported."""
        assert IMPORT_ORDER[import_position(ObjectType.FUNCTION)].function_scope == FunctionScope.BUILTIN


class TestImportStep:
    """Tests for ImportStep."""

    def test_plain_step(self):
        """Test a step without a function scope."""
        step = ImportStep(ObjectType.TABLE)
        assert step.label == "table"
        assert step.extra_attributes() == {}

    def test_function_step(self):
        """Test that a function step filters by scope."""
        step = ImportStep(ObjectType.FUNCTION, FunctionScope.USER)
        assert step.label == "function (user)"
        assert step.extra_attributes() == {"function-scope": "user"}


class TestDependencyReference:
    """Tests for DependencyReference."""

    @pytest.mark.parametrize("oid", ["0", ""])
    def test_unused_reference(self, oid):
        """Test that the invalid oid means no reference."""
        assert DependencyReference(oid, ObjectType.ROLE).is_none

    def test_used_reference(self):
        """Test a real oid."""
        assert not DependencyReference("10", ObjectType.ROLE).is_none


class TestQueryType:
    """Tests for QueryType."""

    def test_values(self):
        """Test the query purposes."""
        assert [q.value for q in QueryType] == [
            "list",
            "attributes",
            "dependency-object",
            "comment",
            "is-from-extension",
        ]
