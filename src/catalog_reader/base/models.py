"""Object types, query purposes and the attribute record shape."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

# Normalized description of one catalog object: dash-separated keys, text values.
AttributeRecord = dict[str, str]

# Caller-supplied attributes used both as query parameters and record seeds.
ExtraAttributes = dict[str, str]

# The oid the catalog stores when a reference slot is unused.
INVALID_OID = "0"


class ObjectType(str, Enum):
    """Kinds of catalog objects the reader can discover."""

    ROLE = "role"
    TABLESPACE = "tablespace"
    DATABASE = "database"
    SCHEMA = "schema"
    EXTENSION = "extension"
    FUNCTION = "function"
    TYPE = "type"
    LANGUAGE = "language"
    AGGREGATE = "aggregate"
    OPERATOR = "operator"
    OPCLASS = "opclass"
    OPFAMILY = "opfamily"
    COLLATION = "collation"
    CONVERSION = "conversion"
    TABLE = "table"
    COLUMN = "column"
    INDEX = "index"
    RULE = "rule"
    TRIGGER = "trigger"
    CONSTRAINT = "constraint"
    CAST = "cast"
    INHERITANCE = "inheritance"
    VIEW = "view"
    PERMISSION = "permission"

    @property
    def is_shared(self) -> bool:
        """Whether objects of this type live in cluster-wide catalogs."""
        return self in SHARED_OBJECT_TYPES

    @property
    def is_schema_scoped(self) -> bool:
        """Whether objects of this type belong to a schema."""
        return self in SCHEMA_SCOPED_TYPES

    @property
    def is_table_child(self) -> bool:
        """Whether objects of this type are listed per table."""
        return self in TABLE_CHILD_TYPES


class QueryType(str, Enum):
    """Purposes a catalog query can serve."""

    LIST = "list"
    ATTRIBUTES = "attributes"
    DEPENDENCY_OBJECT = "dependency-object"
    COMMENT = "comment"
    IS_FROM_EXTENSION = "is-from-extension"


class FunctionScope(str, Enum):
    """Split of functions into the two import stages."""

    BUILTIN = "builtin"
    USER = "user"


SHARED_OBJECT_TYPES = frozenset({ObjectType.ROLE, ObjectType.TABLESPACE, ObjectType.DATABASE})

SCHEMA_SCOPED_TYPES = frozenset(
    {
        ObjectType.EXTENSION,
        ObjectType.FUNCTION,
        ObjectType.TYPE,
        ObjectType.AGGREGATE,
        ObjectType.OPERATOR,
        ObjectType.OPCLASS,
        ObjectType.OPFAMILY,
        ObjectType.COLLATION,
        ObjectType.CONVERSION,
        ObjectType.TABLE,
        ObjectType.VIEW,
        ObjectType.PERMISSION,
    }
)

TABLE_CHILD_TYPES = frozenset(
    {
        ObjectType.COLUMN,
        ObjectType.INDEX,
        ObjectType.RULE,
        ObjectType.TRIGGER,
        ObjectType.CONSTRAINT,
        ObjectType.INHERITANCE,
    }
)


@dataclass(frozen=True)
class ImportStep:
    """One stage of the discovery sequence."""

    obj_type: ObjectType
    function_scope: Optional[FunctionScope] = None

    @property
    def label(self) -> str:
        if self.function_scope:
            return f"{self.obj_type.value} ({self.function_scope.value})"
        return self.obj_type.value

    def extra_attributes(self) -> ExtraAttributes:
        """Filter attributes the step adds to its list queries."""
        if self.function_scope:
            return {"function-scope": self.function_scope.value}
        return {}


# Objects of a step may only reference objects of earlier steps.
IMPORT_ORDER: tuple[ImportStep, ...] = (
    ImportStep(ObjectType.ROLE),
    ImportStep(ObjectType.TABLESPACE),
    ImportStep(ObjectType.DATABASE),
    ImportStep(ObjectType.SCHEMA),
    ImportStep(ObjectType.EXTENSION),
    ImportStep(ObjectType.FUNCTION, FunctionScope.BUILTIN),
    ImportStep(ObjectType.TYPE),
    ImportStep(ObjectType.LANGUAGE),
    ImportStep(ObjectType.FUNCTION, FunctionScope.USER),
    ImportStep(ObjectType.AGGREGATE),
    ImportStep(ObjectType.OPERATOR),
    ImportStep(ObjectType.OPCLASS),
    ImportStep(ObjectType.OPFAMILY),
    ImportStep(ObjectType.COLLATION),
    ImportStep(ObjectType.CONVERSION),
    ImportStep(ObjectType.TABLE),
    ImportStep(ObjectType.COLUMN),
    ImportStep(ObjectType.INDEX),
    ImportStep(ObjectType.RULE),
    ImportStep(ObjectType.TRIGGER),
    ImportStep(ObjectType.CONSTRAINT),
    ImportStep(ObjectType.CAST),
    ImportStep(ObjectType.INHERITANCE),
    ImportStep(ObjectType.VIEW),
    ImportStep(ObjectType.PERMISSION),
)


def import_position(obj_type: ObjectType) -> int:
    """Index of the first import step for an object type."""
    for position, step in enumerate(IMPORT_ORDER):
        if step.obj_type == obj_type:
            return position
    raise ValueError(f"Object type not in import order: {obj_type}")


@dataclass(frozen=True)
class DependencyReference:
    """An oid found in one object's attributes that points at another object."""

    oid: str
    obj_type: ObjectType

    @property
    def is_none(self) -> bool:
        return self.oid in ("", INVALID_OID)
