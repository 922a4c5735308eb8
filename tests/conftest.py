"""Shared fixtures: a scripted connection standing in for a live server."""

from typing import Callable, Iterable, Optional, Union

import pytest
from catalog_reader.backends.postgresql.queries import build_template_store
from catalog_reader.base.connection import BaseConnection
from catalog_reader.base.models import ObjectType, QueryType
from catalog_reader.catalog import Catalog
from catalog_reader.exceptions import ConnectionError

Rows = list[dict[str, str]]
Response = Union[Rows, Callable[[dict], Rows]]

SCOPE_FILTERS = {"name": "name", "oid": "oid", "schema": "_schema", "table": "_table"}


def catalog_rows(rows: Iterable[dict], columns: Optional[tuple[str, ...]] = None) -> Callable[[dict], Rows]:
    """Answer a query the way the catalog would: honor the name, oid, schema and table filters.

    Keys starting with an underscore only take part in filtering and are not returned.
    """
    rows = list(rows)

    def handler(params: dict) -> Rows:
        result = []
        for row in rows:
            if any(params.get(param) and row.get(key) != params[param] for param, key in SCOPE_FILTERS.items()):
                continue
            visible = {k: v for k, v in row.items() if not k.startswith("_")}
            if columns:
                visible = {k: v for k, v in visible.items() if k in columns}
            result.append(visible)
        return result

    return handler


def listing(rows: Iterable[dict]) -> Callable[[dict], Rows]:
    """Answer a list query: only oid and name come back."""
    return catalog_rows(rows, columns=("oid", "name"))


class FakeConnection(BaseConnection):
    """Connection that answers catalog queries from scripted responses."""

    def __init__(self, templates=None):
        super().__init__(config=None)
        self.templates = templates or build_template_store()
        self.responses: dict[str, Response] = {}
        self.executed: list[tuple[str, dict]] = []
        self.is_open = True

    def connect(self) -> None:
        self.is_open = True

    def disconnect(self) -> None:
        self.is_open = False

    @property
    def connection(self):
        return self

    def respond(self, obj_type: ObjectType, query_type: QueryType, rows: Response) -> None:
        self.responses[self.templates.get(obj_type, query_type)] = rows

    def execute(self, query: str, params=None) -> Rows:
        if not self.is_open:
            raise ConnectionError("Not connected to database")
        params = dict(params or {})
        self.executed.append((query, params))
        response = self.responses.get(query, [])
        rows = response(params) if callable(response) else response
        return [dict(row) for row in rows]

    def executed_for(self, obj_type: ObjectType, query_type: QueryType) -> list[dict]:
        """Parameters of every execution of one template."""
        template = self.templates.get(obj_type, query_type)
        return [params for query, params in self.executed if query == template]


@pytest.fixture
def templates():
    return build_template_store()


@pytest.fixture
def fake(templates):
    return FakeConnection(templates)


@pytest.fixture
def catalog(fake, templates):
    return Catalog(fake, templates)


ROLES = [
    {"oid": "10", "name": "postgres", "superuser_bool": "t", "login_bool": "t", "system_bool": "f"},
    {"oid": "3373", "name": "pg_monitor", "system_bool": "t"},
]

DATABASES = [
    {"oid": "16384", "name": "appdb", "owner_oid": "10", "encoding": "UTF8", "template_bool": "f", "system_bool": "f"},
    {"oid": "1", "name": "template1", "owner_oid": "10", "encoding": "UTF8", "template_bool": "t", "system_bool": "t"},
]

SCHEMAS = [
    {"oid": "2200", "name": "public", "owner_oid": "10"},
    {"oid": "16385", "name": "app", "owner_oid": "10"},
    {"oid": "16386", "name": "sales", "owner_oid": "10"},
]

FUNCTIONS = [
    {"oid": "16390", "name": "f1", "_schema": "public", "schema_oid": "2200", "owner_oid": "10",
     "language": "plpgsql", "arguments": "integer"},
    {"oid": "16391", "name": "f1", "_schema": "public", "schema_oid": "2200", "owner_oid": "10",
     "language": "plpgsql", "arguments": "text"},
]

TABLES = [
    {"oid": "16400", "name": "orders", "_schema": "sales", "schema_oid": "16386", "owner_oid": "10",
     "tablespace_oid": "0", "unlogged_bool": "f"},
    {"oid": "16410", "name": "ext_config", "_schema": "public", "schema_oid": "2200", "owner_oid": "10",
     "tablespace_oid": "0"},
]

COLUMNS = [
    {"oid": "16400", "name": "id", "_schema": "sales", "_table": "orders", "table": "orders",
     "position": "1", "type": "integer", "not_null_bool": "t", "collation_oid": "0"},
    {"oid": "16400", "name": "note", "_schema": "sales", "_table": "orders", "table": "orders",
     "position": "2", "type": "text", "not_null_bool": "f", "collation_oid": "0"},
]


def user_functions(params):
    # Sample functions are all written in plpgsql.
    if params["function_scope"] == "builtin":
        return []
    return listing(FUNCTIONS)(params)


def comments(params):
    text = {("16400", "0"): "example", ("16400", "2"): "free text"}.get((params["oid"], params["subid"]))
    return [{"comment": text}] if text else []


@pytest.fixture
def database(fake):
    """A template database, three schemas, an overloaded function, a user table and a table owned by an extension."""
    fake.respond(ObjectType.ROLE, QueryType.LIST, listing(ROLES))
    fake.respond(ObjectType.ROLE, QueryType.ATTRIBUTES, catalog_rows(ROLES))
    fake.respond(ObjectType.ROLE, QueryType.DEPENDENCY_OBJECT, catalog_rows(ROLES, ("name",)))
    fake.respond(ObjectType.DATABASE, QueryType.LIST, listing(DATABASES))
    fake.respond(ObjectType.DATABASE, QueryType.ATTRIBUTES, catalog_rows(DATABASES))
    fake.respond(ObjectType.SCHEMA, QueryType.LIST, listing(SCHEMAS))
    fake.respond(ObjectType.SCHEMA, QueryType.ATTRIBUTES, catalog_rows(SCHEMAS))
    fake.respond(ObjectType.SCHEMA, QueryType.DEPENDENCY_OBJECT, catalog_rows(SCHEMAS, ("name",)))
    fake.respond(ObjectType.FUNCTION, QueryType.LIST, user_functions)
    fake.respond(ObjectType.FUNCTION, QueryType.ATTRIBUTES, catalog_rows(FUNCTIONS))
    fake.respond(ObjectType.TABLE, QueryType.LIST, listing(TABLES))
    fake.respond(ObjectType.TABLE, QueryType.ATTRIBUTES, catalog_rows(TABLES))
    fake.respond(ObjectType.TABLE, QueryType.COMMENT, comments)
    fake.respond(
        ObjectType.TABLE,
        QueryType.IS_FROM_EXTENSION,
        lambda params: [{"from_extension_bool": "t" if params["oid"] == "16410" else "f"}],
    )
    fake.respond(ObjectType.COLUMN, QueryType.LIST, listing(COLUMNS))
    fake.respond(ObjectType.COLUMN, QueryType.ATTRIBUTES, catalog_rows(COLUMNS))
    fake.respond(ObjectType.COLUMN, QueryType.COMMENT, comments)
    return fake
