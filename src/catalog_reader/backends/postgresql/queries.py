"""Catalog query templates for PostgreSQL.

Every object type is described once by a ``CatalogSource``: where its rows
live, how its oid and name are spelled and which attribute columns it
carries. The template store renders the five query purposes from that table
when it is built, so supporting another object type means adding one entry
to ``CATALOG_SOURCES``.

Templates use psycopg named placeholders. Filters that may be left open
compare the parameter against the empty string first, so every template
accepts the same parameter set.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from ...base.models import ObjectType, QueryType
from ...base.templates import QueryTemplateStore

logger = logging.getLogger(__name__)

# Oids below this were assigned by initdb.
FIRST_NORMAL_OID = 16384

SCHEMA_FILTER = "(%(schema)s = '' OR n.nspname = %(schema)s)"
TABLE_FILTER = "(%(table)s = '' OR c.relname = %(table)s)"
FUNCTION_SCOPE_FILTER = (
    "(%(function_scope)s = '' OR "
    "(%(function_scope)s = 'builtin') = (l.lanname IN ('c', 'sql', 'internal')))"
)

# Parameters every template may reference; callers override them.
DEFAULT_PARAMETERS = {
    "name": "",
    "schema": "",
    "table": "",
    "oid": "",
    "subid": "0",
    "function_scope": "",
}


@dataclass(frozen=True)
class CatalogSource:
    """How one object type is read from the system catalogs."""

    from_clause: str
    oid: str
    name: str
    columns: str
    where: tuple[str, ...] = ()
    catalog: Optional[str] = None
    order_by: str = "name, oid"
    list_order_by: Optional[str] = None
    dependencies: tuple[str, ...] = ()
    dependency_name: Optional[str] = None
    comment_subid: Optional[str] = None
    extension_member: bool = True
    distinct_list: bool = False

    def _where(self, *extra: str) -> str:
        conditions = self.where + extra
        if not conditions:
            return ""
        return "\nWHERE " + "\n  AND ".join(conditions)

    def list_query(self) -> str:
        distinct = "DISTINCT " if self.distinct_list else ""
        return (
            f"SELECT {distinct}{self.oid} AS oid, {self.name} AS name\n"
            f"FROM {self.from_clause}"
            f"{self._where()}\n"
            f"ORDER BY {self.list_order_by or self.order_by}"
        )

    def attributes_query(self) -> str:
        by_name = f"(%(name)s = '' OR {self.name} = %(name)s)"
        by_oid = f"(%(oid)s = '' OR {self.oid}::text = %(oid)s)"
        return (
            f"SELECT {self.oid} AS oid, {self.name} AS name,\n"
            f"  {self.columns}\n"
            f"FROM {self.from_clause}"
            f"{self._where(by_name, by_oid)}\n"
            f"ORDER BY {self.order_by}"
        )

    def dependency_query(self) -> Optional[str]:
        if not self.dependency_name:
            return None
        return (
            f"SELECT {self.dependency_name} AS name\n"
            f"FROM {self.from_clause}\n"
            f"WHERE {self.oid}::text = %(oid)s"
        )

    def comment_query(self, shared: bool) -> Optional[str]:
        if not self.catalog:
            return None
        if shared:
            return (
                "SELECT d.description AS comment\n"
                "FROM pg_catalog.pg_shdescription d\n"
                f"WHERE d.classoid = 'pg_catalog.{self.catalog}'::regclass\n"
                "  AND d.objoid::text = %(oid)s"
            )
        return (
            "SELECT d.description AS comment\n"
            "FROM pg_catalog.pg_description d\n"
            f"WHERE d.classoid = 'pg_catalog.{self.catalog}'::regclass\n"
            "  AND d.objoid::text = %(oid)s\n"
            "  AND d.objsubid::text = %(subid)s"
        )

    def extension_query(self) -> Optional[str]:
        if not self.catalog or not self.extension_member:
            return None
        return (
            "SELECT EXISTS (\n"
            "  SELECT 1 FROM pg_catalog.pg_depend d\n"
            f"  WHERE d.classid = 'pg_catalog.{self.catalog}'::regclass\n"
            "    AND d.objid::text = %(oid)s\n"
            "    AND d.deptype = 'e'\n"
            ") AS from_extension_bool"
        )


def _list_of(select: str, separator: str = ",") -> str:
    """Collapse a one-column subquery into a separated string."""
    return f"array_to_string(ARRAY({select}), '{separator}')"


CATALOG_SOURCES: dict[ObjectType, CatalogSource] = {
    ObjectType.ROLE: CatalogSource(
        catalog="pg_authid",
        from_clause="pg_catalog.pg_roles r",
        oid="r.oid",
        name="r.rolname",
        dependency_name="r.rolname",
        extension_member=False,
        columns=",\n  ".join([
            "r.rolsuper AS superuser_bool",
            "r.rolinherit AS inherit_bool",
            "r.rolcreaterole AS create_role_bool",
            "r.rolcreatedb AS create_db_bool",
            "r.rolcanlogin AS login_bool",
            "r.rolreplication AS replication_bool",
            "r.rolbypassrls AS bypass_rls_bool",
            "r.rolconnlimit AS conn_limit",
            "r.rolvaliduntil::text AS validity",
            "r.rolname ~ '^pg_' AS system_bool",
            _list_of(
                "SELECT g.rolname FROM pg_catalog.pg_auth_members m "
                "JOIN pg_catalog.pg_roles g ON g.oid = m.roleid "
                "WHERE m.member = r.oid ORDER BY 1"
            ) + " AS member_of",
            _list_of(
                "SELECT g.rolname FROM pg_catalog.pg_auth_members m "
                "JOIN pg_catalog.pg_roles g ON g.oid = m.member "
                "WHERE m.roleid = r.oid AND m.admin_option ORDER BY 1"
            ) + " AS admin_roles",
        ]),
    ),
    ObjectType.TABLESPACE: CatalogSource(
        catalog="pg_tablespace",
        from_clause="pg_catalog.pg_tablespace t",
        oid="t.oid",
        name="t.spcname",
        dependency_name="t.spcname",
        dependencies=("owner",),
        extension_member=False,
        columns=",\n  ".join([
            "t.spcowner AS owner_oid",
            "pg_catalog.pg_tablespace_location(t.oid) AS directory",
            "array_to_string(t.spcoptions, ',') AS options",
            "t.spcname ~ '^pg_' AS system_bool",
        ]),
    ),
    ObjectType.DATABASE: CatalogSource(
        catalog="pg_database",
        from_clause="pg_catalog.pg_database d",
        oid="d.oid",
        name="d.datname",
        dependencies=("owner", "tablespace"),
        extension_member=False,
        columns=",\n  ".join([
            "d.datdba AS owner_oid",
            "d.dattablespace AS tablespace_oid",
            "pg_catalog.pg_encoding_to_char(d.encoding) AS encoding",
            "d.datcollate AS lc_collate",
            "d.datctype AS lc_ctype",
            "d.datconnlimit AS conn_limit",
            "d.datistemplate AS template_bool",
            "d.datistemplate AS system_bool",
            "d.datallowconn AS allow_conn_bool",
        ]),
    ),
    ObjectType.SCHEMA: CatalogSource(
        catalog="pg_namespace",
        from_clause="pg_catalog.pg_namespace n",
        oid="n.oid",
        name="n.nspname",
        dependency_name="n.nspname",
        dependencies=("owner",),
        columns=",\n  ".join([
            "n.nspowner AS owner_oid",
            "(n.nspname ~ '^pg_' OR n.nspname = 'information_schema') AS system_bool",
        ]),
    ),
    ObjectType.EXTENSION: CatalogSource(
        catalog="pg_extension",
        from_clause="pg_catalog.pg_extension e\nJOIN pg_catalog.pg_namespace n ON n.oid = e.extnamespace",
        oid="e.oid",
        name="e.extname",
        where=(SCHEMA_FILTER,),
        dependencies=("owner", "schema"),
        extension_member=False,
        columns=",\n  ".join([
            "e.extowner AS owner_oid",
            "e.extnamespace AS schema_oid",
            "e.extversion AS version",
            "e.extrelocatable AS relocatable_bool",
        ]),
    ),
    ObjectType.FUNCTION: CatalogSource(
        catalog="pg_proc",
        from_clause=(
            "pg_catalog.pg_proc p\n"
            "JOIN pg_catalog.pg_namespace n ON n.oid = p.pronamespace\n"
            "JOIN pg_catalog.pg_language l ON l.oid = p.prolang"
        ),
        oid="p.oid",
        name="p.proname",
        where=("p.prokind IN ('f', 'p', 'w')", SCHEMA_FILTER, FUNCTION_SCOPE_FILTER),
        dependency_name="p.oid::regprocedure::text",
        dependencies=("owner", "schema"),
        columns=",\n  ".join([
            "p.proowner AS owner_oid",
            "p.pronamespace AS schema_oid",
            "l.lanname AS language",
            "CASE p.prokind WHEN 'p' THEN 'procedure' WHEN 'w' THEN 'window' ELSE 'function' END AS routine_type",
            "pg_catalog.pg_get_function_identity_arguments(p.oid) AS signature",
            "pg_catalog.pg_get_function_arguments(p.oid) AS arguments",
            "pg_catalog.pg_get_function_result(p.oid) AS return_type",
            "p.proretset AS returns_setof_bool",
            "p.prosecdef AS security_definer_bool",
            "p.proleakproof AS leakproof_bool",
            "p.proisstrict AS strict_bool",
            "CASE p.provolatile WHEN 'i' THEN 'IMMUTABLE' WHEN 's' THEN 'STABLE' ELSE 'VOLATILE' END AS volatility",
            "p.procost::text AS execution_cost",
            "p.prorows::text AS row_amount",
            "p.probin AS library",
            "p.prosrc AS definition",
        ]),
    ),
    ObjectType.TYPE: CatalogSource(
        catalog="pg_type",
        from_clause="pg_catalog.pg_type t\nJOIN pg_catalog.pg_namespace n ON n.oid = t.typnamespace",
        oid="t.oid",
        name="t.typname",
        where=(
            "t.typtype IN ('b', 'c', 'd', 'e', 'r')",
            "t.typcategory <> 'A'",
            "(t.typrelid = 0 OR (SELECT k.relkind FROM pg_catalog.pg_class k WHERE k.oid = t.typrelid) = 'c')",
            SCHEMA_FILTER,
        ),
        dependency_name="pg_catalog.format_type(t.oid, NULL)",
        dependencies=("owner", "schema", "collation"),
        columns=",\n  ".join([
            "t.typowner AS owner_oid",
            "t.typnamespace AS schema_oid",
            "CASE WHEN t.typtype = 'd' THEN t.typcollation ELSE 0::oid END AS collation_oid",
            "CASE t.typtype WHEN 'b' THEN 'base' WHEN 'c' THEN 'composite' WHEN 'd' THEN 'domain' "
            "WHEN 'e' THEN 'enumeration' WHEN 'r' THEN 'range' END AS configuration",
            "CASE WHEN t.typtype = 'd' THEN pg_catalog.format_type(t.typbasetype, t.typtypmod) END AS base_type",
            "t.typlen AS internal_length",
            "t.typbyval AS by_value_bool",
            "t.typalign AS alignment",
            "t.typstorage AS storage",
            "t.typcategory AS category",
            "t.typispreferred AS preferred_bool",
            "t.typdelim AS delimiter",
            "t.typdefault AS default_value",
            "t.typnotnull AS not_null_bool",
            "CASE WHEN t.typtype = 'b' THEN t.typinput::text END AS input_function",
            "CASE WHEN t.typtype = 'b' THEN t.typoutput::text END AS output_function",
            "CASE WHEN t.typtype = 'b' THEN NULLIF(t.typreceive::oid, 0)::regproc::text END AS receive_function",
            "CASE WHEN t.typtype = 'b' THEN NULLIF(t.typsend::oid, 0)::regproc::text END AS send_function",
            _list_of(
                "SELECT e.enumlabel FROM pg_catalog.pg_enum e WHERE e.enumtypid = t.oid ORDER BY e.enumsortorder"
            ) + " AS enumerations",
            _list_of(
                "SELECT quote_ident(a.attname) || ' ' || pg_catalog.format_type(a.atttypid, a.atttypmod) "
                "FROM pg_catalog.pg_attribute a WHERE a.attrelid = t.typrelid "
                "AND a.attnum > 0 AND NOT a.attisdropped ORDER BY a.attnum",
                ";",
            ) + " AS type_attributes",
            "(SELECT pg_catalog.format_type(r.rngsubtype, NULL) FROM pg_catalog.pg_range r "
            "WHERE r.rngtypid = t.oid) AS subtype",
            _list_of(
                "SELECT pg_catalog.pg_get_constraintdef(k.oid) FROM pg_catalog.pg_constraint k "
                "WHERE k.contypid = t.oid ORDER BY k.conname",
                ";",
            ) + " AS constraints",
        ]),
    ),
    ObjectType.LANGUAGE: CatalogSource(
        catalog="pg_language",
        from_clause="pg_catalog.pg_language l",
        oid="l.oid",
        name="l.lanname",
        dependency_name="l.lanname",
        dependencies=("owner",),
        columns=",\n  ".join([
            "l.lanowner AS owner_oid",
            "l.lanispl AS procedural_bool",
            "l.lanpltrusted AS trusted_bool",
            "NULLIF(l.lanplcallfoid, 0)::regprocedure::text AS handler_function",
            "NULLIF(l.laninline, 0)::regprocedure::text AS inline_function",
            "NULLIF(l.lanvalidator, 0)::regprocedure::text AS validator_function",
            f"l.oid < {FIRST_NORMAL_OID} AS system_bool",
        ]),
    ),
    ObjectType.AGGREGATE: CatalogSource(
        catalog="pg_proc",
        from_clause=(
            "pg_catalog.pg_aggregate a\n"
            "JOIN pg_catalog.pg_proc p ON p.oid = a.aggfnoid\n"
            "JOIN pg_catalog.pg_namespace n ON n.oid = p.pronamespace"
        ),
        oid="p.oid",
        name="p.proname",
        where=(SCHEMA_FILTER,),
        dependencies=("owner", "schema"),
        columns=",\n  ".join([
            "p.proowner AS owner_oid",
            "p.pronamespace AS schema_oid",
            "pg_catalog.pg_get_function_identity_arguments(p.oid) AS arguments",
            "a.aggtransfn::text AS transition",
            "pg_catalog.format_type(a.aggtranstype, NULL) AS state_type",
            "NULLIF(a.aggfinalfn::oid, 0)::regproc::text AS final_function",
            "a.agginitval AS initial_condition",
            "NULLIF(a.aggsortop, 0)::regoperator::text AS sort_operator",
        ]),
    ),
    ObjectType.OPERATOR: CatalogSource(
        catalog="pg_operator",
        from_clause="pg_catalog.pg_operator o\nJOIN pg_catalog.pg_namespace n ON n.oid = o.oprnamespace",
        oid="o.oid",
        name="o.oprname",
        where=(SCHEMA_FILTER,),
        dependencies=("owner", "schema"),
        columns=",\n  ".join([
            "o.oprowner AS owner_oid",
            "o.oprnamespace AS schema_oid",
            "pg_catalog.format_type(NULLIF(o.oprleft, 0), NULL) AS left_type",
            "pg_catalog.format_type(NULLIF(o.oprright, 0), NULL) AS right_type",
            "pg_catalog.format_type(o.oprresult, NULL) AS result_type",
            "o.oprcode::text AS function",
            "NULLIF(o.oprcom, 0)::regoperator::text AS commutator",
            "NULLIF(o.oprnegate, 0)::regoperator::text AS negator",
            "NULLIF(o.oprrest::oid, 0)::regproc::text AS restriction",
            "NULLIF(o.oprjoin::oid, 0)::regproc::text AS join_function",
            "o.oprcanhash AS hashes_bool",
            "o.oprcanmerge AS merges_bool",
        ]),
    ),
    ObjectType.OPCLASS: CatalogSource(
        catalog="pg_opclass",
        from_clause=(
            "pg_catalog.pg_opclass oc\n"
            "JOIN pg_catalog.pg_namespace n ON n.oid = oc.opcnamespace\n"
            "JOIN pg_catalog.pg_am am ON am.oid = oc.opcmethod\n"
            "JOIN pg_catalog.pg_opfamily f ON f.oid = oc.opcfamily"
        ),
        oid="oc.oid",
        name="oc.opcname",
        where=(SCHEMA_FILTER,),
        dependencies=("owner", "schema"),
        columns=",\n  ".join([
            "oc.opcowner AS owner_oid",
            "oc.opcnamespace AS schema_oid",
            "am.amname AS index_type",
            "f.opfname AS family",
            "pg_catalog.format_type(oc.opcintype, NULL) AS type",
            "pg_catalog.format_type(NULLIF(oc.opckeytype, 0), NULL) AS storage",
            "oc.opcdefault AS default_bool",
        ]),
    ),
    ObjectType.OPFAMILY: CatalogSource(
        catalog="pg_opfamily",
        from_clause=(
            "pg_catalog.pg_opfamily f\n"
            "JOIN pg_catalog.pg_namespace n ON n.oid = f.opfnamespace\n"
            "JOIN pg_catalog.pg_am am ON am.oid = f.opfmethod"
        ),
        oid="f.oid",
        name="f.opfname",
        where=(SCHEMA_FILTER,),
        dependencies=("owner", "schema"),
        columns=",\n  ".join([
            "f.opfowner AS owner_oid",
            "f.opfnamespace AS schema_oid",
            "am.amname AS index_type",
        ]),
    ),
    ObjectType.COLLATION: CatalogSource(
        catalog="pg_collation",
        from_clause="pg_catalog.pg_collation co\nJOIN pg_catalog.pg_namespace n ON n.oid = co.collnamespace",
        oid="co.oid",
        name="co.collname",
        where=(SCHEMA_FILTER,),
        dependency_name="quote_ident(n.nspname) || '.' || quote_ident(co.collname)",
        dependencies=("owner", "schema"),
        columns=",\n  ".join([
            "co.collowner AS owner_oid",
            "co.collnamespace AS schema_oid",
            "pg_catalog.pg_encoding_to_char(co.collencoding) AS encoding",
            "co.collprovider AS provider",
            "co.collcollate AS lc_collate",
            "co.collctype AS lc_ctype",
        ]),
    ),
    ObjectType.CONVERSION: CatalogSource(
        catalog="pg_conversion",
        from_clause="pg_catalog.pg_conversion cv\nJOIN pg_catalog.pg_namespace n ON n.oid = cv.connamespace",
        oid="cv.oid",
        name="cv.conname",
        where=(SCHEMA_FILTER,),
        dependencies=("owner", "schema"),
        columns=",\n  ".join([
            "cv.conowner AS owner_oid",
            "cv.connamespace AS schema_oid",
            "pg_catalog.pg_encoding_to_char(cv.conforencoding) AS source_encoding",
            "pg_catalog.pg_encoding_to_char(cv.contoencoding) AS destination_encoding",
            "cv.conproc::text AS function",
            "cv.condefault AS default_bool",
        ]),
    ),
    ObjectType.TABLE: CatalogSource(
        catalog="pg_class",
        from_clause="pg_catalog.pg_class c\nJOIN pg_catalog.pg_namespace n ON n.oid = c.relnamespace",
        oid="c.oid",
        name="c.relname",
        where=("c.relkind IN ('r', 'p')", SCHEMA_FILTER),
        dependencies=("owner", "schema", "tablespace"),
        columns=",\n  ".join([
            "c.relowner AS owner_oid",
            "c.relnamespace AS schema_oid",
            "c.reltablespace AS tablespace_oid",
            "c.relkind = 'p' AS partitioned_bool",
            "c.relpersistence = 'u' AS unlogged_bool",
            "c.relrowsecurity AS row_security_bool",
            "array_to_string(c.reloptions, ',') AS options",
            "CASE WHEN c.relkind = 'p' THEN pg_catalog.pg_get_partkeydef(c.oid) END AS partition_key",
            "CASE WHEN c.relispartition THEN pg_catalog.pg_get_expr(c.relpartbound, c.oid) END AS partition_bound",
        ]),
    ),
    ObjectType.COLUMN: CatalogSource(
        catalog="pg_class",
        from_clause=(
            "pg_catalog.pg_attribute a\n"
            "JOIN pg_catalog.pg_class c ON c.oid = a.attrelid\n"
            "JOIN pg_catalog.pg_namespace n ON n.oid = c.relnamespace\n"
            "JOIN pg_catalog.pg_type t ON t.oid = a.atttypid\n"
            "LEFT JOIN pg_catalog.pg_attrdef d ON d.adrelid = a.attrelid AND d.adnum = a.attnum"
        ),
        oid="c.oid",
        name="a.attname",
        where=(
            "a.attnum > 0",
            "NOT a.attisdropped",
            "c.relkind IN ('r', 'p', 'v', 'm', 'f')",
            SCHEMA_FILTER,
            TABLE_FILTER,
        ),
        order_by="a.attnum",
        dependencies=("collation",),
        comment_subid="position",
        extension_member=False,
        columns=",\n  ".join([
            'c.relname AS "table"',
            "a.attnum AS position",
            "pg_catalog.format_type(a.atttypid, a.atttypmod) AS type",
            "a.attnotnull AS not_null_bool",
            "pg_catalog.pg_get_expr(d.adbin, d.adrelid) AS default_value",
            "CASE WHEN a.attcollation <> t.typcollation THEN a.attcollation ELSE 0::oid END AS collation_oid",
            "a.attidentity::text AS identity",
            "a.attgenerated::text AS generated",
            "NOT a.attislocal AS inherited_bool",
        ]),
    ),
    ObjectType.INDEX: CatalogSource(
        catalog="pg_class",
        from_clause=(
            "pg_catalog.pg_index i\n"
            "JOIN pg_catalog.pg_class ic ON ic.oid = i.indexrelid\n"
            "JOIN pg_catalog.pg_class c ON c.oid = i.indrelid\n"
            "JOIN pg_catalog.pg_namespace n ON n.oid = c.relnamespace\n"
            "JOIN pg_catalog.pg_am am ON am.oid = ic.relam"
        ),
        oid="ic.oid",
        name="ic.relname",
        where=(
            "NOT EXISTS (SELECT 1 FROM pg_catalog.pg_constraint k "
            "WHERE k.conindid = ic.oid AND k.contype IN ('p', 'u', 'x'))",
            SCHEMA_FILTER,
            TABLE_FILTER,
        ),
        dependencies=("tablespace",),
        columns=",\n  ".join([
            'c.relname AS "table"',
            "ic.reltablespace AS tablespace_oid",
            "am.amname AS index_type",
            "i.indisunique AS unique_bool",
            _list_of(
                "SELECT pg_catalog.pg_get_indexdef(ic.oid, k, true) "
                "FROM generate_series(1, i.indnkeyatts) AS k",
                ";",
            ) + " AS elements",
            "pg_catalog.pg_get_expr(i.indpred, i.indrelid) AS predicate",
            "array_to_string(ic.reloptions, ',') AS options",
            "pg_catalog.pg_get_indexdef(ic.oid) AS definition",
        ]),
    ),
    ObjectType.RULE: CatalogSource(
        catalog="pg_rewrite",
        from_clause=(
            "pg_catalog.pg_rewrite rw\n"
            "JOIN pg_catalog.pg_class c ON c.oid = rw.ev_class\n"
            "JOIN pg_catalog.pg_namespace n ON n.oid = c.relnamespace"
        ),
        oid="rw.oid",
        name="rw.rulename",
        where=("rw.rulename <> '_RETURN'", SCHEMA_FILTER, TABLE_FILTER),
        columns=",\n  ".join([
            'c.relname AS "table"',
            "CASE rw.ev_type WHEN '1' THEN 'SELECT' WHEN '2' THEN 'UPDATE' "
            "WHEN '3' THEN 'INSERT' WHEN '4' THEN 'DELETE' END AS event",
            "rw.is_instead AS instead_bool",
            "rw.ev_enabled <> 'D' AS enabled_bool",
            "pg_catalog.pg_get_ruledef(rw.oid) AS definition",
        ]),
    ),
    ObjectType.TRIGGER: CatalogSource(
        catalog="pg_trigger",
        from_clause=(
            "pg_catalog.pg_trigger tg\n"
            "JOIN pg_catalog.pg_class c ON c.oid = tg.tgrelid\n"
            "JOIN pg_catalog.pg_namespace n ON n.oid = c.relnamespace"
        ),
        oid="tg.oid",
        name="tg.tgname",
        where=("NOT tg.tgisinternal", SCHEMA_FILTER, TABLE_FILTER),
        columns=",\n  ".join([
            'c.relname AS "table"',
            "CASE WHEN tg.tgtype & 2 = 2 THEN 'BEFORE' WHEN tg.tgtype & 64 = 64 THEN 'INSTEAD OF' "
            "ELSE 'AFTER' END AS firing_type",
            "tg.tgtype & 1 = 1 AS per_row_bool",
            "tg.tgtype & 4 = 4 AS insert_bool",
            "tg.tgtype & 8 = 8 AS delete_bool",
            "tg.tgtype & 16 = 16 AS update_bool",
            "tg.tgtype & 32 = 32 AS truncate_bool",
            "tg.tgfoid::regproc::text AS function",
            "tg.tgenabled <> 'D' AS enabled_bool",
            "tg.tgconstraint <> 0 AS constraint_bool",
            "tg.tgdeferrable AS deferrable_bool",
            "tg.tginitdeferred AS deferred_bool",
            "pg_catalog.pg_get_triggerdef(tg.oid) AS definition",
        ]),
    ),
    ObjectType.CONSTRAINT: CatalogSource(
        catalog="pg_constraint",
        from_clause=(
            "pg_catalog.pg_constraint k\n"
            "JOIN pg_catalog.pg_class c ON c.oid = k.conrelid\n"
            "JOIN pg_catalog.pg_namespace n ON n.oid = c.relnamespace"
        ),
        oid="k.oid",
        name="k.conname",
        where=(SCHEMA_FILTER, TABLE_FILTER),
        dependencies=("tablespace",),
        columns=",\n  ".join([
            'c.relname AS "table"',
            "CASE k.contype WHEN 'p' THEN 'primary-key' WHEN 'u' THEN 'unique' WHEN 'f' THEN 'foreign-key' "
            "WHEN 'c' THEN 'check' WHEN 'x' THEN 'exclude' WHEN 'n' THEN 'not-null' "
            "ELSE k.contype::text END AS type",
            "COALESCE((SELECT ic.reltablespace FROM pg_catalog.pg_class ic WHERE ic.oid = k.conindid), 0::oid) "
            "AS tablespace_oid",
            _list_of(
                "SELECT a.attname FROM unnest(k.conkey) WITH ORDINALITY AS u(attnum, ord) "
                "JOIN pg_catalog.pg_attribute a ON a.attrelid = k.conrelid AND a.attnum = u.attnum "
                "ORDER BY u.ord"
            ) + " AS columns",
            "NULLIF(k.confrelid, 0)::regclass::text AS referenced_table",
            _list_of(
                "SELECT a.attname FROM unnest(k.confkey) WITH ORDINALITY AS u(attnum, ord) "
                "JOIN pg_catalog.pg_attribute a ON a.attrelid = k.confrelid AND a.attnum = u.attnum "
                "ORDER BY u.ord"
            ) + " AS referenced_columns",
            "CASE k.confupdtype WHEN 'a' THEN 'NO ACTION' WHEN 'r' THEN 'RESTRICT' WHEN 'c' THEN 'CASCADE' "
            "WHEN 'n' THEN 'SET NULL' WHEN 'd' THEN 'SET DEFAULT' END AS update_action",
            "CASE k.confdeltype WHEN 'a' THEN 'NO ACTION' WHEN 'r' THEN 'RESTRICT' WHEN 'c' THEN 'CASCADE' "
            "WHEN 'n' THEN 'SET NULL' WHEN 'd' THEN 'SET DEFAULT' END AS delete_action",
            "k.condeferrable AS deferrable_bool",
            "k.condeferred AS deferred_bool",
            "k.conislocal AS local_bool",
            "pg_catalog.pg_get_constraintdef(k.oid) AS definition",
        ]),
    ),
    ObjectType.CAST: CatalogSource(
        catalog="pg_cast",
        from_clause="pg_catalog.pg_cast ct",
        oid="ct.oid",
        name="pg_catalog.format_type(ct.castsource, NULL) || ' AS ' || pg_catalog.format_type(ct.casttarget, NULL)",
        columns=",\n  ".join([
            "pg_catalog.format_type(ct.castsource, NULL) AS source_type",
            "pg_catalog.format_type(ct.casttarget, NULL) AS destination_type",
            "NULLIF(ct.castfunc, 0)::regprocedure::text AS function",
            "CASE ct.castcontext WHEN 'e' THEN 'explicit' WHEN 'a' THEN 'assignment' "
            "WHEN 'i' THEN 'implicit' END AS cast_type",
            "CASE ct.castmethod WHEN 'f' THEN 'function' WHEN 'i' THEN 'inout' "
            "WHEN 'b' THEN 'binary' END AS method",
            f"ct.oid < {FIRST_NORMAL_OID} AS system_bool",
        ]),
    ),
    ObjectType.INHERITANCE: CatalogSource(
        from_clause=(
            "pg_catalog.pg_inherits h\n"
            "JOIN pg_catalog.pg_class c ON c.oid = h.inhrelid\n"
            "JOIN pg_catalog.pg_namespace n ON n.oid = c.relnamespace\n"
            "JOIN pg_catalog.pg_class pc ON pc.oid = h.inhparent\n"
            "JOIN pg_catalog.pg_namespace pn ON pn.oid = pc.relnamespace"
        ),
        oid="c.oid",
        name="c.relname",
        where=("c.relkind IN ('r', 'p')", SCHEMA_FILTER, TABLE_FILTER),
        order_by="name, h.inhseqno",
        list_order_by="name, oid",
        distinct_list=True,
        columns=",\n  ".join([
            "pn.nspname AS parent_schema",
            "pc.relname AS parent",
            "h.inhseqno AS position",
            "c.relispartition AS partition_bool",
        ]),
    ),
    ObjectType.VIEW: CatalogSource(
        catalog="pg_class",
        from_clause="pg_catalog.pg_class c\nJOIN pg_catalog.pg_namespace n ON n.oid = c.relnamespace",
        oid="c.oid",
        name="c.relname",
        where=("c.relkind IN ('v', 'm')", SCHEMA_FILTER),
        dependencies=("owner", "schema", "tablespace"),
        columns=",\n  ".join([
            "c.relowner AS owner_oid",
            "c.relnamespace AS schema_oid",
            "c.reltablespace AS tablespace_oid",
            "c.relkind = 'm' AS materialized_bool",
            "array_to_string(c.reloptions, ',') AS options",
            "pg_catalog.pg_get_viewdef(c.oid) AS definition",
        ]),
    ),
    ObjectType.PERMISSION: CatalogSource(
        from_clause=(
            "pg_catalog.pg_class c\n"
            "JOIN pg_catalog.pg_namespace n ON n.oid = c.relnamespace\n"
            "CROSS JOIN LATERAL aclexplode(c.relacl) AS acl\n"
            "LEFT JOIN pg_catalog.pg_roles ge ON ge.oid = acl.grantee\n"
            "LEFT JOIN pg_catalog.pg_roles gr ON gr.oid = acl.grantor"
        ),
        oid="c.oid",
        name="c.relname",
        where=("c.relkind IN ('r', 'p', 'v', 'm', 'S', 'f')", SCHEMA_FILTER, TABLE_FILTER),
        distinct_list=True,
        columns=",\n  ".join([
            "CASE c.relkind WHEN 'S' THEN 'sequence' WHEN 'v' THEN 'view' WHEN 'm' THEN 'view' "
            "WHEN 'f' THEN 'foreign-table' ELSE 'table' END AS object_type",
            "COALESCE(ge.rolname, 'PUBLIC') AS grantee",
            "gr.rolname AS grantor",
            "acl.privilege_type AS privilege",
            "acl.is_grantable AS grantable_bool",
        ]),
    ),
}


def build_template_store(sources: Optional[dict[ObjectType, CatalogSource]] = None) -> QueryTemplateStore:
    """Render the templates of every purpose each source supports."""
    if sources is None:
        sources = CATALOG_SOURCES

    store = QueryTemplateStore(DEFAULT_PARAMETERS)
    for obj_type, source in sources.items():
        store.register(obj_type, QueryType.LIST, source.list_query())
        store.register(obj_type, QueryType.ATTRIBUTES, source.attributes_query())

        optional = {
            QueryType.DEPENDENCY_OBJECT: source.dependency_query(),
            QueryType.COMMENT: source.comment_query(obj_type.is_shared),
            QueryType.IS_FROM_EXTENSION: source.extension_query(),
        }
        for query_type, template in optional.items():
            if template:
                store.register(obj_type, query_type, template)

        store.set_dependencies(obj_type, source.dependencies)
        if source.comment_subid:
            store.set_comment_subid(obj_type, source.comment_subid)

    logger.debug(f"Built {len(store)} catalog query templates for {len(sources)} object types")
    return store
