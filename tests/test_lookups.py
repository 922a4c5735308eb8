"""Tests for dependency, extension and comment lookups."""

from catalog_reader.base.models import ObjectType, QueryType
from catalog_reader.lookups import CommentFetcher, DependencyResolver, ExtensionChecker
from conftest import catalog_rows

ROLES = [{"oid": "10", "name": "postgres"}, {"oid": "16384", "name": "app"}]


class TestDependencyResolver:
    """Tests for DependencyResolver."""

    def test_resolves_name(self, fake, templates):
        """Test a known oid."""
        fake.respond(ObjectType.ROLE, QueryType.DEPENDENCY_OBJECT, catalog_rows(ROLES, ("name",)))
        resolver = DependencyResolver(fake, templates)
        assert resolver.resolve("16384", ObjectType.ROLE) == "app"

    def test_invalid_oid_skips_query(self, fake, templates):
        """Test that the unused reference resolves to empty without a round trip."""
        resolver = DependencyResolver(fake, templates)
        assert resolver.resolve("0", ObjectType.TABLESPACE) == ""
        assert resolver.resolve("", ObjectType.TABLESPACE) == ""
        assert fake.executed == []

    def test_unknown_oid(self, fake, templates):
        """Test that a dangling oid resolves to empty."""
        fake.respond(ObjectType.ROLE, QueryType.DEPENDENCY_OBJECT, catalog_rows(ROLES, ("name",)))
        resolver = DependencyResolver(fake, templates)
        assert resolver.resolve("99999", ObjectType.ROLE) == ""

    def test_resolve_record(self, fake, templates):
        """Test that oid entries are replaced by names."""
        fake.respond(ObjectType.ROLE, QueryType.DEPENDENCY_OBJECT, catalog_rows(ROLES, ("name",)))
        resolver = DependencyResolver(fake, templates)
        record = {"oid": "1", "owner-oid": "10", "tablespace-oid": "0"}

        resolver.resolve_record(record, ("owner", "tablespace"))

        assert record == {"oid": "1", "owner": "postgres", "tablespace": ""}

    def test_resolve_record_keeps_given_values(self, fake, templates):
        """Test that values supplied by the caller are not looked up."""
        resolver = DependencyResolver(fake, templates)
        record = {"schema-oid": "2200", "schema": "public"}

        resolver.resolve_record(record, ("schema",))

        assert record == {"schema": "public"}
        assert fake.executed == []


class TestExtensionChecker:
    """Tests for ExtensionChecker."""

    def test_member(self, fake, templates):
        """Test an object created by an extension."""
        fake.respond(ObjectType.TABLE, QueryType.IS_FROM_EXTENSION, [{"from_extension_bool": "t"}])
        checker = ExtensionChecker(fake, templates)

        assert checker.is_from_extension("16400", ObjectType.TABLE)
        record = checker.mark_record({"oid": "16400"}, ObjectType.TABLE)
        assert record["from-extension"] == "1"
        assert record["system"] == "1"
        assert record["sql-disabled"] == "1"

    def test_not_member(self, fake, templates):
        """Test a user object."""
        fake.respond(ObjectType.TABLE, QueryType.IS_FROM_EXTENSION, [{"from_extension_bool": "f"}])
        checker = ExtensionChecker(fake, templates)

        record = checker.mark_record({"oid": "16400"}, ObjectType.TABLE)
        assert record == {"oid": "16400", "from-extension": ""}

    def test_type_without_membership(self, fake, templates):
        """Test that types which cannot be members are not queried."""
        checker = ExtensionChecker(fake, templates)
        assert not checker.is_from_extension("10", ObjectType.ROLE)
        assert fake.executed == []


class TestCommentFetcher:
    """Tests for CommentFetcher."""

    def test_shared_comment(self, fake, templates):
        """Test a comment on a cluster-wide object."""
        fake.respond(ObjectType.ROLE, QueryType.COMMENT, [{"comment": "administrators"}])
        fetcher = CommentFetcher(fake, templates)

        assert fetcher.get_comment("10", ObjectType.ROLE) == "administrators"
        query, _ = fake.executed[0]
        assert "pg_shdescription" in query

    def test_column_comment_uses_position(self, fake, templates):
        """Test that column comments are looked up by attribute number."""
        fake.respond(ObjectType.COLUMN, QueryType.COMMENT, [{"comment": "identifier"}])
        fetcher = CommentFetcher(fake, templates)

        record = fetcher.attach_comment({"oid": "16400", "position": "2"}, ObjectType.COLUMN)

        assert record["comment"] == "identifier"
        params = fake.executed_for(ObjectType.COLUMN, QueryType.COMMENT)[0]
        assert params["oid"] == "16400"
        assert params["subid"] == "2"

    def test_no_comment(self, fake, templates):
        """Test that a missing comment is empty."""
        fetcher = CommentFetcher(fake, templates)
        record = fetcher.attach_comment({"oid": "16400"}, ObjectType.TABLE)
        assert record["comment"] == ""
        assert fake.executed_for(ObjectType.TABLE, QueryType.COMMENT)[0]["subid"] == "0"

    def test_type_without_comments(self, fake, templates):
        """Test types whose comments are not looked up."""
        fetcher = CommentFetcher(fake, templates)
        assert fetcher.get_comment("16400", ObjectType.PERMISSION) == ""
        assert fake.executed == []
