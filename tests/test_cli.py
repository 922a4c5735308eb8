"""Tests for the command line interface."""

import json

import pytest
from catalog_reader import __version__, cli as cli_module
from catalog_reader.backends.postgresql.queries import build_template_store
from catalog_reader.cli import cli
from click.testing import CliRunner
from conftest import FakeConnection

CONNECTION_ENV = {"PGHOST": None, "PGPORT": None, "PGDATABASE": None, "PGUSER": None, "PGPASSWORD": None}
CONNECTION_ARGS = ["-h", "localhost", "-d", "appdb", "-u", "postgres"]


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def backend(monkeypatch, database):
    """Route every command to the sample database."""

    class SampleConnection(FakeConnection):
        def __init__(self, config):
            FakeConnection.__init__(self, database.templates)
            self.config = config
            self.responses = database.responses

        def get_version(self):
            return "PostgreSQL 16.4"

    monkeypatch.setattr(cli_module, "get_backend", lambda db_type: (SampleConnection, build_template_store))
    return SampleConnection


class TestCli:
    """Tests for the click commands."""

    def test_help(self, runner):
        """Test that every command is listed."""
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        for command in ("count", "list", "show", "dump", "test-connection"):
            assert command in result.output

    def test_version(self, runner):
        """Test the version option."""
        result = runner.invoke(cli, ["--version"])
        assert __version__ in result.output

    def test_missing_host(self, runner):
        """Test that an incomplete configuration exits with an error."""
        result = runner.invoke(cli, ["count", "schema", "-d", "appdb", "-u", "postgres"], env=CONNECTION_ENV)
        assert result.exit_code == 1
        assert "Configuration error: Host is required" in result.output

    def test_unknown_object_type(self, runner):
        """Test that object types are checked by click."""
        result = runner.invoke(cli, ["count", "widget", *CONNECTION_ARGS], env=CONNECTION_ENV)
        assert result.exit_code == 2

    def test_count(self, runner, backend):
        """Test counting objects."""
        result = runner.invoke(cli, ["count", "schema", *CONNECTION_ARGS], env=CONNECTION_ENV)
        assert result.exit_code == 0
        assert result.output.strip() == "3"

    def test_list(self, runner, backend):
        """Test listing the tables of a schema."""
        result = runner.invoke(cli, ["list", "table", "-s", "sales", *CONNECTION_ARGS], env=CONNECTION_ENV)
        assert result.exit_code == 0
        assert result.output.split() == ["orders"]

    def test_show(self, runner, backend):
        """Test showing one record."""
        result = runner.invoke(cli, ["show", "table", "orders", "-s", "sales", *CONNECTION_ARGS], env=CONNECTION_ENV)
        assert result.exit_code == 0
        record = json.loads(result.output)
        assert record["comment"] == "example"
        assert record["owner"] == "postgres"

    def test_show_ambiguous(self, runner, backend):
        """Test that an overloaded name needs --all."""
        args = ["show", "function", "f1", "-s", "public", *CONNECTION_ARGS]
        result = runner.invoke(cli, args, env=CONNECTION_ENV)
        assert result.exit_code == 1
        assert "Ambiguous name" in result.output

        result = runner.invoke(cli, args + ["--all"], env=CONNECTION_ENV)
        assert result.exit_code == 0
        assert len(json.loads(result.output)) == 2

    def test_show_missing(self, runner, backend):
        """Test showing an unknown object."""
        result = runner.invoke(cli, ["show", "schema", "nowhere", *CONNECTION_ARGS], env=CONNECTION_ENV)
        assert result.exit_code == 1
        assert "No schema named 'nowhere'" in result.output

    def test_dump_summary(self, runner, backend):
        """Test the per-step summary."""
        result = runner.invoke(
            cli, ["dump", "--summary", "--object-types", "schema", *CONNECTION_ARGS], env=CONNECTION_ENV
        )
        assert result.exit_code == 0
        assert result.output.strip() == "schema: 3"

    def test_dump_file(self, runner, backend, tmp_path):
        """Test writing records to a file."""
        output = tmp_path / "catalog.json"
        result = runner.invoke(
            cli, ["dump", "--schemas", "sales", "-o", str(output), *CONNECTION_ARGS], env=CONNECTION_ENV
        )
        assert result.exit_code == 0
        records = json.loads(output.read_text())
        assert [r["attributes"]["name"] for r in records if r["type"] == "database"] == ["appdb"]
        assert [r["attributes"]["name"] for r in records if r["type"] == "schema"] == ["sales"]
        assert [r["attributes"]["name"] for r in records if r["type"] == "table"] == ["orders"]
        assert f"Discovered {len(records)} objects" in result.output

    def test_test_connection(self, runner, backend):
        """Test the connection check."""
        result = runner.invoke(cli, ["test-connection", *CONNECTION_ARGS], env=CONNECTION_ENV)
        assert result.exit_code == 0
        assert "PostgreSQL 16.4" in result.output
