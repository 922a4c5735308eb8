"""Click CLI interface for the catalog reader."""

import json
import logging
import sys
from functools import wraps

import click

from . import __version__
from .backends import SUPPORTED_BACKENDS, get_backend
from .base.models import ObjectType
from .catalog import Catalog
from .config import CatalogConfig
from .discovery import CatalogWalker
from .exceptions import (
    BackendNotAvailableError,
    CardinalityError,
    CatalogReaderError,
    ConfigurationError,
    ConnectionError,
)

OBJECT_TYPES = [obj_type.value for obj_type in ObjectType]


def setup_logging(verbosity: int) -> None:
    """Configure logging based on verbosity level."""
    if verbosity == 0:
        level = logging.WARNING
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def connection_options(func):
    """Add the connection options shared by every command."""
    options = [
        click.option("--db-type", "-t", type=click.Choice(SUPPORTED_BACKENDS, case_sensitive=False),
                     default="postgresql", help="Database type"),
        click.option("-h", "--host", envvar="PGHOST", help="Database server hostname"),
        click.option("-P", "--port", type=int, envvar="PGPORT", help="Database server port"),
        click.option("-d", "--database", envvar="PGDATABASE", help="Database name"),
        click.option("-u", "--username", envvar="PGUSER", help="Database username"),
        click.option("-p", "--password", envvar="PGPASSWORD", help="Database password"),
        click.option("--connect-timeout", type=int, help="Seconds to wait for the server"),
        click.option("-v", "--verbose", count=True, help="Increase verbosity (-v info, -vv debug)"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def handle_errors(func):
    """Report catalog reader errors on stderr and exit with status 1."""

    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except BackendNotAvailableError as e:
            click.echo(f"Backend not available: {e}", err=True)
            sys.exit(1)
        except ConfigurationError as e:
            click.echo(f"Configuration error: {e}", err=True)
            sys.exit(1)
        except ConnectionError as e:
            click.echo(f"Connection error: {e}", err=True)
            sys.exit(1)
        except CardinalityError as e:
            click.echo(f"Ambiguous name: {e} (use --all to show every match)", err=True)
            sys.exit(1)
        except CatalogReaderError as e:
            click.echo(f"Error: {e}", err=True)
            sys.exit(1)

    return wrapper


def build_config(**kwargs) -> CatalogConfig:
    setup_logging(kwargs.pop("verbose", 0))
    kwargs.pop("db_type", None)
    config = CatalogConfig(**kwargs)
    config.validate()
    return config


def echo_json(data) -> None:
    click.echo(json.dumps(data, indent=2))


@click.group()
@click.version_option(version=__version__)
def cli():
    """Catalog Reader - describe PostgreSQL catalog objects as attribute records."""
    pass


@cli.command()
@click.argument("object_type", type=click.Choice(OBJECT_TYPES, case_sensitive=False))
@click.option("-s", "--schema", default="", help="Only objects of this schema")
@click.option("--table", default="", help="Only objects of this table")
@connection_options
@handle_errors
def count(object_type: str, schema: str, table: str, db_type: str, **kwargs) -> None:
    """Count the objects of a type."""
    config = build_config(**kwargs)
    ConnectionClass, build_templates = get_backend(db_type)

    with ConnectionClass(config) as conn:
        catalog = Catalog(conn, build_templates())
        click.echo(catalog.get_object_count(ObjectType(object_type.lower()), schema, table))


@cli.command("list")
@click.argument("object_type", type=click.Choice(OBJECT_TYPES, case_sensitive=False))
@click.option("-s", "--schema", default="", help="Only objects of this schema")
@click.option("--table", default="", help="Only objects of this table")
@connection_options
@handle_errors
def list_objects(object_type: str, schema: str, table: str, db_type: str, **kwargs) -> None:
    """List the names of the objects of a type."""
    config = build_config(**kwargs)
    ConnectionClass, build_templates = get_backend(db_type)

    with ConnectionClass(config) as conn:
        catalog = Catalog(conn, build_templates())
        for name in catalog.get_objects(ObjectType(object_type.lower()), schema, table):
            click.echo(name)


@cli.command()
@click.argument("object_type", type=click.Choice(OBJECT_TYPES, case_sensitive=False))
@click.argument("name")
@click.option("-s", "--schema", default="", help="Schema of the object")
@click.option("--table", default="", help="Table of the object")
@click.option("--all", "show_all", is_flag=True, help="Show every object matching the name")
@connection_options
@handle_errors
def show(object_type: str, name: str, schema: str, table: str, show_all: bool, db_type: str, **kwargs) -> None:
    """Show the attributes of an object as JSON."""
    config = build_config(**kwargs)
    ConnectionClass, build_templates = get_backend(db_type)

    extra = {}
    if schema:
        extra["schema"] = schema
    if table:
        extra["table"] = table

    with ConnectionClass(config) as conn:
        catalog = Catalog(conn, build_templates())
        obj_type = ObjectType(object_type.lower())
        if show_all:
            echo_json(catalog.get_multiple_attributes(name, obj_type, extra))
            return

        record = catalog.get_attributes(name, obj_type, extra)
        if not record:
            click.echo(f"No {obj_type.value} named '{name}'", err=True)
            sys.exit(1)
        echo_json(record)


@cli.command()
@click.option("--schemas", multiple=True, help="Include only specific schemas")
@click.option("--exclude-schemas", multiple=True, help="Exclude specific schemas")
@click.option("--object-types", multiple=True,
              type=click.Choice(OBJECT_TYPES + ["all"], case_sensitive=False),
              help="Object types to discover (default: all)")
@click.option("--include-system", is_flag=True, help="Include objects created by initdb")
@click.option("--summary", is_flag=True, help="Print counts per object type instead of records")
@click.option("-o", "--output", type=click.File("w"), default="-", help="Output file (default: stdout)")
@connection_options
@handle_errors
def dump(
    schemas: tuple[str, ...],
    exclude_schemas: tuple[str, ...],
    object_types: tuple[str, ...],
    include_system: bool,
    summary: bool,
    output,
    db_type: str,
    **kwargs,
) -> None:
    """Discover every object in dependency order and write the records as JSON."""
    config = build_config(
        include_schemas=list(schemas),
        exclude_schemas=list(exclude_schemas),
        object_types=[t.lower() for t in object_types] or ["all"],
        include_system_objects=include_system,
        **kwargs,
    )
    ConnectionClass, build_templates = get_backend(db_type)

    with ConnectionClass(config) as conn:
        walker = CatalogWalker(Catalog(conn, build_templates()), config)
        if summary:
            for label, total in walker.summary().items():
                click.echo(f"{label}: {total}", file=output)
            return

        records = [{"type": step.label, "attributes": record} for step, record in walker.walk()]
        output.write(json.dumps(records, indent=2))
        output.write("\n")
        click.echo(f"Discovered {len(records)} objects", err=True)


@cli.command("test-connection")
@connection_options
@handle_errors
def test_connection(db_type: str, **kwargs) -> None:
    """Test database connection."""
    config = build_config(**kwargs)
    ConnectionClass, _ = get_backend(db_type)

    click.echo(f"Connecting to {db_type} database...")
    with ConnectionClass(config) as conn:
        version = conn.get_version()
        click.echo("Connection successful!")
        click.echo(f"\nServer version:\n{version}")


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
