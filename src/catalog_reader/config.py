"""Configuration dataclasses for the catalog reader."""

from dataclasses import dataclass, field
from typing import Optional

from .exceptions import ConfigurationError

DEFAULT_PORT = 5432

SYSTEM_SCHEMAS = ["pg_catalog", "information_schema", "pg_toast"]


@dataclass
class CatalogConfig:
    """Configuration for a catalog reading session."""

    # Connection parameters
    host: Optional[str] = None
    port: Optional[int] = None
    database: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None
    connect_timeout: Optional[int] = None
    application_name: str = "catalog-reader"

    # Filtering
    include_schemas: list[str] = field(default_factory=list)
    exclude_schemas: list[str] = field(default_factory=list)
    object_types: list[str] = field(default_factory=lambda: ["all"])
    include_system_objects: bool = False

    # Behavior
    verbosity: int = 0

    def __post_init__(self) -> None:
        """Fill in defaults after initialization."""
        if not self.exclude_schemas and not self.include_system_objects:
            self.exclude_schemas = list(SYSTEM_SCHEMAS)

        if self.port is None and self.host:
            self.port = DEFAULT_PORT

    def validate(self) -> None:
        """Validate the configuration is complete and consistent."""
        if not self.host:
            raise ConfigurationError("Host is required")
        if not self.database:
            raise ConfigurationError("Database is required")
        if not self.username:
            raise ConfigurationError("Username is required")
        if self.port is not None and not 0 < self.port < 65536:
            raise ConfigurationError(f"Port out of range: {self.port}")
        if self.connect_timeout is not None and self.connect_timeout < 0:
            raise ConfigurationError("Connect timeout must not be negative")

    def connection_params(self) -> dict:
        """Keyword arguments for the driver's connect call."""
        params = {
            "host": self.host,
            "port": self.port or DEFAULT_PORT,
            "dbname": self.database,
            "user": self.username,
            "application_name": self.application_name,
        }
        if self.password:
            params["password"] = self.password
        if self.connect_timeout is not None:
            params["connect_timeout"] = self.connect_timeout
        return params

    def should_include_schema(self, schema_name: str) -> bool:
        """Check if a schema should be included based on filters."""
        if self.include_schemas:
            return schema_name in self.include_schemas
        return schema_name not in self.exclude_schemas

    def should_extract(self, object_type: str) -> bool:
        """Check if an object type should be extracted."""
        return "all" in self.object_types or object_type in self.object_types
