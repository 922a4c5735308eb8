"""Custom exceptions for the catalog reader."""


class CatalogReaderError(Exception):
    """Base exception for all catalog reader errors."""

    pass


class ConnectionError(CatalogReaderError):
    """Session unusable or query rejected by the server."""

    pass


class ConfigurationError(CatalogReaderError):
    """Error in configuration or parameters."""

    pass


class BackendNotAvailableError(CatalogReaderError):
    """Required backend driver is not installed."""

    pass


class UnsupportedQueryError(CatalogReaderError):
    """No catalog query is registered for an object type and purpose."""

    def __init__(self, obj_type, query_type):
        self.obj_type = obj_type
        self.query_type = query_type
        super().__init__(f"No {query_type.value} query registered for object type '{obj_type.value}'")


class CardinalityError(CatalogReaderError):
    """A single-result fetch matched more than one catalog row."""

    def __init__(self, name: str, obj_type, count: int):
        self.name = name
        self.obj_type = obj_type
        self.count = count
        super().__init__(f"Expected one {obj_type.value} named '{name}', found {count}")


class MalformedResultError(CatalogReaderError):
    """A catalog row is missing attributes required for its object type."""

    pass
