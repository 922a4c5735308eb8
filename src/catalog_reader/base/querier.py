"""Base class for components that run catalog queries."""

import logging
from typing import Mapping, Optional

from ..exceptions import ConnectionError
from .connection import BaseConnection, Row
from .models import ObjectType, QueryType
from .templates import QueryTemplateStore


class BaseQuerier:
    """Runs templated catalog queries against the current connection.

    The connection is borrowed: it is opened and closed by whoever built it,
    and may be swapped between calls.
    """

    def __init__(self, connection: Optional[BaseConnection], templates: QueryTemplateStore):
        self.connection = connection
        self.templates = templates
        self.logger = logging.getLogger(self.__class__.__name__)

    def set_connection(self, connection: BaseConnection) -> None:
        self.connection = connection

    def execute_query(
        self,
        query_type: QueryType,
        obj_type: ObjectType,
        attributes: Optional[Mapping[str, str]] = None,
    ) -> list[Row]:
        """Run the template for an object type and purpose."""
        template = self.templates.get(obj_type, query_type)
        if self.connection is None:
            raise ConnectionError("No connection set on the catalog")

        params = self.templates.parameters(attributes)
        self.logger.debug(f"Running {query_type.value} query for {obj_type.value} with {params}")
        return self.connection.execute(template, params)
