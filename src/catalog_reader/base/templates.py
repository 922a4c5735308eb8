"""Registry of catalog query templates."""

import logging
from typing import Mapping, Optional

from ..exceptions import UnsupportedQueryError
from .models import ObjectType, QueryType
from .normalizer import parameter_name

logger = logging.getLogger(__name__)


class QueryTemplateStore:
    """Maps an object type and a query purpose to a query template.

    Besides the templates the store knows, per object type, which attributes
    hold oids of other objects and which attribute numbers sub-objects for
    comment lookups. Templates may reference any of the default parameters;
    callers only supply the ones they filter on.
    """

    def __init__(self, default_parameters: Optional[Mapping[str, str]] = None):
        self.default_parameters: dict[str, str] = dict(default_parameters or {})
        self._templates: dict[tuple[ObjectType, QueryType], str] = {}
        self._dependencies: dict[ObjectType, tuple[str, ...]] = {}
        self._comment_subids: dict[ObjectType, str] = {}

    def register(self, obj_type: ObjectType, query_type: QueryType, template: str) -> None:
        self._templates[(obj_type, query_type)] = template

    def has(self, obj_type: ObjectType, query_type: QueryType) -> bool:
        return (obj_type, query_type) in self._templates

    def get(self, obj_type: ObjectType, query_type: QueryType) -> str:
        """Get the template for an object type and purpose."""
        try:
            return self._templates[(obj_type, query_type)]
        except KeyError:
            raise UnsupportedQueryError(obj_type, query_type) from None

    def set_dependencies(self, obj_type: ObjectType, attributes: tuple[str, ...]) -> None:
        self._dependencies[obj_type] = tuple(attributes)

    def dependencies(self, obj_type: ObjectType) -> tuple[str, ...]:
        """Attributes of this object type that reference other objects by oid."""
        return self._dependencies.get(obj_type, ())

    def set_comment_subid(self, obj_type: ObjectType, attribute: str) -> None:
        self._comment_subids[obj_type] = attribute

    def comment_subid(self, obj_type: ObjectType) -> Optional[str]:
        """Attribute holding the sub-object number used for comment lookups."""
        return self._comment_subids.get(obj_type)

    def object_types(self) -> list[ObjectType]:
        """Object types with at least one registered template, in enum order."""
        registered = {obj_type for obj_type, _ in self._templates}
        return [obj_type for obj_type in ObjectType if obj_type in registered]

    def parameters(self, attributes: Optional[Mapping[str, str]] = None) -> dict[str, str]:
        """Build the bound parameter set from dash-separated attributes."""
        params = dict(self.default_parameters)
        for key, value in (attributes or {}).items():
            params[parameter_name(key)] = value
        return params

    def __len__(self) -> int:
        return len(self._templates)
