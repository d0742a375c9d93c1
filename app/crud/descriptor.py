"""
Entity descriptors: the configuration values that turn the generic
repository/service/router stack into a concrete resource.

A resource is described, not subclassed. Everything that differs between
cities, users, stories and the rest (model, schemas, search, relations,
ordering and lifecycle hooks) is a field on one of these dataclasses.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Sequence, Tuple, Type

from pydantic import BaseModel
from sqlalchemy import or_
from sqlalchemy.orm import Session
from sqlalchemy.sql import Select

# (statement, term) -> statement
SearchHook = Callable[[Select, str], Select]
# (session, fields) -> fields
CreateHook = Callable[[Session, Dict[str, Any]], Dict[str, Any]]
# (session, entity, fields) -> fields
UpdateHook = Callable[[Session, Any, Dict[str, Any]], Dict[str, Any]]
# (session, entity) -> True when the hook removed/disabled the entity itself
DeleteHook = Callable[[Session, Any], bool]
# (session, entities, language, fallback_language) -> {id: label}
LabelResolver = Callable[[Session, Sequence[Any], str, str], Dict[Any, Optional[str]]]

ASC = "asc"
DESC = "desc"


@dataclass(frozen=True)
class EntityDescriptor:
    name: str
    model: Type[Any]
    read_schema: Type[BaseModel]
    create_schema: Type[BaseModel]
    update_schema: Type[BaseModel]
    id_attribute: str = "id"
    search: Optional[SearchHook] = None
    relations: Tuple[str, ...] = ()
    filter_fields: Tuple[str, ...] = ()
    sort_fields: Tuple[str, ...] = ("id",)
    default_order: Tuple[Tuple[str, str], ...] = (("id", ASC),)
    soft_delete: bool = False
    label_attribute: Optional[str] = None
    resolve_labels: Optional[LabelResolver] = None
    before_create: Optional[CreateHook] = None
    before_update: Optional[UpdateHook] = None
    on_delete: Optional[DeleteHook] = None

    def id_column(self):
        return getattr(self.model, self.id_attribute)

    def column(self, attribute: str):
        return getattr(self.model, attribute)


@dataclass(frozen=True)
class AssociationDescriptor:
    """A many-to-many link row between two described entities.

    The table's UNIQUE(left_field, right_field) constraint is what actually
    prevents duplicates; the service's existence check only answers early.

    With ``order_field`` set the links form an ordered list: new links go to
    the end unless the caller names a position, and the list can be reordered.
    ``link_fields`` are extra columns on the link row that are echoed back with
    each item; ``link_schema`` is the request body that accepts them.
    """
    name: str
    model: Type[Any]
    left: EntityDescriptor
    right: EntityDescriptor
    left_field: str
    right_field: str
    right_relation: str
    created_field: str = "created_at"
    extra: Dict[str, Any] = field(default_factory=dict)
    order_field: Optional[str] = None
    link_fields: Tuple[str, ...] = ()
    link_schema: Optional[Type[BaseModel]] = None


def ilike_search(*columns) -> SearchHook:
    """Case-insensitive substring match on any of ``columns``."""

    def apply(statement: Select, term: str) -> Select:
        pattern = f"%{term}%"
        return statement.where(or_(*[column.ilike(pattern) for column in columns]))

    return apply
