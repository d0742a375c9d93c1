"""Entity <-> DTO conversion for described entities."""

from typing import Any, Dict, Mapping, Optional, Union

from pydantic import BaseModel
from sqlalchemy import inspect

from app.crud.descriptor import EntityDescriptor


def column_values(entity: Any) -> Dict[str, Any]:
    """Column attributes of ``entity`` keyed by attribute name."""
    mapper = inspect(entity).mapper
    return {attr.key: getattr(entity, attr.key) for attr in mapper.column_attrs}


def loaded_relation(entity: Any, relation: str) -> Any:
    """Value of ``relation`` if it is already loaded; never triggers a lazy load."""
    state = inspect(entity)
    if relation not in state.mapper.relationships or relation in state.unloaded:
        return None
    return state.dict.get(relation)


class Mapper:
    """
    Converts between ORM rows and the descriptor's pydantic schemas.

    Pure: no session access, no I/O. Relations that were not eager-loaded by
    the repository come out as ``None`` instead of erroring.
    """

    def __init__(self, descriptor: EntityDescriptor):
        self.descriptor = descriptor

    def to_dto(self, entity: Any) -> BaseModel:
        data = column_values(entity)
        for relation in self.descriptor.relations:
            value = loaded_relation(entity, relation)
            if value is None:
                data[relation] = None
            elif isinstance(value, (list, tuple, set)):
                data[relation] = [column_values(item) for item in value]
            else:
                data[relation] = column_values(value)
        return self.descriptor.read_schema.model_validate(data)

    def to_fields(self, dto: Union[BaseModel, Mapping[str, Any]], drop_none: bool = False) -> Dict[str, Any]:
        """Only the fields the caller actually supplied, keyed by attribute name."""
        if isinstance(dto, BaseModel):
            fields = dto.model_dump(exclude_unset=True)
        else:
            fields = dict(dto)
        if drop_none:
            fields = {key: value for key, value in fields.items() if value is not None}
        return fields

    def to_entity(self, dto: Union[BaseModel, Mapping[str, Any]]) -> Any:
        return self.descriptor.model(**self.to_fields(dto))


def dump(dto: Optional[BaseModel]) -> Optional[Dict[str, Any]]:
    """JSON-ready camelCase dict of a DTO."""
    if dto is None:
        return None
    return dto.model_dump(by_alias=True, mode="json")
