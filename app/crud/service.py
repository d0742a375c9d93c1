"""
Generic services: validation, lifecycle hooks, transactions and error
translation around the descriptor-driven repositories.
"""

from contextlib import contextmanager
from datetime import date, datetime, time
from typing import Any, Dict, Generic, Iterator, List, Mapping, Optional, Sequence, Tuple, TypeVar, Union
import logging

import pydantic
from pydantic import BaseModel
from pydantic.alias_generators import to_camel
from sqlalchemy import Boolean
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import (
    ConflictError,
    InternalError,
    ErrorCode,
    NotFoundError,
    TourismAPIException,
    ValidationError,
    group_validation_errors,
)
from app.crud.descriptor import AssociationDescriptor, EntityDescriptor
from app.crud.mapper import Mapper
from app.crud.pagination import PageMeta, PageRequest
from app.crud.repository import AssociationRepository, Repository

logger = logging.getLogger(__name__)

T = TypeVar("T")

_TRUE = {"true", "1", "yes"}
_FALSE = {"false", "0", "no"}


class PageResult(Generic[T]):
    """Items of one page plus its paging metadata."""

    def __init__(self, items: List[T], meta: PageMeta):
        self.items = items
        self.meta = meta

    def to_dict(self) -> Dict[str, Any]:
        return {
            "items": [item.model_dump(by_alias=True, mode="json") if isinstance(item, BaseModel) else item
                      for item in self.items],
            "pagination": {
                "page": self.meta.page,
                "limit": self.meta.limit,
                "total": self.meta.total,
                "totalPages": self.meta.total_pages,
                "hasNext": self.meta.has_next,
                "hasPrev": self.meta.has_prev,
            },
        }


def _constraint_kind(exc: IntegrityError) -> str:
    orig = exc.orig
    code = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    text = str(orig).lower()
    if code == "23505" or "unique" in text or "duplicate" in text:
        return "unique"
    if code == "23503" or "foreign key" in text:
        return "foreign_key"
    if code == "23502" or "not null" in text:
        return "not_null"
    return "other"


def translate_integrity_error(exc: IntegrityError, entity_name: str) -> TourismAPIException:
    kind = _constraint_kind(exc)
    if kind == "unique":
        return ConflictError(f"{entity_name} already exists")
    if kind == "foreign_key":
        return ValidationError("Referenced resource does not exist",
                               error_code=ErrorCode.INVALID_IDENTIFIER)
    if kind == "not_null":
        return ValidationError("A required field is missing")
    return InternalError("Database constraint violated", error_code=ErrorCode.DATABASE_ERROR)


@contextmanager
def unit_of_work(db: Session, entity_name: str, action: str) -> Iterator[Session]:
    """
    Commit on success; on failure roll back, log and re-raise as a taxonomy error.

    Args:
        db: Request-scoped session
        entity_name: Used in log lines and conflict messages
        action: Verb for log lines ("create", "update", ...)
    """
    try:
        yield db
        db.commit()
    except TourismAPIException:
        db.rollback()
        raise
    except IntegrityError as e:
        db.rollback()
        translated = translate_integrity_error(e, entity_name)
        logger.warning(
            f"Integrity error on {action} {entity_name}: {e.orig}",
            extra={"entity": entity_name, "action": action, "status_code": translated.status_code},
        )
        raise translated from e
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Database error on {action} {entity_name}: {e}", exc_info=True,
                     extra={"entity": entity_name, "action": action})
        raise InternalError(f"Failed to {action} {entity_name}", error_code=ErrorCode.DATABASE_ERROR) from e


def validate_payload(schema: type, payload: Union[BaseModel, Mapping[str, Any]]) -> BaseModel:
    if isinstance(payload, schema):
        return payload
    if isinstance(payload, BaseModel):
        payload = payload.model_dump(exclude_unset=True)
    try:
        return schema.model_validate(payload)
    except pydantic.ValidationError as e:
        raise ValidationError("Validation failed", group_validation_errors(e.errors())) from e


class CrudService:
    """
    get / list / create / update / delete for one described entity.

    Writes run: validation, descriptor hook, repository mutation, commit,
    reload, mapping.
    """

    def __init__(self, descriptor: EntityDescriptor, db: Session, scope: Optional[Mapping[str, Any]] = None):
        self.descriptor = descriptor
        self.db = db
        self.repository = Repository(descriptor, db, scope)
        self.mapper = Mapper(descriptor)

    # ==================== Reads ====================

    def find_entity(self, entity_id: Any) -> Any:
        entity = self.repository.find_by_id(entity_id)
        if entity is None:
            raise NotFoundError.for_entity(self.descriptor.name, entity_id)
        return entity

    def get(self, entity_id: Any) -> BaseModel:
        return self.mapper.to_dto(self.find_entity(entity_id))

    def list(
        self,
        page: Optional[PageRequest] = None,
        search: Optional[str] = None,
        filters: Optional[Mapping[str, Any]] = None,
    ) -> PageResult:
        page = page or PageRequest()
        typed_filters = self.coerce_filters(filters or {})
        term = search.strip() if search else None
        items, total = self.repository.list(page, term or None, typed_filters)
        return PageResult([self.mapper.to_dto(item) for item in items], PageMeta.build(page, total))

    def coerce_filters(self, filters: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Map query-string filters onto allowed attributes and column types.

        Unknown keys are ignored; a value that does not fit its column raises
        ValidationError.
        """
        allowed = {}
        for attribute in self.descriptor.filter_fields:
            allowed[attribute] = attribute
            allowed[to_camel(attribute)] = attribute

        typed: Dict[str, Any] = {}
        violations = []
        for key, raw in filters.items():
            attribute = allowed.get(key)
            if attribute is None:
                continue
            column = self.descriptor.column(attribute)
            try:
                typed[attribute] = self._coerce(column, raw)
            except (TypeError, ValueError, NotImplementedError):
                violations.append({"field": key, "errors": [f"Invalid value for {key}"]})
        if violations:
            raise ValidationError("Invalid filter", violations)
        return typed

    @staticmethod
    def _coerce(column, raw: Any) -> Any:
        if not isinstance(raw, str):
            return raw
        if isinstance(column.type, Boolean):
            lowered = raw.lower()
            if lowered in _TRUE:
                return True
            if lowered in _FALSE:
                return False
            raise ValueError(raw)
        python_type = column.type.python_type
        if python_type in (date, datetime, time):
            return python_type.fromisoformat(raw)
        return python_type(raw)

    # ==================== Writes ====================

    def create(self, payload: Union[BaseModel, Mapping[str, Any]]) -> BaseModel:
        dto = validate_payload(self.descriptor.create_schema, payload)
        with unit_of_work(self.db, self.descriptor.name, "create"):
            fields = self.mapper.to_fields(dto)
            if self.descriptor.before_create is not None:
                fields = self.descriptor.before_create(self.db, fields)
            entity = self.repository.create(self.mapper.to_entity(fields))
        entity_id = getattr(entity, self.descriptor.id_attribute)
        logger.info(f"Created {self.descriptor.name} {entity_id}", extra={"entity": self.descriptor.name, "entity_id": entity_id})
        return self.mapper.to_dto(self.repository.find_by_id(entity_id, populate_existing=True) or entity)

    def update(self, entity_id: Any, payload: Union[BaseModel, Mapping[str, Any]]) -> BaseModel:
        dto = validate_payload(self.descriptor.update_schema, payload)
        with unit_of_work(self.db, self.descriptor.name, "update"):
            entity = self.find_entity(entity_id)
            fields = self.mapper.to_fields(dto, drop_none=True)
            if self.descriptor.before_update is not None:
                fields = self.descriptor.before_update(self.db, entity, fields)
            self.repository.apply(entity, fields)
        logger.info(f"Updated {self.descriptor.name} {entity_id}", extra={"entity": self.descriptor.name, "entity_id": entity_id})
        return self.mapper.to_dto(self.repository.find_by_id(entity_id, populate_existing=True) or entity)

    def delete(self, entity_id: Any) -> None:
        with unit_of_work(self.db, self.descriptor.name, "delete"):
            entity = self.find_entity(entity_id)
            handled = False
            if self.descriptor.on_delete is not None:
                handled = self.descriptor.on_delete(self.db, entity)
            if not handled:
                self.repository.remove(entity)
        logger.info(f"Deleted {self.descriptor.name} {entity_id}", extra={"entity": self.descriptor.name, "entity_id": entity_id})


class AssociationService:
    """
    list / available / add / remove for a link between two described entities.

    Labels for the right-hand entities are resolved in ``language`` with
    ``fallback_language`` as a second choice.
    """

    def __init__(
        self,
        descriptor: AssociationDescriptor,
        db: Session,
        language: Optional[str] = None,
        fallback_language: Optional[str] = None,
    ):
        self.descriptor = descriptor
        self.db = db
        self.repository = AssociationRepository(descriptor, db)
        self.left = Repository(descriptor.left, db)
        self.right = Repository(descriptor.right, db)
        self.right_mapper = Mapper(descriptor.right)
        self.language = language or fallback_language or "es"
        self.fallback_language = fallback_language or self.language

    def _require_left(self, left_id: Any) -> None:
        if not self.left.exists(left_id):
            raise NotFoundError.for_entity(self.descriptor.left.name, left_id)

    def _require_right(self, right_id: Any) -> None:
        if not self.right.exists(right_id):
            raise NotFoundError.for_entity(self.descriptor.right.name, right_id)

    def _labels(self, entities: Sequence[Any]) -> Dict[Any, Optional[str]]:
        resolver = self.descriptor.right.resolve_labels
        if resolver is None or not entities:
            return {}
        return resolver(self.db, entities, self.language, self.fallback_language)

    def _summary(self, entity: Any, labels: Mapping[Any, Optional[str]]) -> Dict[str, Any]:
        right = self.descriptor.right
        entity_id = getattr(entity, right.id_attribute)
        summary = {"id": entity_id, "name": labels.get(entity_id)}
        if right.label_attribute:
            summary[to_camel(right.label_attribute)] = getattr(entity, right.label_attribute)
        return summary

    def _item(self, row: Any, labels: Mapping[Any, Optional[str]]) -> Dict[str, Any]:
        entity = getattr(row, self.descriptor.right_relation)
        item = self._summary(entity, labels)
        created = getattr(row, self.descriptor.created_field)
        item["linkedAt"] = created.isoformat() if created is not None else None
        for name in self.descriptor.link_fields:
            item[to_camel(name)] = getattr(row, name)
        item[to_camel(self.descriptor.right_relation)] = self.right_mapper.to_dto(entity).model_dump(by_alias=True, mode="json")
        return item

    def list_for(self, left_id: Any) -> List[Dict[str, Any]]:
        self._require_left(left_id)
        rows = self.repository.list_for_left(left_id)
        labels = self._labels([getattr(row, self.descriptor.right_relation) for row in rows])
        return [self._item(row, labels) for row in rows]

    def available_for(self, left_id: Any) -> List[Dict[str, Any]]:
        self._require_left(left_id)
        entities = self.repository.available_for_left(left_id)
        labels = self._labels(entities)
        return [self._summary(entity, labels) for entity in entities]

    def add(self, left_id: Any, right_id: Any, values: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        """
        Link ``right_id`` to ``left_id``, storing ``values`` on the link row.

        Raises:
            NotFoundError: either side does not exist
            ConflictError: the pair is already linked (checked up front and
                enforced by the table's unique constraint under concurrency)
        """
        self._require_left(left_id)
        self._require_right(right_id)
        if self.repository.find_association(left_id, right_id) is not None:
            logger.warning(f"{self.descriptor.name} {left_id}->{right_id} already exists")
            raise ConflictError(f"{self.descriptor.name} already exists")
        with unit_of_work(self.db, self.descriptor.name, "create"):
            row = self.repository.create_association(left_id, right_id, values)
        logger.info(f"Created {self.descriptor.name} {left_id}->{right_id}")
        entity = self.right.find_by_id(right_id)
        return self._item(row, self._labels([entity]))

    def remove(self, left_id: Any, right_id: Any) -> None:
        with unit_of_work(self.db, self.descriptor.name, "delete"):
            if not self.repository.delete_association(left_id, right_id):
                raise NotFoundError(f"{self.descriptor.name} not found")
        logger.info(f"Deleted {self.descriptor.name} {left_id}->{right_id}")

    def reorder(self, left_id: Any, positions: Sequence[Tuple[Any, int]]) -> List[Dict[str, Any]]:
        """
        Move each linked ``right_id`` to its new position in one transaction.

        Raises:
            ValidationError: the link is not an ordered one
            NotFoundError: ``left_id`` is missing or a right id is not linked;
                nothing is changed in that case
        """
        if not self.descriptor.order_field:
            raise ValidationError(f"{self.descriptor.name} links have no order")
        self._require_left(left_id)
        with unit_of_work(self.db, self.descriptor.name, "reorder"):
            for right_id, order in positions:
                if self.repository.set_order(left_id, right_id, order) is None:
                    raise NotFoundError(f"{self.descriptor.name} not found")
        logger.info(f"Reordered {len(positions)} {self.descriptor.name} links of {left_id}")
        return self.list_for(left_id)

    def is_linked(self, left_id: Any, right_id: Any) -> bool:
        return self.repository.find_association(left_id, right_id) is not None


__all__ = [
    "AssociationService",
    "CrudService",
    "PageResult",
    "translate_integrity_error",
    "unit_of_work",
    "validate_payload",
]
