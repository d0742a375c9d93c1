"""
Generic repositories driven by descriptors.

Repositories only ``flush``; committing and translating store errors is
the service layer's job.
"""

from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple
import logging

from sqlalchemy import func, select
from sqlalchemy.orm import Session, selectinload
from sqlalchemy.sql import Select

from app.core.db import utcnow
from app.crud.descriptor import AssociationDescriptor, EntityDescriptor, DESC
from app.crud.pagination import PageRequest

logger = logging.getLogger(__name__)


class Repository:
    """
    Data access for one described entity.

    ``scope`` pins equality conditions on every query and is stamped onto
    created rows; nested resources (a city's stories) use it to stay inside
    their parent.
    """

    def __init__(self, descriptor: EntityDescriptor, db: Session, scope: Optional[Mapping[str, Any]] = None):
        self.descriptor = descriptor
        self.model = descriptor.model
        self.db = db
        self.scope = dict(scope or {})

    # ==================== Query building ====================

    def _base_select(self) -> Select:
        stmt = select(self.model)
        if self.descriptor.soft_delete:
            stmt = stmt.where(self.model.is_deleted.is_(False))
        for attribute, value in self.scope.items():
            stmt = stmt.where(getattr(self.model, attribute) == value)
        return stmt

    def _with_relations(self, stmt: Select) -> Select:
        for relation in self.descriptor.relations:
            stmt = stmt.options(selectinload(getattr(self.model, relation)))
        return stmt

    def _ordering(self, page: PageRequest) -> List[Any]:
        if page.sort_by and page.sort_by in self.descriptor.sort_fields:
            keys = [(page.sort_by, page.sort_order)]
        else:
            keys = list(self.descriptor.default_order)
        # stable pages when the sort key has ties
        if self.descriptor.id_attribute not in {attribute for attribute, _ in keys}:
            keys.append((self.descriptor.id_attribute, "asc"))
        order = []
        for attribute, direction in keys:
            column = getattr(self.model, attribute)
            order.append(column.desc() if direction == DESC else column.asc())
        return order

    def build_list_statement(self, search: Optional[str] = None, filters: Optional[Mapping[str, Any]] = None) -> Select:
        stmt = self._base_select()
        for attribute, value in (filters or {}).items():
            stmt = stmt.where(getattr(self.model, attribute) == value)
        if search and self.descriptor.search is not None:
            stmt = self.descriptor.search(stmt, search)
        return stmt

    # ==================== Read Operations ====================

    def find_by_id(self, entity_id: Any, populate_existing: bool = False) -> Optional[Any]:
        stmt = self._with_relations(self._base_select().where(self.descriptor.id_column() == entity_id))
        if populate_existing:
            stmt = stmt.execution_options(populate_existing=True)
        return self.db.scalars(stmt).first()

    def exists(self, entity_id: Any) -> bool:
        stmt = self._base_select().where(self.descriptor.id_column() == entity_id)
        return self.db.scalar(select(func.count()).select_from(stmt.subquery())) > 0

    def count(self) -> int:
        return self.db.scalar(select(func.count()).select_from(self._base_select().subquery()))

    def list(
        self,
        page: PageRequest,
        search: Optional[str] = None,
        filters: Optional[Mapping[str, Any]] = None,
    ) -> Tuple[Sequence[Any], int]:
        """
        One page of entities plus the total matching the same search and filters.

        Args:
            page: Normalised paging request
            search: Free-text term handed to the descriptor's search hook
            filters: Attribute equality filters

        Returns:
            (items, total)
        """
        stmt = self.build_list_statement(search, filters)
        total = self.db.scalar(select(func.count()).select_from(stmt.subquery()))
        paged = stmt.order_by(*self._ordering(page)).offset(page.offset).limit(page.limit)
        items = self.db.scalars(self._with_relations(paged)).all()
        return items, total

    # ==================== Write Operations ====================

    def create(self, entity: Any) -> Any:
        for attribute, value in self.scope.items():
            setattr(entity, attribute, value)
        self.db.add(entity)
        self.db.flush()
        logger.debug(f"Created {self.descriptor.name} {getattr(entity, self.descriptor.id_attribute)}")
        return entity

    def update(self, entity_id: Any, fields: Dict[str, Any]) -> Optional[Any]:
        entity = self.find_by_id(entity_id)
        if entity is None:
            return None
        return self.apply(entity, fields)

    def apply(self, entity: Any, fields: Dict[str, Any]) -> Any:
        for attribute, value in fields.items():
            if attribute in self.scope:
                continue
            setattr(entity, attribute, value)
        self.db.flush()
        return entity

    def delete(self, entity_id: Any) -> bool:
        entity = self.find_by_id(entity_id)
        if entity is None:
            return False
        self.remove(entity)
        return True

    def remove(self, entity: Any) -> None:
        if self.descriptor.soft_delete:
            entity.is_deleted = True
            entity.deleted_at = utcnow()
        else:
            self.db.delete(entity)
        self.db.flush()


class AssociationRepository:
    """Link rows between two described entities."""

    def __init__(self, descriptor: AssociationDescriptor, db: Session):
        self.descriptor = descriptor
        self.model = descriptor.model
        self.db = db

    def _left(self):
        return getattr(self.model, self.descriptor.left_field)

    def _right(self):
        return getattr(self.model, self.descriptor.right_field)

    def find_association(self, left_id: Any, right_id: Any) -> Optional[Any]:
        stmt = select(self.model).where(self._left() == left_id, self._right() == right_id)
        return self.db.scalars(stmt).first()

    def next_order(self, left_id: Any) -> int:
        column = getattr(self.model, self.descriptor.order_field)
        current = self.db.scalar(select(func.max(column)).where(self._left() == left_id))
        return (current or 0) + 1

    def create_association(self, left_id: Any, right_id: Any, values: Optional[Mapping[str, Any]] = None) -> Any:
        fields = {**self.descriptor.extra, **(values or {})}
        order_field = self.descriptor.order_field
        if order_field and fields.get(order_field) is None:
            fields[order_field] = self.next_order(left_id)
        row = self.model(**{
            self.descriptor.left_field: left_id,
            self.descriptor.right_field: right_id,
            **fields,
        })
        self.db.add(row)
        self.db.flush()
        return row

    def delete_association(self, left_id: Any, right_id: Any) -> bool:
        row = self.find_association(left_id, right_id)
        if row is None:
            return False
        self.db.delete(row)
        self.db.flush()
        return True

    def set_order(self, left_id: Any, right_id: Any, order: int) -> Optional[Any]:
        row = self.find_association(left_id, right_id)
        if row is not None:
            setattr(row, self.descriptor.order_field, order)
        return row

    def _link_ordering(self) -> List[Any]:
        if self.descriptor.order_field:
            return [getattr(self.model, self.descriptor.order_field).asc(), self.model.id.asc()]
        return [getattr(self.model, self.descriptor.created_field).desc(), self.model.id.desc()]

    def list_for_left(self, left_id: Any) -> Sequence[Any]:
        """Link rows for ``left_id`` with the right-hand entity loaded.

        Ordered links come back by position, the rest newest first.
        """
        right = self.descriptor.right
        relation = getattr(self.model, self.descriptor.right_relation)
        stmt = (
            select(self.model)
            .join(relation)
            .where(self._left() == left_id)
            .options(selectinload(relation))
            .order_by(*self._link_ordering())
        )
        if right.soft_delete:
            stmt = stmt.where(right.model.is_deleted.is_(False))
        return self.db.scalars(stmt).all()

    def available_for_left(self, left_id: Any) -> Sequence[Any]:
        """Right-hand entities not yet linked to ``left_id``."""
        right = self.descriptor.right
        linked = select(self._right()).where(self._left() == left_id)
        stmt = select(right.model).where(right.id_column().not_in(linked))
        if right.soft_delete:
            stmt = stmt.where(right.model.is_deleted.is_(False))
        return self.db.scalars(stmt.order_by(right.id_column().asc())).all()
