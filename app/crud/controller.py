"""
Router factories that expose described entities over HTTP.

Every handler answers with the envelope ``{"success", "data"?, "message"?}``;
failures are raised as taxonomy exceptions and rendered by the error
handlers.
"""

from typing import Any, Dict, List, Optional, Sequence

from fastapi import APIRouter, Depends, Query, Request, status
from pydantic import Field, create_model
from pydantic.alias_generators import to_camel
from sqlalchemy.orm import Session

from app.config.settings import Settings
from app.core.context import get_app_settings, get_db, get_language
from app.core.exceptions import ErrorCode, ValidationError
from app.crud.descriptor import AssociationDescriptor, EntityDescriptor
from app.crud.mapper import dump
from app.crud.pagination import PageRequest
from app.crud.service import AssociationService, CrudService
from app.schemas.base import CamelModel, ErrorEnvelope

# query parameters consumed by paging; everything else is a filter candidate
RESERVED_QUERY_PARAMS = {"page", "limit", "search", "sortBy", "sortOrder", "sort_by", "sort_order"}

ERROR_RESPONSES = {
    400: {"model": ErrorEnvelope, "description": "Validation failed"},
    404: {"model": ErrorEnvelope, "description": "Not found"},
}
WRITE_ERROR_RESPONSES = {
    **ERROR_RESPONSES,
    401: {"model": ErrorEnvelope, "description": "Authentication required"},
    403: {"model": ErrorEnvelope, "description": "Insufficient permissions"},
    409: {"model": ErrorEnvelope, "description": "Conflict"},
}


def envelope(data: Any = None, message: Optional[str] = None) -> Dict[str, Any]:
    body: Dict[str, Any] = {"success": True}
    if data is not None:
        body["data"] = data
    if message is not None:
        body["message"] = message
    return body


def parse_id(raw: Any, entity_name: str) -> int:
    """Positive integer id from a path segment, else a 400."""
    try:
        value = int(raw)
    except (TypeError, ValueError):
        value = 0
    if value <= 0:
        raise ValidationError(f"Invalid {entity_name} id", error_code=ErrorCode.INVALID_IDENTIFIER)
    return value


def query_filters(request: Request) -> Dict[str, str]:
    return {key: value for key, value in request.query_params.items() if key not in RESERVED_QUERY_PARAMS}


def resolve_sort_field(descriptor: EntityDescriptor, sort_by: Optional[str]) -> Optional[str]:
    if not sort_by:
        return None
    for attribute in descriptor.sort_fields:
        if sort_by in (attribute, to_camel(attribute)):
            return attribute
    return None


def page_request(
    descriptor: EntityDescriptor,
    settings: Settings,
    page: Optional[str],
    limit: Optional[str],
    sort_by: Optional[str],
    sort_order: Optional[str],
) -> PageRequest:
    return PageRequest.normalize(
        page=page,
        limit=limit,
        sort_by=resolve_sort_field(descriptor, sort_by),
        sort_order=sort_order,
        default_limit=settings.pagination.default_limit,
        max_limit=settings.pagination.max_limit,
    )


def build_crud_router(
    descriptor: EntityDescriptor,
    prefix: str,
    tags: Optional[Sequence[str]] = None,
    read_dependencies: Sequence[Any] = (),
    write_dependencies: Sequence[Any] = (),
) -> APIRouter:
    """
    List / get / create / update / delete routes for ``descriptor``.

    Args:
        descriptor: Resource description
        prefix: Mount path, e.g. ``/cities``
        tags: OpenAPI tags
        read_dependencies: Extra dependencies for GET routes (auth checks)
        write_dependencies: Extra dependencies for POST/PUT/PATCH/DELETE routes

    Returns:
        APIRouter ready to include in the application
    """
    router = APIRouter(prefix=prefix, tags=list(tags or [descriptor.name]), responses=ERROR_RESPONSES)
    CreateSchema = descriptor.create_schema
    UpdateSchema = descriptor.update_schema
    name = descriptor.name
    reads = list(read_dependencies)
    writes = list(write_dependencies)

    @router.get("", dependencies=reads, summary=f"List {name} records")
    def list_items(
        request: Request,
        page: Optional[str] = Query(None),
        limit: Optional[str] = Query(None),
        search: Optional[str] = Query(None),
        sort_by: Optional[str] = Query(None, alias="sortBy"),
        sort_order: Optional[str] = Query(None, alias="sortOrder"),
        db: Session = Depends(get_db),
        settings: Settings = Depends(get_app_settings),
    ):
        paging = page_request(descriptor, settings, page, limit, sort_by, sort_order)
        result = CrudService(descriptor, db).list(paging, search, query_filters(request))
        return envelope(result.to_dict())

    @router.get("/{item_id}", dependencies=reads, summary=f"Get one {name}")
    def get_item(item_id: str, db: Session = Depends(get_db)):
        entity_id = parse_id(item_id, name)
        return envelope(dump(CrudService(descriptor, db).get(entity_id)))

    @router.post("", dependencies=writes, status_code=status.HTTP_201_CREATED,
                 responses=WRITE_ERROR_RESPONSES, summary=f"Create {name}")
    def create_item(payload: CreateSchema, db: Session = Depends(get_db)):
        created = CrudService(descriptor, db).create(payload)
        return envelope(dump(created), f"{name} created successfully")

    def _update(item_id: str, payload, db: Session):
        entity_id = parse_id(item_id, name)
        updated = CrudService(descriptor, db).update(entity_id, payload)
        return envelope(dump(updated), f"{name} updated successfully")

    @router.put("/{item_id}", dependencies=writes, summary=f"Update {name}")
    def update_item(item_id: str, payload: UpdateSchema, db: Session = Depends(get_db)):
        return _update(item_id, payload, db)

    @router.patch("/{item_id}", dependencies=writes, summary=f"Partially update {name}")
    def patch_item(item_id: str, payload: UpdateSchema, db: Session = Depends(get_db)):
        return _update(item_id, payload, db)

    @router.delete("/{item_id}", dependencies=writes, summary=f"Delete {name}")
    def delete_item(item_id: str, db: Session = Depends(get_db)):
        entity_id = parse_id(item_id, name)
        CrudService(descriptor, db).delete(entity_id)
        return envelope(message=f"{name} deleted successfully")

    return router


def build_nested_router(
    parent: EntityDescriptor,
    child: EntityDescriptor,
    parent_field: str,
    segment: str,
    read_dependencies: Sequence[Any] = (),
    write_dependencies: Sequence[Any] = (),
) -> APIRouter:
    """
    CRUD for ``child`` rows owned by one ``parent`` row, mounted at
    ``/{item_id}/<segment>``; the parent must exist and children of other
    parents are invisible.
    """
    router = APIRouter()
    CreateSchema = child.create_schema
    UpdateSchema = child.update_schema
    name = child.name
    reads = list(read_dependencies)
    writes = list(write_dependencies)
    base = f"/{{item_id}}/{segment}"

    def scoped(item_id: str, db: Session) -> CrudService:
        parent_id = parse_id(item_id, parent.name)
        CrudService(parent, db).find_entity(parent_id)
        return CrudService(child, db, scope={parent_field: parent_id})

    @router.get(base, dependencies=reads, summary=f"List {name} records of a {parent.name}")
    def list_children(
        item_id: str,
        request: Request,
        page: Optional[str] = Query(None),
        limit: Optional[str] = Query(None),
        search: Optional[str] = Query(None),
        sort_by: Optional[str] = Query(None, alias="sortBy"),
        sort_order: Optional[str] = Query(None, alias="sortOrder"),
        db: Session = Depends(get_db),
        settings: Settings = Depends(get_app_settings),
    ):
        service = scoped(item_id, db)
        paging = page_request(child, settings, page, limit, sort_by, sort_order)
        return envelope(service.list(paging, search, query_filters(request)).to_dict())

    @router.get(base + "/{child_id}", dependencies=reads, summary=f"Get one {name}")
    def get_child(item_id: str, child_id: str, db: Session = Depends(get_db)):
        service = scoped(item_id, db)
        return envelope(dump(service.get(parse_id(child_id, name))))

    @router.post(base, dependencies=writes, status_code=status.HTTP_201_CREATED,
                 responses=WRITE_ERROR_RESPONSES, summary=f"Create {name}")
    def create_child(item_id: str, payload: CreateSchema, db: Session = Depends(get_db)):
        created = scoped(item_id, db).create(payload)
        return envelope(dump(created), f"{name} created successfully")

    def _update(item_id: str, child_id: str, payload, db: Session):
        service = scoped(item_id, db)
        updated = service.update(parse_id(child_id, name), payload)
        return envelope(dump(updated), f"{name} updated successfully")

    @router.put(base + "/{child_id}", dependencies=writes, summary=f"Update {name}")
    def update_child(item_id: str, child_id: str, payload: UpdateSchema, db: Session = Depends(get_db)):
        return _update(item_id, child_id, payload, db)

    @router.patch(base + "/{child_id}", dependencies=writes, summary=f"Partially update {name}")
    def patch_child(item_id: str, child_id: str, payload: UpdateSchema, db: Session = Depends(get_db)):
        return _update(item_id, child_id, payload, db)

    @router.delete(base + "/{child_id}", dependencies=writes, summary=f"Delete {name}")
    def delete_child(item_id: str, child_id: str, db: Session = Depends(get_db)):
        scoped(item_id, db).delete(parse_id(child_id, name))
        return envelope(message=f"{name} deleted successfully")

    return router


def _schema_prefix(descriptor: AssociationDescriptor) -> str:
    return "".join(part.capitalize() for part in descriptor.right_field.split("_"))


def link_schema(descriptor: AssociationDescriptor):
    """Request body naming the right-hand id, e.g. ``{"categoryId": 3}``."""
    if descriptor.link_schema is not None:
        return descriptor.link_schema
    return create_model(
        _schema_prefix(descriptor) + "Link",
        __base__=CamelModel,
        **{descriptor.right_field: (int, Field(..., gt=0))},
    )


def reorder_schema(descriptor: AssociationDescriptor, key: str):
    """Reorder body, e.g. ``{"cities": [{"cityId": 4, "order": 1}]}``."""
    position = create_model(
        _schema_prefix(descriptor) + "Position",
        __base__=CamelModel,
        **{
            descriptor.right_field: (int, Field(..., gt=0)),
            descriptor.order_field: (int, Field(..., ge=1)),
        },
    )
    return create_model(
        _schema_prefix(descriptor) + "Reorder",
        __base__=CamelModel,
        **{key: (List[position], Field(..., min_length=1))},
    )


def build_association_router(
    descriptor: AssociationDescriptor,
    segment: str,
    available_segment: Optional[str] = None,
    read_dependencies: Sequence[Any] = (),
    write_dependencies: Sequence[Any] = (),
) -> APIRouter:
    """
    Routes for a many-to-many link, mounted under the left-hand resource:

    - ``GET    /{item_id}/<segment>``              linked items, by position or newest first
    - ``GET    /{item_id}/<available_segment>``    items not linked yet
    - ``POST   /{item_id}/<segment>``              link (409 when already linked)
    - ``DELETE /{item_id}/<segment>/{related_id}`` unlink (404 when not linked)
    - ``PUT    /{item_id}/<segment>/reorder``      new positions, ordered links only
    """
    router = APIRouter()
    LinkSchema = link_schema(descriptor)
    reads = list(read_dependencies)
    writes = list(write_dependencies)
    left_name = descriptor.left.name
    right_name = descriptor.right.name
    base = f"/{{item_id}}/{segment}"

    def service_for(db: Session, language: str, settings: Settings) -> AssociationService:
        return AssociationService(descriptor, db, language=language, fallback_language=settings.default_language)

    @router.get(base, dependencies=reads, summary=f"List {descriptor.name} links")
    def list_links(
        item_id: str,
        db: Session = Depends(get_db),
        language: str = Depends(get_language),
        settings: Settings = Depends(get_app_settings),
    ):
        items = service_for(db, language, settings).list_for(parse_id(item_id, left_name))
        return envelope(items)

    if available_segment:
        @router.get(f"/{{item_id}}/{available_segment}", dependencies=reads,
                    summary=f"List {right_name} records not yet linked")
        def list_available(
            item_id: str,
            db: Session = Depends(get_db),
            language: str = Depends(get_language),
            settings: Settings = Depends(get_app_settings),
        ):
            items = service_for(db, language, settings).available_for(parse_id(item_id, left_name))
            return envelope(items)

    @router.post(base, dependencies=writes, status_code=status.HTTP_201_CREATED,
                 summary=f"Add {descriptor.name}")
    def add_link(
        item_id: str,
        payload: LinkSchema,
        db: Session = Depends(get_db),
        language: str = Depends(get_language),
        settings: Settings = Depends(get_app_settings),
    ):
        right_id = getattr(payload, descriptor.right_field)
        values = payload.model_dump(exclude={descriptor.right_field}, exclude_none=True)
        item = service_for(db, language, settings).add(parse_id(item_id, left_name), right_id, values)
        return envelope(item, f"{descriptor.name} added successfully")

    @router.delete(base + "/{related_id}", dependencies=writes, summary=f"Remove {descriptor.name}")
    def remove_link(
        item_id: str,
        related_id: str,
        db: Session = Depends(get_db),
        language: str = Depends(get_language),
        settings: Settings = Depends(get_app_settings),
    ):
        service_for(db, language, settings).remove(parse_id(item_id, left_name), parse_id(related_id, right_name))
        return envelope(message=f"{descriptor.name} removed successfully")

    if descriptor.order_field:
        key = segment.replace("-", "_")
        ReorderSchema = reorder_schema(descriptor, key)

        @router.put(base + "/reorder", dependencies=writes, summary=f"Reorder {descriptor.name} links")
        def reorder_links(
            item_id: str,
            payload: ReorderSchema,
            db: Session = Depends(get_db),
            language: str = Depends(get_language),
            settings: Settings = Depends(get_app_settings),
        ):
            positions = [
                (getattr(entry, descriptor.right_field), getattr(entry, descriptor.order_field))
                for entry in getattr(payload, key)
            ]
            items = service_for(db, language, settings).reorder(parse_id(item_id, left_name), positions)
            return envelope(items, f"{descriptor.name} links reordered successfully")

    return router
