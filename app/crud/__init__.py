"""
Descriptor-driven CRUD framework: a resource is an EntityDescriptor value
handed to the generic repository, mapper, service and router factories.
"""

from .descriptor import AssociationDescriptor, EntityDescriptor, ilike_search, ASC, DESC
from .pagination import PageMeta, PageRequest
from .repository import AssociationRepository, Repository
from .mapper import Mapper
from .service import AssociationService, CrudService, PageResult

__all__ = [
    "ASC",
    "DESC",
    "AssociationDescriptor",
    "AssociationRepository",
    "AssociationService",
    "CrudService",
    "EntityDescriptor",
    "Mapper",
    "PageMeta",
    "PageRequest",
    "PageResult",
    "Repository",
    "ilike_search",
]
