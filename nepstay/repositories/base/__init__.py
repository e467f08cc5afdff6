from nepstay.repositories.base.base_repository import BaseRepository, ModelType
from nepstay.repositories.base.pagination import PageInfo, PaginatedResult, PaginationRequest
from nepstay.repositories.base.specifications import (
    AndSpecification,
    FieldEquals,
    RangeSpecification,
    Specification,
)

__all__ = [
    "BaseRepository",
    "ModelType",
    "PageInfo",
    "PaginatedResult",
    "PaginationRequest",
    "AndSpecification",
    "FieldEquals",
    "RangeSpecification",
    "Specification",
]
