from nepstay.schemas.common.base import (
    BaseCreateSchema,
    BaseFilterSchema,
    BaseSchema,
    BaseUpdateSchema,
)
from nepstay.schemas.common.pagination import PaginationMeta, PaginationParams
from nepstay.schemas.common.response import ErrorResponse, success_response

__all__ = [
    "BaseCreateSchema",
    "BaseFilterSchema",
    "BaseSchema",
    "BaseUpdateSchema",
    "PaginationMeta",
    "PaginationParams",
    "ErrorResponse",
    "success_response",
]
