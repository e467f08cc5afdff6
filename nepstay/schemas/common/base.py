"""
Base schema classes with common configuration.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

__all__ = [
    "BaseSchema",
    "BaseCreateSchema",
    "BaseUpdateSchema",
    "BaseFilterSchema",
]


class BaseSchema(BaseModel):
    """
    Base schema with common Pydantic configuration.

    Fields are declared in snake_case and travel over the wire in camelCase,
    matching the stored document field names.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        str_strip_whitespace=True,
    )


class BaseCreateSchema(BaseSchema):
    """Base schema for create operations."""
    pass


class BaseUpdateSchema(BaseSchema):
    """
    Base schema for partial updates.

    Subclasses declare every field Optional; ``to_changes`` returns only the
    fields the client actually sent, keyed by their document names.
    """

    def to_changes(self) -> dict:
        return self.model_dump(by_alias=True, exclude_unset=True)


class BaseFilterSchema(BaseSchema):
    """Base schema for query-string filters."""
    pass
