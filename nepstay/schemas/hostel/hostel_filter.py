"""
Hostel search filter schema.
"""

from typing import List, Literal, Optional

from pydantic import Field, field_validator, model_validator

from nepstay.core.constants import DEFAULT_SORT
from nepstay.schemas.common.pagination import PaginationParams

__all__ = ["HostelSortOption", "HostelFilterParams"]

HostelSortOption = Literal[
    "clicks", "-clicks",
    "price", "-price",
    "createdAt", "-createdAt",
    "name", "-name",
]


class HostelFilterParams(PaginationParams):
    """
    Public search parameters.

    ``facilities`` arrives as a comma-separated string and is split into a
    list of trimmed, non-empty names.
    """

    search: Optional[str] = Field(default=None, max_length=100)
    min_price: Optional[float] = Field(default=None, ge=0)
    max_price: Optional[float] = Field(default=None, ge=0)
    facilities: List[str] = Field(default_factory=list)
    featured: Optional[bool] = None
    sort_by: HostelSortOption = DEFAULT_SORT

    @field_validator("facilities", mode="before")
    @classmethod
    def split_facilities(cls, v):
        if v is None:
            return []
        if isinstance(v, str):
            v = [v]
        names = [name for item in v for name in item.split(",")]
        return [name.strip() for name in names if name.strip()]

    @model_validator(mode="after")
    def check_price_range(self) -> "HostelFilterParams":
        if (
            self.min_price is not None
            and self.max_price is not None
            and self.min_price > self.max_price
        ):
            raise ValueError("minPrice cannot be greater than maxPrice")
        return self

    def criteria(self) -> dict:
        return {
            "search": self.search,
            "min_price": self.min_price,
            "max_price": self.max_price,
            "facilities": self.facilities,
            "featured": self.featured,
        }
