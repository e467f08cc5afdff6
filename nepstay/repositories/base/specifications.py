"""
Specification pattern for encapsulating query logic.

Each specification renders a MongoDB filter fragment; specifications compose
with ``&`` into ``$and`` documents.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict


class Specification(ABC):
    """
    Abstract specification for query conditions.

    Implements the Specification pattern for building reusable and
    composable filter documents.
    """

    @abstractmethod
    def to_filter(self) -> Dict[str, Any]:
        """
        Convert specification to a MongoDB filter document.

        Returns:
            Filter document; an empty dict matches everything
        """

    def __and__(self, other: "Specification") -> "AndSpecification":
        return AndSpecification(self, other)


class AndSpecification(Specification):
    """AND combination of specifications."""

    def __init__(self, *specs: Specification):
        self.specs = specs

    def to_filter(self) -> Dict[str, Any]:
        parts = [part for part in (spec.to_filter() for spec in self.specs) if part]
        if not parts:
            return {}
        if len(parts) == 1:
            return parts[0]
        return {"$and": parts}


class FieldEquals(Specification):
    """Exact match on a single field."""

    def __init__(self, field: str, value: Any):
        self.field = field
        self.value = value

    def to_filter(self) -> Dict[str, Any]:
        return {self.field: self.value}


class RangeSpecification(Specification):
    """Inclusive bounds on a numeric or date field; missing bounds are open."""

    def __init__(self, field: str, minimum: Any = None, maximum: Any = None):
        self.field = field
        self.minimum = minimum
        self.maximum = maximum

    def to_filter(self) -> Dict[str, Any]:
        bounds = {}
        if self.minimum is not None:
            bounds["$gte"] = self.minimum
        if self.maximum is not None:
            bounds["$lte"] = self.maximum
        return {self.field: bounds} if bounds else {}
