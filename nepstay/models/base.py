"""
Base document model.

Documents are plain dicts on the wire to MongoDB; models wrap them in typed
dataclasses with camelCase <-> snake_case mapping and timestamp handling.
"""

from dataclasses import dataclass, fields
from datetime import datetime
from typing import Any, ClassVar, Dict, Optional, Type, TypeVar

from bson import ObjectId

from nepstay.utils.datetime_utils import DateTimeHelper

TDocument = TypeVar("TDocument", bound="BaseDocument")


def to_camel(name: str) -> str:
    head, *tail = name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in tail)


@dataclass
class BaseDocument:
    """
    Common fields for every stored document: ``_id`` and timestamps.

    Subclasses declare their fields as dataclass fields in snake_case; the
    stored key is the camelCase form unless listed in ``__field_keys__``.
    """

    __collection__: ClassVar[str] = ""
    __field_keys__: ClassVar[Dict[str, str]] = {}

    id: Optional[ObjectId] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def document_key(cls, attribute: str) -> str:
        if attribute == "id":
            return "_id"
        return cls.__field_keys__.get(attribute, to_camel(attribute))

    @classmethod
    def from_document(cls: Type[TDocument], document: Optional[Dict[str, Any]]) -> Optional[TDocument]:
        """Build the model from a raw document; unknown keys are ignored."""
        if document is None:
            return None

        values = {}
        for model_field in fields(cls):
            key = cls.document_key(model_field.name)
            if key not in document:
                continue
            value = document[key]
            if isinstance(value, datetime):
                value = DateTimeHelper.as_naive_utc(value)
            values[model_field.name] = cls._decode_field(model_field.name, value)
        return cls(**values)

    @classmethod
    def _decode_field(cls, name: str, value: Any) -> Any:
        return value

    def _encode_field(self, name: str, value: Any) -> Any:
        return value

    def to_document(self, include_id: bool = False) -> Dict[str, Any]:
        """Serialise to the stored document shape."""
        document = {}
        for model_field in fields(self):
            if model_field.name == "id" and not include_id:
                continue
            value = getattr(self, model_field.name)
            document[self.document_key(model_field.name)] = self._encode_field(model_field.name, value)
        if include_id and document.get("_id") is None:
            document.pop("_id", None)
        return document

    @property
    def id_str(self) -> Optional[str]:
        return str(self.id) if self.id is not None else None


def object_id_or_none(value: Any) -> Optional[ObjectId]:
    """Parse a 24-hex id; anything else is None."""
    if isinstance(value, ObjectId):
        return value
    if isinstance(value, str) and ObjectId.is_valid(value):
        return ObjectId(value)
    return None


__all__ = ["BaseDocument", "object_id_or_none", "to_camel"]
