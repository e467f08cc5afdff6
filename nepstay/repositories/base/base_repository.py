"""
Base repository with standardized CRUD operations over a MongoDB collection.

Provides the foundation for domain repositories: documents go in and come
out as typed models, timestamps are maintained here, and driver errors are
translated into application exceptions.
"""

from typing import Any, Dict, Generic, List, Optional, Sequence, Tuple, Type, TypeVar

from pymongo import ReturnDocument
from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError

from nepstay.core.exceptions import DuplicateFieldError
from nepstay.core.logging import get_logger
from nepstay.models.base import BaseDocument, object_id_or_none
from nepstay.repositories.base.pagination import PageInfo, PaginatedResult, PaginationRequest
from nepstay.repositories.base.specifications import Specification
from nepstay.utils.datetime_utils import DateTimeHelper

logger = get_logger(__name__)

ModelType = TypeVar("ModelType", bound=BaseDocument)

SortSpec = Sequence[Tuple[str, int]]


class BaseRepository(Generic[ModelType]):
    """
    Base repository with standardized operations.

    Subclasses set ``duplicate_messages`` to map unique-index field names to
    the message raised when an insert or update collides.
    """

    duplicate_messages: Dict[str, str] = {}

    def __init__(self, model: Type[ModelType], db: Database):
        """
        Initialize repository.

        Args:
            model: Document model class
            db: Database handle
        """
        self.model = model
        self.db = db
        self.collection: Collection = db[model.__collection__]

    # ==================== Read Operations ====================

    def find_by_id(self, entity_id: Any, extra_filter: Optional[Dict[str, Any]] = None) -> Optional[ModelType]:
        object_id = object_id_or_none(entity_id)
        if object_id is None:
            return None
        query = {"_id": object_id}
        if extra_filter:
            query.update(extra_filter)
        return self.model.from_document(self.collection.find_one(query))

    def find_one(self, query: Dict[str, Any]) -> Optional[ModelType]:
        return self.model.from_document(self.collection.find_one(query))

    def find_many(
        self,
        query: Optional[Dict[str, Any]] = None,
        sort: Optional[SortSpec] = None,
        skip: int = 0,
        limit: int = 0,
    ) -> List[ModelType]:
        cursor = self.collection.find(query or {})
        if sort:
            cursor = cursor.sort(list(sort))
        if skip:
            cursor = cursor.skip(skip)
        if limit:
            cursor = cursor.limit(limit)
        return [self.model.from_document(document) for document in cursor]

    def count(self, query: Optional[Dict[str, Any]] = None) -> int:
        return self.collection.count_documents(query or {})

    def paginate(
        self,
        spec: Specification,
        pagination: PaginationRequest,
        sort: Optional[SortSpec] = None,
    ) -> PaginatedResult[ModelType]:
        """
        Run a filtered, sorted page query.

        The total is counted with the same filter and does not depend on the
        requested page.
        """
        query = spec.to_filter()
        total = self.count(query)
        items = self.find_many(query, sort=sort, skip=pagination.offset, limit=pagination.per_page)
        return PaginatedResult(
            items=items,
            page_info=PageInfo.create(pagination.page, pagination.per_page, total),
        )

    def aggregate(self, pipeline: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        return list(self.collection.aggregate(pipeline))

    # ==================== Write Operations ====================

    def create(self, entity: ModelType) -> ModelType:
        """
        Insert a new document with fresh timestamps.

        Raises:
            DuplicateFieldError: If a unique index rejects the document
        """
        now = DateTimeHelper.utcnow()
        entity.created_at = now
        entity.updated_at = now
        document = entity.to_document()

        try:
            result = self.collection.insert_one(document)
        except DuplicateKeyError as e:
            raise self._duplicate_error(e) from e

        entity.id = result.inserted_id
        return entity

    def update_by_id(self, entity_id: Any, changes: Dict[str, Any]) -> Optional[ModelType]:
        """Apply ``$set`` changes and return the updated model, or None when missing."""
        return self.apply_update(entity_id, {"$set": dict(changes)})

    def apply_update(
        self,
        entity_id: Any,
        update: Dict[str, Any],
        extra_filter: Optional[Dict[str, Any]] = None,
    ) -> Optional[ModelType]:
        """Apply a raw atomic update document to a single entity."""
        object_id = object_id_or_none(entity_id)
        if object_id is None:
            return None

        update = {operator: dict(values) for operator, values in update.items()}
        update.setdefault("$set", {}).setdefault("updatedAt", DateTimeHelper.utcnow())

        query: Dict[str, Any] = {"_id": object_id}
        if extra_filter:
            query.update(extra_filter)

        try:
            document = self.collection.find_one_and_update(
                query,
                update,
                return_document=ReturnDocument.AFTER,
            )
        except DuplicateKeyError as e:
            raise self._duplicate_error(e) from e
        return self.model.from_document(document)

    def delete_by_id(self, entity_id: Any) -> Optional[ModelType]:
        object_id = object_id_or_none(entity_id)
        if object_id is None:
            return None
        return self.model.from_document(self.collection.find_one_and_delete({"_id": object_id}))

    # ==================== Helpers ====================

    def _duplicate_error(self, error: DuplicateKeyError) -> DuplicateFieldError:
        key_value = (error.details or {}).get("keyValue") or {}
        field_name = next(iter(key_value), None)
        if field_name not in self.duplicate_messages and len(self.duplicate_messages) == 1:
            field_name = next(iter(self.duplicate_messages))

        message = self.duplicate_messages.get(field_name, "Duplicate field value entered")
        logger.warning("Duplicate key rejected", extra={"collection": self.collection.name, "field": field_name})
        return DuplicateFieldError(message, field=field_name)
