"""
Hostel repository: search, showcase lists, click counters and aggregations.
"""

import re
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence, Tuple

from pymongo import ASCENDING, DESCENDING
from pymongo.database import Database

from nepstay.core.constants import DEFAULT_SORT, SORT_FIELDS
from nepstay.models.hostel import Hostel
from nepstay.repositories.base.base_repository import BaseRepository
from nepstay.repositories.base.pagination import PaginatedResult, PaginationRequest
from nepstay.repositories.base.specifications import (
    AndSpecification,
    FieldEquals,
    RangeSpecification,
    Specification,
)
from nepstay.utils.datetime_utils import DateTimeHelper

SEARCH_FIELDS = (
    "name",
    "description",
    "shortDescription",
    "location.city",
    "location.area",
    "location.address",
    "facilities",
)

PRICE_BUCKETS = [0, 5000, 10000, 15000, 20000, 30000, float("inf")]

SHOWCASE_SORT = [("clicks", DESCENDING), ("createdAt", DESCENDING), ("_id", DESCENDING)]


class ActiveHostelsSpecification(FieldEquals):
    """Only listings visible to the public."""

    def __init__(self):
        super().__init__("isActive", True)


class TextSearchSpecification(Specification):
    """Case-insensitive substring match over the searchable text fields."""

    def __init__(self, term: Optional[str]):
        self.term = (term or "").strip()

    def to_filter(self) -> Dict[str, Any]:
        if not self.term:
            return {}
        pattern = re.escape(self.term)
        return {"$or": [{field: {"$regex": pattern, "$options": "i"}} for field in SEARCH_FIELDS]}


class FacilitiesSpecification(Specification):
    """Any requested facility appears (case-insensitively) among the listing's facilities."""

    def __init__(self, facilities: Optional[Sequence[str]]):
        self.facilities = [item.strip() for item in (facilities or []) if item and item.strip()]

    def to_filter(self) -> Dict[str, Any]:
        if not self.facilities:
            return {}
        clauses = [
            {"facilities": {"$regex": re.escape(item), "$options": "i"}}
            for item in self.facilities
        ]
        return clauses[0] if len(clauses) == 1 else {"$or": clauses}


class CreatedSinceSpecification(RangeSpecification):
    def __init__(self, since: Optional[datetime]):
        super().__init__("createdAt", minimum=since)


def parse_sort(sort_by: Optional[str]) -> List[Tuple[str, int]]:
    """
    Translate a public sort key (``price``, ``-clicks``...) into a pymongo
    sort list; ``_id`` breaks ties so pagination is stable.
    """
    sort_by = sort_by or DEFAULT_SORT
    direction = DESCENDING if sort_by.startswith("-") else ASCENDING
    field = SORT_FIELDS.get(sort_by.lstrip("-"))
    if field is None:
        return parse_sort(DEFAULT_SORT)
    return [(field, direction), ("_id", direction)]


class HostelRepository(BaseRepository[Hostel]):
    """
    Hostel repository with search, showcase and analytics queries.
    """

    duplicate_messages = {"slug": "Hostel with this name already exists"}

    def __init__(self, db: Database):
        super().__init__(Hostel, db)

    # ===== Core Operations =====

    def find_by_slug(self, slug: str, active_only: bool = True) -> Optional[Hostel]:
        query: Dict[str, Any] = {"slug": slug}
        if active_only:
            query["isActive"] = True
        return self.find_one(query)

    def find_by_id_visible(self, hostel_id: str, include_inactive: bool = False) -> Optional[Hostel]:
        extra = None if include_inactive else {"isActive": True}
        return self.find_by_id(hostel_id, extra_filter=extra)

    def build_search_spec(
        self,
        search: Optional[str] = None,
        min_price: Optional[float] = None,
        max_price: Optional[float] = None,
        facilities: Optional[Sequence[str]] = None,
        featured: Optional[bool] = None,
    ) -> Specification:
        specs: List[Specification] = [
            ActiveHostelsSpecification(),
            TextSearchSpecification(search),
            RangeSpecification("pricePerNight", min_price, max_price),
            FacilitiesSpecification(facilities),
        ]
        if featured is not None:
            specs.append(FieldEquals("featured", featured))
        return AndSpecification(*specs)

    def search_hostels(
        self,
        pagination: PaginationRequest,
        sort_by: Optional[str] = None,
        **criteria: Any,
    ) -> PaginatedResult[Hostel]:
        spec = self.build_search_spec(**criteria)
        return self.paginate(spec, pagination, sort=parse_sort(sort_by))

    def get_featured_hostels(self, limit: int) -> List[Hostel]:
        return self.find_many({"isActive": True, "featured": True}, sort=SHOWCASE_SORT, limit=limit)

    def get_popular_hostels(self, limit: int) -> List[Hostel]:
        return self.find_many({"isActive": True}, sort=SHOWCASE_SORT, limit=limit)

    # ===== Counters =====

    def increment_clicks(self, hostel_id: str, amount: int = 1) -> Optional[Hostel]:
        """Atomically bump the click counter of an active hostel."""
        return self.apply_update(
            hostel_id,
            {"$inc": {"clicks": amount}},
            extra_filter={"isActive": True},
        )

    def toggle_featured(self, hostel_id: str) -> Optional[Hostel]:
        """
        Flip ``featured``. The write only lands if the flag still holds the
        value just read; otherwise it re-reads and tries again.
        """
        while True:
            hostel = self.find_by_id(hostel_id)
            if hostel is None:
                return None

            unchanged = {"featured": True} if hostel.featured else {"featured": {"$ne": True}}
            toggled = self.apply_update(
                hostel.id,
                {"$set": {"featured": not hostel.featured}},
                extra_filter=unchanged,
            )
            if toggled is not None:
                return toggled

    # ===== Aggregations =====

    def total_clicks(self, query: Optional[Dict[str, Any]] = None) -> int:
        pipeline: List[Dict[str, Any]] = []
        if query:
            pipeline.append({"$match": query})
        pipeline.append({"$group": {"_id": None, "total": {"$sum": "$clicks"}}})
        result = self.aggregate(pipeline)
        return int(result[0]["total"]) if result else 0

    def get_top_by_clicks(
        self,
        limit: int,
        query: Optional[Dict[str, Any]] = None,
        sort_by: Optional[str] = None,
    ) -> List[Hostel]:
        base = {"isActive": True}
        base.update(query or {})
        sort = parse_sort(sort_by) if sort_by else SHOWCASE_SORT
        return self.find_many(base, sort=sort, limit=limit)

    def get_recent_hostels(self, limit: int) -> List[Hostel]:
        return self.find_many(
            {"isActive": True},
            sort=[("createdAt", DESCENDING), ("_id", DESCENDING)],
            limit=limit,
        )

    def count_created_since(self, since: datetime) -> int:
        return self.count(CreatedSinceSpecification(since).to_filter())

    def get_price_stats(self) -> Dict[str, Any]:
        result = self.aggregate([
            {"$match": {"isActive": True}},
            {
                "$group": {
                    "_id": None,
                    "avgPrice": {"$avg": "$pricePerNight"},
                    "minPrice": {"$min": "$pricePerNight"},
                    "maxPrice": {"$max": "$pricePerNight"},
                }
            },
        ])
        return result[0] if result else {}

    def get_price_distribution(self) -> List[Dict[str, Any]]:
        return self.aggregate([
            {"$match": {"isActive": True}},
            {
                "$bucket": {
                    "groupBy": "$pricePerNight",
                    "boundaries": PRICE_BUCKETS,
                    "default": "Other",
                    "output": {
                        "count": {"$sum": 1},
                        "avgClicks": {"$avg": "$clicks"},
                    },
                }
            },
        ])

    def get_top_facilities(self, limit: int) -> List[Dict[str, Any]]:
        return self.aggregate([
            {"$match": {"isActive": True}},
            {"$unwind": "$facilities"},
            {"$group": {"_id": "$facilities", "count": {"$sum": 1}}},
            {"$sort": {"count": -1, "_id": 1}},
            {"$limit": limit},
        ])

    def get_monthly_trend(self, months: int = 12) -> List[Dict[str, Any]]:
        since = DateTimeHelper.months_back(DateTimeHelper.utcnow(), months - 1)
        return self.aggregate([
            {"$match": {"createdAt": {"$gte": since}}},
            {
                "$group": {
                    "_id": {"year": {"$year": "$createdAt"}, "month": {"$month": "$createdAt"}},
                    "count": {"$sum": 1},
                    "totalClicks": {"$sum": "$clicks"},
                }
            },
            {"$sort": {"_id.year": 1, "_id.month": 1}},
        ])
