"""
Core hostel service: search, detail lookup, showcase lists and admin CRUD.
"""

from typing import Any, Dict, List, Optional

from bson import ObjectId
from pymongo.database import Database

from nepstay.core.exceptions import HostelNotFoundError
from nepstay.models.hostel import ContactInfo, Hostel, Location
from nepstay.repositories.hostel_repository import HostelRepository
from nepstay.schemas.common.pagination import PaginationMeta
from nepstay.schemas.common.response import success_response
from nepstay.schemas.hostel.hostel_base import HostelCreate, HostelUpdate
from nepstay.schemas.hostel.hostel_filter import HostelFilterParams
from nepstay.services.base import BaseService
from nepstay.services.hostel.constants import (
    RECENT_DAYS,
    STATS_TOP_LIMIT,
    SUCCESS_HOSTEL_CREATED,
    SUCCESS_HOSTEL_DELETED,
    SUCCESS_HOSTEL_UPDATED,
)
from nepstay.utils.datetime_utils import DateTimeHelper
from nepstay.utils.slug_utils import generate_slug


def serialize_hostels(hostels: List[Hostel]) -> List[Dict[str, Any]]:
    return [hostel.to_public_dict() for hostel in hostels]


class HostelService(BaseService[HostelRepository]):
    """
    High-level hostel operations.

    Public reads only ever see active listings; inactive ones are reachable
    by id for signed-in admins.
    """

    def __init__(self, db: Database):
        super().__init__(HostelRepository(db), db)

    # =========================================================================
    # Public reads
    # =========================================================================

    def search(self, filters: HostelFilterParams) -> Dict[str, Any]:
        result = self.repository.search_hostels(
            filters.to_request(),
            sort_by=filters.sort_by,
            **filters.criteria(),
        )
        pagination = PaginationMeta.from_page_info(result.page_info)
        return success_response(
            {"hostels": serialize_hostels(result.items)},
            count=result.count,
            pagination=pagination.model_dump(by_alias=True),
        )

    def get_featured(self, limit: int) -> Dict[str, Any]:
        hostels = self.repository.get_featured_hostels(limit)
        return success_response({"hostels": serialize_hostels(hostels)}, count=len(hostels))

    def get_popular(self, limit: int) -> Dict[str, Any]:
        hostels = self.repository.get_popular_hostels(limit)
        return success_response({"hostels": serialize_hostels(hostels)}, count=len(hostels))

    def get_hostel(self, id_or_slug: str, include_inactive: bool = False) -> Hostel:
        """
        Resolve a hostel by id or slug.

        A 24-hex value is treated as an id; anything else as a slug, which
        only ever matches active hostels.
        """
        if ObjectId.is_valid(id_or_slug):
            hostel = self.repository.find_by_id_visible(id_or_slug, include_inactive=include_inactive)
        else:
            hostel = self.repository.find_by_slug(id_or_slug)

        if hostel is None:
            raise HostelNotFoundError()
        return hostel

    # =========================================================================
    # Admin writes
    # =========================================================================

    def create_hostel(self, request: HostelCreate) -> Hostel:
        data = request.model_dump()
        hostel = Hostel(
            name=data["name"],
            slug=generate_slug(data["name"]),
            description=data["description"],
            short_description=data["short_description"],
            images=data["images"],
            price_per_night=data["price_per_night"],
            total_beds=data["total_beds"],
            contact_info=ContactInfo(**data["contact_info"]),
            location=Location(**data["location"]),
            facilities=data["facilities"],
            featured=data["featured"],
            is_active=data["is_active"],
        )
        hostel = self.repository.create(hostel)
        self._logger.info(
            SUCCESS_HOSTEL_CREATED,
            extra={"hostel_id": hostel.id_str, "slug": hostel.slug},
        )
        return hostel

    def update_hostel(self, hostel_id: str, request: HostelUpdate) -> Hostel:
        """Apply a partial update; the slug never changes."""
        hostel = self.repository.update_by_id(hostel_id, request.to_changes())
        if hostel is None:
            raise HostelNotFoundError()
        self._logger.info(SUCCESS_HOSTEL_UPDATED, extra={"hostel_id": hostel.id_str})
        return hostel

    def delete_hostel(self, hostel_id: str) -> None:
        hostel = self.repository.delete_by_id(hostel_id)
        if hostel is None:
            raise HostelNotFoundError()
        self._logger.info(SUCCESS_HOSTEL_DELETED, extra={"hostel_id": hostel.id_str})

    def toggle_featured(self, hostel_id: str) -> Hostel:
        hostel = self.repository.toggle_featured(hostel_id)
        if hostel is None:
            raise HostelNotFoundError()
        self._logger.info(
            "Hostel featured flag toggled",
            extra={"hostel_id": hostel.id_str, "featured": hostel.featured},
        )
        return hostel

    # =========================================================================
    # Statistics
    # =========================================================================

    def get_stats(self, now: Optional[Any] = None) -> Dict[str, Any]:
        now = now or DateTimeHelper.utcnow()
        total = self.repository.count()
        active = self.repository.count({"isActive": True})

        stats = {
            "totalHostels": total,
            "activeHostels": active,
            "featuredHostels": self.repository.count({"featured": True, "isActive": True}),
            "recentHostels": self.repository.count_created_since(
                DateTimeHelper.days_ago(now, RECENT_DAYS)
            ),
            "totalClicks": self.repository.total_clicks(),
            "inactiveHostels": total - active,
        }
        top = self.repository.get_top_by_clicks(STATS_TOP_LIMIT)
        return {
            "stats": stats,
            "topHostels": [
                {"id": hostel.id_str, "name": hostel.name, "clicks": hostel.clicks}
                for hostel in top
            ],
        }
