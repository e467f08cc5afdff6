"""
Hostel endpoints: public browsing plus admin management.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError as PydanticValidationError

from nepstay.api.deps import get_current_admin_optional, get_hostel_service, require_admin
from nepstay.core.constants import DEFAULT_PAGE, DEFAULT_PAGE_SIZE, DEFAULT_SHOWCASE_LIMIT, DEFAULT_SORT, MAX_PAGE_SIZE
from nepstay.models.admin import Admin
from nepstay.schemas.common.response import ErrorResponse, success_response
from nepstay.schemas.hostel import HostelCreate, HostelFilterParams, HostelSortOption, HostelUpdate
from nepstay.services.hostel import HostelService
from nepstay.services.hostel.constants import (
    SUCCESS_HOSTEL_CREATED,
    SUCCESS_HOSTEL_DELETED,
    SUCCESS_HOSTEL_FEATURED,
    SUCCESS_HOSTEL_UNFEATURED,
    SUCCESS_HOSTEL_UPDATED,
)

router = APIRouter(
    prefix="/hostels",
    tags=["Hostels"],
    responses={404: {"model": ErrorResponse, "description": "Hostel not found"}},
)


def hostel_filter_params(
    search: Optional[str] = Query(default=None, max_length=100),
    min_price: Optional[float] = Query(default=None, ge=0, alias="minPrice"),
    max_price: Optional[float] = Query(default=None, ge=0, alias="maxPrice"),
    facilities: Optional[str] = Query(default=None, description="Comma-separated facility names"),
    featured: Optional[bool] = Query(default=None),
    sort_by: HostelSortOption = Query(default=DEFAULT_SORT, alias="sortBy"),
    page: int = Query(default=DEFAULT_PAGE, ge=1),
    limit: int = Query(default=DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
) -> HostelFilterParams:
    try:
        return HostelFilterParams(
            search=search,
            min_price=min_price,
            max_price=max_price,
            facilities=facilities,
            featured=featured,
            sort_by=sort_by,
            page=page,
            limit=limit,
        )
    except PydanticValidationError as e:
        errors: List[dict] = [
            {**error, "loc": ("query", *error.get("loc", ()))} for error in e.errors()
        ]
        raise RequestValidationError(errors)


# ---------------------------------------------------------------------------
# Public
# ---------------------------------------------------------------------------

@router.get("")
def list_hostels(
    filters: HostelFilterParams = Depends(hostel_filter_params),
    service: HostelService = Depends(get_hostel_service),
):
    """Search, filter and paginate active hostels."""
    return service.search(filters)


@router.get("/featured")
def featured_hostels(
    limit: int = Query(default=DEFAULT_SHOWCASE_LIMIT, ge=1, le=MAX_PAGE_SIZE),
    service: HostelService = Depends(get_hostel_service),
):
    return service.get_featured(limit)


@router.get("/popular")
def popular_hostels(
    limit: int = Query(default=DEFAULT_SHOWCASE_LIMIT, ge=1, le=MAX_PAGE_SIZE),
    service: HostelService = Depends(get_hostel_service),
):
    return service.get_popular(limit)


# ---------------------------------------------------------------------------
# Admin
# ---------------------------------------------------------------------------

@router.get("/admin/stats")
def hostel_stats(
    _: Admin = Depends(require_admin),
    service: HostelService = Depends(get_hostel_service),
):
    return success_response(service.get_stats())


@router.get("/{id_or_slug}")
def get_hostel(
    id_or_slug: str,
    admin: Optional[Admin] = Depends(get_current_admin_optional),
    service: HostelService = Depends(get_hostel_service),
):
    """Fetch by id or slug; inactive hostels are only visible to admins."""
    hostel = service.get_hostel(id_or_slug, include_inactive=admin is not None)
    return success_response({"hostel": hostel.to_public_dict()})


@router.post("", status_code=status.HTTP_201_CREATED)
def create_hostel(
    payload: HostelCreate,
    _: Admin = Depends(require_admin),
    service: HostelService = Depends(get_hostel_service),
):
    hostel = service.create_hostel(payload)
    return success_response({"hostel": hostel.to_public_dict()}, message=SUCCESS_HOSTEL_CREATED)


@router.put("/{hostel_id}")
def update_hostel(
    hostel_id: str,
    payload: HostelUpdate,
    _: Admin = Depends(require_admin),
    service: HostelService = Depends(get_hostel_service),
):
    hostel = service.update_hostel(hostel_id, payload)
    return success_response({"hostel": hostel.to_public_dict()}, message=SUCCESS_HOSTEL_UPDATED)


@router.put("/{hostel_id}/featured")
def toggle_featured(
    hostel_id: str,
    _: Admin = Depends(require_admin),
    service: HostelService = Depends(get_hostel_service),
):
    hostel = service.toggle_featured(hostel_id)
    message = SUCCESS_HOSTEL_FEATURED if hostel.featured else SUCCESS_HOSTEL_UNFEATURED
    return success_response(
        {"hostel": {"id": hostel.id_str, "name": hostel.name, "featured": hostel.featured}},
        message=message,
    )


@router.delete("/{hostel_id}")
def delete_hostel(
    hostel_id: str,
    _: Admin = Depends(require_admin),
    service: HostelService = Depends(get_hostel_service),
):
    service.delete_hostel(hostel_id)
    return success_response(message=SUCCESS_HOSTEL_DELETED)
