"""
API v1 Router - Main Entry Point
Aggregates all v1 API endpoints for the hostel marketplace
"""

from fastapi import APIRouter

from nepstay.api.v1 import admin, auth, hostels, track

router = APIRouter(
    responses={
        400: {"description": "Bad Request"},
        401: {"description": "Unauthorized"},
        403: {"description": "Forbidden"},
        404: {"description": "Not Found"},
        429: {"description": "Too Many Requests"},
        500: {"description": "Internal Server Error"},
    }
)

router.include_router(hostels.router)
router.include_router(auth.router)
router.include_router(track.router)
router.include_router(admin.router)

__all__ = ["router"]
