# nepstay/core/constants.py
"""
Core application constants.

These values centralize literals shared by the repositories, services and
routers: pagination bounds, sort allow-lists, collection names and header
names.
"""
from __future__ import annotations

# Pagination defaults
DEFAULT_PAGE: int = 1
DEFAULT_PAGE_SIZE: int = 12
MAX_PAGE_SIZE: int = 50
DEFAULT_SHOWCASE_LIMIT: int = 6

# Collections
HOSTELS_COLLECTION: str = "hostels"
ADMINS_COLLECTION: str = "admins"

# Sorting: public sort key -> document field
DEFAULT_SORT: str = "-clicks"
SORT_FIELDS: dict[str, str] = {
    "clicks": "clicks",
    "price": "pricePerNight",
    "createdAt": "createdAt",
    "name": "name",
}

# Click analytics periods, in days (None = all time)
ANALYTICS_PERIODS: dict[str, int | None] = {
    "1d": 1,
    "7d": 7,
    "30d": 30,
    "all": None,
}

# Admin roles
ROLE_ADMIN: str = "admin"

# Common HTTP header names
HEADER_REQUEST_ID: str = "X-Request-ID"
HEADER_PROCESS_TIME: str = "X-Process-Time"

# Cookie value written on logout
LOGGED_OUT_TOKEN: str = "loggedout"
