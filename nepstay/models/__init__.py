"""
Document models.
"""

from nepstay.models.admin import Admin
from nepstay.models.base import BaseDocument, object_id_or_none
from nepstay.models.hostel import ContactInfo, Hostel, Location

__all__ = [
    "Admin",
    "BaseDocument",
    "ContactInfo",
    "Hostel",
    "Location",
    "object_id_or_none",
]
