"""
Data-access layer over the MongoDB collections.
"""

from nepstay.repositories.admin_repository import AdminRepository
from nepstay.repositories.hostel_repository import HostelRepository

__all__ = ["AdminRepository", "HostelRepository"]
