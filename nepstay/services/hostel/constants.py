"""
Hostel service constants.
"""

from typing import Final

# Statistics
RECENT_DAYS: Final[int] = 7
STATS_TOP_LIMIT: Final[int] = 5

# Success messages
SUCCESS_HOSTEL_CREATED: Final[str] = "Hostel created successfully"
SUCCESS_HOSTEL_UPDATED: Final[str] = "Hostel updated successfully"
SUCCESS_HOSTEL_DELETED: Final[str] = "Hostel deleted successfully"
SUCCESS_HOSTEL_FEATURED: Final[str] = "Hostel featured successfully"
SUCCESS_HOSTEL_UNFEATURED: Final[str] = "Hostel unfeatured successfully"
