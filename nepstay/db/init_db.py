# nepstay/db/init_db.py
"""Database initialization utilities."""
from pymongo import ASCENDING, DESCENDING
from pymongo.database import Database

from nepstay.core.constants import ADMINS_COLLECTION, HOSTELS_COLLECTION
from nepstay.core.logging import get_logger

logger = get_logger(__name__)


def init_db(db: Database) -> None:
    """
    Create the collection indexes. Safe to call repeatedly: existing indexes
    with the same spec are left untouched.
    """
    hostels = db[HOSTELS_COLLECTION]
    hostels.create_index([("slug", ASCENDING)], unique=True, name="slug_unique")
    hostels.create_index([("featured", DESCENDING), ("clicks", DESCENDING)], name="featured_clicks")
    hostels.create_index([("createdAt", DESCENDING)], name="created_at")
    hostels.create_index([("pricePerNight", ASCENDING)], name="price_per_night")
    hostels.create_index([("isActive", ASCENDING)], name="is_active")

    admins = db[ADMINS_COLLECTION]
    admins.create_index([("email", ASCENDING)], unique=True, name="email_unique")
    admins.create_index([("isActive", ASCENDING)], name="is_active")

    logger.info("Database indexes ensured", extra={"db_name": db.name})


def drop_db(db: Database) -> None:
    """
    Drop the application collections.

    WARNING: This will delete all data! Only for development/testing purposes.
    """
    db.drop_collection(HOSTELS_COLLECTION)
    db.drop_collection(ADMINS_COLLECTION)
    logger.warning("All collections dropped", extra={"db_name": db.name})


def reset_db(db: Database) -> None:
    """Drop and re-index the application collections."""
    logger.warning("Resetting database...")
    drop_db(db)
    init_db(db)
    logger.info("Database reset complete")
