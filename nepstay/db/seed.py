"""
Seed the database with the initial admin and sample Kathmandu-valley hostels.

Usage:
    python -m nepstay.db.seed                # indexes, admin and hostels
    python -m nepstay.db.seed --admin-only
    python -m nepstay.db.seed --hostels-only
    python -m nepstay.db.seed --reset        # drop collections first
"""

import argparse
from typing import Any, Dict, List, Optional

from pymongo.database import Database

from nepstay.config.settings import settings
from nepstay.core.exceptions import DuplicateFieldError
from nepstay.core.logging import get_logger, setup_logging
from nepstay.core.security import hash_password
from nepstay.db.init_db import init_db, reset_db
from nepstay.db.session import close_client, get_database
from nepstay.models.admin import Admin
from nepstay.repositories.admin_repository import AdminRepository
from nepstay.repositories.hostel_repository import HostelRepository
from nepstay.schemas.hostel.hostel_base import HostelCreate
from nepstay.services.hostel import HostelService

logger = get_logger(__name__)

MAPS_EMBED = "https://www.google.com/maps/embed?pb=!1m18!1m12!1m3!1d3532!2d85.31!3d27.71"

SAMPLE_HOSTELS: List[Dict[str, Any]] = [
    {
        "name": "Himalayan Paradise Hostel",
        "description": (
            "Comfortable accommodation with traditional Nepali hospitality in the "
            "vibrant Thamel area, close to restaurants, shops and cultural sites."
        ),
        "shortDescription": "Thamel hostel with traditional hospitality and mountain views.",
        "images": [
            "https://images.unsplash.com/photo-1566073771259-6a8506099945?w=800&h=600&fit=crop",
            "https://images.unsplash.com/photo-1631049307264-da0ec9d70304?w=800&h=600&fit=crop",
        ],
        "pricePerNight": 1200,
        "totalBeds": 24,
        "contactInfo": {
            "phone": "+9779812345670",
            "whatsapp": "+9779812345670",
            "facebook": "https://facebook.com/himalayan-paradise-hostel",
            "instagram": "https://instagram.com/himalayan_paradise_hostel",
            "website": "https://himalayanparadise.com",
        },
        "location": {
            "city": "Kathmandu",
            "area": "Thamel",
            "address": "Thamel, Kathmandu, Nepal",
            "googleMapsUrl": MAPS_EMBED,
        },
        "facilities": ["Free WiFi", "Hot Shower", "Laundry Service", "24/7 Reception", "Rooftop Terrace"],
        "featured": True,
    },
    {
        "name": "Kathmandu Backpackers",
        "description": (
            "Budget-friendly dorms for adventurous travelers, with a social common "
            "room and help planning treks."
        ),
        "shortDescription": "Budget backpacker hostel for trekkers.",
        "images": ["https://images.unsplash.com/photo-1571896349842-33c89424de2d?w=800&h=600&fit=crop"],
        "pricePerNight": 800,
        "totalBeds": 40,
        "contactInfo": {"phone": "+9779801234567", "whatsapp": "9801234567"},
        "location": {"city": "Kathmandu", "area": "Jyatha", "address": "Jyatha Marg, Kathmandu"},
        "facilities": ["Free WiFi", "Shared Kitchen", "Lockers", "Trek Planning"],
        "featured": False,
    },
    {
        "name": "Patan Heritage Stay",
        "description": (
            "A quiet guesthouse-style hostel a short walk from Patan Durbar Square, "
            "in a restored Newari courtyard building."
        ),
        "shortDescription": "Courtyard hostel near Patan Durbar Square.",
        "images": ["https://images.unsplash.com/photo-1584132967334-10e028bd69f7?w=800&h=600&fit=crop"],
        "pricePerNight": 1500,
        "totalBeds": 16,
        "contactInfo": {"phone": "+9779841112233", "email": "Stay@PatanHeritage.com"},
        "location": {"city": "Lalitpur", "area": "Patan", "address": "Mangal Bazar, Lalitpur"},
        "facilities": ["Free WiFi", "Breakfast", "Garden", "Bicycle Rental"],
        "featured": True,
    },
    {
        "name": "Bhaktapur Pottery Square Hostel",
        "description": (
            "Simple rooms overlooking Pottery Square, ideal for travelers exploring "
            "the medieval streets of Bhaktapur."
        ),
        "shortDescription": "Rooms overlooking Bhaktapur's Pottery Square.",
        "images": [],
        "pricePerNight": 650,
        "totalBeds": 12,
        "contactInfo": {"phone": "+9779860001122"},
        "location": {"city": "Bhaktapur", "area": "Pottery Square", "address": "Talako, Bhaktapur"},
        "facilities": ["Hot Shower", "Rooftop Terrace", "Cultural Tours"],
        "featured": False,
    },
]


def seed_admin(db: Database, email: Optional[str] = None, password: Optional[str] = None) -> Optional[Admin]:
    """Create the initial admin unless one with that email exists."""
    email = email or settings.ADMIN_EMAIL
    password = password or settings.ADMIN_PASSWORD
    repository = AdminRepository(db)

    if repository.find_by_email(email) is not None:
        logger.info("Admin user already exists", extra={"email": email})
        return None

    try:
        admin = repository.create_admin(email, hash_password(password))
    except DuplicateFieldError:
        logger.info("Admin user already exists", extra={"email": email})
        return None

    logger.info("Initial admin created", extra={"email": admin.email})
    return admin


def seed_hostels(db: Database, hostels: Optional[List[Dict[str, Any]]] = None) -> int:
    """Insert the sample hostels when the collection is empty."""
    if HostelRepository(db).count() > 0:
        logger.info("Hostels already present; skipping sample data")
        return 0

    service = HostelService(db)
    created = 0
    for data in hostels or SAMPLE_HOSTELS:
        service.create_hostel(HostelCreate.model_validate(data))
        created += 1

    logger.info("Sample hostels created", extra={"count": created})
    return created


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Seed the NepStay database")
    group = parser.add_mutually_exclusive_group()
    group.add_argument("--admin-only", action="store_true", help="only create the initial admin")
    group.add_argument("--hostels-only", action="store_true", help="only insert sample hostels")
    parser.add_argument("--reset", action="store_true", help="drop collections before seeding")
    return parser


def main(argv: Optional[List[str]] = None, db: Optional[Database] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging()

    own_client = db is None
    db = db if db is not None else get_database()
    try:
        if args.reset:
            reset_db(db)
        else:
            init_db(db)

        if not args.hostels_only:
            seed_admin(db)
        if not args.admin_only:
            seed_hostels(db)
    finally:
        if own_client:
            close_client()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
