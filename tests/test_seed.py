import pytest

from nepstay.core.security import verify_password
from nepstay.db.seed import SAMPLE_HOSTELS, build_parser, main, seed_admin, seed_hostels
from nepstay.repositories.admin_repository import AdminRepository


def test_seed_admin_is_idempotent(db):
    created = seed_admin(db, "Owner@NepStay.com", "OwnerPassword1")
    again = seed_admin(db, "owner@nepstay.com", "OwnerPassword1")

    assert created is not None
    assert again is None
    stored = AdminRepository(db).find_by_email("owner@nepstay.com")
    assert verify_password("OwnerPassword1", stored.password_hash)
    assert db["admins"].count_documents({}) == 1


def test_seed_hostels_only_into_empty_collection(db):
    assert seed_hostels(db) == len(SAMPLE_HOSTELS)
    assert seed_hostels(db) == 0

    backpackers = db["hostels"].find_one({"name": "Kathmandu Backpackers"})
    assert backpackers["slug"].startswith("kathmandu-backpackers-")
    assert backpackers["clicks"] == 0


def test_main_seeds_everything(db):
    assert main([], db=db) == 0
    assert db["admins"].count_documents({}) == 1
    assert db["hostels"].count_documents({}) == len(SAMPLE_HOSTELS)


def test_main_admin_only(db):
    main(["--admin-only"], db=db)
    assert db["admins"].count_documents({}) == 1
    assert db["hostels"].count_documents({}) == 0


def test_main_reset_drops_existing_data(db, make_hostel):
    make_hostel("Stale Listing")
    main(["--reset", "--hostels-only"], db=db)

    assert db["hostels"].find_one({"name": "Stale Listing"}) is None
    assert db["hostels"].count_documents({}) == len(SAMPLE_HOSTELS)


def test_parser_rejects_conflicting_flags():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["--admin-only", "--hostels-only"])
