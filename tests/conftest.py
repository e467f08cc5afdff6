import os

os.environ.setdefault("NODE_ENV", "test")
os.environ.setdefault("JWT_SECRET", "test-secret-key-for-session-tokens")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("LOG_FORMAT", "text")

import mongomock
import pytest
from fastapi.testclient import TestClient

from nepstay.core.rate_limiting import limiter
from nepstay.core.security import hash_password
from nepstay.db.init_db import init_db
from nepstay.db.session import get_db
from nepstay.main import app as fastapi_app
from nepstay.models.hostel import ContactInfo, Hostel, Location
from nepstay.repositories.admin_repository import AdminRepository
from nepstay.repositories.hostel_repository import HostelRepository
from nepstay.utils.slug_utils import generate_slug

ADMIN_EMAIL = "admin@nepstay.com"
ADMIN_PASSWORD = "SecurePassword123!"


@pytest.fixture
def db():
    client = mongomock.MongoClient()
    database = client["nepstay_test"]
    init_db(database)
    yield database
    client.close()


@pytest.fixture
def app(db):
    fastapi_app.dependency_overrides[get_db] = lambda: db
    yield fastapi_app
    fastapi_app.dependency_overrides.clear()


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def admin(db):
    return AdminRepository(db).create_admin(ADMIN_EMAIL, hash_password(ADMIN_PASSWORD))


@pytest.fixture
def admin_client(client, admin):
    response = client.post(
        "/api/auth/login",
        json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD},
    )
    assert response.status_code == 200, response.text
    return client


@pytest.fixture
def rate_limited():
    limiter.reset()
    limiter.enabled = True
    yield limiter
    limiter.enabled = False
    limiter.reset()


@pytest.fixture
def make_hostel(db):
    repository = HostelRepository(db)

    def factory(name="Test Hostel", **overrides):
        location = overrides.pop("location", {"city": "Kathmandu", "area": "Thamel"})
        contact = overrides.pop("contact_info", {})
        hostel = Hostel(
            name=name,
            slug=generate_slug(name),
            description=overrides.pop("description", f"{name} description"),
            price_per_night=overrides.pop("price_per_night", 1000),
            total_beds=overrides.pop("total_beds", 10),
            contact_info=ContactInfo(**contact),
            location=Location(**location),
            **overrides,
        )
        return repository.create(hostel)

    return factory
