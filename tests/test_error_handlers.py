import pytest
from fastapi.testclient import TestClient
from pymongo.errors import DuplicateKeyError

from nepstay.config.settings import settings
from nepstay.core.exceptions import DuplicateFieldError
from nepstay.core.error_handlers import duplicate_key_field, format_validation_errors
from nepstay.db.session import get_db
from nepstay.main import create_app
from nepstay.models.admin import Admin
from nepstay.repositories.admin_repository import AdminRepository


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "Server is running"
    assert body["environment"] == "test"


def test_unknown_route(client):
    response = client.get("/api/does-not-exist")
    assert response.status_code == 404
    assert response.json() == {
        "success": False,
        "error": {"code": "NOT_FOUND", "message": "Route /api/does-not-exist not found"},
    }


def test_response_headers(client):
    response = client.get("/health", headers={"X-Request-ID": "abc-123"})
    assert response.headers["X-Request-ID"] == "abc-123"
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert "X-Process-Time" in response.headers


def test_cors_allows_configured_origin_with_credentials(client):
    response = client.options(
        "/api/hostels",
        headers={
            "Origin": "http://localhost:3000",
            "Access-Control-Request-Method": "GET",
        },
    )
    assert response.headers["access-control-allow-origin"] == "http://localhost:3000"
    assert response.headers["access-control-allow-credentials"] == "true"


def test_payload_too_large(monkeypatch, db):
    monkeypatch.setattr(settings, "MAX_REQUEST_BODY_SIZE", 64)
    app = create_app()
    app.dependency_overrides[get_db] = lambda: db

    with TestClient(app) as client:
        response = client.post(
            "/api/auth/login",
            json={"email": "admin@nepstay.com", "password": "x" * 200},
        )

    assert response.status_code == 413
    assert response.json()["error"]["code"] == "PAYLOAD_TOO_LARGE"


def test_chunked_payload_too_large(monkeypatch, db):
    monkeypatch.setattr(settings, "MAX_REQUEST_BODY_SIZE", 64)
    app = create_app()
    app.dependency_overrides[get_db] = lambda: db

    def chunks():
        yield b'{"hostelId": "'
        for _ in range(10):
            yield b"a" * 32
        yield b'"}'

    with TestClient(app) as client:
        response = client.post(
            "/api/track/click",
            content=chunks(),
            headers={"Content-Type": "application/json"},
        )

    assert response.status_code == 413
    assert response.json()["error"]["code"] == "PAYLOAD_TOO_LARGE"


def test_small_chunked_body_is_accepted(monkeypatch, db):
    monkeypatch.setattr(settings, "MAX_REQUEST_BODY_SIZE", 64)
    app = create_app()
    app.dependency_overrides[get_db] = lambda: db

    def chunks():
        yield b'{"email": "admin@nepstay.com", '
        yield b'"password": "nope"}'

    with TestClient(app) as client:
        response = client.post(
            "/api/auth/login",
            content=chunks(),
            headers={"Content-Type": "application/json"},
        )

    assert response.status_code == 401


def test_unhandled_error_is_wrapped(db):
    app = create_app()
    app.dependency_overrides[get_db] = lambda: db

    @app.get("/boom")
    def boom():
        raise RuntimeError("kaput")

    with TestClient(app, raise_server_exceptions=False) as client:
        response = client.get("/boom")

    assert response.status_code == 500
    assert response.json() == {
        "success": False,
        "error": {"code": "INTERNAL_SERVER_ERROR", "message": "Internal Server Error"},
    }


def test_duplicate_admin_email(db):
    repository = AdminRepository(db)
    repository.create_admin("admin@nepstay.com", "hash")

    with pytest.raises(DuplicateFieldError) as exc_info:
        repository.create(Admin(email="admin@nepstay.com", password_hash="hash"))

    assert exc_info.value.status_code == 400
    assert exc_info.value.message == "Email already exists"
    assert exc_info.value.field == "email"


def test_duplicate_key_field_from_details():
    error = DuplicateKeyError("E11000", 11000, {"keyValue": {"slug": "a-1"}})
    assert duplicate_key_field(error) == "slug"


def test_format_validation_errors_strips_location_prefix():
    errors = [{"loc": ("body", "contactInfo", "email"), "msg": "value is not a valid email address"}]
    assert format_validation_errors(errors) == [
        {"field": "contactInfo.email", "message": "value is not a valid email address"}
    ]
