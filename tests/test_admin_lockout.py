from datetime import datetime, timedelta

import pytest

from nepstay.core.exceptions import AccountLockedError, InvalidCredentialsError
from nepstay.models.admin import Admin
from nepstay.repositories.admin_repository import AdminRepository
from nepstay.schemas.auth import LoginRequest
from nepstay.services.auth import AuthenticationService
from tests.conftest import ADMIN_EMAIL, ADMIN_PASSWORD

NOW = datetime(2025, 3, 1, 12, 0, 0)


def wrong_login():
    return LoginRequest(email=ADMIN_EMAIL, password="not-the-password")


def right_login():
    return LoginRequest(email=ADMIN_EMAIL, password=ADMIN_PASSWORD)


class TestFailedAttemptUpdate:
    def test_increments_below_limit(self):
        admin = Admin(login_attempts=2)
        update = admin.failed_attempt_update(NOW, max_attempts=5, lock_minutes=30)
        assert update["$inc"] == {"loginAttempts": 1}
        assert "lockUntil" not in update["$set"]

    def test_locks_on_reaching_limit(self):
        admin = Admin(login_attempts=4)
        update = admin.failed_attempt_update(NOW, max_attempts=5, lock_minutes=30)
        assert update["$set"]["lockUntil"] == NOW + timedelta(minutes=30)

    def test_expired_lock_restarts_count(self):
        admin = Admin(login_attempts=5, lock_until=NOW - timedelta(minutes=1))
        update = admin.failed_attempt_update(NOW, max_attempts=5, lock_minutes=30)
        assert update["$set"]["loginAttempts"] == 1
        assert update["$unset"] == {"lockUntil": ""}
        assert "$inc" not in update

    def test_active_lock_is_not_extended(self):
        admin = Admin(login_attempts=5, lock_until=NOW + timedelta(minutes=10))
        update = admin.failed_attempt_update(NOW, max_attempts=5, lock_minutes=30)
        assert "lockUntil" not in update["$set"]

    def test_reset_update(self):
        update = Admin.reset_attempts_update(NOW)
        assert update["$set"]["loginAttempts"] == 0
        assert update["$set"]["lastLogin"] == NOW
        assert update["$unset"] == {"lockUntil": ""}


def test_is_locked():
    assert not Admin().is_locked(NOW)
    assert Admin(lock_until=NOW + timedelta(seconds=1)).is_locked(NOW)
    assert not Admin(lock_until=NOW).is_locked(NOW)


def test_five_failures_lock_the_account(db, admin):
    service = AuthenticationService(db)

    for _ in range(5):
        with pytest.raises(InvalidCredentialsError):
            service.login(wrong_login(), now=NOW)

    stored = AdminRepository(db).find_by_email(ADMIN_EMAIL)
    assert stored.login_attempts == 5
    assert stored.lock_until == NOW + timedelta(minutes=30)

    with pytest.raises(AccountLockedError) as exc_info:
        service.login(right_login(), now=NOW + timedelta(minutes=29))
    assert exc_info.value.status_code == 423


def test_login_succeeds_after_lock_expires(db, admin):
    service = AuthenticationService(db)
    for _ in range(5):
        with pytest.raises(InvalidCredentialsError):
            service.login(wrong_login(), now=NOW)

    later = NOW + timedelta(minutes=31)
    result = service.login(right_login(), now=later)

    assert result.token
    assert result.admin.login_attempts == 0
    assert result.admin.lock_until is None
    assert result.admin.last_login == later


def test_failure_after_expired_lock_counts_from_one(db, admin):
    service = AuthenticationService(db)
    for _ in range(5):
        with pytest.raises(InvalidCredentialsError):
            service.login(wrong_login(), now=NOW)

    with pytest.raises(InvalidCredentialsError):
        service.login(wrong_login(), now=NOW + timedelta(minutes=31))

    stored = AdminRepository(db).find_by_email(ADMIN_EMAIL)
    assert stored.login_attempts == 1
    assert stored.lock_until is None


def test_successful_login_resets_counter(db, admin):
    service = AuthenticationService(db)
    for _ in range(3):
        with pytest.raises(InvalidCredentialsError):
            service.login(wrong_login(), now=NOW)

    service.login(right_login(), now=NOW)

    stored = AdminRepository(db).find_by_email(ADMIN_EMAIL)
    assert stored.login_attempts == 0


def test_unknown_email_is_indistinguishable(db, admin):
    service = AuthenticationService(db)
    with pytest.raises(InvalidCredentialsError) as exc_info:
        service.login(LoginRequest(email="nobody@nepstay.com", password=ADMIN_PASSWORD), now=NOW)
    assert exc_info.value.message == "Invalid email or password"


def test_inactive_admin_cannot_login(db, admin):
    db["admins"].update_one({"_id": admin.id}, {"$set": {"isActive": False}})
    with pytest.raises(InvalidCredentialsError):
        AuthenticationService(db).login(right_login(), now=NOW)
