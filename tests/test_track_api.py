from datetime import timedelta

import pytest
from bson import ObjectId

from nepstay.schemas.analytics import ClickAnalyticsParams
from nepstay.services.analytics import ClickTrackingService
from nepstay.utils.datetime_utils import DateTimeHelper


def track(client, hostel_id):
    return client.post("/api/track/click", json={"hostelId": hostel_id})


def test_track_click_increments_counter(client, make_hostel):
    hostel = make_hostel("Clicky Hostel", clicks=3)

    for _ in range(4):
        response = track(client, str(hostel.id))
        assert response.status_code == 200

    body = response.json()
    assert body["message"] == "Click tracked successfully"
    assert body["data"]["hostel"] == {"id": str(hostel.id), "name": "Clicky Hostel", "clicks": 7}

    detail = client.get(f"/api/hostels/{hostel.slug}").json()
    assert detail["data"]["hostel"]["clicks"] == 7


def test_track_click_does_not_touch_other_fields(client, db, make_hostel):
    hostel = make_hostel("Steady Hostel", price_per_night=1500, featured=True)

    track(client, str(hostel.id))

    stored = db["hostels"].find_one({"_id": hostel.id})
    assert stored["clicks"] == 1
    assert stored["pricePerNight"] == 1500
    assert stored["featured"] is True
    assert stored["slug"] == hostel.slug


@pytest.mark.parametrize("hostel_id", ["not-an-id", "123", ""])
def test_track_click_rejects_malformed_id(client, hostel_id):
    response = track(client, hostel_id)
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


def test_track_click_unknown_hostel(client):
    response = track(client, str(ObjectId()))
    assert response.status_code == 404
    assert response.json()["error"]["code"] == "HOSTEL_NOT_FOUND"


def test_track_click_inactive_hostel(client, db, make_hostel):
    hostel = make_hostel("Closed", is_active=False, clicks=2)

    response = track(client, str(hostel.id))

    assert response.status_code == 404
    assert db["hostels"].find_one({"_id": hostel.id})["clicks"] == 2


def test_click_analytics_requires_admin(client):
    assert client.get("/api/track/analytics").status_code == 401


def test_click_analytics(admin_client, make_hostel):
    make_hostel("Top", clicks=30)
    make_hostel("Middle", clicks=15)
    make_hostel("Bottom", clicks=0)
    make_hostel("Hidden", clicks=500, is_active=False)

    response = admin_client.get("/api/track/analytics", params={"period": "all", "limit": 2})

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["analytics"]["period"] == "all"
    assert data["analytics"]["totalClicks"] == 45
    assert data["analytics"]["totalHostels"] == 3
    assert data["analytics"]["avgClicks"] == 15
    assert data["analytics"]["topHostel"]["name"] == "Top"
    assert [hostel["name"] for hostel in data["hostels"]] == ["Top", "Middle"]
    assert set(data["hostels"][0]) == {"id", "name", "slug", "clicks", "featured", "createdAt", "location"}


def test_click_analytics_invalid_period(admin_client):
    response = admin_client.get("/api/track/analytics", params={"period": "90d"})
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "QUERY_VALIDATION_ERROR"


def test_click_analytics_period_window(db, make_hostel):
    old = make_hostel("Old Favourite", clicks=50)
    make_hostel("Fresh", clicks=4)
    db["hostels"].update_one(
        {"_id": old.id},
        {"$set": {"createdAt": DateTimeHelper.utcnow() - timedelta(days=20)}},
    )
    service = ClickTrackingService(db)

    week = service.get_click_analytics(ClickAnalyticsParams(period="7d"))
    month = service.get_click_analytics(ClickAnalyticsParams(period="30d"))

    assert week["analytics"]["totalHostels"] == 1
    assert week["analytics"]["totalClicks"] == 4
    assert month["analytics"]["totalHostels"] == 2
    assert month["analytics"]["topHostel"]["name"] == "Old Favourite"


def test_click_analytics_empty(db):
    result = ClickTrackingService(db).get_click_analytics(ClickAnalyticsParams())
    assert result["analytics"]["totalClicks"] == 0
    assert result["analytics"]["avgClicks"] == 0
    assert result["analytics"]["topHostel"] is None
    assert result["hostels"] == []
