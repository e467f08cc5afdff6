from nepstay.services.analytics import DashboardAnalyticsService


def test_metrics_require_admin(client):
    assert client.get("/api/admin/metrics").status_code == 401
    assert client.get("/api/admin/system-info").status_code == 401


def test_dashboard_metrics(admin_client, make_hostel):
    make_hostel("Budget Dorm", price_per_night=800, clicks=12, facilities=["Free WiFi", "Lockers"])
    make_hostel("Mid Range", price_per_night=6000, clicks=6, featured=True, facilities=["Free WiFi"])
    make_hostel("Luxury Loft", price_per_night=35000, clicks=0, facilities=["Spa"])
    make_hostel("Closed", price_per_night=100, clicks=90, is_active=False)

    response = admin_client.get("/api/admin/metrics")

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["overview"] == {
        "totalHostels": 4,
        "activeHostels": 3,
        "inactiveHostels": 1,
        "featuredHostels": 1,
        "totalClicks": 108,
        "avgClicksPerHostel": 36,
    }
    assert data["growth"]["newHostelsThisWeek"] == 4
    assert data["pricing"]["minPrice"] == 800
    assert data["pricing"]["maxPrice"] == 35000
    assert data["pricing"]["avgPrice"] == 13933

    buckets = {bucket["_id"]: bucket["count"] for bucket in data["pricing"]["priceDistribution"]}
    assert buckets == {0: 1, 5000: 1, 30000: 1}

    assert [hostel["name"] for hostel in data["popularHostels"]] == ["Budget Dorm", "Mid Range", "Luxury Loft"]
    assert "createdAt" in data["recentHostels"][0]
    assert data["topFacilities"][0] == {"_id": "Free WiFi", "count": 2}
    assert sum(month["count"] for month in data["monthlyTrend"]) == 4


def test_dashboard_metrics_empty_store(db):
    metrics = DashboardAnalyticsService(db).get_dashboard_metrics()
    assert metrics["overview"]["avgClicksPerHostel"] == 0
    assert metrics["pricing"] == {"avgPrice": 0, "minPrice": 0, "maxPrice": 0, "priceDistribution": []}
    assert metrics["popularHostels"] == []


def test_system_info(admin_client):
    response = admin_client.get("/api/admin/system-info")

    assert response.status_code == 200
    info = response.json()["data"]["systemInfo"]
    assert info["environment"] == "test"
    assert info["adminCount"] == 1
    assert info["uptime"] >= 0
    assert info["memoryUsage"]["rss"] > 0
    assert info["database"]["name"] == "nepstay_test"
    assert info["serverTime"].endswith("Z")
