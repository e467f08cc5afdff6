import pytest

from nepstay.repositories.base.pagination import PageInfo
from nepstay.repositories.hostel_repository import (
    FacilitiesSpecification,
    TextSearchSpecification,
    parse_sort,
)


@pytest.fixture
def catalogue(make_hostel):
    return [
        make_hostel(
            "Himalayan Paradise Hostel",
            price_per_night=1200,
            clicks=40,
            featured=True,
            facilities=["Free WiFi", "Hot Shower"],
            location={"city": "Kathmandu", "area": "Thamel"},
        ),
        make_hostel(
            "Kathmandu Backpackers",
            price_per_night=800,
            clicks=10,
            facilities=["Free WiFi", "Shared Kitchen"],
            location={"city": "Kathmandu", "area": "Jyatha"},
        ),
        make_hostel(
            "Lakeside Lodge",
            price_per_night=2500,
            clicks=25,
            facilities=["Boat Rental"],
            location={"city": "Pokhara", "area": "Lakeside"},
        ),
        make_hostel(
            "Closed Courtyard",
            price_per_night=900,
            clicks=99,
            is_active=False,
            location={"city": "Kathmandu", "area": "Thamel"},
        ),
    ]


def names(response):
    return [hostel["name"] for hostel in response.json()["data"]["hostels"]]


class TestPageInfo:
    def test_total_pages_rounds_up(self):
        info = PageInfo.create(page=1, per_page=2, total_items=5)
        assert info.total_pages == 3
        assert info.has_next and not info.has_previous

    def test_out_of_range_page(self):
        info = PageInfo.create(page=9, per_page=2, total_items=5)
        assert not info.has_next
        assert info.has_previous

    def test_empty(self):
        assert PageInfo.create(page=1, per_page=12, total_items=0).total_pages == 0


def test_parse_sort():
    assert parse_sort("price") == [("pricePerNight", 1), ("_id", 1)]
    assert parse_sort("-clicks") == [("clicks", -1), ("_id", -1)]
    assert parse_sort("bogus") == parse_sort("-clicks")


def test_text_search_escapes_regex():
    clause = TextSearchSpecification("a+b (c)").to_filter()["$or"][0]
    assert clause["name"]["$regex"] == r"a\+b \(c\)"


def test_facilities_specification_single_and_many():
    assert FacilitiesSpecification([" wifi "]).to_filter() == {
        "facilities": {"$regex": "wifi", "$options": "i"}
    }
    assert len(FacilitiesSpecification(["wifi", "kitchen"]).to_filter()["$or"]) == 2
    assert FacilitiesSpecification(["", "  "]).to_filter() == {}


def test_default_listing_hides_inactive_and_sorts_by_clicks(client, catalogue):
    response = client.get("/api/hostels")
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["count"] == 3
    assert body["pagination"]["total"] == 3
    assert names(response) == [
        "Himalayan Paradise Hostel",
        "Lakeside Lodge",
        "Kathmandu Backpackers",
    ]


def test_listing_entries_carry_public_fields(client, catalogue):
    hostel = client.get("/api/hostels").json()["data"]["hostels"][0]
    assert hostel["id"] == str(catalogue[0].id)
    assert hostel["pricePerNight"] == 1200
    assert hostel["formattedPrice"] == "Rs. 1,200"
    assert hostel["location"]["city"] == "Kathmandu"


def test_pagination_total_independent_of_page(client, make_hostel):
    for index in range(5):
        make_hostel(f"Hostel {index}", clicks=index)

    first = client.get("/api/hostels", params={"limit": 2, "page": 1}).json()
    last = client.get("/api/hostels", params={"limit": 2, "page": 3}).json()
    beyond = client.get("/api/hostels", params={"limit": 2, "page": 4}).json()

    assert first["pagination"] == {
        "page": 1,
        "limit": 2,
        "total": 5,
        "totalPages": 3,
        "hasNextPage": True,
        "hasPrevPage": False,
    }
    assert last["count"] == 1
    assert last["pagination"]["hasNextPage"] is False
    assert beyond["data"]["hostels"] == []
    assert beyond["pagination"]["total"] == 5


def test_pages_do_not_overlap(client, make_hostel):
    for index in range(6):
        make_hostel(f"Tied {index}", clicks=7)

    seen = []
    for page in (1, 2, 3):
        response = client.get("/api/hostels", params={"limit": 2, "page": page})
        seen.extend(hostel["id"] for hostel in response.json()["data"]["hostels"])
    assert len(seen) == len(set(seen)) == 6


@pytest.mark.parametrize(
    "term, expected",
    [
        ("thamel", ["Himalayan Paradise Hostel"]),
        ("POKHARA", ["Lakeside Lodge"]),
        ("kitchen", ["Kathmandu Backpackers"]),
        ("(", []),
    ],
)
def test_search_is_case_insensitive_substring(client, catalogue, term, expected):
    response = client.get("/api/hostels", params={"search": term})
    assert response.status_code == 200
    assert names(response) == expected


def test_price_range(client, catalogue):
    response = client.get("/api/hostels", params={"minPrice": 800, "maxPrice": 1200, "sortBy": "price"})
    assert names(response) == ["Kathmandu Backpackers", "Himalayan Paradise Hostel"]


def test_facilities_match_any(client, catalogue):
    response = client.get("/api/hostels", params={"facilities": "wifi, boat", "sortBy": "name"})
    assert names(response) == [
        "Himalayan Paradise Hostel",
        "Kathmandu Backpackers",
        "Lakeside Lodge",
    ]


def test_featured_filter(client, catalogue):
    response = client.get("/api/hostels", params={"featured": "true"})
    assert names(response) == ["Himalayan Paradise Hostel"]


@pytest.mark.parametrize(
    "sort_by, expected_first",
    [
        ("price", "Kathmandu Backpackers"),
        ("-price", "Lakeside Lodge"),
        ("name", "Himalayan Paradise Hostel"),
        ("-name", "Lakeside Lodge"),
        ("clicks", "Kathmandu Backpackers"),
    ],
)
def test_sorting(client, catalogue, sort_by, expected_first):
    response = client.get("/api/hostels", params={"sortBy": sort_by})
    assert names(response)[0] == expected_first


@pytest.mark.parametrize(
    "params",
    [
        {"minPrice": 2000, "maxPrice": 1000},
        {"sortBy": "rating"},
        {"limit": 51},
        {"page": 0},
        {"minPrice": -1},
        {"search": "x" * 101},
    ],
)
def test_invalid_query_parameters(client, params):
    response = client.get("/api/hostels", params=params)
    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["error"]["code"] == "QUERY_VALIDATION_ERROR"


def test_featured_and_popular_showcases(client, catalogue):
    featured = client.get("/api/hostels/featured").json()
    popular = client.get("/api/hostels/popular", params={"limit": 2}).json()

    assert featured["count"] == 1
    assert [hostel["name"] for hostel in featured["data"]["hostels"]] == ["Himalayan Paradise Hostel"]
    assert [hostel["name"] for hostel in popular["data"]["hostels"]] == [
        "Himalayan Paradise Hostel",
        "Lakeside Lodge",
    ]
