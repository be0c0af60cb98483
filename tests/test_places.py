"""Tests for the Google Places relay endpoints."""

import httpx
import pytest

from tripcompanion.services.places_service import first_present, project_place


EIFFEL = {
    "name": "Eiffel Tower",
    "vicinity": "Champ de Mars, 5 Av. Anatole France, Paris",
    "rating": 4.7,
    "geometry": {"location": {"lat": 48.8584, "lng": 2.2945}},
    "photos": [{"photo_reference": "ref-1"}, {"photo_reference": "ref-2"}],
    "place_id": "ChIJLU7jZClu5kcR4PcOOO6p3I0",
}


@pytest.fixture
def client(configure):
    return configure(GOOGLE_MAPS_API_KEY="m-key")


@pytest.mark.parametrize("query", ["", "?lat=48.85", "?lng=2.35", "?type=museum&radius=100"])
def test_places_requires_coordinates(client, upstream, query):
    r = client.get(f"/api/places{query}")
    assert r.status_code == 400
    assert r.json() == {"error": "Latitude and longitude are required"}
    assert upstream.requests == []


def test_places_rejects_non_numeric_coordinates(client, upstream):
    r = client.get("/api/places?lat=north&lng=2.35")
    assert r.status_code == 400
    assert r.json()["error"] == "Invalid request parameters"
    assert upstream.requests == []


def test_places_ok(client, upstream):
    upstream.respond_json(200, {"status": "OK", "results": [EIFFEL]})

    r = client.get("/api/places?lat=48.85&lng=2.35")

    assert r.status_code == 200
    assert r.json() == [{
        "name": "Eiffel Tower",
        "address": "Champ de Mars, 5 Av. Anatole France, Paris",
        "rating": 4.7,
        "location": {"latitude": 48.8584, "longitude": 2.2945},
        "photos": "ref-1",
        "googleMapsUri": (
            "https://www.google.com/maps/search/?api=1&query=48.8584,2.2945"
            "&query_place_id=ChIJLU7jZClu5kcR4PcOOO6p3I0"
        ),
        "placeId": "ChIJLU7jZClu5kcR4PcOOO6p3I0",
    }]

    params = upstream.requests[0].url.params
    assert upstream.requests[0].url.path == "/maps/api/place/nearbysearch/json"
    assert params["location"] == "48.85,2.35"
    assert params["type"] == "tourist_attraction"
    assert params["radius"] == "5000"
    assert params["key"] == "m-key"


def test_places_passes_type_and_radius(client, upstream):
    upstream.respond_json(200, {"status": "ZERO_RESULTS", "results": []})

    client.get("/api/places?lat=1&lng=2&type=museum&radius=750")

    params = upstream.requests[0].url.params
    assert params["type"] == "museum"
    assert params["radius"] == "750"


def test_places_zero_results_is_empty_list(client, upstream):
    upstream.respond_json(200, {"status": "ZERO_RESULTS", "results": []})
    r = client.get("/api/places?lat=48.85&lng=2.35")
    assert r.status_code == 200
    assert r.json() == []


def test_places_ok_without_results_is_empty_list(client, upstream):
    upstream.respond_json(200, {"status": "OK"})
    r = client.get("/api/places?lat=48.85&lng=2.35")
    assert r.status_code == 200
    assert r.json() == []


def test_places_request_denied(client, upstream):
    upstream.respond_json(200, {"status": "REQUEST_DENIED", "error_message": "The provided API key is invalid."})

    r = client.get("/api/places?lat=48.85&lng=2.35")

    assert r.status_code == 403
    body = r.json()
    assert body["places"] == []
    assert body["details"] == "The provided API key is invalid."


def test_places_invalid_request(client, upstream):
    upstream.respond_json(200, {"status": "INVALID_REQUEST", "error_message": "Invalid 'location' parameter."})

    r = client.get("/api/places?lat=48.85&lng=2.35")

    assert r.status_code == 400
    assert r.json() == {
        "error": "Invalid request parameters",
        "details": "Invalid 'location' parameter.",
        "places": [],
    }


def test_places_unexpected_status_carries_raw_body(client, upstream):
    raw = {"status": "OVER_QUERY_LIMIT", "results": [], "error_message": "quota"}
    upstream.respond_json(200, raw)

    r = client.get("/api/places?lat=48.85&lng=2.35")

    assert r.status_code == 500
    assert r.json() == {"error": "Failed to fetch places", "details": raw, "places": []}


def test_places_transport_failure(client, upstream):
    def timeout(request):
        raise httpx.ReadTimeout("timed out", request=request)

    upstream.respond_with(timeout)

    r = client.get("/api/places?lat=48.85&lng=2.35")

    assert r.status_code == 500
    assert r.json() == {
        "error": "Internal server error",
        "details": "timed out",
        "apiError": None,
        "places": [],
    }


def test_places_upstream_http_error_keeps_body(client, upstream):
    upstream.respond_json(502, {"message": "bad gateway"})

    r = client.get("/api/places?lat=48.85&lng=2.35")

    assert r.status_code == 500
    body = r.json()
    assert body["apiError"] == {"message": "bad gateway"}
    assert "m-key" not in body["details"]


def test_projection_defaults():
    place = project_place({
        "name": "Nameless Square",
        "geometry": {"location": {"lat": 1.5, "lng": 2.5}},
        "place_id": "p1",
    })
    assert place.rating == "N/A"
    assert place.address == "Address not available"
    assert place.photos is None
    assert place.location.latitude == 1.5


def test_projection_address_falls_back_to_formatted_address():
    place = project_place({
        "formatted_address": "1 Rue de Rivoli, Paris",
        "geometry": {"location": {"lat": 0, "lng": 0}},
    })
    assert place.address == "1 Rue de Rivoli, Paris"


def test_first_present():
    record = {"a": None, "b": "", "c": "x", "d": "y"}
    assert first_present(record, ("a", "b", "c", "d")) == "x"
    assert first_present(record, ("a", "b", "missing"), "default") == "default"
    assert first_present({}, ()) is None


def test_photo_url_is_pure_and_deterministic(client, upstream):
    first = client.get("/get-photo-url?photoReference=abc123")
    second = client.get("/get-photo-url?photoReference=abc123")

    assert first.status_code == 200
    assert first.json() == second.json() == {
        "imageUrl": (
            "https://maps.googleapis.com/maps/api/place/photo"
            "?maxwidth=400&photo_reference=abc123&key=m-key"
        )
    }
    assert upstream.requests == []


def test_photo_url_requires_reference(client):
    r = client.get("/get-photo-url")
    assert r.status_code == 400
    assert r.json() == {"error": "Photo reference is required"}


def test_place_details_ok_returns_raw_result(client, upstream):
    result = {"name": "Louvre Museum", "rating": 4.7, "website": "https://www.louvre.fr/"}
    upstream.respond_json(200, {"status": "OK", "result": result})

    r = client.get("/api/place-details?placeId=louvre")

    assert r.status_code == 200
    assert r.json() == result
    params = upstream.requests[0].url.params
    assert params["place_id"] == "louvre"
    assert params["fields"].split(",") == [
        "name", "rating", "formatted_address", "formatted_phone_number",
        "opening_hours", "website", "reviews", "price_level", "photos",
    ]


def test_place_details_not_found(client, upstream):
    raw = {"status": "NOT_FOUND", "html_attributions": []}
    upstream.respond_json(200, raw)

    r = client.get("/api/place-details?placeId=nowhere")

    assert r.status_code == 404
    assert r.json() == {"error": "Place not found", "details": raw}


def test_place_details_requires_place_id(client, upstream):
    r = client.get("/api/place-details")
    assert r.status_code == 400
    assert r.json() == {"error": "Place ID is required"}
    assert upstream.requests == []


def test_projection_zero_rating_is_unrated():
    place = project_place({"rating": 0, "geometry": {"location": {"lat": 0, "lng": 0}}})
    assert place.rating == "N/A"


def test_projection_blank_photo_reference_is_null():
    place = project_place({
        "photos": [{"photo_reference": ""}],
        "geometry": {"location": {"lat": 0, "lng": 0}},
    })
    assert place.photos is None
