import httpx
import logging
from typing import Any, Iterable
from urllib.parse import urlencode
from tripcompanion.core.config import Settings
from tripcompanion.core.errors import (
    NotFoundError,
    UpstreamTransportError,
    ValidationError,
    upstream_error_body,
    upstream_error_message,
)
from tripcompanion.core.logger import logs
from tripcompanion.models.places_model import Place, PlaceLocation, PlaceQuery

PLACES_BASE_URL = "https://maps.googleapis.com/maps/api/place"
DETAILS_FIELDS = (
    "name,rating,formatted_address,formatted_phone_number,"
    "opening_hours,website,reviews,price_level,photos"
)
PHOTO_MAX_WIDTH = 400


def first_present(record: dict, keys: Iterable[str], default: Any = None) -> Any:
    """First value among `keys` that is neither missing, None nor empty, else `default`."""
    for key in keys:
        value = record.get(key)
        if value is not None and value != "":
            return value
    return default


def project_place(raw: dict) -> Place:
    """Reshape a nearbysearch result into the client's Place record."""
    coords = (raw.get("geometry") or {}).get("location") or {}
    lat, lng = coords.get("lat"), coords.get("lng")
    place_id = raw.get("place_id")
    photos = raw.get("photos") or []

    return Place(
        name=raw.get("name"),
        address=first_present(raw, ("vicinity", "formatted_address"), "Address not available"),
        # a 0 rating means unrated
        rating=raw.get("rating") or "N/A",
        location=PlaceLocation(latitude=lat, longitude=lng),
        photos=(photos[0].get("photo_reference") or None) if photos else None,
        googleMapsUri=(
            f"https://www.google.com/maps/search/?api=1&query={lat},{lng}&query_place_id={place_id}"
        ),
        placeId=place_id,
    )


class PlacesService:
    def __init__(self, settings: Settings, client: httpx.AsyncClient):
        self.settings = settings
        self.client = client
        self.nearby_url = f"{PLACES_BASE_URL}/nearbysearch/json"
        self.details_url = f"{PLACES_BASE_URL}/details/json"
        self.photo_url = f"{PLACES_BASE_URL}/photo"

    async def get_places(self, query: PlaceQuery) -> list[Place]:
        logs.log(
            logging.INFO,
            f"Fetching places: lat={query.lat}, lng={query.lng}, type={query.type}, radius={query.radius}",
        )

        try:
            response = await self.client.get(
                self.nearby_url,
                params={
                    "location": query.location,
                    "radius": query.radius,
                    "type": query.type,
                    "key": self.settings.GOOGLE_MAPS_API_KEY or "",
                },
            )
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logs.log(logging.ERROR, f"Error fetching nearby places: {upstream_error_message(e)}")
            raise UpstreamTransportError(
                "Internal server error",
                details=upstream_error_message(e),
                apiError=upstream_error_body(e),
                places=[],
            ) from e

        status = data.get("status")
        logs.log(logging.INFO, f"Google API Status: {status}")

        if status in ("OK", "ZERO_RESULTS"):
            places = [project_place(p) for p in data.get("results") or []]
            logs.log(logging.INFO, f"Found {len(places)} places")
            return places

        if status == "REQUEST_DENIED":
            logs.log(logging.ERROR, f"API Key Error: {data.get('error_message')}")
            raise UpstreamTransportError(
                "Google API request denied. Check your API key and enabled APIs.",
                details=data.get("error_message"),
                status_code=403,
                places=[],
            )

        if status == "INVALID_REQUEST":
            logs.log(logging.ERROR, f"Invalid Request: {data.get('error_message')}")
            raise UpstreamTransportError(
                "Invalid request parameters",
                details=data.get("error_message"),
                status_code=400,
                places=[],
            )

        logs.log(logging.ERROR, "Unexpected API Status", extra={"data": data})
        raise UpstreamTransportError("Failed to fetch places", details=data, places=[])

    async def get_place_details(self, place_id: str | None) -> dict:
        if not place_id:
            raise ValidationError("Place ID is required")

        try:
            response = await self.client.get(
                self.details_url,
                params={
                    "place_id": place_id,
                    "fields": DETAILS_FIELDS,
                    "key": self.settings.GOOGLE_MAPS_API_KEY or "",
                },
            )
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logs.log(logging.ERROR, f"Error fetching place details: {upstream_error_message(e)}")
            raise UpstreamTransportError("Internal server error", details=upstream_error_message(e)) from e

        if data.get("status") == "OK":
            return data.get("result", {})

        logs.log(logging.WARNING, f"Place details not found for {place_id}: {data.get('status')}")
        raise NotFoundError("Place not found", details=data)

    def build_photo_url(self, photo_reference: str | None) -> str:
        """Deterministic photo URL; the client fetches the image itself."""
        if not photo_reference:
            raise ValidationError("Photo reference is required")

        params = {
            "maxwidth": PHOTO_MAX_WIDTH,
            "photo_reference": photo_reference,
            "key": self.settings.GOOGLE_MAPS_API_KEY or "",
        }
        return f"{self.photo_url}?{urlencode(params)}"
