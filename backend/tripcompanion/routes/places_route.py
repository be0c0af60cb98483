import httpx
from typing import Optional
from fastapi import APIRouter, Depends

from tripcompanion.models.places_model import Place, PlaceQuery, PhotoUrlResponse
from tripcompanion.services.places_service import PlacesService
from tripcompanion.core.config import Settings, get_settings
from tripcompanion.core.errors import ValidationError
from tripcompanion.core.http_client import get_http_client

router = APIRouter()

def get_places_service(
    settings: Settings = Depends(get_settings),
    client: httpx.AsyncClient = Depends(get_http_client),
) -> PlacesService:
    return PlacesService(settings, client)

def get_place_query(
    lat: Optional[float] = None,
    lng: Optional[float] = None,
    type: str = "tourist_attraction",
    radius: int = 5000,
) -> PlaceQuery:
    if lat is None or lng is None:
        raise ValidationError("Latitude and longitude are required")
    return PlaceQuery(lat=lat, lng=lng, type=type, radius=radius)

@router.get("/api/places", response_model=list[Place])
async def get_places_endpoint(
    query: PlaceQuery = Depends(get_place_query),
    service: PlacesService = Depends(get_places_service)
):
    return await service.get_places(query)

@router.get("/get-photo-url", response_model=PhotoUrlResponse)
def get_photo_url_endpoint(
    photoReference: Optional[str] = None,
    settings: Settings = Depends(get_settings),
):
    # No outbound call, so no HTTP client either
    service = PlacesService(settings, client=None)
    return PhotoUrlResponse(imageUrl=service.build_photo_url(photoReference))

@router.get("/api/place-details")
async def get_place_details_endpoint(
    placeId: Optional[str] = None,
    service: PlacesService = Depends(get_places_service)
):
    return await service.get_place_details(placeId)
