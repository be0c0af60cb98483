from pydantic import BaseModel
from typing import Optional, Union

class PlaceLocation(BaseModel):
    latitude: Optional[float] = None
    longitude: Optional[float] = None

class Place(BaseModel):
    name: Optional[str] = None
    address: str
    rating: Union[float, str]  # "N/A" when the upstream has no rating
    location: PlaceLocation
    photos: Optional[str] = None  # first photo reference
    googleMapsUri: str
    placeId: Optional[str] = None

class PlaceQuery(BaseModel):
    lat: float
    lng: float
    type: str = "tourist_attraction"
    radius: int = 5000

    @property
    def location(self) -> str:
        return f"{self.lat},{self.lng}"

class PhotoUrlResponse(BaseModel):
    imageUrl: str
