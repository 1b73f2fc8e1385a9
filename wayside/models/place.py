from typing import List, Optional
from pydantic import BaseModel, Field
from wayside.models.location import GeoPoint


class PlaceRecord(BaseModel):
    id: str
    name: str = Field(default="", description="Display name of the place")
    address: Optional[str] = None
    location: Optional[GeoPoint] = None
    types: List[str] = Field(default_factory=list)
    primary_type: Optional[str] = None
    rating: Optional[float] = None
    user_rating_count: Optional[int] = None
    price_level: Optional[str] = None
    business_status: Optional[str] = None
    website_uri: Optional[str] = None
    google_maps_uri: Optional[str] = None
    summary: Optional[str] = Field(None, description="Editorial summary, if any")
