from typing import List, Optional
from enum import Enum
from pydantic import BaseModel, Field, ValidationInfo, field_validator
from wayside.models.location import GeoPoint
from wayside.models.place import PlaceRecord


class TravelMode(str, Enum):
    DRIVE = "DRIVE"
    WALK = "WALK"
    BICYCLE = "BICYCLE"
    TWO_WHEELER = "TWO_WHEELER"
    TRANSIT = "TRANSIT"

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            for member in cls:
                if member.value == value.strip().upper():
                    return member
        return None

    @classmethod
    def parse(cls, value: "str | TravelMode") -> "TravelMode":
        try:
            return cls(value)
        except ValueError:
            valid = ", ".join(m.value for m in cls)
            raise ValueError(f"invalid travel mode '{value}': use {valid}") from None


class RouteSearchRequest(BaseModel):
    query: str = Field(..., description="What to search for along the route")
    origin: str = Field(..., description="Origin address or place name")
    destination: str = Field(..., description="Destination address or place name")
    mode: TravelMode = Field(TravelMode.DRIVE, description="Travel mode for the route")
    radius: float = Field(1000.0, gt=0, le=50000, description="Search radius around each waypoint in meters")
    waypoint_count: int = Field(5, ge=1, le=25, description="Number of waypoints to sample along the route")
    per_waypoint_limit: int = Field(5, ge=1, le=20, description="Maximum results per waypoint")
    language: Optional[str] = Field(None, description="BCP-47 language code")
    region: Optional[str] = Field(None, description="CLDR region code")

    @field_validator("query", "origin", "destination")
    @classmethod
    def must_not_be_blank(cls, v: str, info: ValidationInfo) -> str:
        v = v.strip()
        if not v:
            raise ValueError(f"{info.field_name} is required")
        return v

    @field_validator("mode", mode="before")
    @classmethod
    def parse_mode(cls, v):
        return TravelMode.parse(v)


class Waypoint(BaseModel):
    point: GeoPoint
    sequence_index: int = Field(..., ge=0)


class SearchStatus(str, Enum):
    OK = "ok"
    FAILED = "failed"


class SearchOutcome(BaseModel):
    sequence_index: int = Field(..., ge=0)
    status: SearchStatus = SearchStatus.OK
    places: List[PlaceRecord] = Field(default_factory=list)
    error: Optional[str] = None

    @property
    def failed(self) -> bool:
        return self.status == SearchStatus.FAILED

    @classmethod
    def succeeded(cls, sequence_index: int, places: List[PlaceRecord]) -> "SearchOutcome":
        return cls(sequence_index=sequence_index, status=SearchStatus.OK, places=places)

    @classmethod
    def failure(cls, sequence_index: int, error: str) -> "SearchOutcome":
        return cls(sequence_index=sequence_index, status=SearchStatus.FAILED, error=error)


class WaypointResult(BaseModel):
    waypoint: Waypoint
    outcome: SearchOutcome


class RouteSearchResult(BaseModel):
    query: str
    origin: str
    destination: str
    travel_mode: TravelMode
    origin_point: GeoPoint
    destination_point: GeoPoint
    waypoints: List[WaypointResult] = Field(default_factory=list)

    @property
    def failed_count(self) -> int:
        return sum(1 for r in self.waypoints if r.outcome.failed)

    @property
    def succeeded_count(self) -> int:
        return len(self.waypoints) - self.failed_count

    def all_places(self) -> List[PlaceRecord]:
        """Places from every successful waypoint in waypoint order, duplicates kept."""
        return [place for r in self.waypoints for place in r.outcome.places]
