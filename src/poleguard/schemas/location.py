"""Agent location check schemas."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from ..models.domain import LocationVerdict, NearbyPole


class LocationCheckRequest(BaseModel):
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)


class NearbyPoleModel(BaseModel):
    id: int
    pole_name: str
    latitude: float
    longitude: float
    pole_height: float
    restricted_radius: float
    status: str
    zone_id: int
    distance: float
    is_restricted: bool

    @classmethod
    def from_domain(cls, entry: NearbyPole) -> "NearbyPoleModel":
        pole = entry.pole
        return cls(
            id=pole.id,
            pole_name=pole.pole_name,
            latitude=pole.latitude,
            longitude=pole.longitude,
            pole_height=pole.pole_height,
            restricted_radius=pole.restricted_radius,
            status=pole.status.value,
            zone_id=pole.zone_id,
            distance=round(entry.distance, 2),
            is_restricted=entry.is_restricted,
        )


class LocationStatusResponse(BaseModel):
    status: str
    message: str
    in_zone: bool
    can_market: bool
    nearest_pole: Optional[str] = None
    distance_to_pole: Optional[float] = None
    nearby_poles: List[NearbyPoleModel]

    @classmethod
    def from_domain(cls, verdict: LocationVerdict) -> "LocationStatusResponse":
        return cls(
            status=verdict.status.value,
            message=verdict.message,
            in_zone=verdict.in_zone,
            can_market=verdict.can_market,
            nearest_pole=verdict.nearest_pole.pole_name if verdict.nearest_pole else None,
            distance_to_pole=round(verdict.distance_to_pole, 2) if verdict.distance_to_pole is not None else None,
            nearby_poles=[NearbyPoleModel.from_domain(entry) for entry in verdict.nearby_poles],
        )
