"""Pydantic request/response models for zone endpoints."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal, Optional

from pydantic import BaseModel, Field, field_validator

from ..models.domain import Zone
from ..services.geospatial import normalize_boundary


class ZoneCreateRequest(BaseModel):
    zone_name: str = Field(..., min_length=1, max_length=255)
    zone_boundary: list[Any] = Field(
        ...,
        min_length=3,
        description="Ordered boundary points as {lat, lng} objects or [lat, lng] pairs.",
    )
    description: Optional[str] = None
    status: Literal["active", "inactive"] = "active"


class ZoneUpdateRequest(BaseModel):
    zone_name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    zone_boundary: Optional[list[Any]] = None
    description: Optional[str] = None
    status: Optional[Literal["active", "inactive"]] = None

    @field_validator("zone_boundary")
    @classmethod
    def validate_boundary_size(cls, value: Optional[list[Any]]) -> Optional[list[Any]]:
        if value is not None and len(value) < 3:
            raise ValueError("zone_boundary must contain at least 3 points")
        return value


class ZoneModel(BaseModel):
    id: int
    zone_name: str
    zone_boundary: list[dict[str, float]]
    description: Optional[str] = None
    status: str
    created_by: Optional[int] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_domain(cls, zone: Zone) -> "ZoneModel":
        return cls(
            id=zone.id,
            zone_name=zone.zone_name,
            zone_boundary=[{"lat": lat, "lng": lng} for lat, lng in normalize_boundary(zone.zone_boundary)],
            description=zone.description,
            status=zone.status.value,
            created_by=zone.created_by,
            created_at=zone.created_at,
        )
