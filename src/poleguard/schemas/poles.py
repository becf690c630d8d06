"""Pydantic request/response models for pole and land owner endpoints."""

from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field

from ..models.domain import LandOwner, Pole


class PoleCreateRequest(BaseModel):
    pole_name: str = Field(..., min_length=1, max_length=255)
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    pole_height: float = Field(..., gt=0, description="Pole height in meters.")
    restricted_radius: float = Field(..., ge=50, le=5000, description="No-marketing radius in meters.")
    zone_id: Optional[int] = Field(default=None, description="Required for callers without an assigned zone.")
    land_owner_id: Optional[int] = None
    status: Literal["active", "inactive"] = "active"


class PoleUpdateRequest(BaseModel):
    pole_name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)
    pole_height: Optional[float] = Field(default=None, gt=0)
    restricted_radius: Optional[float] = Field(default=None, ge=50, le=5000)
    land_owner_id: Optional[int] = None
    status: Optional[Literal["active", "inactive"]] = None


class PoleModel(BaseModel):
    id: int
    pole_name: str
    latitude: float
    longitude: float
    pole_height: float
    restricted_radius: float
    status: str
    zone_id: int
    land_owner_id: Optional[int] = None
    created_by: Optional[int] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_domain(cls, pole: Pole) -> "PoleModel":
        return cls(
            id=pole.id,
            pole_name=pole.pole_name,
            latitude=pole.latitude,
            longitude=pole.longitude,
            pole_height=pole.pole_height,
            restricted_radius=pole.restricted_radius,
            status=pole.status.value,
            zone_id=pole.zone_id,
            land_owner_id=pole.land_owner_id,
            created_by=pole.created_by,
            created_at=pole.created_at,
        )


class LandOwnerCreateRequest(BaseModel):
    owner_name: str = Field(..., min_length=1, max_length=255)
    mobile_number: str = Field(..., min_length=1, max_length=20)
    address: str = Field(..., min_length=1)
    notes: Optional[str] = None
    zone_id: Optional[int] = None


class LandOwnerUpdateRequest(BaseModel):
    owner_name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    mobile_number: Optional[str] = Field(default=None, min_length=1, max_length=20)
    address: Optional[str] = Field(default=None, min_length=1)
    notes: Optional[str] = None


class LandOwnerModel(BaseModel):
    id: int
    owner_name: str
    mobile_number: str
    address: str
    notes: Optional[str] = None
    zone_id: int
    created_by: Optional[int] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_domain(cls, owner: LandOwner) -> "LandOwnerModel":
        return cls(
            id=owner.id,
            owner_name=owner.owner_name,
            mobile_number=owner.mobile_number,
            address=owner.address,
            notes=owner.notes,
            zone_id=owner.zone_id,
            created_by=owner.created_by,
            created_at=owner.created_at,
        )
