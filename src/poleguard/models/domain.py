"""Domain models for zones, poles, land owners and line-of-sight records."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, Sequence


class Status(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class LocationStatus(str, Enum):
    GREEN = "GREEN"
    RED = "RED"
    GRAY = "GRAY"


class LineOfSightOutcome(str, Enum):
    CLEAR = "CLEAR"
    PARTIAL = "PARTIAL"
    BLOCKED = "BLOCKED"


@dataclass(frozen=True, slots=True)
class Coordinate:
    latitude: float
    longitude: float


@dataclass(slots=True)
class Zone:
    """An administrator-drawn polygon scoping admins, agents, poles and land owners."""

    id: int
    zone_name: str
    zone_boundary: list
    status: Status = Status.ACTIVE
    description: Optional[str] = None
    created_by: Optional[int] = None
    created_at: Optional[datetime] = None

    @property
    def is_active(self) -> bool:
        return self.status == Status.ACTIVE


@dataclass(slots=True)
class Pole:
    """A physical structure with a restricted marketing radius (meters)."""

    id: int
    pole_name: str
    latitude: float
    longitude: float
    pole_height: float
    restricted_radius: float
    zone_id: int
    status: Status = Status.ACTIVE
    land_owner_id: Optional[int] = None
    created_by: Optional[int] = None
    created_at: Optional[datetime] = None

    @property
    def position(self) -> Coordinate:
        return Coordinate(self.latitude, self.longitude)

    @property
    def is_active(self) -> bool:
        return self.status == Status.ACTIVE


@dataclass(slots=True)
class LandOwner:
    id: int
    owner_name: str
    mobile_number: str
    address: str
    zone_id: int
    notes: Optional[str] = None
    created_by: Optional[int] = None
    created_at: Optional[datetime] = None


@dataclass(slots=True)
class NearbyPole:
    pole: Pole
    distance: float
    is_restricted: bool


@dataclass(slots=True)
class LocationVerdict:
    """Result of classifying an agent location; computed per request, never stored."""

    status: LocationStatus
    can_market: bool
    in_zone: bool
    message: str
    nearest_pole: Optional[Pole] = None
    distance_to_pole: Optional[float] = None
    nearby_poles: list[NearbyPole] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class LineOfSightResult:
    pole_top_elevation: float
    elevation_difference: float
    result: LineOfSightOutcome
    extra_height_required: Optional[float] = None


@dataclass(frozen=True, slots=True)
class LineOfSightCalculation:
    """Immutable audit record of one line-of-sight calculation."""

    id: int
    pole_id: int
    agent_latitude: float
    agent_longitude: float
    agent_elevation: float
    pole_elevation: float
    elevation_difference: float
    distance_from_pole: float
    result: LineOfSightOutcome
    calculated_by: Optional[int]
    created_at: datetime
    extra_height_required: Optional[float] = None
    calculation_notes: Optional[str] = None


@dataclass(frozen=True, slots=True)
class ZonePoleSnapshot:
    zone: Optional[Zone]
    active_poles: Sequence[Pole]
