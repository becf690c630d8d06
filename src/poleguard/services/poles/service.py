"""Pole lifecycle with zone containment and radius overlap checks."""

from __future__ import annotations

import logging
from typing import Any, Optional

from ...config import settings
from ...errors import InvalidCoordinateError, NotFoundError, OutsideZoneBoundaryError, PoleOverlapError
from ...models.domain import Pole, Status
from ...persistence.repository import Repository
from ..access import ensure_zone_scope
from ..cache import ZonePoleSnapshotCache, invalidate_zone
from ..geospatial import point_in_polygon, validate_coordinate
from .overlap import find_overlap

logger = logging.getLogger(__name__)

ACCESS_DENIED = "Access denied to this pole"


def validate_pole_dimensions(pole_height: float, restricted_radius: float) -> None:
    if not pole_height > 0:
        raise InvalidCoordinateError(f"Pole height must be greater than 0, got {pole_height}")
    low, high = settings.min_restricted_radius, settings.max_restricted_radius
    if not low <= restricted_radius <= high:
        raise InvalidCoordinateError(
            f"Restricted radius must be between {low:g} and {high:g} meters, got {restricted_radius}"
        )


def _require_pole(repo: Repository, pole_id: int, zone_scope: Optional[int] = None) -> Pole:
    pole = repo.get_pole(pole_id)
    if pole is None:
        raise NotFoundError("Pole", pole_id)
    ensure_zone_scope(pole.zone_id, zone_scope, ACCESS_DENIED)
    return pole


def _check_land_owner(repo: Repository, land_owner_id: Optional[int], zone_id: int) -> None:
    if land_owner_id is None:
        return
    owner = repo.get_land_owner(land_owner_id)
    if owner is None:
        raise NotFoundError("Land owner", land_owner_id)
    if owner.zone_id != zone_id:
        raise ValueError("Land owner must belong to the pole's zone")


def _check_placement(
    repo: Repository,
    zone_id: int,
    latitude: float,
    longitude: float,
    restricted_radius: float,
    exclude_id: Optional[int] = None,
    check_boundary: bool = True,
) -> None:
    zone = repo.get_zone(zone_id)
    if zone is None:
        raise NotFoundError("Zone", zone_id)
    if check_boundary and not point_in_polygon(latitude, longitude, zone.zone_boundary):
        raise OutsideZoneBoundaryError()

    conflict = find_overlap(latitude, longitude, restricted_radius, repo.list_poles(zone_id=zone_id), exclude_id)
    if conflict is not None:
        logger.info(f"Rejected placement in zone {zone_id}: overlaps pole {conflict.id} '{conflict.pole_name}'")
        raise PoleOverlapError(conflict)


def get_pole(repo: Repository, pole_id: int, zone_scope: Optional[int] = None) -> Pole:
    return _require_pole(repo, pole_id, zone_scope)


def list_poles(
    repo: Repository, zone_id: Optional[int] = None, status: Optional[Status] = None
) -> list[Pole]:
    return sorted(repo.list_poles(zone_id=zone_id, status=status), key=lambda p: p.id, reverse=True)


def create_pole(
    repo: Repository,
    cache: ZonePoleSnapshotCache,
    *,
    pole_name: str,
    latitude: float,
    longitude: float,
    pole_height: float,
    restricted_radius: float,
    zone_id: int,
    land_owner_id: Optional[int] = None,
    status: Status = Status.ACTIVE,
    created_by: Optional[int] = None,
) -> Pole:
    """Persist a new pole after containment and overlap checks, then invalidate its zone."""

    latitude, longitude = validate_coordinate(latitude, longitude)
    validate_pole_dimensions(pole_height, restricted_radius)
    _check_land_owner(repo, land_owner_id, zone_id)
    _check_placement(repo, zone_id, latitude, longitude, restricted_radius)

    pole = repo.create_pole(
        pole_name=pole_name,
        latitude=latitude,
        longitude=longitude,
        pole_height=pole_height,
        restricted_radius=restricted_radius,
        zone_id=zone_id,
        land_owner_id=land_owner_id,
        status=Status(status),
        created_by=created_by,
    )
    invalidate_zone(cache, zone_id)
    logger.info(f"Created pole {pole.id} '{pole.pole_name}' in zone {zone_id}")
    return pole


def update_pole(
    repo: Repository,
    cache: ZonePoleSnapshotCache,
    pole_id: int,
    zone_scope: Optional[int] = None,
    **changes: Any,
) -> Pole:
    """Apply a partial update; position and radius changes are re-checked before writing."""

    pole = _require_pole(repo, pole_id, zone_scope)
    fields = {key: value for key, value in changes.items() if value is not None}
    if "land_owner_id" in changes:
        fields["land_owner_id"] = changes["land_owner_id"]
    if "status" in fields:
        fields["status"] = Status(fields["status"])

    latitude = fields.get("latitude", pole.latitude)
    longitude = fields.get("longitude", pole.longitude)
    latitude, longitude = validate_coordinate(latitude, longitude)
    pole_height = fields.get("pole_height", pole.pole_height)
    restricted_radius = fields.get("restricted_radius", pole.restricted_radius)
    validate_pole_dimensions(pole_height, restricted_radius)
    _check_land_owner(repo, fields.get("land_owner_id"), pole.zone_id)

    moved = "latitude" in fields or "longitude" in fields
    if moved:
        fields["latitude"], fields["longitude"] = latitude, longitude
    _check_placement(
        repo,
        pole.zone_id,
        latitude,
        longitude,
        restricted_radius,
        exclude_id=pole.id,
        check_boundary=moved,
    )

    updated = repo.update_pole(pole_id, **fields)
    invalidate_zone(cache, pole.zone_id)
    logger.info(f"Updated pole {pole_id}: {sorted(fields)}")
    return updated


def toggle_pole_status(
    repo: Repository, cache: ZonePoleSnapshotCache, pole_id: int, zone_scope: Optional[int] = None
) -> Pole:
    pole = _require_pole(repo, pole_id, zone_scope)
    new_status = Status.INACTIVE if pole.is_active else Status.ACTIVE
    updated = repo.update_pole(pole_id, status=new_status)
    invalidate_zone(cache, pole.zone_id)
    logger.info(f"Pole {pole_id} status set to {new_status.value}")
    return updated


def delete_pole(
    repo: Repository, cache: ZonePoleSnapshotCache, pole_id: int, zone_scope: Optional[int] = None
) -> None:
    pole = _require_pole(repo, pole_id, zone_scope)
    repo.delete_pole(pole_id)
    invalidate_zone(cache, pole.zone_id)
    logger.info(f"Deleted pole {pole_id} from zone {pole.zone_id}")
