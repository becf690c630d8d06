"""Zone lifecycle: creation, boundary edits, status toggles and deletion."""

from __future__ import annotations

import logging
from typing import Any, Optional

from ...errors import InvalidBoundaryError, NotFoundError, ZoneInUseError
from ...models.domain import Status, Zone
from ...persistence.repository import Repository
from ..cache import ZonePoleSnapshotCache, invalidate_zone
from ..geospatial import is_simple_polygon, normalize_boundary

logger = logging.getLogger(__name__)


def prepare_boundary(raw_boundary: Any) -> list[dict[str, float]]:
    """Normalize an admin-drawn boundary to ``[{"lat": .., "lng": ..}, ...]`` and validate it."""

    points = normalize_boundary(raw_boundary)
    if len(points) < 3:
        raise InvalidBoundaryError("Zone boundary must contain at least 3 valid points")
    if not is_simple_polygon(points):
        raise InvalidBoundaryError("Zone boundary must not intersect itself")
    return [{"lat": lat, "lng": lng} for lat, lng in points]


def _require_zone(repo: Repository, zone_id: int) -> Zone:
    zone = repo.get_zone(zone_id)
    if zone is None:
        raise NotFoundError("Zone", zone_id)
    return zone


def _ensure_unique_name(repo: Repository, zone_name: str, exclude_id: Optional[int] = None) -> None:
    wanted = zone_name.strip().lower()
    for zone in repo.list_zones():
        if zone.id != exclude_id and zone.zone_name.strip().lower() == wanted:
            raise ValueError(f"Zone name '{zone_name}' is already in use")


def get_zone(repo: Repository, zone_id: int) -> Zone:
    return _require_zone(repo, zone_id)


def create_zone(
    repo: Repository,
    cache: ZonePoleSnapshotCache,
    *,
    zone_name: str,
    zone_boundary: Any,
    description: Optional[str] = None,
    status: Status = Status.ACTIVE,
    created_by: Optional[int] = None,
) -> Zone:
    _ensure_unique_name(repo, zone_name)
    boundary = prepare_boundary(zone_boundary)
    zone = repo.create_zone(
        zone_name=zone_name,
        zone_boundary=boundary,
        description=description,
        status=status,
        created_by=created_by,
    )
    # A zone id may be reused by the store; drop anything cached under it.
    invalidate_zone(cache, zone.id)
    logger.info(f"Created zone {zone.id} '{zone.zone_name}' with {len(boundary)} boundary points")
    return zone


def update_zone(repo: Repository, cache: ZonePoleSnapshotCache, zone_id: int, **changes: Any) -> Zone:
    """Apply ``zone_name``, ``zone_boundary``, ``description`` and/or ``status`` changes."""

    _require_zone(repo, zone_id)
    fields: dict[str, Any] = {}
    if changes.get("zone_name") is not None:
        _ensure_unique_name(repo, changes["zone_name"], exclude_id=zone_id)
        fields["zone_name"] = changes["zone_name"]
    if changes.get("zone_boundary") is not None:
        fields["zone_boundary"] = prepare_boundary(changes["zone_boundary"])
    if "description" in changes:
        fields["description"] = changes["description"]
    if changes.get("status") is not None:
        fields["status"] = Status(changes["status"])

    zone = repo.update_zone(zone_id, **fields)
    invalidate_zone(cache, zone_id)
    logger.info(f"Updated zone {zone_id}: {sorted(fields)}")
    return zone


def toggle_zone_status(repo: Repository, cache: ZonePoleSnapshotCache, zone_id: int) -> Zone:
    zone = _require_zone(repo, zone_id)
    new_status = Status.INACTIVE if zone.is_active else Status.ACTIVE
    zone = repo.update_zone(zone_id, status=new_status)
    invalidate_zone(cache, zone_id)
    logger.info(f"Zone {zone_id} status set to {new_status.value}")
    return zone


def delete_zone(repo: Repository, cache: ZonePoleSnapshotCache, zone_id: int) -> None:
    """Delete a zone that owns no poles or land owners."""

    _require_zone(repo, zone_id)
    if repo.count_zone_dependents(zone_id) > 0:
        raise ZoneInUseError(zone_id)
    repo.delete_zone(zone_id)
    invalidate_zone(cache, zone_id)
    logger.info(f"Deleted zone {zone_id}")
