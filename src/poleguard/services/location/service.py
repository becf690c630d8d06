"""Agent-facing location checks read through the zone/pole snapshot cache."""

from __future__ import annotations

from typing import Optional

from ...config import settings
from ...models.domain import LocationVerdict, NearbyPole, Status, ZonePoleSnapshot
from ...persistence.repository import Repository
from ..cache import ZonePoleSnapshotCache
from ..geospatial import validate_coordinate
from .classifier import classify, nearby_poles


def load_snapshot(repo: Repository, cache: ZonePoleSnapshotCache, zone_id: int) -> ZonePoleSnapshot:
    return cache.snapshot(
        zone_id,
        repo.get_zone,
        lambda zid: repo.list_poles(zone_id=zid, status=Status.ACTIVE),
    )


def check_location(
    repo: Repository,
    cache: ZonePoleSnapshotCache,
    latitude: float,
    longitude: float,
    zone_id: Optional[int],
) -> LocationVerdict:
    """Classify an agent position against the agent's zone.

    Unassigned agents, and agents whose zone no longer exists, are GRAY.
    """

    latitude, longitude = validate_coordinate(latitude, longitude)
    if zone_id is None:
        return classify(latitude, longitude, None, (), limit=settings.nearby_pole_limit)

    snapshot = load_snapshot(repo, cache, zone_id)
    return classify(latitude, longitude, snapshot.zone, snapshot.active_poles, limit=settings.nearby_pole_limit)


def find_nearby_poles(
    repo: Repository,
    cache: ZonePoleSnapshotCache,
    latitude: float,
    longitude: float,
    zone_id: int,
    limit: Optional[int] = None,
) -> list[NearbyPole]:
    latitude, longitude = validate_coordinate(latitude, longitude)
    snapshot = load_snapshot(repo, cache, zone_id)
    return nearby_poles(latitude, longitude, snapshot.active_poles, limit=limit or settings.nearby_pole_limit)
