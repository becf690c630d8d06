"""Agent location classification against a zone and its poles."""

from __future__ import annotations

from typing import Iterable, Optional

from ...models.domain import Coordinate, LocationStatus, LocationVerdict, NearbyPole, Pole, Zone
from ..geospatial import distance_meters, point_in_polygon

DEFAULT_NEARBY_LIMIT = 10

MESSAGE_UNASSIGNED = "You are not assigned to any zone. Contact administrator."
MESSAGE_OUTSIDE_ZONE = "You are outside your assigned zone"
MESSAGE_RESTRICTED = "Marketing NOT allowed - Too close to pole"
MESSAGE_CLEAR = "Marketing allowed - Clear area"


def _measure(latitude: float, longitude: float, poles: Iterable[Pole]) -> list[NearbyPole]:
    agent = Coordinate(latitude, longitude)
    entries: list[NearbyPole] = []
    for pole in poles:
        if not pole.is_active:
            continue
        distance = distance_meters(agent, pole.position)
        entries.append(NearbyPole(pole=pole, distance=distance, is_restricted=distance <= pole.restricted_radius))
    return entries


def _rank(entries: list[NearbyPole], limit: int) -> list[NearbyPole]:
    return sorted(entries, key=lambda entry: entry.distance)[:limit]


def nearby_poles(
    latitude: float,
    longitude: float,
    poles: Iterable[Pole],
    limit: int = DEFAULT_NEARBY_LIMIT,
) -> list[NearbyPole]:
    """Active poles ordered by distance from the point, at most ``limit`` of them."""

    return _rank(_measure(latitude, longitude, poles), limit)


def classify(
    latitude: float,
    longitude: float,
    zone: Optional[Zone],
    active_poles: Iterable[Pole],
    limit: int = DEFAULT_NEARBY_LIMIT,
) -> LocationVerdict:
    """Classify an agent location as GREEN (may market), RED (too close) or GRAY (unknown).

    Being exactly on a pole's restricted radius counts as restricted. The
    ranked ``nearby_poles`` list is informational and independent of the
    verdict.
    """

    if zone is None:
        return LocationVerdict(
            status=LocationStatus.GRAY,
            can_market=False,
            in_zone=False,
            message=MESSAGE_UNASSIGNED,
        )

    if not point_in_polygon(latitude, longitude, zone.zone_boundary):
        return LocationVerdict(
            status=LocationStatus.GRAY,
            can_market=False,
            in_zone=False,
            message=MESSAGE_OUTSIDE_ZONE,
        )

    entries = _measure(latitude, longitude, active_poles)

    closest: Optional[NearbyPole] = None
    for entry in entries:
        if entry.is_restricted and (closest is None or entry.distance < closest.distance):
            closest = entry

    ranked = _rank(entries, limit)
    if closest is not None:
        return LocationVerdict(
            status=LocationStatus.RED,
            can_market=False,
            in_zone=True,
            message=MESSAGE_RESTRICTED,
            nearest_pole=closest.pole,
            distance_to_pole=closest.distance,
            nearby_poles=ranked,
        )

    return LocationVerdict(
        status=LocationStatus.GREEN,
        can_market=True,
        in_zone=True,
        message=MESSAGE_CLEAR,
        nearby_poles=ranked,
    )
