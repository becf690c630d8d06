"""Restricted-radius overlap detection between poles of one zone."""

from __future__ import annotations

from typing import Iterable, Optional

from ...models.domain import Coordinate, Pole
from ..geospatial import distance_meters


def find_overlap(
    latitude: float,
    longitude: float,
    restricted_radius: float,
    others: Iterable[Pole],
    exclude_id: Optional[int] = None,
) -> Optional[Pole]:
    """Return the first pole whose restricted circle intersects the candidate's.

    Circles that merely touch (distance equal to the sum of radii) do not
    conflict. ``exclude_id`` skips the pole being updated.
    """

    candidate = Coordinate(latitude, longitude)
    for pole in others:
        if exclude_id is not None and pole.id == exclude_id:
            continue
        distance = distance_meters(candidate, pole.position)
        if distance < restricted_radius + pole.restricted_radius:
            return pole
    return None
