"""Geospatial helper functions."""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any, Iterable, Sequence

from shapely.geometry import Polygon

from ..errors import InvalidCoordinateError
from ..models.domain import Coordinate

EARTH_RADIUS_M = 6371000.0


def validate_coordinate(lat: Any, lng: Any) -> tuple[float, float]:
    """Return ``(lat, lng)`` as floats or raise if either is outside the WGS84 range."""

    try:
        lat_f, lng_f = float(lat), float(lng)
    except (TypeError, ValueError) as exc:
        raise InvalidCoordinateError(f"Coordinates must be numeric, got ({lat!r}, {lng!r})") from exc
    if not (math.isfinite(lat_f) and math.isfinite(lng_f)):
        raise InvalidCoordinateError("Coordinates must be finite numbers")
    if not -90.0 <= lat_f <= 90.0:
        raise InvalidCoordinateError(f"Latitude {lat_f} is outside [-90, 90]")
    if not -180.0 <= lng_f <= 180.0:
        raise InvalidCoordinateError(f"Longitude {lng_f} is outside [-180, 180]")
    return lat_f, lng_f


def haversine_m(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Compute distance in meters between two coordinates using the Haversine formula."""

    if lat1 == lat2 and lon1 == lon2:
        return 0.0

    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    # Rounding can push ``a`` a hair outside [0, 1] for near-antipodal points.
    a = min(1.0, max(0.0, a))
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_M * c


def distance_meters(a: Coordinate, b: Coordinate) -> float:
    return haversine_m(a.latitude, a.longitude, b.latitude, b.longitude)


def _normalize_point(point: Any) -> tuple[float, float] | None:
    if isinstance(point, Coordinate):
        return point.latitude, point.longitude

    if isinstance(point, Mapping):
        lat = point.get("lat", point.get("latitude"))
        lng = point.get("lng", point.get("lon", point.get("longitude")))
        if lat is None or lng is None:
            return None
        try:
            return validate_coordinate(lat, lng)
        except InvalidCoordinateError:
            return None

    if isinstance(point, Sequence) and not isinstance(point, (str, bytes)):
        if len(point) != 2:
            return None
        try:
            first, second = float(point[0]), float(point[1])
        except (TypeError, ValueError):
            return None
        # Pairs carry no axis names; only a first value outside the latitude
        # range marks the pair as (lng, lat).
        if abs(first) > 90.0 and abs(second) <= 90.0:
            first, second = second, first
        try:
            return validate_coordinate(first, second)
        except InvalidCoordinateError:
            return None

    return None


def normalize_boundary(boundary: Iterable[Any] | None) -> list[tuple[float, float]]:
    """Coerce heterogeneous boundary points into ``(lat, lng)`` tuples.

    Accepts mappings with ``lat``/``lng``, ``latitude``/``longitude`` or
    ``lat``/``lon`` keys, :class:`Coordinate` values and bare two-element
    pairs. Points that cannot be read are dropped; order is preserved.
    """

    if not boundary or isinstance(boundary, (str, bytes, Mapping)):
        return []

    points: list[tuple[float, float]] = []
    for raw in boundary:
        point = _normalize_point(raw)
        if point is not None:
            points.append(point)
    return points


def point_in_polygon(lat: float, lng: float, boundary: Iterable[Any] | None) -> bool:
    """Return True if the point is inside the boundary (even-odd ray casting).

    The ray runs from the point toward +longitude. Boundaries with fewer than
    three usable points never contain anything. Points exactly on an edge may
    resolve either way.
    """

    polygon = normalize_boundary(boundary)
    count = len(polygon)
    if count < 3:
        return False

    inside = False
    j = count - 1
    for i in range(count):
        yi, xi = polygon[i]
        yj, xj = polygon[j]
        if (yi > lat) != (yj > lat):
            x_cross = (xj - xi) * (lat - yi) / (yj - yi) + xi
            if lng < x_cross:
                inside = not inside
        j = i
    return inside


def is_simple_polygon(boundary: Iterable[Any] | None) -> bool:
    """Return True if the boundary forms a valid, non-self-intersecting polygon."""

    points = normalize_boundary(boundary)
    if len(points) < 3:
        return False
    polygon = Polygon([(lng, lat) for lat, lng in points])
    return polygon.is_valid and polygon.area > 0
