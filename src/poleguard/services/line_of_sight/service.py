"""Line-of-sight calculations between a pole and an agent location."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Optional, Protocol

from ...config import settings
from ...errors import ElevationUnavailableError, NotFoundError
from ...models.domain import LineOfSightCalculation, LineOfSightResult, Pole
from ...persistence.repository import Repository
from ..access import ensure_zone_scope
from ..geospatial import haversine_m, validate_coordinate
from .elevation_client import ElevationClient
from .evaluator import evaluate

logger = logging.getLogger(__name__)

MAX_NOTES_LENGTH = 500


class ElevationProvider(Protocol):
    def get_elevation(self, latitude: float, longitude: float) -> float: ...


@dataclass(frozen=True, slots=True)
class LineOfSightReport:
    pole: Pole
    evaluation: LineOfSightResult
    calculation: LineOfSightCalculation


def _elevation_provider(client: Optional[ElevationProvider]) -> ElevationProvider:
    if client is not None:
        return client
    try:
        return ElevationClient()
    except ValueError as exc:
        raise ElevationUnavailableError(
            "Google Maps API key not configured. Please configure it in Settings."
        ) from exc


def _fetch_elevations(
    client: ElevationProvider, pole: Pole, agent_latitude: float, agent_longitude: float
) -> tuple[float, float]:
    """Look up pole and agent ground elevations concurrently."""
    with ThreadPoolExecutor(max_workers=2) as executor:
        pole_future = executor.submit(client.get_elevation, pole.latitude, pole.longitude)
        agent_future = executor.submit(client.get_elevation, agent_latitude, agent_longitude)
        try:
            return pole_future.result(), agent_future.result()
        except Exception as exc:
            logger.error(f"Elevation lookup failed for pole {pole.id}: {exc}")
            raise ElevationUnavailableError(
                "Failed to fetch elevation data. Please check the elevation provider "
                "configuration and ensure the Elevation API is enabled."
            ) from exc


def calculate_line_of_sight(
    repo: Repository,
    *,
    pole_id: int,
    agent_latitude: float,
    agent_longitude: float,
    calculated_by: Optional[int] = None,
    calculation_notes: Optional[str] = None,
    zone_scope: Optional[int] = None,
    elevation_client: Optional[ElevationProvider] = None,
) -> LineOfSightReport:
    """Evaluate and record line of sight; nothing is written if either elevation is missing."""

    agent_latitude, agent_longitude = validate_coordinate(agent_latitude, agent_longitude)
    if calculation_notes is not None and len(calculation_notes) > MAX_NOTES_LENGTH:
        raise ValueError(f"calculation_notes must be at most {MAX_NOTES_LENGTH} characters")

    pole = repo.get_pole(pole_id)
    if pole is None:
        raise NotFoundError("Pole", pole_id)
    ensure_zone_scope(pole.zone_id, zone_scope, "You can only calculate LoS for poles in your assigned zone")

    client = _elevation_provider(elevation_client)
    pole_elevation, agent_elevation = _fetch_elevations(client, pole, agent_latitude, agent_longitude)

    distance = haversine_m(pole.latitude, pole.longitude, agent_latitude, agent_longitude)
    evaluation = evaluate(pole_elevation, pole.pole_height, agent_elevation)

    calculation = repo.create_calculation(
        pole_id=pole.id,
        agent_latitude=agent_latitude,
        agent_longitude=agent_longitude,
        agent_elevation=agent_elevation,
        pole_elevation=pole_elevation,
        elevation_difference=evaluation.elevation_difference,
        distance_from_pole=distance,
        result=evaluation.result,
        extra_height_required=evaluation.extra_height_required,
        calculated_by=calculated_by,
        calculation_notes=calculation_notes,
    )
    logger.info(
        f"Line of sight for pole {pole.id}: {evaluation.result.value} "
        f"(difference {evaluation.elevation_difference:.2f} m, distance {distance:.2f} m)"
    )
    return LineOfSightReport(pole=pole, evaluation=evaluation, calculation=calculation)


def get_history(repo: Repository, pole_id: int, zone_scope: Optional[int] = None) -> list[LineOfSightCalculation]:
    """All calculations for a pole, newest first."""

    pole = repo.get_pole(pole_id)
    if pole is None:
        raise NotFoundError("Pole", pole_id)
    ensure_zone_scope(pole.zone_id, zone_scope, "You can only view history for poles in your assigned zone")
    return repo.list_calculations(pole_id=pole_id)


def list_calculations(
    repo: Repository,
    zone_scope: Optional[int] = None,
    page: int = 1,
    page_size: Optional[int] = None,
) -> tuple[list[LineOfSightCalculation], int]:
    """One page of all calculations, newest first, plus the total count."""

    if page < 1:
        raise ValueError("page must be >= 1")
    size = page_size or settings.line_of_sight_page_size
    items = repo.list_calculations(zone_id=zone_scope, limit=size, offset=(page - 1) * size)
    total = repo.count_calculations(zone_id=zone_scope)
    return items, total
