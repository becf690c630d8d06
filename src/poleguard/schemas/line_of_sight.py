"""Line-of-sight request/response schemas."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from ..models.domain import LineOfSightCalculation
from ..services.line_of_sight import LineOfSightReport


def _round(value: Optional[float]) -> Optional[float]:
    return round(value, 2) if value is not None else None


class LineOfSightRequest(BaseModel):
    pole_id: int
    agent_latitude: float = Field(..., ge=-90, le=90)
    agent_longitude: float = Field(..., ge=-180, le=180)
    calculation_notes: Optional[str] = Field(default=None, max_length=500)


class PoleSummaryModel(BaseModel):
    id: int
    name: str
    latitude: float
    longitude: float
    height: float


class AgentLocationModel(BaseModel):
    latitude: float
    longitude: float


class ElevationsModel(BaseModel):
    pole_ground_elevation: float
    pole_top_elevation: float
    agent_elevation: float
    elevation_difference: float


class LineOfSightResponse(BaseModel):
    id: int
    pole: PoleSummaryModel
    agent_location: AgentLocationModel
    elevations: ElevationsModel
    distance_from_pole: float
    result: str
    extra_height_required: Optional[float] = None
    calculated_at: datetime

    @classmethod
    def from_report(cls, report: LineOfSightReport) -> "LineOfSightResponse":
        pole, evaluation, calc = report.pole, report.evaluation, report.calculation
        return cls(
            id=calc.id,
            pole=PoleSummaryModel(
                id=pole.id,
                name=pole.pole_name,
                latitude=pole.latitude,
                longitude=pole.longitude,
                height=pole.pole_height,
            ),
            agent_location=AgentLocationModel(latitude=calc.agent_latitude, longitude=calc.agent_longitude),
            elevations=ElevationsModel(
                pole_ground_elevation=round(calc.pole_elevation, 2),
                pole_top_elevation=round(evaluation.pole_top_elevation, 2),
                agent_elevation=round(calc.agent_elevation, 2),
                elevation_difference=round(calc.elevation_difference, 2),
            ),
            distance_from_pole=round(calc.distance_from_pole, 2),
            result=calc.result.value,
            extra_height_required=_round(calc.extra_height_required),
            calculated_at=calc.created_at,
        )


class CalculationModel(BaseModel):
    id: int
    pole_id: int
    agent_latitude: float
    agent_longitude: float
    agent_elevation: float
    pole_elevation: float
    elevation_difference: float
    distance_from_pole: float
    result: str
    extra_height_required: Optional[float] = None
    calculation_notes: Optional[str] = None
    calculated_by: Optional[int] = None
    calculated_at: datetime

    @classmethod
    def from_domain(cls, calc: LineOfSightCalculation) -> "CalculationModel":
        return cls(
            id=calc.id,
            pole_id=calc.pole_id,
            agent_latitude=calc.agent_latitude,
            agent_longitude=calc.agent_longitude,
            agent_elevation=round(calc.agent_elevation, 2),
            pole_elevation=round(calc.pole_elevation, 2),
            elevation_difference=round(calc.elevation_difference, 2),
            distance_from_pole=round(calc.distance_from_pole, 2),
            result=calc.result.value,
            extra_height_required=_round(calc.extra_height_required),
            calculation_notes=calc.calculation_notes,
            calculated_by=calc.calculated_by,
            calculated_at=calc.created_at,
        )


class CalculationPageResponse(BaseModel):
    items: List[CalculationModel]
    page: int
    page_size: int
    total: int
    has_next_page: bool
