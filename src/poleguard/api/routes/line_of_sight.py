"""Line-of-sight calculator endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status

from ...config import settings
from ...persistence.repository import Repository
from ...schemas.line_of_sight import (
    CalculationModel,
    CalculationPageResponse,
    LineOfSightRequest,
    LineOfSightResponse,
)
from ...services import line_of_sight as los_service
from ..dependencies import DOMAIN_ERRORS, CallerContext, get_caller, get_repo, http_error

router = APIRouter(prefix="/line-of-sight", tags=["line-of-sight"])


def get_elevation_client():
    """Elevation provider for calculations; None selects the configured Google client."""
    return None


@router.post("/calculate", status_code=status.HTTP_200_OK)
def calculate(
    payload: LineOfSightRequest,
    caller: CallerContext = Depends(get_caller),
    repo: Repository = Depends(get_repo),
    elevation_client=Depends(get_elevation_client),
) -> dict:
    try:
        report = los_service.calculate_line_of_sight(
            repo,
            pole_id=payload.pole_id,
            agent_latitude=payload.agent_latitude,
            agent_longitude=payload.agent_longitude,
            calculated_by=caller.user_id,
            calculation_notes=payload.calculation_notes,
            zone_scope=caller.zone_scope,
            elevation_client=elevation_client,
        )
    except DOMAIN_ERRORS as exc:
        raise http_error(exc) from exc
    return {
        "success": True,
        "message": "Line of Sight calculated successfully",
        "data": LineOfSightResponse.from_report(report),
    }


@router.get("/history/{pole_id}", status_code=status.HTTP_200_OK)
def history(
    pole_id: int,
    caller: CallerContext = Depends(get_caller),
    repo: Repository = Depends(get_repo),
) -> dict:
    try:
        calculations = los_service.get_history(repo, pole_id, zone_scope=caller.zone_scope)
    except DOMAIN_ERRORS as exc:
        raise http_error(exc) from exc
    return {"success": True, "data": [CalculationModel.from_domain(calc) for calc in calculations]}


@router.get("", status_code=status.HTTP_200_OK)
def list_calculations(
    page: int = Query(default=1, ge=1, description="1-based page index"),
    caller: CallerContext = Depends(get_caller),
    repo: Repository = Depends(get_repo),
) -> dict:
    try:
        items, total = los_service.list_calculations(repo, zone_scope=caller.zone_scope, page=page)
    except DOMAIN_ERRORS as exc:
        raise http_error(exc) from exc
    page_size = settings.line_of_sight_page_size
    return {
        "success": True,
        "data": CalculationPageResponse(
            items=[CalculationModel.from_domain(calc) for calc in items],
            page=page,
            page_size=page_size,
            total=total,
            has_next_page=page * page_size < total,
        ),
    }
