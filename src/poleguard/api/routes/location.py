"""Agent-facing endpoints: location status checks and zone data."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ...models.domain import Status
from ...persistence.repository import Repository
from ...schemas.location import LocationCheckRequest, LocationStatusResponse, NearbyPoleModel
from ...schemas.poles import PoleModel
from ...schemas.zones import ZoneModel
from ...services.cache import ZonePoleSnapshotCache
from ...services.location import service as location_service
from ..dependencies import DOMAIN_ERRORS, CallerContext, get_cache, get_caller, get_repo, http_error

router = APIRouter(tags=["location"])


@router.post("/check-location", response_model=LocationStatusResponse, status_code=status.HTTP_200_OK)
def check_location(
    payload: LocationCheckRequest,
    caller: CallerContext = Depends(get_caller),
    repo: Repository = Depends(get_repo),
    cache: ZonePoleSnapshotCache = Depends(get_cache),
) -> LocationStatusResponse:
    """Return GREEN/RED/GRAY marketing status for the agent's current position."""
    try:
        verdict = location_service.check_location(
            repo, cache, payload.latitude, payload.longitude, caller.zone_id
        )
    except DOMAIN_ERRORS as exc:
        raise http_error(exc) from exc
    return LocationStatusResponse.from_domain(verdict)


@router.get("/agent/zone", status_code=status.HTTP_200_OK)
def agent_zone(
    caller: CallerContext = Depends(get_caller),
    repo: Repository = Depends(get_repo),
    cache: ZonePoleSnapshotCache = Depends(get_cache),
) -> dict:
    if caller.zone_id is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No zone assigned")
    try:
        snapshot = location_service.load_snapshot(repo, cache, caller.zone_id)
    except DOMAIN_ERRORS as exc:
        raise http_error(exc) from exc
    if snapshot.zone is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No zone assigned")
    return {"zone": ZoneModel.from_domain(snapshot.zone)}


@router.get("/agent/poles", status_code=status.HTTP_200_OK)
def agent_poles(
    caller: CallerContext = Depends(get_caller),
    repo: Repository = Depends(get_repo),
) -> dict:
    if caller.zone_id is None:
        return {"message": "No zone assigned", "data": []}
    try:
        poles = repo.list_poles(zone_id=caller.zone_id, status=Status.ACTIVE)
    except DOMAIN_ERRORS as exc:
        raise http_error(exc) from exc
    return {"data": [PoleModel.from_domain(pole) for pole in poles]}


@router.get("/agent/nearby-poles", status_code=status.HTTP_200_OK)
def agent_nearby_poles(
    latitude: float = Query(..., ge=-90, le=90),
    longitude: float = Query(..., ge=-180, le=180),
    limit: int = Query(default=10, ge=1, le=100),
    caller: CallerContext = Depends(get_caller),
    repo: Repository = Depends(get_repo),
    cache: ZonePoleSnapshotCache = Depends(get_cache),
) -> dict:
    if caller.zone_id is None:
        return {"message": "No zone assigned", "data": []}
    try:
        entries = location_service.find_nearby_poles(repo, cache, latitude, longitude, caller.zone_id, limit=limit)
    except DOMAIN_ERRORS as exc:
        raise http_error(exc) from exc
    return {"data": [NearbyPoleModel.from_domain(entry) for entry in entries]}
