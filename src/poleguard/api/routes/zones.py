"""Zone management endpoints."""

from __future__ import annotations

from typing import Literal, Optional

from fastapi import APIRouter, Depends, Query, status

from ...models.domain import Status
from ...persistence.repository import Repository
from ...schemas.zones import ZoneCreateRequest, ZoneModel, ZoneUpdateRequest
from ...services.cache import ZonePoleSnapshotCache
from ...services.zones import service as zone_service
from ..dependencies import DOMAIN_ERRORS, CallerContext, get_cache, get_caller, get_repo, http_error

# Every zone endpoint requires the trusted caller headers.
router = APIRouter(tags=["zones"], dependencies=[Depends(get_caller)])


@router.get("/zones", status_code=status.HTTP_200_OK)
def list_zones(
    zone_status: Optional[Literal["active", "inactive"]] = Query(default=None, alias="status"),
    repo: Repository = Depends(get_repo),
) -> dict:
    try:
        zones = repo.list_zones(status=Status(zone_status) if zone_status else None)
    except DOMAIN_ERRORS as exc:
        raise http_error(exc) from exc
    return {"zones": [ZoneModel.from_domain(zone) for zone in zones]}


@router.post("/zones", status_code=status.HTTP_201_CREATED)
def create_zone(
    payload: ZoneCreateRequest,
    caller: CallerContext = Depends(get_caller),
    repo: Repository = Depends(get_repo),
    cache: ZonePoleSnapshotCache = Depends(get_cache),
) -> dict:
    try:
        zone = zone_service.create_zone(
            repo,
            cache,
            zone_name=payload.zone_name,
            zone_boundary=payload.zone_boundary,
            description=payload.description,
            status=Status(payload.status),
            created_by=caller.user_id,
        )
    except DOMAIN_ERRORS as exc:
        raise http_error(exc) from exc
    return {"message": "Zone created successfully", "zone": ZoneModel.from_domain(zone)}


@router.get("/zones/{zone_id}", status_code=status.HTTP_200_OK)
def get_zone(
    zone_id: int,
    repo: Repository = Depends(get_repo),
) -> dict:
    try:
        zone = zone_service.get_zone(repo, zone_id)
    except DOMAIN_ERRORS as exc:
        raise http_error(exc) from exc
    return {"zone": ZoneModel.from_domain(zone)}


@router.put("/zones/{zone_id}", status_code=status.HTTP_200_OK)
def update_zone(
    zone_id: int,
    payload: ZoneUpdateRequest,
    repo: Repository = Depends(get_repo),
    cache: ZonePoleSnapshotCache = Depends(get_cache),
) -> dict:
    try:
        zone = zone_service.update_zone(repo, cache, zone_id, **payload.model_dump(exclude_unset=True))
    except DOMAIN_ERRORS as exc:
        raise http_error(exc) from exc
    return {"message": "Zone updated successfully", "zone": ZoneModel.from_domain(zone)}


@router.patch("/zones/{zone_id}/status", status_code=status.HTTP_200_OK)
def toggle_zone_status(
    zone_id: int,
    repo: Repository = Depends(get_repo),
    cache: ZonePoleSnapshotCache = Depends(get_cache),
) -> dict:
    try:
        zone = zone_service.toggle_zone_status(repo, cache, zone_id)
    except DOMAIN_ERRORS as exc:
        raise http_error(exc) from exc
    return {"message": "Zone status updated successfully", "zone": ZoneModel.from_domain(zone)}


@router.delete("/zones/{zone_id}", status_code=status.HTTP_200_OK)
def delete_zone(
    zone_id: int,
    repo: Repository = Depends(get_repo),
    cache: ZonePoleSnapshotCache = Depends(get_cache),
) -> dict:
    try:
        zone_service.delete_zone(repo, cache, zone_id)
    except DOMAIN_ERRORS as exc:
        raise http_error(exc) from exc
    return {"message": "Zone deleted successfully"}


@router.get("/map/zones", status_code=status.HTTP_200_OK)
def map_zones(
    repo: Repository = Depends(get_repo),
) -> dict:
    try:
        zones = repo.list_zones(status=Status.ACTIVE)
    except DOMAIN_ERRORS as exc:
        raise http_error(exc) from exc
    return {"zones": [ZoneModel.from_domain(zone) for zone in zones]}
