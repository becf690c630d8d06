"""Pole management endpoints."""

from __future__ import annotations

from typing import Literal, Optional

from fastapi import APIRouter, Depends, Query, status

from ...models.domain import Status
from ...persistence.repository import Repository
from ...schemas.poles import PoleCreateRequest, PoleModel, PoleUpdateRequest
from ...services.access import ensure_zone_scope
from ...services.cache import ZonePoleSnapshotCache
from ...services.poles import service as pole_service
from ..dependencies import DOMAIN_ERRORS, CallerContext, get_cache, get_caller, get_repo, http_error

router = APIRouter(tags=["poles"])


@router.get("/poles", status_code=status.HTTP_200_OK)
def list_poles(
    pole_status: Optional[Literal["active", "inactive"]] = Query(default=None, alias="status"),
    caller: CallerContext = Depends(get_caller),
    repo: Repository = Depends(get_repo),
) -> dict:
    try:
        poles = pole_service.list_poles(
            repo, zone_id=caller.zone_scope, status=Status(pole_status) if pole_status else None
        )
    except DOMAIN_ERRORS as exc:
        raise http_error(exc) from exc
    return {"poles": [PoleModel.from_domain(pole) for pole in poles]}


@router.post("/poles", status_code=status.HTTP_201_CREATED)
def create_pole(
    payload: PoleCreateRequest,
    caller: CallerContext = Depends(get_caller),
    repo: Repository = Depends(get_repo),
    cache: ZonePoleSnapshotCache = Depends(get_cache),
) -> dict:
    try:
        pole = pole_service.create_pole(
            repo,
            cache,
            pole_name=payload.pole_name,
            latitude=payload.latitude,
            longitude=payload.longitude,
            pole_height=payload.pole_height,
            restricted_radius=payload.restricted_radius,
            zone_id=caller.target_zone(payload.zone_id),
            land_owner_id=payload.land_owner_id,
            status=Status(payload.status),
            created_by=caller.user_id,
        )
    except DOMAIN_ERRORS as exc:
        raise http_error(exc) from exc
    return {"message": "Pole created successfully", "pole": PoleModel.from_domain(pole)}


@router.get("/poles/{pole_id}", status_code=status.HTTP_200_OK)
def get_pole(
    pole_id: int,
    caller: CallerContext = Depends(get_caller),
    repo: Repository = Depends(get_repo),
) -> dict:
    try:
        pole = pole_service.get_pole(repo, pole_id, zone_scope=caller.zone_scope)
    except DOMAIN_ERRORS as exc:
        raise http_error(exc) from exc
    return {"pole": PoleModel.from_domain(pole)}


@router.put("/poles/{pole_id}", status_code=status.HTTP_200_OK)
def update_pole(
    pole_id: int,
    payload: PoleUpdateRequest,
    caller: CallerContext = Depends(get_caller),
    repo: Repository = Depends(get_repo),
    cache: ZonePoleSnapshotCache = Depends(get_cache),
) -> dict:
    try:
        pole = pole_service.update_pole(
            repo,
            cache,
            pole_id,
            zone_scope=caller.zone_scope,
            **payload.model_dump(exclude_unset=True),
        )
    except DOMAIN_ERRORS as exc:
        raise http_error(exc) from exc
    return {"message": "Pole updated successfully", "pole": PoleModel.from_domain(pole)}


@router.patch("/poles/{pole_id}/status", status_code=status.HTTP_200_OK)
def toggle_pole_status(
    pole_id: int,
    caller: CallerContext = Depends(get_caller),
    repo: Repository = Depends(get_repo),
    cache: ZonePoleSnapshotCache = Depends(get_cache),
) -> dict:
    try:
        pole = pole_service.toggle_pole_status(repo, cache, pole_id, zone_scope=caller.zone_scope)
    except DOMAIN_ERRORS as exc:
        raise http_error(exc) from exc
    return {"message": "Pole status updated successfully", "pole": PoleModel.from_domain(pole)}


@router.delete("/poles/{pole_id}", status_code=status.HTTP_200_OK)
def delete_pole(
    pole_id: int,
    caller: CallerContext = Depends(get_caller),
    repo: Repository = Depends(get_repo),
    cache: ZonePoleSnapshotCache = Depends(get_cache),
) -> dict:
    try:
        pole_service.delete_pole(repo, cache, pole_id, zone_scope=caller.zone_scope)
    except DOMAIN_ERRORS as exc:
        raise http_error(exc) from exc
    return {"message": "Pole deleted successfully"}


@router.get("/zones/{zone_id}/poles", status_code=status.HTTP_200_OK)
def list_zone_poles(
    zone_id: int,
    caller: CallerContext = Depends(get_caller),
    repo: Repository = Depends(get_repo),
) -> dict:
    try:
        ensure_zone_scope(zone_id, caller.zone_scope)
        poles = pole_service.list_poles(repo, zone_id=zone_id)
    except DOMAIN_ERRORS as exc:
        raise http_error(exc) from exc
    return {"poles": [PoleModel.from_domain(pole) for pole in poles]}


@router.get("/map/poles", status_code=status.HTTP_200_OK)
def map_poles(
    caller: CallerContext = Depends(get_caller),
    repo: Repository = Depends(get_repo),
) -> dict:
    try:
        poles = pole_service.list_poles(repo, zone_id=caller.zone_scope, status=Status.ACTIVE)
    except DOMAIN_ERRORS as exc:
        raise http_error(exc) from exc
    return {"poles": [PoleModel.from_domain(pole) for pole in poles]}
