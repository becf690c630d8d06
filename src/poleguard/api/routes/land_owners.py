"""Land owner endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from ...persistence.repository import Repository
from ...schemas.poles import LandOwnerCreateRequest, LandOwnerModel, LandOwnerUpdateRequest
from ...services import land_owners as land_owner_service
from ..dependencies import DOMAIN_ERRORS, CallerContext, get_caller, get_repo, http_error

router = APIRouter(prefix="/land-owners", tags=["land-owners"])


@router.get("", status_code=status.HTTP_200_OK)
def list_land_owners(
    caller: CallerContext = Depends(get_caller),
    repo: Repository = Depends(get_repo),
) -> dict:
    try:
        owners = repo.list_land_owners(zone_id=caller.zone_scope)
    except DOMAIN_ERRORS as exc:
        raise http_error(exc) from exc
    return {"land_owners": [LandOwnerModel.from_domain(owner) for owner in owners]}


@router.post("", status_code=status.HTTP_201_CREATED)
def create_land_owner(
    payload: LandOwnerCreateRequest,
    caller: CallerContext = Depends(get_caller),
    repo: Repository = Depends(get_repo),
) -> dict:
    try:
        owner = land_owner_service.create_land_owner(
            repo,
            owner_name=payload.owner_name,
            mobile_number=payload.mobile_number,
            address=payload.address,
            zone_id=caller.target_zone(payload.zone_id),
            notes=payload.notes,
            created_by=caller.user_id,
        )
    except DOMAIN_ERRORS as exc:
        raise http_error(exc) from exc
    return {"message": "Land owner created successfully", "land_owner": LandOwnerModel.from_domain(owner)}


@router.get("/{land_owner_id}", status_code=status.HTTP_200_OK)
def get_land_owner(
    land_owner_id: int,
    caller: CallerContext = Depends(get_caller),
    repo: Repository = Depends(get_repo),
) -> dict:
    try:
        owner = land_owner_service.get_land_owner(repo, land_owner_id, zone_scope=caller.zone_scope)
    except DOMAIN_ERRORS as exc:
        raise http_error(exc) from exc
    return {"land_owner": LandOwnerModel.from_domain(owner)}


@router.put("/{land_owner_id}", status_code=status.HTTP_200_OK)
def update_land_owner(
    land_owner_id: int,
    payload: LandOwnerUpdateRequest,
    caller: CallerContext = Depends(get_caller),
    repo: Repository = Depends(get_repo),
) -> dict:
    try:
        owner = land_owner_service.update_land_owner(
            repo,
            land_owner_id,
            zone_scope=caller.zone_scope,
            **payload.model_dump(exclude_unset=True),
        )
    except DOMAIN_ERRORS as exc:
        raise http_error(exc) from exc
    return {"message": "Land owner updated successfully", "land_owner": LandOwnerModel.from_domain(owner)}


@router.delete("/{land_owner_id}", status_code=status.HTTP_200_OK)
def delete_land_owner(
    land_owner_id: int,
    caller: CallerContext = Depends(get_caller),
    repo: Repository = Depends(get_repo),
) -> dict:
    try:
        land_owner_service.delete_land_owner(repo, land_owner_id, zone_scope=caller.zone_scope)
    except DOMAIN_ERRORS as exc:
        raise http_error(exc) from exc
    return {"message": "Land owner deleted successfully"}
