"""Land owner records scoped to zones."""

from __future__ import annotations

import logging
from typing import Any, Optional

from ..errors import LandOwnerInUseError, NotFoundError
from ..models.domain import LandOwner
from ..persistence.repository import Repository
from .access import ensure_zone_scope

ACCESS_DENIED = "Access denied to this land owner"
EDITABLE_FIELDS = ("owner_name", "mobile_number", "address", "notes")


def get_land_owner(repo: Repository, land_owner_id: int, zone_scope: Optional[int] = None) -> LandOwner:
    owner = repo.get_land_owner(land_owner_id)
    if owner is None:
        raise NotFoundError("Land owner", land_owner_id)
    ensure_zone_scope(owner.zone_id, zone_scope, ACCESS_DENIED)
    return owner


def create_land_owner(
    repo: Repository,
    *,
    owner_name: str,
    mobile_number: str,
    address: str,
    zone_id: int,
    notes: Optional[str] = None,
    created_by: Optional[int] = None,
) -> LandOwner:
    if repo.get_zone(zone_id) is None:
        raise NotFoundError("Zone", zone_id)
    owner = repo.create_land_owner(
        owner_name=owner_name,
        mobile_number=mobile_number,
        address=address,
        zone_id=zone_id,
        notes=notes,
        created_by=created_by,
    )
    logging.info(f"Created land owner {owner.id} in zone {zone_id}")
    return owner


def update_land_owner(
    repo: Repository, land_owner_id: int, zone_scope: Optional[int] = None, **changes: Any
) -> LandOwner:
    """Update contact details; ``notes`` may be cleared, the zone never changes."""

    get_land_owner(repo, land_owner_id, zone_scope)
    fields = {
        key: value
        for key, value in changes.items()
        if key in EDITABLE_FIELDS and (value is not None or key == "notes")
    }
    owner = repo.update_land_owner(land_owner_id, **fields)
    logging.info(f"Updated land owner {land_owner_id}: {sorted(fields)}")
    return owner


def delete_land_owner(repo: Repository, land_owner_id: int, zone_scope: Optional[int] = None) -> None:
    """Delete a land owner that no pole references."""

    get_land_owner(repo, land_owner_id, zone_scope)
    if repo.count_land_owner_poles(land_owner_id) > 0:
        raise LandOwnerInUseError(land_owner_id)
    repo.delete_land_owner(land_owner_id)
    logging.info(f"Deleted land owner {land_owner_id}")
