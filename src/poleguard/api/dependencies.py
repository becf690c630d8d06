"""Shared FastAPI dependencies: caller context, storage, cache and error mapping."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from fastapi import Header, HTTPException, status

from ..errors import ElevationUnavailableError, ZoneAccessError
from ..persistence.repository import Repository, get_repository
from ..services.cache import ZonePoleSnapshotCache, get_snapshot_cache


class Role(str, Enum):
    SUPER_ADMIN = "super_admin"
    ADMIN = "admin"
    AGENT = "agent"


@dataclass(frozen=True, slots=True)
class CallerContext:
    """Identity forwarded by the upstream authentication layer; trusted as-is."""

    user_id: Optional[int]
    role: Role
    zone_id: Optional[int]

    @property
    def zone_scope(self) -> Optional[int]:
        """Zone the caller is confined to, or None for super admins.

        Admins and agents without an assigned zone have no scope at all and are
        refused rather than treated as unrestricted.
        """
        if self.role == Role.SUPER_ADMIN:
            return None
        if self.zone_id is None:
            raise ZoneAccessError("No zone assigned")
        return self.zone_id

    def target_zone(self, requested: Optional[int]) -> int:
        """Zone a new record is created in: the caller's own zone when scoped."""
        zone_id = self.zone_scope if self.role != Role.SUPER_ADMIN else requested
        if zone_id is None:
            raise ValueError("Zone is required")
        return zone_id


def get_caller(
    x_user_role: Role = Header(..., description="Caller role resolved by the auth layer."),
    x_user_id: Optional[int] = Header(default=None),
    x_zone_id: Optional[int] = Header(default=None),
) -> CallerContext:
    return CallerContext(user_id=x_user_id, role=x_user_role, zone_id=x_zone_id)


def get_repo() -> Repository:
    return get_repository()


def get_cache() -> ZonePoleSnapshotCache:
    return get_snapshot_cache()


def http_error(exc: Exception) -> HTTPException:
    """Translate a domain exception into the HTTP error the API reports."""
    if isinstance(exc, ElevationUnavailableError):
        return HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc))
    if isinstance(exc, ConnectionError):
        logging.error(f"Storage unavailable: {exc}")
        return HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"Database connection error: {exc}",
        )
    if isinstance(exc, PermissionError):
        return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(exc))
    if isinstance(exc, LookupError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    return HTTPException(status_code=422, detail=str(exc))


DOMAIN_ERRORS = (ValueError, LookupError, PermissionError, ConnectionError)
