"""Zone scoping of trusted caller input."""

from __future__ import annotations

from typing import Optional

from ..errors import ZoneAccessError


def ensure_zone_scope(zone_id: int, zone_scope: Optional[int], message: str = "Access denied to this zone") -> None:
    """Raise if a zone-scoped caller (``zone_scope`` set) touches another zone."""
    if zone_scope is not None and zone_id != zone_scope:
        raise ZoneAccessError(message)
