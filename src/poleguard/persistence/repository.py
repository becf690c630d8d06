"""Storage contract for zones, poles, land owners and line-of-sight records."""

from __future__ import annotations

import functools
import itertools
import logging
import threading
from dataclasses import replace
from datetime import datetime, timezone
from typing import Any, Optional, Protocol

from ..models.domain import LandOwner, LineOfSightCalculation, Pole, Status, Zone


class Repository(Protocol):
    def get_zone(self, zone_id: int) -> Optional[Zone]: ...

    def list_zones(self, status: Optional[Status] = None) -> list[Zone]: ...

    def create_zone(self, **fields: Any) -> Zone: ...

    def update_zone(self, zone_id: int, **fields: Any) -> Zone: ...

    def delete_zone(self, zone_id: int) -> None: ...

    def count_zone_dependents(self, zone_id: int) -> int: ...

    def get_pole(self, pole_id: int) -> Optional[Pole]: ...

    def list_poles(self, zone_id: Optional[int] = None, status: Optional[Status] = None) -> list[Pole]: ...

    def create_pole(self, **fields: Any) -> Pole: ...

    def update_pole(self, pole_id: int, **fields: Any) -> Pole: ...

    def delete_pole(self, pole_id: int) -> None: ...

    def get_land_owner(self, land_owner_id: int) -> Optional[LandOwner]: ...

    def list_land_owners(self, zone_id: Optional[int] = None) -> list[LandOwner]: ...

    def create_land_owner(self, **fields: Any) -> LandOwner: ...

    def update_land_owner(self, land_owner_id: int, **fields: Any) -> LandOwner: ...

    def delete_land_owner(self, land_owner_id: int) -> None: ...

    def count_land_owner_poles(self, land_owner_id: int) -> int: ...

    def create_calculation(self, **fields: Any) -> LineOfSightCalculation: ...

    def list_calculations(
        self,
        pole_id: Optional[int] = None,
        zone_id: Optional[int] = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> list[LineOfSightCalculation]: ...

    def count_calculations(self, pole_id: Optional[int] = None, zone_id: Optional[int] = None) -> int: ...


def _now() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryRepository:
    """Process-local store used when no database is configured, and in tests."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._ids = itertools.count(1)
        self._zones: dict[int, Zone] = {}
        self._poles: dict[int, Pole] = {}
        self._land_owners: dict[int, LandOwner] = {}
        self._calculations: dict[int, LineOfSightCalculation] = {}

    def _next_id(self) -> int:
        return next(self._ids)

    # Zones
    def get_zone(self, zone_id: int) -> Optional[Zone]:
        with self._lock:
            zone = self._zones.get(zone_id)
            return replace(zone, zone_boundary=list(zone.zone_boundary)) if zone else None

    def list_zones(self, status: Optional[Status] = None) -> list[Zone]:
        with self._lock:
            zones = [z for z in self._zones.values() if status is None or z.status == status]
        return sorted(zones, key=lambda z: z.id, reverse=True)

    def create_zone(self, **fields: Any) -> Zone:
        with self._lock:
            zone = Zone(id=self._next_id(), created_at=_now(), **fields)
            self._zones[zone.id] = zone
            return zone

    def update_zone(self, zone_id: int, **fields: Any) -> Zone:
        with self._lock:
            zone = replace(self._zones[zone_id], **fields)
            self._zones[zone_id] = zone
            return zone

    def delete_zone(self, zone_id: int) -> None:
        with self._lock:
            self._zones.pop(zone_id, None)

    def count_zone_dependents(self, zone_id: int) -> int:
        with self._lock:
            poles = sum(1 for p in self._poles.values() if p.zone_id == zone_id)
            owners = sum(1 for o in self._land_owners.values() if o.zone_id == zone_id)
            return poles + owners

    # Poles
    def get_pole(self, pole_id: int) -> Optional[Pole]:
        with self._lock:
            return self._poles.get(pole_id)

    def list_poles(self, zone_id: Optional[int] = None, status: Optional[Status] = None) -> list[Pole]:
        with self._lock:
            poles = [
                p
                for p in self._poles.values()
                if (zone_id is None or p.zone_id == zone_id) and (status is None or p.status == status)
            ]
        return sorted(poles, key=lambda p: p.id)

    def create_pole(self, **fields: Any) -> Pole:
        with self._lock:
            pole = Pole(id=self._next_id(), created_at=_now(), **fields)
            self._poles[pole.id] = pole
            return pole

    def update_pole(self, pole_id: int, **fields: Any) -> Pole:
        with self._lock:
            pole = replace(self._poles[pole_id], **fields)
            self._poles[pole_id] = pole
            return pole

    def delete_pole(self, pole_id: int) -> None:
        with self._lock:
            self._poles.pop(pole_id, None)
            # Calculation history cascades with its pole.
            for calc_id in [c.id for c in self._calculations.values() if c.pole_id == pole_id]:
                del self._calculations[calc_id]

    # Land owners
    def get_land_owner(self, land_owner_id: int) -> Optional[LandOwner]:
        with self._lock:
            return self._land_owners.get(land_owner_id)

    def list_land_owners(self, zone_id: Optional[int] = None) -> list[LandOwner]:
        with self._lock:
            owners = [o for o in self._land_owners.values() if zone_id is None or o.zone_id == zone_id]
        return sorted(owners, key=lambda o: o.id, reverse=True)

    def create_land_owner(self, **fields: Any) -> LandOwner:
        with self._lock:
            owner = LandOwner(id=self._next_id(), created_at=_now(), **fields)
            self._land_owners[owner.id] = owner
            return owner

    def update_land_owner(self, land_owner_id: int, **fields: Any) -> LandOwner:
        with self._lock:
            owner = replace(self._land_owners[land_owner_id], **fields)
            self._land_owners[land_owner_id] = owner
            return owner

    def delete_land_owner(self, land_owner_id: int) -> None:
        with self._lock:
            self._land_owners.pop(land_owner_id, None)

    def count_land_owner_poles(self, land_owner_id: int) -> int:
        with self._lock:
            return sum(1 for p in self._poles.values() if p.land_owner_id == land_owner_id)

    # Line-of-sight calculations
    def create_calculation(self, **fields: Any) -> LineOfSightCalculation:
        with self._lock:
            calculation = LineOfSightCalculation(id=self._next_id(), created_at=_now(), **fields)
            self._calculations[calculation.id] = calculation
            return calculation

    def _filter_calculations(
        self, pole_id: Optional[int], zone_id: Optional[int]
    ) -> list[LineOfSightCalculation]:
        items = []
        for calc in self._calculations.values():
            if pole_id is not None and calc.pole_id != pole_id:
                continue
            if zone_id is not None:
                pole = self._poles.get(calc.pole_id)
                if pole is None or pole.zone_id != zone_id:
                    continue
            items.append(calc)
        return sorted(items, key=lambda c: (c.created_at, c.id), reverse=True)

    def list_calculations(
        self,
        pole_id: Optional[int] = None,
        zone_id: Optional[int] = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> list[LineOfSightCalculation]:
        with self._lock:
            items = self._filter_calculations(pole_id, zone_id)
        end = None if limit is None else offset + limit
        return items[offset:end]

    def count_calculations(self, pole_id: Optional[int] = None, zone_id: Optional[int] = None) -> int:
        with self._lock:
            return len(self._filter_calculations(pole_id, zone_id))


@functools.lru_cache(maxsize=1)
def get_repository() -> Repository:
    """Return the Supabase-backed repository when configured, else an in-memory store."""
    from ..db.supabase import get_supabase_client
    from .database import SupabaseRepository

    client = get_supabase_client()
    if client is None:
        logging.info("Supabase not configured - using in-memory storage")
        return InMemoryRepository()
    return SupabaseRepository(client)