"""Read-through cache of zone records and their active pole lists."""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Optional, Sequence

from ..config import settings
from ..models.domain import Pole, Zone, ZonePoleSnapshot

logger = logging.getLogger(__name__)

MISSING = object()


@dataclass(slots=True)
class _Entry:
    value: Any
    expires_at: float


class ZonePoleSnapshotCache:
    """Per-zone cache holding two entries with independent TTLs.

    The zone record changes rarely and the active pole list more often, so
    they expire separately. :meth:`invalidate` drops both entries for a zone
    inside one critical section and bumps the zone's generation; a load that
    began before the invalidation is returned to its caller but never stored.
    """

    def __init__(
        self,
        zone_ttl: float | None = None,
        poles_ttl: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.zone_ttl = zone_ttl if zone_ttl is not None else settings.zone_cache_ttl_seconds
        self.poles_ttl = poles_ttl if poles_ttl is not None else settings.pole_cache_ttl_seconds
        self._clock = clock
        self._lock = threading.Lock()
        self._zones: dict[int, _Entry] = {}
        self._poles: dict[int, _Entry] = {}
        self._generations: dict[int, int] = {}

    def _live(self, table: dict[int, _Entry], zone_id: int, now: float) -> Any:
        entry = table.get(zone_id)
        if entry is None:
            return MISSING
        if entry.expires_at <= now:
            del table[zone_id]
            return MISSING
        return entry.value

    def get(self, zone_id: int) -> tuple[Any, Any, int]:
        """Return ``(zone, poles, generation)``; missing or expired entries are ``MISSING``."""
        with self._lock:
            now = self._clock()
            return (
                self._live(self._zones, zone_id, now),
                self._live(self._poles, zone_id, now),
                self._generations.get(zone_id, 0),
            )

    def put(
        self,
        zone_id: int,
        *,
        zone: Any = MISSING,
        active_poles: Any = MISSING,
        generation: Optional[int] = None,
    ) -> bool:
        """Store entries for a zone. Returns False if ``generation`` is stale."""
        with self._lock:
            if generation is not None and generation != self._generations.get(zone_id, 0):
                return False
            now = self._clock()
            if zone is not MISSING:
                self._zones[zone_id] = _Entry(zone, now + self.zone_ttl)
            if active_poles is not MISSING:
                self._poles[zone_id] = _Entry(tuple(active_poles), now + self.poles_ttl)
            return True

    def invalidate(self, zone_id: int) -> None:
        with self._lock:
            self._zones.pop(zone_id, None)
            self._poles.pop(zone_id, None)
            self._generations[zone_id] = self._generations.get(zone_id, 0) + 1
        logger.debug(f"Invalidated snapshot cache for zone {zone_id}")

    def clear(self) -> None:
        with self._lock:
            for zone_id in set(self._zones) | set(self._poles):
                self._generations[zone_id] = self._generations.get(zone_id, 0) + 1
            self._zones.clear()
            self._poles.clear()

    def snapshot(
        self,
        zone_id: int,
        load_zone: Callable[[int], Optional[Zone]],
        load_active_poles: Callable[[int], Sequence[Pole]],
    ) -> ZonePoleSnapshot:
        """Return a consistent zone + active pole pair, loading misses from the store."""

        zone, poles, generation = self.get(zone_id)
        if zone is not MISSING and poles is not MISSING:
            return ZonePoleSnapshot(zone=zone, active_poles=poles)

        if zone is MISSING:
            zone = load_zone(zone_id)
            if zone is None:
                return ZonePoleSnapshot(zone=None, active_poles=())
            fresh_zone = zone
        else:
            fresh_zone = MISSING
        if poles is MISSING:
            poles = tuple(load_active_poles(zone_id))
            fresh_poles = poles
        else:
            fresh_poles = MISSING

        if not self.put(zone_id, zone=fresh_zone, active_poles=fresh_poles, generation=generation):
            logger.debug(f"Zone {zone_id} changed while loading; snapshot not cached")
        return ZonePoleSnapshot(zone=zone, active_poles=tuple(poles))


_snapshot_cache: ZonePoleSnapshotCache | None = None
_snapshot_cache_lock = threading.Lock()


def get_snapshot_cache() -> ZonePoleSnapshotCache:
    global _snapshot_cache
    with _snapshot_cache_lock:
        if _snapshot_cache is None:
            _snapshot_cache = ZonePoleSnapshotCache()
        return _snapshot_cache


def invalidate_zone(cache: ZonePoleSnapshotCache, zone_id: int | None) -> None:
    """Invalidate a zone after a committed mutation; failures are logged, not raised."""
    if zone_id is None:
        return
    try:
        cache.invalidate(zone_id)
    except Exception as exc:
        logger.warning(f"Failed to invalidate snapshot cache for zone {zone_id}: {exc}")
