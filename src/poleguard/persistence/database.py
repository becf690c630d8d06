"""Supabase persistence for zones, poles, land owners and line-of-sight records."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Callable, Optional, TypeVar

from supabase import Client

from ..models.domain import LandOwner, LineOfSightCalculation, LineOfSightOutcome, Pole, Status, Zone

T = TypeVar("T")

ZONE_COLUMNS = ("zone_name", "zone_boundary", "description", "status", "created_by")
POLE_COLUMNS = (
    "pole_name",
    "latitude",
    "longitude",
    "pole_height",
    "restricted_radius",
    "status",
    "zone_id",
    "land_owner_id",
    "created_by",
)
LAND_OWNER_COLUMNS = ("owner_name", "mobile_number", "address", "notes", "zone_id", "created_by")


def _parse_timestamp(value: Any) -> Optional[datetime]:
    if value is None or isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value).replace("Z", "+00:00"))


def _row_to_zone(row: dict[str, Any]) -> Zone:
    return Zone(
        id=int(row["id"]),
        zone_name=row.get("zone_name") or "",
        zone_boundary=row.get("zone_boundary") or [],
        status=Status(row.get("status") or Status.ACTIVE.value),
        description=row.get("description"),
        created_by=row.get("created_by"),
        created_at=_parse_timestamp(row.get("created_at")),
    )


def _row_to_pole(row: dict[str, Any]) -> Pole:
    return Pole(
        id=int(row["id"]),
        pole_name=row.get("pole_name") or "",
        latitude=float(row["latitude"]),
        longitude=float(row["longitude"]),
        pole_height=float(row["pole_height"]),
        restricted_radius=float(row["restricted_radius"]),
        zone_id=int(row["zone_id"]),
        status=Status(row.get("status") or Status.ACTIVE.value),
        land_owner_id=row.get("land_owner_id"),
        created_by=row.get("created_by"),
        created_at=_parse_timestamp(row.get("created_at")),
    )


def _row_to_land_owner(row: dict[str, Any]) -> LandOwner:
    return LandOwner(
        id=int(row["id"]),
        owner_name=row.get("owner_name") or "",
        mobile_number=row.get("mobile_number") or "",
        address=row.get("address") or "",
        zone_id=int(row["zone_id"]),
        notes=row.get("notes"),
        created_by=row.get("created_by"),
        created_at=_parse_timestamp(row.get("created_at")),
    )


def _row_to_calculation(row: dict[str, Any]) -> LineOfSightCalculation:
    extra = row.get("extra_height_required")
    return LineOfSightCalculation(
        id=int(row["id"]),
        pole_id=int(row["pole_id"]),
        agent_latitude=float(row["agent_latitude"]),
        agent_longitude=float(row["agent_longitude"]),
        agent_elevation=float(row["agent_elevation"]),
        pole_elevation=float(row["pole_elevation"]),
        elevation_difference=float(row["elevation_difference"]),
        distance_from_pole=float(row["distance_from_pole"]),
        result=LineOfSightOutcome(row["result"]),
        calculated_by=row.get("calculated_by"),
        created_at=_parse_timestamp(row.get("created_at")),
        extra_height_required=float(extra) if extra is not None else None,
        calculation_notes=row.get("calculation_notes"),
    )


def _serialize(fields: dict[str, Any], columns: tuple[str, ...]) -> dict[str, Any]:
    payload: dict[str, Any] = {}
    for key, value in fields.items():
        if key not in columns:
            continue
        payload[key] = value.value if isinstance(value, Status) else value
    return payload


class SupabaseRepository:
    """Repository backed by the zones, poles, land_owners and line_of_sight_calculations tables."""

    def __init__(self, client: Client) -> None:
        self.client = client

    def _run(self, description: str, operation: Callable[[], T]) -> T:
        try:
            return operation()
        except Exception as exc:
            logging.error(f"Supabase {description} failed: {exc}")
            raise ConnectionError(f"Database error during {description}: {exc}") from exc

    def _single(self, table: str, row_id: int) -> Optional[dict[str, Any]]:
        response = self._run(
            f"select from {table}",
            lambda: self.client.table(table).select("*").eq("id", row_id).limit(1).execute(),
        )
        rows = response.data or []
        return rows[0] if rows else None

    def _insert(self, table: str, payload: dict[str, Any]) -> dict[str, Any]:
        response = self._run(f"insert into {table}", lambda: self.client.table(table).insert(payload).execute())
        if not response.data:
            raise ConnectionError(f"Database returned no row after insert into {table}")
        return response.data[0]

    def _update(self, table: str, row_id: int, payload: dict[str, Any]) -> dict[str, Any]:
        if not payload:
            row = self._single(table, row_id)
            if row is None:
                raise KeyError(row_id)
            return row
        response = self._run(
            f"update {table}",
            lambda: self.client.table(table).update(payload).eq("id", row_id).execute(),
        )
        if not response.data:
            raise KeyError(row_id)
        return response.data[0]

    def _delete(self, table: str, row_id: int) -> None:
        self._run(f"delete from {table}", lambda: self.client.table(table).delete().eq("id", row_id).execute())

    def _count(self, table: str, column: str, value: Any) -> int:
        response = self._run(
            f"count {table}",
            lambda: self.client.table(table).select("id", count="exact").eq(column, value).execute(),
        )
        return response.count or 0

    # Zones
    def get_zone(self, zone_id: int) -> Optional[Zone]:
        row = self._single("zones", zone_id)
        return _row_to_zone(row) if row else None

    def list_zones(self, status: Optional[Status] = None) -> list[Zone]:
        def query():
            q = self.client.table("zones").select("*")
            if status is not None:
                q = q.eq("status", status.value)
            return q.order("created_at", desc=True).execute()

        response = self._run("list zones", query)
        return [_row_to_zone(row) for row in response.data or []]

    def create_zone(self, **fields: Any) -> Zone:
        return _row_to_zone(self._insert("zones", _serialize(fields, ZONE_COLUMNS)))

    def update_zone(self, zone_id: int, **fields: Any) -> Zone:
        return _row_to_zone(self._update("zones", zone_id, _serialize(fields, ZONE_COLUMNS)))

    def delete_zone(self, zone_id: int) -> None:
        self._delete("zones", zone_id)

    def count_zone_dependents(self, zone_id: int) -> int:
        return self._count("poles", "zone_id", zone_id) + self._count("land_owners", "zone_id", zone_id)

    # Poles
    def get_pole(self, pole_id: int) -> Optional[Pole]:
        row = self._single("poles", pole_id)
        return _row_to_pole(row) if row else None

    def list_poles(self, zone_id: Optional[int] = None, status: Optional[Status] = None) -> list[Pole]:
        def query():
            q = self.client.table("poles").select("*")
            if zone_id is not None:
                q = q.eq("zone_id", zone_id)
            if status is not None:
                q = q.eq("status", status.value)
            return q.order("id").execute()

        response = self._run("list poles", query)
        return [_row_to_pole(row) for row in response.data or []]

    def create_pole(self, **fields: Any) -> Pole:
        return _row_to_pole(self._insert("poles", _serialize(fields, POLE_COLUMNS)))

    def update_pole(self, pole_id: int, **fields: Any) -> Pole:
        return _row_to_pole(self._update("poles", pole_id, _serialize(fields, POLE_COLUMNS)))

    def delete_pole(self, pole_id: int) -> None:
        self._delete("poles", pole_id)

    # Land owners
    def get_land_owner(self, land_owner_id: int) -> Optional[LandOwner]:
        row = self._single("land_owners", land_owner_id)
        return _row_to_land_owner(row) if row else None

    def list_land_owners(self, zone_id: Optional[int] = None) -> list[LandOwner]:
        def query():
            q = self.client.table("land_owners").select("*")
            if zone_id is not None:
                q = q.eq("zone_id", zone_id)
            return q.order("created_at", desc=True).execute()

        response = self._run("list land owners", query)
        return [_row_to_land_owner(row) for row in response.data or []]

    def create_land_owner(self, **fields: Any) -> LandOwner:
        return _row_to_land_owner(self._insert("land_owners", _serialize(fields, LAND_OWNER_COLUMNS)))

    def update_land_owner(self, land_owner_id: int, **fields: Any) -> LandOwner:
        return _row_to_land_owner(self._update("land_owners", land_owner_id, _serialize(fields, LAND_OWNER_COLUMNS)))

    def delete_land_owner(self, land_owner_id: int) -> None:
        self._delete("land_owners", land_owner_id)

    def count_land_owner_poles(self, land_owner_id: int) -> int:
        return self._count("poles", "land_owner_id", land_owner_id)

    # Line-of-sight calculations
    def create_calculation(self, **fields: Any) -> LineOfSightCalculation:
        payload = {
            key: value.value if isinstance(value, LineOfSightOutcome) else value for key, value in fields.items()
        }
        return _row_to_calculation(self._insert("line_of_sight_calculations", payload))

    def _zone_pole_ids(self, zone_id: int) -> list[int]:
        response = self._run(
            "list zone pole ids",
            lambda: self.client.table("poles").select("id").eq("zone_id", zone_id).execute(),
        )
        return [int(row["id"]) for row in response.data or []]

    def _calculation_query(self, select: str, pole_id: Optional[int], zone_id: Optional[int], **kwargs: Any):
        q = self.client.table("line_of_sight_calculations").select(select, **kwargs)
        if pole_id is not None:
            q = q.eq("pole_id", pole_id)
        if zone_id is not None:
            q = q.in_("pole_id", self._zone_pole_ids(zone_id))
        return q

    def list_calculations(
        self,
        pole_id: Optional[int] = None,
        zone_id: Optional[int] = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> list[LineOfSightCalculation]:
        def query():
            q = self._calculation_query("*", pole_id, zone_id).order("created_at", desc=True).order("id", desc=True)
            if limit is not None:
                q = q.range(offset, offset + limit - 1)
            return q.execute()

        response = self._run("list line-of-sight calculations", query)
        return [_row_to_calculation(row) for row in response.data or []]

    def count_calculations(self, pole_id: Optional[int] = None, zone_id: Optional[int] = None) -> int:
        response = self._run(
            "count line-of-sight calculations",
            lambda: self._calculation_query("id", pole_id, zone_id, count="exact").execute(),
        )
        return response.count or 0
