"""Domain exceptions raised by the policy engine services."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models.domain import Pole


class InvalidCoordinateError(ValueError):
    """Latitude, longitude or a distance parameter is outside its valid range."""


class InvalidBoundaryError(ValueError):
    """A zone boundary has too few points or intersects itself."""


class OutsideZoneBoundaryError(ValueError):
    def __init__(self, message: str = "Pole coordinates must be within zone boundary") -> None:
        super().__init__(message)


class PoleOverlapError(ValueError):
    """The candidate pole's restricted radius intersects an existing pole's radius."""

    def __init__(self, pole: "Pole") -> None:
        self.pole = pole
        super().__init__(f"Pole radius overlaps with existing pole: {pole.pole_name}")


class ZoneInUseError(ValueError):
    def __init__(self, zone_id: int) -> None:
        self.zone_id = zone_id
        super().__init__("Cannot delete zone with assigned resources")


class LandOwnerInUseError(ValueError):
    def __init__(self, land_owner_id: int) -> None:
        self.land_owner_id = land_owner_id
        super().__init__("Cannot delete land owner with associated poles. Remove pole associations first.")


class NotFoundError(LookupError):
    def __init__(self, entity: str, entity_id: int | None) -> None:
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} {entity_id} not found")


class ZoneAccessError(PermissionError):
    """A zone-scoped caller tried to act on another zone."""


class ElevationUnavailableError(ConnectionError):
    """Elevation data could not be obtained for a line-of-sight calculation."""
