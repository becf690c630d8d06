"""Route group exports."""

from . import health, land_owners, line_of_sight, location, poles, zones

__all__ = ["health", "zones", "poles", "land_owners", "location", "line_of_sight"]
