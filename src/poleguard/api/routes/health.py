"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


def _get_elevation_health_check():
    """Lazy import to avoid startup failures."""
    from ...services.line_of_sight.elevation_client import check_health as elevation_health_check
    return elevation_health_check


@router.get("/health/elevation", status_code=status.HTTP_200_OK)
def health_elevation() -> dict:
    """Check the elevation provider."""
    try:
        elevation_health_check = _get_elevation_health_check()
        return {"service": "elevation", "healthy": elevation_health_check()}
    except Exception as exc:
        return {"service": "elevation", "healthy": False, "error": str(exc)}


@router.get("/health/database", status_code=status.HTTP_200_OK)
def check_database() -> dict:
    """Check database connection and zone table status."""
    from ...db.supabase import get_supabase_client

    supabase = get_supabase_client()
    if not supabase:
        return {
            "configured": False,
            "message": "Supabase not configured. Set POLEGUARD_SUPABASE_URL and POLEGUARD_SUPABASE_KEY "
            "environment variables. Using in-memory storage.",
        }

    try:
        response = supabase.table("zones").select("id", count="exact").limit(1).execute()
        zones_count = response.count or 0
        return {
            "configured": True,
            "connected": True,
            "zones_count": zones_count,
            "message": f"Database connected. Found {zones_count} zones in database.",
        }
    except Exception as exc:
        return {
            "configured": True,
            "connected": False,
            "error": str(exc),
            "message": f"Database connection error: {exc}",
        }
