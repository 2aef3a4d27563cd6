"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


@router.get("/health/database", status_code=status.HTTP_200_OK)
def check_database() -> dict:
    """Check database connection and reference table status."""
    from ...db.supabase import get_supabase_client

    supabase = get_supabase_client()
    if not supabase:
        return {
            "configured": False,
            "message": "Supabase not configured. Set TRUCKROUTE_SUPABASE_URL and TRUCKROUTE_SUPABASE_KEY environment variables.",
            "locations_count": 0,
        }

    try:
        result = supabase.table("locations").select("id", count="exact").limit(1).execute()
        count = result.count or 0
        return {
            "configured": True,
            "connected": True,
            "locations_count": count,
            "message": f"Database connected. Found {count} locations.",
        }
    except Exception as exc:
        return {
            "configured": True,
            "connected": False,
            "error": str(exc),
            "message": f"Database connection error: {exc}",
        }
