"""Read access to the reference tables: locations, vehicles, toll plazas and fuel prices."""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from ..db.supabase import get_supabase_client
from ..models.domain import Location
from ..schemas.reference import (
    FuelPriceRecord,
    LocationRecord,
    NearestLocation,
    TollPlazaRecord,
    TollRateRecord,
    VehicleRecord,
)
from ..services.geospatial import haversine_km

logger = logging.getLogger(__name__)


class ReferenceDataError(RuntimeError):
    """A reference or persistence query against Supabase failed."""


class DatabaseNotConfiguredError(ReferenceDataError):
    """Supabase credentials are missing."""


def require_client():
    supabase = get_supabase_client()
    if not supabase:
        raise DatabaseNotConfiguredError(
            "Supabase not configured. Set TRUCKROUTE_SUPABASE_URL and TRUCKROUTE_SUPABASE_KEY environment variables."
        )
    return supabase


def run_query(description: str, build: Callable[[Any], Any]) -> list[dict]:
    """Execute a Supabase query and return its rows, wrapping failures in ``ReferenceDataError``."""
    supabase = require_client()
    try:
        response = build(supabase).execute()
    except Exception as exc:
        logger.error(f"Failed to {description}: {exc}")
        raise ReferenceDataError(f"Failed to {description}: {exc}") from exc
    rows = response.data or []
    if isinstance(rows, dict):
        rows = [rows]
    logger.debug(f"{description}: {len(rows)} rows")
    return rows


def get_locations() -> list[LocationRecord]:
    rows = run_query("load locations", lambda db: db.table("locations").select("*").order("name"))
    return [LocationRecord.model_validate(row) for row in rows]


def search_locations(query: str, limit: int = 10) -> list[LocationRecord]:
    rows = run_query(
        f"search locations for '{query}'",
        lambda db: (
            db.table("locations")
            .select("*")
            .ilike("name", f"%{escape_like(query)}%")
            .order("name")
            .limit(limit)
        ),
    )
    return [LocationRecord.model_validate(row) for row in rows]


def find_nearest_location(latitude: float, longitude: float) -> Optional[NearestLocation]:
    """Closest stored location by great-circle distance, or None if the table is empty."""
    locations = get_locations()
    if not locations:
        return None
    nearest = min(
        locations,
        key=lambda loc: haversine_km(latitude, longitude, loc.latitude, loc.longitude),
    )
    distance = haversine_km(latitude, longitude, nearest.latitude, nearest.longitude)
    return NearestLocation(**nearest.model_dump(), distance_km=round(distance, 3))


def get_vehicles() -> list[VehicleRecord]:
    rows = run_query("load vehicles", lambda db: db.table("vehicles").select("*").order("name"))
    return [VehicleRecord.model_validate(row) for row in rows]


def get_vehicle_by_id(vehicle_id: str) -> Optional[VehicleRecord]:
    rows = run_query(
        f"load vehicle '{vehicle_id}'",
        lambda db: db.table("vehicles").select("*").eq("id", vehicle_id).limit(1),
    )
    return VehicleRecord.model_validate(rows[0]) if rows else None


def get_toll_plazas() -> list[TollPlazaRecord]:
    rows = run_query(
        "load toll plazas",
        lambda db: db.table("toll_plazas").select("*, location:locations(*)").order("name"),
    )
    return [TollPlazaRecord.model_validate(row) for row in rows]


def get_toll_rates(toll_plaza_id: str) -> list[TollRateRecord]:
    rows = run_query(
        f"load toll rates for plaza '{toll_plaza_id}'",
        lambda db: db.table("toll_rates").select("*").eq("toll_plaza_id", toll_plaza_id).order("vehicle_type"),
    )
    return [TollRateRecord.model_validate(row) for row in rows]


def get_latest_fuel_prices(limit: int = 50) -> list[FuelPriceRecord]:
    rows = run_query(
        "load fuel prices",
        lambda db: db.table("fuel_prices").select("*").order("effective_date", desc=True).limit(limit),
    )
    return [FuelPriceRecord.model_validate(row) for row in rows]


def escape_like(value: str) -> str:
    """Escape LIKE wildcards so ``value`` only matches itself."""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class SupabaseLocationLookup:
    """Resolves route endpoints against the ``locations`` table by exact (case-insensitive) name."""

    def find_by_name(self, name: str) -> Optional[Location]:
        rows = run_query(
            f"look up location '{name}'",
            lambda db: db.table("locations").select("*").ilike("name", escape_like(name)).limit(1),
        )
        if not rows:
            return None
        record = LocationRecord.model_validate(rows[0])
        return Location(
            id=record.id,
            name=record.name,
            latitude=record.latitude,
            longitude=record.longitude,
            state=record.state,
            address=record.address,
        )
