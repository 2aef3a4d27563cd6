"""Reference data endpoints (locations, vehicles, toll plazas, fuel prices)."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Query, status

from ...data import reference_repository as repo
from ...schemas.reference import (
    FuelPriceRecord,
    LocationRecord,
    NearestLocation,
    TollPlazaRecord,
    TollRateRecord,
    VehicleRecord,
)
from ..errors import data_error

router = APIRouter(prefix="/reference", tags=["reference"])


@router.get("/locations", response_model=list[LocationRecord])
def list_locations() -> list[LocationRecord]:
    try:
        return repo.get_locations()
    except repo.ReferenceDataError as exc:
        raise data_error(exc) from exc


@router.get("/locations/search", response_model=list[LocationRecord])
def search_locations(
    q: str = Query(..., min_length=1, description="Part of the location name"),
    limit: int = Query(default=10, ge=1, le=100),
) -> list[LocationRecord]:
    try:
        return repo.search_locations(q, limit=limit)
    except repo.ReferenceDataError as exc:
        raise data_error(exc) from exc


@router.get("/locations/nearest", response_model=NearestLocation)
def nearest_location(
    latitude: float = Query(..., ge=-90, le=90),
    longitude: float = Query(..., ge=-180, le=180),
) -> NearestLocation:
    try:
        nearest = repo.find_nearest_location(latitude, longitude)
    except repo.ReferenceDataError as exc:
        raise data_error(exc) from exc
    if nearest is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No locations stored yet")
    return nearest


@router.get("/vehicles", response_model=list[VehicleRecord])
def list_vehicles() -> list[VehicleRecord]:
    try:
        return repo.get_vehicles()
    except repo.ReferenceDataError as exc:
        raise data_error(exc) from exc


@router.get("/vehicles/{vehicle_id}", response_model=VehicleRecord)
def get_vehicle(vehicle_id: str) -> VehicleRecord:
    try:
        vehicle = repo.get_vehicle_by_id(vehicle_id)
    except repo.ReferenceDataError as exc:
        raise data_error(exc) from exc
    if vehicle is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Vehicle {vehicle_id} not found")
    return vehicle


@router.get("/toll-plazas", response_model=list[TollPlazaRecord])
def list_toll_plazas() -> list[TollPlazaRecord]:
    try:
        return repo.get_toll_plazas()
    except repo.ReferenceDataError as exc:
        raise data_error(exc) from exc


@router.get("/toll-plazas/{toll_plaza_id}/rates", response_model=list[TollRateRecord])
def list_toll_rates(toll_plaza_id: str) -> list[TollRateRecord]:
    try:
        return repo.get_toll_rates(toll_plaza_id)
    except repo.ReferenceDataError as exc:
        raise data_error(exc) from exc


@router.get("/fuel-prices", response_model=list[FuelPriceRecord])
def list_fuel_prices(limit: int = Query(default=50, ge=1, le=500)) -> list[FuelPriceRecord]:
    try:
        return repo.get_latest_fuel_prices(limit=limit)
    except repo.ReferenceDataError as exc:
        raise data_error(exc) from exc
