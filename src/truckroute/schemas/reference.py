"""Reference table schemas (locations, vehicles, tolls, fuel prices)."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict


class _Record(BaseModel):
    # Supabase rows carry audit columns we do not surface.
    model_config = ConfigDict(extra="ignore")


class LocationRecord(_Record):
    id: str
    name: str
    latitude: float
    longitude: float
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    postal_code: Optional[str] = None
    is_toll_plaza: Optional[bool] = None


class NearestLocation(LocationRecord):
    distance_km: float


class VehicleRecord(_Record):
    id: str
    name: str
    type: str
    max_weight: float
    max_volume: Optional[float] = None
    length: Optional[float] = None
    width: Optional[float] = None
    height: Optional[float] = None
    axle_count: Optional[int] = None
    fuel_efficiency: Optional[float] = None


class TollPlazaRecord(_Record):
    id: str
    name: str
    location_id: Optional[str] = None
    highway_name: Optional[str] = None
    is_fastag_enabled: Optional[bool] = None
    location: Optional[LocationRecord] = None


class TollRateRecord(_Record):
    id: str
    toll_plaza_id: Optional[str] = None
    vehicle_type: str
    rate: float
    effective_from: Optional[str] = None
    effective_to: Optional[str] = None


class FuelPriceRecord(_Record):
    id: str
    state: str
    city: Optional[str] = None
    diesel_price: float
    petrol_price: float
    effective_date: str
