"""Resolve request origins/destinations into coordinate-bearing locations."""

from __future__ import annotations

from typing import Literal, Mapping, Optional, Protocol, Union

from ...config import settings
from ...models.domain import Location
from ...schemas.routing import LocationModel

Role = Literal["origin", "destination"]


class LocationResolutionError(ValueError):
    """Raised when an origin or destination cannot be turned into coordinates."""


class LocationLookup(Protocol):
    """Read-only capability for finding a stored location by its display name."""

    def find_by_name(self, name: str) -> Optional[Location]: ...


class StaticLocationLookup:
    """Case-insensitive lookup over an in-memory set of locations."""

    def __init__(self, locations: Mapping[str, Location] | None = None) -> None:
        self._locations = {name.strip().lower(): loc for name, loc in (locations or {}).items()}

    def find_by_name(self, name: str) -> Optional[Location]:
        return self._locations.get(name.strip().lower())


def default_location(name: str, role: Role) -> Location:
    if role == "origin":
        return Location(
            id="origin-1",
            name=name,
            latitude=settings.default_origin_latitude,
            longitude=settings.default_origin_longitude,
        )
    return Location(
        id="dest-1",
        name=name,
        latitude=settings.default_destination_latitude,
        longitude=settings.default_destination_longitude,
    )


def resolve_location(
    value: Union[str, LocationModel, Location],
    role: Role,
    lookup: LocationLookup | None = None,
) -> Location:
    """Turn a free-text name or structured location into a ``Location``.

    Structured values pass through unchanged. Names go through ``lookup`` when
    one is supplied, and fall back to the default city coordinates for the
    role otherwise.
    """
    if isinstance(value, Location):
        return value
    if isinstance(value, LocationModel):
        return Location(**value.model_dump())

    name = (value or "").strip()
    if not name:
        raise LocationResolutionError(f"The {role} must not be empty.")

    if lookup is None:
        return default_location(name, role)

    match = lookup.find_by_name(name)
    if match is None:
        raise LocationResolutionError(f"Could not resolve {role} '{name}' to a known location.")
    return match
