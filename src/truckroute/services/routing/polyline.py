"""Encoded polyline strings for route paths (Google polyline algorithm)."""

from __future__ import annotations

from typing import List, Sequence

DEFAULT_PRECISION = 5


def _encode_value(value: int) -> str:
    value = ~(value << 1) if value < 0 else value << 1
    chunks = []
    while value >= 0x20:
        chunks.append(chr((0x20 | (value & 0x1F)) + 63))
        value >>= 5
    chunks.append(chr(value + 63))
    return "".join(chunks)


def encode_polyline(points: Sequence[tuple[float, float]], precision: int = DEFAULT_PRECISION) -> str:
    """Encode (lat, lon) pairs into a polyline string."""
    factor = 10 ** precision
    encoded = []
    prev_lat = prev_lon = 0
    for lat, lon in points:
        lat_i = int(round(lat * factor))
        lon_i = int(round(lon * factor))
        encoded.append(_encode_value(lat_i - prev_lat))
        encoded.append(_encode_value(lon_i - prev_lon))
        prev_lat, prev_lon = lat_i, lon_i
    return "".join(encoded)


def decode_polyline(encoded: str, precision: int = DEFAULT_PRECISION) -> List[tuple[float, float]]:
    """Decode a polyline string back into (lat, lon) pairs."""
    factor = 10 ** precision
    coordinates: List[tuple[float, float]] = []
    index = lat = lon = 0

    def _next_value() -> int:
        nonlocal index
        shift = result = 0
        while True:
            if index >= len(encoded):
                raise ValueError("Truncated polyline string.")
            byte = ord(encoded[index]) - 63
            index += 1
            result |= (byte & 0x1F) << shift
            shift += 5
            if byte < 0x20:
                break
        return ~(result >> 1) if result & 1 else result >> 1

    while index < len(encoded):
        lat += _next_value()
        lon += _next_value()
        coordinates.append((lat / factor, lon / factor))
    return coordinates
