"""Export utilities for map and GIS formats."""

from .geojson import linestring_to_wkt, route_geometry, route_to_feature_collection

__all__ = ["linestring_to_wkt", "route_geometry", "route_to_feature_collection"]
