"""Supabase client for the route planner backend."""

import logging
from functools import lru_cache
from supabase import create_client, Client
from ..config import settings


@lru_cache()
def get_supabase_client() -> Client | None:
    """Get cached Supabase client instance.

    Returns:
        Supabase Client instance if configured, None otherwise.
        Note: This does not test the connection - actual queries may fail with network errors.
    """
    if not settings.supabase_url or not settings.supabase_key:
        logging.warning("Supabase credentials not configured (missing URL or key)")
        return None

    try:
        client = create_client(settings.supabase_url, settings.supabase_key)
        return client
    except Exception as e:
        logging.error(f"Failed to create Supabase client: {e}")
        return None


# Tables read or written by this service:
#
#   locations, vehicles, toll_plazas, toll_rates, fuel_prices  (reference, read-only)
#   routes, route_segments, travel_history                     (accepted routes)
#
# result = get_supabase_client().table("locations") \
#     .select("*") \
#     .ilike("name", "%pune%") \
#     .order("name") \
#     .execute()
