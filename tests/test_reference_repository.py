import pytest

from src.truckroute.data import reference_repository as repo
from src.truckroute.services.geospatial import haversine_km

LOCATIONS = [
    {"id": "loc-bom", "name": "Mumbai", "latitude": 19.076, "longitude": 72.8777, "state": "Maharashtra"},
    {"id": "loc-pnq", "name": "Pune", "latitude": 18.5204, "longitude": 73.8567, "state": "Maharashtra"},
    {"id": "loc-nag", "name": "Nagpur", "latitude": 21.1458, "longitude": 79.0882},
]


@pytest.fixture
def client(monkeypatch, fake_supabase):
    fake = fake_supabase(tables={"locations": LOCATIONS})
    monkeypatch.setattr(repo, "get_supabase_client", lambda: fake)
    return fake


def test_require_client_without_configuration(monkeypatch) -> None:
    monkeypatch.setattr(repo, "get_supabase_client", lambda: None)
    with pytest.raises(repo.DatabaseNotConfiguredError, match="TRUCKROUTE_SUPABASE_URL"):
        repo.require_client()


def test_run_query_wraps_client_errors(monkeypatch, fake_supabase) -> None:
    monkeypatch.setattr(repo, "get_supabase_client", lambda: fake_supabase(failing={"vehicles"}))

    with pytest.raises(repo.ReferenceDataError, match="load vehicles") as excinfo:
        repo.get_vehicles()
    assert isinstance(excinfo.value.__cause__, ConnectionError)


def test_get_locations_builds_records(client) -> None:
    locations = repo.get_locations()

    assert [loc.id for loc in locations] == ["loc-bom", "loc-pnq", "loc-nag"]
    assert locations[2].state is None
    assert ("order", ("name",), {}) in client.queries[-1].calls


def test_search_locations_uses_case_insensitive_match(client) -> None:
    repo.search_locations("pun", limit=5)

    calls = client.queries[-1].calls
    assert ("ilike", ("name", "%pun%"), {}) in calls
    assert ("limit", (5,), {}) in calls


def test_find_nearest_location(client) -> None:
    nearest = repo.find_nearest_location(18.6, 73.7)

    assert nearest.id == "loc-pnq"
    assert nearest.distance_km == pytest.approx(haversine_km(18.6, 73.7, 18.5204, 73.8567), abs=0.001)


def test_find_nearest_location_empty_table(monkeypatch, fake_supabase) -> None:
    monkeypatch.setattr(repo, "get_supabase_client", lambda: fake_supabase())
    assert repo.find_nearest_location(18.6, 73.7) is None


def test_get_vehicle_by_id_missing(client) -> None:
    assert repo.get_vehicle_by_id("veh-404") is None


def test_toll_plazas_embed_location(monkeypatch, fake_supabase) -> None:
    plaza = {"id": "tp-1", "name": "Khalapur", "location_id": "loc-k", "location": None}
    fake = fake_supabase(tables={"toll_plazas": [plaza]})
    monkeypatch.setattr(repo, "get_supabase_client", lambda: fake)

    plazas = repo.get_toll_plazas()

    assert plazas[0].location is None
    assert ("select", ("*, location:locations(*)",), {}) in fake.queries[-1].calls


def test_fuel_prices_newest_first(monkeypatch, fake_supabase) -> None:
    fake = fake_supabase(tables={"fuel_prices": []})
    monkeypatch.setattr(repo, "get_supabase_client", lambda: fake)

    assert repo.get_latest_fuel_prices(limit=3) == []
    assert ("order", ("effective_date",), {"desc": True}) in fake.queries[-1].calls


def test_supabase_lookup_returns_domain_location(client) -> None:
    location = repo.SupabaseLocationLookup().find_by_name("Mumbai")

    # the fake table ignores filters, so the first row comes back
    assert location.id == "loc-bom"
    assert location.state == "Maharashtra"
    assert ("ilike", ("name", "Mumbai"), {}) in client.queries[-1].calls


def test_supabase_lookup_miss(monkeypatch, fake_supabase) -> None:
    monkeypatch.setattr(repo, "get_supabase_client", lambda: fake_supabase())
    assert repo.SupabaseLocationLookup().find_by_name("Atlantis") is None


@pytest.mark.parametrize(
    "raw, escaped",
    [("Pune", "Pune"), ("%", "\\%"), ("Navi_Mumbai", "Navi\\_Mumbai"), ("a\\b", "a\\\\b"), ("50%_off", "50\\%\\_off")],
)
def test_escape_like(raw, escaped) -> None:
    assert repo.escape_like(raw) == escaped


def test_supabase_lookup_matches_wildcards_literally(client) -> None:
    repo.SupabaseLocationLookup().find_by_name("%")

    assert ("ilike", ("name", "\\%"), {}) in client.queries[-1].calls


def test_search_locations_escapes_wildcards(client) -> None:
    repo.search_locations("100%")

    assert ("ilike", ("name", "%100\\%%"), {}) in client.queries[-1].calls
