from types import SimpleNamespace

import pytest


class ScriptedRandom:
    """Random source that replays fixed draws, then repeats ``default``."""

    def __init__(self, values, default: float = 0.0):
        self._values = list(values)
        self._default = default

    def random(self) -> float:
        if self._values:
            return self._values.pop(0)
        return self._default


class FakeQuery:
    def __init__(self, client: "FakeSupabase", table: str):
        self.client = client
        self.table = table
        self.calls: list[tuple] = []
        self.payload = None
        self.deleting = False

    def insert(self, payload):
        self.payload = payload
        self.client.inserted.setdefault(self.table, []).append(payload)
        return self

    def delete(self):
        self.deleting = True
        return self

    def __getattr__(self, name):
        def _chain(*args, **kwargs):
            self.calls.append((name, args, kwargs))
            return self

        return _chain

    def execute(self):
        self.client.queries.append(self)
        if self.table in self.client.failing:
            raise ConnectionError(f"{self.table} unavailable")
        stored = self.client.tables.setdefault(self.table, [])
        if self.payload is not None:
            payload = self.payload if isinstance(self.payload, list) else [self.payload]
            rows = [{"id": f"{self.table}-{len(stored) + i}", **row} for i, row in enumerate(payload, start=1)]
            stored.extend(rows)
            return SimpleNamespace(data=rows, count=len(rows))
        if self.deleting:
            filters = [args for name, args, _ in self.calls if name == "eq"]
            removed = [row for row in stored if all(row.get(column) == value for column, value in filters)]
            stored[:] = [row for row in stored if row not in removed]
            return SimpleNamespace(data=removed, count=len(removed))
        rows = stored
        return SimpleNamespace(data=list(rows), count=len(rows))


class FakeSupabase:
    """Minimal stand-in for the supabase-py client's table query builder."""

    def __init__(self, tables=None, failing=()):
        self.tables = {name: list(rows) for name, rows in (tables or {}).items()}
        self.failing = set(failing)
        self.inserted: dict[str, list] = {}
        self.queries: list[FakeQuery] = []

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)


@pytest.fixture
def scripted_random():
    return ScriptedRandom


@pytest.fixture
def fake_supabase():
    return FakeSupabase
