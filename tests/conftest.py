import copy
from pathlib import Path

import pytest

from core.api import ApiError
from core.settings import Settings


class FakeGateway:
    """In-memory stand-in for ResourceGateway; the backend assigns ids."""

    def __init__(self, records=None, list_body=None):
        self.rows = [dict(r) for r in (records or [])]
        self.list_body = list_body
        self.fail = set()
        self.calls = []
        self._next_id = 100

    def _check(self, method):
        if method in self.fail:
            raise ApiError(f"{method} failed")

    def list(self):
        self.calls.append(("list",))
        self._check("list")
        if self.list_body is not None:
            return self.list_body
        return copy.deepcopy(self.rows)

    def create(self, record):
        self.calls.append(("create", dict(record)))
        self._check("create")
        self._next_id += 1
        row = {"id": str(self._next_id), **record}
        self.rows.append(row)
        return row

    def update(self, record_id, record):
        self.calls.append(("update", record_id, dict(record)))
        self._check("update")
        for i, row in enumerate(self.rows):
            if row["id"] == record_id:
                self.rows[i] = {"id": record_id, **record}
                return self.rows[i]
        raise ApiError("404 not found")

    def delete(self, record_id):
        self.calls.append(("delete", record_id))
        self._check("delete")
        before = len(self.rows)
        self.rows = [r for r in self.rows if r["id"] != record_id]
        if len(self.rows) == before:
            raise ApiError("404 not found")

    def bulk_create(self, records):
        self.calls.append(("bulk_create", [dict(r) for r in records]))
        self._check("bulk_create")
        for record in records:
            self._next_id += 1
            self.rows.append({"id": str(self._next_id), **record})
        return records

    def methods(self):
        return [c[0] for c in self.calls]


@pytest.fixture
def fake_gateway():
    return FakeGateway


@pytest.fixture
def state():
    return {}


@pytest.fixture
def settings():
    return Settings()


@pytest.fixture
def settings_file(tmp_path: Path) -> Path:
    path = tmp_path / "settings.yaml"
    path.write_text(
        "app:\n"
        "  name: TMS-Test\n"
        "api:\n"
        "  base_url: http://api.test/\n"
        "  timeout_seconds: 3\n"
        "uploads:\n"
        "  photo_max_side: 64\n"
        "debug: true\n",
        encoding="utf-8",
    )
    return path
