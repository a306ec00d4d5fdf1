import itertools
from typing import Any, List

import pytest
from fastapi.testclient import TestClient

from app.api.urls_events import get_counter_store
from app.core.config import Settings, get_settings
from app.services.counter_store import NicknameCounterStore
from main import main_app


class FakeSheetsSession:
    """In-memory stand-in for a Sheets tab: header row plus data rows."""

    def __init__(self, rows: List[List[Any]] | None = None):
        self.rows: List[List[str]] = [self._as_cells(row) for row in rows or []]
        self.reads = 0
        self.appends: List[List[Any]] = []
        self.updates: List[tuple] = []

    @staticmethod
    def _as_cells(row: List[Any]) -> List[str]:
        # The API returns strings and omits trailing empty cells
        cells = ["" if cell is None else str(cell) for cell in row]
        while cells and cells[-1] == "":
            cells.pop()
        return cells

    def read_rows(self) -> List[List[str]]:
        self.reads += 1
        return [list(row) for row in self.rows]

    def append_row(self, row: List[Any]) -> None:
        self.appends.append(row)
        self.rows.append(self._as_cells(row))

    def update_row(self, row_number: int, row: List[Any]) -> None:
        self.updates.append((row_number, row))
        self.rows[row_number - 2] = self._as_cells(row)

    @property
    def writes(self) -> int:
        return len(self.appends) + len(self.updates)


class FakeSheetsHelper:
    def __init__(self, session: FakeSheetsSession | None = None, error: Exception | None = None):
        self.session = session or FakeSheetsSession()
        self.error = error
        self.connects = 0

    def connect(self) -> FakeSheetsSession:
        self.connects += 1
        if self.error is not None:
            raise self.error
        return self.session


@pytest.fixture
def sheet() -> FakeSheetsSession:
    return FakeSheetsSession()


@pytest.fixture
def helper(sheet) -> FakeSheetsHelper:
    return FakeSheetsHelper(sheet)


@pytest.fixture
def clock():
    ticks = itertools.count(1)
    return lambda: f"2024-05-01T10:00:{next(ticks):02d}.000Z"


@pytest.fixture
def store(helper, clock) -> NicknameCounterStore:
    ids = itertools.count(1)
    return NicknameCounterStore(helper, clock=clock, id_factory=lambda: f"id-{next(ids)}")


@pytest.fixture
def test_settings() -> Settings:
    return Settings(_env_file=None)


@pytest.fixture
def client(store, test_settings):
    main_app.dependency_overrides[get_counter_store] = lambda: store
    main_app.dependency_overrides[get_settings] = lambda: test_settings
    yield TestClient(main_app)
    main_app.dependency_overrides.clear()
