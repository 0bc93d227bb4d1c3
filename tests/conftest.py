from __future__ import annotations

import pytest

from pomolog.data.storage import Storage


T0 = 1_700_000_000_000


class ManualClock:
    def __init__(self, start_ms: int = T0) -> None:
        self.current = start_ms

    def now(self) -> int:
        return self.current

    def advance(self, seconds: float = 0, ms: int = 0) -> None:
        self.current += int(seconds * 1000) + ms


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def storage(tmp_path) -> Storage:
    store = Storage(tmp_path / "pomolog.db")
    store.init_db()
    return store
