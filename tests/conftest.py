import sys
from datetime import datetime
from pathlib import Path
from typing import Generator

import pytest
from fastapi.testclient import TestClient

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from services.flash_clock.app import app, get_document_service
from services.flash_clock.service import ClockDocumentService
from shared.cache import ResponseCache

BASE_INSTANT = datetime(2024, 3, 9, 13, 5, 30)


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def base_instant() -> datetime:
    """Fixed request time used as the document's base instant."""
    return BASE_INSTANT


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def response_cache(fake_clock: FakeClock) -> ResponseCache:
    """Fresh cache driven by the fake clock."""
    return ResponseCache(ttl=30, max_entries=100, clock=fake_clock)


@pytest.fixture
def document_service(response_cache: ResponseCache, base_instant: datetime) -> ClockDocumentService:
    return ClockDocumentService(cache=response_cache, now=lambda: base_instant)


@pytest.fixture
def client(document_service: ClockDocumentService) -> Generator[TestClient, None, None]:
    """Test client whose document service uses a fresh cache and a fixed clock."""
    app.dependency_overrides[get_document_service] = lambda: document_service
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.pop(get_document_service, None)
