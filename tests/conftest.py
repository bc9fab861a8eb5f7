"""Shared pytest fixtures."""

from __future__ import annotations

import sys
from collections.abc import Iterator
from pathlib import Path

import pytest

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from bluerate import create_app  # noqa: E402
from bluerate.services import RateCache, RateService  # noqa: E402
from tests.factories import FakeClock, FakeProvider  # noqa: E402


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def fake_provider() -> FakeProvider:
    return FakeProvider()


@pytest.fixture()
def cache(clock: FakeClock) -> RateCache:
    return RateCache(clock=clock)


@pytest.fixture()
def service(fake_provider: FakeProvider, cache: RateCache) -> RateService:
    return RateService(fake_provider, cache)


@pytest.fixture()
def app(service: RateService, fake_provider: FakeProvider) -> Iterator:
    """Flask application wired to the fake provider and clock."""

    flask_app = create_app("testing")
    flask_app.extensions["rate_provider"] = fake_provider
    flask_app.extensions["rate_cache"] = service.cache
    flask_app.extensions["rate_service"] = service
    yield flask_app


@pytest.fixture()
def client(app):
    """Provide a Flask test client."""

    with app.test_client() as client:
        yield client
