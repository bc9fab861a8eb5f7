from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal

import pytest
import responses
from responses import matchers

from bluerate.providers import BluelyticsProvider, HTTPClient, HTTPClientConfig, UpstreamError
from bluerate.services import CacheKey, RateCache, RateService
from tests.factories import FakeClock, make_rate

BLUELYTICS_BASE = "https://api.bluelytics.com.ar/v2"
GENERIC_FAILURE = {"error": "Failed to fetch exchange rate"}


@pytest.fixture()
def bluelytics_client(app):
    """Test client backed by the real Bluelytics provider and a fixed clock."""

    provider = BluelyticsProvider(HTTPClient(HTTPClientConfig(base_url=BLUELYTICS_BASE, timeout=2)))
    service = RateService(provider, RateCache(clock=FakeClock()))
    app.extensions["rate_provider"] = provider
    app.extensions["rate_cache"] = service.cache
    app.extensions["rate_service"] = service
    with app.test_client() as client:
        yield client


@pytest.mark.parametrize("query", ["", "?date=", "?date=%20%20", "?other=1"])
def test_missing_date_returns_400(client, fake_provider, query):
    response = client.get(f"/api/exchange-rate{query}")

    assert response.status_code == 400
    assert response.get_json() == {"error": "Date parameter is required"}
    assert fake_provider.latest_calls == 0
    assert fake_provider.historical_calls == []


@pytest.mark.parametrize("value", ["yesterday", "2024-13-01", "2024-02-30", "20240601", "01/06/2024"])
def test_malformed_date_returns_400(client, fake_provider, value):
    response = client.get("/api/exchange-rate", query_string={"date": value})

    assert response.status_code == 400
    assert response.get_json() == {
        "error": "Date must be 'today' or a calendar date in YYYY-MM-DD format"
    }
    assert fake_provider.historical_calls == []


def test_today_returns_latest_rate_envelope(client, fake_provider):
    response = client.get("/api/exchange-rate?date=today")

    assert response.status_code == 200
    assert response.get_json() == {
        "date": "today",
        "base": "USD",
        "target": "ARS",
        "rate": 1285.5,
        "source": "Fake Provider",
    }
    assert fake_provider.latest_calls == 1


def test_todays_iso_date_is_echoed_and_served_from_latest(client, fake_provider):
    response = client.get("/api/exchange-rate?date=2025-01-15")

    assert response.status_code == 200
    payload = response.get_json()
    assert payload["date"] == "2025-01-15"
    assert payload["rate"] == 1285.5
    assert fake_provider.latest_calls == 1
    assert fake_provider.historical_calls == []


def test_historical_date_returns_rate(client, fake_provider):
    fake_provider.historical[date(2024, 6, 1)] = make_rate("910.0", "2024-06-01")

    response = client.get("/api/exchange-rate?date=2024-06-01")

    assert response.status_code == 200
    assert response.get_json() == {
        "date": "2024-06-01",
        "base": "USD",
        "target": "ARS",
        "rate": 910.0,
        "source": "Fake Provider",
    }


def test_upstream_failure_returns_generic_500_and_logs_detail(client, fake_provider, service, caplog):
    fake_provider.latest = UpstreamError("Server error 503: secret upstream body", status_code=503)

    with caplog.at_level(logging.ERROR, logger="bluerate.exchange_rate.routes"):
        response = client.get("/api/exchange-rate?date=today")

    assert response.status_code == 500
    assert response.get_json() == GENERIC_FAILURE
    assert b"secret" not in response.data
    assert service.cache.get(CacheKey.latest()) is None

    failures = [r for r in caplog.records if getattr(r, "event", None) == "exchange_rate.failed"]
    assert failures
    assert failures[-1].upstream_status == 503
    assert "secret upstream body" in failures[-1].getMessage()


def test_unexpected_error_returns_generic_500(client, fake_provider, service, caplog):
    fake_provider.historical[date(2024, 6, 1)] = RuntimeError("cache exploded")

    with caplog.at_level(logging.ERROR, logger="bluerate.exchange_rate.routes"):
        response = client.get("/api/exchange-rate?date=2024-06-01")

    assert response.status_code == 500
    assert response.get_json() == GENERIC_FAILURE
    assert b"exploded" not in response.data
    assert service.cache.get(CacheKey.historical(date(2024, 6, 1))) is None
    assert any(record.exc_info for record in caplog.records)


@responses.activate
def test_bluelytics_latest_scenario(bluelytics_client):
    responses.add(
        responses.GET,
        f"{BLUELYTICS_BASE}/latest",
        json={"blue": {"value_sell": 1285.5}, "last_update": "2025-01-15T10:00:00Z"},
        status=200,
    )

    response = bluelytics_client.get("/api/exchange-rate?date=today")

    assert response.status_code == 200
    assert response.get_json() == {
        "date": "today",
        "base": "USD",
        "target": "ARS",
        "rate": 1285.5,
        "source": "Bluelytics API",
    }


@responses.activate
def test_bluelytics_historical_scenario_hits_upstream_once(bluelytics_client):
    responses.add(
        responses.GET,
        f"{BLUELYTICS_BASE}/historical",
        json={"blue": {"value_sell": 910.0}},
        match=[matchers.query_param_matcher({"day": "2024-06-01"})],
        status=200,
    )

    first = bluelytics_client.get("/api/exchange-rate?date=2024-06-01")
    second = bluelytics_client.get("/api/exchange-rate?date=2024-06-01")

    assert first.status_code == second.status_code == 200
    assert first.get_json() == second.get_json()
    assert first.get_json()["rate"] == 910.0
    assert first.get_json()["date"] == "2024-06-01"
    assert len(responses.calls) == 1


@pytest.mark.parametrize(
    ("query", "path"),
    [("today", "/latest"), ("2024-06-01", "/historical")],
)
@responses.activate
def test_bluelytics_503_returns_500_without_caching(app, bluelytics_client, query, path):
    responses.add(responses.GET, f"{BLUELYTICS_BASE}{path}", status=503)

    response = bluelytics_client.get(f"/api/exchange-rate?date={query}")

    assert response.status_code == 500
    assert response.get_json() == GENERIC_FAILURE
    assert len(app.extensions["rate_service"].cache) == 0


@pytest.mark.parametrize("last_update", [None, "  ", 1736935200])
@responses.activate
def test_bluelytics_latest_without_timestamp_returns_500_without_caching(app, bluelytics_client, last_update):
    responses.add(
        responses.GET,
        f"{BLUELYTICS_BASE}/latest",
        json={"blue": {"value_sell": 1285.5}, "last_update": last_update},
        status=200,
    )

    response = bluelytics_client.get("/api/exchange-rate?date=today")

    assert response.status_code == 500
    assert response.get_json() == GENERIC_FAILURE
    assert len(app.extensions["rate_service"].cache) == 0


def test_response_rate_is_a_json_number(client, fake_provider):
    fake_provider.latest = make_rate(Decimal("1300.25"), "2025-01-15T11:00:00Z")

    payload = client.get("/api/exchange-rate?date=today").get_json()

    assert isinstance(payload["rate"], float)
    assert payload["rate"] == 1300.25


def test_request_id_header_is_returned(client):
    response = client.get("/api/exchange-rate?date=today", headers={"X-Request-ID": "abc-123"})

    assert response.headers["X-Request-ID"] == "abc-123"
