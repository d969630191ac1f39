"""Route tests for the greeting, health and metrics endpoints."""

from __future__ import annotations

import pytest

from app.middleware.prometheus_middleware import normalize_path


def test_root_greeting(client) -> None:
    response = client.get("/")

    assert response.status_code == 200
    assert response.text == "Hello from Server.."


def test_health(client) -> None:
    body = client.get("/health").json()

    assert body["status"] == "healthy"
    assert body["service"] == "tuitionhub-api"
    assert body["timestamp"].endswith("Z")


def test_prometheus_exposes_request_metrics(client) -> None:
    client.get("/health")

    response = client.get("/metrics/prometheus")

    assert response.status_code == 200
    assert "tuitionhub_http_requests_total" in response.text
    assert 'endpoint="/health"' in response.text


def test_unknown_route_uses_problem_envelope(client) -> None:
    response = client.get("/nope")

    assert response.status_code == 404
    body = response.json()
    assert body["status"] == 404
    assert body["title"] == "Not Found"
    assert body["instance"] == "/nope"


@pytest.mark.parametrize(
    "raw, normalized",
    [
        ("/tuitions/01ARZ3NDEKTSV4RRFFQ69G5FAV", "/tuitions/:id"),
        ("/applications/status/01arz3ndektsv4rrffq69g5fav", "/applications/status/:id"),
        ("/orders/42", "/orders/:id"),
        ("/applications/tutor@example.com", "/applications/tutor@example.com"),
        ("/tuitions-listing", "/tuitions-listing"),
    ],
)
def test_normalize_path(raw, normalized) -> None:
    assert normalize_path(raw) == normalized
