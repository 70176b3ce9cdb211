"""
Tests for CORS pre-flight handling and CORS headers on regular responses.
"""

import pytest

PREFLIGHT_HEADERS = {
    "Origin": "https://app.churrito.fi",
    "Access-Control-Request-Method": "POST",
    "Access-Control-Request-Headers": "Content-Type",
}


@pytest.mark.parametrize("path", ["/addReminder", "/", "/anything/else"])
def test_preflight_on_any_path(client, mailgun, path):
    response = client.options(path, headers=PREFLIGHT_HEADERS)

    assert response.status_code == 204
    assert response.content == b""
    assert response.headers["Access-Control-Allow-Origin"] == "*"
    assert response.headers["Access-Control-Allow-Methods"] == "GET, HEAD, POST, OPTIONS"
    assert response.headers["Access-Control-Allow-Headers"] == "Content-Type, Client-Key"
    assert response.headers["Access-Control-Max-Age"] == "86400"
    assert mailgun.requests == []


@pytest.mark.parametrize("missing", list(PREFLIGHT_HEADERS))
def test_partial_preflight_gets_allow_header(client, missing):
    headers = {k: v for k, v in PREFLIGHT_HEADERS.items() if k != missing}

    response = client.options("/addReminder", headers=headers)

    assert response.status_code == 204
    assert response.headers["Allow"] == "GET, HEAD, POST, OPTIONS"
    assert "Access-Control-Allow-Methods" not in response.headers


def test_success_response_carries_cors_header(client):
    response = client.post("/addReminder", json={"action": "activate", "email": "a@b.com"})

    assert response.status_code == 201
    assert response.headers["Access-Control-Allow-Origin"] == "*"


def test_error_response_carries_cors_header(client):
    response = client.post("/addReminder", json={"action": "nope", "email": "a@b.com"})

    assert response.status_code == 400
    assert response.headers["Access-Control-Allow-Origin"] == "*"


def test_provider_failure_carries_cors_header(client, mailgun):
    mailgun.status_code = 500

    response = client.post("/addReminder", json={"action": "activate", "email": "a@b.com"})

    assert response.status_code == 502
    assert response.headers["Access-Control-Allow-Origin"] == "*"
