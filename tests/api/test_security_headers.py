"""Tests for response hardening and request size limits"""
import pytest


@pytest.mark.asyncio
async def test_hardening_headers_present(client):
    response = await client.get("/health")

    assert response.headers["X-Frame-Options"] == "DENY"
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert "default-src 'none'" in response.headers["Content-Security-Policy"]
    assert "Strict-Transport-Security" not in response.headers


@pytest.mark.asyncio
async def test_oversized_body_is_refused(client, admin_headers):
    response = await client.post(
        "/residents/",
        content=b"x" * (1024 * 1024 + 1),
        headers={**admin_headers, "Content-Type": "application/json"},
    )

    assert response.status_code == 413
    assert response.json()["error"] == "REQUEST_TOO_LARGE"
