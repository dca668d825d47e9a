"""Tests for service metadata endpoints."""

from fastapi import status

from quizboard.core.settings import settings


def test_health_check(client) -> None:
    response = client.get("/health")

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"status": "ok"}


def test_root(client) -> None:
    response = client.get("/")

    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert body["version"] == settings.app_version
    assert body["docs"] == "/docs"
