"""Tests for the ingestion endpoint."""

from fastapi import status

RECORD = {
    "title": "Speed of light",
    "text": "Roughly how fast is light in km/s?",
    "type": "fill_in_blank",
    "correct_answers": ["300000"],
    "source": "opentdb",
    "source_id": "light-1",
}


def test_admin_ingests_questions(client, auth_headers, admin) -> None:
    response = client.post(
        "/api/v1/ingestion/questions",
        json={"records": [RECORD], "auto_verify": True},
        headers=auth_headers(admin),
    )

    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert len(body["created"]) == 1
    assert body["skipped"] == []


def test_ingestion_requires_admin(client, auth_headers, voter) -> None:
    response = client.post(
        "/api/v1/ingestion/questions",
        json={"records": [RECORD]},
        headers=auth_headers(voter),
    )

    assert response.status_code == status.HTTP_403_FORBIDDEN
