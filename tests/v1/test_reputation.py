"""Tests for reputation endpoints."""

from fastapi import status

from quizboard.models import ReputationReason
from quizboard.services.reputation import ReputationLedger


def test_get_reputation(client, make_user) -> None:
    user = make_user(reputation_score=45, question_vouchers=2)

    response = client.get(f"/api/v1/reputation/users/{user.id}")

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {
        "reputation_score": 45,
        "question_vouchers": 2,
        "next_voucher_at": 60,
        "points_to_next_voucher": 15,
    }


def test_get_reputation_unknown_user(client) -> None:
    response = client.get("/api/v1/reputation/users/99999")

    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_history(client, db_session, make_user) -> None:
    user = make_user()
    for points in (1, 2, 3):
        ReputationLedger.apply_delta(db_session, user.id, points, ReputationReason.ADMIN_ADJUSTMENT)

    response = client.get(f"/api/v1/reputation/users/{user.id}/history", params={"limit": 2})

    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert [entry["points_delta"] for entry in body] == [3, 2]
    assert body[0]["reason"] == "admin_adjustment"


def test_admin_adjustment(client, auth_headers, admin, make_user) -> None:
    user = make_user(reputation_score=18)

    response = client.post(
        f"/api/v1/reputation/users/{user.id}/adjust",
        json={"points": 5},
        headers=auth_headers(admin),
    )

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"new_reputation": 23, "vouchers_earned": 1, "current_vouchers": 1}


def test_adjustment_requires_admin(client, auth_headers, voter, make_user) -> None:
    user = make_user()

    response = client.post(
        f"/api/v1/reputation/users/{user.id}/adjust",
        json={"points": 5},
        headers=auth_headers(voter),
    )

    assert response.status_code == status.HTTP_403_FORBIDDEN
