"""Tests for settings parsing."""

from quizboard.core.settings import Settings


def test_defaults() -> None:
    settings = Settings(SECRET_KEY="x")

    assert settings.voucher_milestone == 20
    assert settings.auto_verify_threshold == 10
    assert settings.problem_set_min_questions == 2
    assert settings.effective_database_url == settings.database_url


def test_testing_database_override() -> None:
    settings = Settings(
        SECRET_KEY="x",
        DATABASE_URL="sqlite:///./prod.db",
        TEST_DATABASE_URL="sqlite:///./test.db",
        USE_TEST_DATABASE=True,
    )

    assert settings.effective_database_url == "sqlite:///./test.db"


def test_sync_url_drops_async_driver() -> None:
    settings = Settings(SECRET_KEY="x", DATABASE_URL="postgresql+asyncpg://quiz@db/quizboard")

    assert settings.database_url_sync == "postgresql://quiz@db/quizboard"
