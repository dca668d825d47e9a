"""Application settings and configuration.

This module defines all configuration options for the Quizboard application.
Settings are loaded from environment variables with sensible defaults.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings can be overridden via environment variables or .env files.
    """

    # Application metadata
    app_name: str = Field(default="Quizboard", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")

    # Security and authentication
    secret_key: str = Field(alias="SECRET_KEY")
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    debug: bool = Field(default=False, alias="DEBUG")

    # Database configuration
    database_url: str = Field(default="sqlite:///./quizboard.db", alias="DATABASE_URL")
    test_database_url: str | None = Field(default=None, alias="TEST_DATABASE_URL")
    use_testing_database: bool = Field(default=False, alias="USE_TEST_DATABASE")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")
    # Seconds a SQLite writer waits for the database lock before failing.
    sqlite_busy_timeout: float = Field(default=15.0, gt=0, alias="SQLITE_BUSY_TIMEOUT")

    # Reputation economy
    voucher_milestone: int = Field(default=20, gt=0, alias="VOUCHER_MILESTONE")
    vote_upvote_points: int = Field(default=1, alias="VOTE_UPVOTE_POINTS")
    question_answered_points: int = Field(default=1, alias="QUESTION_ANSWERED_POINTS")
    problem_set_verified_points: int = Field(default=1, alias="PROBLEM_SET_VERIFIED_POINTS")
    reputation_history_default_limit: int = Field(
        default=50,
        alias="REPUTATION_HISTORY_DEFAULT_LIMIT",
    )
    reputation_history_max_limit: int = Field(default=200, alias="REPUTATION_HISTORY_MAX_LIMIT")

    # Content rules
    auto_verify_threshold: int = Field(default=10, alias="AUTO_VERIFY_THRESHOLD")
    problem_set_min_questions: int = Field(default=2, alias="PROBLEM_SET_MIN_QUESTIONS")

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        extra="ignore",
    )

    @property
    def database_url_sync(self) -> str:
        """Return the database URL with any async driver swapped for its sync default.

        Alembic and the scripts run synchronously even when the URL was written
        for an async deployment.
        """
        url = self.effective_database_url
        for async_prefix, sync_prefix in (
            ("postgresql+asyncpg", "postgresql"),
            ("sqlite+aiosqlite", "sqlite"),
        ):
            if url.startswith(async_prefix):
                return url.replace(async_prefix, sync_prefix, 1)
        return url

    @property
    def effective_database_url(self) -> str:
        """Return the database URL respecting testing overrides.

        Returns:
            The active database URL (test database if in testing mode, otherwise production)
        """
        if self.use_testing_database and self.test_database_url:
            return self.test_database_url
        return self.database_url


settings = Settings()  # type: ignore[call-arg]
