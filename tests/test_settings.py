# tests/test_settings.py
"""Tests for database URL selection in the settings object."""

from middle_ground.core.settings import Settings


def test_tooling_url_is_the_configured_url() -> None:
    url = "postgresql+asyncpg://feed:secret@db/middle_ground"
    configured = Settings(DATABASE_URL=url, USE_TEST_DATABASE=False)

    assert configured.database_url_sync == url


def test_testing_database_takes_precedence() -> None:
    configured = Settings(
        DATABASE_URL="sqlite:///./prod.db",
        TEST_DATABASE_URL="sqlite://",
        USE_TEST_DATABASE=True,
    )

    assert configured.effective_database_url == "sqlite://"
    assert configured.database_url_sync == "sqlite://"
