import pytest

from catalog_match.settings import Settings


def test_async_database_url_adds_driver(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("DATABASE_URL", "postgresql://u:p@db:5432/cm")
    settings = Settings()
    assert settings.async_database_url == "postgresql+asyncpg://u:p@db:5432/cm"
    assert settings.db_connect_args == {}


def test_railway_internal_host_disables_ssl(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("DATABASE_URL", "postgresql://u:p@postgres.railway.internal:5432/cm")
    assert Settings().db_connect_args == {"ssl": False, "timeout": 20}


def test_sqlite_connect_args():
    assert Settings().db_connect_args == {"check_same_thread": False}


@pytest.mark.parametrize(
    "raw,expected",
    [
        ('["https://a.com","http://localhost:3000"]', ["https://a.com", "http://localhost:3000"]),
        ("https://a.com, http://b.com", ["https://a.com", "http://b.com"]),
        ("", []),
    ],
)
def test_cors_origins_parsing(monkeypatch: pytest.MonkeyPatch, raw: str, expected: list[str]):
    monkeypatch.setenv("CORS_ORIGINS", raw)
    assert Settings().cors_origins == expected


def test_matching_settings_from_env(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("MATCH_AUTO_APPROVE_THRESHOLD", "0.95")
    monkeypatch.setenv("MATCH_TOP_N", "5")
    settings = Settings()
    assert settings.match_auto_approve_threshold == 0.95
    assert settings.match_top_n == 5
    assert settings.match_score_cap == 1.2


def test_matching_defaults():
    settings = Settings()
    assert settings.match_auto_approve_threshold == 0.88
    assert settings.match_top_n == 3
    assert settings.review_locks_enabled is False  # disabled by the test fixture
    assert settings.review_lock_ttl_seconds == 30
