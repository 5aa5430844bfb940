"""Tests for configuration helpers."""

from ideaforge.core import config
from ideaforge.core.config import Settings


class TestEnvHelpers:
    """Tests for environment parsing."""

    def test_env_int(self, monkeypatch):
        monkeypatch.setenv("IDEAFORGE_TEST_INT", "42")
        assert config._env_int("IDEAFORGE_TEST_INT", 7) == 42

    def test_env_int_invalid_falls_back(self, monkeypatch):
        monkeypatch.setenv("IDEAFORGE_TEST_INT", "forty")
        assert config._env_int("IDEAFORGE_TEST_INT", 7) == 7

    def test_env_int_blank_falls_back(self, monkeypatch):
        monkeypatch.setenv("IDEAFORGE_TEST_INT", "  ")
        assert config._env_int("IDEAFORGE_TEST_INT", 7) == 7

    def test_env_float(self, monkeypatch):
        monkeypatch.setenv("IDEAFORGE_TEST_FLOAT", "2.5")
        assert config._env_float("IDEAFORGE_TEST_FLOAT", 1.0) == 2.5
        monkeypatch.delenv("IDEAFORGE_TEST_FLOAT")
        assert config._env_float("IDEAFORGE_TEST_FLOAT", 1.0) == 1.0


class TestAsyncDatabaseUrl:
    """Tests for driver URL rewriting."""

    def test_postgres(self):
        assert (
            config._async_database_url("postgresql://u:p@db/app")
            == "postgresql+asyncpg://u:p@db/app"
        )

    def test_sqlite(self):
        assert config._async_database_url("sqlite:///./dev.db") == "sqlite+aiosqlite:///./dev.db"

    def test_already_async(self):
        url = "postgresql+asyncpg://u:p@db/app"
        assert config._async_database_url(url) == url


class TestSettings:
    """Tests for the Settings object."""

    def test_ttl_conversions(self):
        settings = Settings()
        settings.AI_CACHE_TTL_MS = 300_000
        settings.AI_JOB_TTL_MS = 1_800_000

        assert settings.cache_ttl_seconds == 300.0
        assert settings.job_ttl_seconds == 1800.0

    def test_fixture_and_prompt_dirs_exist_by_default(self):
        settings = Settings()
        assert (config.PACKAGE_ROOT / "ai" / "fixtures" / "medium" / "idea.json").is_file()
        assert (config.PACKAGE_ROOT / "ai" / "prompts" / "bundle_generate.txt").is_file()
        assert settings.PACKAGE_ROOT == config.PACKAGE_ROOT
