"""Tests for settings and command line parsing."""

import pytest
from pydantic import ValidationError as PydanticValidationError

from devpulse.__main__ import load_settings
from devpulse.config import Settings

pytestmark = [pytest.mark.unit, pytest.mark.tier(0)]


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    """Run without DEVPULSE_* variables or a stray .env file."""
    for key in ("DB_PATH", "HOST", "PORT", "LOG_LEVEL", "SEED", "DEFAULT_LOG_LIMIT"):
        monkeypatch.delenv(f"DEVPULSE_{key}", raising=False)
    monkeypatch.chdir(tmp_path)


class TestSettings:
    """Tests for Settings defaults and environment overrides."""

    def test_defaults(self) -> None:
        settings = Settings()
        assert settings.db_path == "dashboard.db"
        assert settings.port == 3000
        assert settings.default_log_limit == 30
        assert settings.cors_origins == ["*"]
        assert settings.seed is None

    def test_environment_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DEVPULSE_DB_PATH", "/tmp/other.db")
        monkeypatch.setenv("DEVPULSE_PORT", "8080")
        monkeypatch.setenv("DEVPULSE_SEED", "7")

        settings = Settings()

        assert settings.db_path == "/tmp/other.db"
        assert settings.port == 8080
        assert settings.seed == 7

    def test_rejects_invalid_port(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DEVPULSE_PORT", "70000")
        with pytest.raises(PydanticValidationError):
            Settings()


class TestLoadSettings:
    """Tests for command line overrides."""

    def test_no_arguments_uses_defaults(self) -> None:
        assert load_settings([]).port == 3000

    def test_arguments_override_environment(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("DEVPULSE_PORT", "8080")

        settings = load_settings(["--port", "9000", "--db-path", "x.db"])

        assert settings.port == 9000
        assert settings.db_path == "x.db"

    def test_log_level_argument(self) -> None:
        assert load_settings(["--log-level", "DEBUG"]).log_level == "DEBUG"
