"""Tests for environment configuration."""

import pytest

from core import config
from core.exceptions import ConfigurationError


class TestTimezone:
    """Tests for STUDY_TIMEZONE."""

    def test_configured_zone(self) -> None:
        """The configured IANA zone is returned."""
        assert config.get_timezone().key == "Europe/Amsterdam"

    def test_default_is_utc(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Without a setting, scheduling uses UTC."""
        monkeypatch.delenv("STUDY_TIMEZONE")
        assert config.get_timezone().key == "UTC"

    def test_invalid_zone_rejected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Unknown zones raise ConfigurationError with context."""
        monkeypatch.setenv("STUDY_TIMEZONE", "Mars/Olympus_Mons")
        with pytest.raises(ConfigurationError) as exc_info:
            config.get_timezone()
        assert exc_info.value.context == {"timezone": "Mars/Olympus_Mons"}


class TestStorageSettings:
    """Tests for storage-related settings."""

    def test_backend_is_case_insensitive(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Backend names are normalized."""
        monkeypatch.setenv("STORAGE_BACKEND", " Mongo ")
        assert config.get_storage_backend() == "mongo"

    def test_unknown_backend_rejected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Unknown backends raise ConfigurationError."""
        monkeypatch.setenv("STORAGE_BACKEND", "sqlite")
        with pytest.raises(ConfigurationError):
            config.get_storage_backend()

    def test_missing_mongo_uri(self) -> None:
        """A Mongo backend without URI cannot start."""
        with pytest.raises(ConfigurationError):
            config.get_mongo_uri()

    def test_test_mode_prefixes_names(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test mode never touches production storage."""
        monkeypatch.setenv("TEST_MODE", "true")
        assert config.get_db_name() == "test_study_planner"
        assert config.get_local_store_path().replace("\\", "/") == "data/test_plans.json"

    def test_production_names(self) -> None:
        """Defaults apply outside test mode."""
        assert config.get_db_name() == "study_planner"
        assert config.get_collection_name() == "plans"
        assert config.get_local_store_path() == "data/plans.json"


class TestFlags:
    """Tests for boolean settings."""

    @pytest.mark.parametrize("raw", ["true", "TRUE", "1", "yes", " Yes "])
    def test_truthy_values(self, monkeypatch: pytest.MonkeyPatch, raw: str) -> None:
        """Accepted spellings of true."""
        monkeypatch.setenv("DAY_ZERO_REVISION", raw)
        assert config.day_zero_revision_enabled() is True

    @pytest.mark.parametrize("raw", ["false", "0", "no", ""])
    def test_falsy_values(self, monkeypatch: pytest.MonkeyPatch, raw: str) -> None:
        """Anything else is false."""
        monkeypatch.setenv("DAY_ZERO_REVISION", raw)
        assert config.day_zero_revision_enabled() is False

    def test_default_revision_pattern(self) -> None:
        """The proposed pattern defaults to 7, 14, 30."""
        assert config.get_default_revision_pattern() == "7, 14, 30"
