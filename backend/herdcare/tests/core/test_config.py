"""
Tests for application settings.
"""

import pytest
from pydantic import ValidationError

from herdcare.core.config import Settings, parse_keywords


class TestParseKeywords:
    def test_comma_list_uses_default_window(self):
        assert parse_keywords("rabies, core") == {"rabies": 14, "core": 14}

    def test_explicit_windows(self):
        assert parse_keywords("rabies:21,lepto:7") == {"rabies": 21, "lepto": 7}

    def test_json_object(self):
        assert parse_keywords('{"rabies": 30}') == {"rabies": 30}

    def test_blank_parts_ignored(self):
        assert parse_keywords("rabies,,") == {"rabies": 14}

    def test_dict_passes_through(self):
        assert parse_keywords({"core": 10}) == {"core": 10}


class TestSettings:
    """Test Settings defaults, environment overrides and validation."""

    def test_defaults(self):
        s = Settings(_env_file=None)

        assert s.REMINDER_DAYS_AHEAD == 30
        assert s.DUE_SOON_DAYS == 7
        assert s.MEDIUM_PRIORITY_DAYS == 14
        assert s.RECENT_VACCINATION_DAYS == 30
        assert s.normalized_critical_keywords == {
            "rabies": 14,
            "core": 14,
            "mandatory": 14,
            "required": 14,
        }

    def test_keywords_from_environment(self, monkeypatch):
        monkeypatch.setenv("HERDCARE_CRITICAL_VACCINE_KEYWORDS", "Rabies:21,Core")

        s = Settings(_env_file=None)

        assert s.normalized_critical_keywords == {"rabies": 21, "core": 14}

    def test_bulk_limits_from_environment(self, monkeypatch):
        monkeypatch.setenv("HERDCARE_BULK_MAX_BATCH_SIZE", "50")
        monkeypatch.setenv("HERDCARE_BULK_CONCURRENCY", "2")

        s = Settings(_env_file=None)

        assert s.BULK_MAX_BATCH_SIZE == 50
        assert s.BULK_CONCURRENCY == 2

    def test_medium_window_must_cover_due_soon(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, DUE_SOON_DAYS=10, MEDIUM_PRIORITY_DAYS=5)

    def test_concurrency_must_be_positive(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, BULK_CONCURRENCY=0)
