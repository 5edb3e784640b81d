"""Tests for catalogspine.core.config."""

from __future__ import annotations

import pytest

from catalogspine.core.config import Settings, get_settings


class TestSettings:
    """Settings tests."""

    def test_defaults(self) -> None:
        """Defaults match the documented values."""
        settings = Settings()
        assert settings.noninterruptable_remainder == 10
        assert settings.log_level == "INFO"
        assert settings.max_pages == 50

    def test_overrides(self) -> None:
        """Keyword overrides win."""
        assert get_settings(max_retries=0).max_retries == 0

    def test_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """CATALOGSPINE_ variables are read."""
        monkeypatch.setenv("CATALOGSPINE_NONINTERRUPTABLE_REMAINDER", "3")
        assert Settings().noninterruptable_remainder == 3

    def test_validation(self) -> None:
        """Out-of-range values are rejected."""
        with pytest.raises(ValueError):
            Settings(max_pages=0)
