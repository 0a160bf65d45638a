"""
Tests for configuration loading and validation.
"""

from datetime import datetime
from unittest.mock import patch

import pytest

from study_heatmap.config import (
    get_intensity_policy,
    get_require_today,
    get_timezone,
    validate_config,
)
from study_heatmap.heatmap import IntensityPolicy


class TestValidateConfig:
    """Tests for required configuration values."""

    def test_missing_url(self):
        with patch("study_heatmap.config.SUPABASE_URL", ""):
            with patch("study_heatmap.config.SUPABASE_KEY", "key"):
                with patch("study_heatmap.config.PROGRESS_USER_ID", "user"):
                    with pytest.raises(ValueError, match="SUPABASE_URL"):
                        validate_config()

    def test_missing_user_id(self):
        with patch("study_heatmap.config.SUPABASE_URL", "https://demo.supabase.co"):
            with patch("study_heatmap.config.SUPABASE_KEY", "key"):
                with patch("study_heatmap.config.PROGRESS_USER_ID", None):
                    with pytest.raises(ValueError, match="PROGRESS_USER_ID"):
                        validate_config()

    def test_placeholder_values_rejected(self):
        with patch("study_heatmap.config.SUPABASE_URL", "your_project_url_here"):
            with patch("study_heatmap.config.SUPABASE_KEY", "your_anon_key_here"):
                with patch("study_heatmap.config.PROGRESS_USER_ID", "your_user_id_here"):
                    with pytest.raises(ValueError) as exc_info:
                        validate_config()

        message = str(exc_info.value)
        assert "SUPABASE_URL" in message
        assert "SUPABASE_KEY" in message
        assert "PROGRESS_USER_ID" in message

    def test_valid_config(self):
        with patch("study_heatmap.config.SUPABASE_URL", "https://demo.supabase.co"):
            with patch("study_heatmap.config.SUPABASE_KEY", "key"):
                with patch("study_heatmap.config.PROGRESS_USER_ID", "user"):
                    validate_config()


class TestGetTimezone:
    """Tests for the day-boundary zone."""

    def test_empty_means_system_local(self):
        assert get_timezone("") is None
        assert get_timezone("   ") is None

    def test_named_zone(self):
        tz = get_timezone("America/New_York")
        offset = datetime(2026, 1, 20, 12, 0, tzinfo=tz).utcoffset()

        assert offset.total_seconds() == -5 * 3600

    def test_unknown_zone(self):
        with pytest.raises(ValueError, match="HEATMAP_TIMEZONE"):
            get_timezone("Mars/Olympus_Mons")

    def test_defaults_to_module_setting(self):
        with patch("study_heatmap.config.HEATMAP_TIMEZONE", ""):
            assert get_timezone() is None


class TestGetIntensityPolicy:
    """Tests for tier threshold parsing."""

    def test_default_thresholds(self):
        assert get_intensity_policy("2,5,10") == IntensityPolicy()

    def test_custom_thresholds(self):
        policy = get_intensity_policy(" 1, 4 ,8 ")

        assert (policy.low, policy.medium, policy.high) == (1, 4, 8)

    def test_wrong_count(self):
        with pytest.raises(ValueError, match="three"):
            get_intensity_policy("2,5")

    def test_not_numbers(self):
        with pytest.raises(ValueError):
            get_intensity_policy("a,b,c")

    def test_not_increasing(self):
        with pytest.raises(ValueError):
            get_intensity_policy("5,5,10")


class TestGetRequireToday:
    """Tests for the streak policy flag."""

    def test_truthy_values(self):
        assert get_require_today("true") is True
        assert get_require_today("1") is True

    def test_falsy_values(self):
        assert get_require_today("false") is False
        assert get_require_today("No") is False
        assert get_require_today("0") is False
