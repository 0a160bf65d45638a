"""
Configuration management for study-heatmap.

Loads progress store credentials and display policy from environment variables.
"""

import os
from datetime import tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

from study_heatmap.heatmap import DEFAULT_COURSE_SLUG, IntensityPolicy

# Load .env file from project root
load_dotenv()

SUPABASE_URL = os.getenv("SUPABASE_URL")
SUPABASE_KEY = os.getenv("SUPABASE_KEY")
SUPABASE_ACCESS_TOKEN = os.getenv("SUPABASE_ACCESS_TOKEN")
PROGRESS_USER_ID = os.getenv("PROGRESS_USER_ID")

HEATMAP_TIMEZONE = os.getenv("HEATMAP_TIMEZONE", "")
HEATMAP_TIER_THRESHOLDS = os.getenv("HEATMAP_TIER_THRESHOLDS", "2,5,10")
STREAK_REQUIRE_TODAY = os.getenv("STREAK_REQUIRE_TODAY", "true")
COURSE_SLUG = os.getenv("COURSE_SLUG", DEFAULT_COURSE_SLUG)


def validate_config():
    """Validate that required configuration is present."""
    missing = []

    if not SUPABASE_URL or SUPABASE_URL == "your_project_url_here":
        missing.append("SUPABASE_URL")

    if not SUPABASE_KEY or SUPABASE_KEY == "your_anon_key_here":
        missing.append("SUPABASE_KEY")

    if not PROGRESS_USER_ID or PROGRESS_USER_ID == "your_user_id_here":
        missing.append("PROGRESS_USER_ID")

    if missing:
        raise ValueError(
            f"Missing required configuration: {', '.join(missing)}\n"
            "Please copy .env.example to .env and fill in your values.\n"
            "The URL and anon key are under Project Settings > API in Supabase."
        )


def get_timezone(name: str | None = None) -> tzinfo | None:
    """
    Resolve the zone used for calendar-day bucketing.

    Args:
        name: IANA zone name. Defaults to HEATMAP_TIMEZONE.

    Returns:
        A ZoneInfo, or None for the system local zone when no name is set

    Raises:
        ValueError: If the zone name is unknown
    """
    if name is None:
        name = HEATMAP_TIMEZONE
    name = name.strip()
    if not name:
        return None

    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ValueError(f"Unknown HEATMAP_TIMEZONE: {name!r}") from e


def get_intensity_policy(value: str | None = None) -> IntensityPolicy:
    """
    Parse tier thresholds such as "2,5,10" into an IntensityPolicy.

    Raises:
        ValueError: If the value is not three increasing positive integers
    """
    if value is None:
        value = HEATMAP_TIER_THRESHOLDS

    parts = [p.strip() for p in value.split(",") if p.strip()]
    if len(parts) != 3:
        raise ValueError(
            f"HEATMAP_TIER_THRESHOLDS needs three comma-separated numbers, got {value!r}"
        )

    try:
        low, medium, high = (int(p) for p in parts)
    except ValueError as e:
        raise ValueError(f"Invalid HEATMAP_TIER_THRESHOLDS: {value!r}") from e

    return IntensityPolicy(low=low, medium=medium, high=high)


def get_require_today(value: str | None = None) -> bool:
    """Whether a streak must include today to count."""
    if value is None:
        value = STREAK_REQUIRE_TODAY
    return value.strip().lower() not in ("0", "false", "no", "off")
