"""
Assemble the profile view: streak, stats and heatmap for one user.

Everything is recomputed from the raw completion rows on each call.
"""

from dataclasses import dataclass
from datetime import date, datetime, tzinfo

from study_heatmap.completion_parser import parse_completion_rows
from study_heatmap.daily_aggregator import aggregate_by_day
from study_heatmap.heatmap import DEFAULT_POLICY, IntensityPolicy, heatmap_payload
from study_heatmap.models import CompletionRecord, DayBucket
from study_heatmap.progress_client import ProgressClient
from study_heatmap.stats_calculator import calculate_stats
from study_heatmap.streak_calculator import calculate_streak


@dataclass
class ProgressSnapshot:
    """Rows fetched for one profile render and the day buckets built from them."""

    records: list[CompletionRecord]
    buckets: list[DayBucket]
    completed_chapters: int


def current_date(tz: tzinfo | None = None) -> date:
    """Today's date in the given zone (None = system local)."""
    return datetime.now(tz).date()


def load_progress(
    client: ProgressClient, user_id: str, tz: tzinfo | None = None
) -> ProgressSnapshot:
    """
    Fetch a user's completions and aggregate them by day.

    Raises:
        ProgressClientError: If either fetch fails
    """
    rows = client.fetch_completions(user_id)
    chapters = client.fetch_chapter_completions(user_id)

    records = parse_completion_rows(rows)
    return ProgressSnapshot(
        records=records,
        buckets=aggregate_by_day(records, tz),
        completed_chapters=len(chapters),
    )


def build_profile(
    client: ProgressClient,
    user_id: str,
    today: date | None = None,
    tz: tzinfo | None = None,
    policy: IntensityPolicy = DEFAULT_POLICY,
    require_today: bool = True,
) -> dict:
    """
    Build the full profile payload.

    Returns:
        dict with user_id, today, streak, stats and heatmap sections

    Raises:
        ProgressClientError: If the progress store can't be read
    """
    if today is None:
        today = current_date(tz)

    snapshot = load_progress(client, user_id, tz)
    streak_info = calculate_streak(snapshot.records, today, tz, require_today)
    stats = calculate_stats(
        snapshot.records, today, tz, completed_chapters=snapshot.completed_chapters
    )

    return {
        "user_id": user_id,
        "today": today.isoformat(),
        "streak": {
            "current": streak_info["current_streak"],
            "longest": streak_info["longest_streak"],
            "active": streak_info["streak_active"],
            "last_completion_date": streak_info["last_completion_date"],
        },
        "stats": {
            "total_points": stats["total_points"],
            "topics_completed": stats["total_subsections"],
            "chapters_completed": stats["completed_chapters"],
            "active_days": stats["active_days"],
            "today": stats["points_today"],
            "this_week": stats["points_this_week"],
            "this_month": stats["points_this_month"],
            "last_7_days": stats["points_last_7_days"],
            "last_30_days": stats["points_last_30_days"],
        },
        "heatmap": heatmap_payload(snapshot.buckets, today, policy),
    }
