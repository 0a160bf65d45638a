"""
Calculate learning streaks from subsection completions.
"""

from datetime import date, timedelta, tzinfo

from study_heatmap.daily_aggregator import local_date
from study_heatmap.models import CompletionRecord


def completion_dates(
    records: list[CompletionRecord], tz: tzinfo | None = None
) -> set[date]:
    """Return the distinct local dates with at least one completion."""
    return {
        local_date(record.completed_at, tz)
        for record in records
        if record.completed_at is not None
    }


def compute_streak(
    records: list[CompletionRecord],
    today: date,
    tz: tzinfo | None = None,
    require_today: bool = True,
) -> int:
    """
    Count consecutive days with a completion, walking back from today.

    Args:
        records: Completion records (raw, not aggregated)
        today: The observer's current date
        tz: Zone used for day boundaries (None = system local)
        require_today: If True the chain must include today, so a day
            without a completion today returns 0. If False a chain ending
            yesterday still counts.

    Returns:
        Current streak length in days
    """
    return _current_streak(completion_dates(records, tz), today, require_today)


def calculate_streak(
    records: list[CompletionRecord],
    today: date,
    tz: tzinfo | None = None,
    require_today: bool = True,
) -> dict:
    """
    Calculate streak information from completion records.

    Returns:
        Dictionary with streak statistics:
        - current_streak: Consecutive days ending today
        - longest_streak: Longest streak found in the data
        - streak_active: Whether the user completed something today
        - last_completion_date: Most recent completion date (or None)
        - completion_dates: Unique dates with completions (sorted descending)
    """
    dates = completion_dates(records, tz)

    if not dates:
        return {
            "current_streak": 0,
            "longest_streak": 0,
            "streak_active": False,
            "last_completion_date": None,
            "completion_dates": [],
        }

    sorted_dates = sorted(dates, reverse=True)
    current_streak = _current_streak(dates, today, require_today)

    # Longest streak should be at least as long as current streak
    longest_streak = max(_longest_streak(sorted_dates), current_streak)

    return {
        "current_streak": current_streak,
        "longest_streak": longest_streak,
        "streak_active": today in dates,
        "last_completion_date": sorted_dates[0].isoformat(),
        "completion_dates": [d.isoformat() for d in sorted_dates],
    }


def _current_streak(dates: set[date], today: date, require_today: bool) -> int:
    if not dates:
        return 0

    current = today
    if current not in dates:
        if require_today:
            return 0
        # Grace period: a streak may still be alive from yesterday
        current = today - timedelta(days=1)

    streak = 0
    while current in dates:
        streak += 1
        current -= timedelta(days=1)

    return streak


def _longest_streak(sorted_dates: list[date]) -> int:
    """
    Calculate the longest run of consecutive days.

    Args:
        sorted_dates: Unique dates sorted descending
    """
    if not sorted_dates:
        return 0

    longest = 1
    current_streak = 1

    for i in range(1, len(sorted_dates)):
        if sorted_dates[i - 1] - sorted_dates[i] == timedelta(days=1):
            current_streak += 1
            longest = max(longest, current_streak)
        else:
            current_streak = 1

    return longest
