"""
Calculate point totals and rolling statistics for the profile page.
"""

from datetime import date, timedelta, tzinfo

from study_heatmap.daily_aggregator import local_date
from study_heatmap.models import CompletionRecord


def calculate_stats(
    records: list[CompletionRecord],
    today: date,
    tz: tzinfo | None = None,
    completed_chapters: int = 0,
) -> dict:
    """
    Calculate profile statistics.

    Args:
        records: Completion records from parse_completion_rows()
        today: The observer's current date
        tz: Zone used for day boundaries (None = system local)
        completed_chapters: Number of chapter completion rows for the user

    Returns:
        Dictionary with:
        - total_points: Points across all records
        - total_subsections: Number of completed subsections
        - completed_chapters: Passed through from the chapter progress rows
        - active_days: Distinct days with a completion
        - points_today: Points earned today
        - points_this_week: Points Mon-Sun of the current week
        - points_this_month: Points in the current calendar month
        - points_last_7_days: Rolling 7-day total
        - points_last_30_days: Rolling 30-day total
    """
    total_points = 0
    points_today = 0
    points_this_week = 0
    points_this_month = 0
    points_last_7_days = 0
    points_last_30_days = 0
    active_days = set()

    # Week boundaries (Monday to Sunday)
    week_start = today - timedelta(days=today.weekday())
    week_end = week_start + timedelta(days=6)

    month_start = today.replace(day=1)

    # Rolling windows include today
    seven_days_ago = today - timedelta(days=6)
    thirty_days_ago = today - timedelta(days=29)

    for record in records:
        points = record.points_earned
        total_points += points

        if record.completed_at is None:
            continue

        day = local_date(record.completed_at, tz)
        active_days.add(day)

        if day == today:
            points_today += points

        if week_start <= day <= week_end:
            points_this_week += points

        if month_start <= day <= today:
            points_this_month += points

        if seven_days_ago <= day <= today:
            points_last_7_days += points

        if thirty_days_ago <= day <= today:
            points_last_30_days += points

    return {
        "total_points": total_points,
        "total_subsections": len(records),
        "completed_chapters": completed_chapters,
        "active_days": len(active_days),
        "points_today": points_today,
        "points_this_week": points_this_week,
        "points_this_month": points_this_month,
        "points_last_7_days": points_last_7_days,
        "points_last_30_days": points_last_30_days,
    }
