"""
study-heatmap: learning streaks and a yearly activity heatmap

Entry point for the command line.
"""

from study_heatmap.cli import (
    display_heatmap,
    display_stats,
    display_streak,
    format_subsection,
)
from study_heatmap.config import (
    COURSE_SLUG,
    PROGRESS_USER_ID,
    SUPABASE_ACCESS_TOKEN,
    SUPABASE_KEY,
    SUPABASE_URL,
    get_intensity_policy,
    get_require_today,
    get_timezone,
    validate_config,
)
from study_heatmap.heatmap import build_heatmap_grid
from study_heatmap.profile import current_date, load_progress
from study_heatmap.progress_client import ProgressClient, ProgressClientError
from study_heatmap.stats_calculator import calculate_stats
from study_heatmap.streak_calculator import calculate_streak


def main():
    print("study-heatmap - Track your learning streaks!")
    print("-" * 50)

    try:
        validate_config()
        tz = get_timezone()
        policy = get_intensity_policy()
        require_today = get_require_today()
    except ValueError as e:
        print(f"\nConfiguration Error:\n{e}")
        return 1

    client = ProgressClient(SUPABASE_URL, SUPABASE_KEY, SUPABASE_ACCESS_TOKEN)
    today = current_date(tz)

    try:
        print(f"\nFetching progress for {PROGRESS_USER_ID}...\n")
        snapshot = load_progress(client, PROGRESS_USER_ID, tz)
    except ProgressClientError as e:
        print(f"\nError: {e}")
        return 1

    display_streak(calculate_streak(snapshot.records, today, tz, require_today))
    display_stats(
        calculate_stats(
            snapshot.records, today, tz, completed_chapters=snapshot.completed_chapters
        )
    )
    display_heatmap(build_heatmap_grid(snapshot.buckets, today, policy))

    if not snapshot.buckets:
        print("No activity yet. Start completing topics to see your progress here.")
        return 0

    latest = max(snapshot.buckets, key=lambda bucket: bucket.date)
    print(f"Completed on {latest.date.isoformat()} ({latest.points} points):\n")
    for subsection in latest.subsections:
        print(format_subsection(subsection, COURSE_SLUG))
    print()

    return 0


if __name__ == "__main__":
    exit(main())
