"""
CLI display functions for study-heatmap.
"""

from study_heatmap.heatmap import DAY_ABBREVS
from study_heatmap.models import HeatmapCell, SubsectionDetail, Tier

TIER_GLYPHS = {
    Tier.NONE: "·",
    Tier.LOW: "░",
    Tier.MEDIUM: "▒",
    Tier.HIGH: "▓",
    Tier.MAX: "█",
}

# (topics completed, badge), highest first
TOPIC_BADGES = [
    (200, "Course Veteran"),
    (100, "Centurion"),
    (50, "Half-Century Scholar"),
    (25, "Steady Learner"),
    (10, "Getting Warmed Up"),
    (1, "First Topic Done"),
]


def study_days_label(days: int) -> str:
    return f"{days} study day" if days == 1 else f"{days} study days"


def topic_badge(topics_completed: int) -> str | None:
    """Return the highest badge earned for a number of completed topics."""
    for threshold, badge in TOPIC_BADGES:
        if topics_completed >= threshold:
            return badge
    return None


def next_topic_goal(topics_completed: int) -> int | None:
    """Topics still needed for the next badge, or None once all are earned."""
    remaining = [t - topics_completed for t, _ in TOPIC_BADGES if t > topics_completed]
    return min(remaining) if remaining else None


def display_streak(streak_info: dict) -> None:
    """
    Display the learning streak, the longest run and a nudge when today's
    topic is still missing.

    Args:
        streak_info: Dictionary from calculate_streak()
    """
    current = streak_info["current_streak"]
    longest = streak_info["longest_streak"]
    last_date = streak_info["last_completion_date"]

    if current == 0:
        print("🔥 Streak: none yet")
        if last_date:
            print(f"   Last studied on {last_date}. Finish one topic today to start over.")
    else:
        print(f"🔥 Streak: {study_days_label(current)} in a row")
        if current == longest and current > 1:
            print("   Your best run so far!")
        elif longest > current:
            print(f"   Best run: {study_days_label(longest)}")
        if not streak_info["streak_active"]:
            print("   Nothing finished today yet, one topic keeps the chain alive.")
    print()


def display_stats(stats: dict) -> None:
    """
    Display point statistics to the console.

    Args:
        stats: Dictionary from calculate_stats()
    """
    total = stats["total_points"]
    topics = stats["total_subsections"]
    chapters = stats["completed_chapters"]

    print("📊 Learning Stats:")
    print(f"   Total points:     {total} {'point' if total == 1 else 'points'}")
    print(f"   Topics completed: {topics}")
    print(f"   Chapters done:    {chapters}")
    print(f"   Today:            {stats['points_today']}")
    print(f"   This week:        {stats['points_this_week']}")
    print(f"   This month:       {stats['points_this_month']}")

    badge = topic_badge(topics)
    goal = next_topic_goal(topics)
    if badge:
        print(f"   Badge:            {badge}")
    if goal:
        print(f"   {goal} more {'topic' if goal == 1 else 'topics'} to the next badge")
    print()



def display_heatmap(weeks: list[list[HeatmapCell]], legend: bool = True) -> None:
    """
    Display the heatmap grid as text, one row per weekday.

    Args:
        weeks: Week columns from build_heatmap_grid()
        legend: Whether to print the tier legend underneath
    """
    print("Learning Activity:")
    for row, day_name in enumerate(DAY_ABBREVS):
        line = "".join(
            " " if week[row].is_padding else TIER_GLYPHS[week[row].tier]
            for week in weeks
        )
        print(f"  {day_name} {line}".rstrip())

    if legend:
        glyphs = " ".join(TIER_GLYPHS[tier] for tier in Tier)
        print(f"  Less {glyphs} More")
    print()


def format_subsection(detail: SubsectionDetail, course_slug: str) -> str:
    """
    Format a completed subsection for display.

    Truncates long titles so the link column stays readable.
    """
    title = detail.title or "Untitled topic"
    if len(title) > 40:
        title = title[:37] + "..."

    chapter = detail.chapter_title or "-"
    return f"  {title:<40} {chapter:<25} {detail.topic_path(course_slug)}"
