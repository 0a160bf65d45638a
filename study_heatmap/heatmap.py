"""
Heatmap grid builder for the learning activity calendar.

Lays the last 365 days out as GitHub-style week columns (Sunday on top),
assigns each day an intensity tier from its point total and tracks the
hover/click inspection state of a rendered grid.
"""

from dataclasses import dataclass, field
from datetime import date, timedelta

from study_heatmap.daily_aggregator import index_by_date
from study_heatmap.models import DayBucket, HeatmapCell, SubsectionDetail, Tier

HEATMAP_DAYS = 365
DEFAULT_COURSE_SLUG = "dsa-python"

MONTH_ABBREVS = [
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
]
DAY_ABBREVS = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]


@dataclass(frozen=True)
class IntensityPolicy:
    """
    Upper point bounds for the LOW, MEDIUM and HIGH tiers.

    Anything above ``high`` is MAX; zero points is always NONE.
    """

    low: int = 2
    medium: int = 5
    high: int = 10

    def __post_init__(self):
        if not 0 < self.low < self.medium < self.high:
            raise ValueError(
                f"Tier thresholds must be increasing and positive, "
                f"got {self.low}, {self.medium}, {self.high}"
            )

    def tier_for(self, points: int) -> Tier:
        if points <= 0:
            return Tier.NONE
        elif points <= self.low:
            return Tier.LOW
        elif points <= self.medium:
            return Tier.MEDIUM
        elif points <= self.high:
            return Tier.HIGH
        else:
            return Tier.MAX

    def legend(self) -> list[dict]:
        """Describe the point range of each tier, lowest first."""
        return [
            {"tier": Tier.NONE.label, "level": 0, "min": 0, "max": 0},
            {"tier": Tier.LOW.label, "level": 1, "min": 1, "max": self.low},
            {"tier": Tier.MEDIUM.label, "level": 2, "min": self.low + 1, "max": self.medium},
            {"tier": Tier.HIGH.label, "level": 3, "min": self.medium + 1, "max": self.high},
            {"tier": Tier.MAX.label, "level": 4, "min": self.high + 1, "max": None},
        ]


DEFAULT_POLICY = IntensityPolicy()


def intensity_tier(points: int, policy: IntensityPolicy = DEFAULT_POLICY) -> Tier:
    """Return the heatmap tier for a day's point total."""
    return policy.tier_for(points)


def sunday_index(day: date) -> int:
    """Weekday with Sunday as 0 and Saturday as 6."""
    return (day.weekday() + 1) % 7


def heatmap_window(today: date, days: int = HEATMAP_DAYS) -> list[date]:
    """Return the dates from today-(days-1) through today, oldest first."""
    start = today - timedelta(days=days - 1)
    return [start + timedelta(days=i) for i in range(days)]


def build_heatmap_grid(
    buckets: list[DayBucket],
    today: date,
    policy: IntensityPolicy = DEFAULT_POLICY,
    days: int = HEATMAP_DAYS,
) -> list[list[HeatmapCell]]:
    """
    Build the week columns of the heatmap.

    Args:
        buckets: Day buckets from aggregate_by_day()
        today: Last day of the window
        policy: Tier thresholds
        days: Window length (365 for the yearly calendar)

    Returns:
        List of weeks, each exactly 7 cells ordered Sunday..Saturday.
        The first week is front-padded and the last week back-padded with
        cells whose date is None.
    """
    by_date = index_by_date(buckets)
    dates = heatmap_window(today, days)

    weeks: list[list[HeatmapCell]] = []
    current_week = [HeatmapCell(date=None) for _ in range(sunday_index(dates[0]))]

    for i, day in enumerate(dates):
        bucket = by_date.get(day)
        points = bucket.points if bucket else 0
        current_week.append(HeatmapCell(date=day, points=points, tier=policy.tier_for(points)))

        if sunday_index(day) == 6 or i == len(dates) - 1:
            while len(current_week) < 7:
                current_week.append(HeatmapCell(date=None))
            weeks.append(current_week)
            current_week = []

    return weeks


def month_labels(weeks: list[list[HeatmapCell]]) -> list[tuple[int, str]]:
    """
    Return (week_index, month abbreviation) for each column where a new
    month starts, used to label the top axis of the grid.
    """
    labels = []
    last_month = None

    for index, week in enumerate(weeks):
        first_day = next((cell.date for cell in week if cell.date is not None), None)
        if first_day is None:
            continue
        if first_day.month != last_month:
            labels.append((index, MONTH_ABBREVS[first_day.month - 1]))
            last_month = first_day.month

    return labels


def heatmap_payload(
    buckets: list[DayBucket],
    today: date,
    policy: IntensityPolicy = DEFAULT_POLICY,
    days: int = HEATMAP_DAYS,
) -> dict:
    """
    Build the JSON-ready heatmap structure served by the web app.

    Returns:
        Dictionary with:
            - weeks: List of 7-item lists; each item is None (padding) or
              {date, points, count, tier, level}
            - period: Start/end dates and total days
            - active_days: Days in the window with at least one completion
            - total_points: Points earned inside the window
            - max_points: Highest single-day total inside the window
            - month_labels: [{week, label}] for the top axis
            - legend: Point range of each tier
    """
    by_date = index_by_date(buckets)
    weeks = build_heatmap_grid(buckets, today, policy, days)

    week_payload = []
    active_days = 0
    total_points = 0
    max_points = 0

    for week in weeks:
        column = []
        for cell in week:
            if cell.date is None:
                column.append(None)
                continue

            bucket = by_date.get(cell.date)
            count = len(bucket.subsections) if bucket else 0
            if count:
                active_days += 1
            total_points += cell.points
            max_points = max(max_points, cell.points)

            column.append({
                "date": cell.date.isoformat(),
                "points": cell.points,
                "count": count,
                "tier": cell.tier.label,
                "level": int(cell.tier),
            })
        week_payload.append(column)

    start = today - timedelta(days=days - 1)
    return {
        "weeks": week_payload,
        "period": {
            "start": start.isoformat(),
            "end": today.isoformat(),
            "total_days": days,
        },
        "active_days": active_days,
        "total_points": total_points,
        "max_points": max_points,
        "month_labels": [
            {"week": index, "label": label} for index, label in month_labels(weeks)
        ],
        "legend": policy.legend(),
    }


@dataclass
class Tooltip:
    """Hover summary for a day, anchored at the pointer position."""

    date: date
    points: int
    subsection_count: int
    x: int = 0
    y: int = 0


@dataclass
class DayDetail:
    """Everything completed on one day, with links back to each topic."""

    date: date
    points: int
    entries: list[dict] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "date": self.date.isoformat(),
            "points": self.points,
            "count": len(self.entries),
            "subsections": self.entries,
        }


def build_day_detail(bucket: DayBucket, course_slug: str = DEFAULT_COURSE_SLUG) -> DayDetail:
    """Expand a bucket into the detail listing shown when a day is clicked."""
    return DayDetail(
        date=bucket.date,
        points=bucket.points,
        entries=[_detail_entry(s, course_slug) for s in bucket.subsections],
    )


def _detail_entry(subsection: SubsectionDetail, course_slug: str) -> dict:
    return {
        "id": subsection.subsection_id,
        "title": subsection.title,
        "chapter_title": subsection.chapter_title,
        "section_title": subsection.section_title,
        "link": subsection.topic_path(course_slug),
    }


class HeatmapInteraction:
    """
    Hover and click state for one rendered heatmap.

    At most one tooltip and one detail view exist at a time. Build a new
    instance whenever the buckets are refetched.
    """

    def __init__(self, buckets: list[DayBucket], course_slug: str = DEFAULT_COURSE_SLUG):
        self._by_date = index_by_date(buckets)
        self.course_slug = course_slug
        self._tooltip: Tooltip | None = None
        self._detail: DayDetail | None = None

    @property
    def tooltip(self) -> Tooltip | None:
        return self._tooltip

    @property
    def detail(self) -> DayDetail | None:
        return self._detail

    def bucket_for(self, day: date | None) -> DayBucket | None:
        if day is None:
            return None
        return self._by_date.get(day)

    def on_cell_hover(self, day: date | None, x: int = 0, y: int = 0) -> Tooltip | None:
        """
        Show the tooltip for a hovered cell.

        Returns:
            The tooltip when the day has at least one completion, else None
        """
        bucket = self.bucket_for(day)
        if bucket is None or not bucket.subsections:
            self._tooltip = None
            return None

        self._tooltip = Tooltip(
            date=bucket.date,
            points=bucket.points,
            subsection_count=len(bucket.subsections),
            x=x,
            y=y,
        )
        return self._tooltip

    def on_pointer_move(self, x: int, y: int) -> None:
        if self._tooltip is not None:
            self._tooltip.x = x
            self._tooltip.y = y

    def on_cell_leave(self) -> None:
        self._tooltip = None

    def on_cell_click(self, day: date | None) -> bool:
        """
        Open the detail view for a day with completions.

        Returns:
            True if a detail view was opened, False for a no-op click
        """
        bucket = self.bucket_for(day)
        if bucket is None or not bucket.subsections:
            return False

        self._detail = build_day_detail(bucket, self.course_slug)
        return True

    def on_dismiss_detail(self) -> None:
        self._detail = None
