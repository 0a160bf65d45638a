"""
Group completion records into one bucket per local calendar day.
"""

from datetime import date, datetime, tzinfo

from study_heatmap.models import CompletionRecord, DayBucket


def local_date(timestamp: datetime, tz: tzinfo | None = None) -> date:
    """
    Truncate a timestamp to the observer's calendar day.

    Args:
        timestamp: Completion time. Naive values are taken as already local.
        tz: Zone to bucket in. None means the system local zone.

    Returns:
        The calendar date of the timestamp in the given zone
    """
    if timestamp.tzinfo is not None:
        timestamp = timestamp.astimezone(tz)
    return timestamp.date()


def aggregate_by_day(
    records: list[CompletionRecord], tz: tzinfo | None = None
) -> list[DayBucket]:
    """
    Sum points and collect subsection details per calendar day.

    Args:
        records: Completion records in any order
        tz: Zone used for day boundaries (None = system local)

    Returns:
        One DayBucket per distinct day, in order of first appearance.
        Records without a timestamp are skipped.
    """
    buckets: dict[date, DayBucket] = {}

    for record in records:
        if record.completed_at is None:
            continue

        day = local_date(record.completed_at, tz)
        bucket = buckets.get(day)
        if bucket is None:
            bucket = buckets[day] = DayBucket(date=day)

        bucket.points += record.points_earned
        bucket.subsections.append(record.detail)

    return list(buckets.values())


def index_by_date(buckets: list[DayBucket]) -> dict[date, DayBucket]:
    """Map each bucket's date to the bucket."""
    return {bucket.date: bucket for bucket in buckets}
