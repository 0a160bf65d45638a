"""
Parse subsection completion rows returned by the progress store.
"""

import logging
import re
from datetime import datetime

from study_heatmap.models import CompletionRecord

logger = logging.getLogger(__name__)

_FRACTION = re.compile(r"\.(\d+)(?=[+-]\d{2}:?\d{2}$|$)")


def parse_completion_rows(rows: list[dict]) -> list[CompletionRecord]:
    """
    Parse raw progress rows into completion records.

    Accepts the embedded select shape returned by the REST API:
    ``subsections -> sections -> chapters`` nested objects carrying titles
    and slugs. Rows that already carry flat display fields are accepted too.

    Args:
        rows: List of row dictionaries from fetch_completions()

    Returns:
        List of CompletionRecord in input order. Rows with a missing or
        unparseable completed_at are kept with completed_at=None.
    """
    records = []

    for row in rows:
        if not isinstance(row, dict):
            logger.warning("Skipping non-object progress row: %r", row)
            continue

        subsection = _embedded(row, "subsections")
        section = _embedded(subsection, "sections")
        chapter = _embedded(section, "chapters")

        subsection_id = row.get("subsection_id") or subsection.get("id") or ""

        completed_at = parse_timestamp(row.get("completed_at"))
        if completed_at is None:
            logger.warning(
                "Unparseable completed_at %r for subsection %s",
                row.get("completed_at"),
                subsection_id,
            )

        records.append(
            CompletionRecord(
                subsection_id=str(subsection_id),
                completed_at=completed_at,
                points_earned=_parse_points(row.get("points_earned")),
                title=subsection.get("title") or row.get("title", ""),
                chapter_title=chapter.get("title") or row.get("chapter_title", ""),
                section_title=section.get("title") or row.get("section_title", ""),
                chapter_slug=chapter.get("slug") or row.get("chapter_slug", ""),
                section_slug=section.get("slug") or row.get("section_slug", ""),
                subsection_slug=subsection.get("slug") or row.get("subsection_slug", ""),
            )
        )

    return records


def parse_timestamp(value) -> datetime | None:
    """Parse an ISO-8601 timestamp, returning None when it can't be read."""
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str) or not value:
        return None

    # fromisoformat() on older interpreters rejects the Z suffix
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"

    # and only takes 3 or 6 fractional digits; Postgres trims trailing zeros
    value = _FRACTION.sub(lambda m: "." + m.group(1).ljust(6, "0")[:6], value, count=1)

    try:
        return datetime.fromisoformat(value)
    except ValueError:
        return None


def _embedded(parent: dict, key: str) -> dict:
    value = parent.get(key)
    return value if isinstance(value, dict) else {}


def _parse_points(value) -> int:
    if value is None:
        return 0
    try:
        points = int(value)
    except (TypeError, ValueError):
        return 0
    return max(points, 0)
