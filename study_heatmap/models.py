"""
Data types shared by the aggregation, heatmap and streak modules.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import IntEnum


class Tier(IntEnum):
    """Heatmap intensity tier, ordered from no activity to the maximum."""

    NONE = 0
    LOW = 1
    MEDIUM = 2
    HIGH = 3
    MAX = 4

    @property
    def label(self) -> str:
        return self.name.lower()


@dataclass
class SubsectionDetail:
    """Display fields for one completed subsection."""

    subsection_id: str
    title: str = ""
    chapter_title: str = ""
    section_title: str = ""
    chapter_slug: str = ""
    section_slug: str = ""
    subsection_slug: str = ""

    def topic_path(self, course_slug: str) -> str:
        """Return the course page link for this subsection."""
        return (
            f"/courses/{course_slug}/{self.chapter_slug}/{self.section_slug}"
            f"#{self.subsection_slug}"
        )

    def to_dict(self) -> dict:
        return {
            "id": self.subsection_id,
            "title": self.title,
            "chapter_title": self.chapter_title,
            "section_title": self.section_title,
            "chapter_slug": self.chapter_slug,
            "section_slug": self.section_slug,
            "subsection_slug": self.subsection_slug,
        }


@dataclass
class CompletionRecord:
    """A single subsection completion read from the progress store."""

    subsection_id: str
    completed_at: datetime | None
    points_earned: int = 0
    title: str = ""
    chapter_title: str = ""
    section_title: str = ""
    chapter_slug: str = ""
    section_slug: str = ""
    subsection_slug: str = ""

    @property
    def detail(self) -> SubsectionDetail:
        return SubsectionDetail(
            subsection_id=self.subsection_id,
            title=self.title,
            chapter_title=self.chapter_title,
            section_title=self.section_title,
            chapter_slug=self.chapter_slug,
            section_slug=self.section_slug,
            subsection_slug=self.subsection_slug,
        )


@dataclass
class DayBucket:
    """Points and completed subsections for one calendar day."""

    date: date
    points: int = 0
    subsections: list[SubsectionDetail] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "date": self.date.isoformat(),
            "points": self.points,
            "subsections": [s.to_dict() for s in self.subsections],
        }


@dataclass
class HeatmapCell:
    """One square of the heatmap grid. A cell with no date is padding."""

    date: date | None
    points: int = 0
    tier: Tier = Tier.NONE

    @property
    def is_padding(self) -> bool:
        return self.date is None
