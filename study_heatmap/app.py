"""
FastAPI web application for study-heatmap.

Provides the profile dashboard and REST API endpoints for streak, stats
and heatmap data.
"""

from datetime import date
from pathlib import Path

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates
from pydantic import BaseModel, Field

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
from study_heatmap.heatmap import DAY_ABBREVS, HeatmapInteraction
from study_heatmap.profile import build_profile, load_progress
from study_heatmap.progress_client import ProgressClient, ProgressClientError

app = FastAPI(
    title="study-heatmap",
    description="Learning streaks and a yearly activity heatmap",
    version="0.1.0",
)

templates = Jinja2Templates(directory=Path(__file__).parent / "templates")


class SubsectionEntry(BaseModel):
    """A subsection completed on the selected day."""

    id: str
    title: str
    chapter_title: str
    section_title: str
    link: str = Field(..., description="Course page link to the topic")


class DayDetailResponse(BaseModel):
    """Response model for a clicked heatmap day."""

    date: date
    points: int = Field(..., ge=0)
    count: int = Field(..., ge=1, description="Number of subsections completed")
    subsections: list[SubsectionEntry]


@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {"status": "ok"}


def _load_settings() -> dict:
    """
    Validate configuration and resolve the display policy.

    Raises:
        HTTPException: 500 on missing or invalid configuration
    """
    try:
        validate_config()
        return {
            "tz": get_timezone(),
            "policy": get_intensity_policy(),
            "require_today": get_require_today(),
        }
    except ValueError as e:
        raise HTTPException(status_code=500, detail=f"Configuration error: {e}")


def _client() -> ProgressClient:
    return ProgressClient(SUPABASE_URL, SUPABASE_KEY, SUPABASE_ACCESS_TOKEN)


def _fetch_profile_data() -> dict:
    """
    Fetch completions and build the profile payload.

    Raises:
        HTTPException: on configuration or progress store errors
    """
    settings = _load_settings()

    try:
        return build_profile(_client(), PROGRESS_USER_ID, **settings)
    except ProgressClientError as e:
        raise HTTPException(status_code=502, detail=str(e))


@app.get("/", response_class=HTMLResponse)
def index(request: Request):
    """Render the profile dashboard."""
    data = _fetch_profile_data()
    data["day_labels"] = DAY_ABBREVS
    return templates.TemplateResponse(request, "index.html", data)


@app.get("/api/profile")
def get_profile():
    """
    Get current streak and point statistics.

    Returns:
        JSON with streak info and stats
    """
    data = _fetch_profile_data()
    data.pop("heatmap")
    return data


@app.get("/api/heatmap")
def get_heatmap():
    """
    Get the yearly activity heatmap.

    Returns:
        JSON with week columns of day cells, tier legend and period
    """
    return _fetch_profile_data()["heatmap"]


@app.get("/api/heatmap/{day}", response_model=DayDetailResponse)
def get_day_detail(day: date):
    """
    Get everything completed on one day.

    Args:
        day: Calendar date (YYYY-MM-DD)

    Returns:
        JSON with the day's points and completed subsections with links
    """
    settings = _load_settings()

    try:
        snapshot = load_progress(_client(), PROGRESS_USER_ID, settings["tz"])
    except ProgressClientError as e:
        raise HTTPException(status_code=502, detail=str(e))

    interaction = HeatmapInteraction(snapshot.buckets, course_slug=COURSE_SLUG)
    if not interaction.on_cell_click(day):
        raise HTTPException(status_code=404, detail=f"No completions on {day.isoformat()}")

    return interaction.detail.to_dict()
