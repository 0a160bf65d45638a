"""
Tests for the FastAPI web application.
"""

from datetime import datetime, timedelta
from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from study_heatmap.app import app
from study_heatmap.progress_client import ProgressClientError


@pytest.fixture
def client():
    """Create a test client for the FastAPI app."""
    return TestClient(app)


def _row(completed_at, points=1, slug="arrays"):
    return {
        "subsection_id": slug,
        "points_earned": points,
        "completed_at": completed_at,
        "subsections": {
            "id": slug,
            "title": slug.title(),
            "slug": slug,
            "sections": {
                "title": "Basics",
                "slug": "basics",
                "chapters": {"title": "Intro", "slug": "intro"},
            },
        },
    }


@pytest.fixture
def mock_progress():
    """Patch configuration and the progress client with local-time rows."""
    now = datetime.now().replace(microsecond=0)
    yesterday = now - timedelta(days=1)
    rows = [
        _row(now.isoformat(), slug="arrays"),
        _row(yesterday.isoformat(), points=2, slug="strings"),
    ]

    with patch("study_heatmap.app.validate_config"), \
            patch("study_heatmap.app.get_timezone", return_value=None), \
            patch("study_heatmap.app.ProgressClient") as mock_client_cls:
        mock_client = MagicMock()
        mock_client.fetch_completions.return_value = rows
        mock_client.fetch_chapter_completions.return_value = []
        mock_client_cls.return_value = mock_client
        yield {"client": mock_client, "today": now.date(), "yesterday": yesterday.date()}


class TestHealthEndpoint:
    """Tests for the /health endpoint."""

    def test_health_returns_ok(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}


class TestProfileEndpoint:
    """Tests for the /api/profile endpoint."""

    def test_profile_structure(self, client, mock_progress):
        response = client.get("/api/profile")

        assert response.status_code == 200
        data = response.json()
        assert data["streak"]["current"] == 2
        assert data["streak"]["active"] is True
        assert data["stats"]["total_points"] == 3
        assert data["stats"]["topics_completed"] == 2
        assert "heatmap" not in data

    def test_config_error(self, client):
        with patch("study_heatmap.app.validate_config") as mock_validate:
            mock_validate.side_effect = ValueError("Missing SUPABASE_URL")
            response = client.get("/api/profile")

        assert response.status_code == 500
        assert "Configuration error" in response.json()["detail"]

    def test_progress_store_error(self, client, mock_progress):
        mock_progress["client"].fetch_completions.side_effect = ProgressClientError(
            "Authentication failed."
        )

        response = client.get("/api/profile")

        assert response.status_code == 502
        assert "Authentication failed" in response.json()["detail"]


class TestHeatmapEndpoint:
    """Tests for the /api/heatmap endpoints."""

    def test_heatmap_grid(self, client, mock_progress):
        response = client.get("/api/heatmap")

        assert response.status_code == 200
        data = response.json()
        assert all(len(week) == 7 for week in data["weeks"])
        dated = [cell for week in data["weeks"] for cell in week if cell]
        assert len(dated) == 365
        assert dated[-1]["date"] == mock_progress["today"].isoformat()
        assert data["active_days"] == 2

    def test_day_detail(self, client, mock_progress):
        day = mock_progress["yesterday"].isoformat()

        response = client.get(f"/api/heatmap/{day}")

        assert response.status_code == 200
        data = response.json()
        assert data["date"] == day
        assert data["points"] == 2
        assert data["count"] == 1
        assert data["subsections"][0]["title"] == "Strings"
        assert data["subsections"][0]["link"].endswith("/intro/basics#strings")

    def test_day_without_completions(self, client, mock_progress):
        day = (mock_progress["today"] - timedelta(days=10)).isoformat()

        response = client.get(f"/api/heatmap/{day}")

        assert response.status_code == 404

    def test_malformed_date(self, client, mock_progress):
        response = client.get("/api/heatmap/not-a-date")

        assert response.status_code == 422


class TestIndexPage:
    """Tests for the HTML dashboard."""

    def test_index_renders(self, client, mock_progress):
        response = client.get("/")

        assert response.status_code == 200
        assert "Learning Activity" in response.text
        assert 'data-date="' in response.text

    def test_only_active_days_get_a_tooltip(self, client, mock_progress):
        response = client.get("/")

        assert response.text.count('title="') == 2
        assert "0 points from 0 subsections" not in response.text
        assert f'title="{mock_progress["yesterday"].isoformat()}: 2 points from 1 subsections"' in response.text
