"""
Progress store client for fetching a user's completion rows.

Talks to the Supabase REST (PostgREST) API of the learning platform.
"""

import logging

import requests

logger = logging.getLogger(__name__)

COMPLETIONS_SELECT = (
    "subsection_id,points_earned,completed_at,"
    "subsections!inner(id,title,slug,"
    "sections!inner(title,slug,chapters!inner(title,slug)))"
)


class ProgressClientError(Exception):
    """Base exception for progress store errors."""

    pass


class ProgressClient:
    """Client for reading progress rows from the Supabase REST API."""

    def __init__(self, base_url: str, api_key: str, access_token: str | None = None):
        """
        Initialize the progress client.

        Args:
            base_url: Supabase project URL (https://<ref>.supabase.co)
            api_key: Project anon or service key
            access_token: Signed-in user's JWT. Falls back to the api key,
                which only works with a service key or open row policies.
        """
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.session = requests.Session()
        self.session.headers.update(
            {
                "apikey": api_key,
                "Authorization": f"Bearer {access_token or api_key}",
                "Accept": "application/json",
            }
        )

    def fetch_completions(self, user_id: str) -> list[dict]:
        """
        Fetch every subsection completion for a user, newest first.

        Each row embeds the subsection, its section and its chapter so
        titles and slugs are available for display.

        Args:
            user_id: The user's id in the auth schema

        Returns:
            List of row dictionaries

        Raises:
            ProgressClientError: If the API request fails
        """
        rows = self._get(
            "user_subsection_progress",
            {
                "select": COMPLETIONS_SELECT,
                "user_id": f"eq.{user_id}",
                "order": "completed_at.desc",
            },
        )
        logger.debug("Fetched %d completion rows for user %s", len(rows), user_id)
        return rows

    def fetch_chapter_completions(self, user_id: str) -> list[dict]:
        """
        Fetch the chapters a user has fully completed.

        Raises:
            ProgressClientError: If the API request fails
        """
        return self._get(
            "user_chapter_progress",
            {
                "select": "chapter_id,completed_at",
                "user_id": f"eq.{user_id}",
            },
        )

    def _get(self, table: str, params: dict) -> list[dict]:
        url = f"{self.base_url}/rest/v1/{table}"

        try:
            response = self.session.get(url, params=params)
        except requests.RequestException as e:
            raise ProgressClientError(f"Could not reach progress store: {e}") from e

        if response.status_code in (401, 403):
            raise ProgressClientError(
                "Authentication failed. Check your SUPABASE_KEY and access token."
            )
        elif response.status_code == 404:
            raise ProgressClientError(f"Table '{table}' not found in progress store.")
        elif not response.ok:
            raise ProgressClientError(
                f"Progress store error: {response.status_code} - {response.text}"
            )

        data = response.json()
        if not isinstance(data, list):
            raise ProgressClientError(f"Unexpected response for '{table}': {data!r}")
        return data
