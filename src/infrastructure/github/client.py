"""GitHub REST client for listing a user's public repositories."""

import logging
import re
from typing import Any

import httpx

from core.config import settings
from core.exceptions import GitHubProfileNotFoundError

logger = logging.getLogger(__name__)

REPOS_PER_PAGE = 50

# GitHub logins: alphanumerics and hyphens, no leading hyphen, at most 39 characters
GITHUB_LOGIN = re.compile(r"[A-Za-z0-9][A-Za-z0-9-]{0,38}")


class GitHubClient:
    """Thin async wrapper around ``GET /users/{username}/repos``."""

    def __init__(
        self,
        base_url: str = settings.github_api_url,
        client_id: str = settings.github_client_id,
        client_secret: str = settings.github_client_secret,
        timeout: float = settings.github_timeout_seconds,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._auth = (client_id, client_secret) if client_id else None
        self._timeout = timeout
        self._transport = transport

    async def list_repos(self, username: str) -> list[dict[str, Any]]:
        """
        Fetch the oldest repositories of a GitHub user.

        Args:
            username: GitHub login

        Returns:
            The decoded JSON array returned by GitHub

        Raises:
            GitHubProfileNotFoundError: the login is malformed or GitHub
                answered with anything but 200
        """
        if not GITHUB_LOGIN.fullmatch(username):
            raise GitHubProfileNotFoundError(username)

        async with httpx.AsyncClient(
            base_url=self._base_url,
            auth=self._auth,
            timeout=self._timeout,
            transport=self._transport,
            headers={"User-Agent": settings.app_name, "Accept": "application/vnd.github+json"},
        ) as client:
            response = await client.get(
                f"/users/{username}/repos",
                params={"per_page": REPOS_PER_PAGE, "sort": "created", "direction": "asc"},
            )

        if response.status_code != 200:
            logger.info(
                "GitHub repo lookup for %s failed with status %d",
                username,
                response.status_code,
            )
            raise GitHubProfileNotFoundError(username, response.status_code)

        return response.json()  # type: ignore[no-any-return]
