"""GitHub REST client for issues, timelines and org membership."""

import asyncio
import time
from collections.abc import AsyncIterator
from datetime import datetime, timezone
from typing import Any, Optional

import httpx

from spec_stats.adapters.github.errors import AbuseLimitError
from spec_stats.config import Settings
from spec_stats.console import warn
from spec_stats.core import Issue, IssueTracker, RepositoryRef, TimelineEvent


ABUSE_MARKERS = ("secondary rate limit", "abuse")


class GitHubClient(IssueTracker):
    """GitHub API client with pagination and rate limit handling."""

    def __init__(
        self,
        token: Optional[str] = None,
        api_base: str = "https://api.github.com",
        user_agent: str = "spec-stats",
        per_page: int = 100,
        timeout: float = 30.0,
        max_retries: int = 5,
        initial_retry_delay: float = 2.0,
        max_retry_delay: float = 900.0,
    ) -> None:
        self.token = token
        self.api_base = api_base.rstrip("/")
        self.user_agent = user_agent
        self.per_page = per_page
        self.timeout = timeout
        self.max_retries = max_retries
        self.initial_retry_delay = initial_retry_delay
        self.max_retry_delay = max_retry_delay

    @classmethod
    def from_settings(cls, settings: Settings) -> "GitHubClient":
        return cls(
            token=settings.github_token,
            api_base=settings.github.api_base,
            user_agent=settings.github.user_agent,
            per_page=settings.github.per_page,
            timeout=settings.github.timeout,
            max_retries=settings.github.max_retries,
            initial_retry_delay=settings.github.initial_retry_delay,
            max_retry_delay=settings.github.max_retry_delay,
        )

    async def list_issues(self, repo: RepositoryRef, since: datetime) -> AsyncIterator[Issue]:
        """Iterate over all issues of `repo` updated at or after `since`."""
        params = {"state": "all", "since": format_timestamp(since)}
        url = f"{self.api_base}/repos/{repo.owner}/{repo.name}/issues"
        async for data in self._paginate(url, params):
            try:
                yield Issue.from_api(data)
            except (KeyError, ValueError) as e:
                warn(f"Skipping malformed issue in {repo.full_name}: {e}")

    async def list_events(self, repo: RepositoryRef, issue_number: int) -> AsyncIterator[TimelineEvent]:
        """Iterate over the timeline of an issue in chronological order."""
        url = f"{self.api_base}/repos/{repo.owner}/{repo.name}/issues/{issue_number}/timeline"
        async for data in self._paginate(url, {}):
            yield TimelineEvent.from_api(data)

    async def is_public_member(self, org: str, username: str) -> bool:
        """Check public org membership; any answer but 204 means "not a member"."""
        response = await self._request(f"{self.api_base}/orgs/{org}/public_members/{username}")
        if response.status_code not in (204, 404):
            warn(f"Unexpected status {response.status_code} checking {username} in {org}, treating as not a member")
        return response.status_code == 204

    async def _paginate(self, url: str, params: dict[str, Any]) -> AsyncIterator[Any]:
        """Yield items page by page, following `Link: rel="next"` until exhausted."""
        next_url: Optional[str] = url
        next_params: Optional[dict[str, Any]] = {**params, "per_page": self.per_page}

        while next_url:
            response = await self._request(next_url, next_params)
            response.raise_for_status()

            for item in response.json():
                yield item

            next_url = (response.links.get("next") or {}).get("url")
            # The next link already carries the query string
            next_params = None

    async def _request(self, url: str, params: Optional[dict[str, Any]] = None) -> httpx.Response:
        """GET with retry on quota exhaustion, server errors and network errors.

        Quota waits last until the limit resets and do not count against
        `max_retries`, which only bounds server and network errors.
        Abuse detection responses are never retried.
        """
        attempt = 0
        quota_waits = 0
        while True:
            try:
                async with httpx.AsyncClient(timeout=self.timeout, follow_redirects=True) as client:
                    response = await client.get(url, headers=self._get_headers(), params=params)
            except httpx.RequestError as e:
                if attempt >= self.max_retries:
                    raise
                retry_delay = self._backoff_delay(attempt)
                attempt += 1
                warn(f"Network error for request to {url} ({e}), retrying after {retry_delay:.1f}s")
                await asyncio.sleep(retry_delay)
                continue

            if response.status_code in (403, 429):
                if self._is_abuse_limit(response):
                    warn(f"Abuse detected for request to {url}!")
                    raise AbuseLimitError(f"Abuse detected for request to {url}", url, response.status_code)

                if self._is_quota_exhausted(response):
                    retry_after = self._get_retry_delay(response, quota_waits)
                    quota_waits += 1
                    warn(f"Request quota exhausted for request to {url}")
                    warn(f"Retry#{quota_waits} after {retry_after:.0f} seconds!")
                    await asyncio.sleep(retry_after)
                    continue

            if response.status_code >= 500 and attempt < self.max_retries:
                retry_delay = self._backoff_delay(attempt)
                attempt += 1
                warn(f"Server error {response.status_code} for request to {url}, retrying after {retry_delay:.1f}s")
                await asyncio.sleep(retry_delay)
                continue

            return response

    def _is_abuse_limit(self, response: httpx.Response) -> bool:
        message = self._error_message(response).lower()
        return any(marker in message for marker in ABUSE_MARKERS)

    def _is_quota_exhausted(self, response: httpx.Response) -> bool:
        if response.status_code == 429:
            return True
        return response.headers.get("x-ratelimit-remaining") == "0"

    def _get_retry_delay(self, response: httpx.Response, attempt: int) -> float:
        """Calculate retry delay from response headers or use exponential backoff."""
        retry_after = response.headers.get("retry-after")
        if retry_after:
            try:
                return min(float(retry_after), self.max_retry_delay)
            except ValueError:
                pass

        reset = response.headers.get("x-ratelimit-reset")
        if reset:
            try:
                wait = float(reset) - time.time() + 1
                return min(max(wait, 0.0), self.max_retry_delay)
            except ValueError:
                pass

        return self._backoff_delay(attempt)

    def _backoff_delay(self, attempt: int) -> float:
        # Quota waits are unbounded, the exponent is not
        return min(self.initial_retry_delay * (2 ** min(attempt, 30)), self.max_retry_delay)

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            data = response.json()
        except ValueError:
            return response.text or ""
        if isinstance(data, dict):
            return str(data.get("message", ""))
        return ""

    def _get_headers(self) -> dict[str, str]:
        """Get headers for GitHub API requests."""
        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
            "User-Agent": self.user_agent,
        }

        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"

        return headers


def format_timestamp(value: datetime) -> str:
    """Format a datetime the way GitHub expects query timestamps."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
