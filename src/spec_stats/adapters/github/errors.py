"""GitHub API policy errors."""

from typing import Optional


class GitHubError(Exception):
    """Base error for GitHub API failures that end a run."""

    def __init__(self, message: str, url: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class AbuseLimitError(GitHubError):
    """Secondary (abuse detection) rate limit hit; never retried."""
