"""GitHub API adapter."""

from spec_stats.adapters.github.client import GitHubClient
from spec_stats.adapters.github.errors import AbuseLimitError, GitHubError

__all__ = ["GitHubClient", "GitHubError", "AbuseLimitError"]
