"""Repository enumeration and URL parsing."""

from typing import Iterable, Optional
from urllib.parse import urlsplit

from spec_stats.core.entities import RepositoryRef, SpecRecord


GITHUB_HOST = "github.com"


def matches_spec_domain(spec: SpecRecord, spec_domain: Optional[str]) -> bool:
    """Check if the spec's nightly document is published under `spec_domain`.

    An empty domain disables the filter.
    """
    if not spec_domain:
        return True
    return bool(spec.nightly_url) and spec.nightly_url.endswith(spec_domain)


def list_repositories(specs: Iterable[SpecRecord], spec_domain: Optional[str] = None) -> list[str]:
    """Return the sorted, duplicate-free source repository URLs of matching specs."""
    repos = {
        spec.repository
        for spec in specs
        if spec.repository and matches_spec_domain(spec, spec_domain)
    }
    return sorted(repos)


def parse_repository_url(url: str) -> Optional[RepositoryRef]:
    """Parse a github.com repository URL into owner and name.

    Returns None for foreign hosts or paths that are not exactly `/owner/repo`.
    """
    try:
        parts = urlsplit(url)
        hostname = parts.hostname
    except ValueError:
        return None

    if not hostname or hostname.lower() != GITHUB_HOST:
        return None

    segments = [s for s in parts.path.split("/") if s]
    if len(segments) != 2:
        return None
    return RepositoryRef(owner=segments[0], name=segments[1])
