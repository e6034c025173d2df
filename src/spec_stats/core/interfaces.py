"""Core interfaces for adapters."""

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator
from datetime import datetime
from typing import Optional

from spec_stats.core.entities import Issue, RepositoryRef, SpecRecord, TimelineEvent, VendorEntity


class SpecRegistry(ABC):
    """Interface for the catalogue of tracked specifications."""

    @abstractmethod
    async def fetch_specs(self) -> list[SpecRecord]:
        """Fetch all specification records."""
        pass


class ParticipantDirectory(ABC):
    """Interface for the standards-body participant entities."""

    @abstractmethod
    async def fetch_entities(self) -> list[VendorEntity]:
        """Fetch all participant entities."""
        pass


class IssueTracker(ABC):
    """Interface for issue tracker operations."""

    @abstractmethod
    def list_issues(self, repo: RepositoryRef, since: datetime) -> AsyncIterator[Issue]:
        """Iterate over issues updated at or after `since`, across all pages."""
        pass

    @abstractmethod
    def list_events(self, repo: RepositoryRef, issue_number: int) -> AsyncIterator[TimelineEvent]:
        """Iterate over the timeline events of an issue, across all pages."""
        pass

    @abstractmethod
    async def is_public_member(self, org: str, username: str) -> bool:
        """Check whether a user is a public member of an organization."""
        pass


class SummaryFormatter(ABC):
    """Interface for rendering the final summary."""

    @abstractmethod
    def format(self, averages: dict[str, int], total: Optional[int], cache_counts: Optional[dict[str, int]] = None) -> list[str]:
        """Render summary lines."""
        pass
