"""Core domain layer."""

from spec_stats.core.accumulator import DelayAccumulator
from spec_stats.core.affiliation import AffiliationResolver, MembershipCache, build_vendor_map
from spec_stats.core.entities import (
    UNAFFILIATED,
    ActorType,
    Issue,
    IssueOutcome,
    RepositoryRef,
    SpecRecord,
    TimelineEvent,
    VendorEntity,
)
from spec_stats.core.interfaces import IssueTracker, ParticipantDirectory, SpecRegistry, SummaryFormatter
from spec_stats.core.repositories import list_repositories, parse_repository_url
from spec_stats.core.timeline import (
    afind_first_interesting_event,
    compute_delay_days,
    find_first_interesting_event,
)

__all__ = [
    "UNAFFILIATED",
    "ActorType",
    "Issue",
    "IssueOutcome",
    "RepositoryRef",
    "SpecRecord",
    "TimelineEvent",
    "VendorEntity",
    "IssueTracker",
    "ParticipantDirectory",
    "SpecRegistry",
    "SummaryFormatter",
    "DelayAccumulator",
    "AffiliationResolver",
    "MembershipCache",
    "build_vendor_map",
    "list_repositories",
    "parse_repository_url",
    "afind_first_interesting_event",
    "compute_delay_days",
    "find_first_interesting_event",
]
