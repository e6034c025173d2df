"""Business logic use cases."""

from contextlib import aclosing
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from spec_stats.console import warn
from spec_stats.core import (
    UNAFFILIATED,
    AffiliationResolver,
    DelayAccumulator,
    Issue,
    IssueOutcome,
    IssueTracker,
    MembershipCache,
    ParticipantDirectory,
    RepositoryRef,
    SpecRegistry,
    SummaryFormatter,
    afind_first_interesting_event,
    build_vendor_map,
    compute_delay_days,
    list_repositories,
    parse_repository_url,
)


@dataclass
class DelayReport:
    """Everything a run produced."""

    outcomes: list[IssueOutcome] = field(default_factory=list)
    accumulator: DelayAccumulator = field(default_factory=DelayAccumulator)
    cache: MembershipCache = field(default_factory=MembershipCache)
    skipped_repositories: list[str] = field(default_factory=list)


class DelayReportService:
    """Measure how long vendor-filed issues wait for a first human reaction.

    Repositories, issues and timeline pages are processed strictly one after
    another. Only issues whose author resolves to a browser vendor are
    measured; the responder's affiliation is never checked.
    """

    def __init__(
        self,
        registry: SpecRegistry,
        participants: ParticipantDirectory,
        tracker: IssueTracker,
        formatter: SummaryFormatter,
        since: datetime,
        vendors: list[str],
        spec_domain: Optional[str] = None,
        verbose: bool = False,
        show_cache_stats: bool = False,
    ) -> None:
        self.registry = registry
        self.participants = participants
        self.tracker = tracker
        self.formatter = formatter
        self.since = since
        self.vendors = vendors
        self.spec_domain = spec_domain
        self.verbose = verbose
        self.show_cache_stats = show_cache_stats

    async def list_repositories(self) -> list[str]:
        """Sorted source repository URLs of the tracked specs."""
        specs = await self.registry.fetch_specs()
        return list_repositories(specs, self.spec_domain)

    async def get_vendor_orgs(self) -> dict[str, str]:
        """Vendor to GitHub org, in vendor priority order."""
        entities = await self.participants.fetch_entities()
        vendor_orgs = build_vendor_map(entities, self.vendors)
        for vendor in self.vendors:
            if vendor not in vendor_orgs:
                warn(f"No GitHub organization found for vendor {vendor}")
        return vendor_orgs

    async def run(self) -> DelayReport:
        """Process every repository and print per-issue lines and the summary.

        Lines already printed stay printed if a GitHub error aborts the run.
        """
        repos = await self.list_repositories()
        vendor_orgs = await self.get_vendor_orgs()

        report = DelayReport()
        resolver = AffiliationResolver(self.tracker, vendor_orgs, cache=report.cache, verbose=self.verbose)

        for repo_url in repos:
            repo = parse_repository_url(repo_url)
            if repo is None:
                warn(f"Unable to parse GitHub repo from URL: {repo_url}")
                report.skipped_repositories.append(repo_url)
                continue

            await self.process_repository(repo, resolver, report)

        for line in self.summarize(report):
            print(line)

        return report

    async def process_repository(
        self, repo: RepositoryRef, resolver: AffiliationResolver, report: DelayReport
    ) -> None:
        async with aclosing(self.tracker.list_issues(repo, self.since)) as issues:
            async for issue in issues:
                outcome = await self.process_issue(repo, issue, resolver)
                if outcome is None:
                    continue

                print(outcome.describe())
                report.outcomes.append(outcome)
                if outcome.delay_days is not None:
                    report.accumulator.add(outcome.vendor, outcome.delay_days)

    async def process_issue(
        self, repo: RepositoryRef, issue: Issue, resolver: AffiliationResolver
    ) -> Optional[IssueOutcome]:
        """Measure one issue; None when the issue does not take part in the statistics."""
        # Only issues filed by browser vendor members count
        vendor = await resolver.resolve(issue.author)
        if vendor == UNAFFILIATED:
            return None

        async with aclosing(self.tracker.list_events(repo, issue.number)) as events:
            event = await afind_first_interesting_event(issue, events)

        if event is None:
            return IssueOutcome(issue=issue, vendor=vendor, delay_days=None)

        delay = compute_delay_days(issue.created_at, event.created_at)
        if delay is None:
            warn(f"{issue.html_url} first activity predates issue creation, ignoring")
        return IssueOutcome(issue=issue, vendor=vendor, delay_days=delay)

    def summarize(self, report: DelayReport) -> list[str]:
        cache_counts = report.cache.get_stats() if self.show_cache_stats else None
        return self.formatter.format(
            report.accumulator.averages(),
            report.accumulator.total_average(),
            cache_counts,
        )
