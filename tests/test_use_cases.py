"""Tests for use cases."""

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock

import pytest

from spec_stats.adapters.github import AbuseLimitError
from spec_stats.adapters.summary import TextSummaryFormatter
from spec_stats.core import ActorType, Issue, IssueTracker, SpecRecord, TimelineEvent, VendorEntity
from spec_stats.use_cases import DelayReportService


T0 = datetime(2021, 3, 1, tzinfo=timezone.utc)
SINCE = datetime(2021, 1, 1, tzinfo=timezone.utc)


class FakeTracker(IssueTracker):
    """In-memory issue tracker."""

    def __init__(self, issues, events, members, abuse_repos=()) -> None:
        self.issues = issues
        self.events = events
        self.members = members
        self.abuse_repos = set(abuse_repos)
        self.event_requests: list[int] = []
        self.membership_checks: list[tuple[str, str]] = []

    async def list_issues(self, repo, since):
        assert since == SINCE
        if repo.full_name in self.abuse_repos:
            raise AbuseLimitError("Abuse detected", f"https://api.github.com/repos/{repo.full_name}/issues", 403)
        for issue in self.issues.get(repo.full_name, []):
            yield issue

    async def list_events(self, repo, issue_number):
        self.event_requests.append(issue_number)
        for event in self.events.get(issue_number, []):
            yield event

    async def is_public_member(self, org, username):
        self.membership_checks.append((org, username))
        return org in self.members.get(username, set())


def make_issue(number: int, author: str, repo: str = "whatwg/dom") -> Issue:
    return Issue(
        number=number,
        created_at=T0,
        author=author,
        html_url=f"https://github.com/{repo}/issues/{number}",
    )


def make_event(login: str, days, actor_type: ActorType = ActorType.USER) -> TimelineEvent:
    return TimelineEvent(
        event="commented",
        created_at=T0 + timedelta(days=days) if days is not None else None,
        actor_login=login,
        actor_type=actor_type,
    )


def make_service(tracker: IssueTracker, repos: list[str], **kwargs) -> DelayReportService:
    registry = AsyncMock()
    registry.fetch_specs.return_value = [
        SpecRecord(f"https://{repo.rsplit('/', 1)[-1]}.spec.whatwg.org/", repo) for repo in repos
    ]
    participants = AsyncMock()
    participants.fetch_entities.return_value = [
        VendorEntity("Google LLC", "google"),
        VendorEntity("Mozilla Foundation", "mozilla"),
    ]
    return DelayReportService(
        registry=registry,
        participants=participants,
        tracker=tracker,
        formatter=TextSummaryFormatter(),
        since=SINCE,
        vendors=["Google", "Mozilla"],
        spec_domain="spec.whatwg.org/",
        **kwargs,
    )


@pytest.mark.asyncio
async def test_run_end_to_end(capsys) -> None:
    """Test per-issue lines and summary for a vendor-filed repository."""
    tracker = FakeTracker(
        issues={"whatwg/dom": [make_issue(1, "alice"), make_issue(2, "alice"), make_issue(3, "carol")]},
        events={
            1: [
                make_event("github-actions[bot]", 0.1, ActorType.BOT),
                make_event("alice", 1),
                make_event("dave", None),
                make_event("bob", 3.6),
                make_event("erin", 5),
            ],
            2: [make_event("dependabot[bot]", 1, ActorType.BOT)],
            3: [make_event("bob", 1)],
        },
        members={"alice": {"google"}},
    )
    service = make_service(tracker, ["https://github.com/whatwg/dom"])

    report = await service.run()

    assert capsys.readouterr().out.splitlines() == [
        "https://github.com/whatwg/dom/issues/1 first activity after 4 day(s)",
        "https://github.com/whatwg/dom/issues/2 no activity",
        "Google — average 4 day(s)",
        "Total — average 4 day(s)",
    ]
    # Unaffiliated authors are skipped before any timeline request
    assert tracker.event_requests == [1, 2]
    assert [outcome.delay_days for outcome in report.outcomes] == [4, None]
    assert report.accumulator.delays("Google") == [4]


@pytest.mark.asyncio
async def test_run_caches_memberships() -> None:
    """Test each author is checked at most once per run."""
    tracker = FakeTracker(
        issues={
            "whatwg/dom": [make_issue(1, "alice"), make_issue(2, "carol")],
            "whatwg/html": [make_issue(3, "alice", "whatwg/html"), make_issue(4, "carol", "whatwg/html")],
        },
        events={1: [make_event("bob", 1)], 3: [make_event("bob", 3)]},
        members={"alice": {"mozilla"}},
    )
    service = make_service(tracker, ["https://github.com/whatwg/html", "https://github.com/whatwg/dom"])

    report = await service.run()

    assert tracker.membership_checks == [
        ("google", "alice"),
        ("mozilla", "alice"),
        ("google", "carol"),
        ("mozilla", "carol"),
    ]
    assert report.cache.get_stats() == {"Mozilla": 1, "unaffiliated": 1}
    # Repositories are processed in sorted order
    assert [outcome.issue.number for outcome in report.outcomes] == [1, 3]
    assert report.accumulator.averages() == {"Mozilla": 2}


@pytest.mark.asyncio
async def test_run_cache_stats(capsys) -> None:
    """Test membership cache counts are reported on request."""
    tracker = FakeTracker(
        issues={"whatwg/dom": [make_issue(1, "alice"), make_issue(2, "carol")]},
        events={1: [make_event("bob", 2)]},
        members={"alice": {"google"}},
    )
    service = make_service(tracker, ["https://github.com/whatwg/dom"], show_cache_stats=True)

    await service.run()

    out = capsys.readouterr().out.splitlines()
    assert out[-2:] == [
        "Membership cache: Google 1 user(s)",
        "Membership cache: unaffiliated 1 user(s)",
    ]


@pytest.mark.asyncio
async def test_run_skips_unparseable_repositories(capsys) -> None:
    """Test malformed repository URLs are reported and skipped."""
    tracker = FakeTracker(issues={}, events={}, members={})
    service = make_service(tracker, ["https://github.com/whatwg", "https://gitlab.com/whatwg/dom"])

    report = await service.run()

    captured = capsys.readouterr()
    assert "Unable to parse GitHub repo from URL: https://github.com/whatwg" in captured.err
    assert "Unable to parse GitHub repo from URL: https://gitlab.com/whatwg/dom" in captured.err
    assert captured.out == ""
    assert len(report.skipped_repositories) == 2


@pytest.mark.asyncio
async def test_run_warns_about_missing_vendor_org(capsys) -> None:
    """Test vendors without a participant entity are reported."""
    tracker = FakeTracker(issues={}, events={}, members={})
    service = make_service(tracker, [])
    service.vendors = ["Google", "Apple"]

    await service.run()

    assert "No GitHub organization found for vendor Apple" in capsys.readouterr().err


@pytest.mark.asyncio
async def test_run_ignores_activity_before_creation(capsys) -> None:
    """Test a response timestamp before creation prints "no activity" and isn't recorded."""
    tracker = FakeTracker(
        issues={"whatwg/dom": [make_issue(1, "alice")]},
        events={1: [make_event("bob", -1)]},
        members={"alice": {"google"}},
    )
    service = make_service(tracker, ["https://github.com/whatwg/dom"])

    report = await service.run()

    captured = capsys.readouterr()
    assert captured.out.splitlines() == ["https://github.com/whatwg/dom/issues/1 no activity"]
    assert "predates issue creation" in captured.err
    assert report.accumulator.all_delays() == []


@pytest.mark.asyncio
async def test_abuse_limit_keeps_partial_output(capsys) -> None:
    """Test an abuse limit aborts the run but keeps already printed lines."""
    tracker = FakeTracker(
        issues={"whatwg/dom": [make_issue(1, "alice")]},
        events={1: [make_event("bob", 1)]},
        members={"alice": {"google"}},
        abuse_repos={"whatwg/html"},
    )
    service = make_service(tracker, ["https://github.com/whatwg/dom", "https://github.com/whatwg/html"])

    with pytest.raises(AbuseLimitError):
        await service.run()

    out = capsys.readouterr().out.splitlines()
    assert out == ["https://github.com/whatwg/dom/issues/1 first activity after 1 day(s)"]
