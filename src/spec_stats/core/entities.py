"""Core domain entities."""

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional


UNAFFILIATED = "unaffiliated"


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse a GitHub ISO 8601 timestamp, returning None when absent or invalid."""
    if not value or not isinstance(value, str):
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


class ActorType(str, Enum):
    """Kind of account behind a timeline event."""

    USER = "User"
    BOT = "Bot"
    ORGANIZATION = "Organization"
    MANNEQUIN = "Mannequin"
    UNKNOWN = "Unknown"

    @classmethod
    def from_api(cls, value: Optional[str]) -> "ActorType":
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN


@dataclass(frozen=True)
class RepositoryRef:
    """GitHub repository identified by owner and name."""

    owner: str
    name: str

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"


@dataclass(frozen=True)
class SpecRecord:
    """Entry of the specification registry."""

    nightly_url: Optional[str]
    repository: Optional[str]

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "SpecRecord":
        nightly = data.get("nightly") or {}
        return cls(
            nightly_url=nightly.get("url"),
            repository=nightly.get("repository"),
        )


@dataclass(frozen=True)
class VendorEntity:
    """Standards-body participant with its GitHub organization."""

    name: str
    github_org: Optional[str]

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Optional["VendorEntity"]:
        info = data.get("info") or {}
        name = info.get("name")
        if not name:
            return None
        return cls(name=name, github_org=info.get("gitHubOrganization"))


@dataclass(frozen=True)
class Issue:
    """Issue (or pull request) fetched from a repository."""

    number: int
    created_at: datetime
    author: str
    html_url: str
    title: str = ""
    is_pull_request: bool = False

    def __post_init__(self) -> None:
        if not self.author:
            raise ValueError("Author cannot be empty")
        if not self.html_url:
            raise ValueError("URL cannot be empty")

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "Issue":
        created_at = parse_timestamp(data.get("created_at"))
        if created_at is None:
            raise ValueError(f"Issue #{data.get('number')} has no creation timestamp")
        user = data.get("user") or {}
        return cls(
            number=data["number"],
            created_at=created_at,
            author=user.get("login") or "",
            html_url=data.get("html_url") or "",
            title=data.get("title") or "",
            is_pull_request="pull_request" in data,
        )


@dataclass(frozen=True)
class TimelineEvent:
    """Single entry of an issue timeline."""

    event: str
    created_at: Optional[datetime]
    actor_login: Optional[str]
    actor_type: ActorType

    @property
    def is_human(self) -> bool:
        return self.actor_type is ActorType.USER

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "TimelineEvent":
        actor = data.get("actor") or {}
        return cls(
            event=data.get("event") or "",
            created_at=parse_timestamp(data.get("created_at")),
            actor_login=actor.get("login"),
            actor_type=ActorType.from_api(actor.get("type")),
        )


@dataclass
class IssueOutcome:
    """Result of processing one issue."""

    issue: Issue
    vendor: str
    delay_days: Optional[int]

    def describe(self) -> str:
        if self.delay_days is None:
            return f"{self.issue.html_url} no activity"
        return f"{self.issue.html_url} first activity after {self.delay_days} day(s)"
