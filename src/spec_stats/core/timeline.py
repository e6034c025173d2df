"""First response detection and delay computation."""

import math
from collections.abc import AsyncIterable, Iterable
from datetime import datetime
from typing import Optional

from spec_stats.core.entities import Issue, TimelineEvent


SECONDS_PER_DAY = 24 * 3600


def is_interesting(issue: Issue, event: TimelineEvent) -> bool:
    """Check if an event plausibly is a human, non-author reaction to the issue."""
    # Events without a timestamp can't be measured
    if event.created_at is None:
        return False
    # Activity from bots doesn't count
    if not event.is_human:
        return False
    # Activity from the issue creator doesn't count
    if event.actor_login == issue.author:
        return False
    return True


def find_first_interesting_event(issue: Issue, events: Iterable[TimelineEvent]) -> Optional[TimelineEvent]:
    """Return the first interesting event in order, or None when there is none."""
    for event in events:
        if is_interesting(issue, event):
            return event
    return None


async def afind_first_interesting_event(
    issue: Issue, events: AsyncIterable[TimelineEvent]
) -> Optional[TimelineEvent]:
    """Async variant of `find_first_interesting_event`.

    Stops consuming `events` at the first match, so later pages are never fetched.
    """
    async for event in events:
        if is_interesting(issue, event):
            return event
    return None


def compute_delay_days(created_at: datetime, responded_at: datetime) -> Optional[int]:
    """Elapsed whole days between two timestamps, rounding half up.

    Returns None when `responded_at` precedes `created_at`.
    """
    seconds = (responded_at - created_at).total_seconds()
    if seconds < 0:
        return None
    return math.floor(seconds / SECONDS_PER_DAY + 0.5)
