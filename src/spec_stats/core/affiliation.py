"""Vendor affiliation resolution with a per-run membership cache."""

from collections import Counter
from typing import Iterable, Optional

from spec_stats.console import debug
from spec_stats.core.entities import UNAFFILIATED, VendorEntity
from spec_stats.core.interfaces import IssueTracker


def build_vendor_map(entities: Iterable[VendorEntity], vendors: list[str]) -> dict[str, str]:
    """Map each vendor to the GitHub org of the first entity whose name starts with it."""
    entities = list(entities)
    vendor_map: dict[str, str] = {}
    for vendor in vendors:
        for entity in entities:
            if entity.name.startswith(vendor):
                if entity.github_org:
                    vendor_map[vendor] = entity.github_org
                break
    return vendor_map


class MembershipCache:
    """Resolved vendor per user login, kept for the duration of one run."""

    def __init__(self) -> None:
        self._entries: dict[str, str] = {}

    def get(self, login: str) -> Optional[str]:
        return self._entries.get(login)

    def set(self, login: str, vendor: str) -> None:
        self._entries[login] = vendor

    def __contains__(self, login: str) -> bool:
        return login in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def get_stats(self) -> dict[str, int]:
        """Count cached users per vendor (including the unaffiliated sentinel)."""
        return dict(Counter(self._entries.values()))


class AffiliationResolver:
    """Resolve user logins to browser vendors by probing public org membership."""

    def __init__(
        self,
        tracker: IssueTracker,
        vendor_orgs: dict[str, str],
        cache: Optional[MembershipCache] = None,
        verbose: bool = False,
    ) -> None:
        """Initialize resolver.

        Args:
            tracker: Issue tracker used for membership checks.
            vendor_orgs: Vendor name to GitHub org, checked in insertion order.
            cache: Membership cache; a fresh one is created if omitted.
            verbose: Print a debug line for every checked user.
        """
        self.tracker = tracker
        self.vendor_orgs = vendor_orgs
        self.cache = cache if cache is not None else MembershipCache()
        self.verbose = verbose

    async def resolve(self, login: str) -> str:
        """Return the vendor the user belongs to, or `UNAFFILIATED`."""
        cached = self.cache.get(login)
        if cached is not None:
            return cached

        vendor = await self._lookup(login)
        self.cache.set(login, vendor)
        return vendor

    async def _lookup(self, login: str) -> str:
        for vendor, org in self.vendor_orgs.items():
            if await self.tracker.is_public_member(org, login):
                debug(f"{login} is a member of {org}", self.verbose)
                return vendor
        debug(f"{login} is not a member of a browser vendor", self.verbose)
        return UNAFFILIATED
