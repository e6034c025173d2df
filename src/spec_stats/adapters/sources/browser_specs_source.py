"""browser-specs registry source."""

import httpx

from spec_stats.core import SpecRecord, SpecRegistry


class BrowserSpecsRegistry(SpecRegistry):
    """Fetch the published browser-specs catalogue."""

    def __init__(
        self,
        url: str = "https://w3c.github.io/browser-specs/index.json",
        timeout: float = 30.0,
    ) -> None:
        self.url = url
        self.timeout = timeout

    async def fetch_specs(self) -> list[SpecRecord]:
        """Fetch all specs; entries that are not objects are ignored."""
        async with httpx.AsyncClient(timeout=self.timeout, follow_redirects=True) as client:
            response = await client.get(self.url)
            response.raise_for_status()
            data = response.json()

        return [SpecRecord.from_api(spec) for spec in data if isinstance(spec, dict)]
