"""Standards-body participant entities source."""

import httpx

from spec_stats.core import ParticipantDirectory, VendorEntity


class ParticipantEntitiesSource(ParticipantDirectory):
    """Fetch participant entities with their GitHub organizations."""

    def __init__(
        self,
        url: str = "https://raw.githubusercontent.com/whatwg/participant-data/main/entities.json",
        timeout: float = 30.0,
    ) -> None:
        self.url = url
        self.timeout = timeout

    async def fetch_entities(self) -> list[VendorEntity]:
        """Fetch entities, skipping records without a display name."""
        async with httpx.AsyncClient(timeout=self.timeout, follow_redirects=True) as client:
            response = await client.get(self.url)
            response.raise_for_status()
            data = response.json()

        entities: list[VendorEntity] = []
        for record in data:
            if not isinstance(record, dict):
                continue
            entity = VendorEntity.from_api(record)
            if entity:
                entities.append(entity)
        return entities
