"""Source adapters for the specification registry and participant entities."""

from spec_stats.adapters.sources.browser_specs_source import BrowserSpecsRegistry
from spec_stats.adapters.sources.participants_source import ParticipantEntitiesSource

__all__ = ["BrowserSpecsRegistry", "ParticipantEntitiesSource"]
