"""Configuration management."""

import os
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

import yaml

from spec_stats.core.entities import parse_timestamp


@dataclass
class GitHubConfig:
    """GitHub API settings."""
    api_base: str = "https://api.github.com"
    user_agent: str = "spec-stats"
    per_page: int = 100
    timeout: float = 30.0
    max_retries: int = 5
    initial_retry_delay: float = 2.0
    max_retry_delay: float = 900.0


@dataclass
class ReportConfig:
    """Report scope settings."""
    since: str = "2021-01-01T00:00:00Z"
    vendors: list[str] = field(default_factory=lambda: ["Apple", "Google", "Microsoft", "Mozilla"])
    spec_domain: str = "spec.whatwg.org/"


@dataclass
class SourcesConfig:
    """Remote documents consumed at run start."""
    registry_url: str = "https://w3c.github.io/browser-specs/index.json"
    entities_url: str = "https://raw.githubusercontent.com/whatwg/participant-data/main/entities.json"


@dataclass
class Settings:
    """Application settings."""

    # API token (from environment only)
    github_token: Optional[str] = None

    # Config sections
    github: GitHubConfig = field(default_factory=GitHubConfig)
    report: ReportConfig = field(default_factory=ReportConfig)
    sources: SourcesConfig = field(default_factory=SourcesConfig)

    @property
    def since(self) -> datetime:
        # YAML loads unquoted timestamps as datetime objects
        if isinstance(self.report.since, datetime):
            since = self.report.since
            return since if since.tzinfo else since.replace(tzinfo=timezone.utc)
        since = parse_timestamp(self.report.since)
        if since is None:
            raise ValueError(f"Invalid 'since' timestamp: {self.report.since!r}")
        return since

    @property
    def vendors(self) -> list[str]:
        return self.report.vendors

    @property
    def spec_domain(self) -> str:
        return self.report.spec_domain


def load_config(config_path: Path = Path("config.yaml")) -> dict:
    """Load configuration from YAML file."""
    if not config_path.exists():
        return {}

    with open(config_path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def get_settings(config_path: Path = Path("config.yaml")) -> Settings:
    """Get application settings from YAML config and environment."""
    config = load_config(config_path)

    settings = Settings(
        github_token=os.getenv("GH_TOKEN") or os.getenv("GITHUB_TOKEN"),
    )

    if "github" in config:
        for key, value in config["github"].items():
            setattr(settings.github, key, value)

    if "report" in config:
        for key, value in config["report"].items():
            setattr(settings.report, key, value)

    if "sources" in config:
        for key, value in config["sources"].items():
            setattr(settings.sources, key, value)

    return settings
