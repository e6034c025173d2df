"""CLI entry point for spec-stats."""

import asyncio
import traceback
from pathlib import Path
from typing import Optional

import typer

from spec_stats.adapters.github import GitHubClient, GitHubError
from spec_stats.adapters.sources import BrowserSpecsRegistry, ParticipantEntitiesSource
from spec_stats.adapters.summary import TextSummaryFormatter
from spec_stats.config import Settings, get_settings
from spec_stats.console import warn
from spec_stats.use_cases import DelayReport, DelayReportService


def main(
    config: Path = typer.Option(Path("config.yaml"), "--config", help="Path to YAML config"),
    since: Optional[str] = typer.Option(None, "--since", help="Only issues updated since this ISO 8601 timestamp"),
    spec_domain: Optional[str] = typer.Option(
        None, "--spec-domain", help="Only specs published under this domain suffix (empty disables)"
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Print membership checks to stderr"),
    cache_stats: bool = typer.Option(False, "--cache-stats", help="Report membership cache counts"),
) -> None:
    """Report how long vendor-filed spec issues wait for a first response."""
    settings = get_settings(config)
    if since is not None:
        settings.report.since = since
    if spec_domain is not None:
        settings.report.spec_domain = spec_domain

    if not settings.github_token:
        warn("GH_TOKEN not set, GitHub requests will use the anonymous rate limit")

    try:
        asyncio.run(async_run(settings, verbose, cache_stats))
    except GitHubError as e:
        warn(str(e))
        raise typer.Exit(code=1)
    except Exception:
        traceback.print_exc()
        raise typer.Exit(code=1)


def app() -> None:
    """CLI entry point."""
    typer.run(main)


def build_service(settings: Settings, verbose: bool = False, cache_stats: bool = False) -> DelayReportService:
    return DelayReportService(
        registry=BrowserSpecsRegistry(settings.sources.registry_url, timeout=settings.github.timeout),
        participants=ParticipantEntitiesSource(settings.sources.entities_url, timeout=settings.github.timeout),
        tracker=GitHubClient.from_settings(settings),
        formatter=TextSummaryFormatter(),
        since=settings.since,
        vendors=settings.vendors,
        spec_domain=settings.spec_domain,
        verbose=verbose,
        show_cache_stats=cache_stats,
    )


async def async_run(settings: Settings, verbose: bool, cache_stats: bool) -> DelayReport:
    """Async implementation of the report."""
    service = build_service(settings, verbose, cache_stats)
    return await service.run()


if __name__ == "__main__":
    app()
