"""Plain text summary formatter."""

from typing import Optional

from spec_stats.core import SummaryFormatter


class TextSummaryFormatter(SummaryFormatter):
    """Render delay averages as console lines."""

    def format(
        self,
        averages: dict[str, int],
        total: Optional[int],
        cache_counts: Optional[dict[str, int]] = None,
    ) -> list[str]:
        """Render per-vendor averages, the overall average and optional cache counts."""
        lines = [f"{vendor} — average {avg} day(s)" for vendor, avg in averages.items()]

        if total is not None:
            lines.append(f"Total — average {total} day(s)")

        if cache_counts:
            for vendor, count in sorted(cache_counts.items()):
                lines.append(f"Membership cache: {vendor} {count} user(s)")

        return lines
