"""Summary formatting adapters."""

from spec_stats.adapters.summary.text_summary import TextSummaryFormatter

__all__ = ["TextSummaryFormatter"]
