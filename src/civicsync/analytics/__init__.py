"""Analytics derivations over report lists."""

from civicsync.analytics.aggregator import build_snapshot, summarize

__all__ = ["build_snapshot", "summarize"]
