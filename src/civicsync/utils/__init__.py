"""Utility helpers."""

from civicsync.utils.logging import configure_logging, get_logger
from civicsync.utils.numbers import fixed, percentage, round_half_up
from civicsync.utils.time import month_key, parse_created_at

__all__ = [
    "configure_logging",
    "get_logger",
    "fixed",
    "percentage",
    "round_half_up",
    "month_key",
    "parse_created_at",
]
