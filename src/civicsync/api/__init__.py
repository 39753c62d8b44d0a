"""Backend API package."""

from civicsync.api.client import ReportsClient

__all__ = ["ReportsClient"]
