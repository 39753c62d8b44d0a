"""AI description suggestions for new reports."""

from civicsync.suggest.gemini import DescriptionSuggester

__all__ = ["DescriptionSuggester"]
