"""CivicSync client core: assignment board, analytics and backend client."""

__version__ = "0.1.0"
