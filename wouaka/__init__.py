"""Wouaka API client and AI provider routing."""

__version__ = "1.0.0"
