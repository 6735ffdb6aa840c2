"""Garbi - natural-language Google Calendar assistant."""

__version__ = "0.1.0"
