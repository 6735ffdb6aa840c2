"""Utility modules."""

from .logging import parse_verbosity, setup_logging, strip_verbosity_flags

__all__ = ["parse_verbosity", "setup_logging", "strip_verbosity_flags"]
