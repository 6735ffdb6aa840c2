"""HTTP surface module."""

from .server import AssistantServer

__all__ = ["AssistantServer"]
