"""Tool system module."""

from .base import BaseTool
from .registry import ToolRegistry

__all__ = ["BaseTool", "ToolRegistry"]
