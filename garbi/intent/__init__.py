"""Intent extraction module."""

from .base import ExtractionContext, IntentExtractor
from .llm_extractor import LLMIntentExtractor

__all__ = ["ExtractionContext", "IntentExtractor", "LLMIntentExtractor"]
