"""Base LLM interface."""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)


@dataclass
class ToolCall:
    """Represents a tool call from the LLM."""

    id: str
    name: str
    arguments: Dict[str, Any]


@dataclass
class LLMResponse:
    """Response from LLM that may contain text and/or tool calls."""

    text: Optional[str] = None
    tool_calls: List[ToolCall] = field(default_factory=list)


class BaseLLM(ABC):
    """Abstract base class for LLM implementations."""

    @abstractmethod
    async def generate(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        tools: Optional[List[Dict[str, Any]]] = None,
        **kwargs,
    ) -> LLMResponse:
        """
        Generate a response from the LLM.

        Args:
            prompt: User prompt
            system_prompt: Optional system prompt
            tools: Optional list of function declarations
                ({"name", "description", "parameters"})
            **kwargs: Additional provider-specific parameters

        Returns:
            LLMResponse with text and/or tool calls, tool calls in the
            order the model emitted them
        """
        pass

    @abstractmethod
    def get_model_name(self) -> str:
        """
        Get the model name being used.

        Returns:
            Model name string
        """
        pass

    async def validate(self) -> None:
        """
        Validate that the LLM is accessible and working.

        Raises:
            Exception: If validation fails
        """
        try:
            await self.generate("Hello", system_prompt="Respond with just 'Hi'.")
            logger.info(f"✓ LLM validation successful: {self.get_model_name()}")
        except Exception as e:
            logger.error(f"✗ LLM validation failed: {e}")
            raise
