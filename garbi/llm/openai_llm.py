"""OpenAI LLM implementation."""

import json
import logging
from typing import Any, Dict, List, Optional

from openai import AsyncOpenAI

from .base import BaseLLM, LLMResponse, ToolCall

logger = logging.getLogger(__name__)


class OpenAILLM(BaseLLM):
    """OpenAI LLM implementation for GPT models."""

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        temperature: float = 0.0,
        max_tokens: int = 2048,
        organization_id: Optional[str] = None,
    ):
        """
        Initialize OpenAI LLM.

        Args:
            api_key: OpenAI API key
            model: Model name (e.g., "gpt-4o-mini", "gpt-4o")
            temperature: Sampling temperature
            max_tokens: Maximum tokens to generate
            organization_id: Optional organization ID
        """
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens

        self.client = AsyncOpenAI(
            api_key=api_key,
            organization=organization_id,
        )

    async def generate(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        tools: Optional[List[Dict[str, Any]]] = None,
        **kwargs,
    ) -> LLMResponse:
        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})

        api_params = {
            "model": kwargs.get("model", self.model),
            "messages": messages,
            "temperature": kwargs.get("temperature", self.temperature),
            "max_tokens": kwargs.get("max_tokens", self.max_tokens),
        }
        if tools:
            api_params["tools"] = [
                {"type": "function", "function": tool} for tool in tools
            ]

        response = await self.client.chat.completions.create(**api_params)
        message = response.choices[0].message

        tool_calls = []
        for tc in message.tool_calls or []:
            try:
                arguments = json.loads(tc.function.arguments or "{}")
            except json.JSONDecodeError:
                logger.warning(
                    f"OpenAI returned non-JSON arguments for {tc.function.name}: "
                    f"{tc.function.arguments!r}"
                )
                arguments = {}
            tool_calls.append(
                ToolCall(id=tc.id, name=tc.function.name, arguments=arguments)
            )

        logger.debug(
            f"OpenAI response - Content: {message.content!r}, Tool calls: {len(tool_calls)}"
        )
        return LLMResponse(text=message.content, tool_calls=tool_calls)

    def get_model_name(self) -> str:
        """Get the model name."""
        return self.model
