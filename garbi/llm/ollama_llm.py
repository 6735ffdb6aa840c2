"""Ollama LLM implementation."""

import logging
import uuid
from typing import Any, Dict, List, Optional

import ollama

from .base import BaseLLM, LLMResponse, ToolCall

logger = logging.getLogger(__name__)


class OllamaLLM(BaseLLM):
    """Ollama LLM implementation for local models."""

    def __init__(
        self,
        model: str,
        base_url: str = "http://localhost:11434",
        temperature: float = 0.0,
        max_tokens: int = 2048,
        context_window: Optional[int] = None,
    ):
        """
        Initialize Ollama LLM.

        Args:
            model: Model name (e.g., "llama3.1", "qwen2.5")
            base_url: Ollama server base URL
            temperature: Sampling temperature
            max_tokens: Maximum tokens to generate
            context_window: Context window size
        """
        self.model = model
        self.base_url = base_url
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.context_window = context_window

        self.client = ollama.AsyncClient(host=base_url)

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

        options: Dict[str, Any] = {
            "temperature": kwargs.get("temperature", self.temperature),
            "num_predict": kwargs.get("max_tokens", self.max_tokens),
        }
        if self.context_window:
            options["num_ctx"] = self.context_window

        api_params: Dict[str, Any] = {
            "model": self.model,
            "messages": messages,
            "options": options,
        }
        if tools:
            api_params["tools"] = [
                {
                    "type": "function",
                    "function": {
                        "name": tool["name"],
                        "description": tool.get("description", ""),
                        "parameters": tool.get("parameters", {}),
                    },
                }
                for tool in tools
            ]

        logger.debug(
            f"Ollama request - Model: {self.model}, "
            f"Messages: {len(messages)}, Tools: {len(tools) if tools else 0}"
        )

        try:
            response = await self.client.chat(**api_params)
        except Exception as e:
            logger.error(
                f"Ollama LLM generation failed - Model: {self.model}, "
                f"Base URL: {self.base_url}, Error: {e}",
                exc_info=True,
            )
            raise

        message = response["message"]
        tool_calls = []
        for tc in message.get("tool_calls") or []:
            func = tc["function"]
            tool_calls.append(
                ToolCall(
                    id=str(uuid.uuid4()),
                    name=func["name"],
                    arguments=dict(func.get("arguments") or {}),
                )
            )

        logger.debug(
            f"Ollama response - Content: {message.get('content')!r}, "
            f"Tool calls: {len(tool_calls)}"
        )
        return LLMResponse(text=message.get("content") or None, tool_calls=tool_calls)

    def get_model_name(self) -> str:
        """Get the model name."""
        return self.model
