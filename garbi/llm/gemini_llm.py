"""Gemini LLM implementation."""

import json
import logging
import re
import uuid
from typing import Any, Dict, List, Optional

import google.genai as genai

from .base import BaseLLM, LLMResponse, ToolCall

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL)


class GeminiLLM(BaseLLM):
    """Gemini LLM implementation for Google Gemini models."""

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.0-flash",
        temperature: float = 0.0,
        max_tokens: int = 2048,
        safety_settings: Optional[list] = None,
    ):
        """
        Initialize Gemini LLM.

        Args:
            api_key: Gemini API key
            model: Model name (e.g., "gemini-2.0-flash")
            temperature: Sampling temperature
            max_tokens: Maximum tokens to generate
            safety_settings: Optional safety settings
        """
        self.model_name = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.safety_settings = safety_settings

        self.client = genai.Client(api_key=api_key)

    async def generate(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        tools: Optional[List[Dict[str, Any]]] = None,
        **kwargs,
    ) -> LLMResponse:
        config: Dict[str, Any] = {
            "temperature": kwargs.get("temperature", self.temperature),
            "max_output_tokens": kwargs.get("max_tokens", self.max_tokens),
        }
        if system_prompt:
            config["system_instruction"] = system_prompt
        if self.safety_settings:
            config["safety_settings"] = self.safety_settings
        if tools:
            config["tools"] = [
                {
                    "function_declarations": [
                        {
                            "name": tool["name"],
                            "description": tool.get("description", ""),
                            "parameters": tool.get("parameters", {}),
                        }
                        for tool in tools
                    ]
                }
            ]

        response = await self.client.aio.models.generate_content(
            model=self.model_name,
            contents=prompt,
            config=config,
        )

        tool_calls: List[ToolCall] = []
        text_parts: List[str] = []
        candidates = getattr(response, "candidates", None) or []
        if candidates and candidates[0].content:
            for part in candidates[0].content.parts or []:
                if getattr(part, "function_call", None):
                    fc = part.function_call
                    tool_calls.append(
                        ToolCall(
                            id=fc.id or str(uuid.uuid4()),
                            name=fc.name,
                            arguments=dict(fc.args) if fc.args else {},
                        )
                    )
                elif getattr(part, "text", None):
                    text_parts.append(part.text)

        text = "".join(text_parts) or None

        # Some models print the call as JSON instead of using function calling
        if not tool_calls and text:
            parsed = self._parse_tool_calls_from_text(text)
            if parsed:
                tool_calls = parsed
                text = None

        logger.debug(f"Gemini response - Text: {text!r}, Tool calls: {len(tool_calls)}")
        return LLMResponse(text=text, tool_calls=tool_calls)

    def _parse_tool_calls_from_text(self, text: str) -> List[ToolCall]:
        """
        Attempt to parse tool calls printed as JSON text.

        Accepts a single ``{"name": ..., "parameters"|"arguments"|"args": {...}}``
        object or a list of them, optionally inside a ```json fence.

        Args:
            text: Text response from the model

        Returns:
            Parsed tool calls, empty if the text is not a tool call
        """
        text = text.strip()
        fenced = _FENCE_RE.match(text)
        if fenced:
            text = fenced.group(1)

        try:
            data = json.loads(text)
        except json.JSONDecodeError:
            return []

        items = data if isinstance(data, list) else [data]
        calls = []
        for item in items:
            if not isinstance(item, dict) or not isinstance(item.get("name"), str):
                return []
            arguments = item.get("parameters", item.get("arguments", item.get("args", {})))
            if isinstance(arguments, str):
                try:
                    arguments = json.loads(arguments)
                except json.JSONDecodeError:
                    return []
            if not isinstance(arguments, dict):
                return []
            calls.append(ToolCall(id=str(uuid.uuid4()), name=item["name"], arguments=arguments))

        if calls:
            logger.debug(f"Parsed {len(calls)} tool call(s) from text")
        return calls

    def get_model_name(self) -> str:
        """Get the model name."""
        return self.model_name
