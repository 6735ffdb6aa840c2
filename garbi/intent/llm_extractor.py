"""Intent extractor backed by an LLM with function calling."""

import logging
from typing import Any, Dict, List, Union

from .base import ExtractionContext, IntentExtractor
from .prompts import get_system_prompt
from ..llm.base import BaseLLM

logger = logging.getLogger(__name__)


class LLMIntentExtractor(IntentExtractor):
    """Maps the model's function calls to raw operation requests."""

    def __init__(
        self,
        llm: BaseLLM,
        tool_schemas: List[Dict[str, Any]],
        assistant_name: str = "Garbi",
        language: str = "en",
    ):
        """
        Initialize extractor.

        Args:
            llm: LLM used for extraction
            tool_schemas: Function declarations, one per operation kind
            assistant_name: Name the assistant introduces itself with
            language: Preferred reply language for plain-text answers
        """
        self.llm = llm
        self.tool_schemas = tool_schemas
        self.assistant_name = assistant_name
        self.language = language

    async def extract(
        self, prompt: str, context: ExtractionContext
    ) -> Union[List[Dict[str, Any]], str]:
        system_prompt = get_system_prompt(
            context,
            tool_names=[schema["name"] for schema in self.tool_schemas],
            assistant_name=self.assistant_name,
            language=self.language,
        )

        logger.debug(f"[intent] Extracting from prompt: {prompt!r}")
        response = await self.llm.generate(
            prompt, system_prompt=system_prompt, tools=self.tool_schemas
        )

        if not response.tool_calls:
            logger.info("[intent] No function calls, returning text response")
            return response.text or ""

        requests = [{**call.arguments, "kind": call.name} for call in response.tool_calls]
        logger.info(f"[intent] Extracted {len(requests)} request(s): {[r['kind'] for r in requests]}")
        return requests
