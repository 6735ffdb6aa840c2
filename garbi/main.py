"""Main entry point for Garbi."""

import asyncio
import logging
import sys

from .agent.assistant import CalendarAssistant
from .agent.dispatcher import OperationDispatcher
from .calendar.locator import EventLocator
from .calendar.service import google_calendar_factory
from .config.config_loader import load_config
from .config.config_schema import AppConfig
from .intent.llm_extractor import LLMIntentExtractor
from .llm.base import BaseLLM
from .llm.gemini_llm import GeminiLLM
from .llm.ollama_llm import OllamaLLM
from .llm.openai_llm import OpenAILLM
from .tools.registry import ToolRegistry
from .utils.logging import parse_verbosity, setup_logging, strip_verbosity_flags
from .web.server import AssistantServer

logger = logging.getLogger(__name__)


def create_llm(config: AppConfig) -> BaseLLM:
    """
    Create LLM instance based on configuration.

    Args:
        config: Application configuration

    Returns:
        BaseLLM instance
    """
    provider = config.llm.provider.lower()

    if provider == "ollama":
        if not config.llm.ollama:
            raise ValueError("Ollama configuration is required")
        return OllamaLLM(
            model=config.llm.ollama.model,
            base_url=config.llm.ollama.base_url,
            temperature=config.llm.ollama.temperature,
            max_tokens=config.llm.ollama.max_tokens,
            context_window=config.llm.ollama.context_window,
        )

    elif provider == "openai":
        if not config.llm.openai:
            raise ValueError("OpenAI configuration is required")
        return OpenAILLM(
            api_key=config.llm.openai.api_key,
            model=config.llm.openai.model,
            temperature=config.llm.openai.temperature,
            max_tokens=config.llm.openai.max_tokens,
            organization_id=config.llm.openai.organization_id,
        )

    elif provider == "gemini":
        if not config.llm.gemini:
            raise ValueError("Gemini configuration is required")
        return GeminiLLM(
            api_key=config.llm.gemini.api_key,
            model=config.llm.gemini.model,
            temperature=config.llm.gemini.temperature,
            max_tokens=config.llm.gemini.max_tokens,
            safety_settings=config.llm.gemini.safety_settings,
        )

    else:
        raise ValueError(f"Unknown LLM provider: {provider}")


def build_assistant(config: AppConfig, llm: BaseLLM) -> CalendarAssistant:
    """
    Wire tools, locator, dispatcher and extractor into an assistant.

    Args:
        config: Application configuration
        llm: LLM used for intent extraction

    Returns:
        CalendarAssistant ready to handle prompts
    """
    locator = EventLocator(
        max_results=config.calendar.search_max_results,
        default_look_ahead_days=config.calendar.max_look_ahead_days,
    )

    tool_registry = ToolRegistry()
    tool_registry.initialize_tools(config.calendar, locator)

    registered_tools = tool_registry.get_all_tools()
    logger.info(f"  Registered tools ({len(registered_tools)}):")
    for tool in registered_tools:
        logger.info(f"    - {tool.get_name()}: {tool.get_description()}")

    dispatcher = OperationDispatcher(
        tool_registry,
        locator,
        google_calendar_factory(config.calendar.calendar_id),
    )

    preferences = config.agent.preferences
    extractor = LLMIntentExtractor(
        llm,
        tool_registry.get_schemas(),
        assistant_name=preferences.assistant_name,
        language=preferences.language,
    )

    return CalendarAssistant(extractor, dispatcher, default_timezone=preferences.timezone)


async def main():
    """Main entry point."""
    setup_logging(verbosity=parse_verbosity(sys.argv))

    logger.info("=" * 60)
    logger.info("Garbi - Starting")
    logger.info("=" * 60)

    args = strip_verbosity_flags(sys.argv[1:])
    config_path = args[0] if args else None
    logger.info(f"[1/3] Loading configuration from: {config_path or 'default location'}")

    try:
        config = load_config(config_path)
        logger.info("✓ Configuration loaded successfully")
    except Exception as e:
        logger.error(f"✗ Failed to load configuration: {e}")
        sys.exit(1)

    logger.info("[2/3] Initializing LLM")
    logger.info(f"  Provider: {config.llm.provider}")
    llm = create_llm(config)
    logger.info(f"✓ LLM initialized: {llm.get_model_name()}")

    logger.info("  Validating LLM connection...")
    try:
        await llm.validate()
    except Exception as e:
        logger.error(f"✗ LLM validation failed: {e}")
        if config.llm.provider.lower() == "ollama":
            logger.error(f"    - Is Ollama running at {config.llm.ollama.base_url}?")
            logger.error(f"  Run: ollama pull {config.llm.ollama.model} (to install the model)")
        else:
            logger.error("    - Check that the API key is valid and the model is accessible")
        sys.exit(1)

    logger.info("[3/3] Initializing assistant")
    assistant = build_assistant(config, llm)
    logger.info(f"  Calendar: {config.calendar.calendar_id}")
    logger.info(f"  Timezone: {config.agent.preferences.timezone}")
    logger.info(f"  Language: {config.agent.preferences.language}")
    logger.info("✓ Assistant ready")

    server = AssistantServer(assistant, host=config.server.host, port=config.server.port)
    logger.info("=" * 60)
    logger.info(f"✓ SYSTEM READY - Listening on {server.get_url()}")
    logger.info("=" * 60)
    try:
        await server.start()
    finally:
        await server.stop()
        logger.info("✓ Garbi shutdown complete")


if __name__ == "__main__":
    asyncio.run(main())
