"""Centralized tool registry."""

from typing import Any, Dict, List, Optional

from .base import BaseTool
from ..calendar.locator import EventLocator
from ..config.config_schema import CalendarConfig


class ToolRegistry:
    """Registry mapping operation kinds to the tools that execute them."""

    def __init__(self):
        """Initialize empty tool registry."""
        self._tools: Dict[str, BaseTool] = {}

    def register_tool(self, tool: BaseTool) -> None:
        """
        Register a tool in the registry.

        Args:
            tool: Tool instance to register
        """
        self._tools[tool.get_name()] = tool

    def get_tool(self, name: str) -> Optional[BaseTool]:
        """
        Get a tool by name.

        Args:
            name: Tool name (operation kind)

        Returns:
            Tool instance or None if not found
        """
        return self._tools.get(name)

    def get_all_tools(self) -> List[BaseTool]:
        """
        Get all registered tools.

        Returns:
            List of all registered tools
        """
        return list(self._tools.values())

    def get_schemas(self) -> List[Dict[str, Any]]:
        """Function declarations of all tools, for the LLM."""
        return [tool.get_schema() for tool in self._tools.values()]

    def initialize_tools(
        self, config: CalendarConfig, locator: Optional[EventLocator] = None
    ) -> None:
        """
        Register one tool per operation kind.

        Args:
            config: Calendar configuration
            locator: Locator shared with the dispatcher; built from config if omitted
        """
        from .create_event import CreateEventTool
        from .delete_event import DeleteEventTool
        from .find_events import FindEventsTool
        from .list_events import ListEventsTool
        from .update_event import UpdateEventTool

        if locator is None:
            locator = EventLocator(
                max_results=config.search_max_results,
                default_look_ahead_days=config.max_look_ahead_days,
            )

        self.register_tool(ListEventsTool(default_max_results=config.default_max_results))
        self.register_tool(CreateEventTool())
        self.register_tool(UpdateEventTool())
        self.register_tool(DeleteEventTool())
        self.register_tool(FindEventsTool(locator))
