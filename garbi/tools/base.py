"""Base tool interface."""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Type

from pydantic import BaseModel

from ..calendar.context import DispatchContext
from ..calendar.results import OperationResult


def _simplify_property(schema: Dict[str, Any]) -> Dict[str, Any]:
    """Reduce a pydantic property schema to the subset function calling accepts."""
    simplified = schema
    # Optional fields come out as anyOf [T, null]
    if "anyOf" in schema:
        non_null = [o for o in schema["anyOf"] if o.get("type") != "null"]
        simplified = non_null[0] if non_null else {}

    result = {"type": simplified.get("type", "string")}
    if "description" in schema:
        result["description"] = schema["description"]
    return result


class BaseTool(ABC):
    """One calendar operation the model can call.

    Each tool owns the request model of its operation kind: the model's
    JSON schema becomes the function declaration offered to the LLM, and
    the dispatcher hands validated instances of it to :meth:`execute`.
    """

    request_model: Type[BaseModel]

    def __init__(self, name: str, description: str):
        """
        Initialize tool.

        Args:
            name: Tool name, equal to the operation kind it executes
            description: Tool description shown to the model
        """
        self.name = name
        self.description = description

    @abstractmethod
    async def execute(self, context: DispatchContext, request: Any) -> OperationResult:
        """
        Execute one validated request.

        Args:
            context: Per-dispatch context (credential, service, timezone)
            request: Instance of ``request_model``

        Returns:
            Result of the operation
        """
        pass

    def validate_request(self, request: Any, timezone: Optional[str]) -> None:
        """
        Check a request before any network call is made.

        Args:
            request: Instance of ``request_model``
            timezone: Caller's default timezone

        Raises:
            ValidationError: If the request cannot be executed
        """

    def get_schema(self) -> Dict[str, Any]:
        """
        Generate the function declaration from the request model.

        Returns:
            Dictionary with name, description and JSON-schema parameters
        """
        json_schema = self.request_model.model_json_schema(by_alias=True)
        properties = {
            name: _simplify_property(prop)
            for name, prop in json_schema.get("properties", {}).items()
            if name != "kind"
        }
        required = [r for r in json_schema.get("required", []) if r != "kind"]

        parameters: Dict[str, Any] = {"type": "object", "properties": properties}
        if required:
            parameters["required"] = required

        return {
            "name": self.name,
            "description": self.description,
            "parameters": parameters,
        }

    def get_name(self) -> str:
        """Get tool name."""
        return self.name

    def get_description(self) -> str:
        """Get tool description."""
        return self.description
