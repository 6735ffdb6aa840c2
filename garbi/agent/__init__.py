"""Agent module: dispatch of operation requests and the assistant facade."""

from .aggregator import normalize, to_payload
from .assistant import CalendarAssistant
from .dispatcher import ExecutionPlan, OperationDispatcher, needs_resolution

__all__ = [
    "normalize",
    "to_payload",
    "CalendarAssistant",
    "ExecutionPlan",
    "OperationDispatcher",
    "needs_resolution",
]
