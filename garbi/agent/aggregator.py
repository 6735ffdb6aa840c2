"""Shape per-request results into the caller-facing response."""

from typing import Any, Dict, List, Sequence, Union

from ..calendar.results import OperationResult


def normalize(
    results: Sequence[OperationResult],
) -> Union[OperationResult, List[OperationResult]]:
    """
    Unwrap a single result; leave any other batch as an ordered list.

    No deduplication, filtering or reordering happens here.
    """
    if len(results) == 1:
        return results[0]
    return results if isinstance(results, list) else list(results)


def to_payload(
    normalized: Union[OperationResult, Sequence[OperationResult]],
) -> Union[Dict[str, Any], List[Dict[str, Any]]]:
    """Convert normalized results to JSON-ready dicts."""
    if isinstance(normalized, (list, tuple)):
        return [result.to_dict() for result in normalized]
    return normalized.to_dict()
