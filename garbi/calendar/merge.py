"""Overlay a partial update onto a fetched event."""

from typing import Any, Mapping, Optional, Union

from .models import CalendarEvent, EventDateTime, EventPatch

FALLBACK_TIMEZONE = "UTC"

# Plain fields copied when present in the patch.
_PATCHABLE_FIELDS = ("summary", "description", "location", "color_id")


def _resolve_timezone(
    patch_timezone: Optional[str],
    fallback_timezone: Optional[str],
    existing: Optional[EventDateTime],
) -> str:
    return (
        patch_timezone
        or fallback_timezone
        or (existing.time_zone if existing else None)
        or FALLBACK_TIMEZONE
    )


def merge_for_update(
    existing: CalendarEvent,
    patch: Union[EventPatch, Mapping[str, Any]],
    fallback_timezone: Optional[str] = None,
) -> CalendarEvent:
    """
    Build the full replacement body for an update.

    Args:
        existing: Event as currently stored
        patch: Fields to change; only explicitly present fields apply
        fallback_timezone: Caller's default timezone

    Returns:
        New event with the patch applied; ``id`` and ``etag`` always come
        from ``existing``
    """
    if not isinstance(patch, EventPatch):
        patch = EventPatch.model_validate(dict(patch))

    present = patch.model_fields_set
    merged = existing.model_copy(deep=True)

    for name in _PATCHABLE_FIELDS:
        if name in present:
            setattr(merged, name, getattr(patch, name))
    if "color_id" in present and not patch.color_id:
        # Dropped from the replacement body, so the service resets it
        merged.color_id = None

    if "start_date_time" in present and patch.start_date_time:
        merged.start = EventDateTime(
            date_time=patch.start_date_time,
            time_zone=_resolve_timezone(patch.time_zone, fallback_timezone, existing.start),
        )
    if "end_date_time" in present and patch.end_date_time:
        merged.end = EventDateTime(
            date_time=patch.end_date_time,
            time_zone=_resolve_timezone(patch.time_zone, fallback_timezone, existing.end),
        )

    merged.id = existing.id
    merged.etag = existing.etag
    return merged
