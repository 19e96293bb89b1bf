"""Helpers for human-readable log messages."""

from __future__ import annotations

from pyrx9.models.operational import ErrorStateId, OperationalError


def format_seconds(seconds: int | float) -> str:
    """Format a duration as ``45s``, ``2m 05s`` or ``1h 02m 03s``."""
    total = max(int(round(seconds)), 0)
    hours, remainder = divmod(total, 3600)
    minutes, secs = divmod(remainder, 60)
    if hours:
        return f"{hours}h {minutes:02d}m {secs:02d}s"
    if minutes:
        return f"{minutes}m {secs:02d}s"
    return f"{secs}s"


def describe_operational_error(error: OperationalError) -> str:
    """Describe an error descriptor, e.g. ``STUCK (65) [Wheel]: Left wheel blocked``."""
    name = ErrorStateId.name_for(error.error_state_id)
    text = f"{name} ({error.error_state_id})" if name else str(error.error_state_id)
    if error.error_state_label:
        text += f" [{error.error_state_label}]"
    if error.error_state_details:
        text += f": {error.error_state_details}"
    return text
