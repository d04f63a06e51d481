"""Small shared helpers."""

import uuid


def generate_id() -> str:
    """Generate a unique record identifier."""
    return str(uuid.uuid4())


def format_duration(minutes: int) -> str:
    """
    Format a duration in minutes for display.

    Examples: 45 -> "45 min", 60 -> "1h", 90 -> "1h 30min"
    """
    if minutes < 60:
        return f"{minutes} min"
    hours, mins = divmod(minutes, 60)
    if mins == 0:
        return f"{hours}h"
    return f"{hours}h {mins}min"
