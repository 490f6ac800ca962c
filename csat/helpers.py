# CSAT Relay Helpers
# Utility functions used across the relay

import math
from datetime import datetime, timezone


def utc_timestamp(now=None):
    """ISO-8601 UTC timestamp with milliseconds and a 'Z' suffix.

    Args:
        now: Optional aware datetime to format (defaults to the current time)

    Returns:
        String like '2024-05-01T09:30:00.123Z'
    """
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).isoformat(timespec='milliseconds').replace('+00:00', 'Z')


def as_text(value):
    """Render a value for interpolation into comment text (None -> '')"""
    if value is None:
        return ''
    return str(value)


def is_present(value):
    """True for values a form would consider filled in"""
    if value is None:
        return False
    if isinstance(value, str):
        return value != ''
    if isinstance(value, bool):
        return value
    if isinstance(value, float) and not math.isfinite(value):
        return False
    if isinstance(value, (int, float)):
        return value != 0
    return bool(value)


def clean_id(value):
    """Normalise a JSON identifier.

    Integral floats (4821.0) become ints, NaN/Infinity become None.
    Everything else is returned unchanged.
    """
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        if value.is_integer():
            return int(value)
    return value
