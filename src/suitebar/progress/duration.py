#
# src/suitebar/progress/duration.py
#
"""
Elapsed-time formatting for the end-of-run summary.
"""

MS_PER_SECOND = 1000
SECONDS_PER_MINUTE = 60
SECONDS_PER_HOUR = 3600


def format_duration(elapsed_ms: int) -> str:
    """
    Formats an elapsed time in milliseconds as a human readable string.

    The fractional seconds are always three zero-padded digits. Minute and
    hour fields only appear once the duration reaches them:

        >>> format_duration(500)
        '0.500s'
        >>> format_duration(90000)
        '1m 30.000s'
        >>> format_duration(3661000)
        '1h 1m 1.000s'

    Args:
        elapsed_ms: Non-negative elapsed time in milliseconds. Floats are
            truncated.

    Returns:
        The formatted duration.
    """
    elapsed_ms = int(elapsed_ms)
    total_seconds, millis = divmod(elapsed_ms, MS_PER_SECOND)

    if total_seconds >= SECONDS_PER_HOUR:
        hours, remainder = divmod(total_seconds, SECONDS_PER_HOUR)
        minutes, seconds = divmod(remainder, SECONDS_PER_MINUTE)
        return f"{hours}h {minutes}m {seconds}.{millis:03d}s"

    if total_seconds >= SECONDS_PER_MINUTE:
        minutes, seconds = divmod(total_seconds, SECONDS_PER_MINUTE)
        return f"{minutes}m {seconds}.{millis:03d}s"

    return f"{total_seconds}.{millis:03d}s"


# 🔼⚙️
