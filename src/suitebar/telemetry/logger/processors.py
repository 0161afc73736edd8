# src/suitebar/telemetry/logger/processors.py

"""
Custom structlog processors used by suitebar's logging pipeline.
"""

import logging
from typing import Any

from structlog.typing import EventDict, WrappedLogger

LOG_EMOJIS: dict[int | str, str] = {
    logging.DEBUG: "🐛",
    logging.INFO: "ℹ️",
    logging.WARNING: "⚠️",
    logging.ERROR: "❌",
    logging.CRITICAL: "💥",
    "load": "📄",
    "run": "🏃",
    "suite": "🧪",
    "fail": "🚫",
    "time": "⏱️",
    "success": "🎉",
}

# Keys that only steer processors and must not reach the renderer.
_INTERNAL_KEYS = ("emoji_key",)


def add_emoji_processor(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Prefix the event with an emoji chosen by `emoji_key` or by log level."""
    emoji_key: Any = event_dict.get("emoji_key")
    emoji = LOG_EMOJIS.get(emoji_key) if emoji_key else None
    if emoji is None:
        level = logging.getLevelName(method_name.upper())
        emoji = LOG_EMOJIS.get(level) if isinstance(level, int) else None
    event = event_dict.get("event")
    if emoji and isinstance(event, str):
        event_dict["event"] = f"{emoji} {event}"
    return event_dict


def remove_extra_keys_processor(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    for key in _INTERNAL_KEYS:
        event_dict.pop(key, None)
    return event_dict


# 🔼⚙️
