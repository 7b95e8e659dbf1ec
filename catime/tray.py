"""Text shown by the system tray icon and its balloon notifications."""

from __future__ import annotations

_TIP_SIZE = 128
_VERSION_SIZE = 64
_INFO_SIZE = 256


def tray_tooltip(version: str) -> str:
    """Tooltip naming the application and its version."""
    return f"Catime {version[:_VERSION_SIZE - 1]}"[:_TIP_SIZE - 1]


def balloon_text(message: str | bytes) -> str:
    """Balloon body for ``message``, decoded from UTF-8 and length-limited."""
    if isinstance(message, bytes):
        message = message.decode("utf-8", errors="replace")
    return message[:_INFO_SIZE - 1]