"""Notification styles, toast geometry and the toast fade animation."""

from __future__ import annotations

from enum import Enum, IntEnum
from typing import Any, Callable

TOAST_MARGIN = 20
TEXT_PADDING = 40
TOAST_TITLE = "Catime"


class NotificationType(IntEnum):
    """How a notification is presented."""

    CATIME = 0
    SYSTEM_MODAL = 1
    OS = 2


class AnimationState(Enum):
    """Phase of the toast window's fade animation."""

    FADE_IN = "fade_in"
    VISIBLE = "visible"
    FADE_OUT = "fade_out"


class ToastAnimation:
    """Opacity and phase of one toast window as it fades in, waits and fades out.

    ``animating`` tells whether the animation timer should be running,
    ``timeout_pending`` whether the auto-close timer is still armed and
    ``closed`` whether the window has finished fading out.
    """

    def __init__(self, max_opacity_percent: int, step: int) -> None:
        if not 0 <= max_opacity_percent <= 100:
            raise ValueError(f"opacity percent out of range: {max_opacity_percent}")
        if step <= 0:
            raise ValueError(f"animation step must be positive: {step}")
        self.max_opacity = (max_opacity_percent * 255) // 100
        self.step = step
        self.opacity = 0
        self.state = AnimationState.FADE_IN
        self.animating = True
        self.timeout_pending = True
        self.closed = False

    def on_animation_tick(self) -> int:
        """Advance the fade by one step and return the new opacity (0-255)."""
        if self.closed:
            return self.opacity
        if self.state is AnimationState.FADE_IN:
            if self.opacity >= self.max_opacity - self.step:
                self.opacity = self.max_opacity
                self.state = AnimationState.VISIBLE
                self.animating = False
            else:
                self.opacity += self.step
        elif self.state is AnimationState.FADE_OUT:
            if self.opacity <= self.step:
                self._close()
            else:
                self.opacity -= self.step
        else:
            self.animating = False
        return self.opacity

    def on_timeout(self) -> None:
        """The display time is over: start fading out if fully shown."""
        self.timeout_pending = False
        if self.state is AnimationState.VISIBLE and not self.closed:
            self._start_fade_out()

    def on_click(self) -> bool:
        """Dismiss early; ignored unless fully shown. Return whether it was taken."""
        if self.state is not AnimationState.VISIBLE or self.closed:
            return False
        self.timeout_pending = False
        self._start_fade_out()
        return True

    def _start_fade_out(self) -> None:
        self.state = AnimationState.FADE_OUT
        self.animating = True

    def _close(self) -> None:
        self.animating = False
        self.timeout_pending = False
        self.closed = True


def notification_width(text_width: int, min_width: int, max_width: int) -> int:
    """Toast width for a message of ``text_width`` pixels, padded and clamped."""
    width = text_width + TEXT_PADDING
    if width < min_width:
        width = min_width
    if width > max_width:
        width = max_width
    return width


def toast_position(
    work_right: int, work_bottom: int, width: int, height: int
) -> tuple[int, int]:
    """Top-left corner placing the toast at the bottom-right of the work area."""
    return work_right - width - TOAST_MARGIN, work_bottom - height - TOAST_MARGIN


def dispatch_notification(
    kind: NotificationType | int,
    message: str,
    toast: Callable[[str], Any],
    modal: Callable[[str], Any],
    tray: Callable[[str], Any],
) -> NotificationType:
    """Show ``message`` in the style ``kind`` names; unknown kinds use the toast.

    Returns the style that was used.
    """
    try:
        style = NotificationType(kind)
    except ValueError:
        style = NotificationType.CATIME
    if style is NotificationType.SYSTEM_MODAL:
        modal(message)
    elif style is NotificationType.OS:
        tray(message)
    else:
        toast(message)
    return style