"""Window geometry and the window settings kept in the configuration file."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path

POS_X_KEY = "CLOCK_WINDOW_POS_X="
POS_Y_KEY = "CLOCK_WINDOW_POS_Y="
SCALE_KEY = "WINDOW_SCALE="
EDIT_MODE_PREFIX = "CLOCK_EDIT_MODE"
EDIT_MODE_KEY = "CLOCK_EDIT_MODE="

BASE_WINDOW_WIDTH = 200
BASE_WINDOW_HEIGHT = 100
SCALE_STEP = 1.1

_LINE_MAX_LEN = 255


@dataclass(frozen=True)
class Rect:
    """A window rectangle in screen coordinates."""

    left: int
    top: int
    right: int
    bottom: int

    @property
    def width(self) -> int:
        return self.right - self.left

    @property
    def height(self) -> int:
        return self.bottom - self.top

    @classmethod
    def from_size(cls, x: int, y: int, width: int, height: int) -> "Rect":
        """Rectangle with its top-left corner at (x, y) and the given size."""
        return cls(x, y, x + width, y + height)

    def moved_to(self, x: int, y: int) -> "Rect":
        """Same size, top-left corner at (x, y)."""
        return Rect.from_size(x, y, self.width, self.height)


@dataclass
class WindowSettings:
    """Position, scale and mode of the clock window."""

    pos_x: int = 100
    pos_y: int = 100
    scale: float = 1.0
    edit_mode: bool = False
    topmost: bool = True


def _atoi(text: str) -> int:
    text = text.lstrip()
    digits = ""
    for index, char in enumerate(text):
        if char.isdigit() or (index == 0 and char in "+-"):
            digits += char
        else:
            break
    try:
        return int(digits)
    except ValueError:
        return 0


def _atof(text: str) -> float:
    text = text.strip()
    for end in range(len(text), 0, -1):
        try:
            return float(text[:end])
        except ValueError:
            continue
    return 0.0


def load_window_settings(config_path: str | os.PathLike[str]) -> WindowSettings:
    """Read position and scale from the configuration; defaults where absent."""
    settings = WindowSettings()
    try:
        with open(config_path, encoding="utf-8", errors="replace") as handle:
            for raw in handle:
                line = raw.rstrip("\n")
                if line.startswith(POS_X_KEY):
                    settings.pos_x = _atoi(line[len(POS_X_KEY):])
                elif line.startswith(POS_Y_KEY):
                    settings.pos_y = _atoi(line[len(POS_Y_KEY):])
                elif line.startswith(SCALE_KEY):
                    settings.scale = _atof(line[len(SCALE_KEY):])
    except FileNotFoundError:
        pass
    return settings


def _edit_mode_text(settings: WindowSettings) -> str:
    return "TRUE" if settings.edit_mode else "FALSE"


def save_window_settings(
    config_path: str | os.PathLike[str], settings: WindowSettings
) -> bool:
    """Write the settings into an existing configuration file.

    Returns False, changing nothing, when the file does not exist.
    """
    path = Path(config_path)
    try:
        text = path.read_text(encoding="utf-8", errors="replace")
    except FileNotFoundError:
        return False

    scale_line = f"{SCALE_KEY}{settings.scale:.2f}\n"
    edit_line = f"{EDIT_MODE_KEY}{_edit_mode_text(settings)}\n"
    has_edit_mode = False
    has_scale = False
    output: list[str] = []

    for line in text.split("\n")[: -1 if text.endswith("\n") else None]:
        head = line[:_LINE_MAX_LEN]
        if head.startswith(POS_X_KEY):
            output.append(f"{POS_X_KEY}{settings.pos_x}\n")
        elif head.startswith(POS_Y_KEY):
            output.append(f"{POS_Y_KEY}{settings.pos_y}\n")
        elif head.startswith(SCALE_KEY):
            output.append(scale_line)
            has_scale = True
        elif head.startswith(EDIT_MODE_PREFIX):
            output.append(edit_line)
            has_edit_mode = True
        else:
            output.append(line + "\n")

    if not has_edit_mode:
        output.append(edit_line)
    if not has_scale:
        output.append(scale_line)

    path.write_text("".join(output), encoding="utf-8")
    return True


def write_config_value(
    config_path: str | os.PathLike[str], key: str, value: object
) -> None:
    """Set ``key=value`` in the configuration, replacing or appending the line."""
    path = Path(config_path)
    prefix = f"{key}="
    entry = f"{prefix}{value}\n"
    try:
        lines = path.read_text(encoding="utf-8", errors="replace").splitlines(
            keepends=True
        )
    except FileNotFoundError:
        lines = []

    found = False
    output: list[str] = []
    for line in lines:
        if line.startswith(prefix):
            output.append(entry)
            found = True
        else:
            output.append(line)
    if not found:
        if output and not output[-1].endswith("\n"):
            output[-1] += "\n"
        output.append(entry)
    path.write_text("".join(output), encoding="utf-8")


def clamp_to_screen(rect: Rect, screen_width: int, screen_height: int) -> Rect:
    """Move ``rect`` so that it lies within the screen, keeping its size."""
    x, y = rect.left, rect.top
    if x + rect.width > screen_width:
        x = screen_width - rect.width
    if y + rect.height > screen_height:
        y = screen_height - rect.height
    x = max(x, 0)
    y = max(y, 0)
    if x == rect.left and y == rect.top:
        return rect
    return rect.moved_to(x, y)


def scale_window(
    rect: Rect, scale: float, delta: int, min_scale: float, max_scale: float
) -> tuple[Rect, float]:
    """Grow (delta > 0) or shrink the window about its centre.

    Returns the new rectangle and scale; both are unchanged when the scale is
    already at its limit.
    """
    new_scale = scale * SCALE_STEP if delta > 0 else scale / SCALE_STEP
    new_scale = min(max(new_scale, min_scale), max_scale)
    if new_scale == scale:
        return rect, scale

    ratio = new_scale / scale
    new_width = int(rect.width * ratio)
    new_height = int(rect.height * ratio)
    new_x = rect.left + int((rect.width - new_width) / 2)
    new_y = rect.top + int((rect.height - new_height) / 2)
    return Rect.from_size(new_x, new_y, new_width, new_height), new_scale


def drag_window(rect: Rect, dx: int, dy: int) -> Rect:
    """Rectangle moved by the mouse offset (dx, dy)."""
    return replace(
        rect,
        left=rect.left + dx,
        top=rect.top + dy,
        right=rect.right + dx,
        bottom=rect.bottom + dy,
    )


def window_size(base_width: int, base_height: int, scale: float) -> tuple[int, int]:
    """Window size for the base size at ``scale``, truncated to whole pixels."""
    return int(base_width * scale), int(base_height * scale)