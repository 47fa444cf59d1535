"""Shared geometry, task kinds and the base class of the interactive controls."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Iterator, Optional

Listener = Callable[[int, "GuiTask", Any], None]


@dataclass(frozen=True)
class Point:
    """A two-dimensional point or vector."""

    x: float = 0.0
    y: float = 0.0

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y

    def __add__(self, other: "Point") -> "Point":
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Point") -> "Point":
        return Point(self.x - other.x, self.y - other.y)

    def __mul__(self, other) -> "Point":
        if isinstance(other, Point):
            return Point(self.x * other.x, self.y * other.y)
        return Point(self.x * other, self.y * other)

    __rmul__ = __mul__

    def __truediv__(self, other) -> "Point":
        if isinstance(other, Point):
            return Point(self.x / other.x, self.y / other.y)
        return Point(self.x / other, self.y / other)

    def distance(self, other: "Point") -> float:
        """Euclidean distance to another point."""
        return math.hypot(self.x - other.x, self.y - other.y)


class GuiTask(Enum):
    """What kind of value travels with a control message."""

    BOOL = "bool"
    INT = "int"
    FLOAT = "float"
    POINT = "point"
    FLOAT_ARRAY = "float_array"
    STRING = "string"


@dataclass
class Style:
    """Metrics shared by all controls of one interface."""

    param_font_height: int = 12
    head_font_height: int = 14
    point_size: float = 6.0
    char_width: float = 7.0

    def text_width(self, text: str) -> int:
        """Width in pixels that a headline of this text occupies."""
        return int(len(text) * self.char_width + 0.5)


def round_int(value: float) -> int:
    """Add one half and truncate toward zero."""
    return int(value + 0.5)


class Control:
    """A rectangle on screen with an active region that reports changes to a listener."""

    def __init__(self, param_id, name, x, y, style=None, listener: Optional[Listener] = None):
        self.param_id = param_id
        self.name = name or ""
        self.x = x
        self.y = y
        self.style = style if style is not None else Style()
        self.listener = listener

        self.width = 0
        self.height = 0
        self.display = 0
        self.steps = 0
        self.mouse_is_down = False

        self.ctr_x = 0
        self.ctr_y = 0
        self.ctr_width = 0
        self.ctr_height = 0

    @property
    def text_height(self) -> int:
        """Height taken by the control's label, zero when it has none."""
        return self.style.param_font_height if self.name else 0

    @property
    def ctr_right(self) -> float:
        return self.ctr_x + self.ctr_width

    @property
    def ctr_bottom(self) -> float:
        return self.ctr_y + self.ctr_height

    def set_control_region(self, x, y, width, height) -> None:
        """Set the active region, relative to the control's position."""
        self.ctr_x = x
        self.ctr_y = y
        self.ctr_width = width
        self.ctr_height = height

    def mouse_to_local(self, x, y) -> Point:
        """Convert coordinates of the parent into the control's own."""
        return Point(x - self.x, y - self.y)

    def is_point_inside(self, point: Point) -> bool:
        """True when a local point lies within the active region, edges included."""
        return (
            self.ctr_x <= point.x <= self.ctr_right
            and self.ctr_y <= point.y <= self.ctr_bottom
        )

    def mouse_to_fraction(self, point: Point) -> Point:
        """Position of a local point within the active region, clamped to 0..1."""
        fx = (point.x - self.ctr_x) / self.ctr_width if self.ctr_width else 0.0
        fy = (point.y - self.ctr_y) / self.ctr_height if self.ctr_height else 0.0
        return Point(min(max(fx, 0.0), 1.0), min(max(fy, 0.0), 1.0))

    def fraction_to_local(self, fraction: Point) -> Point:
        """Local point at a fraction of the active region."""
        return Point(
            self.ctr_x + fraction.x * self.ctr_width,
            self.ctr_y + fraction.y * self.ctr_height,
        )

    def emit(self, task: GuiTask, value) -> None:
        """Report a value to the listener, if there is one."""
        if self.listener is not None:
            self.listener(self.param_id, task, value)