"""Scopes that plot a buffer of samples and let the user pick one."""

from __future__ import annotations

import math

from .control import Control, GuiTask, Point


def _divide(numerator: float, denominator: float) -> float:
    """Floating division that yields inf or nan for a zero denominator."""
    if denominator:
        return numerator / denominator
    if numerator == 0 or math.isnan(numerator):
        return math.nan
    return math.copysign(math.inf, numerator)


def _as_point(data) -> Point:
    if isinstance(data, Point):
        return data
    try:
        x, y = data
    except (TypeError, ValueError):
        raise TypeError("a scope value must be a point") from None
    return Point(float(x), float(y))


class Scope(Control):
    """A sample buffer shown as a curve; the value is a sample index and level."""

    def __init__(
        self,
        param_id,
        name,
        x,
        y,
        width,
        height,
        length,
        value,
        display=0,
        listener=None,
        style=None,
    ):
        super().__init__(param_id, name, x, y, style, listener)
        length = int(length)
        if length < 0:
            raise ValueError("scope length must not be negative")
        text_height = self.text_height
        self.width = width
        self.height = text_height + height
        self.display = display
        self.value = Point()
        self.set_value(value)
        self.set_control_region(0, text_height, width, height)

        self.buffer: list[float] = [0.0] * length
        self.emit(GuiTask.FLOAT_ARRAY, self.buffer)

    @property
    def buffer_length(self) -> int:
        return len(self.buffer)

    def set_value(self, value) -> None:
        self.value = _as_point(value)

    def update(self, param_id, task, data) -> bool:
        """Take a position or a point from the application; True when ours."""
        if param_id != self.param_id:
            return False
        if task == GuiTask.FLOAT:
            fraction = min(max(float(data), 0.0), 1.0)
            self.set_value(Point(fraction * self.buffer_length, self.value.y))
        elif task == GuiTask.POINT:
            self.set_value(data)
        return True

    def mouse_dragged(self, x, y, button) -> bool:
        if self.mouse_is_down:
            value = self.fraction_to_value(self.mouse_to_fraction(self.mouse_to_local(x, y)))
            if value != self.value:
                self.set_value(value)
                self.emit(GuiTask.POINT, self.value)
        return self.mouse_is_down

    def mouse_pressed(self, x, y, button) -> bool:
        self.mouse_is_down = self.is_point_inside(self.mouse_to_local(x, y))
        if self.mouse_is_down:
            self.mouse_dragged(x, y, button)
        return self.mouse_is_down

    def mouse_released(self, x, y, button) -> bool:
        handled = self.mouse_is_down
        self.mouse_is_down = False
        return handled

    def build_from_xml(self, element=None) -> None:
        """Announce the restored value to the listener."""
        self.emit(GuiTask.POINT, self.value)

    def value_to_fraction(self, value) -> Point:
        value = _as_point(value)
        return Point(_divide(value.x, self.buffer_length), value.y)

    def fraction_to_value(self, fraction) -> Point:
        fraction = _as_point(fraction)
        return Point(fraction.x * self.buffer_length, fraction.y)