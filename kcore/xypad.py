"""Two-dimensional pads that pick a point within a rectangle of values."""

from __future__ import annotations

import math

from .control import Control, GuiTask, Point


def _divide(numerator: float, denominator: float) -> float:
    """Floating division that yields inf or nan for a zero denominator."""
    if denominator:
        return numerator / denominator
    if numerator == 0 or math.isnan(numerator):
        return math.nan
    return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)


def _as_point(data) -> Point | None:
    """A Point from a Point or an (x, y) pair, or None when data is neither."""
    if isinstance(data, Point):
        return data
    try:
        x, y = data
        return Point(float(x), float(y))
    except (TypeError, ValueError):
        return None


class XYPad(Control):
    """A control whose value follows the mouse in both directions."""

    def __init__(
        self,
        param_id,
        name,
        x,
        y,
        width,
        height,
        minimum,
        maximum,
        value,
        display=0,
        steps=0,
        listener=None,
        style=None,
    ):
        super().__init__(param_id, name, x, y, style, listener)
        text_height = self.text_height
        self.width = width
        self.height = text_height + height
        self.display = display
        self.steps = steps
        self.value = Point()
        self.set_range(minimum, maximum)
        self.set_value(value)
        self.set_control_region(0, text_height, width, height)

    def set_value(self, value) -> None:
        point = _as_point(value)
        if point is None:
            raise TypeError("an XY pad value must be a point")
        self.value = point

    def set_range(self, minimum, maximum) -> None:
        """Set the bounds; the span is the ratio of maximum to minimum per axis."""
        minimum = _as_point(minimum)
        maximum = _as_point(maximum)
        if minimum is None or maximum is None:
            raise TypeError("XY pad bounds must be points")
        self.minimum = minimum
        self.maximum = maximum
        self.delta = Point(
            _divide(maximum.x, minimum.x),
            _divide(maximum.y, minimum.y),
        )

    def update(self, param_id, task, data) -> bool:
        """Take a point from the application; True when the message is ours."""
        if param_id != self.param_id:
            return False
        point = _as_point(data)
        if point is None:
            return False
        self.set_value(point)
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
        return Point(
            _divide(value.x - self.minimum.x, self.delta.x),
            _divide(value.y - self.minimum.y, self.delta.y),
        )

    def fraction_to_value(self, fraction) -> Point:
        fraction = _as_point(fraction)
        return Point(
            self.delta.x * fraction.x + self.minimum.x,
            self.delta.y * fraction.y + self.minimum.y,
        )