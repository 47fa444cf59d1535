"""Horizontal sliders that pick a number within a range."""

from __future__ import annotations

from .control import Control, GuiTask, round_int


class Slider(Control):
    """A control whose value follows the horizontal mouse position."""

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
        self.value = 0.0
        self.set_range(minimum, maximum)
        self.set_value(value)
        self.set_control_region(0, text_height, width, height)

    def _snap(self, fraction: float) -> float:
        steps = float(self.steps) - 1
        return round_int(fraction * steps) / steps

    def set_value(self, value) -> None:
        """Set the value, snapped to the nearest step when steps are used."""
        if self.steps > 1:
            value = self.minimum + self.delta * self._snap(self.value_to_fraction(value))
        self.value = value

    def set_range(self, minimum, maximum) -> None:
        self.minimum = minimum
        self.maximum = maximum
        self.delta = maximum - minimum

    def _coerce(self, data) -> float:
        # Values arriving from the application are whole numbers here.
        return float(int(data))

    def update(self, param_id, task, data) -> bool:
        """Take a value from the application; True when the message is ours."""
        if param_id != self.param_id:
            return False
        if task == GuiTask.FLOAT:
            self.set_value(self._coerce(data))
        return True

    def mouse_dragged(self, x, y, button) -> bool:
        if self.mouse_is_down:
            fraction = self.mouse_to_fraction(self.mouse_to_local(x, y)).x
            value = self.fraction_to_value(fraction)
            if value != self.value:
                self.set_value(value)
                self.emit(GuiTask.FLOAT, self.value)
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
        self.emit(GuiTask.FLOAT, self.value)

    def value_to_fraction(self, value) -> float:
        return (value - self.minimum) / self.delta

    def fraction_to_value(self, fraction) -> float:
        return self.delta * fraction + self.minimum


class Radar(Slider):
    """A slider that takes fractional values from the application unchanged."""

    def set_value(self, value) -> None:
        """Set the value, snapped to the nearest step when steps are used."""
        if self.steps > 1:
            steps = float(self.steps) - 1
            slice_ = int(self.value_to_fraction(value) * steps + 0.5) / steps
            value = self.minimum + self.delta * slice_
        self.value = value

    def _coerce(self, data) -> float:
        return float(data)