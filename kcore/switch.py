"""Switches that choose one whole number out of a small range."""

from __future__ import annotations

from .control import Control, GuiTask, round_int


class Switch(Control):
    """A row of cells, one per value from minimum to maximum."""

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
        labels=None,
        listener=None,
        style=None,
    ):
        super().__init__(param_id, name, x, y, style, listener)
        text_height = self.text_height
        self.width = width
        self.height = text_height + height
        self.steps = (maximum - minimum) + 1
        self.labels: list[str] = []
        if labels is not None:
            labels = list(labels)
            if len(labels) < self.steps:
                raise ValueError(f"expected {self.steps} labels, got {len(labels)}")
            self.labels = [str(label) for label in labels[: self.steps]]
        self.value = 0
        self.set_range(minimum, maximum)
        self.set_value(value)
        self.set_control_region(0, text_height, width, height)

    def set_value(self, value) -> None:
        self.value = value

    def set_range(self, minimum, maximum) -> None:
        self.minimum = minimum
        self.maximum = maximum
        self.delta = maximum - minimum

    def update(self, param_id, task, data) -> bool:
        """Take a value from the application; True when the message is ours."""
        if param_id != self.param_id:
            return False
        if task == GuiTask.INT:
            self.set_value(int(data))
        return True

    def label(self) -> str:
        """Text shown for the current value."""
        if self.labels:
            return self.labels[self.value - self.minimum]
        return str(self.value)

    def mouse_dragged(self, x, y, button) -> bool:
        if self.mouse_is_down:
            fraction = self.mouse_to_fraction(self.mouse_to_local(x, y)).x
            value = self.fraction_to_value(fraction)
            if value != self.value:
                self.set_value(value)
                self.emit(GuiTask.INT, self.value)
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
        """Read labels from STRING children of the element, then announce the value."""
        strings = element.findall("STRING") if element is not None else []
        if strings:
            self.labels = []
            for entry in strings:
                try:
                    number = int((entry.findtext("VALUE") or "0").strip())
                except ValueError:
                    number = 0
                text = entry.findtext("TEXT")
                self.labels.append(text if text is not None else str(number))
        self.emit(GuiTask.INT, self.value)

    def fraction_to_value(self, fraction) -> int:
        return round_int(self.delta * fraction + self.minimum)