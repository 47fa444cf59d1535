"""Panels that stack controls vertically and route messages and mouse events to them."""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET

from .control import Control, GuiTask, Point
from .scope import Scope
from .slider import Slider
from .switch import Switch
from .xypad import XYPad

_LEADING_NUMBER = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def _int_value(element: ET.Element, tag: str, default: int = 0) -> int:
    text = element.findtext(tag)
    if text is None:
        return default
    match = _LEADING_NUMBER.match(text)
    return int(float(match.group(1))) if match else default


def _float_value(element: ET.Element, tag: str, default: float = 0.0) -> float:
    text = element.findtext(tag)
    if text is None:
        return default
    match = _LEADING_NUMBER.match(text)
    return float(match.group(1)) if match else default


def _text_value(element: ET.Element, tag: str, default: str = "") -> str:
    text = element.findtext(tag)
    return text if text is not None else default


class Panel(Control):
    """A framed box that lays out its controls one below the other."""

    def __init__(self, param_id, name, x, y, border, spacing, listener=None, style=None):
        super().__init__(param_id, name, x, y, style, listener)
        self.border = border
        self.spacing = spacing
        self.objects: list[Control] = []
        text_height = 2 * border if not self.name else 2 * border + self.style.head_font_height
        self.adjust_to_new_content(self.style.text_width(self.name), text_height)

    def update(self, param_id, task, data) -> bool:
        """Pass a message to the children until one of them takes it."""
        return any(child.update(param_id, task, data) for child in self.objects)

    def mouse_dragged(self, x, y, button) -> bool:
        if not self.mouse_is_down:
            return False
        inside = self.mouse_to_local(x, y)
        return any(child.mouse_dragged(inside.x, inside.y, button) for child in self.objects)

    def mouse_pressed(self, x, y, button) -> bool:
        handled = False
        inside = self.mouse_to_local(x, y)
        if self.is_point_inside(inside):
            handled = any(
                child.mouse_pressed(inside.x, inside.y, button) for child in self.objects
            )
            self.mouse_is_down = True
        return handled

    def mouse_released(self, x, y, button) -> bool:
        inside = self.mouse_to_local(x, y)
        handled = any(child.mouse_released(inside.x, inside.y, button) for child in self.objects)
        self.mouse_is_down = False
        return handled

    def _offset(self) -> int:
        return 0 if not self.objects and not self.name else self.spacing

    def _next_position(self, offset: int) -> Point:
        return Point(self.border, self.height - self.border + offset)

    def _append(self, child: Control, offset: int) -> Control:
        self.objects.append(child)
        self.adjust_to_new_content(child.width, child.height + offset)
        return child

    def add_slider(self, param_id, name, width, height, minimum, maximum, value, display=0, steps=0):
        offset = self._offset()
        pos = self._next_position(offset)
        slider = Slider(
            param_id, name, pos.x, pos.y, width, height, minimum, maximum, value,
            display, steps, self.listener, self.style,
        )
        return self._append(slider, offset)

    def add_xy_pad(self, param_id, name, width, height, minimum, maximum, value, display=0, steps=0):
        offset = self._offset()
        pos = self._next_position(offset)
        pad = XYPad(
            param_id, name, pos.x, pos.y, width, height, minimum, maximum, value,
            display, steps, self.listener, self.style,
        )
        return self._append(pad, offset)

    def add_scope(self, param_id, name, width, height, length, value, display=0):
        offset = self._offset()
        pos = self._next_position(offset)
        scope = Scope(
            param_id, name, pos.x, pos.y, width, height, length, value,
            display, self.listener, self.style,
        )
        return self._append(scope, offset)

    def add_switch(self, param_id, name, width, height, minimum, maximum, value, labels=None):
        offset = self._offset()
        pos = self._next_position(offset)
        switch = Switch(
            param_id, name, pos.x, pos.y, width, height, minimum, maximum, value,
            labels, self.listener, self.style,
        )
        return self._append(switch, offset)

    def adjust_to_new_content(self, width, height) -> None:
        """Grow to fit new content of the given size below what is there."""
        if width > self.width - self.border * 2:
            self.width = width + self.border * 2
        self.height += height
        self.set_control_region(
            self.border, self.border, self.width - self.border, self.height - self.border
        )

    def build_from_xml(self, element) -> None:
        """Create controls from the OBJECT children of an element."""
        for obj in element.findall("OBJECT"):
            param_id = _int_value(obj, "ID")
            kind = _text_value(obj, "TYPE")
            name = _text_value(obj, "NAME")
            width = _int_value(obj, "WIDTH")
            height = _int_value(obj, "HEIGHT")
            display = _int_value(obj, "DISPLAY")
            steps = _int_value(obj, "STEPS")
            mode = _int_value(obj, "MODE")

            if kind == "SLIDER":
                child = self.add_slider(
                    param_id, name, width, height,
                    _float_value(obj, "MIN"), _float_value(obj, "MAX"), _float_value(obj, "VALUE"),
                    display, steps,
                )
            elif kind == "XYPAD":
                minimum = Point(_float_value(obj, "MIN_X"), _float_value(obj, "MIN_Y"))
                maximum = Point(_float_value(obj, "MAX_X"), _float_value(obj, "MAX_Y"))
                value = Point(_float_value(obj, "VALUE_X"), _float_value(obj, "VALUE_Y"))
                child = self.add_xy_pad(
                    param_id, name, width, height, minimum, maximum, value, display, steps
                )
            elif kind == "SCOPE":
                value = Point(_float_value(obj, "VALUE_X"), _float_value(obj, "VALUE_Y"))
                child = self.add_scope(
                    param_id, name, width, height, _int_value(obj, "LENGTH"), value, mode
                )
            elif kind == "SWITCH":
                child = self.add_switch(
                    param_id, name, width, height,
                    int(_float_value(obj, "MIN")),
                    int(_float_value(obj, "MAX")),
                    int(_float_value(obj, "VALUE")),
                    None,
                )
            else:
                continue
            child.build_from_xml(obj)


__all__ = ["Panel", "GuiTask"]