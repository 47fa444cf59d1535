import xml.etree.ElementTree as ET

from kcore.control import GuiTask, Point, Style
from kcore.panel import Panel
from kcore.scope import Scope
from kcore.slider import Slider
from kcore.switch import Switch
from kcore.xypad import XYPad


class Recorder:
    def __init__(self):
        self.calls = []

    def __call__(self, param_id, task, value):
        self.calls.append((param_id, task, value))


def make_panel(name="", border=5, spacing=3, x=10, y=20, listener=None):
    return Panel(1, name, x, y, border, spacing, listener, Style(head_font_height=10, char_width=5))


def test_unnamed_panel_initial_size():
    panel = make_panel(border=5)
    assert panel.height == 2 * panel.border
    assert panel.width == 2 * panel.border


def test_named_panel_initial_size():
    panel = make_panel(name="abc", border=4)
    assert panel.height == 2 * panel.border + panel.style.head_font_height
    assert panel.width == panel.style.text_width("abc") + 2 * panel.border


def test_first_child_of_unnamed_panel_has_no_offset():
    panel = make_panel(border=5)
    before = panel.height
    slider = panel.add_slider(2, "", 100, 10, 0.0, 100.0, 0.0)
    assert isinstance(slider, Slider)
    assert (slider.x, slider.y) == (panel.border, before - panel.border)
    assert panel.height == before + slider.height
    assert panel.width == slider.width + 2 * panel.border


def test_later_children_are_spaced():
    panel = make_panel(border=5, spacing=3)
    panel.add_slider(2, "", 100, 10, 0.0, 100.0, 0.0)
    before = panel.height
    second = panel.add_slider(3, "", 50, 10, 0.0, 100.0, 0.0)
    assert second.y == before - panel.border + panel.spacing
    assert panel.height == before + second.height + panel.spacing
    assert second.y > panel.objects[0].y


def test_named_panel_spaces_first_child():
    panel = make_panel(name="head", border=5, spacing=3)
    before = panel.height
    slider = panel.add_slider(2, "", 20, 10, 0.0, 1.0, 0.0)
    assert slider.y == before - panel.border + panel.spacing


def test_adjust_keeps_width_for_narrow_content():
    panel = make_panel(border=5)
    panel.add_slider(2, "", 100, 10, 0.0, 100.0, 0.0)
    width = panel.width
    panel.adjust_to_new_content(10, 0)
    assert panel.width == width
    assert panel.ctr_width == panel.width - panel.border
    assert panel.ctr_height == panel.height - panel.border


def test_update_routes_to_matching_child():
    panel = make_panel()
    first = panel.add_slider(2, "", 100, 10, 0.0, 100.0, 0.0)
    second = panel.add_slider(3, "", 100, 10, 0.0, 100.0, 0.0)
    assert panel.update(3, GuiTask.FLOAT, 7) is True
    assert second.value == 7.0
    assert first.value == 0.0
    assert panel.update(99, GuiTask.FLOAT, 7) is False


def test_mouse_press_drag_release_reaches_slider():
    recorder = Recorder()
    panel = make_panel(border=5, x=10, y=20, listener=recorder)
    slider = panel.add_slider(2, "", 100, 10, 0.0, 100.0, 0.0)
    gx = panel.x + slider.x + 50
    gy = panel.y + slider.y + 5
    assert panel.mouse_pressed(gx, gy, 0) is True
    assert panel.mouse_is_down is True
    assert slider.value == 50.0
    assert recorder.calls[-1] == (2, GuiTask.FLOAT, 50.0)

    assert panel.mouse_dragged(panel.x + slider.x + 100, gy, 0) is True
    assert slider.value == 100.0

    assert panel.mouse_released(gx, gy, 0) is True
    assert panel.mouse_is_down is False
    assert slider.mouse_is_down is False


def test_mouse_press_outside_panel():
    panel = make_panel(x=10, y=20)
    panel.add_slider(2, "", 100, 10, 0.0, 100.0, 0.0)
    assert panel.mouse_pressed(0, 0, 0) is False
    assert panel.mouse_is_down is False
    assert panel.mouse_dragged(50, 30, 0) is False


def test_add_other_controls():
    panel = make_panel()
    pad = panel.add_xy_pad(2, "", 40, 40, Point(1, 1), Point(2, 2), Point(1.5, 1.5))
    scope = panel.add_scope(3, "", 40, 20, 8, Point(0, 0))
    switch = panel.add_switch(4, "", 40, 10, 0, 2, 1, ["a", "b", "c"])
    assert isinstance(pad, XYPad)
    assert isinstance(scope, Scope) and scope.buffer_length == 8
    assert isinstance(switch, Switch) and switch.label() == "b"
    assert panel.objects == [pad, scope, switch]


def test_build_from_xml():
    recorder = Recorder()
    panel = make_panel(listener=recorder)
    element = ET.fromstring(
        """
        <PANEL>
          <OBJECT><ID>5</ID><TYPE>SLIDER</TYPE><NAME></NAME><WIDTH>100</WIDTH>
            <HEIGHT>10</HEIGHT><MIN>0</MIN><MAX>10</MAX><VALUE>4</VALUE></OBJECT>
          <OBJECT><ID>6</ID><TYPE>KNOB</TYPE></OBJECT>
          <OBJECT><ID>7</ID><TYPE>SWITCH</TYPE><WIDTH>30</WIDTH><HEIGHT>10</HEIGHT>
            <MIN>0</MIN><MAX>1</MAX><VALUE>1</VALUE>
            <STRING><VALUE>0</VALUE><TEXT>off</TEXT></STRING>
            <STRING><VALUE>1</VALUE><TEXT>on</TEXT></STRING></OBJECT>
          <OBJECT><ID>8</ID><TYPE>SCOPE</TYPE><WIDTH>30</WIDTH><HEIGHT>10</HEIGHT>
            <LENGTH>4</LENGTH><VALUE_X>2</VALUE_X><VALUE_Y>0.5</VALUE_Y></OBJECT>
        </PANEL>
        """
    )
    panel.build_from_xml(element)
    assert [child.param_id for child in panel.objects] == [5, 7, 8]
    slider, switch, scope = panel.objects
    assert slider.value == 4.0
    assert switch.label() == "on"
    assert scope.value == Point(2.0, 0.5)
    assert (5, GuiTask.FLOAT, 4.0) in recorder.calls
    assert (7, GuiTask.INT, 1) in recorder.calls
    assert (8, GuiTask.POINT, Point(2.0, 0.5)) in recorder.calls