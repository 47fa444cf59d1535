import pytest

from kcore.control import GuiTask
from kcore.filters import ProcessFilters
from kcore.settings import (
    FilterOptions,
    GuiDispatcher,
    Parameter,
    VisionSettings,
)
from kcore.templates import TemplateStore


class _Rect:
    def __init__(self, width, height):
        self.width = width
        self.height = height


class _Recorder:
    def __init__(self):
        self.messages = []

    def update(self, param_id, task, data):
        self.messages.append((param_id, task, data))
        return True


@pytest.fixture
def store(tmp_path):
    return TemplateStore(tmp_path / "templates.xml")


@pytest.fixture
def dispatcher(store):
    return GuiDispatcher(VisionSettings(), store)


def test_filter_defaults_match_chain():
    options = FilterOptions()
    assert options.threshold == 120
    assert options.smooth == 0


def test_bool_parameter_sets_filter_flag(dispatcher):
    assert dispatcher.handle_gui(Parameter.PROPERTIES_FLIP_H, GuiTask.BOOL, True)
    assert dispatcher.settings.filter.horizontal_mirror is True
    dispatcher.handle_gui(Parameter.PROPERTIES_FLIP_H, GuiTask.BOOL, False)
    assert dispatcher.settings.filter.horizontal_mirror is False


def test_bool_parameter_ignores_other_kinds(dispatcher):
    dispatcher.handle_gui(Parameter.TRACKED_OUTLINES, GuiTask.FLOAT, 1.0)
    assert dispatcher.settings.draw_outlines is False


def test_int_filter_fields_truncate(dispatcher):
    dispatcher.handle_gui(Parameter.TRACKED_THRESHOLD, GuiTask.FLOAT, 37.9)
    assert dispatcher.settings.filter.threshold == 37
    dispatcher.handle_gui(Parameter.SMOOTH_SMOOTH, GuiTask.FLOAT, 4.0)
    assert dispatcher.settings.filter.smooth == 4


def test_float_field_rejects_bool(dispatcher):
    dispatcher.handle_gui(Parameter.BACKGROUND_LEARN_RATE, GuiTask.FLOAT, 12.5)
    assert dispatcher.settings.background_learn_rate == 12.5
    dispatcher.handle_gui(Parameter.BACKGROUND_LEARN_RATE, GuiTask.BOOL, True)
    assert dispatcher.settings.background_learn_rate == 12.5


def test_template_area_accepts_any_number(dispatcher):
    dispatcher.handle_gui(Parameter.TEMPLATE_MIN_AREA, GuiTask.INT, 500)
    dispatcher.handle_gui(Parameter.TEMPLATE_MAX_AREA, GuiTask.FLOAT, 2500.0)
    assert dispatcher.settings.near_threshold == 500.0
    assert dispatcher.settings.far_threshold == 2500.0


def test_unknown_parameter_returns_false(dispatcher):
    assert dispatcher.handle_gui(9999, GuiTask.BOOL, True) is False


def test_calibration_enters_fullscreen_once(store):
    calls = []
    dispatcher = GuiDispatcher(VisionSettings(), store, on_fullscreen=lambda: calls.append(1))
    dispatcher.handle_gui(Parameter.CALIBRATION_CALIBRATE, GuiTask.BOOL, True)
    s = dispatcher.settings
    assert (s.show_interface, s.calibration, s.calibrating, s.tracker_calibrating) == (
        False, True, True, True,
    )
    assert s.fullscreen is True
    dispatcher.handle_gui(Parameter.CALIBRATION_CALIBRATE, GuiTask.BOOL, True)
    assert len(calls) == 1


def test_binary_mode_clears_other_transports(dispatcher):
    recorder = _Recorder()
    dispatcher.controls = recorder
    dispatcher.settings.osc_mode = True
    dispatcher.settings.tcp_mode = True
    dispatcher.handle_gui(Parameter.OPTION_BIN_TCP, GuiTask.BOOL, True)
    s = dispatcher.settings
    assert (s.binary_mode, s.tuio_mode, s.tcp_mode, s.osc_mode) == (True, True, False, False)
    assert recorder.messages == [
        (int(Parameter.OPTION_TUIO_TCP), GuiTask.BOOL, False),
        (int(Parameter.OPTION_TUIO_OSC), GuiTask.BOOL, False),
    ]


def test_binary_mode_with_other_data_still_clears(dispatcher):
    dispatcher.settings.osc_mode = True
    dispatcher.handle_gui(Parameter.OPTION_BIN_TCP, GuiTask.FLOAT, 0.0)
    assert dispatcher.settings.binary_mode is False
    assert dispatcher.settings.tuio_mode is False
    assert dispatcher.settings.osc_mode is False


def test_track_objects_saves_and_loads_templates(store):
    store.add_template(_Rect(10, 20), _Rect(5, 10), _Rect(15, 30))
    dispatcher = GuiDispatcher(VisionSettings(), store)
    dispatcher.handle_gui(Parameter.TRACKING_TRACK_OBJECTS, GuiTask.BOOL, False)
    assert store.path.exists()

    other = TemplateStore(store.path)
    GuiDispatcher(VisionSettings(), other).handle_gui(
        Parameter.TRACKING_TRACK_OBJECTS, GuiTask.BOOL, True
    )
    assert len(other.templates) == 1
    assert other.templates[0].width == store.templates[0].width


def test_save_settings_only_on_true(store):
    calls = []
    dispatcher = GuiDispatcher(VisionSettings(), store, on_save_settings=lambda: calls.append(1))
    dispatcher.handle_gui(Parameter.SAVE_XML, GuiTask.BOOL, False)
    assert calls == []
    dispatcher.handle_gui(Parameter.SAVE_XML, GuiTask.BOOL, True)
    assert calls == [1]


def test_save_and_load_template_buttons(store):
    store.add_template(_Rect(8, 8), _Rect(4, 4), _Rect(12, 12))
    dispatcher = GuiDispatcher(VisionSettings(), store)
    dispatcher.handle_gui(Parameter.SAVE_TEMPLATE_XML, GuiTask.BOOL, True)
    store.templates.clear()
    dispatcher.handle_gui(Parameter.LOAD_TEMPLATE_XML, GuiTask.BOOL, True)
    assert len(store.templates) == 1
    assert store.is_loaded is True


def test_works_with_process_filters(store):
    chain = ProcessFilters(clock=lambda: 0.0)
    dispatcher = GuiDispatcher(VisionSettings(filter=chain), store)
    dispatcher.handle_gui(Parameter.HIGHPASS_USE, GuiTask.BOOL, True)
    dispatcher.handle_gui(Parameter.HIGHPASS_BLUR, GuiTask.FLOAT, 3.0)
    assert chain.use_highpass is True
    assert chain.highpass_blur == 3