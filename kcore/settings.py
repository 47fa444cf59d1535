"""Vision settings and the dispatcher that applies interface messages to them."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import IntEnum, auto
from typing import Any, Callable, Optional

from .control import GuiTask

log = logging.getLogger(__name__)


class Parameter(IntEnum):
    """Identifiers of the panels and controls of the vision interface."""

    PROPERTIES_PANEL = auto()
    PROPERTIES_FLIP_V = auto()
    PROPERTIES_FLIP_H = auto()
    OPTION_PANEL = auto()
    OPTION_TUIO_OSC = auto()
    OPTION_TUIO_TCP = auto()
    OPTION_BIN_TCP = auto()
    TRACKING_TRACK_BLOBS = auto()
    TRACKING_TRACK_FINGERS = auto()
    TRACKING_TRACK_OBJECTS = auto()
    CALIBRATION_PANEL = auto()
    CALIBRATION_CALIBRATE = auto()
    SAVE_PANEL = auto()
    SAVE_XML = auto()
    SAVE_TEMPLATE_XML = auto()
    LOAD_TEMPLATE_XML = auto()
    SOURCE_PANEL = auto()
    TRACKED_PANEL = auto()
    TRACKED_OUTLINES = auto()
    TRACKED_IDS = auto()
    TRACKED_XZ = auto()
    TRACKED_DARK_BLOBS = auto()
    TRACKED_THRESHOLD = auto()
    TRACKED_MIN_MOVEMENT = auto()
    TRACKED_MIN_BLOB_SIZE = auto()
    TRACKED_MAX_BLOB_SIZE = auto()
    TEMPLATE_PANEL = auto()
    TEMPLATE_MIN_AREA = auto()
    TEMPLATE_MAX_AREA = auto()
    BACKGROUND_PANEL = auto()
    BACKGROUND_REMOVE = auto()
    BACKGROUND_DYNAMIC = auto()
    BACKGROUND_LEARN_RATE = auto()
    SMOOTH_PANEL = auto()
    SMOOTH_USE = auto()
    SMOOTH_SMOOTH = auto()
    HIGHPASS_PANEL = auto()
    HIGHPASS_USE = auto()
    HIGHPASS_BLUR = auto()
    HIGHPASS_NOISE = auto()
    AMPLIFY_PANEL = auto()
    AMPLIFY_USE = auto()
    AMPLIFY_AMP = auto()


@dataclass
class FilterOptions:
    """The switches and levels of the filter chain that the interface controls."""

    threshold: int = 120
    smooth: int = 0
    highpass_blur: int = 0
    highpass_noise: int = 0
    highpass_amp: int = 0
    learn_background: bool = False
    vertical_mirror: bool = False
    horizontal_mirror: bool = False
    dynamic_bg: bool = False
    use_smooth: bool = False
    use_highpass: bool = False
    use_amplify: bool = False
    track_dark: bool = False


@dataclass
class VisionSettings:
    """Everything the interface can change about tracking and output."""

    filter: Any = field(default_factory=FilterOptions)
    show_interface: bool = True
    calibration: bool = False
    calibrating: bool = False
    tracker_calibrating: bool = False
    fullscreen: bool = False
    track_blobs: bool = False
    track_fingers: bool = False
    track_objects: bool = False
    osc_mode: bool = False
    tcp_mode: bool = False
    binary_mode: bool = False
    tuio_mode: bool = False
    draw_outlines: bool = False
    show_labels: bool = False
    is_xz: bool = False
    background_learn_rate: float = 0.0
    movement_filtering: float = 0.0
    min_blob_size: float = 0.0
    max_blob_size: float = 0.0
    near_threshold: float = 0.0
    far_threshold: float = 0.0


# parameter -> (owner, attribute); owner "filter" means settings.filter
_BOOL_FIELDS = {
    Parameter.PROPERTIES_FLIP_H: ("filter", "horizontal_mirror"),
    Parameter.PROPERTIES_FLIP_V: ("filter", "vertical_mirror"),
    Parameter.TRACKING_TRACK_BLOBS: ("settings", "track_blobs"),
    Parameter.TRACKING_TRACK_FINGERS: ("settings", "track_fingers"),
    Parameter.OPTION_TUIO_OSC: ("settings", "osc_mode"),
    Parameter.OPTION_TUIO_TCP: ("settings", "tcp_mode"),
    Parameter.BACKGROUND_DYNAMIC: ("filter", "dynamic_bg"),
    Parameter.BACKGROUND_REMOVE: ("filter", "learn_background"),
    Parameter.HIGHPASS_USE: ("filter", "use_highpass"),
    Parameter.AMPLIFY_USE: ("filter", "use_amplify"),
    Parameter.TRACKED_DARK_BLOBS: ("filter", "track_dark"),
    Parameter.TRACKED_OUTLINES: ("settings", "draw_outlines"),
    Parameter.TRACKED_IDS: ("settings", "show_labels"),
    Parameter.SMOOTH_USE: ("filter", "use_smooth"),
}

_FLOAT_FIELDS = {
    Parameter.BACKGROUND_LEARN_RATE: ("settings", "background_learn_rate"),
    Parameter.TRACKED_MIN_MOVEMENT: ("settings", "movement_filtering"),
    Parameter.TRACKED_MIN_BLOB_SIZE: ("settings", "min_blob_size"),
    Parameter.TRACKED_MAX_BLOB_SIZE: ("settings", "max_blob_size"),
}

_INT_FIELDS = {
    Parameter.HIGHPASS_BLUR: ("filter", "highpass_blur"),
    Parameter.HIGHPASS_NOISE: ("filter", "highpass_noise"),
    Parameter.AMPLIFY_AMP: ("filter", "highpass_amp"),
    Parameter.TRACKED_THRESHOLD: ("filter", "threshold"),
    Parameter.SMOOTH_SMOOTH: ("filter", "smooth"),
}

# Accepted without checking what kind of value arrives.
_UNCHECKED_FIELDS = {
    Parameter.TEMPLATE_MIN_AREA: ("settings", "near_threshold"),
    Parameter.TEMPLATE_MAX_AREA: ("settings", "far_threshold"),
}


def _as_bool(data) -> Optional[bool]:
    return data if isinstance(data, bool) else None


def _as_number(data) -> Optional[float]:
    if isinstance(data, bool) or not isinstance(data, (int, float)):
        return None
    return float(data)


class GuiDispatcher:
    """Applies values reported by interface controls to the vision settings."""

    def __init__(
        self,
        settings: VisionSettings,
        templates,
        on_save_settings: Optional[Callable[[], None]] = None,
        on_fullscreen: Optional[Callable[[], None]] = None,
    ):
        self.settings = settings
        self.templates = templates
        self.on_save_settings = on_save_settings
        self.on_fullscreen = on_fullscreen
        self.controls = None

    def _owner(self, name: str):
        return self.settings.filter if name == "filter" else self.settings

    def _push(self, parameter: Parameter, value: bool) -> None:
        if self.controls is not None:
            self.controls.update(int(parameter), GuiTask.BOOL, value)

    def handle_gui(self, parameter_id, task, data) -> bool:
        """Apply one message; False when the parameter is unknown."""
        try:
            parameter = Parameter(parameter_id)
        except ValueError:
            return False

        if parameter in _BOOL_FIELDS:
            owner, attribute = _BOOL_FIELDS[parameter]
            value = _as_bool(data)
            if value is not None:
                setattr(self._owner(owner), attribute, value)
        elif parameter in _FLOAT_FIELDS:
            owner, attribute = _FLOAT_FIELDS[parameter]
            value = _as_number(data)
            if value is not None:
                setattr(self._owner(owner), attribute, value)
        elif parameter in _INT_FIELDS:
            owner, attribute = _INT_FIELDS[parameter]
            value = _as_number(data)
            if value is not None:
                setattr(self._owner(owner), attribute, int(value))
        elif parameter in _UNCHECKED_FIELDS:
            owner, attribute = _UNCHECKED_FIELDS[parameter]
            setattr(self._owner(owner), attribute, float(data))
        elif parameter is Parameter.CALIBRATION_CALIBRATE:
            self._enter_calibration()
        elif parameter is Parameter.TRACKING_TRACK_OBJECTS:
            self._track_objects(data)
        elif parameter is Parameter.OPTION_BIN_TCP:
            self._binary_mode(data)
        elif parameter is Parameter.SAVE_XML:
            if _as_bool(data) and self.on_save_settings is not None:
                self.on_save_settings()
        elif parameter is Parameter.LOAD_TEMPLATE_XML:
            if _as_bool(data) and self.templates.load():
                log.info("templates loaded")
        elif parameter is Parameter.SAVE_TEMPLATE_XML:
            if _as_bool(data):
                self.templates.save()
        return True

    def _enter_calibration(self) -> None:
        s = self.settings
        s.show_interface = False
        s.calibration = True
        s.calibrating = True
        s.tracker_calibrating = True
        if not s.fullscreen and self.on_fullscreen is not None:
            self.on_fullscreen()
        s.fullscreen = True

    def _track_objects(self, data) -> None:
        value = _as_bool(data)
        if value is None:
            return
        self.settings.track_objects = value
        if value:
            self.templates.load()
        else:
            self.templates.save()

    def _binary_mode(self, data) -> None:
        s = self.settings
        value = _as_bool(data)
        if value is not None:
            s.binary_mode = value
        s.tuio_mode = bool(data)
        s.tcp_mode = False
        self._push(Parameter.OPTION_TUIO_TCP, s.tcp_mode)
        s.osc_mode = False
        self._push(Parameter.OPTION_TUIO_OSC, s.osc_mode)