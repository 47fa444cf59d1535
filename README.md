# kcore

The core pieces of a touch tracker: a grayscale filter chain built on NumPy,
size-based object templates, touch event dispatch, and control widgets that
keep values and react to mouse input. None of the widgets draw anything.

## Modules

### `kcore.filters`

Functions that take a two-dimensional grayscale array. Arrays that are not
`uint8` are rounded and clipped to 0..255. Each function returns a new
`uint8` array.

- `box_blur(image, size)`: the mean over a `size` x `size` window, with the
  edges replicated. `size` must be a positive odd number.
- `amplify(image, level)`: each pixel squared, times `level / 128`, saturating
  at 255.
- `highpass(image, blur1, blur2)`: the image minus its blur (window
  `2*blur1+1`), then blurred with window `2*blur2+1` to remove noise. A blur of
  zero skips that step.
- `threshold(image, level)`: 255 where a pixel is above `level`, 0 elsewhere.
- `mirror(image, vertical, horizontal)`: flips the rows, the columns or both.
- `subtract(first, second)`: `first - second` per pixel, clamped at zero. The
  two images must be the same size.

`ProcessFilters(clock=None)` runs the whole chain on each frame. The clock
returns milliseconds; it defaults to a monotonic clock. Call
`allocate(width, height)` first. Then `apply(image, warp)` does these steps:

1. Mirrors the frame (`vertical_mirror`, `horizontal_mirror`).
2. Applies the optional `warp` callable.
3. Updates the background. It learns a dynamic background when `dynamic_bg`
   is set, using `learn_rate`. It captures the whole background when
   `learn_background` is set, and always does so for the first 2200 ms after
   `allocate`.
4. Subtracts the background. The order is reversed when `track_dark` is set.
5. Smooths, highpasses and amplifies, each only when `use_smooth`,
   `use_highpass` or `use_amplify` is set.
6. Applies `threshold`.

Each stage keeps a copy of its image (`gray_img`, `original`, `gray_bg`,
`subtract_bg`, `highpass_img`, `amp_img`, `gray_diff`), except in
`mini_mode`.

### `kcore.templates`

`Template` describes an object by its width and height and by the bounds each
may fall within. `TemplateStore(path="templates.xml")` does the following:

- holds up to 20 templates;
- hands out ids from 180 up to 199 with `next_id()`, and returns `-1` once
  they are used up;
- adds a template from three objects that have `width` and `height`, with
  `add_template(rect, min_rect, max_rect, scale_x=1.0, scale_y=1.0)`;
- reads and writes `TEMPLATE` elements with `load()` and `save()`. `load()`
  returns `False` when the file cannot be read;
- returns the id of the first template whose bounds strictly contain a size,
  or `-1`, with `template_id(width, height)`.

### `kcore.touch`

- `TouchKind` names four calibrated events (`DOWN`, `UP`, `MOVED`, `HELD`) and
  four raw ones (`RAW_DOWN` ...).
- `FifoEvent` calls its handlers in the order they were added.
- `TouchManager` holds the current calibrated blob in `messenger` and the raw
  blob in `raw_messenger`. Register with `subscribe(kind, handler)`,
  `add_listener(listener)` or `add_raw_listener(listener)`. Call
  `notify(kind, sender)` to dispatch.
- `TouchListener` is a base class whose hooks (`touch_down`,
  `raw_touch_held`, ...) record the last message of each kind in
  `last_touch`. Subclasses override the hooks they need.
- `touch_events` is a shared `TouchManager` instance.
- `Content` and `TouchMessage` hold touch points and the ids still alive.

### Controls

Each control keeps its value and its active region. It turns
`mouse_pressed`, `mouse_dragged` and `mouse_released` into value changes. It
reports each change to a `listener(param_id, task, value)`, where `task` is a
`GuiTask`. It takes values from the application through
`update(param_id, task, data)`, which returns `True` when the message is its
own.

- `kcore.control`: `Point`, `GuiTask`, `Style` (font heights and point size)
  and the base class `Control`.
- `kcore.slider`: `Slider`, with optional step snapping. Values that arrive
  through `update` are truncated to whole numbers. `Radar` is a slider that
  takes fractional values unchanged.
- `kcore.switch`: `Switch` picks a whole number from a range and can have
  labels; `label()` gives the text for the current value.
- `kcore.xypad`: `XYPad` picks a point.
- `kcore.scope`: `Scope` holds a zeroed sample `buffer` and a value made of a
  sample index and a level.
- `kcore.panel`: `Panel` stacks controls vertically with `add_slider`,
  `add_xy_pad`, `add_scope` and `add_switch`. It passes messages and mouse
  events to its children. `build_from_xml(element)` creates controls from
  `OBJECT` children of type `SLIDER`, `XYPAD`, `SCOPE` and `SWITCH`; it
  ignores other types.

### `kcore.settings`

- `VisionSettings` and `FilterOptions` hold what the interface can change.
- `Parameter` enumerates the interface's controls.
- `GuiDispatcher(settings, templates, on_save_settings=None,
  on_fullscreen=None)` applies `handle_gui(parameter_id, task, data)` messages
  to the settings. Switching object tracking on or off, and the template
  buttons, load or save the templates. The calibration button calls
  `on_fullscreen` when the settings are not yet fullscreen. When binary mode is
  chosen, the OSC and TCP modes are switched off. If `controls` is set to an
  object with an `update` method, those changes are also pushed back to it.

## Install

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Example

```python
import numpy as np
from kcore.filters import ProcessFilters

filters = ProcessFilters(clock=lambda: 10_000)
filters.allocate(640, 480)
frame = np.zeros((480, 640), dtype=np.uint8)
result = filters.apply(frame, warp=None)
```

```python
from kcore.templates import TemplateStore

store = TemplateStore("templates.xml")
if store.load():
    print(store.template_id(40.0, 25.0))
```

## What it does not do

This is a library only. There is no command and no window.

- No camera capture: frames must be supplied.
- No contour or blob finding.
- No calibration.
- No network output of touches.
- No drawing of controls or images.
- Controls cannot save themselves to XML.
- The settings file behind `on_save_settings` is left to the caller.