"""Touch events delivered to listeners in registration order."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable


@dataclass
class Content:
    """One touch point inside a touch message."""

    num: int
    x: float
    y: float
    movx: float
    movy: float
    id: int = -1

    def update(self, num, x, y, movx, movy) -> None:
        self.num = num
        self.x = x
        self.y = y
        self.movx = movx
        self.movy = movy


@dataclass
class TouchMessage:
    """A batch of touch points and the ids still alive."""

    contents: list[Content] = field(default_factory=list)
    alive: list[int] = field(default_factory=list)


class TouchKind(Enum):
    DOWN = "down"
    UP = "up"
    MOVED = "moved"
    HELD = "held"
    RAW_DOWN = "raw_down"
    RAW_UP = "raw_up"
    RAW_MOVED = "raw_moved"
    RAW_HELD = "raw_held"

    @property
    def is_raw(self) -> bool:
        """Raw events carry uncalibrated blobs."""
        return self.name.startswith("RAW_")


Handler = Callable[[Any, Any], None]


class FifoEvent:
    """An event whose handlers run in the order they were added."""

    def __init__(self):
        self._handlers: list[Handler] = []

    def add(self, handler: Handler) -> None:
        if handler not in self._handlers:
            self._handlers.append(handler)

    def remove(self, handler: Handler) -> None:
        try:
            self._handlers.remove(handler)
        except ValueError:
            pass

    def notify(self, sender, args) -> None:
        for handler in list(self._handlers):
            handler(sender, args)

    def __len__(self) -> int:
        return len(self._handlers)


class TouchListener:
    """Base class for objects that react to touches.

    The default hooks remember the last message of each kind in
    ``last_touch``; subclasses override the hooks they care about.
    """

    @property
    def last_touch(self) -> dict[TouchKind, Any]:
        """The most recent message received for each kind of event."""
        return self.__dict__.setdefault("_last_touch", {})

    def _record(self, kind: TouchKind, message) -> None:
        self.last_touch[kind] = message

    def touch_down(self, message):
        self._record(TouchKind.DOWN, message)

    def touch_up(self, message):
        self._record(TouchKind.UP, message)

    def touch_moved(self, message):
        self._record(TouchKind.MOVED, message)

    def touch_held(self, message):
        self._record(TouchKind.HELD, message)

    def raw_touch_down(self, message):
        self._record(TouchKind.RAW_DOWN, message)

    def raw_touch_up(self, message):
        self._record(TouchKind.RAW_UP, message)

    def raw_touch_moved(self, message):
        self._record(TouchKind.RAW_MOVED, message)

    def raw_touch_held(self, message):
        self._record(TouchKind.RAW_HELD, message)


_LISTENER_METHODS = {
    TouchKind.DOWN: "touch_down",
    TouchKind.UP: "touch_up",
    TouchKind.MOVED: "touch_moved",
    TouchKind.HELD: "touch_held",
    TouchKind.RAW_DOWN: "raw_touch_down",
    TouchKind.RAW_UP: "raw_touch_up",
    TouchKind.RAW_MOVED: "raw_touch_moved",
    TouchKind.RAW_HELD: "raw_touch_held",
}


@dataclass(frozen=True)
class _ListenerDelegate:
    listener: TouchListener
    method: str

    def __call__(self, sender, message) -> None:
        getattr(self.listener, self.method)(message)


class TouchManager:
    """Holds the current calibrated and raw blobs and dispatches them."""

    def __init__(self):
        self.messenger = None
        self.raw_messenger = None
        self._events = {kind: FifoEvent() for kind in TouchKind}

    def subscribe(self, kind, handler: Handler) -> None:
        """Register handler(sender, blob) for one kind of event."""
        self._events[TouchKind(kind)].add(handler)

    def _add(self, listener: TouchListener, raw: bool) -> None:
        for kind in TouchKind:
            if kind.is_raw == raw:
                self.subscribe(kind, _ListenerDelegate(listener, _LISTENER_METHODS[kind]))

    def add_listener(self, listener: TouchListener) -> None:
        """Register a listener for the four calibrated events."""
        self._add(listener, raw=False)

    def add_raw_listener(self, listener: TouchListener) -> None:
        """Register a listener for the four raw events."""
        self._add(listener, raw=True)

    def notify(self, kind, sender=None) -> None:
        """Send the current blob of the matching stream to the event's handlers."""
        kind = TouchKind(kind)
        message = self.raw_messenger if kind.is_raw else self.messenger
        self._events[kind].notify(sender, message)


touch_events = TouchManager()