"""Grayscale image filters and the chain that prepares frames for tracking."""

from __future__ import annotations

import time
from typing import Callable

import numpy as np

CAMERA_EXPOSURE_TIME = 2200.0

_SHORT_SCALE = 65535 // 255


def _gray(image) -> np.ndarray:
    arr = np.asarray(image)
    if arr.ndim != 2:
        raise ValueError("expected a two-dimensional grayscale image")
    if arr.dtype != np.uint8:
        arr = _saturate(arr)
    return arr


def _saturate(values) -> np.ndarray:
    return np.clip(np.rint(values), 0, 255).astype(np.uint8)


def box_blur(image, size) -> np.ndarray:
    """Mean over a size x size window, edges replicated."""
    img = _gray(image)
    size = int(size)
    if size < 1 or size % 2 == 0:
        raise ValueError("blur size must be a positive odd number")
    if size == 1:
        return img.copy()
    radius = size // 2
    padded = np.pad(img.astype(np.int64), radius, mode="edge")
    integral = np.zeros((padded.shape[0] + 1, padded.shape[1] + 1), dtype=np.int64)
    integral[1:, 1:] = padded.cumsum(axis=0).cumsum(axis=1)
    h, w = img.shape
    sums = (
        integral[size:size + h, size:size + w]
        - integral[:h, size:size + w]
        - integral[size:size + h, :w]
        + integral[:h, :w]
    )
    return _saturate(sums / (size * size))


def amplify(image, level) -> np.ndarray:
    """Square each pixel scaled by level / 128, saturating at 255."""
    img = _gray(image).astype(np.float64)
    return _saturate(img * img * (level / 128.0))


def subtract(first, second) -> np.ndarray:
    """Pixelwise first - second, clamped at zero."""
    a, b = _gray(first), _gray(second)
    if a.shape != b.shape:
        raise ValueError("images differ in size")
    return np.clip(a.astype(np.int16) - b.astype(np.int16), 0, 255).astype(np.uint8)


def highpass(image, blur1, blur2) -> np.ndarray:
    """Keep bright detail: the image minus its blur, then blurred against noise."""
    img = _gray(image)
    blurred = box_blur(img, int(blur1 * 2) + 1) if blur1 > 0 else img
    result = subtract(img, blurred)
    if blur2 > 0:
        result = box_blur(result, int(blur2 * 2) + 1)
    return result


def threshold(image, level) -> np.ndarray:
    """255 where a pixel is above level, 0 elsewhere."""
    return np.where(_gray(image) > level, 255, 0).astype(np.uint8)


def mirror(image, vertical, horizontal) -> np.ndarray:
    """Flip rows when vertical, columns when horizontal."""
    img = _gray(image)
    if vertical:
        img = img[::-1, :]
    if horizontal:
        img = img[:, ::-1]
    return np.ascontiguousarray(img)


class ProcessFilters:
    """The filter chain: mirror, warp, background subtraction, smooth, highpass, amplify, threshold."""

    def __init__(self, clock: Callable[[], float] | None = None):
        self.clock = clock or (lambda: time.monotonic() * 1000.0)
        self.cam_width = 320 * 2
        self.cam_height = 240 * 2
        self.exposure_start_time = CAMERA_EXPOSURE_TIME

        self.threshold = 120
        self.smooth = 0
        self.highpass_blur = 0
        self.highpass_noise = 0
        self.highpass_amp = 0
        self.learn_rate = 1.0

        self.learn_background = False
        self.vertical_mirror = False
        self.horizontal_mirror = False
        self.dynamic_bg = False
        self.use_smooth = False
        self.use_highpass = False
        self.use_amplify = False
        self.use_threshold = False
        self.track_dark = False
        self.mini_mode = False

        self.original = None
        self.gray_img = None
        self.gray_bg = None
        self.subtract_bg = None
        self.gray_diff = None
        self.highpass_img = None
        self.amp_img = None
        self.float_bg = None

    def allocate(self, width, height) -> None:
        """Size every stage image and restart the exposure period."""
        self.cam_width = width
        self.cam_height = height
        self.learn_rate = 0.0
        self.mini_mode = False
        self.exposure_start_time = self.clock()

        shape = (height, width)
        self.original = np.zeros(shape, np.uint8)
        self.gray_img = np.zeros(shape, np.uint8)
        self.gray_bg = np.zeros(shape, np.uint8)
        self.subtract_bg = np.zeros(shape, np.uint8)
        self.gray_diff = np.zeros(shape, np.uint8)
        self.highpass_img = np.zeros(shape, np.uint8)
        self.amp_img = np.zeros(shape, np.uint8)
        self.float_bg = np.zeros(shape, np.uint16)

    def _background_from_short(self) -> None:
        self.gray_bg = _saturate(self.float_bg.astype(np.float64) * (255.0 / 65535.0))

    def apply(self, image, warp: Callable[[np.ndarray], np.ndarray] | None = None) -> np.ndarray:
        """Run the chain on one frame and return the thresholded result."""
        if self.gray_bg is None:
            raise RuntimeError("allocate() must be called before apply()")
        img = _gray(image)
        if img.shape != (self.cam_height, self.cam_width):
            raise ValueError("frame size does not match the allocated size")

        if self.vertical_mirror or self.horizontal_mirror:
            img = mirror(img, self.vertical_mirror, self.horizontal_mirror)
        if not self.mini_mode:
            self.gray_img = img.copy()

        self.original = img.copy()
        img = _gray(warp(self.original)) if warp is not None else self.original.copy()
        if img.shape != self.gray_bg.shape:
            raise ValueError("warp changed the frame size")

        if self.dynamic_bg:
            rate = self.learn_rate
            blended = rate * img.astype(np.float64) * _SHORT_SCALE + (1.0 - rate) * self.float_bg
            self.float_bg = np.clip(np.rint(blended), 0, 65535).astype(np.uint16)
            self._background_from_short()

        if self.clock() - self.exposure_start_time < CAMERA_EXPOSURE_TIME:
            self.learn_background = True

        if self.learn_background:
            self.float_bg = img.astype(np.uint16) * _SHORT_SCALE
            self._background_from_short()
            self.learn_background = False

        if self.track_dark:
            img = subtract(self.gray_bg, img)
        else:
            img = subtract(img, self.gray_bg)

        if self.use_smooth:
            img = box_blur(img, self.smooth * 2 + 1)
            if not self.mini_mode:
                self.subtract_bg = img.copy()

        if self.use_highpass:
            img = highpass(img, self.highpass_blur, self.highpass_noise)
            if not self.mini_mode:
                self.highpass_img = img.copy()

        if self.use_amplify:
            img = amplify(img, self.highpass_amp)
            if not self.mini_mode:
                self.amp_img = img.copy()

        img = threshold(img, self.threshold)
        if not self.mini_mode:
            self.gray_diff = img.copy()
        return img