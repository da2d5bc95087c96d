"""
Image Transform State
=====================

This module holds the five user-adjustable visual parameters of the preview
image (brightness, contrast, rotation, scale and the two flip flags) and the
named setters that change them.

Every setter is a pure function ``(settings, value) -> settings'``. Settings
are frozen dataclasses; a setter never mutates its input and only ever touches
its own field.

Functions
---------
set_brightness, set_contrast
    Clamp the filter percentages to [0, 200]
rotate_left, rotate_right
    Rotate by 90 degrees, wrapping modulo 360
zoom_in, zoom_out
    Multiplicative 1.2 step, saturating at [0.5, 2]
toggle_flip_x, toggle_flip_y
    Independent mirror toggles
reset
    Return the default settings

Examples
--------
>>> from medscan_ui.core.transform_state import ImageSettings, rotate_right, zoom_in
>>> s = ImageSettings()
>>> s = zoom_in(rotate_right(s))
>>> s.rotation, round(s.scale, 2)
(90, 1.2)
"""

from dataclasses import dataclass, replace

BRIGHTNESS_RANGE = (0.0, 200.0)
CONTRAST_RANGE = (0.0, 200.0)
SCALE_RANGE = (0.5, 2.0)
ZOOM_STEP = 1.2
ROTATION_STEP = 90


def _clamp(value: float, bounds: tuple[float, float]) -> float:
    lo, hi = bounds
    return max(lo, min(hi, float(value)))


@dataclass(frozen=True)
class ImageSettings:
    """
    Visual parameters applied to the preview image.

    Parameters
    ----------
    brightness : float, default=100
        Brightness in percent, 0-200
    contrast : float, default=100
        Contrast in percent, 0-200
    rotation : int, default=0
        Rotation in degrees. Any integer is accepted; rendering uses
        :meth:`normalized_rotation`
    scale : float, default=1.0
        Uniform zoom factor, 0.5-2
    flip_x : bool, default=False
        Mirror horizontally
    flip_y : bool, default=False
        Mirror vertically
    """

    brightness: float = 100.0
    contrast: float = 100.0
    rotation: int = 0
    scale: float = 1.0
    flip_x: bool = False
    flip_y: bool = False

    def normalized_rotation(self) -> int:
        """Rotation mapped into [0, 360)."""
        return int(self.rotation) % 360

    def as_tuple(self) -> tuple:
        return (
            self.brightness,
            self.contrast,
            self.rotation,
            self.scale,
            self.flip_x,
            self.flip_y,
        )


DEFAULT_SETTINGS = ImageSettings()


def set_brightness(settings: ImageSettings, value: float) -> ImageSettings:
    return replace(settings, brightness=_clamp(value, BRIGHTNESS_RANGE))


def set_contrast(settings: ImageSettings, value: float) -> ImageSettings:
    return replace(settings, contrast=_clamp(value, CONTRAST_RANGE))


def rotate_right(settings: ImageSettings) -> ImageSettings:
    return replace(settings, rotation=(settings.rotation + ROTATION_STEP) % 360)


def rotate_left(settings: ImageSettings) -> ImageSettings:
    return replace(settings, rotation=(settings.rotation - ROTATION_STEP) % 360)


def can_zoom_in(settings: ImageSettings) -> bool:
    return settings.scale < SCALE_RANGE[1]


def can_zoom_out(settings: ImageSettings) -> bool:
    return settings.scale > SCALE_RANGE[0]


def zoom_in(settings: ImageSettings) -> ImageSettings:
    """
    Enlarge by one zoom step.

    The result is capped at the upper scale bound; at the bound this is a
    no-op and returns the input unchanged.
    """
    if not can_zoom_in(settings):
        return settings
    return replace(settings, scale=min(settings.scale * ZOOM_STEP, SCALE_RANGE[1]))


def zoom_out(settings: ImageSettings) -> ImageSettings:
    """
    Shrink by one zoom step.

    The result is floored at the lower scale bound; at the bound this is a
    no-op and returns the input unchanged.
    """
    if not can_zoom_out(settings):
        return settings
    return replace(settings, scale=max(settings.scale / ZOOM_STEP, SCALE_RANGE[0]))


def toggle_flip_x(settings: ImageSettings) -> ImageSettings:
    return replace(settings, flip_x=not settings.flip_x)


def toggle_flip_y(settings: ImageSettings) -> ImageSettings:
    return replace(settings, flip_y=not settings.flip_y)


def reset(settings: ImageSettings | None = None) -> ImageSettings:
    """
    Return the default settings.

    Parameters
    ----------
    settings : ImageSettings, optional
        Current settings. Ignored; accepted so ``reset`` has the same
        call shape as the other setters.

    Returns
    -------
    ImageSettings
        ``ImageSettings()`` with brightness 100, contrast 100, rotation 0,
        scale 1 and both flips off
    """
    return DEFAULT_SETTINGS
