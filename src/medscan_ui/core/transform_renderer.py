"""
Transform Rendering
===================

This module compiles :class:`~medscan_ui.core.transform_state.ImageSettings`
into a visual effect that a rendering surface can apply.

Three renderings are provided, all derived from the same settings and the same
fixed composition order (rotate, then uniform scale, then horizontal flip, then
vertical flip):

- :func:`render_effect` returns a :class:`VisualEffect` descriptor with a
  filter string and a transform string
- :func:`effect_matrix` returns the 3x3 affine matrix of the transform part
- :func:`apply_filters` applies the brightness and contrast part to a PIL image

Notes
-----
The transform terms compose like matrix products read left to right, so the
rightmost term acts on the image first: flips happen in the image's own frame,
before scaling and rotation. For any rotation that is not a multiple of 180
degrees combined with a single flip, changing the term order changes the
rendered image, so the order is part of the output contract.

Examples
--------
>>> from medscan_ui.core.transform_state import ImageSettings
>>> from medscan_ui.core.transform_renderer import render_effect
>>> render_effect(ImageSettings(rotation=90, flip_x=True)).transform
'rotate(90deg) scale(1) scaleX(-1) scaleY(1)'
"""

from dataclasses import dataclass
import math

import numpy as np
from PIL import Image, ImageEnhance

from .transform_state import ImageSettings


@dataclass(frozen=True)
class VisualEffect:
    """Compiled filter and geometric transform for one settings value."""

    filter: str
    transform: str


def _num(value) -> str:
    v = float(value)
    if v.is_integer():
        return str(int(v))
    return repr(v)


def render_effect(settings: ImageSettings) -> VisualEffect:
    """
    Compile settings into a visual effect descriptor.

    Parameters
    ----------
    settings : ImageSettings
        Current image settings

    Returns
    -------
    VisualEffect
        ``filter`` is ``"brightness(B%) contrast(C%)"``; ``transform`` is
        ``"rotate(Rdeg) scale(S) scaleX(±1) scaleY(±1)"`` with R the rotation
        normalized into [0, 360)

    Notes
    -----
    The output depends only on the field values, never on the order in which
    setters were applied. Equal settings always give identical strings.
    """
    filt = f"brightness({_num(settings.brightness)}%) contrast({_num(settings.contrast)}%)"
    terms = [
        f"rotate({settings.normalized_rotation()}deg)",
        f"scale({_num(settings.scale)})",
        f"scaleX({-1 if settings.flip_x else 1})",
        f"scaleY({-1 if settings.flip_y else 1})",
    ]
    return VisualEffect(filter=filt, transform=" ".join(terms))


def effect_matrix(settings: ImageSettings) -> np.ndarray:
    """
    Affine matrix of the geometric part of the effect.

    Returns a 3x3 matrix for column vectors in y-down screen coordinates,
    composed as ``R @ S @ Fx @ Fy``. Positive rotation is clockwise on screen.
    """
    theta = math.radians(settings.normalized_rotation())
    c, s = math.cos(theta), math.sin(theta)
    rot = np.array([[c, -s, 0.0], [s, c, 0.0], [0.0, 0.0, 1.0]])
    k = float(settings.scale)
    scale = np.diag([k, k, 1.0])
    flip_x = np.diag([-1.0 if settings.flip_x else 1.0, 1.0, 1.0])
    flip_y = np.diag([1.0, -1.0 if settings.flip_y else 1.0, 1.0])
    m = rot @ scale @ flip_x @ flip_y
    # exact zeros/ones for quarter turns
    return np.round(m, 12) + 0.0


def apply_filters(image: Image.Image, settings: ImageSettings) -> Image.Image:
    """
    Apply the brightness and contrast filters to a PIL image.

    Parameters
    ----------
    image : PIL.Image
        Source image, converted to RGB
    settings : ImageSettings
        Settings to apply; 100 means unchanged, 0 gives black / flat grey

    Returns
    -------
    PIL.Image
        New RGB image of the same size. The geometric part is left to the
        drawing surface (see :func:`effect_matrix`).
    """
    img = image.convert("RGB")
    if settings.brightness != 100:
        img = ImageEnhance.Brightness(img).enhance(settings.brightness / 100.0)
    if settings.contrast != 100:
        img = ImageEnhance.Contrast(img).enhance(settings.contrast / 100.0)
    return img
