import numpy as np
from PIL import Image

from medscan_ui.core.transform_renderer import apply_filters, effect_matrix, render_effect
from medscan_ui.core.transform_state import (
    DEFAULT_SETTINGS,
    ImageSettings,
    rotate_right,
    set_brightness,
    toggle_flip_x,
    zoom_in,
)


def test_default_effect():
    effect = render_effect(DEFAULT_SETTINGS)
    assert effect.filter == "brightness(100%) contrast(100%)"
    assert effect.transform == "rotate(0deg) scale(1) scaleX(1) scaleY(1)"


def test_term_order_is_fixed_regardless_of_mutation_order():
    rotated_first = toggle_flip_x(rotate_right(DEFAULT_SETTINGS))
    flipped_first = rotate_right(toggle_flip_x(DEFAULT_SETTINGS))
    a = render_effect(rotated_first).transform
    b = render_effect(flipped_first).transform
    assert a == b == "rotate(90deg) scale(1) scaleX(-1) scaleY(1)"
    assert a.index("rotate(") < a.index("scale(") < a.index("scaleX(") < a.index("scaleY(")


def test_negative_rotation_renders_like_positive():
    assert render_effect(ImageSettings(rotation=-90)) == render_effect(
        ImageSettings(rotation=270)
    )


def test_fractional_values():
    s = zoom_in(set_brightness(DEFAULT_SETTINGS, 37.5))
    effect = render_effect(s)
    assert effect.filter == "brightness(37.5%) contrast(100%)"
    assert "scale(1.2)" in effect.transform


def test_effect_is_deterministic():
    s = ImageSettings(brightness=120, rotation=180, scale=1.44, flip_y=True)
    assert render_effect(s) == render_effect(s)


def test_matrix_applies_flip_before_rotation():
    m = effect_matrix(ImageSettings(rotation=90, flip_x=True))
    assert np.allclose(m[:2, :2], [[0, -1], [-1, 0]])
    # flipping after rotating would give a different image
    assert not np.allclose(m[:2, :2], [[0, 1], [1, 0]])


def test_matrix_identity_and_scale():
    assert np.array_equal(effect_matrix(DEFAULT_SETTINGS), np.eye(3))
    m = effect_matrix(ImageSettings(scale=2, flip_y=True))
    assert np.allclose(m, np.diag([2, -2, 1]))


def test_filters_keep_size():
    img = Image.new("RGB", (40, 30), (120, 130, 140))
    out = apply_filters(img, ImageSettings(brightness=150, contrast=50))
    assert out.size == (40, 30)
    assert out.mode == "RGB"


def test_zero_brightness_is_black():
    img = Image.new("RGB", (8, 8), (120, 130, 140))
    out = apply_filters(img, ImageSettings(brightness=0))
    assert out.getextrema() == ((0, 0), (0, 0), (0, 0))


def test_default_filters_leave_pixels_alone():
    img = Image.new("L", (8, 8), 77)
    out = apply_filters(img, DEFAULT_SETTINGS)
    assert out.getpixel((3, 3)) == (77, 77, 77)
