import pytest

from medscan_ui.core.transform_state import (
    DEFAULT_SETTINGS,
    ImageSettings,
    can_zoom_in,
    can_zoom_out,
    reset,
    rotate_left,
    rotate_right,
    set_brightness,
    set_contrast,
    toggle_flip_x,
    toggle_flip_y,
    zoom_in,
    zoom_out,
)


def test_default_settings():
    assert ImageSettings().as_tuple() == (100, 100, 0, 1, False, False)


@pytest.mark.parametrize(
    "edits",
    [
        [],
        [(set_brightness, 0), (set_contrast, 200)],
        [(rotate_left,), (rotate_left,), (toggle_flip_x,)],
        [(zoom_in,), (zoom_in,), (toggle_flip_y,), (rotate_right,)],
        [(zoom_out,), (set_brightness, 37.5), (toggle_flip_x,), (toggle_flip_y,)],
    ],
)
def test_reset_returns_default_from_any_state(edits):
    s = DEFAULT_SETTINGS
    for setter, *args in edits:
        s = setter(s, *args)
    assert reset(s) == ImageSettings()
    assert reset(s).as_tuple() == (100, 100, 0, 1, False, False)


@pytest.mark.parametrize("value,expected", [(-5, 0), (0, 0), (150, 150), (250, 200)])
def test_brightness_and_contrast_clamp(value, expected):
    assert set_brightness(DEFAULT_SETTINGS, value).brightness == expected
    assert set_contrast(DEFAULT_SETTINGS, value).contrast == expected


def test_setter_touches_only_its_field():
    s = set_brightness(DEFAULT_SETTINGS, 150)
    assert s.as_tuple()[1:] == DEFAULT_SETTINGS.as_tuple()[1:]
    assert DEFAULT_SETTINGS.brightness == 100


@pytest.mark.parametrize("start", [0, 90, 180, 270, -90, 45])
def test_four_right_rotations_are_identity(start):
    s = ImageSettings(rotation=start)
    for _ in range(4):
        s = rotate_right(s)
    assert s.rotation % 360 == start % 360


def test_rotate_left_wraps_into_range():
    s = rotate_left(DEFAULT_SETTINGS)
    assert s.normalized_rotation() == 270
    assert rotate_right(s).rotation == 0


def test_negative_rotation_normalizes():
    assert ImageSettings(rotation=-90).normalized_rotation() == 270
    assert ImageSettings(rotation=450).normalized_rotation() == 90


def test_zoom_steps():
    assert zoom_in(DEFAULT_SETTINGS).scale == pytest.approx(1.2)
    assert zoom_out(DEFAULT_SETTINGS).scale == pytest.approx(1 / 1.2)


def test_zoom_saturates():
    top = ImageSettings(scale=2)
    bottom = ImageSettings(scale=0.5)
    assert zoom_in(top).scale == 2
    assert zoom_out(bottom).scale == 0.5
    assert not can_zoom_in(top)
    assert not can_zoom_out(bottom)


def test_zoom_caps_at_bounds():
    assert zoom_in(ImageSettings(scale=1.8)).scale == 2
    assert zoom_out(ImageSettings(scale=0.55)).scale == 0.5


def test_repeated_zoom_in_reaches_cap():
    s = DEFAULT_SETTINGS
    for _ in range(10):
        s = zoom_in(s)
    assert s.scale == 2


def test_flips_are_independent():
    s = toggle_flip_x(DEFAULT_SETTINGS)
    assert (s.flip_x, s.flip_y) == (True, False)
    s = toggle_flip_y(s)
    assert (s.flip_x, s.flip_y) == (True, True)
    s = toggle_flip_x(s)
    assert (s.flip_x, s.flip_y) == (False, True)
    assert s.rotation == 0
