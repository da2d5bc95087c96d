import pytest
from PIL import Image

from medscan_ui.core.errors import ImageLoadError
from medscan_ui.core.image_io import load_image_for_display, read_image_handle


@pytest.fixture
def png(tmp_path):
    p = tmp_path / "scan.png"
    Image.new("L", (40, 30), 128).save(p)
    return p


def test_read_handle(png):
    handle = read_image_handle(png)
    assert (handle.width, handle.height) == (40, 30)
    assert handle.dimensions_known
    assert handle.source == png


def test_display_image_is_rgb(png):
    img = load_image_for_display(png)
    assert img.mode == "RGB"
    assert img.size == (40, 30)


def test_garbage_file(tmp_path):
    p = tmp_path / "broken.jpg"
    p.write_bytes(b"\x00\x01garbage")
    with pytest.raises(ImageLoadError):
        read_image_handle(p)
    with pytest.raises(ImageLoadError):
        load_image_for_display(p)


def test_missing_file(tmp_path):
    with pytest.raises(ImageLoadError):
        read_image_handle(tmp_path / "missing.png")
