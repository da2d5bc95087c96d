"""
Image I/O Utilities
===================

This module decodes the user's selected file. It handles standard image
formats (PNG, JPEG, GIF, TIFF) through Pillow and DICOM files through pydicom.

Functions
---------
read_image_handle
    Decode intrinsic pixel dimensions into a resolved ImageHandle
load_image_for_display
    Load and convert an image to RGB for GUI display

Notes
-----
DICOM handling:
- Extracts pixel_array and normalizes to 0-255 range for display
- Dimensions are taken from the Rows/Columns of the dataset

Both functions are blocking; the GUI runs them through
:func:`medscan_ui.core.tasks.submit` so the decode completes asynchronously.

See Also
--------
medscan_ui.core.overlay_mapper.ImageHandle : Result of read_image_handle
"""

import logging
from pathlib import Path

import numpy as np
from PIL import Image, UnidentifiedImageError

from .errors import ImageLoadError
from .overlay_mapper import ImageHandle

logger = logging.getLogger(__name__)


def _is_dicom(path: str | Path) -> bool:
    return str(path).lower().endswith(".dcm")


def _read_dicom_array(path: str | Path) -> np.ndarray:
    import pydicom
    from pydicom.errors import InvalidDicomError

    try:
        ds = pydicom.dcmread(str(path))
    except InvalidDicomError as e:
        raise ValueError(str(e)) from e
    arr = ds.pixel_array.astype(np.float32)
    # multi-frame: show the first frame
    if arr.ndim == 3 and arr.shape[-1] not in (3, 4):
        arr = arr[0]
    return arr


def read_image_handle(path: str | Path) -> ImageHandle:
    """
    Decode an image's intrinsic size.

    Parameters
    ----------
    path : str or Path
        Image file. DICOM (.dcm) or any format Pillow opens.

    Returns
    -------
    ImageHandle
        Handle with ``width`` and ``height`` set

    Raises
    ------
    ImageLoadError
        If the file is missing or cannot be decoded
    """
    try:
        if _is_dicom(path):
            arr = _read_dicom_array(path)
            height, width = arr.shape[:2]
        else:
            with Image.open(path) as img:
                width, height = img.size
    except (OSError, UnidentifiedImageError, ValueError) as e:
        logger.error("Could not decode %s: %s", path, e)
        raise ImageLoadError(f"Could not decode {path}: {e}") from e
    logger.debug("Decoded %s as %dx%d", path, width, height)
    return ImageHandle(path, int(width), int(height))


def load_image_for_display(path: str | Path) -> Image.Image:
    """
    Load image and convert to RGB for GUI display.

    Parameters
    ----------
    path : str or Path
        Path to image file (DICOM or any Pillow format)

    Returns
    -------
    PIL.Image
        RGB image ready for display (8-bit, 3 channels)

    Raises
    ------
    ImageLoadError
        If the file is missing or cannot be decoded

    Notes
    -----
    DICOM pixel data is shifted to start at 0, divided by its maximum and
    scaled to 0-255, so images of any bit depth display correctly.
    """
    try:
        if _is_dicom(path):
            arr = _read_dicom_array(path)
            arr -= arr.min()
            if arr.max() > 0:
                arr /= arr.max()
            arr = (arr * 255).astype(np.uint8)
            return Image.fromarray(arr).convert("RGB")
        with Image.open(path) as img:
            return img.convert("RGB")
    except (OSError, UnidentifiedImageError, ValueError) as e:
        logger.error("Could not load %s for display: %s", path, e)
        raise ImageLoadError(f"Could not load {path}: {e}") from e
