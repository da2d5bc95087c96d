"""Conversions between PIL images and Qt images."""

import numpy as np
from PIL import Image
from PySide6.QtGui import QImage, QPixmap


def pil_to_qpixmap(pil_image: Image.Image) -> QPixmap:
    img_array = np.ascontiguousarray(np.array(pil_image.convert("RGB")))
    height, width, _ = img_array.shape
    bytes_per_line = 3 * width
    q_image = QImage(
        img_array.data, width, height, bytes_per_line, QImage.Format.Format_RGB888
    )
    # QImage does not own the numpy buffer
    return QPixmap.fromImage(q_image.copy())


def qimage_to_pil(q_image: QImage) -> Image.Image:
    img = q_image.convertToFormat(QImage.Format.Format_RGBA8888)
    width, height = img.width(), img.height()
    buf = bytes(img.constBits())
    stride = img.bytesPerLine()
    return Image.frombuffer("RGBA", (width, height), buf, "raw", "RGBA", stride, 1).convert(
        "RGB"
    )
