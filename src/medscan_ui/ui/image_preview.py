from PySide6.QtWidgets import QWidget
from PySide6.QtGui import QPainter, QColor, QTransform
from PySide6.QtCore import QPointF, QRectF

from medscan_ui.core.transform_renderer import apply_filters, effect_matrix
from medscan_ui.core.transform_state import ImageSettings, DEFAULT_SETTINGS
from .qt_image import pil_to_qpixmap


class ImagePreview(QWidget):
    """
    Preview of the selected image with the current settings applied.

    Filters are baked into the pixmap whenever the settings change; the
    geometric transform is applied about the widget centre at paint time.
    """

    def __init__(self, parent=None):
        super().__init__(parent)
        self.base = None
        self.pix = None
        self.settings = DEFAULT_SETTINGS
        self.setMinimumSize(500, 500)

    def set_image(self, pil_image):
        self.base = pil_image
        self._refresh()

    def clear(self):
        self.base = None
        self.pix = None
        self.update()

    def set_settings(self, settings: ImageSettings):
        filters_changed = (settings.brightness, settings.contrast) != (
            self.settings.brightness,
            self.settings.contrast,
        )
        self.settings = settings
        if filters_changed or self.pix is None:
            self._refresh()
        else:
            self.update()

    def _refresh(self):
        if self.base is not None:
            self.pix = pil_to_qpixmap(apply_filters(self.base, self.settings))
        self.update()

    def paintEvent(self, e):
        p = QPainter(self)
        p.fillRect(self.rect(), QColor("#fafafa"))
        if not self.pix:
            p.end()
            return
        p.setRenderHint(QPainter.RenderHint.SmoothPixmapTransform)
        # fit the untransformed image, like object-fit: contain
        fit = min(self.width() / self.pix.width(), self.height() / self.pix.height(), 1.0)
        w, h = self.pix.width() * fit, self.pix.height() * fit
        m = effect_matrix(self.settings)
        t = QTransform(m[0, 0], m[1, 0], m[0, 1], m[1, 1], 0.0, 0.0)
        c = QPointF(self.width() / 2, self.height() / 2)
        p.translate(c)
        p.setTransform(t, True)
        p.drawPixmap(QRectF(-w / 2, -h / 2, w, h), self.pix, QRectF(self.pix.rect()))
        p.end()
