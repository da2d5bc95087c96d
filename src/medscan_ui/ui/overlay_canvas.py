from PySide6.QtWidgets import QWidget
from PySide6.QtGui import QPainter, QPen, QColor, QPixmap
from PySide6.QtCore import Qt, QRectF, QSize

from medscan_ui.core.overlay_mapper import EMPTY_LAYOUT, OverlayLayout

REGION_STROKE = QColor("#ff4444")
REGION_FILL = QColor(255, 68, 68, 51)


class OverlayCanvas(QWidget):
    """Draws the image at its display geometry with the region boxes on top."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.pix = None
        self.layout_ = EMPTY_LAYOUT

    def set_image(self, qpix: QPixmap | None):
        self.pix = qpix
        self.update()

    def set_overlay(self, layout: OverlayLayout):
        self.layout_ = layout
        g = layout.geometry
        self.setFixedSize(round(g.display_width), round(g.display_height))
        self.update()

    def sizeHint(self):
        g = self.layout_.geometry
        return QSize(round(g.display_width), round(g.display_height))

    def paintEvent(self, e):
        g = self.layout_.geometry
        if g.is_degenerate:
            return
        p = QPainter(self)
        target = QRectF(0, 0, g.display_width, g.display_height)
        if self.pix:
            p.drawPixmap(target, self.pix, QRectF(self.pix.rect()))
        pen = QPen(REGION_STROKE, 2)
        pen.setStyle(Qt.PenStyle.CustomDashLine)
        pen.setDashPattern([2.5, 2.5])
        p.setPen(pen)
        p.setBrush(REGION_FILL)
        # backend order, last one on top
        for r in self.layout_.rects:
            p.drawRect(QRectF(r.x, r.y, r.width, r.height))
        p.end()
