"""Result panel: verdict, tumour overlay, probability bars and advice."""

from PySide6.QtWidgets import QWidget, QVBoxLayout, QLabel, QFrame
from PySide6.QtGui import QPainter, QColor, QImage
from PySide6.QtCore import Qt, QRectF

from medscan_ui.core.overlay_mapper import OverlayLayout
from medscan_ui.core.results import (
    AnalysisFailure,
    AnalysisSuccess,
    advice_text,
    percent,
    verdict_text,
)
from medscan_ui.core.strings import ReportStrings
from .overlay_canvas import OverlayCanvas
from .qt_image import qimage_to_pil

TUMOR_COLOR = QColor("#ff4444")
NORMAL_COLOR = QColor("#4caf50")


class ProbabilityBars(QWidget):
    """Two horizontal bars, tumour and normal, labelled with percentages."""

    def __init__(self, strings: ReportStrings, parent=None):
        super().__init__(parent)
        self.strings = strings
        self.values = (0.0, 0.0)
        self.setMinimumHeight(70)

    def set_values(self, tumor: float, no_tumor: float):
        self.values = (tumor, no_tumor)
        self.update()

    def paintEvent(self, e):
        p = QPainter(self)
        label_w = 140
        bar_w = max(0, self.width() - label_w - 10)
        rows = [
            (self.strings.tumor_label, self.values[0], TUMOR_COLOR),
            (self.strings.normal_label, self.values[1], NORMAL_COLOR),
        ]
        for i, (name, value, color) in enumerate(rows):
            y = 8 + i * 30
            p.setPen(QColor("#333333"))
            p.drawText(QRectF(0, y, label_w, 22), Qt.AlignmentFlag.AlignVCenter,
                       f"{name}: {percent(value)}")
            p.fillRect(QRectF(label_w, y, bar_w, 22), QColor("#eeeeee"))
            p.fillRect(QRectF(label_w, y, bar_w * max(0.0, min(1.0, value)), 22), color)
        p.end()


class ResultsPanel(QFrame):
    """
    Renders the current analysis result.

    The panel is what the PDF report shows: :meth:`snapshot` rasterizes it.
    """

    def __init__(self, strings: ReportStrings, parent=None):
        super().__init__(parent)
        self.strings = strings
        self.has_content = False
        self.setStyleSheet("ResultsPanel { background: white; }")
        v = QVBoxLayout(self)

        self.verdict = QLabel()
        self.verdict.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.verdict.setStyleSheet("font-size: 18px; font-weight: bold;")
        v.addWidget(self.verdict)

        self.confidence = QLabel()
        self.confidence.setAlignment(Qt.AlignmentFlag.AlignCenter)
        v.addWidget(self.confidence)

        self.overlay_title = QLabel(strings.overlay_title)
        self.overlay_title.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.overlay_title.setStyleSheet("font-weight: bold; color: #1976d2;")
        v.addWidget(self.overlay_title)
        self.canvas = OverlayCanvas(self)
        v.addWidget(self.canvas, 0, Qt.AlignmentFlag.AlignHCenter)
        self.overlay_caption = QLabel(strings.overlay_caption)
        self.overlay_caption.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.overlay_caption.setStyleSheet("color: #666;")
        v.addWidget(self.overlay_caption)

        self.bars = ProbabilityBars(strings, self)
        v.addWidget(self.bars)

        self.advice = QLabel()
        self.advice.setWordWrap(True)
        v.addWidget(self.advice)

        self.show_result(None, None, None)

    def _set_overlay_visible(self, visible: bool):
        for w in (self.overlay_title, self.canvas, self.overlay_caption):
            w.setVisible(visible)

    def show_result(self, result, layout: OverlayLayout | None, pixmap):
        """Show a result variant; ``None`` hides everything."""
        self.has_content = isinstance(result, AnalysisSuccess)
        for w in (self.verdict, self.confidence, self.bars, self.advice):
            w.setVisible(result is not None)
        self._set_overlay_visible(False)
        if result is None:
            return
        if isinstance(result, AnalysisFailure):
            self.verdict.setText(result.error)
            self.verdict.setStyleSheet("font-size: 16px; color: #d32f2f;")
            for w in (self.confidence, self.bars, self.advice):
                w.setVisible(False)
            return

        color = "#d32f2f" if result.tumor_detected else "#2e7d32"
        self.verdict.setText(verdict_text(result, self.strings))
        self.verdict.setStyleSheet(f"font-size: 18px; font-weight: bold; color: {color};")
        self.confidence.setText(
            f"{self.strings.confidence_label}: <b>{percent(result.confidence)}</b>"
        )
        self.bars.set_values(result.probabilities.tumor, result.probabilities.no_tumor)
        self.advice.setText(advice_text(result, self.strings))
        self.advice.setStyleSheet(
            "padding: 8px; border-radius: 4px; background: %s;"
            % ("#fff4e5" if result.tumor_detected else "#edf7ed")
        )
        if layout is not None and layout.rects:
            self.canvas.set_image(pixmap)
            self.canvas.set_overlay(layout)
            self._set_overlay_visible(True)

    def snapshot(self, scale: int = 2):
        """
        Rasterize the panel at ``scale`` times its on-screen size.

        Returns a PIL image, or ``None`` if the panel has no result or no size.
        """
        if not self.has_content or self.width() <= 0 or self.height() <= 0:
            return None
        img = QImage(self.width() * scale, self.height() * scale,
                     QImage.Format.Format_ARGB32)
        img.fill(QColor("white"))
        p = QPainter(img)
        p.scale(scale, scale)
        self.render(p)
        p.end()
        return qimage_to_pil(img)
