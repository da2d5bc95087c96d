"""Analysis tab: image selection, display controls, analysis and export."""

import logging
from pathlib import Path

from PySide6.QtWidgets import (
    QWidget,
    QVBoxLayout,
    QHBoxLayout,
    QPushButton,
    QLabel,
    QFileDialog,
    QGroupBox,
    QSlider,
    QProgressBar,
    QScrollArea,
    QMessageBox,
)
from PySide6.QtCore import Qt

from medscan_ui.core.analysis_kinds import AnalysisKind, file_dialog_filter
from medscan_ui.core.errors import AnalysisInProgressError
from medscan_ui.core.image_io import load_image_for_display, read_image_handle
from medscan_ui.core.results import AnalysisFailure
from medscan_ui.core.session import SessionController, SessionState
from medscan_ui.core.tasks import submit
from medscan_ui.core.transform_state import (
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
from .image_preview import ImagePreview
from .qt_image import pil_to_qpixmap
from .results_panel import ResultsPanel

logger = logging.getLogger(__name__)


def _decode(path: str):
    return read_image_handle(path), load_image_for_display(path)


class AnalysisTab(QWidget):
    """
    One analysis kind's workflow.

    Parameters
    ----------
    kind : AnalysisKind
        Analysis this tab submits to
    session : SessionController
        Shared session; the tab renders it whenever it is the active kind
    """

    def __init__(self, kind: AnalysisKind, session: SessionController, parent=None):
        super().__init__(parent)
        self.kind = kind
        self.session = session
        self.strings = session.strings
        self.display_image = None
        self._pending_signals = []
        self._build()
        session.subscribe(self._on_state)
        self._on_state(session.state)

    def _build(self):
        text = self.strings.kind(self.kind)
        outer = QVBoxLayout(self)
        scroll = QScrollArea()
        scroll.setWidgetResizable(True)
        body = QWidget()
        v = QVBoxLayout(body)
        scroll.setWidget(body)
        outer.addWidget(scroll)

        info = QLabel(f"<b>{text.title}</b><br>{text.description}<br>{text.formats}")
        info.setStyleSheet("background: #e5f6fd; padding: 10px; border-radius: 4px;")
        v.addWidget(info)

        g = QGroupBox("Image")
        h = QHBoxLayout()
        self.file_label = QLabel("No file selected")
        self.file_label.setStyleSheet("color: #666;")
        select_btn = QPushButton("Select Image…")
        select_btn.clicked.connect(self._select_image)
        self.remove_btn = QPushButton("Remove")
        self.remove_btn.clicked.connect(self.session.remove_image)
        h.addWidget(self.file_label, 1)
        h.addWidget(select_btn)
        h.addWidget(self.remove_btn)
        g.setLayout(h)
        v.addWidget(g)

        self.preview = ImagePreview(self)
        v.addWidget(self.preview, 1)

        self.controls = self._create_controls_group()
        v.addWidget(self.controls)

        run = QHBoxLayout()
        self.analyze_btn = QPushButton(self.strings.analyze_button)
        self.analyze_btn.setMinimumWidth(200)
        self.analyze_btn.clicked.connect(self._analyze)
        self.pb = QProgressBar()
        self.pb.setRange(0, 0)
        self.pb.hide()
        run.addStretch(1)
        run.addWidget(self.analyze_btn)
        run.addWidget(self.pb)
        run.addStretch(1)
        v.addLayout(run)

        self.results = ResultsPanel(self.strings, self)
        v.addWidget(self.results)

        self.export_group = QGroupBox("Export")
        eh = QHBoxLayout()
        self.pdf_btn = QPushButton(self.strings.pdf_button)
        self.pdf_btn.clicked.connect(self._export_pdf)
        self.csv_btn = QPushButton(self.strings.csv_button)
        self.csv_btn.clicked.connect(self._export_csv)
        eh.addWidget(self.pdf_btn)
        eh.addWidget(self.csv_btn)
        self.export_group.setLayout(eh)
        v.addWidget(self.export_group)

    def _create_controls_group(self):
        group = QGroupBox("Image Controls")
        v = QVBoxLayout()

        self.brightness = self._slider(lambda x: self.session.adjust(set_brightness, x))
        self.contrast = self._slider(lambda x: self.session.adjust(set_contrast, x))
        for name, slider in (("Brightness", self.brightness), ("Contrast", self.contrast)):
            row = QHBoxLayout()
            row.addWidget(QLabel(name))
            row.addWidget(QLabel("0%"))
            row.addWidget(slider, 1)
            row.addWidget(QLabel("200%"))
            v.addLayout(row)

        buttons = QHBoxLayout()
        self.zoom_in_btn = QPushButton("Zoom In")
        self.zoom_out_btn = QPushButton("Zoom Out")
        for label, setter, btn in [
            ("Rotate Left", rotate_left, None),
            ("Rotate Right", rotate_right, None),
            ("Flip Horizontal", toggle_flip_x, None),
            ("Flip Vertical", toggle_flip_y, None),
            (None, zoom_in, self.zoom_in_btn),
            (None, zoom_out, self.zoom_out_btn),
            ("Reset", reset, None),
        ]:
            b = btn or QPushButton(label)
            b.clicked.connect(lambda _=False, s=setter: self.session.adjust(s))
            buttons.addWidget(b)
        v.addLayout(buttons)
        group.setLayout(v)
        return group

    def _slider(self, on_change):
        s = QSlider(Qt.Orientation.Horizontal)
        s.setRange(0, 200)
        s.setValue(100)
        s.valueChanged.connect(on_change)
        return s

    def _active(self, state: SessionState) -> bool:
        return state.kind is self.kind

    def _on_state(self, state: SessionState):
        active = self._active(state)
        has_image = active and state.image is not None
        ready = active and state.image_ready
        if not ready:
            # never show a previous image under a newly selected file
            self.display_image = None
            self.preview.clear()
        if not has_image:
            self.file_label.setText("No file selected")

        self.remove_btn.setEnabled(has_image)
        self.controls.setVisible(ready)
        self.analyze_btn.setVisible(has_image)
        self.analyze_btn.setEnabled(ready and not state.pending)
        self.pb.setVisible(active and state.pending)

        settings = state.settings
        for slider, value in ((self.brightness, settings.brightness),
                              (self.contrast, settings.contrast)):
            if slider.value() != round(value):
                slider.blockSignals(True)
                slider.setValue(round(value))
                slider.blockSignals(False)
        self.zoom_in_btn.setEnabled(can_zoom_in(settings))
        self.zoom_out_btn.setEnabled(can_zoom_out(settings))
        self.preview.set_settings(settings)

        result = state.result if active else None
        pix = pil_to_qpixmap(self.display_image) if self.display_image is not None else None
        self.results.show_result(result, self.session.overlay(), pix)
        self.export_group.setVisible(result is not None)

    def _select_image(self):
        file_path, _ = QFileDialog.getOpenFileName(
            self, "Select Image", "", file_dialog_filter(self.kind)
        )
        if not file_path:
            return
        self.session.select_image(file_path)
        self.file_label.setText(file_path)
        # callbacks are queued to this thread, so they run after sigs is bound
        sigs = submit(
            _decode,
            file_path,
            on_finished=lambda res: self._decoded(sigs, res),
            on_error=lambda msg: self._decode_failed(sigs, file_path, msg),
        )
        self._pending_signals.append(sigs)

    def _decoded(self, sigs, res):
        self._pending_signals.remove(sigs)
        handle, pil_image = res
        current = self.session.state.image
        if current is None or str(current.source) != str(handle.source):
            return
        self.display_image = pil_image
        self.preview.set_image(pil_image)
        self.session.image_loaded(handle)

    def _decode_failed(self, sigs, file_path, msg):
        self._pending_signals.remove(sigs)
        if self.session.image_failed(file_path):
            self.file_label.setText(f"Error loading image: {msg}")

    def _analyze(self):
        try:
            ticket = self.session.begin_analysis()
        except AnalysisInProgressError:
            return
        if ticket is None:
            return
        client = self.session.client

        def done(result):
            self._pending_signals.remove(sigs)
            self.session.finish_analysis(ticket, result)

        def failed(msg):
            self._pending_signals.remove(sigs)
            self.session.finish_analysis(ticket, AnalysisFailure(client.failure_message))

        sigs = submit(
            client.analyze, ticket.kind, ticket.image_path,
            on_finished=done, on_error=failed,
        )
        self._pending_signals.append(sigs)

    def _save(self, filename: str, data: bytes):
        d = QFileDialog.getExistingDirectory(self, "Save To")
        if not d:
            logger.info("Save of %s cancelled", filename)
            return
        path = Path(d) / filename
        try:
            path.write_bytes(data)
        except OSError as e:
            logger.error("Could not write %s: %s", path, e)
            QMessageBox.warning(self, "Export", f"Could not write {path}:\n{e}")
            return
        logger.info("Wrote %s", path)

    def _export_pdf(self):
        self.pdf_btn.setEnabled(False)
        try:
            snapshot = self.results.snapshot(self.session.config.supersample_scale)
            if not self.session.export_document(snapshot, self._save):
                QMessageBox.warning(self, "Export", "The PDF report could not be created.")
        finally:
            self.pdf_btn.setEnabled(True)

    def _export_csv(self):
        self.session.export_table(self._save)
