"""Main window for the MedScan application."""

from PySide6.QtWidgets import QMainWindow, QTabWidget, QWidget, QVBoxLayout, QLabel
from PySide6.QtCore import Qt

from medscan_ui.core.analysis_kinds import AnalysisKind
from medscan_ui.core.session import SessionController
from .analysis_tab import AnalysisTab


class MainWindow(QMainWindow):
    """
    Main application window with one tab per analysis kind.

    Kinds the backend does not serve yet get a disabled tab.

    Parameters
    ----------
    session : SessionController
        Session shared by all tabs
    parent : QWidget, optional
        Parent widget, by default None

    Attributes
    ----------
    tab_widget : QTabWidget
        Tab container, one tab per AnalysisKind in declaration order
    """

    def __init__(self, session: SessionController, parent=None):
        super().__init__(parent)
        self.session = session
        self.kinds = list(AnalysisKind)
        self.setWindowTitle(session.strings.app_title)
        self.setMinimumSize(1000, 800)

        central_widget = QWidget()
        self.setCentralWidget(central_widget)
        layout = QVBoxLayout(central_widget)

        header = QLabel(session.strings.app_title)
        header.setAlignment(Qt.AlignmentFlag.AlignCenter)
        header.setStyleSheet(
            "font-size: 26px; font-weight: bold; color: white; "
            "background: #1976d2; padding: 18px;"
        )
        layout.addWidget(header)

        self.tab_widget = QTabWidget()
        layout.addWidget(self.tab_widget)
        self._setup_tabs()
        self.tab_widget.currentChanged.connect(self._tab_changed)

    def _setup_tabs(self):
        for i, kind in enumerate(self.kinds):
            tab = AnalysisTab(kind, self.session)
            self.tab_widget.addTab(tab, self.session.strings.kind(kind).tab_label)
            self.tab_widget.setTabEnabled(i, kind.enabled)
        self.tab_widget.setCurrentIndex(self.kinds.index(self.session.state.kind))

    def _tab_changed(self, index: int):
        kind = self.kinds[index]
        if kind.enabled:
            self.session.select_kind(kind)
