"""
MedScan GUI Application Entry Point.

Launches the graphical client for remote medical image analysis.
"""

import sys

from PySide6.QtWidgets import QApplication

from medscan_ui.core.config import get_settings
from medscan_ui.core.logging_config import setup_logging
from medscan_ui.core.session import SessionController
from medscan_ui.ui.main_window import MainWindow


def main():
    """
    Launch the MedScan GUI application.

    Returns
    -------
    int
        Exit code (0 for success)
    """
    settings = get_settings()
    setup_logging(settings)

    app = QApplication(sys.argv)
    app.setApplicationName("MedScan")
    app.setStyle("Fusion")

    window = MainWindow(SessionController(settings))
    window.show()

    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
