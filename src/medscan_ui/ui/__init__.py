"""
UI Components for MedScan
=========================

This module provides the PySide6 graphical user interface. The main window
holds one tab per analysis kind; only brain-tumour detection is enabled.

Each analysis tab offers:

1. **Image selection** (PNG, JPEG, GIF, TIFF, DICOM) with a live preview
2. **Display controls**: brightness, contrast, rotation, flips, zoom, reset
3. **Analysis**: upload to the backend with a pending indicator
4. **Results**: verdict, confidence, probability bars, tumour overlay
5. **Export**: PDF report and CSV results

UI Components
-------------
MainWindow
    Tabbed main window container
AnalysisTab
    Workflow of one analysis kind
ImagePreview
    Preview with the current image settings applied
ResultsPanel
    Result view that is also rasterized for the PDF report
OverlayCanvas
    Image at display geometry with the tumour region boxes

Architecture Notes
------------------
- All state lives in ``core.SessionController``; widgets re-render from its
  state notifications
- Image decoding and backend requests run through ``core.tasks.submit()``
- No state is persisted

Examples
--------
>>> from PySide6.QtWidgets import QApplication
>>> from medscan_ui.core import SessionController
>>> from medscan_ui.ui.main_window import MainWindow
>>> import sys
>>>
>>> app = QApplication(sys.argv)
>>> window = MainWindow(SessionController())
>>> window.show()
>>> sys.exit(app.exec())

See Also
--------
medscan_ui.core : Application logic and state management
apps.gui_app : Entry point for launching the GUI
"""

__all__ = []
