"""
MedScan: Medical Image Analysis Client
======================================

MedScan is a desktop client for remote classification of medical images. The
user loads an image, adjusts how it is displayed, sends it to the analysis
backend and inspects the result: the verdict, class probabilities and the
suspected tumour regions drawn over the image. Results export to a PDF report
and a CSV file.

The application supports three analysis kinds, of which brain-tumour
detection is currently served:

1. **Brain tumour detection** on MR images
2. **Cancer detection** on histopathology images (disabled)
3. **Alzheimer detection** on brain MR images (disabled)

Quick Start
-----------
>>> from medscan_ui.core import SessionController
>>> session = SessionController()
>>> handle = session.select_image("scan.png")
>>> session.image_loaded(handle.resolved(800, 600))
True
>>> result = session.run_analysis()
>>> session.export_table(lambda name, data: open(name, "wb").write(data))
True

Main Modules
------------
core
    Transform state, rendering, overlay mapping, export, session, backend client
ui
    PySide6 GUI components

See Also
--------
README.md : Project overview and installation instructions
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
