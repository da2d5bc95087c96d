"""
Core Application Logic for MedScan
==================================

This package holds the visualization and export pipeline behind the MedScan
desktop client. Apart from :mod:`~medscan_ui.core.tasks` it has no Qt
dependency and can be used and tested headless.

- **Transform state**: brightness, contrast, rotation, zoom and flips of the
  preview image, changed through pure setters
- **Transform rendering**: the settings compiled into a filter/transform
  descriptor, an affine matrix, or a rendered PIL image
- **Overlay mapping**: backend tumour regions projected onto the scaled
  display surface
- **Report export**: PDF report of the result panel and CSV of the result
- **Session**: the in-memory state of one user session and its events
- **Backend client**: multipart upload to the analysis endpoints

Data Model
----------
Every state value is a frozen dataclass and is replaced, never mutated:
``ImageSettings``, ``ImageHandle``, ``Region``, ``DisplayGeometry``, the
``AnalysisSuccess`` / ``AnalysisFailure`` result variants and
``SessionState``.

Examples
--------
>>> from medscan_ui.core import ImageHandle, Region, map_regions
>>> layout = map_regions(ImageHandle("scan.png", 800, 600),
...                      [Region(0, 0, 0.5, 0.5), Region(0.5, 0.5, 0.5, 0.5)])
>>> [r.as_tuple() for r in layout.rects]
[(0.0, 0.0, 300.0, 225.0), (300.0, 225.0, 300.0, 225.0)]

Modules
-------
transform_state
    ImageSettings and its setters
transform_renderer
    VisualEffect descriptor, affine matrix, PIL rendering
overlay_mapper
    Display geometry and region projection
report_export
    PDF and CSV exporters
results
    Result variants and payload parsing
session
    SessionController
api_client
    HTTP client for the analysis backend
analysis_kinds
    The three analysis kinds and their endpoints
strings
    Report labels per locale
image_io
    Image decoding (Pillow, pydicom)
config
    Environment-driven settings
logging_config
    Root logger setup
tasks
    QThreadPool wrapper for background work

See Also
--------
medscan_ui.ui : PySide6 GUI components
"""

from .analysis_kinds import AnalysisKind
from .overlay_mapper import (
    DisplayGeometry,
    DisplayRect,
    ImageHandle,
    OverlayLayout,
    Region,
    compute_display_geometry,
    map_regions,
)
from .results import AnalysisFailure, AnalysisSuccess, Probabilities, parse_result
from .session import SessionController, SessionState
from .transform_renderer import VisualEffect, render_effect
from .transform_state import ImageSettings

__all__ = [
    "AnalysisKind",
    "AnalysisFailure",
    "AnalysisSuccess",
    "DisplayGeometry",
    "DisplayRect",
    "ImageHandle",
    "ImageSettings",
    "OverlayLayout",
    "Probabilities",
    "Region",
    "SessionController",
    "SessionState",
    "VisualEffect",
    "compute_display_geometry",
    "map_regions",
    "parse_result",
    "render_effect",
]
