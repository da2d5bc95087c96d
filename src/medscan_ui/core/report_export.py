"""
Report Export
=============

This module turns the on-screen analysis result into downloadable reports:

- **Document export**: the rasterized result panel placed on an A4 PDF page
  under a title and date header
- **Tabular export**: the verdict, confidence and probabilities as
  comma-separated text

Both exporters hand their bytes to a ``save(filename, data)`` collaborator and
never touch the file system themselves.

Functions
---------
compute_page_layout
    Fit-to-page placement of the snapshot below the header
build_document
    Render the PDF bytes (raises ExportError)
export_document
    Build and save the PDF, logging failures
build_table_rows, table_text
    Assemble and serialize the tabular rows
export_table
    Build and save the CSV, silently skipping when there is no result

Notes
-----
The two exporters treat a missing input differently. A missing or empty panel
snapshot is an export failure: it is logged and ``export_document`` returns
``False``. A missing result makes ``export_table`` a silent no-op, since there
is nothing meaningful to tabulate. Neither case raises.

Output is deterministic for a given snapshot, result and date: the PDF is
written in reportlab's invariant mode, so repeated exports are byte-identical.

Examples
--------
>>> from datetime import date
>>> from medscan_ui.core.report_export import export_table
>>> from medscan_ui.core.analysis_kinds import AnalysisKind
>>> from medscan_ui.core.results import parse_result
>>> result = parse_result({"tumor_detected": True, "confidence": 0.87,
...                        "all_probabilities": {"tumor": 0.87, "no_tumor": 0.13}})
>>> files = {}
>>> export_table(result, AnalysisKind.BRAIN_TUMOR, files.__setitem__,
...              today=date(2026, 10, 18))
True
"""

from dataclasses import dataclass
from datetime import date
import hashlib
import io
import logging
from pathlib import Path
from typing import Callable

from PIL import Image
from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.lib.utils import ImageReader
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFError, TTFont
from reportlab.pdfgen import canvas

from .analysis_kinds import AnalysisKind
from .errors import ExportError
from .results import AnalysisResult, AnalysisSuccess, percent, verdict_text
from .strings import ReportStrings, TURKISH, format_report_date

logger = logging.getLogger(__name__)

SaveFn = Callable[[str, bytes], None]

PDF_FILENAME = "tibbi-goruntu-analizi-raporu.pdf"
CSV_FILENAME = "tibbi-goruntu-analizi-sonuclari.csv"

HEADER_HEIGHT_MM = 30.0
TITLE_BASELINE_MM = 20.0
DATE_POSITION_MM = (20.0, 27.0)
TITLE_FONT_SIZE = 16
DATE_FONT_SIZE = 10
JPEG_QUALITY = 100


@dataclass(frozen=True)
class PageLayout:
    """Image placement on the page, in page units measured from the top-left."""

    x: float
    y: float
    width: float
    height: float
    ratio: float


def compute_page_layout(
    page_width: float,
    page_height: float,
    image_width: float,
    image_height: float,
    top: float,
) -> PageLayout:
    """
    Place an image on a page below a header.

    Parameters
    ----------
    page_width, page_height : float
        Page size in page units
    image_width, image_height : float
        Snapshot size in pixels; must be positive
    top : float
        Header height; the image's top edge sits here

    Returns
    -------
    PageLayout
        Uniform ``ratio = min(page_width / image_width,
        page_height / image_height)``, horizontally centred, top at ``top``

    Notes
    -----
    The ratio fits the image to the whole page, not the area under the
    header, so a tall snapshot can run past the bottom margin.
    """
    ratio = min(page_width / image_width, page_height / image_height)
    w = image_width * ratio
    h = image_height * ratio
    return PageLayout(x=(page_width - w) / 2, y=top, width=w, height=h, ratio=ratio)


def _standard_fonts_can_draw(text: str) -> bool:
    # the standard Type 1 fonts cover WinAnsi only
    try:
        text.encode("cp1252")
    except UnicodeEncodeError:
        return False
    return True


def _fonts(font_path: str | Path | None, text: str) -> tuple[str, str]:
    """
    Resolve title and body font names, registering ``font_path`` if given.

    Each distinct font file is registered under its own name, so a later
    call with another path does not reuse an earlier font.

    Raises
    ------
    ExportError
        If the font file is missing or is not a usable TrueType font
    """
    if not font_path:
        if not _standard_fonts_can_draw(text):
            logger.warning(
                "Report header %r has characters Helvetica cannot draw; "
                "set MEDSCAN_PDF_FONT_PATH to a TrueType font",
                text,
            )
        return "Helvetica-Bold", "Helvetica"
    key = str(Path(font_path).resolve())
    name = "ReportFont-" + hashlib.sha1(key.encode("utf-8")).hexdigest()[:12]
    if name not in pdfmetrics.getRegisteredFontNames():
        try:
            pdfmetrics.registerFont(TTFont(name, key))
        except (TTFError, OSError) as e:
            raise ExportError(f"Could not load PDF font {font_path}: {e}") from e
    return name, name


def build_document(
    snapshot: Image.Image | None,
    strings: ReportStrings = TURKISH,
    today: date | None = None,
    header_height_mm: float = HEADER_HEIGHT_MM,
    font_path: str | Path | None = None,
) -> bytes:
    """
    Render the PDF report for a panel snapshot.

    Parameters
    ----------
    snapshot : PIL.Image or None
        Rasterized result panel (already supersampled)
    strings : ReportStrings, default=TURKISH
        Title and date labels
    today : date, optional
        Report date, defaults to the current date
    header_height_mm : float, default=30
        Vertical offset of the image below the page top
    font_path : str, optional
        TrueType font for the header text. Needed for glyphs outside the
        standard PDF fonts.

    Returns
    -------
    bytes
        Single-page A4 portrait PDF

    Raises
    ------
    ExportError
        If the snapshot is missing, has zero size, or cannot be encoded, or
        if ``font_path`` cannot be loaded
    """
    if snapshot is None:
        raise ExportError("No result panel to export")
    if snapshot.width <= 0 or snapshot.height <= 0:
        raise ExportError("Result panel snapshot is empty")
    today = today or date.today()

    try:
        jpeg = io.BytesIO()
        snapshot.convert("RGB").save(jpeg, format="JPEG", quality=JPEG_QUALITY)
        jpeg.seek(0)
    except (OSError, ValueError) as e:
        raise ExportError(f"Could not encode snapshot: {e}") from e

    page_w, page_h = A4
    layout = compute_page_layout(
        page_w, page_h, snapshot.width, snapshot.height, header_height_mm * mm
    )
    date_line = f"{strings.date_label}: {format_report_date(today, strings.locale)}"
    title_font, body_font = _fonts(font_path, strings.report_title + date_line)

    buf = io.BytesIO()
    pdf = canvas.Canvas(buf, pagesize=A4, invariant=1)
    pdf.setTitle(strings.report_title)
    pdf.setFont(title_font, TITLE_FONT_SIZE)
    pdf.drawCentredString(page_w / 2, page_h - TITLE_BASELINE_MM * mm, strings.report_title)
    pdf.setFont(body_font, DATE_FONT_SIZE)
    dx, dy = DATE_POSITION_MM
    pdf.drawString(dx * mm, page_h - dy * mm, date_line)
    # reportlab's origin is bottom-left
    pdf.drawImage(
        ImageReader(jpeg),
        layout.x,
        page_h - layout.y - layout.height,
        width=layout.width,
        height=layout.height,
    )
    pdf.showPage()
    pdf.save()
    return buf.getvalue()


def export_document(
    snapshot: Image.Image | None,
    save: SaveFn,
    strings: ReportStrings = TURKISH,
    today: date | None = None,
    filename: str = PDF_FILENAME,
    header_height_mm: float = HEADER_HEIGHT_MM,
    font_path: str | Path | None = None,
) -> bool:
    """
    Build the PDF report and hand it to ``save``.

    Returns
    -------
    bool
        ``True`` if the file was saved. ``False`` if the export failed; the
        failure is logged and ``save`` is not called, so no partial file
        exists.
    """
    try:
        data = build_document(snapshot, strings, today, header_height_mm, font_path)
    except ExportError as e:
        logger.error("PDF export failed: %s", e)
        return False
    save(filename, data)
    logger.info("Saved PDF report %s (%d bytes)", filename, len(data))
    return True


def build_table_rows(
    result: AnalysisSuccess,
    kind: AnalysisKind,
    strings: ReportStrings = TURKISH,
    today: date | None = None,
) -> list[list[str]]:
    """
    Rows of the tabular report, in their fixed order.

    Title, date, blank, analysis type, verdict, confidence, blank,
    probabilities heading, tumour probability, normal probability.
    Percentages have two decimals.
    """
    today = today or date.today()
    probs = result.probabilities
    return [
        [strings.results_title],
        [strings.date_label, format_report_date(today, strings.locale)],
        [""],
        [strings.analysis_type_label, strings.kind(kind).title],
        [strings.result_label, verdict_text(result, strings)],
        [strings.confidence_label, percent(result.confidence)],
        [""],
        [strings.probabilities_label],
        [strings.tumor_label, percent(probs.tumor)],
        [strings.normal_label, percent(probs.no_tumor)],
    ]


def _csv_cell(value: str) -> str:
    if any(c in value for c in ',"\r\n'):
        return '"' + value.replace('"', '""') + '"'
    return value


def table_text(rows: list[list[str]]) -> str:
    """Join rows into CSV text; cells with a comma, quote or line break are quoted."""
    return "\n".join(",".join(_csv_cell(cell) for cell in row) for row in rows)


def export_table(
    result: AnalysisResult | None,
    kind: AnalysisKind,
    save: SaveFn,
    strings: ReportStrings = TURKISH,
    today: date | None = None,
    filename: str = CSV_FILENAME,
) -> bool:
    """
    Build the CSV report and hand it to ``save`` as UTF-8.

    Parameters
    ----------
    result : AnalysisSuccess, AnalysisFailure or None
        Current result. Only a success is exported.
    kind : AnalysisKind
        Analysis the result belongs to
    save : callable
        ``save(filename, data)`` file-save collaborator

    Returns
    -------
    bool
        ``True`` if saved. ``False`` without calling ``save`` when there is no
        successful result; this is not an error and is not logged as one.
    """
    if not isinstance(result, AnalysisSuccess):
        logger.debug("CSV export skipped: no result")
        return False
    text = table_text(build_table_rows(result, kind, strings, today))
    save(filename, text.encode("utf-8"))
    logger.info("Saved CSV results %s", filename)
    return True
