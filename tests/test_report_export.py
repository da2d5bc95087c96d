import csv
from dataclasses import replace
from datetime import date
import logging
from pathlib import Path
from unittest.mock import Mock

import pytest
from PIL import Image
import reportlab

from medscan_ui.core.analysis_kinds import AnalysisKind
from medscan_ui.core.errors import ExportError
from medscan_ui.core.report_export import (
    CSV_FILENAME,
    PDF_FILENAME,
    _fonts,
    build_document,
    build_table_rows,
    compute_page_layout,
    export_document,
    export_table,
    table_text,
)
from medscan_ui.core.results import AnalysisFailure
from medscan_ui.core.strings import ENGLISH, format_report_date

REPORT_DATE = date(2026, 10, 18)


def _csv_lines(save):
    save.assert_called_once()
    filename, data = save.call_args.args
    assert filename == CSV_FILENAME
    return data.decode("utf-8").split("\n")


def test_table_contains_percentages(tumor_result):
    save = Mock()
    assert export_table(tumor_result, AnalysisKind.BRAIN_TUMOR, save, today=REPORT_DATE)
    lines = _csv_lines(save)
    assert "Güven Oranı,87.00%" in lines
    assert "Tümör,87.00%" in lines
    assert "Normal,13.00%" in lines
    assert sum("87.00%" in line for line in lines) == 2


def test_table_row_order(tumor_result):
    save = Mock()
    export_table(tumor_result, AnalysisKind.BRAIN_TUMOR, save, today=REPORT_DATE)
    assert _csv_lines(save) == [
        "Tıbbi Görüntü Analizi Sonuçları",
        "Tarih,18.10.2026",
        "",
        "Analiz Tipi,Beyin Tümörü Tespiti",
        "Sonuç,Tümör Tespit Edildi",
        "Güven Oranı,87.00%",
        "",
        "Olasılık Değerleri",
        "Tümör,87.00%",
        "Normal,13.00%",
    ]


def test_table_without_result_is_a_no_op():
    save = Mock()
    assert not export_table(None, AnalysisKind.BRAIN_TUMOR, save)
    save.assert_not_called()


def test_table_of_failure_is_a_no_op():
    save = Mock()
    assert not export_table(AnalysisFailure("x"), AnalysisKind.BRAIN_TUMOR, save)
    save.assert_not_called()


def test_table_is_idempotent(tumor_result):
    save = Mock()
    export_table(tumor_result, AnalysisKind.BRAIN_TUMOR, save, today=REPORT_DATE)
    export_table(tumor_result, AnalysisKind.BRAIN_TUMOR, save, today=REPORT_DATE)
    first, second = save.call_args_list
    assert first == second


def test_table_english(tumor_result):
    rows = build_table_rows(tumor_result, AnalysisKind.BRAIN_TUMOR, ENGLISH, REPORT_DATE)
    text = table_text(rows)
    assert text.splitlines()[1] == "Date,10/18/2026"
    assert "Analysis Type,Brain Tumor Detection" in text


def test_report_dates():
    assert format_report_date(REPORT_DATE, "tr-TR") == "18.10.2026"
    assert format_report_date(REPORT_DATE, "en-US") == "10/18/2026"
    assert format_report_date(REPORT_DATE, "de-DE") == "2026-10-18"


def test_page_layout_wide_image():
    layout = compute_page_layout(210, 297, 420, 300, top=30)
    assert layout.ratio == 0.5
    assert (layout.x, layout.y, layout.width, layout.height) == (0, 30, 210, 150)


def test_page_layout_tall_image_is_centred():
    layout = compute_page_layout(210, 297, 105, 297, top=30)
    assert layout.ratio == 1
    assert layout.x == pytest.approx(52.5)
    assert layout.width == pytest.approx(105)


def test_document_is_pdf():
    data = build_document(Image.new("RGB", (400, 300), "white"), today=REPORT_DATE)
    assert data.startswith(b"%PDF")


def test_document_is_idempotent():
    snap = Image.new("RGB", (320, 240), (10, 200, 30))
    assert build_document(snap, today=REPORT_DATE) == build_document(snap, today=REPORT_DATE)


def test_document_export_saves_once():
    save = Mock()
    ok = export_document(Image.new("RGB", (200, 100), "white"), save, today=REPORT_DATE)
    assert ok
    save.assert_called_once()
    filename, data = save.call_args.args
    assert filename == PDF_FILENAME
    assert data.startswith(b"%PDF")


@pytest.mark.parametrize("snapshot", [None, Image.new("RGB", (0, 0))])
def test_document_without_panel_fails_without_saving(snapshot, caplog):
    save = Mock()
    with caplog.at_level(logging.ERROR):
        assert not export_document(snapshot, save)
    save.assert_not_called()
    assert "PDF export failed" in caplog.text


def test_build_document_raises_on_missing_panel():
    with pytest.raises(ExportError):
        build_document(None)


def test_missing_font_fails_without_saving(tmp_path, caplog):
    save = Mock()
    with caplog.at_level(logging.ERROR):
        ok = export_document(
            Image.new("RGB", (200, 100)), save, font_path=tmp_path / "nope.ttf"
        )
    assert not ok
    save.assert_not_called()
    assert "PDF export failed" in caplog.text


def test_unreadable_font_raises_export_error(tmp_path):
    bad = tmp_path / "broken.ttf"
    bad.write_bytes(b"not a font")
    with pytest.raises(ExportError):
        build_document(Image.new("RGB", (200, 100)), font_path=bad)


def test_each_font_file_gets_its_own_name():
    fonts = Path(reportlab.__file__).parent / "fonts"
    regular = _fonts(fonts / "Vera.ttf", "x")
    bold = _fonts(fonts / "VeraBd.ttf", "x")
    assert regular != bold
    assert _fonts(fonts / "Vera.ttf", "x") == regular


def test_turkish_header_without_font_warns(caplog):
    with caplog.at_level(logging.WARNING):
        build_document(Image.new("RGB", (200, 100)), today=REPORT_DATE)
    assert "MEDSCAN_PDF_FONT_PATH" in caplog.text


def test_latin_header_without_font_does_not_warn(caplog):
    with caplog.at_level(logging.WARNING):
        build_document(Image.new("RGB", (200, 100)), ENGLISH, today=REPORT_DATE)
    assert "MEDSCAN_PDF_FONT_PATH" not in caplog.text


def test_table_quotes_cells_with_separators():
    text = table_text([["a,b", 'say "hi"'], ["plain"], [""]])
    assert text.split("\n") == ['"a,b","say ""hi"""', "plain", ""]


def test_table_with_comma_in_label_keeps_columns(tumor_result):
    strings = replace(ENGLISH, confidence_label="Confidence, overall")
    rows = build_table_rows(tumor_result, AnalysisKind.BRAIN_TUMOR, strings, REPORT_DATE)
    line = table_text(rows).split("\n")[5]
    assert line == '"Confidence, overall",87.00%'
    assert next(csv.reader([line])) == ["Confidence, overall", "87.00%"]
