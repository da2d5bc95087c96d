import pytest

from medscan_ui.core.analysis_kinds import (
    ACCEPTED_EXTENSIONS,
    AnalysisKind,
    file_dialog_filter,
)


def _entries(kind):
    return file_dialog_filter(kind).split(";;")


def test_only_brain_tumor_is_enabled():
    assert [k for k in AnalysisKind if k.enabled] == [AnalysisKind.BRAIN_TUMOR]


@pytest.mark.parametrize("kind", list(AnalysisKind))
def test_dialog_filter_starts_with_kind_formats(kind):
    first = _entries(kind)[0]
    for ext in kind.extensions:
        assert f"*{ext}" in first
    for ext in set(ACCEPTED_EXTENSIONS) - set(kind.extensions):
        assert f"*{ext}" not in first


def test_microscopy_and_mr_formats_differ():
    cancer = _entries(AnalysisKind.CANCER)[0]
    brain = _entries(AnalysisKind.BRAIN_TUMOR)[0]
    assert "*.tiff" in cancer and "*.dcm" not in cancer
    assert "*.dcm" in brain and "*.tiff" not in brain


@pytest.mark.parametrize("kind", list(AnalysisKind))
def test_dialog_filter_keeps_every_accepted_type(kind):
    entries = _entries(kind)
    for ext in ACCEPTED_EXTENSIONS:
        assert f"*{ext}" in entries[1]
    assert entries[-1] == "All Files (*)"
