import pytest

from medscan_ui.core.overlay_mapper import Region
from medscan_ui.core.results import (
    AnalysisFailure,
    AnalysisSuccess,
    Probabilities,
    advice_text,
    parse_result,
    percent,
    verdict_text,
)
from medscan_ui.core.strings import ENGLISH, TURKISH


def test_parse_success(tumor_payload):
    r = parse_result(tumor_payload)
    assert isinstance(r, AnalysisSuccess)
    assert r.tumor_detected
    assert r.confidence == 0.87
    assert r.probabilities == Probabilities(0.87, 0.13)
    assert r.tumor_regions == (Region(0, 0, 0.5, 0.5), Region(0.5, 0.5, 0.5, 0.5))
    assert r.shows_overlay


def test_error_payload_ignores_other_fields(tumor_payload):
    r = parse_result({**tumor_payload, "error": "model offline"})
    assert r == AnalysisFailure("model offline")


def test_missing_probabilities_fall_back_to_confidence():
    r = parse_result({"tumor_detected": False, "confidence": 0.9})
    assert r.probabilities.no_tumor == 0.9
    assert r.probabilities.tumor == pytest.approx(0.1)
    assert r.tumor_regions == ()
    assert not r.shows_overlay


def test_detected_without_regions_shows_no_overlay():
    r = parse_result({"tumor_detected": True, "confidence": 0.6, "tumor_regions": None})
    assert not r.shows_overlay


def test_malformed_region_raises():
    with pytest.raises(ValueError):
        parse_result({"tumor_detected": True, "confidence": 0.6,
                      "tumor_regions": [{"x": 0.1}]})


def test_percent():
    assert percent(0.87) == "87.00%"
    assert percent(0.13) == "13.00%"
    assert percent(1) == "100.00%"
    assert percent(0.12346) == "12.35%"


def test_verdict_and_advice(tumor_result):
    assert verdict_text(tumor_result, TURKISH) == "Tümör Tespit Edildi"
    assert verdict_text(tumor_result, ENGLISH) == "Tumor Detected"
    clear = parse_result({"tumor_detected": False, "confidence": 0.95})
    assert verdict_text(clear, ENGLISH) == "No Tumor Detected"
    assert advice_text(clear, ENGLISH) == ENGLISH.advice_clear
