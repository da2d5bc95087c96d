"""
Analysis Results
================

The outcome of one remote analysis is either a success carrying the
classification, or a failure carrying only an error message. The two are
separate types; code inspects which one it holds instead of checking optional
fields.

Classes
-------
Probabilities
    Class probabilities for tumour / no tumour
AnalysisSuccess
    Verdict, confidence, probabilities and tumour regions
AnalysisFailure
    Error message of a failed request

Functions
---------
parse_result
    Build a result variant from the backend's JSON payload
percent
    Format a fraction as a 2-decimal percentage
verdict_text, advice_text
    Locale strings describing a success result

Examples
--------
>>> from medscan_ui.core.results import parse_result, percent
>>> r = parse_result({"tumor_detected": True, "confidence": 0.87,
...                   "all_probabilities": {"tumor": 0.87, "no_tumor": 0.13}})
>>> percent(r.confidence)
'87.00%'
>>> parse_result({"error": "boom", "confidence": 0.5})
AnalysisFailure(error='boom')
"""

from dataclasses import dataclass
from typing import Mapping, Union

from .overlay_mapper import Region
from .strings import ReportStrings


@dataclass(frozen=True)
class Probabilities:
    tumor: float
    no_tumor: float


@dataclass(frozen=True)
class AnalysisSuccess:
    tumor_detected: bool
    confidence: float
    probabilities: Probabilities
    tumor_regions: tuple[Region, ...] = ()

    @property
    def shows_overlay(self) -> bool:
        return self.tumor_detected and len(self.tumor_regions) > 0


@dataclass(frozen=True)
class AnalysisFailure:
    error: str


AnalysisResult = Union[AnalysisSuccess, AnalysisFailure]


def parse_result(payload: Mapping) -> AnalysisResult:
    """
    Convert a backend JSON payload into a result variant.

    Parameters
    ----------
    payload : mapping
        Decoded JSON body. Expected keys: ``tumor_detected``, ``confidence``,
        ``all_probabilities`` (``tumor``, ``no_tumor``) and ``tumor_regions``
        (list of ``x``/``y``/``width``/``height`` dicts). A present ``error``
        key makes the whole payload a failure.

    Returns
    -------
    AnalysisSuccess or AnalysisFailure

    Raises
    ------
    ValueError
        If numeric fields are not numbers or a region lacks a coordinate

    Notes
    -----
    Missing ``all_probabilities`` is filled from the confidence: the detected
    class gets ``confidence`` and the other class gets the remainder.
    """
    if payload.get("error"):
        return AnalysisFailure(str(payload["error"]))
    try:
        detected = bool(payload.get("tumor_detected", False))
        confidence = float(payload.get("confidence", 0.0))
        probs = payload.get("all_probabilities")
        if probs:
            probabilities = Probabilities(
                float(probs.get("tumor", 0.0)), float(probs.get("no_tumor", 0.0))
            )
        elif detected:
            probabilities = Probabilities(confidence, 1.0 - confidence)
        else:
            probabilities = Probabilities(1.0 - confidence, confidence)
        regions = tuple(
            Region.from_dict(r) for r in (payload.get("tumor_regions") or [])
        )
    except (KeyError, TypeError, AttributeError) as e:
        raise ValueError(f"Malformed analysis payload: {e}") from e
    return AnalysisSuccess(detected, confidence, probabilities, regions)


def percent(fraction: float) -> str:
    return f"{fraction * 100:.2f}%"


def verdict_text(result: AnalysisSuccess, strings: ReportStrings) -> str:
    return strings.detected if result.tumor_detected else strings.not_detected


def advice_text(result: AnalysisSuccess, strings: ReportStrings) -> str:
    return strings.advice_detected if result.tumor_detected else strings.advice_clear
