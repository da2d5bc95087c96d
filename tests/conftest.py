from unittest.mock import Mock

import pytest

from medscan_ui.core.api_client import AnalysisClient
from medscan_ui.core.config import Settings
from medscan_ui.core.results import parse_result


@pytest.fixture
def settings(tmp_path):
    return Settings(log_dir=str(tmp_path / "logs"), report_locale="tr-TR")


@pytest.fixture
def tumor_payload():
    return {
        "tumor_detected": True,
        "confidence": 0.87,
        "all_probabilities": {"tumor": 0.87, "no_tumor": 0.13},
        "tumor_regions": [
            {"x": 0.0, "y": 0.0, "width": 0.5, "height": 0.5},
            {"x": 0.5, "y": 0.5, "width": 0.5, "height": 0.5},
        ],
    }


@pytest.fixture
def tumor_result(tumor_payload):
    return parse_result(tumor_payload)


@pytest.fixture
def client():
    c = Mock(spec=AnalysisClient)
    c.failure_message = "failed"
    return c
