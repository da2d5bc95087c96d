from unittest.mock import Mock

import pytest
import requests

from medscan_ui.core.analysis_kinds import AnalysisKind
from medscan_ui.core.api_client import FAILURE_MESSAGE, AnalysisClient
from medscan_ui.core.results import AnalysisFailure, AnalysisSuccess


@pytest.fixture
def image_file(tmp_path):
    p = tmp_path / "scan.png"
    p.write_bytes(b"not really a png")
    return p


def _client(response=None, exc=None):
    http = Mock(spec=requests.Session)
    if exc is not None:
        http.post.side_effect = exc
    else:
        http.post.return_value = response
    return AnalysisClient("http://backend:8000/", timeout=5, session=http), http


def _response(payload=None, status_error=None, json_error=None):
    r = Mock()
    if status_error is not None:
        r.raise_for_status.side_effect = status_error
    if json_error is not None:
        r.json.side_effect = json_error
    else:
        r.json.return_value = payload
    return r


def test_endpoints_per_kind():
    client = AnalysisClient("http://backend:8000/")
    assert client.url_for(AnalysisKind.BRAIN_TUMOR) == "http://backend:8000/analyze/brain-tumor"
    assert client.url_for(AnalysisKind.CANCER) == "http://backend:8000/analyze/cancer"
    assert client.url_for(AnalysisKind.ALZHEIMER) == "http://backend:8000/analyze/alzheimer"


def test_successful_upload(image_file, tumor_payload):
    client, http = _client(_response(tumor_payload))
    result = client.analyze(AnalysisKind.BRAIN_TUMOR, image_file)
    assert isinstance(result, AnalysisSuccess)
    assert result.confidence == 0.87
    url = http.post.call_args.args[0]
    kwargs = http.post.call_args.kwargs
    assert url == "http://backend:8000/analyze/brain-tumor"
    assert kwargs["files"]["file"][0] == "scan.png"
    assert kwargs["timeout"] == 5


def test_backend_error_payload(image_file):
    client, _ = _client(_response({"error": "model not loaded"}))
    assert client.analyze(AnalysisKind.BRAIN_TUMOR, image_file) == AnalysisFailure(
        "model not loaded"
    )


@pytest.mark.parametrize(
    "response,exc",
    [
        (None, requests.ConnectionError("refused")),
        (None, requests.Timeout("slow")),
        (_response(status_error=requests.HTTPError("500")), None),
        (_response(json_error=ValueError("not json")), None),
        (_response(["not", "an", "object"]), None),
    ],
)
def test_failures_become_failure_results(image_file, response, exc):
    client, _ = _client(response, exc)
    assert client.analyze(AnalysisKind.BRAIN_TUMOR, image_file) == AnalysisFailure(
        FAILURE_MESSAGE
    )


def test_missing_file(tmp_path):
    client, http = _client(_response({}))
    result = client.analyze(AnalysisKind.BRAIN_TUMOR, tmp_path / "missing.png")
    assert isinstance(result, AnalysisFailure)
    http.post.assert_not_called()
