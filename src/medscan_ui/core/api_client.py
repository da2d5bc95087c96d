"""
Analysis Backend Client
=======================

This module uploads the selected image to the classification backend and
turns the response into an :data:`~medscan_ui.core.results.AnalysisResult`.

Classes
-------
AnalysisClient
    Multipart upload to the endpoint of an AnalysisKind

Notes
-----
Failures never propagate as exceptions: a transport error, a non-2xx status or
an unreadable body is logged and returned as an
:class:`~medscan_ui.core.results.AnalysisFailure` with a user-facing message.
There is no retry; the user resubmits explicitly.

Examples
--------
>>> from medscan_ui.core.api_client import AnalysisClient
>>> from medscan_ui.core.analysis_kinds import AnalysisKind
>>> client = AnalysisClient("http://localhost:8000")
>>> result = client.analyze(AnalysisKind.BRAIN_TUMOR, "scan.png")
"""

import logging
from pathlib import Path

import requests

from .analysis_kinds import AnalysisKind
from .results import AnalysisFailure, AnalysisResult, parse_result

logger = logging.getLogger(__name__)

FAILURE_MESSAGE = "Görüntü analizi sırasında bir hata oluştu."


class AnalysisClient:
    """
    HTTP client for the analysis backend.

    Parameters
    ----------
    base_url : str
        Backend root, e.g. ``"http://localhost:8000"``
    timeout : float, default=60.0
        Request timeout in seconds
    session : requests.Session, optional
        Session to send requests with. A new one is created if omitted.
    failure_message : str, optional
        Message stored in the failure result shown to the user

    Attributes
    ----------
    base_url : str
        Backend root without trailing slash
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 60.0,
        session: requests.Session | None = None,
        failure_message: str = FAILURE_MESSAGE,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.failure_message = failure_message

    def url_for(self, kind: AnalysisKind) -> str:
        return f"{self.base_url}{kind.endpoint}"

    def analyze(self, kind: AnalysisKind, image_path: str | Path) -> AnalysisResult:
        """
        Upload an image and return the analysis result.

        Parameters
        ----------
        kind : AnalysisKind
            Which analysis to request; selects the endpoint
        image_path : str or Path
            File sent as the ``file`` field of a multipart form

        Returns
        -------
        AnalysisSuccess or AnalysisFailure
            Parsed response, or a failure if anything went wrong

        Notes
        -----
        Every response is read as the tumour payload, the only shape the
        backend currently serves. A body that does not parse is reported as a
        failure.
        """
        url = self.url_for(kind)
        path = Path(image_path)
        try:
            with open(path, "rb") as fh:
                response = self.session.post(
                    url, files={"file": (path.name, fh)}, timeout=self.timeout
                )
            response.raise_for_status()
            payload = response.json()
            logger.debug("Backend response from %s: %s", url, payload)
            if not isinstance(payload, dict):
                raise ValueError(f"Expected a JSON object, got {type(payload).__name__}")
            return parse_result(payload)
        except (requests.exceptions.RequestException, OSError, ValueError) as e:
            logger.error("Analysis request to %s failed: %s", url, e)
            return AnalysisFailure(self.failure_message)
