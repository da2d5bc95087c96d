"""
Analysis Kinds
==============

The three analyses the backend exposes. Each kind carries its own endpoint
path and accepted file extensions, so code that dispatches on the kind handles
every case explicitly instead of looking up a tab index.

Only brain-tumour detection is currently served; the other two kinds are shown
in the UI but disabled, and their payloads are not assumed to match the
tumour payload.

User-facing names and descriptions live in :mod:`medscan_ui.core.strings`.
"""

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class KindInfo:
    endpoint: str
    extensions: tuple[str, ...]
    enabled: bool


_MR = (".dcm", ".jpg", ".jpeg", ".png")
_MICROSCOPY = (".jpg", ".jpeg", ".png", ".tif", ".tiff")


class AnalysisKind(Enum):
    BRAIN_TUMOR = KindInfo("/analyze/brain-tumor", _MR, True)
    CANCER = KindInfo("/analyze/cancer", _MICROSCOPY, False)
    ALZHEIMER = KindInfo("/analyze/alzheimer", _MR, False)

    @property
    def endpoint(self) -> str:
        return self.value.endpoint

    @property
    def extensions(self) -> tuple[str, ...]:
        return self.value.extensions

    @property
    def enabled(self) -> bool:
        return self.value.enabled


# advisory, the file picker enforces it
ACCEPTED_EXTENSIONS = (".png", ".jpg", ".jpeg", ".gif", ".tif", ".tiff", ".dcm")


def _patterns(extensions) -> str:
    return " ".join(f"*{ext}" for ext in extensions)


def file_dialog_filter(kind: AnalysisKind) -> str:
    """
    Qt file-dialog filter for one analysis kind.

    The kind's own formats come first and are selected by default; every
    accepted image type stays available as the second entry.
    """
    return ";;".join(
        [
            f"{kind.name.replace('_', ' ').title()} Images ({_patterns(kind.extensions)})",
            f"All Supported Images ({_patterns(ACCEPTED_EXTENSIONS)})",
            "All Files (*)",
        ]
    )
