"""Exception types raised by the MedScan core."""


class MedScanError(Exception):
    """Base class for all MedScan errors."""


class ImageLoadError(MedScanError):
    """The selected file could not be decoded into an image."""


class ExportError(MedScanError):
    """A report could not be produced from the current result panel."""


class AnalysisInProgressError(MedScanError):
    """A second analysis was requested while one is still pending."""
