# scalp_analyzer/errors.py
class ScalpAnalyzerError(Exception):
    """Base class for every failure the pipeline surfaces to its caller."""


class InsufficientTicksError(ScalpAnalyzerError):
    """The price axis did not yield enough numeric labels to calibrate."""

    def __init__(self, count: int):
        self.count = count
        super().__init__(
            f"Could not detect enough price levels on Y-axis (found {count}). "
            "Please ensure the chart image has a visible price axis with numeric labels."
        )


class ImageDecodeError(ScalpAnalyzerError, ValueError):
    """The input exists but could not be decoded as an image."""


class OcrEngineError(ScalpAnalyzerError):
    """The OCR backend is unavailable or failed while recognizing."""


class OcrTimeoutError(OcrEngineError):
    def __init__(self, timeout: float):
        self.timeout = timeout
        super().__init__(f"OCR did not finish within {timeout:g}s")


class AnnotationWriteError(ScalpAnalyzerError, OSError):
    """The annotated chart could not be written to disk."""
