class DocExtractError(Exception):
    """Base exception for the application."""

    def __init__(self, message: str = "An error occurred", status_code: int = 500):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class UnsupportedFormatError(DocExtractError):
    def __init__(self, mime_type: str | None, supported: list[str] | None = None):
        self.mime_type = mime_type
        message = f"Unsupported file type: {mime_type or 'unknown'}"
        if supported:
            message += f". Supported formats: {', '.join(supported)}"
        super().__init__(message, status_code=400)


class StrategyFailedError(DocExtractError):
    """A single extraction strategy could not produce text.

    Always recovered by the strategy chain, which turns it into a warning.
    """

    def __init__(self, message: str = "Extraction strategy failed"):
        super().__init__(message, status_code=422)


class AllStrategiesExhaustedError(DocExtractError):
    def __init__(self, format_name: str, failures: list[str], last_error: BaseException | None = None):
        self.failures = failures
        self.last_error = last_error
        message = f"All {format_name} extraction strategies failed"
        if failures:
            message += f" ({'; '.join(failures)})"
        if last_error is not None:
            message += f". Last error: {last_error}"
        super().__init__(message, status_code=422)


class EncodingUndeterminedError(DocExtractError):
    def __init__(self, best_confidence: float = 0.0):
        self.best_confidence = best_confidence
        super().__init__(
            f"Could not detect valid text encoding (best confidence {best_confidence:.2f})",
            status_code=422,
        )


class FileTooLargeError(DocExtractError):
    def __init__(self, size_mb: float, max_mb: int):
        super().__init__(
            f"File size {size_mb:.1f}MB exceeds maximum {max_mb}MB",
            status_code=413,
        )


class ExtractionPoolSaturatedError(DocExtractError):
    def __init__(self, capacity: int):
        super().__init__(
            f"Extraction queue is full ({capacity} jobs in flight), try again later",
            status_code=503,
        )
