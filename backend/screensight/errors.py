"""Error taxonomy for screenshot analysis and conversion.

Every failure raised by the pipeline is a ``VisionError``. ``retryable`` tells
the backoff loop whether another attempt can change the outcome.
"""

from __future__ import annotations


class VisionError(Exception):
    kind = "vision_error"
    retryable = False

    def __init__(self, message: str, details: object | None = None) -> None:
        super().__init__(message)
        self.details = details


class Unconfigured(VisionError):
    """No model credential is configured."""

    kind = "unconfigured"


class RateLimited(VisionError):
    kind = "rate_limited"
    retryable = True

    def __init__(self, message: str, wait_ms: int = 0, details: object | None = None) -> None:
        super().__init__(message, details)
        self.wait_ms = max(0, int(wait_ms))


class ApiError(VisionError):
    """Transport or model failure."""

    kind = "api_error"
    retryable = True


class InvalidResponse(VisionError):
    """Model output could not be parsed by any strategy."""

    kind = "invalid_response"


class TooLarge(VisionError):
    kind = "too_large"

    def __init__(self, size_bytes: int, max_bytes: int) -> None:
        super().__init__(
            f"Image size {size_bytes / 1024 / 1024:.2f}MB ({size_bytes} bytes) "
            f"exceeds maximum of {max_bytes / 1024 / 1024:.2f}MB"
        )
        self.size_bytes = size_bytes
        self.max_bytes = max_bytes


class UnsupportedFormat(VisionError):
    kind = "unsupported_format"

    def __init__(self, mime_type: str, supported: tuple[str, ...] = ()) -> None:
        message = f"Format {mime_type or '<unknown>'} is not supported"
        if supported:
            message += f". Use: {', '.join(supported)}"
        super().__init__(message)
        self.mime_type = mime_type


class DecodeError(VisionError):
    kind = "decode_error"


class FetchError(VisionError):
    """Remote image could not be retrieved."""

    kind = "fetch_error"
    retryable = True


class ConversionError(VisionError):
    """Mapping failed on already-validated input. Indicates a defect."""

    kind = "conversion_error"


class BatchFailed(VisionError):
    kind = "batch_failed"

    def __init__(self, message: str, errors: list[BaseException]) -> None:
        super().__init__(message, errors)
        self.errors = errors
