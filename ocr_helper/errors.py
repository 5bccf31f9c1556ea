"""Exception taxonomy for the OCR helper."""
from __future__ import annotations


class OCRHelperError(Exception):
    """Base class for all helper errors."""


class UsageError(OCRHelperError):
    """Raised when the caller did not supply an image path."""


class ConfigError(OCRHelperError):
    """Raised for malformed config files or unknown engine names."""


class ImageLoadError(OCRHelperError):
    """Raised when an image is missing, unreadable or cannot be decoded."""

    def __init__(self, path: object, reason: str = "") -> None:
        self.path = path
        self.reason = reason
        message = f"cannot load image at {path}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class RecognitionError(OCRHelperError):
    """Raised when the OCR engine fails."""


class OCRDependencyError(RecognitionError):
    """Raised when an OCR engine cannot start due to missing deps."""


class SerializationError(OCRHelperError):
    """Raised when regions cannot be encoded as JSON."""
