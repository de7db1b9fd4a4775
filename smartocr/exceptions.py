"""
Exception classes for smartocr.

All smartocr errors inherit from SmartOCRError, making it easy to catch
all library errors. Non-fatal problems (link scanning, report writing)
use the SmartOCRWarning family instead: they are raised internally,
caught by the orchestrator and recorded on the result.

Example:
    >>> try:
    ...     result = smartocr.extract_text("file.xyz")
    ... except smartocr.UnsupportedFormatError as e:
    ...     print(f"Format not supported: {e}")
    ... except smartocr.SmartOCRError as e:
    ...     print(f"smartocr error: {e}")
"""


class SmartOCRError(Exception):
    """
    Base exception for all smartocr errors.

    Catch this to handle any smartocr-specific error.
    """

    pass


class UnsupportedFormatError(SmartOCRError):
    """
    Raised when no reader is registered for a file's MIME type.

    Example:
        >>> smartocr.extract_text("archive.zip")
        UnsupportedFormatError: Unsupported file type: application/zip
    """

    pass


class ExtractionError(SmartOCRError):
    """
    Raised when a reader or the OCR engine fails.

    The underlying error message is passed through and the original
    exception is chained as __cause__.
    """

    pass


class ConfigurationError(SmartOCRError, ValueError):
    """
    Raised for invalid configuration.

    Example:
        >>> OCRConfig(psm=42)
        ConfigurationError: psm must be between 0 and 13, got 42
    """

    pass


class SmartOCRWarning(UserWarning):
    """Base category for recoverable problems that never abort an extraction."""

    pass


class LinkExtractionWarning(SmartOCRWarning):
    """Link scanning failed; the result carries an empty link list."""

    pass


class PersistenceWarning(SmartOCRWarning):
    """A JSON/CSV report could not be written; the result carries no path."""

    pass
