"""
Format detection and reader dispatch.

Each supported format is a DocumentFormat member with its MIME types;
build_readers() maps every member to the TextReader that handles it.
Adding a format means adding a member and a reader, never mutating the
mapping at runtime.
"""

from __future__ import annotations

import mimetypes
from enum import Enum
from pathlib import Path

from smartocr.ocr.engine import TesseractEngine
from smartocr.readers.base import TextReader
from smartocr.readers.image_reader import ImageReader
from smartocr.readers.office_reader import DocxReader, XlsxReader
from smartocr.readers.pdf_reader import PDFReader
from smartocr.readers.text_reader import CSVReader, HTMLReader, PlainTextReader, RTFReader

FALLBACK_MIME_TYPE = "application/octet-stream"

# Extensions whose mimetypes answer differs between platforms (or is missing)
EXTENSION_MIME_TYPES = {
    ".md": "text/markdown",
    ".markdown": "text/markdown",
    ".csv": "text/csv",
    ".rtf": "application/rtf",
    ".webp": "image/webp",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".tif": "image/tiff",
    ".tiff": "image/tiff",
    ".bmp": "image/bmp",
    ".docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    ".xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
}


class DocumentFormat(Enum):
    """Supported input formats and their MIME types."""

    IMAGE = (
        "image/jpeg",
        "image/jpg",
        "image/png",
        "image/gif",
        "image/bmp",
        "image/tiff",
        "image/webp",
    )
    PDF = ("application/pdf",)
    DOCX = ("application/vnd.openxmlformats-officedocument.wordprocessingml.document",)
    XLSX = ("application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",)
    CSV = ("text/csv",)
    HTML = ("text/html",)
    TEXT = ("text/plain",)
    MARKDOWN = ("text/markdown",)
    RTF = ("application/rtf", "text/rtf")

    @property
    def mime_types(self) -> tuple[str, ...]:
        return self.value

    @classmethod
    def from_mime_type(cls, mime_type: str) -> DocumentFormat | None:
        for fmt in cls:
            if mime_type in fmt.mime_types:
                return fmt
        return None


def detect_mime_type(path: str | Path) -> str:
    """MIME type from the file extension; unknown extensions give application/octet-stream."""
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix in EXTENSION_MIME_TYPES:
        return EXTENSION_MIME_TYPES[suffix]
    mime_type, _ = mimetypes.guess_type(path.name)
    return mime_type or FALLBACK_MIME_TYPE


def detect_format(path: str | Path) -> DocumentFormat | None:
    return DocumentFormat.from_mime_type(detect_mime_type(path))


def is_supported(path: str | Path) -> bool:
    """Whether a reader exists for the file's type."""
    return detect_format(path) is not None


def supported_formats() -> list[str]:
    """Every MIME type a reader is registered for."""
    return [mime for fmt in DocumentFormat for mime in fmt.mime_types]


def build_readers(
    ocr_engine: TesseractEngine, pdf_fallback: bool = True
) -> dict[DocumentFormat, TextReader]:
    """
    Create one reader per format.

    Args:
        ocr_engine: Engine used for images and, with ``pdf_fallback``,
            for PDF pages without a text layer.
        pdf_fallback: OCR scanned PDF pages.
    """
    plain = PlainTextReader()
    return {
        DocumentFormat.IMAGE: ImageReader(ocr_engine),
        DocumentFormat.PDF: PDFReader(ocr_engine if pdf_fallback else None),
        DocumentFormat.DOCX: DocxReader(),
        DocumentFormat.XLSX: XlsxReader(),
        DocumentFormat.CSV: CSVReader(),
        DocumentFormat.HTML: HTMLReader(),
        DocumentFormat.TEXT: plain,
        DocumentFormat.MARKDOWN: plain,
        DocumentFormat.RTF: RTFReader(),
    }
