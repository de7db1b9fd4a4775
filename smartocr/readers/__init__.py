"""
Format readers: one TextReader per supported file type.

- PDFReader: PyMuPDF text layer, OCR for scanned pages
- ImageReader: Tesseract OCR
- DocxReader / XlsxReader: python-docx / openpyxl
- CSVReader, HTMLReader, PlainTextReader, RTFReader
"""

from smartocr.readers.base import TextReader
from smartocr.readers.image_reader import ImageReader
from smartocr.readers.office_reader import DocxReader, XlsxReader
from smartocr.readers.pdf_reader import PDFReader, fix_date_spacing
from smartocr.readers.registry import (
    DocumentFormat,
    build_readers,
    detect_format,
    detect_mime_type,
    is_supported,
    supported_formats,
)
from smartocr.readers.text_reader import (
    CSVReader,
    HTMLReader,
    PlainTextReader,
    RTFReader,
    strip_rtf,
)

__all__ = [
    "TextReader",
    "DocumentFormat",
    "build_readers",
    "detect_format",
    "detect_mime_type",
    "is_supported",
    "supported_formats",
    "PDFReader",
    "fix_date_spacing",
    "ImageReader",
    "DocxReader",
    "XlsxReader",
    "CSVReader",
    "HTMLReader",
    "PlainTextReader",
    "RTFReader",
    "strip_rtf",
]
