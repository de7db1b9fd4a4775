"""
smartocr: Extract text and links from images and documents.

Images are OCR'd with Tesseract; PDF, Word, Excel, CSV, HTML, RTF, plain
text and Markdown files are parsed directly. Extracted text is repaired
and put back into reading order, and the links it contains are detected
so that browser tests can click them.

Example:
    >>> import smartocr
    >>> result = smartocr.extract_text("oup_1-0.png")
    >>> print(result.text)
    >>> result.links
    ['https://www.oup.com/search', 'help@oup.com']
    >>> html = smartocr.make_links_clickable(result.text, list(result.links))
"""

from smartocr.config import ExtractionConfig, OCRConfig
from smartocr.exceptions import (
    ConfigurationError,
    ExtractionError,
    LinkExtractionWarning,
    PersistenceWarning,
    SmartOCRError,
    SmartOCRWarning,
    UnsupportedFormatError,
)
from smartocr.extract import TextExtractor, batch_extract, extract_text
from smartocr.families import DocumentFamily, detect_family
from smartocr.links import categorize_link, categorize_links, extract_links, make_links_clickable
from smartocr.models import (
    BatchFailure,
    ClassifiedLine,
    ContentBlock,
    ExtractionResult,
    LineType,
    LinkRecord,
    LinkType,
    RawLine,
)
from smartocr.normalizers import clean_ocr_text
from smartocr.readers import DocumentFormat, detect_mime_type, is_supported, supported_formats
from smartocr.reports import (
    StructuredReport,
    extract_structured_data,
    load_links_from_json,
    save_links_to_json,
)

__version__ = "0.1.0"
__all__ = [
    # Main API
    "extract_text",
    "batch_extract",
    "TextExtractor",
    "detect_mime_type",
    "is_supported",
    "supported_formats",
    "DocumentFormat",
    # Links
    "extract_links",
    "categorize_link",
    "categorize_links",
    "make_links_clickable",
    # Text repair
    "DocumentFamily",
    "detect_family",
    "clean_ocr_text",
    # Reports
    "save_links_to_json",
    "load_links_from_json",
    "extract_structured_data",
    "StructuredReport",
    # Configuration
    "ExtractionConfig",
    "OCRConfig",
    # Models
    "ExtractionResult",
    "BatchFailure",
    "LinkRecord",
    "LinkType",
    "LineType",
    "RawLine",
    "ClassifiedLine",
    "ContentBlock",
    # Exceptions
    "SmartOCRError",
    "UnsupportedFormatError",
    "ExtractionError",
    "ConfigurationError",
    "SmartOCRWarning",
    "LinkExtractionWarning",
    "PersistenceWarning",
]
