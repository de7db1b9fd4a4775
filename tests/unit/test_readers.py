"""
Unit tests for format detection and the format readers (smartocr/readers/).
"""

import pytest

from smartocr.exceptions import ExtractionError
from smartocr.readers import (
    CSVReader,
    DocumentFormat,
    HTMLReader,
    PDFReader,
    PlainTextReader,
    RTFReader,
    detect_format,
    detect_mime_type,
    fix_date_spacing,
    is_supported,
    strip_rtf,
    supported_formats,
)
from smartocr.readers.office_reader import cell_to_str

SAMPLE_RTF = (
    r"{\rtf1\ansi{\fonttbl{\f0\fswiss Helvetica;}}\f0\pard "
    r"Hello world.\par Visit https://example.com/page\par}"
)

# =============================================================================
# Format Detection Tests
# =============================================================================


class TestFormatDetection:
    """Tests for MIME detection and the format registry."""

    @pytest.mark.parametrize(
        "name,mime_type",
        [
            ("flyer.png", "image/png"),
            ("photo.JPG", "image/jpeg"),
            ("scan.tiff", "image/tiff"),
            ("statement.pdf", "application/pdf"),
            ("notes.txt", "text/plain"),
            ("README.md", "text/markdown"),
            ("data.csv", "text/csv"),
            ("page.html", "text/html"),
            ("letter.rtf", "application/rtf"),
            (
                "letter.docx",
                "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
            ),
            ("sheet.xlsx", "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"),
            ("mystery.qqq", "application/octet-stream"),
        ],
    )
    def test_detect_mime_type(self, name, mime_type):
        """MIME type comes from the extension."""
        assert detect_mime_type(name) == mime_type

    def test_from_mime_type(self):
        """MIME types map to formats."""
        assert DocumentFormat.from_mime_type("image/jpeg") is DocumentFormat.IMAGE
        assert DocumentFormat.from_mime_type("text/rtf") is DocumentFormat.RTF
        assert DocumentFormat.from_mime_type("application/zip") is None

    def test_detect_format(self):
        """Formats are detected from paths."""
        assert detect_format("a.md") is DocumentFormat.MARKDOWN
        assert detect_format("a.qqq") is None

    def test_legacy_excel_unsupported(self):
        """Legacy .xls workbooks have no reader."""
        assert not is_supported("old.xls")
        assert is_supported("new.xlsx")

    def test_supported_formats(self):
        """Every reader's MIME types are listed."""
        formats = supported_formats()
        assert "text/markdown" in formats
        assert "image/webp" in formats
        assert "application/pdf" in formats


# =============================================================================
# Text Reader Tests
# =============================================================================


class TestTextReaders:
    """Tests for the plain text, CSV, HTML and RTF readers."""

    def test_plain_text_verbatim(self, write_file):
        """Plain text is returned as read."""
        path = write_file("notes.txt", "line one\n  line two\n")
        assert PlainTextReader().extract(path) == "line one\n  line two\n"

    def test_csv_rows(self, write_file):
        """Each data row becomes one line; the header row is consumed."""
        path = write_file("links.csv", "name,url\nAlice,https://example.com/alice\nBob,\n")
        assert CSVReader().extract(path) == "Alice, https://example.com/alice\nBob, "

    def test_csv_ragged_rows(self, write_file):
        """Short rows skip missing values; long rows keep their extras."""
        path = write_file("ragged.csv", "a,b\n1\n2,3,4\n")
        assert CSVReader().extract(path) == "1\n2, 3, 4"

    def test_html_visible_text(self, write_file):
        """Scripts and styles are removed; text nodes become lines."""
        path = write_file(
            "page.html",
            "<html><head><style>p {color: red}</style><script>var x = 1;</script></head>"
            "<body><h1>Welcome</h1><p>Contact help@example.org.uk</p>"
            "<noscript>Enable JavaScript</noscript></body></html>",
        )
        assert HTMLReader().extract(path) == "Welcome\nContact help@example.org.uk"

    def test_strip_rtf(self):
        """Font tables and control words are removed; \\par breaks lines."""
        assert strip_rtf(SAMPLE_RTF) == "Hello world.\nVisit https://example.com/page"

    def test_strip_rtf_escapes(self):
        """Hex and Unicode escapes become the characters they encode."""
        assert strip_rtf(r"{\rtf1\ansi Caf\'e9 na\u239?ve}") == "Café naïve"

    def test_rtf_reader(self, write_file):
        """RTFReader reads and strips a file."""
        path = write_file("letter.rtf", SAMPLE_RTF)
        assert RTFReader().extract(path) == "Hello world.\nVisit https://example.com/page"

    def test_reader_repr(self):
        """Readers describe themselves."""
        assert "RTFReader" in repr(RTFReader())


# =============================================================================
# Office Reader Tests
# =============================================================================


class TestCellToStr:
    """Tests for spreadsheet cell rendering."""

    @pytest.mark.parametrize(
        "value,expected",
        [(None, ""), (2.0, "2"), (2.5, "2.5"), (7, "7"), ("text", "text")],
    )
    def test_values(self, value, expected):
        """Whole floats lose their decimal part."""
        assert cell_to_str(value) == expected


# =============================================================================
# PDF Reader Tests
# =============================================================================


class FakeEngine:
    """Stands in for TesseractEngine in PDF fallback tests."""

    def __init__(self, text="Scanned text", error=None):
        self.text = text
        self.error = error
        self.pages = 0

    def render_page_to_image(self, page):
        self.pages += 1
        return object()

    def recognize_image(self, image):
        if self.error is not None:
            raise self.error
        return self.text


class TestPDFReader:
    """Tests for PDFReader."""

    def test_fix_date_spacing(self):
        """A reading glued to a date is separated."""
        assert fix_date_spacing("2 Dec 20244957.7900") == "2 Dec 2024 4957.7900"

    def test_text_layer(self, make_pdf):
        """Pages are read from their text layer, in order."""
        path = make_pdf("doc.pdf", [["First page"], ["Second page"]])
        text = PDFReader().extract(path)
        assert text.splitlines() == ["First page", "Second page"]

    def test_date_spacing_applied(self, make_pdf):
        """Date spacing is repaired in extracted text."""
        path = make_pdf("bill.pdf", [["Meter reading 2 Dec 20244957.7900"]])
        assert PDFReader().extract(path) == "Meter reading 2 Dec 2024 4957.7900"

    def test_empty_page_without_fallback(self, make_pdf):
        """Without an engine a scanned page contributes nothing."""
        path = make_pdf("scan.pdf", [[]])
        assert PDFReader().extract(path) == ""

    def test_ocr_fallback(self, make_pdf):
        """Pages without a text layer are OCR'd."""
        engine = FakeEngine()
        path = make_pdf("mixed.pdf", [["Typed page"], []])
        assert PDFReader(engine).extract(path) == "Typed page\nScanned text"
        assert engine.pages == 1

    def test_ocr_fallback_failure(self, make_pdf):
        """An OCR failure on one page leaves that page empty."""
        engine = FakeEngine(error=ExtractionError("no tesseract"))
        path = make_pdf("mixed.pdf", [["Typed page"], []])
        assert PDFReader(engine).extract(path) == "Typed page"
