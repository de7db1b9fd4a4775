"""
Pytest configuration and fixtures for smartocr tests.
"""

from pathlib import Path

import pytest

from smartocr.config import ExtractionConfig, OCRConfig

# Raw OCR of an Oxford Test of English Statement of Results, with the
# characteristic glued headers, fused level/score tokens and run-on scale.
CERTIFICATE_OCR = """Statement of ResultsOxford Test of English
Test taker nameDate of birth
Jane Doe
14 March 1998
Test taker numberCertificate reference
123456789
XKCD 4471
SpeakingListeningReadingWriting
Speaking B2125 03 June 2025
Listening B 1 108 03 June 2025
Reading C1130 03 June 2025
Writing B2118 03 June 2025
Overall scoreCEFR level
120
B2
C1 126-140 B2 111-125 B1 81-110 Below B1 0-80
"""


@pytest.fixture
def certificate_text() -> str:
    """Return raw certificate OCR text."""
    return CERTIFICATE_OCR


@pytest.fixture
def links_dir(tmp_path) -> Path:
    """Return a link report directory inside tmp_path (not yet created)."""
    return tmp_path / "extracted-links"


@pytest.fixture
def config(tmp_path, links_dir) -> ExtractionConfig:
    """Return an ExtractionConfig writing only inside tmp_path, without PDF OCR."""
    return ExtractionConfig(
        output_dir=links_dir,
        structured_output_dir=tmp_path / "extracted-data",
        ocr=OCRConfig(pdf_fallback=False),
    )


@pytest.fixture
def no_save_config(config) -> ExtractionConfig:
    """Return a config that never writes link reports."""
    config.save_links_to_json = False
    return config


@pytest.fixture
def write_file(tmp_path):
    """Return a factory writing UTF-8 text files into tmp_path."""

    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def make_pdf(tmp_path):
    """Return a factory creating a PDF with one page per entry of ``pages``.

    Each entry is a list of text lines; an empty list gives a page without
    a text layer.
    """

    def _make(name: str, pages: list[list[str]]) -> Path:
        import fitz

        path = tmp_path / name
        doc = fitz.open()
        for lines in pages:
            page = doc.new_page()
            for number, line in enumerate(lines):
                page.insert_text((72, 72 + 24 * number), line, fontsize=11)
        doc.save(str(path))
        doc.close()
        return path

    return _make
