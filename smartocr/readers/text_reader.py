"""
Readers for text-based formats: plain text, Markdown, CSV, HTML and RTF.
"""

from __future__ import annotations

import csv
import re
from pathlib import Path

from bs4 import BeautifulSoup
from striprtf.striprtf import rtf_to_text

from smartocr.readers.base import TextReader

# Elements whose content is never visible text
HIDDEN_HTML_TAGS = ["script", "style", "noscript"]

HORIZONTAL_SPACE = re.compile(r"[ \t]+")


class PlainTextReader(TextReader):
    """UTF-8 text and Markdown, returned verbatim."""

    def extract(self, path: Path) -> str:
        return path.read_text(encoding="utf-8")


class CSVReader(TextReader):
    """One line per data row, values joined with ``", "`` (the header row is consumed)."""

    def extract(self, path: Path) -> str:
        lines = []
        with path.open(newline="", encoding="utf-8") as f:
            for row in csv.DictReader(f):
                values = []
                for value in row.values():
                    # Short rows pad with None; long rows collect extras in a list
                    if value is None:
                        continue
                    values.extend(value if isinstance(value, list) else [value])
                lines.append(", ".join(values))
        return "\n".join(lines)


class HTMLReader(TextReader):
    """Visible text of an HTML page, one text node per line."""

    def extract(self, path: Path) -> str:
        soup = BeautifulSoup(path.read_text(encoding="utf-8"), "html.parser")
        for tag in soup(HIDDEN_HTML_TAGS):
            tag.decompose()
        text = soup.get_text(separator="\n")
        return "\n".join(line.strip() for line in text.splitlines() if line.strip())


class RTFReader(TextReader):
    """
    Plain text of an RTF document, converted with striprtf.

    Hex and Unicode escapes are decoded and blank lines are dropped.
    Embedded objects and pictures are not decoded.
    """

    def extract(self, path: Path) -> str:
        return strip_rtf(path.read_text(encoding="utf-8", errors="replace"))


def strip_rtf(content: str) -> str:
    text = rtf_to_text(content)
    lines = (HORIZONTAL_SPACE.sub(" ", line).strip() for line in text.splitlines())
    return "\n".join(line for line in lines if line)
