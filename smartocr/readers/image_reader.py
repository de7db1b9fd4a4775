"""
Image reader: OCR through the shared Tesseract engine.
"""

from __future__ import annotations

from pathlib import Path

from smartocr.ocr.engine import TesseractEngine
from smartocr.readers.base import TextReader


class ImageReader(TextReader):
    """Runs Tesseract over PNG, JPEG, GIF, BMP, TIFF and WebP images."""

    def __init__(self, ocr_engine: TesseractEngine):
        self.ocr_engine = ocr_engine

    def extract(self, path: Path) -> str:
        return self.ocr_engine.recognize(path)
