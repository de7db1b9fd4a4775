"""
OCR engine handle (Tesseract via pytesseract).
"""

from smartocr.ocr.engine import OCRStats, TesseractEngine, tesseract_available

__all__ = ["OCRStats", "TesseractEngine", "tesseract_available"]
