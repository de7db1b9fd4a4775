"""
Tesseract OCR engine handle.

The engine is an explicitly owned resource: TextExtractor creates one,
starts it lazily on the first image or scanned PDF page, and releases it
in close(). Starting verifies that the Tesseract binary can be run, so a
missing installation surfaces as one clear ExtractionError instead of a
failure deep inside a reader.
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

import pytesseract
from PIL import Image

from smartocr.config import OCRConfig
from smartocr.exceptions import ExtractionError

if TYPE_CHECKING:
    import fitz

logger = logging.getLogger(__name__)


# =============================================================================
# DATA STRUCTURES
# =============================================================================


@dataclass
class OCRStats:
    """Running statistics for one engine handle."""

    images_processed: int = 0
    words_kept: int = 0
    words_dropped: int = 0
    total_time_ms: float = 0.0


def tesseract_available(tesseract_cmd: Path | None = None) -> bool:
    """Check if the Tesseract binary is installed and usable."""
    if tesseract_cmd is not None:
        pytesseract.pytesseract.tesseract_cmd = str(tesseract_cmd)
    try:
        pytesseract.get_tesseract_version()
        return True
    except pytesseract.TesseractNotFoundError:
        logger.debug("Tesseract binary not found")
        return False


# =============================================================================
# ENGINE
# =============================================================================


class TesseractEngine:
    """
    Lazily started Tesseract handle.

    Safe to share between the threads of batch_extract(): start() is
    guarded by a lock and recognition itself runs in a subprocess per call.

    Example:
        >>> engine = TesseractEngine(OCRConfig(language="eng"))
        >>> text = engine.recognize(Path("flyer.png"))
        >>> engine.shutdown()
    """

    def __init__(self, config: OCRConfig | None = None):
        self.config = config or OCRConfig()
        self.stats = OCRStats()
        self.version: str | None = None
        self._lock = threading.Lock()
        self._running = False

    @property
    def is_running(self) -> bool:
        return self._running

    def start(self) -> None:
        """
        Locate the Tesseract binary. Subsequent calls are no-ops.

        Raises:
            ExtractionError: If Tesseract is not installed.
        """
        with self._lock:
            if self._running:
                return
            if self.config.tesseract_cmd is not None:
                pytesseract.pytesseract.tesseract_cmd = str(self.config.tesseract_cmd)
            try:
                self.version = str(pytesseract.get_tesseract_version())
            except pytesseract.TesseractNotFoundError as e:
                raise ExtractionError(
                    "Tesseract OCR is not installed or not on PATH; "
                    "set OCRConfig.tesseract_cmd to its location"
                ) from e
            self._running = True
            logger.info("Started Tesseract %s (lang=%s)", self.version, self.config.language)

    def shutdown(self) -> None:
        """Release the handle. The engine restarts on next use."""
        with self._lock:
            if self._running:
                logger.debug(
                    "Stopping Tesseract after %d image(s)", self.stats.images_processed
                )
            self._running = False

    def recognize(self, path: Path) -> str:
        """OCR an image file."""
        with Image.open(path) as image:
            image.load()
            return self.recognize_image(image)

    def recognize_image(self, image: Image.Image) -> str:
        """
        OCR an in-memory image.

        With ``min_confidence`` above 0, words Tesseract is unsure of are
        dropped and lines are rebuilt from the word boxes.
        """
        self.start()
        start_time = time.time()

        kept = dropped = 0
        if self.config.min_confidence > 0:
            text, kept, dropped = self._recognize_filtered(image)
        else:
            text = pytesseract.image_to_string(
                image, lang=self.config.language, config=self.config.tesseract_args
            )

        # Shared by batch_extract worker threads
        with self._lock:
            self.stats.images_processed += 1
            self.stats.words_kept += kept
            self.stats.words_dropped += dropped
            self.stats.total_time_ms += (time.time() - start_time) * 1000
        return text.strip()

    def _recognize_filtered(self, image: Image.Image) -> tuple[str, int, int]:
        data = pytesseract.image_to_data(
            image,
            lang=self.config.language,
            config=self.config.tesseract_args,
            output_type=pytesseract.Output.DICT,
        )

        # Words keyed by their (block, paragraph, line), in reading order
        lines: dict[tuple[int, int, int], list[str]] = {}
        dropped = 0
        for i, word in enumerate(data["text"]):
            if not word.strip():
                continue
            if float(data["conf"][i]) < self.config.min_confidence:
                dropped += 1
                continue
            key = (data["block_num"][i], data["par_num"][i], data["line_num"][i])
            lines.setdefault(key, []).append(word)

        kept = sum(len(words) for words in lines.values())
        return "\n".join(" ".join(words) for words in lines.values()), kept, dropped

    def render_page_to_image(self, page: fitz.Page) -> Image.Image:
        """Render a PDF page at the configured DPI."""
        import fitz as fitz_module

        scale = self.config.dpi / 72.0
        pix = page.get_pixmap(matrix=fitz_module.Matrix(scale, scale))
        return Image.frombytes("RGB", (pix.width, pix.height), pix.samples)

    def __repr__(self) -> str:
        state = "running" if self._running else "stopped"
        return f"TesseractEngine(lang={self.config.language!r}, {state})"
