"""
Text extraction orchestrator.

This module provides `extract_text()` and `batch_extract()`, which turn a
file path into an ExtractionResult by wiring together:
- the format readers (one per MIME type)
- TextPipeline (repair and reading-order reconstruction)
- link detection
- link report persistence
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from smartocr.config import ExtractionConfig
from smartocr.exceptions import (
    ExtractionError,
    LinkExtractionWarning,
    PersistenceWarning,
    UnsupportedFormatError,
)
from smartocr.layout.pipeline import TextPipeline
from smartocr.links.extractor import extract_links
from smartocr.models import BatchFailure, ExtractionResult
from smartocr.ocr.engine import TesseractEngine
from smartocr.readers.registry import DocumentFormat, build_readers, detect_mime_type
from smartocr.reports import save_links_to_json

logger = logging.getLogger(__name__)


# =============================================================================
# EXTRACTOR
# =============================================================================


class TextExtractor:
    """
    Extracts text and links from files.

    Owns the OCR engine handle: the engine starts on the first image (or
    scanned PDF page) and is released by close(). One extractor may be
    shared by the threads of a batch.

    Example:
        >>> with TextExtractor(ExtractionConfig(save_links_to_json=False)) as extractor:
        ...     result = extractor.extract("flyer.png")
        >>> result.links
        ['citizensadvice.org.uk/help']
    """

    def __init__(self, config: ExtractionConfig | None = None) -> None:
        self.config = config or ExtractionConfig()
        self.ocr_engine = TesseractEngine(self.config.ocr)
        self.readers = build_readers(self.ocr_engine, pdf_fallback=self.config.ocr.pdf_fallback)
        self.pipeline = TextPipeline(
            repair_text=self.config.repair_text,
            reorder_lines=self.config.reorder_lines,
            general_cleanup=self.config.general_cleanup,
        )

    def read(self, path: Path) -> tuple[str, str]:
        """
        Read raw text with the reader for the file's type.

        Returns:
            (raw text, MIME type)

        Raises:
            UnsupportedFormatError: If no reader handles the MIME type.
            ExtractionError: If the reader fails.
        """
        mime_type = detect_mime_type(path)
        fmt = DocumentFormat.from_mime_type(mime_type)
        if fmt is None:
            raise UnsupportedFormatError(f"Unsupported file type: {mime_type}")

        try:
            text = self.readers[fmt].extract(path)
        except ExtractionError:
            raise
        except Exception as e:
            raise ExtractionError(f"Failed to extract text from {path}: {e}") from e

        logger.debug("Read %d characters from %s (%s)", len(text), path.name, mime_type)
        return text, mime_type

    def find_links(self, text: str, path: Path) -> list[str]:
        """
        Detect links in extracted text.

        Raises:
            LinkExtractionWarning: If the scanner fails.
        """
        try:
            return extract_links(text)
        except Exception as e:
            raise LinkExtractionWarning(f"Link extraction failed for {path.name}: {e}") from e

    def save_links(self, links: list[str], path: Path) -> Path | None:
        if not self.config.save_links_to_json:
            return None
        return save_links_to_json(links, path, self.config.output_dir)

    def extract(self, file_path: str | Path) -> ExtractionResult:
        """
        Extract text and links from a file.

        Link scanning and report writing never fail the extraction: their
        errors are logged and recorded in ``result.warnings``.

        Args:
            file_path: Path to the file.

        Returns:
            ExtractionResult with reconstructed text and links.

        Raises:
            FileNotFoundError: If the file doesn't exist.
            UnsupportedFormatError: If the file type has no reader.
            ExtractionError: If reading the file fails.
        """
        path = Path(file_path)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")

        raw_text, mime_type = self.read(path)
        reconstruction = self.pipeline.process(raw_text)
        text = reconstruction.text
        warnings: list[str] = []

        try:
            links = self.find_links(text, path)
        except LinkExtractionWarning as w:
            logger.warning("%s", w)
            warnings.append(str(w))
            links = []

        saved_path = None
        try:
            saved_path = self.save_links(links, path)
        except PersistenceWarning as w:
            logger.warning("%s", w)
            warnings.append(str(w))

        logger.info(
            "Extracted %s: %d chars, %d link(s)%s",
            path.name,
            len(text),
            len(links),
            f", family {reconstruction.family}" if reconstruction.family else "",
        )

        return ExtractionResult(
            text=text,
            mime_type=mime_type,
            links=tuple(links),
            file_path=path,
            saved_links_json=saved_path,
            structured_data=reconstruction.structured_data,
            warnings=tuple(warnings),
        )

    def close(self) -> None:
        """Release the OCR engine."""
        self.ocr_engine.shutdown()

    def __enter__(self) -> TextExtractor:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


# =============================================================================
# PUBLIC API
# =============================================================================


def extract_text(
    file_path: str | Path,
    config: ExtractionConfig | None = None,
) -> ExtractionResult:
    """
    Extract text and links from any supported file.

    This is the main entry point. It handles:
    - Format detection from the file extension
    - Raw text extraction (OCR for images and scanned PDF pages)
    - Text repair and reading-order reconstruction
    - Link detection, and a JSON link report when links were found

    Args:
        file_path: Path to the file.
        config: Extraction configuration (uses defaults if None).

    Returns:
        ExtractionResult.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        UnsupportedFormatError: If the file type is not supported.
        ExtractionError: If reading the file fails.

    Example:
        >>> result = extract_text("statement.pdf")
        >>> print(result.text[:100])
        >>> result.saved_links_json
        PosixPath('shared-objects/extracted-links/statement_extracted_links.json')
    """
    with TextExtractor(config) as extractor:
        return extractor.extract(file_path)


def batch_extract(
    file_paths: Iterable[str | Path],
    config: ExtractionConfig | None = None,
) -> list[ExtractionResult | BatchFailure]:
    """
    Extract many files concurrently.

    Files are processed on ``config.max_workers`` threads sharing one OCR
    engine. A failing file yields a BatchFailure entry and never stops the
    rest of the batch.

    Args:
        file_paths: Files to extract.
        config: Extraction configuration.

    Returns:
        One entry per input, in input order.
    """
    config = config or ExtractionConfig()
    paths = [Path(p) for p in file_paths]
    results: list[ExtractionResult | BatchFailure] = []

    with TextExtractor(config) as extractor:
        with ThreadPoolExecutor(max_workers=config.max_workers) as pool:
            futures = [pool.submit(extractor.extract, path) for path in paths]
            for path, future in zip(paths, futures):
                try:
                    results.append(future.result())
                except Exception as e:
                    logger.error("Failed to extract %s: %s", path, e)
                    results.append(BatchFailure(error=str(e), file_path=path))

    failed = sum(isinstance(r, BatchFailure) for r in results)
    logger.info("Batch complete: %d file(s), %d failed", len(results), failed)
    return results
