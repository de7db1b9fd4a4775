"""
Reading-order reconstruction pipeline.

Orchestrates the text stages that run on every extracted document:
1. Family detection and text repair (or general cleanup)
2. Line classification
3. Block segmentation
4. Block reordering, with the family's keyword reconstruction as fallback
   when the generic reorder leaves the lines where they were
"""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from smartocr.families import FAMILIES, DocumentFamily, detect_family
from smartocr.layout.classifier import LineClassifier
from smartocr.layout.reorderer import BlockReorderer
from smartocr.layout.segmenter import BlockSegmenter
from smartocr.models import ClassifiedLine
from smartocr.normalizers.text_cleanup import clean_ocr_text

logger = logging.getLogger(__name__)


# =============================================================================
# DATA STRUCTURES
# =============================================================================


class ReorderStrategy(Enum):
    """How the final line order was obtained."""

    NONE = "none"
    BLOCKS = "blocks"
    FAMILY = "family"


@dataclass
class ReconstructionResult:
    """Result of running the pipeline over one document's text."""

    original_text: str
    text: str
    family: str | None
    strategy: ReorderStrategy
    line_count: int
    structured_data: dict[str, Any] | None = None
    processing_time_ms: float = 0.0

    @property
    def reordered(self) -> bool:
        return self.strategy is not ReorderStrategy.NONE


# =============================================================================
# PIPELINE
# =============================================================================


@dataclass
class TextPipeline:
    """
    Repair and reorder extracted text.

    Attributes:
        repair_text: Apply the detected family's repair table.
        reorder_lines: Run classification, segmentation and reordering.
        general_cleanup: Run clean_ocr_text() when no family matched.
        families: Families considered by detection, in priority order.

    Example:
        >>> pipeline = TextPipeline()
        >>> result = pipeline.process("Body text.\\nREPORT TITLE")
        >>> result.text
        'REPORT TITLE\\nBody text.'
    """

    repair_text: bool = True
    reorder_lines: bool = True
    general_cleanup: bool = False
    families: Sequence[DocumentFamily] = FAMILIES
    classifier: LineClassifier = field(default_factory=LineClassifier)
    segmenter: BlockSegmenter = field(default_factory=BlockSegmenter)
    reorderer: BlockReorderer = field(default_factory=BlockReorderer)

    def repair(self, text: str, family: DocumentFamily | None) -> str:
        """Stage 1: family repair, or general cleanup for unrecognised text."""
        if family is not None:
            return family.repair(text) if self.repair_text else text
        if self.general_cleanup:
            return clean_ocr_text(text)
        return text

    def reorder(
        self, lines: list[ClassifiedLine], family: DocumentFamily | None
    ) -> tuple[list[ClassifiedLine], ReorderStrategy]:
        """Stages 3-4: generic block reorder, then the family fallback."""
        blocks = self.segmenter.segment(lines)
        result = self.reorderer.reorder(blocks)
        if result.changed:
            return result.lines, ReorderStrategy.BLOCKS

        if family is not None:
            reconstructed = family.reconstruct(lines)
            if [line.index for line in reconstructed] != [line.index for line in lines]:
                logger.debug("Applied %s section reconstruction", family.name)
                return reconstructed, ReorderStrategy.FAMILY

        return lines, ReorderStrategy.NONE

    def process(self, text: str) -> ReconstructionResult:
        """
        Run the full pipeline over a document's text.

        Args:
            text: Raw text from a format reader.

        Returns:
            ReconstructionResult. When nothing moves, ``text`` is the
            repaired text with its original spacing intact.
        """
        start_time = time.time()
        family = detect_family(text, self.families)
        if family is not None:
            logger.debug("Detected document family: %s", family.name)

        repaired = self.repair(text, family)
        lines = self.classifier.classify_lines(repaired)
        strategy = ReorderStrategy.NONE
        final_text = repaired

        if self.reorder_lines and lines:
            ordered, strategy = self.reorder(lines, family)
            if strategy is not ReorderStrategy.NONE:
                final_text = "\n".join(line.text for line in ordered)

        structured = family.parse(final_text) if family is not None else None

        return ReconstructionResult(
            original_text=text,
            text=final_text,
            family=family.name if family is not None else None,
            strategy=strategy,
            line_count=len(lines),
            structured_data=structured,
            processing_time_ms=(time.time() - start_time) * 1000,
        )
