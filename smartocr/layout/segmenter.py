"""
Block segmentation for reading-order reconstruction.

Groups consecutive classified lines into ContentBlocks. A new block is
opened before a title or document-type header, before any footer line,
after a title or a footer run, and wherever the line length jumps sharply (a common sign
that OCR has run two unrelated regions together).

The segmentation is lossless: concatenating the blocks yields the input
lines in their original order.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from smartocr.models import ClassifiedLine, ContentBlock, LineType

logger = logging.getLogger(__name__)

# Character-length difference that separates two lines into different blocks
LENGTH_JUMP_THRESHOLD = 60

SECTION_START_TYPES = frozenset({LineType.TITLE, LineType.DOCUMENT_TYPE})


class BlockSegmenter:
    """
    Splits a classified line sequence into ContentBlocks.

    Example:
        >>> from smartocr.layout.classifier import LineClassifier
        >>> lines = LineClassifier().classify_lines("REPORT TITLE\\nBody.\\nPage 3")
        >>> [b.text for b in BlockSegmenter().segment(lines)]
        ['REPORT TITLE', 'Body.', 'Page 3']
    """

    def __init__(self, length_jump: int = LENGTH_JUMP_THRESHOLD):
        self.length_jump = length_jump

    def starts_new_block(self, line: ClassifiedLine, last: ClassifiedLine | None) -> bool:
        """
        Decide whether ``line`` opens a new block.

        Args:
            line: The line about to be appended.
            last: The last line of the open block, if any.
        """
        if line.line_type in SECTION_START_TYPES:
            return True
        if line.is_footer:
            return True
        if last is None:
            return False
        if abs(len(line.text) - len(last.text)) > self.length_jump:
            return True
        # Footer material groups together; the first non-footer line after it
        # opens a block, so a footer met mid-text is moved without the body
        if last.is_footer:
            return True
        # Look-ahead from the title's side: the line after a title belongs
        # to the next block, so a title always stands alone.
        return last.line_type is LineType.TITLE

    def segment(self, lines: Sequence[ClassifiedLine]) -> list[ContentBlock]:
        """
        Group lines into blocks.

        Args:
            lines: Classified lines in input order.

        Returns:
            Blocks whose concatenation is exactly ``lines``.
        """
        blocks: list[ContentBlock] = []
        current: list[ClassifiedLine] = []

        for line in lines:
            last = current[-1] if current else None

            if current and self.starts_new_block(line, last):
                blocks.append(ContentBlock(tuple(current)))
                current = []

            current.append(line)

        if current:
            blocks.append(ContentBlock(tuple(current)))

        logger.debug("Segmented %d lines into %d blocks", len(lines), len(blocks))
        return blocks
