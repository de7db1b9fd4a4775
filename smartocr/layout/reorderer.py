"""
Block reordering for reading-order reconstruction.

Blocks are stably sorted by the role of their first line: titles, then
document-type lines, then other headers, then body content, then footer
material. Lines inside a block never move relative to each other.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from smartocr.models import ClassifiedLine, ContentBlock, LineType

logger = logging.getLogger(__name__)

# Block order keys (lowest first)
TITLE_ORDER = 1
DOCUMENT_TYPE_ORDER = 2
HEADER_ORDER = 10
CONTENT_ORDER = 50
FOOTER_ORDER = 100


def block_order(block: ContentBlock) -> int:
    """Order key of a block, decided by its first line."""
    first = block.first
    if first.line_type is LineType.TITLE:
        return TITLE_ORDER
    if first.line_type is LineType.DOCUMENT_TYPE:
        return DOCUMENT_TYPE_ORDER
    if first.is_header:
        return HEADER_ORDER
    if first.is_footer:
        return FOOTER_ORDER
    return CONTENT_ORDER


@dataclass(frozen=True)
class ReorderResult:
    """Outcome of reordering one block sequence."""

    blocks: tuple[ContentBlock, ...]
    changed: bool

    @property
    def lines(self) -> list[ClassifiedLine]:
        return [line for block in self.blocks for line in block.lines]

    @property
    def text(self) -> str:
        return "\n".join(line.text for line in self.lines)


class BlockReorderer:
    """
    Sorts blocks into canonical reading order.

    Python's sort is stable, so blocks with equal keys keep their input
    order.

    Example:
        >>> result = BlockReorderer().reorder(blocks)
        >>> result.changed
        True
    """

    def reorder(self, blocks: Sequence[ContentBlock]) -> ReorderResult:
        """
        Reorder blocks.

        Args:
            blocks: Blocks from BlockSegmenter, in input order.

        Returns:
            ReorderResult holding a permutation of ``blocks``.
        """
        ordered = tuple(sorted(blocks, key=block_order))
        before = [line.index for block in blocks for line in block.lines]
        after = [line.index for block in ordered for line in block.lines]
        changed = before != after

        if changed:
            logger.debug("Reordered %d blocks", len(ordered))
        return ReorderResult(blocks=ordered, changed=changed)
