"""
Reading-order reconstruction over the linear sequence of text lines.

- LineClassifier: labels each line (title, footer, list item, ...)
- BlockSegmenter: groups consecutive lines into ContentBlocks
- BlockReorderer: sorts blocks into canonical reading order
- TextPipeline: repair, classify, segment, reorder, with family fallback
"""

from smartocr.layout.classifier import CLASSIFICATION_RULES, LineClassifier, LineRule, split_lines
from smartocr.layout.pipeline import ReconstructionResult, ReorderStrategy, TextPipeline
from smartocr.layout.reorderer import BlockReorderer, ReorderResult, block_order
from smartocr.layout.segmenter import BlockSegmenter

__all__ = [
    "CLASSIFICATION_RULES",
    "LineClassifier",
    "LineRule",
    "split_lines",
    "BlockSegmenter",
    "BlockReorderer",
    "ReorderResult",
    "block_order",
    "TextPipeline",
    "ReconstructionResult",
    "ReorderStrategy",
]
