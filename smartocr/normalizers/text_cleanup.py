"""
Rule-table text cleanup for OCR output.

Repairs are kept as ordered tables of (pattern, replacement) rows so each
fix can be tested on its own. Two tables live here:

- GENERAL_CLEANUP_RULES: safe for any document (broken word splits,
  punctuation spacing, sentence capitalisation).
- FINAL_PASS_RULES: whitespace collapse and digit/letter de-gluing, run
  after a document family's specific fixes.

Example:
    >>> clean_ocr_text("T he report is ready.It was late . thanks")
    'The report is ready. It was late. Thanks'
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass

logger = logging.getLogger(__name__)

Replacement = str | Callable[[re.Match[str]], str]


@dataclass(frozen=True)
class RepairRule:
    """A single substitution in a repair table."""

    name: str
    pattern: re.Pattern[str]
    replacement: Replacement
    category: str = "cleanup"

    def apply(self, text: str) -> tuple[str, int]:
        """Apply the rule, returning the new text and the number of substitutions."""
        return self.pattern.subn(self.replacement, text)


def apply_rules(text: str, rules: Iterable[RepairRule]) -> str:
    """Apply rules in order, logging the ones that fired."""
    for rule in rules:
        text, count = rule.apply(text)
        if count:
            logger.debug("Repair rule %s applied %d time(s)", rule.name, count)
    return text


def _capitalize(match: re.Match[str]) -> str:
    return match.group(1) + match.group(2).upper()


# =============================================================================
# RULE TABLES
# =============================================================================

GENERAL_CLEANUP_RULES: tuple[RepairRule, ...] = (
    RepairRule("collapse_spaces", re.compile(r"[ \t]+"), " "),
    RepairRule("strip_line_ends", re.compile(r"[ \t]+$", re.M), ""),
    # "T he" -> "The" at sentence start; A and I are real one-letter words
    RepairRule(
        "join_split_word",
        re.compile(r"(^|[.!?][ \t]+)([B-HJ-Z])[ \t]+([a-z]+)\b", re.M),
        r"\1\2\3",
    ),
    RepairRule("space_before_punctuation", re.compile(r"[ \t]+([.,!?;:])(?=\s|$)"), r"\1"),
    RepairRule(
        "space_after_sentence",
        re.compile(r"(?<=[a-z])([.!?])(?=[A-Z][a-z])"),
        r"\1 ",
    ),
    # Plain words only: "www.example.com" after a full stop stays lowercase
    RepairRule(
        "capitalize_sentence_start",
        re.compile(r"(\A|[.!?]\s+)([a-z])(?=[a-z']*(?:[\s,;:!?)]|\.(?!\w)|\Z))"),
        _capitalize,
    ),
    RepairRule("collapse_blank_lines", re.compile(r"\n{3,}"), "\n\n"),
)

FINAL_PASS_RULES: tuple[RepairRule, ...] = (
    RepairRule("collapse_spaces", re.compile(r"[ \t]+"), " "),
    RepairRule("strip_line_ends", re.compile(r"[ \t]+$", re.M), ""),
    RepairRule("collapse_blank_lines", re.compile(r"\n{3,}"), "\n\n"),
    RepairRule("split_digit_upper", re.compile(r"(\d)([A-Z])"), r"\1 \2"),
    # Two or more letters: single-letter codes such as "B2" stay intact
    RepairRule("split_word_digit", re.compile(r"([A-Za-z]{2,})(\d)"), r"\1 \2"),
)


def clean_ocr_text(text: str) -> str:
    """
    Apply the general-purpose cleanup table.

    Intended for documents that no DocumentFamily recognises.

    Args:
        text: Raw extracted text.

    Returns:
        Cleaned text with surrounding whitespace removed.
    """
    if not isinstance(text, str):
        return ""
    return apply_rules(text, GENERAL_CLEANUP_RULES).strip()
