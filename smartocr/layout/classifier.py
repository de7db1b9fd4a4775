"""
Line classification for reading-order reconstruction.

Each line of extracted text is labelled with a semantic role using an
ordered table of regex rules: headers first, then footers, then list
structure, then flow markers. The first matching rule decides the line
type; footer patterns are additionally checked on every line so that a
header such as ``Date: 03/06/2025`` is still flagged as footer material.

Example:
    >>> from smartocr.layout.classifier import LineClassifier
    >>> line = LineClassifier().classify("Page 3", index=7)
    >>> line.line_type, line.priority, line.is_footer
    (<LineType.PAGE_NUMBER: 'page_number'>, 100, True)
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from smartocr.models import ClassifiedLine, LineType, RawLine


class RuleGroup(Enum):
    """Which flag a matching rule sets on the line."""

    HEADER = "header"
    FOOTER = "footer"
    STRUCTURE = "structure"


@dataclass(frozen=True)
class LineRule:
    """One row of the classification table."""

    line_type: LineType
    pattern: re.Pattern[str]
    priority: int
    group: RuleGroup

    def matches(self, text: str) -> bool:
        return self.pattern.search(text) is not None


def _rule(line_type: LineType, pattern: str, priority: int, group: RuleGroup, flags=re.I):
    return LineRule(line_type, re.compile(pattern, flags), priority, group)


# =============================================================================
# RULE TABLE (evaluation order matters: first match wins)
# =============================================================================

CLASSIFICATION_RULES: tuple[LineRule, ...] = (
    # Salutation / metadata headers
    _rule(
        LineType.HEADER,
        r"^(?:(?:title|subject)\b|(?:to|from|date|re|cc|bcc):)",
        1,
        RuleGroup.HEADER,
    ),
    # All-caps titles: at least four letters/spaces, no lowercase
    _rule(LineType.TITLE, r"^(?=.*[A-Z])[A-Z ]{4,}$", 1, RuleGroup.HEADER, flags=0),
    _rule(
        LineType.DOCUMENT_TYPE,
        r"^(?:report|document|memo|letter|email|fax)\b",
        2,
        RuleGroup.HEADER,
    ),
    # Footers
    _rule(LineType.PAGE_NUMBER, r"^(?:page|p\.|pg\.)\s*\d+\b", 100, RuleGroup.FOOTER),
    _rule(LineType.DATE, r"\b\d{2}/\d{2}/\d{4}\b", 90, RuleGroup.FOOTER),
    _rule(LineType.COPYRIGHT, r"©|\bcopyright\b|\ball rights reserved\b", 95, RuleGroup.FOOTER),
    _rule(LineType.STATUS, r"\b(?:confidential|private|draft|internal)\b", 85, RuleGroup.FOOTER),
    # List structure
    _rule(LineType.NUMBERED_LIST, r"^\d+\.\s", 50, RuleGroup.STRUCTURE),
    _rule(LineType.LETTERED_LIST, r"^[a-z]\)\s", 50, RuleGroup.STRUCTURE),
    _rule(LineType.BULLET_LIST, r"^[-*•]\s", 50, RuleGroup.STRUCTURE),
    # Flow / conclusion markers
    _rule(
        LineType.CONCLUSION,
        r"^(?:therefore|thus|consequently|as a result|in conclusion|summary|finally)\b",
        80,
        RuleGroup.STRUCTURE,
    ),
)


class LineClassifier:
    """
    Labels lines with a LineType, priority and header/footer flags.

    Classification never fails: a line no rule matches is ``content``
    with priority 0.

    Attributes:
        rules: Ordered rule table; replace it to classify a different
            document style.
    """

    def __init__(self, rules: tuple[LineRule, ...] = CLASSIFICATION_RULES):
        self.rules = rules
        self._footer_rules = tuple(r for r in rules if r.group is RuleGroup.FOOTER)

    def classify(self, text: str, index: int = 0) -> ClassifiedLine:
        """
        Classify a single line.

        Args:
            text: The line; surrounding whitespace is ignored.
            index: Position of the line in the input sequence.

        Returns:
            ClassifiedLine for the line.
        """
        text = text.strip()
        is_footer = any(rule.matches(text) for rule in self._footer_rules)

        for rule in self.rules:
            if rule.matches(text):
                return ClassifiedLine(
                    index=index,
                    text=text,
                    line_type=rule.line_type,
                    priority=rule.priority,
                    is_header=rule.group is RuleGroup.HEADER,
                    is_footer=is_footer,
                )

        return ClassifiedLine(index=index, text=text, is_footer=is_footer)

    def classify_raw(self, line: RawLine) -> ClassifiedLine:
        return self.classify(line.text, line.index)

    def classify_lines(self, text: str) -> list[ClassifiedLine]:
        """Split text into trimmed non-empty lines and classify each one."""
        return [self.classify_raw(line) for line in split_lines(text)]


def split_lines(text: str) -> list[RawLine]:
    """Split text into trimmed, non-empty RawLines numbered from 0."""
    stripped = (line.strip() for line in text.splitlines())
    return [RawLine(index=i, text=line) for i, line in enumerate(s for s in stripped if s)]
