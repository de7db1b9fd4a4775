"""
Document families: trigger phrases paired with bespoke repair tables.

Generic heuristics cannot undo every OCR artifact. For document layouts
that are processed often, a DocumentFamily bundles:

- trigger phrases that identify the layout from its text,
- an ordered repair table for merge/split artifacts specific to it,
- keyword sections used to rebuild reading order when the generic
  reorderer leaves the text untouched,
- an optional parser that pulls structured fields out of the text.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any

from smartocr.models import ClassifiedLine
from smartocr.normalizers.text_cleanup import RepairRule, apply_rules

logger = logging.getLogger(__name__)

# Repair categories, applied specific-before-general
REPAIR_CATEGORIES = ("merged_header", "score_token", "score_range", "cleanup")


@dataclass(frozen=True)
class SectionRule:
    """Keyword patterns that assign a line to a named section."""

    name: str
    patterns: tuple[re.Pattern[str], ...]

    def matches(self, text: str) -> bool:
        return any(p.search(text) for p in self.patterns)


def section(name: str, *patterns: str) -> SectionRule:
    """Build a SectionRule from case-insensitive regex strings."""
    return SectionRule(name, tuple(re.compile(p, re.I) for p in patterns))


@dataclass(frozen=True)
class DocumentFamily:
    """
    A recognisable document layout and the rules that fix its OCR output.

    Attributes:
        name: Family identifier (e.g. "oxford_test_of_english").
        trigger_phrases: Lowercase phrases; any one present selects the family.
        repair_rules: Repair table, grouped by REPAIR_CATEGORIES order.
        section_rules: Sections in output order for reconstruct().
        parser: Optional callable turning repaired text into a dict.
    """

    name: str
    trigger_phrases: tuple[str, ...]
    repair_rules: tuple[RepairRule, ...] = ()
    section_rules: tuple[SectionRule, ...] = ()
    parser: Callable[[str], dict[str, Any]] | None = field(default=None, repr=False)

    def __post_init__(self):
        unknown = {r.category for r in self.repair_rules} - set(REPAIR_CATEGORIES)
        if unknown:
            raise ValueError(f"Unknown repair categories for {self.name}: {sorted(unknown)}")

    def matches(self, text: str) -> bool:
        """Whether the text belongs to this family."""
        lowered = text.lower()
        return any(phrase in lowered for phrase in self.trigger_phrases)

    def repair(self, text: str) -> str:
        """
        Apply the family's repair table.

        Rules run category by category (specific fixes first, general
        cleanup last); within a category they keep table order.
        """
        ordered = sorted(self.repair_rules, key=lambda r: REPAIR_CATEGORIES.index(r.category))
        return apply_rules(text, ordered).strip()

    def reconstruct(self, lines: Sequence[ClassifiedLine]) -> list[ClassifiedLine]:
        """
        Rebuild reading order from keyword sections.

        Each line joins the first section whose keywords it matches; a line
        matching none stays with the section of the line before it. Lines
        are then stably sorted by section order, so the result is always a
        permutation of ``lines``.
        """
        if not self.section_rules:
            return list(lines)

        # Lines before the first keyword hit sort ahead of every section
        current = -1
        keyed: list[tuple[int, ClassifiedLine]] = []
        for line in lines:
            for order, rule in enumerate(self.section_rules):
                if rule.matches(line.text):
                    current = order
                    break
            keyed.append((current, line))

        keyed.sort(key=lambda item: item[0])
        logger.debug("Reconstructed %d lines for family %s", len(keyed), self.name)
        return [line for _, line in keyed]

    def parse(self, text: str) -> dict[str, Any] | None:
        """Extract structured fields, or None when the family has no parser."""
        if self.parser is None:
            return None
        return self.parser(text)
