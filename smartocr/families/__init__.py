"""
Document families with bespoke OCR repair tables.

Example:
    >>> from smartocr.families import detect_family
    >>> family = detect_family("Statement of Results Oxford Test of English")
    >>> family.name
    'oxford_test_of_english'
"""

from __future__ import annotations

from collections.abc import Sequence

from smartocr.families.base import REPAIR_CATEGORIES, DocumentFamily, SectionRule, section
from smartocr.families.oxford_test import OXFORD_TEST_FAMILY

# Checked in order; the first family whose trigger phrase occurs wins
FAMILIES: tuple[DocumentFamily, ...] = (OXFORD_TEST_FAMILY,)


def detect_family(
    text: str, families: Sequence[DocumentFamily] = FAMILIES
) -> DocumentFamily | None:
    """Return the first family that recognises ``text``, or None."""
    if not isinstance(text, str):
        return None
    for family in families:
        if family.matches(text):
            return family
    return None


__all__ = [
    "DocumentFamily",
    "SectionRule",
    "section",
    "REPAIR_CATEGORIES",
    "FAMILIES",
    "OXFORD_TEST_FAMILY",
    "detect_family",
]
