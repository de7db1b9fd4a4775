"""
Text normalizers for extracted content.

- clean_ocr_text: general-purpose cleanup for documents no family recognises
- RepairRule / apply_rules: the rule-table machinery shared with families
"""

from smartocr.normalizers.text_cleanup import (
    FINAL_PASS_RULES,
    GENERAL_CLEANUP_RULES,
    RepairRule,
    apply_rules,
    clean_ocr_text,
)

__all__ = [
    "FINAL_PASS_RULES",
    "GENERAL_CLEANUP_RULES",
    "RepairRule",
    "apply_rules",
    "clean_ocr_text",
]
