#!/usr/bin/env python3
"""
Basic smartocr Usage Example

This example demonstrates the core workflow:
1. Extract text and links from a capture
2. Tune extraction with a custom configuration
3. Inspect and render the links
4. Load a saved link report back in a browser test
5. Process a folder of captures in one batch
"""

from pathlib import Path

from smartocr import (
    BatchFailure,
    ExtractionConfig,
    OCRConfig,
    batch_extract,
    categorize_links,
    extract_structured_data,
    extract_text,
    load_links_from_json,
    make_links_clickable,
)


def main():
    # ─────────────────────────────────────────────────────────────────────────
    # 1. Basic Extraction
    # ─────────────────────────────────────────────────────────────────────────

    # Images are OCR'd, documents are parsed; links are saved to
    # shared-objects/extracted-links/oup_1-0_extracted_links.json
    result = extract_text("captures/oup_1-0.png")

    print(f"Extracted: {result.file_path.name} ({result.mime_type})")
    print(f"  Text length: {len(result.text):,} characters")
    print(f"  Links: {len(result.links)}")
    print(f"  Report: {result.saved_links_json}")
    for warning in result.warnings:
        print(f"  Warning: {warning}")

    # ─────────────────────────────────────────────────────────────────────────
    # 2. Custom Configuration
    # ─────────────────────────────────────────────────────────────────────────

    config = ExtractionConfig(
        save_links_to_json=False,  # Keep links in memory only
        general_cleanup=True,  # Fix "T he" splits and sentence spacing
        ocr=OCRConfig(
            language="eng",
            psm=4,  # Single column of variable-size text
            min_confidence=70,  # Drop words Tesseract is unsure of
        ),
    )

    result = extract_text("captures/flyer.png", config=config)

    # ─────────────────────────────────────────────────────────────────────────
    # 3. Links
    # ─────────────────────────────────────────────────────────────────────────

    print(categorize_links(result.links))  # {'urls': 2, 'emails': 1, ...}

    html = make_links_clickable(result.text, list(result.links))
    Path("output/flyer.html").write_text(f"<pre>{html}</pre>", encoding="utf-8")

    # ─────────────────────────────────────────────────────────────────────────
    # 4. Certificates
    # ─────────────────────────────────────────────────────────────────────────

    # Recognised document families are repaired and parsed
    result = extract_text("scans/certificate.pdf")
    if result.structured_data:
        overall = result.structured_data["overall_results"]
        print(f"Overall: {overall['score']} ({overall['cefr_level']})")

    # Full JSON + CSV report of one file
    report = extract_structured_data("scans/certificate.pdf")
    print(f"Structured data: {report.json_path}")


def browser_test_example():
    """Load the links a previous extraction saved for a search term."""
    data = load_links_from_json("oup", test_stage="search_results")
    if data is None:
        print("No links saved yet")
        return

    for link in data["links"]:
        if link["type"] == "url":
            print(f"Would click {link['url']}")


def batch_example():
    """Extract every capture in a folder, continuing on errors."""
    captures = sorted(Path("captures/").glob("*.png"))

    for entry in batch_extract(captures, ExtractionConfig(max_workers=8)):
        if isinstance(entry, BatchFailure):
            print(f"{entry.file_path.name}: FAILED ({entry.error})")
        else:
            print(f"{entry.file_path.name}: {len(entry.links)} link(s)")


if __name__ == "__main__":
    # Note: These examples use placeholder paths.
    # Replace with real captures to run.
    print("smartocr Usage Examples")
    print("=" * 50)
    print("\nSee the code for detailed examples of:")
    print("  - Text and link extraction")
    print("  - Custom configuration")
    print("  - Clickable link rendering")
    print("  - Certificate parsing")
    print("  - Browser test link loading")
    print("  - Batch extraction")
