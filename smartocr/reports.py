"""
Link and structured-data reports written to disk.

Link reports (``<stem>_extracted_links.json``) are what browser tests load
back to decide which links on a captured page to click. File stems follow
the ``<search term>_<run>-<stage>`` convention of those captures, e.g.
``oup_1-0.png`` or ``oup-results_1-2.png``.

Structured reports (``<stem>_structured_data.json`` and ``.csv``) describe
one extracted file in full for side-by-side comparison.
"""

from __future__ import annotations

import csv
import json
import logging
import re
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from smartocr.config import DEFAULT_LINKS_DIR, ExtractionConfig
from smartocr.exceptions import PersistenceWarning
from smartocr.links.classifier import build_link_records, categorize_links
from smartocr.links.extractor import extract_links
from smartocr.models import ExtractionResult

logger = logging.getLogger(__name__)

LINKS_SUFFIX = "_extracted_links.json"
STRUCTURED_SUFFIX = "_structured_data"
METADATA_FIELDS = (
    "file_name",
    "file_size",
    "extracted_at",
    "total_characters",
    "total_lines",
    "total_words",
)

SEARCH_TERM_PATTERN = re.compile(r"^([a-zA-Z]+)_\d+-\d+")
PARAGRAPH_BREAK = re.compile(r"\n\s*\n")

# Stage markers checked in order
TEST_STAGES = (
    ("results", "search_results"),
    ("1-0", "initial_page"),
    ("1-1", "search_input"),
    ("1-2", "search_results"),
)
UNKNOWN_STAGE = "unknown_stage"


def search_term_from_filename(stem: str) -> str:
    """
    Search term encoded in a capture's file stem.

    Example:
        >>> search_term_from_filename("mango_1-1")
        'mango'
        >>> search_term_from_filename("screenshot")
        'unknown'
    """
    match = SEARCH_TERM_PATTERN.match(stem)
    return match.group(1) if match else "unknown"


def stage_from_filename(stem: str) -> str:
    """Test stage encoded in a capture's file stem."""
    for marker, stage in TEST_STAGES:
        if marker in stem:
            return stage
    return UNKNOWN_STAGE


# =============================================================================
# LINK REPORTS
# =============================================================================


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


def save_links_to_json(
    links: list[str],
    file_path: str | Path,
    output_dir: str | Path = DEFAULT_LINKS_DIR,
) -> Path | None:
    """
    Write a link report for one extracted file.

    Args:
        links: Links found in the file.
        file_path: The file the links came from.
        output_dir: Report directory, created if missing.

    Returns:
        Path of the report, or None when there are no links (nothing is written).

    Raises:
        PersistenceWarning: If the report cannot be written.
    """
    file_path = Path(file_path)
    if not links:
        logger.info("No links found in %s; skipping JSON save", file_path.name)
        return None

    stem = file_path.stem
    data = {
        "test_metadata": {
            "original_file": str(file_path),
            "extracted_at": _utc_now(),
            "search_term": search_term_from_filename(stem),
            "test_stage": stage_from_filename(stem),
        },
        "link_summary": {
            "total_links": len(links),
            "link_types": categorize_links(links),
        },
        "links": [
            {**record.to_dict(), "clickable": True, "extracted_from": stem}
            for record in build_link_records(links)
        ],
    }

    report_path = Path(output_dir) / f"{stem}{LINKS_SUFFIX}"
    try:
        report_path.parent.mkdir(parents=True, exist_ok=True)
        report_path.write_text(json.dumps(data, indent=2), encoding="utf-8")
    except OSError as e:
        raise PersistenceWarning(f"Could not write link report {report_path}: {e}") from e

    logger.info(
        "Saved %d link(s) to %s (stage: %s)",
        len(links),
        report_path,
        data["test_metadata"]["test_stage"],
    )
    return report_path


def load_links_from_json(
    search_term: str,
    test_stage: str | None = None,
    output_dir: str | Path = DEFAULT_LINKS_DIR,
) -> dict[str, Any] | None:
    """
    Load the newest link report for a search term.

    Args:
        search_term: Substring of the report file name (e.g. "oup").
        test_stage: Only consider reports for this stage (e.g. "search_results").
        output_dir: Report directory.

    Returns:
        The report data, or None if no report matches or it cannot be read.
    """
    output_dir = Path(output_dir)
    if not output_dir.is_dir():
        logger.info("Link report directory %s does not exist", output_dir)
        return None

    candidates = [
        path
        for path in output_dir.glob(f"*{LINKS_SUFFIX}")
        if search_term in path.name
        and (
            test_stage is None
            or stage_from_filename(path.name[: -len(LINKS_SUFFIX)]) == test_stage
        )
    ]
    if not candidates:
        logger.info("No saved links found for search term: %s", search_term)
        return None

    newest = max(candidates, key=lambda path: path.stat().st_mtime)
    try:
        data = json.loads(newest.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        logger.warning("Could not load link report %s: %s", newest, e)
        return None

    logger.info("Loaded links from %s", newest)
    return data


# =============================================================================
# STRUCTURED REPORTS
# =============================================================================


@dataclass(frozen=True)
class StructuredReport:
    """Paths of a written structured report and the data it holds."""

    json_path: Path
    csv_path: Path
    data: dict[str, Any]


def _ratio(numerator: int, denominator: int) -> float:
    return numerator / (denominator or 1)


def build_structured_data(result: ExtractionResult) -> dict[str, Any]:
    """Describe an extraction result: metadata, text by line and paragraph, links, density."""
    text = result.text
    lines = text.split("\n")
    words = text.split()
    non_empty_lines = [line for line in lines if line.strip()]

    text_by_lines = [
        {
            "line_number": number,
            "content": line.strip(),
            "length": len(line.strip()),
            "has_links": bool(extract_links(line)),
        }
        for number, line in enumerate(lines, start=1)
        if line.strip()
    ]
    text_by_paragraphs = [
        {
            "paragraph_number": number,
            "content": paragraph.strip(),
            "length": len(paragraph.strip()),
            "line_count": len(paragraph.split("\n")),
        }
        for number, paragraph in enumerate(PARAGRAPH_BREAK.split(text), start=1)
        if paragraph.strip()
    ]

    return {
        "metadata": {
            "file_name": result.file_path.name,
            "file_path": str(result.file_path),
            "file_size": result.file_path.stat().st_size,
            "extracted_at": _utc_now(),
            "mime_type": result.mime_type,
            "total_characters": len(text),
            "total_lines": len(lines),
            "total_words": len(words),
        },
        "content": {
            "full_text": text,
            "text_by_lines": text_by_lines,
            "text_by_paragraphs": text_by_paragraphs,
        },
        "links": {
            "total": len(result.links),
            "by_type": categorize_links(result.links),
            "list": [record.to_dict() for record in build_link_records(result.links, text)],
        },
        "document": result.structured_data,
        "analysis": {
            "text_density": _ratio(len(text), len(lines)),
            "average_line_length": _ratio(len(text), len(non_empty_lines)),
            "link_density": _ratio(len(result.links), len(words)),
        },
    }


def _flatten(data: dict[str, Any], prefix: str = "") -> list[tuple[str, Any]]:
    rows = []
    for key, value in data.items():
        name = f"{prefix}.{key}" if prefix else key
        if isinstance(value, dict):
            rows.extend(_flatten(value, name))
        else:
            rows.append((name, value))
    return rows


def structured_csv_rows(data: dict[str, Any]) -> list[list[Any]]:
    """The Section,Field,Value rows of a structured report."""
    metadata = data["metadata"]
    analysis = data["analysis"]
    rows: list[list[Any]] = [["Section", "Field", "Value"]]

    for field_name in METADATA_FIELDS:
        rows.append(["Metadata", field_name, metadata[field_name]])

    rows.append(["Links", "total", data["links"]["total"]])
    for link in data["links"]["list"]:
        rows.append(["Link", link["id"], link["url"], link["type"]])

    if data.get("document"):
        for name, value in _flatten(data["document"]):
            rows.append(["Document", name, "" if value is None else value])

    rows.append(["Analysis", "text_density", f"{analysis['text_density']:.2f}"])
    rows.append(["Analysis", "average_line_length", f"{analysis['average_line_length']:.2f}"])
    rows.append(["Analysis", "link_density", f"{analysis['link_density']:.4f}"])
    return rows


def write_structured_report(
    result: ExtractionResult, output_dir: str | Path
) -> StructuredReport:
    """
    Write ``<stem>_structured_data.json`` and ``.csv`` for a result.

    Raises:
        PersistenceWarning: If either file cannot be written.
    """
    data = build_structured_data(result)
    output_dir = Path(output_dir)
    stem = result.file_path.stem
    json_path = output_dir / f"{stem}{STRUCTURED_SUFFIX}.json"
    csv_path = output_dir / f"{stem}{STRUCTURED_SUFFIX}.csv"

    try:
        output_dir.mkdir(parents=True, exist_ok=True)
        json_path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        with csv_path.open("w", newline="", encoding="utf-8") as f:
            csv.writer(f).writerows(structured_csv_rows(data))
    except OSError as e:
        raise PersistenceWarning(f"Could not write structured report for {stem}: {e}") from e

    logger.info("Structured data saved to %s and %s", json_path, csv_path)
    return StructuredReport(json_path=json_path, csv_path=csv_path, data=data)


def extract_structured_data(
    file_path: str | Path, config: ExtractionConfig | None = None
) -> StructuredReport:
    """
    Extract a file and write its structured report.

    Links are not saved separately; they are part of the report.
    The report goes to ``config.structured_output_dir``.

    Raises:
        FileNotFoundError, UnsupportedFormatError, ExtractionError: As extract_text().
        PersistenceWarning: If the report cannot be written.
    """
    from smartocr.extract import extract_text

    config = config or ExtractionConfig()
    result = extract_text(file_path, replace(config, save_links_to_json=False))
    return write_structured_report(result, config.structured_output_dir)
