"""
Command-line interface.

Usage:
    smartocr extract document.pdf
    smartocr links flyer.png
    smartocr batch ./captures
    smartocr save-links oup_1-0.png
    smartocr load-links oup --stage search_results
    smartocr structured certificate.pdf
    smartocr render webpage.html > webpage_links.html
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from smartocr import __version__
from smartocr.config import DEFAULT_LINKS_DIR, DEFAULT_STRUCTURED_DIR, ExtractionConfig, OCRConfig
from smartocr.exceptions import SmartOCRError, SmartOCRWarning
from smartocr.extract import batch_extract, extract_text
from smartocr.links.renderer import make_links_clickable
from smartocr.models import BatchFailure
from smartocr.readers.registry import is_supported
from smartocr.reports import extract_structured_data, load_links_from_json

logger = logging.getLogger(__name__)


def build_config(args: argparse.Namespace, **overrides) -> ExtractionConfig:
    """ExtractionConfig from the global options."""
    output_dir = args.output_dir
    options = {
        "save_links_to_json": not args.no_save_links,
        "output_dir": output_dir or DEFAULT_LINKS_DIR,
        "structured_output_dir": output_dir or DEFAULT_STRUCTURED_DIR,
        "ocr": OCRConfig(language=args.language),
    }
    options.update(overrides)
    return ExtractionConfig(**options)


def expand_paths(paths: list[Path]) -> list[Path]:
    """Directories expand to the supported files directly inside them."""
    expanded = []
    for path in paths:
        if path.is_dir():
            expanded.extend(sorted(p for p in path.iterdir() if p.is_file() and is_supported(p)))
        else:
            expanded.append(path)
    return expanded


# =============================================================================
# COMMANDS
# =============================================================================


def cmd_extract(args: argparse.Namespace) -> int:
    result = extract_text(args.file, build_config(args))
    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
        return 0

    print(result.text)
    if result.structured_data:
        print("\nSTRUCTURED DATA:")
        print(json.dumps(result.structured_data, indent=2))
    if result.saved_links_json:
        print(f"\nLinks saved to: {result.saved_links_json}")
    return 0


def cmd_links(args: argparse.Namespace) -> int:
    result = extract_text(args.file, build_config(args, save_links_to_json=False))
    print(f"Found {len(result.links)} link(s)")
    for number, link in enumerate(result.links, start=1):
        print(f"  {number}: {link}")
    return 0


def cmd_batch(args: argparse.Namespace) -> int:
    paths = expand_paths(args.paths)
    if not paths:
        print("No supported files found", file=sys.stderr)
        return 1

    results = batch_extract(paths, build_config(args))
    failures = 0
    for entry in results:
        if isinstance(entry, BatchFailure):
            failures += 1
            print(f"FAILED  {entry.file_path}: {entry.error}")
        else:
            print(f"OK      {entry.file_path}: {len(entry.text)} chars, {len(entry.links)} link(s)")

    print(f"Processed {len(results)} file(s), {failures} failed")
    return 1 if failures else 0


def cmd_save_links(args: argparse.Namespace) -> int:
    result = extract_text(args.file, build_config(args, save_links_to_json=True))
    if result.saved_links_json:
        print(f"Links saved to: {result.saved_links_json} ({len(result.links)} link(s))")
    else:
        print(f"No links saved for {args.file}")
    return 0


def cmd_load_links(args: argparse.Namespace) -> int:
    data = load_links_from_json(
        args.search_term, args.stage, args.output_dir or DEFAULT_LINKS_DIR
    )
    if data is None:
        print(f"No saved links found for: {args.search_term}", file=sys.stderr)
        return 1

    metadata = data.get("test_metadata", {})
    print(f"Search term: {metadata.get('search_term')}")
    print(f"Test stage: {metadata.get('test_stage')}")
    print(f"Total links: {data.get('link_summary', {}).get('total_links')}")
    for link in data.get("links", []):
        print(f"  {link['id']}: {link['url']} ({link['type']})")
    return 0


def cmd_structured(args: argparse.Namespace) -> int:
    report = extract_structured_data(args.file, build_config(args))
    print(f"Structured data saved to: {report.json_path}")
    print(f"CSV data saved to: {report.csv_path}")
    return 0


def cmd_render(args: argparse.Namespace) -> int:
    result = extract_text(args.file, build_config(args, save_links_to_json=False))
    html = make_links_clickable(result.text, list(result.links))
    if args.output:
        args.output.write_text(html, encoding="utf-8")
        print(f"HTML written to: {args.output}")
    else:
        print(html)
    return 0


# =============================================================================
# PARSER
# =============================================================================


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="smartocr",
        description="Extract text and links from images and documents",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--output-dir", type=Path, help="Directory for link and structured reports")
    parser.add_argument("--language", default="eng", help="Tesseract language (default: eng)")
    parser.add_argument(
        "--no-save-links", action="store_true", help="Do not write a JSON link report"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    commands = parser.add_subparsers(dest="command", required=True)

    extract = commands.add_parser("extract", help="Extract text from a file")
    extract.add_argument("file", type=Path)
    extract.add_argument("--json", action="store_true", help="Print the full result as JSON")
    extract.set_defaults(handler=cmd_extract)

    links = commands.add_parser("links", help="List the links in a file")
    links.add_argument("file", type=Path)
    links.set_defaults(handler=cmd_links)

    batch = commands.add_parser("batch", help="Extract many files (directories are expanded)")
    batch.add_argument("paths", type=Path, nargs="+")
    batch.set_defaults(handler=cmd_batch)

    save_links = commands.add_parser("save-links", help="Write the link report for a file")
    save_links.add_argument("file", type=Path)
    save_links.set_defaults(handler=cmd_save_links)

    load_links = commands.add_parser("load-links", help="Show the newest saved link report")
    load_links.add_argument("search_term")
    load_links.add_argument("--stage", help="Only reports for this test stage")
    load_links.set_defaults(handler=cmd_load_links)

    structured = commands.add_parser("structured", help="Write JSON and CSV structured reports")
    structured.add_argument("file", type=Path)
    structured.set_defaults(handler=cmd_structured)

    render = commands.add_parser("render", help="Render text with clickable links as HTML")
    render.add_argument("file", type=Path)
    render.add_argument("-o", "--output", type=Path, help="Write HTML here instead of stdout")
    render.set_defaults(handler=cmd_render)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        return args.handler(args)
    except (FileNotFoundError, SmartOCRError, SmartOCRWarning) as e:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
