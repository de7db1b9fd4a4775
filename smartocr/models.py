"""
Data models for smartocr.

Lines and blocks describe the reading-order reconstruction; links and
results describe what extraction hands back to callers. Everything a
stage produces is frozen: later stages build new objects instead of
mutating earlier ones.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any


class LineType(Enum):
    """Semantic role of a single line of extracted text."""

    TITLE = "title"
    DOCUMENT_TYPE = "document_type"
    HEADER = "header"
    PAGE_NUMBER = "page_number"
    DATE = "date"
    COPYRIGHT = "copyright"
    STATUS = "status"
    NUMBERED_LIST = "numbered_list"
    LETTERED_LIST = "lettered_list"
    BULLET_LIST = "bullet_list"
    CONCLUSION = "conclusion"
    CONTENT = "content"


class LinkType(Enum):
    """Category assigned to an extracted link."""

    URL = "url"
    EMAIL = "email"
    FILE_PATH = "file-path"
    RELATIVE = "relative"
    OTHER = "other"


@dataclass(frozen=True)
class RawLine:
    """A single trimmed line of extracted text and its position in the input."""

    index: int
    text: str


@dataclass(frozen=True)
class ClassifiedLine:
    """A line labelled by the LineClassifier.

    ``priority`` only orders lines relative to each other (lower = earlier);
    it carries no meaning on its own.
    """

    index: int
    text: str
    line_type: LineType = LineType.CONTENT
    priority: int = 0
    is_header: bool = False
    is_footer: bool = False


@dataclass(frozen=True)
class ContentBlock:
    """A contiguous run of lines that move together during reordering."""

    lines: tuple[ClassifiedLine, ...]

    def __post_init__(self):
        if not self.lines:
            raise ValueError("ContentBlock requires at least one line")

    @property
    def first(self) -> ClassifiedLine:
        """The line that decides where the block is placed."""
        return self.lines[0]

    @property
    def text(self) -> str:
        return "\n".join(line.text for line in self.lines)

    def __len__(self) -> int:
        return len(self.lines)


@dataclass(frozen=True)
class LinkRecord:
    """An extracted link with its category, as written to reports."""

    url: str
    type: LinkType
    id: int | None = None
    context: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        data: dict[str, Any] = {"url": self.url, "type": self.type.value}
        if self.id is not None:
            data = {"id": self.id, **data}
        if self.context is not None:
            data["context"] = self.context
        return data


@dataclass(frozen=True)
class ExtractionResult:
    """
    The output of extracting one file.

    Example:
        >>> result = smartocr.extract_text("flyer.png")
        >>> print(result.text)
        >>> for link in result.links:
        ...     print(link)
    """

    text: str
    mime_type: str
    links: tuple[str, ...]
    file_path: Path

    # Persistence
    saved_links_json: Path | None = None

    # Family-specific fields (e.g. certificate scores)
    structured_data: dict[str, Any] | None = None

    # Diagnostics from non-fatal failures (link scanning, report writing)
    warnings: tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert to dictionary for JSON serialization.

        Returns:
            Dictionary representation of the result
        """
        return {
            "text": self.text,
            "mime_type": self.mime_type,
            "links": list(self.links),
            "file_path": str(self.file_path),
            "saved_links_json": str(self.saved_links_json) if self.saved_links_json else None,
            "structured_data": self.structured_data,
            "warnings": list(self.warnings),
        }


@dataclass(frozen=True)
class BatchFailure:
    """A file that failed inside batch_extract()."""

    error: str
    file_path: Path

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.error, "file_path": str(self.file_path)}
