"""
Configuration for smartocr text extraction.

All options have sensible defaults; create a config only to change them.
"""

from dataclasses import dataclass, field
from pathlib import Path

from smartocr.exceptions import ConfigurationError

DEFAULT_LINKS_DIR = Path("shared-objects") / "extracted-links"
DEFAULT_STRUCTURED_DIR = Path("shared-objects") / "extracted-data"


@dataclass
class OCRConfig:
    """
    Configuration for the Tesseract OCR engine.

    Example:
        >>> config = ExtractionConfig(ocr=OCRConfig(language="deu", psm=4))
        >>> result = smartocr.extract_text("scan.png", config)
    """

    language: str = "eng"
    oem: int = 3  # Default engine, based on what is available
    psm: int = 6  # Assume a uniform block of text

    # Words below this confidence (0-100) are dropped; 0 keeps everything
    min_confidence: int = 60

    # Optional tessedit_char_whitelist; None lets Tesseract use its full set
    char_whitelist: str | None = None

    # Explicit path to the tesseract binary when it is not on PATH
    tesseract_cmd: Path | None = None

    # PDF pages without a text layer are rendered at this DPI and OCR'd
    pdf_fallback: bool = True
    dpi: int = 300

    def __post_init__(self):
        """Validate configuration."""
        if not 0 <= self.oem <= 3:
            raise ConfigurationError(f"oem must be between 0 and 3, got {self.oem}")
        if not 0 <= self.psm <= 13:
            raise ConfigurationError(f"psm must be between 0 and 13, got {self.psm}")
        if not 0 <= self.min_confidence <= 100:
            raise ConfigurationError(
                f"min_confidence must be between 0 and 100, got {self.min_confidence}"
            )
        if self.dpi < 72:
            raise ConfigurationError(f"dpi must be >= 72, got {self.dpi}")

    @property
    def tesseract_args(self) -> str:
        """Command-line flags passed through pytesseract's ``config``."""
        args = f"--oem {self.oem} --psm {self.psm}"
        if self.char_whitelist:
            args += f" -c tessedit_char_whitelist={self.char_whitelist}"
        return args


@dataclass
class ExtractionConfig:
    """
    Configuration for text extraction.

    Example:
        >>> config = ExtractionConfig(
        ...     save_links_to_json=False,
        ...     reorder_lines=False,
        ... )
        >>> result = smartocr.extract_text("letter.docx", config)
    """

    # Persistence
    save_links_to_json: bool = True  # Skipped automatically when no links were found
    output_dir: Path = DEFAULT_LINKS_DIR
    structured_output_dir: Path = DEFAULT_STRUCTURED_DIR

    # Text reconstruction
    repair_text: bool = True  # Family-specific merge/split repairs
    reorder_lines: bool = True  # Heuristic reading-order reconstruction
    general_cleanup: bool = False  # clean_ocr_text() when no family matched

    # Batch processing
    max_workers: int = 4

    ocr: OCRConfig = field(default_factory=OCRConfig)

    def __post_init__(self):
        """Validate configuration."""
        self.output_dir = Path(self.output_dir)
        self.structured_output_dir = Path(self.structured_output_dir)
        if self.max_workers < 1:
            raise ConfigurationError(f"max_workers must be >= 1, got {self.max_workers}")
