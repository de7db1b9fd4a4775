"""
Base class for format readers.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path


class TextReader(ABC):
    """Converts one file format into raw text."""

    @abstractmethod
    def extract(self, path: Path) -> str:
        """
        Read ``path`` and return its text.

        Errors from the underlying parser propagate unchanged; the
        orchestrator wraps them in ExtractionError.
        """

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
