from abc import ABC, abstractmethod
from pathlib import Path

from ..models import FormatterConfiguration


class SourceFormatter(ABC):
    """Abstract base class for all source formatters."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique formatter name (e.g., 'java')."""
        pass

    @property
    @abstractmethod
    def short_description(self) -> str:
        """One-line description shown in the help output."""
        pass

    @abstractmethod
    def is_applicable(self, path: Path) -> bool:
        """Can this formatter process the given file?"""
        pass

    @abstractmethod
    def format(self, text: str, config: FormatterConfiguration) -> str:
        """Return the formatted text; raise FormatError when it cannot be processed."""
        pass
