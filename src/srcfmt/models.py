import locale
import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class LineSeparator(str, Enum):
    LF = "lf"
    CR = "cr"
    CRLF = "crlf"

    @property
    def sequence(self) -> str:
        return {"lf": "\n", "cr": "\r", "crlf": "\r\n"}[self.value]

    @classmethod
    def platform_default(cls) -> "LineSeparator":
        return cls.CRLF if os.linesep == "\r\n" else cls.LF


def default_encoding() -> str:
    return locale.getpreferredencoding(False)


class FormatterConfiguration(BaseModel):
    """Options shared read-only by every formatter invocation of a run."""

    model_config = ConfigDict(frozen=True)

    profile: Optional[Path] = None
    source_level: Optional[str] = None
    encoding: str = Field(default_factory=default_encoding)
    line_separator: LineSeparator = Field(default_factory=LineSeparator.platform_default)
    header: Optional[str] = None


@dataclass
class FileTask:
    path: Path
    original_bytes: bytes
    encoding: str


class FileStatus(str, Enum):
    UNCHANGED = "unchanged"
    CHANGED = "changed"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass
class FileOutcome:
    """Result of processing one visited file"""

    path: Path
    status: FileStatus
    formatters: List[str] = field(default_factory=list)
    error: Optional[str] = None


@dataclass
class RunSummary:
    outcomes: List[FileOutcome] = field(default_factory=list)

    def _count(self, status: FileStatus) -> int:
        return sum(1 for o in self.outcomes if o.status == status)

    @property
    def visited(self) -> int:
        return len(self.outcomes)

    @property
    def changed(self) -> int:
        return self._count(FileStatus.CHANGED)

    @property
    def unchanged(self) -> int:
        return self._count(FileStatus.UNCHANGED)

    @property
    def skipped(self) -> int:
        return self._count(FileStatus.SKIPPED)

    @property
    def failed(self) -> int:
        return self._count(FileStatus.FAILED)

    @property
    def failures(self) -> List[FileOutcome]:
        return [o for o in self.outcomes if o.status == FileStatus.FAILED]

    @property
    def exit_code(self) -> int:
        return 1 if self.failed else 0
