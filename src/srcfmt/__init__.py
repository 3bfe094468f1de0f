"""
srcfmt - Apply source formatters to files and directory trees

This package provides:
- The formatter capability interface and the registry of formatter variants
- The per-file pipeline (formatters, license header, line endings)
- Atomic, change-only rewriting of files
- Directory traversal with per-file failure isolation
"""

__version__ = "0.1.0"

from .errors import (
    ConfigurationError,
    EncodingError,
    FatalError,
    FileProcessingError,
    FormatError,
    InvalidArgumentError,
    InvalidPathError,
    RewriteError,
)
from .formatters.base import SourceFormatter
from .models import FileOutcome, FileStatus, FormatterConfiguration, LineSeparator, RunSummary
from .pipeline import FormatterPipeline
from .registry import FormatterKind, create_formatters
from .rewriter import FileRewriter
from .traversal import TraversalEngine

__all__ = [
    "ConfigurationError",
    "EncodingError",
    "FatalError",
    "FileProcessingError",
    "FormatError",
    "InvalidArgumentError",
    "InvalidPathError",
    "RewriteError",
    "SourceFormatter",
    "FileOutcome",
    "FileStatus",
    "FormatterConfiguration",
    "LineSeparator",
    "RunSummary",
    "FormatterPipeline",
    "FormatterKind",
    "create_formatters",
    "FileRewriter",
    "TraversalEngine",
]
