from pathlib import Path


class SourceFormatterError(Exception):
    """Base exception for srcfmt."""


class FatalError(SourceFormatterError):
    """Aborts the run before any file is touched."""


class InvalidArgumentError(FatalError):
    """Raised when a command line or configuration value is invalid."""


class InvalidPathError(FatalError):
    """Raised when the traversal root is neither a file nor a directory."""


class ConfigurationError(FatalError):
    """Raised when a profile, header or configuration file cannot be loaded."""


class FileProcessingError(SourceFormatterError):
    """Recoverable error attributed to a single file."""

    def __init__(self, message: str, path: Path | str | None = None):
        self.message = message
        self.path = Path(path) if path is not None else None
        super().__init__(f"{path}: {message}" if path is not None else message)


class EncodingError(FileProcessingError):
    """Raised when content cannot be decoded or encoded with the configured charset."""


class FormatError(FileProcessingError):
    """Raised by a formatter when content cannot be processed."""


class RewriteError(FileProcessingError):
    """Raised when formatted content cannot be written back to disk."""
