"""
Per-file formatting pipeline.

Raw bytes are decoded with the configured charset, threaded through every
applicable formatter in registration order, then through the header pass and
the line-ending pass, and finally encoded back.
"""

import logging
import re
from typing import Optional, Sequence

from .errors import EncodingError, FormatError
from .formatters.base import SourceFormatter
from .models import FormatterConfiguration, LineSeparator

logger = logging.getLogger(__name__)

BOM = "\ufeff"
_LINE_BREAK = re.compile(r"\r\n|\r|\n")
# A header is a comment region starting at offset 0: one block comment, or a
# run of consecutive lines that each start with //
_BLOCK_COMMENT = re.compile(r"/\*.*?\*/", re.DOTALL)
_LINE_COMMENTS = re.compile(r"(?://[^\r\n]*(?:\r\n|\r|\n|\Z))+")
_BLANK_LINES = re.compile(r"(?:[ \t]*(?:\r\n|\r|\n))+")


def canonical_line_breaks(text: str) -> str:
    return _LINE_BREAK.sub("\n", text)


def normalize_line_endings(text: str, separator: LineSeparator) -> str:
    """Replace every recognized end-of-line sequence with the configured separator."""
    return _LINE_BREAK.sub(separator.sequence, text)


def normalize_header(header: str) -> str:
    return canonical_line_breaks(header).rstrip()


def find_header(text: str) -> Optional[str]:
    """Return the comment region at the very top of the text, if any."""
    match = _BLOCK_COMMENT.match(text) or _LINE_COMMENTS.match(text)
    return match.group(0) if match else None


def has_header(text: str, header: str) -> bool:
    """True when the text already carries exactly this header.

    A header made of one comment region must match the whole region at the
    top of the text. Any other header only has to be a prefix of the text.
    """
    if find_header(header) == header:
        existing = find_header(text)
        return existing is not None and normalize_header(existing) == header
    canonical = canonical_line_breaks(text)
    return canonical == header or canonical.startswith(header + "\n")


def insert_header(text: str, header: str) -> str:
    """Make sure the text starts with the header, replacing a different one.

    A leading byte order mark stays in front of the header. Running this twice
    with the same header gives the same result as running it once.
    """
    header = normalize_header(header)
    bom = BOM if text.startswith(BOM) else ""
    text = text[len(bom):]
    if not header or has_header(text, header):
        return bom + text

    existing = find_header(text)
    if existing:
        logger.debug("Replacing existing %d-character header", len(existing))
    body = text[len(existing):] if existing else text
    blank = _BLANK_LINES.match(body)
    if blank:
        body = body[blank.end():]

    if not body:
        return bom + header + "\n"
    return bom + header + "\n\n" + body


class FormatterPipeline:
    """Turns a file's raw bytes into its formatted bytes."""

    def __init__(self, config: FormatterConfiguration):
        self.config = config

    def apply(self, raw_content: bytes, formatters: Sequence[SourceFormatter]) -> bytes:
        text = self.decode(raw_content)

        for formatter in formatters:
            try:
                text = formatter.format(text, self.config)
            except FormatError as e:
                raise FormatError(f"{formatter.name}: {e.message}") from e

        if self.config.header:
            text = insert_header(text, self.config.header)

        text = normalize_line_endings(text, self.config.line_separator)
        return self.encode(text)

    def decode(self, raw_content: bytes) -> str:
        try:
            return raw_content.decode(self.config.encoding)
        except UnicodeDecodeError as e:
            raise EncodingError(
                f"cannot decode as {self.config.encoding}: {e.reason} at byte {e.start}"
            ) from e

    def encode(self, text: str) -> bytes:
        try:
            return text.encode(self.config.encoding)
        except UnicodeEncodeError as e:
            raise EncodingError(
                f"cannot encode as {self.config.encoding}: {e.reason} at offset {e.start}"
            ) from e
