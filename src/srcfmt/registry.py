from enum import Enum
from typing import Iterable, List, Optional

from .formatters.base import SourceFormatter
from .models import FormatterConfiguration


class FormatterKind(str, Enum):
    """Every formatter variant srcfmt knows about, in registration order."""

    JAVA = "java"


def create_formatter(kind: FormatterKind, config: FormatterConfiguration) -> SourceFormatter:
    if kind is FormatterKind.JAVA:
        from srcfmt_java.engine import JavaFormatter

        return JavaFormatter.from_configuration(config)
    raise ValueError(f"unknown formatter kind: {kind}")


def create_formatters(
    config: FormatterConfiguration, kinds: Optional[Iterable[FormatterKind]] = None
) -> List[SourceFormatter]:
    """Instantiate the requested formatters (all of them by default) in registration order."""
    selected = set(kinds) if kinds is not None else set(FormatterKind)
    return [create_formatter(kind, config) for kind in FormatterKind if kind in selected]
