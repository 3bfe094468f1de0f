from pathlib import Path

import pytest
from srcfmt.errors import FormatError
from srcfmt.formatters.base import SourceFormatter
from srcfmt.models import FormatterConfiguration, LineSeparator


class StubFormatter(SourceFormatter):
    """Formatter double: applies `transform` to files with the given suffix."""

    def __init__(self, name="stub", suffix=".java", transform=None, fail_on=None):
        self._name = name
        self.suffix = suffix
        self.transform = transform
        self.fail_on = fail_on
        self.seen = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def short_description(self) -> str:
        return "test double"

    def is_applicable(self, path: Path) -> bool:
        return Path(path).suffix == self.suffix

    def format(self, text: str, config: FormatterConfiguration) -> str:
        self.seen.append(text)
        if self.fail_on and self.fail_on in text:
            raise FormatError(f"cannot parse {self.fail_on!r}")
        return self.transform(text) if self.transform else text


@pytest.fixture
def stub_formatter():
    return StubFormatter


@pytest.fixture
def lf_config():
    return FormatterConfiguration(encoding="utf-8", line_separator=LineSeparator.LF)
