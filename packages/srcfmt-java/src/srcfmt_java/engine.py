import logging
from pathlib import Path
from typing import List, Optional

from srcfmt.errors import ConfigurationError, FormatError, InvalidArgumentError
from srcfmt.formatters.base import SourceFormatter
from srcfmt.models import FormatterConfiguration

from .parser import JavaParser, ParseResult
from .profile import ProfileSettings, load_profile
from .rules import (
    BaseFormattingRule,
    BlankLineRule,
    FormattingContext,
    IndentationRule,
    SourceLevelRule,
    TrailingWhitespaceRule,
)
from .rules.source_level import parse_source_level

logger = logging.getLogger(__name__)


class JavaFormatter(SourceFormatter):
    """Formats Java sources using tree-sitter and an Eclipse formatter profile."""

    def __init__(self, settings: Optional[ProfileSettings] = None):
        self.settings = settings or ProfileSettings()
        self.rules: List[BaseFormattingRule] = []
        self.parser = JavaParser()

    @classmethod
    def from_configuration(cls, config: FormatterConfiguration) -> "JavaFormatter":
        """Build the formatter with its default rules from a resolved configuration."""
        if config.profile is not None:
            settings = load_profile(config.profile)
            logger.info("Using formatter profile %s from %s", settings.name or "<unnamed>", config.profile)
        else:
            settings = ProfileSettings()
            logger.info("No formatter profile, using Eclipse default formatting")

        if config.source_level is not None:
            try:
                parse_source_level(config.source_level)
            except ValueError as e:
                raise InvalidArgumentError(str(e)) from e
        elif settings.source_level is not None:
            try:
                parse_source_level(settings.source_level)
            except ValueError as e:
                raise ConfigurationError(f"{config.profile}: {e}") from e

        formatter = cls(settings)
        formatter.add_rule(SourceLevelRule())
        formatter.add_rule(IndentationRule(settings))
        formatter.add_rule(TrailingWhitespaceRule())
        formatter.add_rule(BlankLineRule(settings))
        return formatter

    @property
    def name(self) -> str:
        return "java"

    @property
    def short_description(self) -> str:
        return "Java source formatter driven by Eclipse formatter profiles"

    def add_rule(self, rule: BaseFormattingRule) -> None:
        """Register a new formatting rule."""
        self.rules.append(rule)

    def is_applicable(self, path: Path) -> bool:
        return Path(path).suffix.lower() == ".java"

    def format(self, text: str, config: FormatterConfiguration) -> str:
        source = text.replace("\r\n", "\n").replace("\r", "\n")
        level = self._source_level(config)

        parse_result = self.parser.parse_string(source)
        self._check_syntax(parse_result)

        for rule in self.rules:
            context = FormattingContext(
                source=source, tree=parse_result.tree, settings=self.settings, source_level=level
            )
            rule.apply(context)
            if context.source != source:
                source = context.source
                parse_result = self.parser.parse_string(source)

        return source

    def _source_level(self, config: FormatterConfiguration) -> Optional[int]:
        level = config.source_level or self.settings.source_level
        if level is None:
            return None
        try:
            return parse_source_level(level)
        except ValueError as e:
            raise FormatError(str(e)) from e

    def _check_syntax(self, parse_result: ParseResult) -> None:
        error = parse_result.first_error()
        if error is not None:
            line, column = error.start_point[0] + 1, error.start_point[1] + 1
            kind = f"missing {error.type}" if error.is_missing else "syntax error"
            raise FormatError(f"{kind} at line {line}, column {column}")
