from .base import BaseFormattingRule, FormattingContext
from .blank_lines import BlankLineRule
from .indentation import IndentationRule
from .source_level import SourceLevelRule
from .whitespace import TrailingWhitespaceRule

__all__ = [
    "BaseFormattingRule",
    "FormattingContext",
    "BlankLineRule",
    "IndentationRule",
    "SourceLevelRule",
    "TrailingWhitespaceRule",
]
