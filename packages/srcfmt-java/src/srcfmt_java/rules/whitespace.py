from .base import BaseFormattingRule, FormattingContext


class TrailingWhitespaceRule(BaseFormattingRule):
    @property
    def name(self) -> str:
        return "trailing-whitespace"

    def apply(self, context: FormattingContext) -> None:
        lines = context.lines
        for row, line in enumerate(lines):
            if row not in context.protected_rows:
                lines[row] = line.rstrip(" \t")
        context.source = "\n".join(lines)
