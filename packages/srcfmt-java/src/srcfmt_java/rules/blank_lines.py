from .base import BaseFormattingRule, FormattingContext
from ..profile import ProfileSettings


class BlankLineRule(BaseFormattingRule):
    """Caps runs of blank lines and leaves exactly one newline at end of file."""

    def __init__(self, settings: ProfileSettings):
        self.settings = settings

    @property
    def name(self) -> str:
        return "blank-lines"

    def apply(self, context: FormattingContext) -> None:
        result = []
        blank_run = 0
        for row, line in enumerate(context.lines):
            if row not in context.protected_rows and not line.strip(" \t"):
                blank_run += 1
                # Drop leading blank lines and anything beyond the preserved count
                if not result or blank_run > self.settings.blank_lines_to_preserve:
                    continue
                result.append("")
            else:
                blank_run = 0
                result.append(line)

        while result and result[-1] == "":
            result.pop()

        context.source = "\n".join(result) + "\n" if result else ""
