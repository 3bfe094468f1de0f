from .base import BaseFormattingRule, FormattingContext
from ..profile import ProfileSettings


def visual_width(indent: str, tab_size: int) -> int:
    column = 0
    for ch in indent:
        if ch == "\t":
            column += tab_size - column % tab_size
        else:
            column += 1
    return column


def render_indent(width: int, settings: ProfileSettings) -> str:
    if settings.tab_char == "space":
        return " " * width
    # "mixed" indents with tabs too; it only differs for continuation lines
    tabs, spaces = divmod(width, settings.tab_size)
    return "\t" * tabs + " " * spaces


class IndentationRule(BaseFormattingRule):
    """Re-emits leading whitespace with the profile's tabulation character."""

    def __init__(self, settings: ProfileSettings):
        self.settings = settings

    @property
    def name(self) -> str:
        return "indentation"

    def apply(self, context: FormattingContext) -> None:
        lines = context.lines
        for row, line in enumerate(lines):
            if row in context.protected_rows:
                continue
            stripped = line.lstrip(" \t")
            # Whitespace-only lines are left to the trailing whitespace rule
            if not stripped or len(stripped) == len(line):
                continue
            width = visual_width(line[: len(line) - len(stripped)], self.settings.tab_size)
            lines[row] = render_indent(width, self.settings) + stripped
        context.source = "\n".join(lines)
