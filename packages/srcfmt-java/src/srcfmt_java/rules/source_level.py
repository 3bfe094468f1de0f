import re
from typing import Optional

from tree_sitter import Node

from srcfmt.errors import FormatError

from .base import BaseFormattingRule, FormattingContext
from ..parser import iter_nodes

_SOURCE_LEVEL = re.compile(r"^(?:1\.)?(\d+)$")

# Minimum Java version of each construct
MINIMUM_LEVELS = {
    "type_arguments": (5, "generics"),
    "type_parameters": (5, "generics"),
    "enhanced_for_statement": (5, "enhanced for loops"),
    "enum_declaration": (5, "enums"),
    "lambda_expression": (8, "lambda expressions"),
    "method_reference": (8, "method references"),
    "text_block": (15, "text blocks"),
    "record_declaration": (16, "records"),
}


def parse_source_level(level: str) -> int:
    """'1.8' and '8' both mean Java 8."""
    match = _SOURCE_LEVEL.match(level.strip())
    if not match:
        raise ValueError(f"invalid source level: {level!r}")
    return int(match.group(1))


def _construct(node: Node) -> Optional[tuple[int, str]]:
    if node.type == "string_literal" and node.text.startswith(b'"""'):
        return MINIMUM_LEVELS["text_block"]
    return MINIMUM_LEVELS.get(node.type)


class SourceLevelRule(BaseFormattingRule):
    """Rejects constructs that the configured source level does not support."""

    @property
    def name(self) -> str:
        return "source-level"

    def apply(self, context: FormattingContext) -> None:
        if context.source_level is None:
            return
        for node in iter_nodes(context.tree.root_node):
            construct = _construct(node)
            if construct and construct[0] > context.source_level:
                minimum, label = construct
                raise FormatError(
                    f"{label} require source level {minimum} or later "
                    f"(line {node.start_point[0] + 1}, source level {context.source_level})"
                )
