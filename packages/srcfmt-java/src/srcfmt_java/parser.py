from dataclasses import dataclass
from typing import Iterator, Optional

import tree_sitter_java as tsjava
from tree_sitter import Language, Node, Parser, Tree

JAVA_LANGUAGE = Language(tsjava.language())

STRING_NODE_TYPES = ("string_literal", "text_block")


@dataclass
class ParseResult:
    tree: Tree
    source: bytes

    def first_error(self) -> Optional[Node]:
        """Find the first ERROR or missing node, in document order"""
        stack = [self.tree.root_node]
        while stack:
            node = stack.pop()
            if node.type == "ERROR" or node.is_missing:
                return node
            if node.has_error:
                stack.extend(reversed(node.children))
        return None


class JavaParser:
    """Thin wrapper around the tree-sitter Java grammar."""

    def parse_string(self, source: str) -> ParseResult:
        # Parsers are not shared, so concurrent workers never contend on one
        parser = Parser(JAVA_LANGUAGE)
        data = source.encode("utf-8")
        return ParseResult(tree=parser.parse(data), source=data)


def iter_nodes(node: Node) -> Iterator[Node]:
    """Depth-first pre-order traversal without recursion"""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children))


def multiline_string_rows(tree: Tree) -> set[int]:
    """Rows lying inside a multi-line string literal, after its opening row."""
    rows: set[int] = set()
    for node in iter_nodes(tree.root_node):
        if node.type in STRING_NODE_TYPES:
            start, end = node.start_point[0], node.end_point[0]
            if end > start:
                rows.update(range(start + 1, end + 1))
    return rows
