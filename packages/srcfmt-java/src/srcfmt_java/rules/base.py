from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from functools import cached_property
from typing import List, Optional

from tree_sitter import Tree

from ..parser import multiline_string_rows
from ..profile import ProfileSettings


@dataclass
class FormattingContext:
    source: str
    tree: Tree
    settings: ProfileSettings = field(default_factory=ProfileSettings)
    source_level: Optional[int] = None

    @property
    def lines(self) -> List[str]:
        return self.source.split("\n")

    @cached_property
    def protected_rows(self) -> set[int]:
        """Rows inside multi-line strings; their whitespace is content"""
        return multiline_string_rows(self.tree)


class BaseFormattingRule(ABC):
    @property
    @abstractmethod
    def name(self) -> str:
        pass

    @abstractmethod
    def apply(self, context: FormattingContext) -> None:
        """Apply the formatting rule to the context."""
        pass
