"""
srcfmt-java - Java formatting engine for srcfmt

Parses sources with the tree-sitter Java grammar, rejects files with syntax
errors and applies whitespace rules configured by an Eclipse formatter profile.
"""

from .engine import JavaFormatter
from .profile import ProfileSettings, load_profile

__all__ = ["JavaFormatter", "ProfileSettings", "load_profile"]
