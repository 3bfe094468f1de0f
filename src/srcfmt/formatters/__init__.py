from .base import SourceFormatter

__all__ = ["SourceFormatter"]
