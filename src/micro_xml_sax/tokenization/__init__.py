"""Token grammar and the span model the scanner reports with."""

from .span import Span

__all__ = ["Span"]
