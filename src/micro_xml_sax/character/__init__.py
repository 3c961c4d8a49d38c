"""Character-level helpers applied to reported spans after scanning.

This module provides whitespace normalization, entity decoding and
offset to line/column resolution.
"""

from .position import DocumentPosition, locate
from .transformation import (
    cdata_to_text,
    name_to_text,
    resolve_entities,
    text_to_text,
    to_text,
    value_to_text,
)

__all__ = [
    "DocumentPosition",
    "locate",
    "cdata_to_text",
    "name_to_text",
    "resolve_entities",
    "text_to_text",
    "to_text",
    "value_to_text",
]
