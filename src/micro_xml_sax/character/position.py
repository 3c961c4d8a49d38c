"""Offset to line/column resolution for diagnostics.

Line terminators are ``"\\r\\n"``, a lone ``"\\r"`` (as on obsolete systems)
or a lone ``"\\n"``; each counts as a single line break.
"""

import re
from dataclasses import dataclass

NEWLINE_PATTERN = re.compile(r"\r\n|\r|\n")


@dataclass(frozen=True)
class DocumentPosition:
    """1-based line and column of an absolute document offset."""

    line: int
    column: int
    offset: int

    def __post_init__(self) -> None:
        """Validate position values."""
        if self.line < 1:
            raise ValueError("Line number must be >= 1")
        if self.column < 1:
            raise ValueError("Column number must be >= 1")
        if self.offset < 0:
            raise ValueError("Offset must be >= 0")

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"


def locate(document: str, offset: int) -> DocumentPosition:
    """Resolve ``offset`` in ``document`` to a line and column.

    Only the text before ``offset`` is inspected, so a ``"\\r\\n"`` pair split
    by the offset counts as a lone ``"\\r"``.

    Args:
        document: The complete document
        offset: Absolute offset, ``0 <= offset <= len(document)``

    Returns:
        DocumentPosition with the column counted from the character following
        the last line terminator before ``offset``

    Raises:
        ValueError: If offset lies outside the document
    """
    if not 0 <= offset <= len(document):
        raise ValueError(
            f"Offset {offset} outside document of length {len(document)}"
        )

    line = 1
    line_start = 0
    for match in NEWLINE_PATTERN.finditer(document, 0, offset):
        line += 1
        line_start = match.end()

    return DocumentPosition(line=line, column=1 + offset - line_start, offset=offset)
