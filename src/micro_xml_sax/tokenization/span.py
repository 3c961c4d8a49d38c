"""Read-only ranges into the scanned document.

Element names, attribute names and values, text runs and CDATA content are
all reported as :class:`Span` objects. A span only remembers the document and
two offsets; the characters are copied out when ``text`` is requested.
"""

from dataclasses import dataclass


@dataclass(frozen=True, eq=False)
class Span:
    """Half-open range ``[begin, end)`` of ``document``.

    Two spans are equal when they cover the same characters, wherever they
    are located and whichever document they belong to. A span also compares
    equal to a ``str`` with the same content.
    """

    __slots__ = ("document", "begin", "end")

    document: str
    begin: int
    end: int

    def __post_init__(self) -> None:
        """Validate span bounds."""
        if not 0 <= self.begin <= self.end <= len(self.document):
            raise ValueError(
                f"Invalid span [{self.begin}, {self.end}) for document "
                f"of length {len(self.document)}"
            )

    @property
    def text(self) -> str:
        """Owned copy of the covered characters."""
        return self.document[self.begin:self.end]

    @property
    def is_empty(self) -> bool:
        return self.begin == self.end

    def __len__(self) -> int:
        return self.end - self.begin

    def __str__(self) -> str:
        return self.text

    def __repr__(self) -> str:
        return f"Span({self.text!r}, begin={self.begin}, end={self.end})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Span):
            if len(self) != len(other):
                return False
            if self.document is other.document and self.begin == other.begin:
                return True
            return self.text == other.text
        if isinstance(other, str):
            return len(self) == len(other) and self.document.startswith(
                other, self.begin, self.end
            )
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.text)
