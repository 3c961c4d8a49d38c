"""Token grammar of the supported XML subset.

All patterns are compiled once, at import time, and are only ever used with
``Pattern.match(document, pos)`` so that a token must start exactly at the
cursor. Character classes are ASCII (``re.ASCII``); the scanner does not
interpret non-ASCII characters beyond passing them through in text.

Repetitions are written so that no two alternatives can consume the same
characters, which keeps a failing match linear instead of backtracking
through every way of splitting a run of whitespace or name characters.
"""

import re
from dataclasses import dataclass
from typing import Optional

FLAGS = re.ASCII

# Names
NAME = r"[a-zA-Z_][\w.\-]*"
# Optional namespace prefix, covers xml:lang and xmlns:prefix
QUALIFIED_NAME = rf"(?:{NAME}:)?{NAME}"

# Attribute values stop at "<" and at their own delimiter; the five standard
# escapes (&lt; &gt; &amp; &apos; &quot;) pass through undecoded.
DOUBLE_QUOTED_VALUE = r'"([^<"]*)"'
SINGLE_QUOTED_VALUE = r"'([^<']*)'"
QUOTED_VALUE = rf"(?:{DOUBLE_QUOTED_VALUE}|{SINGLE_QUOTED_VALUE})"
UNCAPTURED_VALUE = r"""(?:"[^<"]*"|'[^<']*')"""

# One attribute of a list; the leading whitespace is mandatory.
ATTRIBUTE = rf"\s+({QUALIFIED_NAME})\s*=\s*{QUOTED_VALUE}"
UNCAPTURED_ATTRIBUTE = rf"\s+{QUALIFIED_NAME}\s*=\s*{UNCAPTURED_VALUE}"

# Comment bodies may contain "--", anything but "-->" itself.
COMMENT = r"<!--(?:[^-]|-(?!->))*-->"

# DOCTYPE internal subset: comments and simplified markup declarations.
DECLARATION_TOKEN = r"""[\w#\-,()*?+|\s]|"[^"]*"|'[^']*'"""
MARKUP_DECLARATION = (
    rf"<!(?:ELEMENT|ATTLIST|NOTATION|ENTITY)\s(?:{DECLARATION_TOKEN})+>"
)

OPEN_TAG_PATTERN = re.compile(
    rf"<({QUALIFIED_NAME})(?:{UNCAPTURED_ATTRIBUTE})*\s*(/)?>", FLAGS
)
CLOSE_TAG_PATTERN = re.compile(rf"</({QUALIFIED_NAME})\s*>", FLAGS)
ATTRIBUTE_PATTERN = re.compile(ATTRIBUTE, FLAGS)
CDATA_PATTERN = re.compile(r"<!\[CDATA\[((?:[^\]]|\](?!\]>))*)\]\]>", FLAGS)
# The XML declaration needs at least one pseudo-attribute (version).
XML_DECLARATION_PATTERN = re.compile(
    rf"<\?xml(?:\s+{NAME}\s*=\s*{UNCAPTURED_VALUE})+\s*\?>", FLAGS
)
PROCESSING_INSTRUCTION_PATTERN = re.compile(
    rf"<\?{NAME}(?:\s+{NAME}\s*=\s*{UNCAPTURED_VALUE})*\s*\?>", FLAGS
)
DOCTYPE_PATTERN = re.compile(
    rf"<!DOCTYPE\s+{NAME}\s*\[(?:{COMMENT}|{MARKUP_DECLARATION}|\s)*\]>", FLAGS
)
SPACES_AND_COMMENTS_PATTERN = re.compile(rf"(?:\s|{COMMENT})+", FLAGS)


@dataclass(frozen=True)
class OpenTagMatch:
    """Result of matching an opening tag at the cursor.

    Attributes:
        name_begin: Offset of the element name
        name_end: End offset of the element name
        self_closing: True for ``<name/>`` forms
        end: Offset just past the closing ``>``
    """

    name_begin: int
    name_end: int
    self_closing: bool
    end: int


def match_open_tag(document: str, pos: int) -> Optional[OpenTagMatch]:
    """Match ``<name attr="value" ... /?>`` at ``pos``."""
    match = OPEN_TAG_PATTERN.match(document, pos)
    if match is None:
        return None
    return OpenTagMatch(
        name_begin=match.start(1),
        name_end=match.end(1),
        self_closing=match.group(2) is not None,
        end=match.end(),
    )


def skip_spaces_and_comments(document: str, pos: int) -> int:
    """Return the offset after any run of whitespace and comments at ``pos``."""
    match = SPACES_AND_COMMENTS_PATTERN.match(document, pos)
    return match.end() if match else pos


def skip_misc(document: str, pos: int) -> int:
    """Skip whitespace, comments and processing instructions outside the root."""
    pos = skip_spaces_and_comments(document, pos)
    match = PROCESSING_INSTRUCTION_PATTERN.match(document, pos)
    while match is not None:
        pos = skip_spaces_and_comments(document, match.end())
        match = PROCESSING_INSTRUCTION_PATTERN.match(document, pos)
    return pos


def skip_xml_declaration(document: str, pos: int) -> int:
    """Return the offset after an XML declaration at ``pos``, if there is one."""
    match = XML_DECLARATION_PATTERN.match(document, pos)
    return match.end() if match else pos


def skip_doctype(document: str, pos: int) -> int:
    """Return the offset after a DOCTYPE block at ``pos``, if there is one."""
    match = DOCTYPE_PATTERN.match(document, pos)
    return match.end() if match else pos
