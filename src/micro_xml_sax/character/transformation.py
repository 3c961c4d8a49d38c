"""Post-hoc conversion of reported spans into owned text.

The scanner never converts anything; observers call these helpers on the
spans they are interested in. Two independent rules apply:

* ``normalize``: every maximal run of whitespace becomes one ASCII space.
* ``trim_surrounding``: leading and trailing whitespace is dropped instead of
  being collapsed into a single boundary space.

Entity decoding is applied only by :func:`text_to_text`. Attribute values and
CDATA content keep their escape sequences; callers that want decoded values
pass the result through :func:`resolve_entities`.
"""

import re
from typing import List, Tuple, Union

from micro_xml_sax.tokenization.span import Span

# Same class as "\s" under re.ASCII, which the grammar scans with.
WHITESPACE = " \t\n\r\f\v"
WHITESPACE_RUN = re.compile(r"\s+", re.ASCII)

# Decoded in this order, each in a single non-recursive pass.
ENTITY_REPLACEMENTS: List[Tuple[str, str]] = [
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&amp;", "&"),
    ("&apos;", "'"),
    ("&quot;", '"'),
]

SpanLike = Union[Span, str]


def _raw(content: SpanLike) -> str:
    return content.text if isinstance(content, Span) else content


def to_text(content: SpanLike, normalize: bool, trim_surrounding: bool) -> str:
    """Convert a span to text applying the whitespace rules.

    Args:
        content: Span (or already extracted string) to convert
        normalize: Collapse whitespace runs to a single space; when False the
            content is copied verbatim and ``trim_surrounding`` is ignored
        trim_surrounding: Drop leading/trailing whitespace; when False any
            surrounding whitespace is kept as exactly one space on that side

    Returns:
        Converted text

    Examples:
        >>> to_text("  a   b  ", normalize=True, trim_surrounding=False)
        ' a b '
        >>> to_text("  a   b  ", normalize=True, trim_surrounding=True)
        'a b'
    """
    raw = _raw(content)
    if not normalize:
        return raw

    core = raw.strip(WHITESPACE)
    if not core:
        # Whitespace only: one space signals padding unless trimming.
        return " " if raw and not trim_surrounding else ""

    collapsed = WHITESPACE_RUN.sub(" ", core)
    if trim_surrounding:
        return collapsed

    leading = " " if raw[0] in WHITESPACE else ""
    trailing = " " if raw[-1] in WHITESPACE else ""
    return leading + collapsed + trailing


def resolve_entities(text: str) -> str:
    """Decode the five predefined entities.

    ``&amp;lt;`` decodes to ``&lt;``, not ``<``: ``&lt;`` is replaced before
    ``&amp;`` and no pass revisits its own output.
    """
    for entity, replacement in ENTITY_REPLACEMENTS:
        text = text.replace(entity, replacement)
    return text


def name_to_text(content: SpanLike) -> str:
    """Element or attribute name, verbatim."""
    return to_text(content, normalize=False, trim_surrounding=True)


def value_to_text(content: SpanLike) -> str:
    """Attribute value, normalized with padding kept as single spaces."""
    return to_text(content, normalize=True, trim_surrounding=False)


def text_to_text(content: SpanLike) -> str:
    """Text content, normalized, trimmed and entity-decoded."""
    return resolve_entities(to_text(content, normalize=True, trim_surrounding=True))


def cdata_to_text(content: SpanLike) -> str:
    """CDATA content, normalized and trimmed; escapes are left alone."""
    return to_text(content, normalize=True, trim_surrounding=True)
