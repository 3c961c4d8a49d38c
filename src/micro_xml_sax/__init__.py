"""Micro XML SAX.

A single-pass SAX scanner for a restricted XML subset, suitable for small
configuration-style documents. The scanner reports enter/exit, attribute,
text and CDATA events to an observer with read-only spans into the document;
whitespace normalization and entity decoding are applied afterwards, on
demand, by the conversion helpers.

Progressive API Disclosure:
- Level 1: Simple function - parse(document, observer)
- Level 2: Configured scanner - XMLSaxParser(observer, config).scan(document)
- Level 3: Conversion helpers for the reported spans
"""

__version__ = "0.1.0"
__author__ = "Micro XML SAX Team"

from .api import EventRecorder, SaxEvent, SaxObserver, XMLSaxParser, parse
from .character import (
    DocumentPosition,
    cdata_to_text,
    locate,
    name_to_text,
    resolve_entities,
    text_to_text,
    to_text,
    value_to_text,
)
from .shared import ParseErrorKind, ParseOutcome, ParseResult, ParserConfig
from .tokenization import Span

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Level 1: Simple parsing function
    "parse",

    # Level 2: Scanner, observer contract and results
    "XMLSaxParser",
    "SaxObserver",
    "EventRecorder",
    "SaxEvent",
    "ParseResult",
    "ParseOutcome",
    "ParseErrorKind",
    "ParserConfig",
    "Span",

    # Level 3: Conversion helpers
    "to_text",
    "name_to_text",
    "value_to_text",
    "text_to_text",
    "cdata_to_text",
    "resolve_entities",
    "locate",
    "DocumentPosition",
]
