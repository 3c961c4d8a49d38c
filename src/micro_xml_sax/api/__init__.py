"""Scanner entry points and the observer contract."""

from .observer import EventRecorder, SaxEvent, SaxObserver
from .parser import XMLSaxParser, parse

__all__ = [
    "EventRecorder",
    "SaxEvent",
    "SaxObserver",
    "XMLSaxParser",
    "parse",
]
