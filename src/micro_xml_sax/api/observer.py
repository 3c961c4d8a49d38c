"""Observer contract consumed by the SAX scanner.

Subclass :class:`SaxObserver` and override only the callbacks you need. For
every element ``enter`` and ``exit`` are called exactly once; the other
callbacks may be called any number of times in between. Returning ``False``
from any boolean callback stops the scan without an ``error`` call.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from micro_xml_sax.character.transformation import (
    cdata_to_text,
    name_to_text,
    text_to_text,
    value_to_text,
)
from micro_xml_sax.tokenization.span import Span


class SaxObserver:
    """Callback base with permissive defaults."""

    def enter(self, name: Span, self_closing: bool) -> bool:
        """An element starts; ``self_closing`` is True for ``<name/>``."""
        return True

    def exit(self, name: Span, self_closing: bool) -> bool:
        """An element ends; synthetic for self-closing tags."""
        return True

    def attribute(self, name: Span, value: Span) -> bool:
        """An attribute of the element most recently entered."""
        return True

    def text(self, content: Span) -> bool:
        """A run of text, up to the next ``<``."""
        return True

    def cdata(self, content: Span) -> bool:
        """Content of a CDATA section, without its delimiters."""
        return True

    def error(self, message: str, offset: int) -> None:
        """A structural error at ``offset``, the start of the unparsed remainder."""

    def validate(self) -> bool:
        """Whether to run the extra (duplicate attribute) checks."""
        return False


@dataclass
class SaxEvent:
    """One recorded callback, with spans already converted to text."""

    kind: str
    name: Optional[str] = None
    value: Optional[str] = None
    self_closing: Optional[bool] = None

    def to_dict(self) -> Dict[str, Any]:
        """Dictionary form without the fields the event kind does not use."""
        data: Dict[str, Any] = {"kind": self.kind}
        if self.name is not None:
            data["name"] = self.name
        if self.value is not None:
            data["value"] = self.value
        if self.self_closing is not None:
            data["self_closing"] = self.self_closing
        return data


class EventRecorder(SaxObserver):
    """Observer that records every event in converted form.

    Names are copied verbatim, attribute values are normalized, text is
    normalized, trimmed and entity-decoded, CDATA is normalized and trimmed.
    """

    def __init__(self, validate: bool = False) -> None:
        self.events: List[SaxEvent] = []
        self.error_message: Optional[str] = None
        self.error_offset: Optional[int] = None
        self._validate = validate

    def enter(self, name: Span, self_closing: bool) -> bool:
        self.events.append(SaxEvent("enter", name=name_to_text(name),
                                    self_closing=self_closing))
        return True

    def exit(self, name: Span, self_closing: bool) -> bool:
        self.events.append(SaxEvent("exit", name=name_to_text(name),
                                    self_closing=self_closing))
        return True

    def attribute(self, name: Span, value: Span) -> bool:
        self.events.append(SaxEvent("attribute", name=name_to_text(name),
                                    value=value_to_text(value)))
        return True

    def text(self, content: Span) -> bool:
        self.events.append(SaxEvent("text", value=text_to_text(content)))
        return True

    def cdata(self, content: Span) -> bool:
        self.events.append(SaxEvent("cdata", value=cdata_to_text(content)))
        return True

    def error(self, message: str, offset: int) -> None:
        self.error_message = message
        self.error_offset = offset

    def validate(self) -> bool:
        return self._validate

    def to_dicts(self) -> List[Dict[str, Any]]:
        """Recorded events as JSON-ready dictionaries."""
        return [event.to_dict() for event in self.events]
