"""Shared fixtures for the scanner test-suite."""

from typing import List, Optional

import pytest

from micro_xml_sax.api import SaxObserver
from micro_xml_sax.character import (
    cdata_to_text,
    name_to_text,
    text_to_text,
    value_to_text,
)
from micro_xml_sax.tokenization import Span


class EchoObserver(SaxObserver):
    """Re-serializes the event stream in normalized form.

    Opening tags are left unterminated until the next event shows whether
    child content follows, so ``<a/>`` and ``<a></a>`` echo differently.
    """

    def __init__(self, validate: bool = True) -> None:
        self.parts: List[str] = []
        self.error_message: Optional[str] = None
        self.error_offset: Optional[int] = None
        self.error_calls = 0
        self._validate = validate
        self._tag_open = False

    @property
    def output(self) -> str:
        return "".join(self.parts)

    def _close_open_tag(self) -> None:
        if self._tag_open:
            self.parts.append(">")
            self._tag_open = False

    def enter(self, name: Span, self_closing: bool) -> bool:
        self._close_open_tag()
        self.parts.append("<" + name_to_text(name))
        self._tag_open = not self_closing
        return True

    def exit(self, name: Span, self_closing: bool) -> bool:
        self._close_open_tag()
        self.parts.append("/>" if self_closing else f"</{name_to_text(name)}>")
        return True

    def attribute(self, name: Span, value: Span) -> bool:
        self.parts.append(f' {name_to_text(name)}="{value_to_text(value)}"')
        return True

    def text(self, content: Span) -> bool:
        self._close_open_tag()
        self.parts.append(text_to_text(content))
        return True

    def cdata(self, content: Span) -> bool:
        self._close_open_tag()
        self.parts.append(f"<![CDATA[{cdata_to_text(content)}]]>")
        return True

    def error(self, message: str, offset: int) -> None:
        self.error_calls += 1
        self.error_message = message
        self.error_offset = offset

    def validate(self) -> bool:
        return self._validate


@pytest.fixture
def echo_observer():
    """Factory for echo observers; validate mode on unless told otherwise."""
    def _factory(validate: bool = True) -> EchoObserver:
        return EchoObserver(validate=validate)
    return _factory

