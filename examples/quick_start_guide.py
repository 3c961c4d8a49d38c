#!/usr/bin/env python3
"""
Quick Start Guide for the micro-xml-sax scanner.

Walks through an observer that counts elements, reading attribute and text
values, stopping a scan early and reporting errors with line and column.
"""

import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from micro_xml_sax import (
    EventRecorder,
    ParserConfig,
    SaxObserver,
    XMLSaxParser,
    name_to_text,
    text_to_text,
)

CATALOG = """<?xml version="1.0" encoding="utf-8"?>
<!-- a small catalog -->
<catalog>
  <book id="b1" lang='en'>
    <title>  Dive   into &amp; out of   XML </title>
    <price currency="EUR">19.99</price>
  </book>
  <book id="b2"><title>Second</title></book>
</catalog>
"""


class TitleCollector(SaxObserver):
    """Collects the text of every <title> element."""

    def __init__(self):
        self.titles = []
        self._in_title = False

    def enter(self, name, self_closing):
        self._in_title = name == "title"
        return True

    def exit(self, name, self_closing):
        self._in_title = False
        return True

    def text(self, content):
        if self._in_title:
            self.titles.append(text_to_text(content))
        return True


class FirstBookOnly(SaxObserver):
    """Stops the scan when the first book closes."""

    def exit(self, name, self_closing):
        return name_to_text(name) != "book"


def quick_start_example():
    """Quick start example showing basic usage."""

    print("🚀 QUICK START - micro-xml-sax")
    print("=" * 45)

    # Step 1: Collect values with a custom observer
    print("\n📄 Step 1: Custom Observer")
    print("-" * 30)

    collector = TitleCollector()
    result = XMLSaxParser(collector).scan(CATALOG)
    print(f"✅ Scan success: {result.success}")
    print(f"📚 Titles: {collector.titles}")
    print(f"📏 Maximum depth: {result.metrics.max_depth}")

    # Step 2: Record the full event stream
    print("\n🔍 Step 2: Event Recording")
    print("-" * 30)

    recorder = EventRecorder()
    XMLSaxParser(recorder).parse(CATALOG)
    for event in recorder.events[:5]:
        print(f"  - {event.to_dict()}")
    print(f"  ... {len(recorder.events)} events in total")

    # Step 3: Stop early
    print("\n⏹  Step 3: Cancellation")
    print("-" * 30)

    result = XMLSaxParser(FirstBookOnly()).scan(CATALOG)
    print(f"✅ Cancelled: {result.cancelled}")
    print(f"📊 Events before stopping: {result.metrics.events_emitted}")

    # Step 4: Errors
    print("\n⚠️  Step 4: Error Reporting")
    print("-" * 30)

    broken = CATALOG.replace("</price>", "</cost>")
    recorder = EventRecorder()
    result = XMLSaxParser(recorder, ParserConfig.strict()).scan(broken)
    print(f"❌ Error kind: {result.error_kind.name}")
    print(f"💬 Message: {result.error_message}")
    print(f"📍 Position: {result.error_position}")

    duplicated = '<book id="1" id="2"/>'
    print(f"🔁 Duplicates ignored: {XMLSaxParser(EventRecorder()).parse(duplicated)}")
    print(f"🔁 Duplicates checked: {XMLSaxParser(EventRecorder(validate=True)).parse(duplicated)}")


if __name__ == "__main__":
    quick_start_example()
