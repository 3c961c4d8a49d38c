"""SAX scanner for a restricted XML subset.

The scanner walks the document once, matching one token of the grammar at
the cursor at a time, keeps a stack of the names of the open elements, and
reports what it finds to a :class:`SaxObserver`. Nothing is converted or
copied while scanning; observers receive :class:`Span` objects and convert
them on demand.

Scanning runs in two phases:

* prolog: whitespace, comments, an optional XML declaration, processing
  instructions and an optional DOCTYPE block are skipped;
* body: opening tags, closing tags, text runs, CDATA sections and processing
  instructions are tried in that order until the root element closes.
"""

import time
from typing import List, Optional

from micro_xml_sax.api.observer import SaxObserver
from micro_xml_sax.shared.config import ParserConfig
from micro_xml_sax.shared.logging import CorrelationLogger, get_logger
from micro_xml_sax.shared.result import (
    DiagnosticEntry,
    DiagnosticSeverity,
    ParseErrorKind,
    ParseOutcome,
    ParseResult,
)
from micro_xml_sax.tokenization.grammar import (
    ATTRIBUTE_PATTERN,
    CDATA_PATTERN,
    CLOSE_TAG_PATTERN,
    PROCESSING_INSTRUCTION_PATTERN,
    OpenTagMatch,
    match_open_tag,
    skip_doctype,
    skip_misc,
    skip_spaces_and_comments,
    skip_xml_declaration,
)
from micro_xml_sax.tokenization.span import Span

COMPONENT = "sax_parser"
MS_PER_SECOND = 1000

MSG_SYNTAX_ERROR = "invalid/unhandled statement or unexpected end of input"
MSG_UNMATCHED_CLOSE_TAG = "no matching opening tag"
MSG_CLOSE_TAG_MISMATCH = 'closing tag mismatch; expected "{expected}"'
MSG_DUPLICATE_ATTRIBUTE = 'duplicated attribute: "{name}"'
MSG_TRAILING_CONTENT = "unexpected content after the root element"
MSG_MISSING_ROOT = "content before the root element"
MSG_INTERNAL_FAULT = "internal fault: {error_type}: {error}"


class _DocumentScan:
    """State of one scan: cursor, element stack and result being filled in."""

    def __init__(
        self,
        document: str,
        observer: SaxObserver,
        config: ParserConfig,
        logger: CorrelationLogger
    ) -> None:
        self.document = document
        self.observer = observer
        self.config = config
        self.logger = logger
        self.cursor = 0
        self.stack: List[Span] = []
        self.root_seen = False
        self.result = ParseResult(document=document)

    def run(self) -> None:
        document = self.document

        pos = skip_spaces_and_comments(document, 0)
        pos = skip_xml_declaration(document, pos)
        pos = skip_misc(document, pos)
        after_doctype = skip_doctype(document, pos)
        if after_doctype != pos:
            pos = skip_misc(document, after_doctype)
        self.cursor = pos

        if pos == len(document):
            # Only whitespace, comments, declaration and doctype.
            return

        # The first iteration runs with an empty stack to see the root tag.
        while self._step():
            if not self.stack:
                break
        else:
            return

        if not self.root_seen:
            # Text or CDATA ended the first iteration before any opening tag.
            self.cursor = pos
            self.fail(ParseErrorKind.SYNTAX_ERROR, MSG_MISSING_ROOT)
            return

        if self.config.reject_trailing_content:
            self.cursor = skip_misc(document, self.cursor)
            if self.cursor != len(document):
                self.fail(ParseErrorKind.TRAILING_CONTENT, MSG_TRAILING_CONTENT)

    def _step(self) -> bool:
        """Consume one body token; False once the scan has to stop."""
        document = self.document
        pos = self.cursor

        open_tag = match_open_tag(document, pos)
        if open_tag is not None:
            return self._advance(self._open_tag(open_tag), open_tag.end)

        close_tag = CLOSE_TAG_PATTERN.match(document, pos)
        if close_tag is not None:
            name = Span(document, close_tag.start(1), close_tag.end(1))
            return self._advance(self._close_tag(name), close_tag.end())

        text_end = document.find("<", pos)
        if text_end > pos:
            accepted = self._deliver(
                self.observer.text(Span(document, pos, text_end)), "text"
            )
            return self._advance(accepted, text_end)

        cdata = CDATA_PATTERN.match(document, pos)
        if cdata is not None:
            accepted = self._deliver(
                self.observer.cdata(Span(document, cdata.start(1), cdata.end(1))),
                "cdata",
            )
            return self._advance(accepted, cdata.end())

        instruction = PROCESSING_INSTRUCTION_PATTERN.match(document, pos)
        if instruction is not None:
            return self._advance(True, instruction.end())

        self.fail(ParseErrorKind.SYNTAX_ERROR, MSG_SYNTAX_ERROR)
        return False

    def _advance(self, accepted: bool, end: int) -> bool:
        if accepted:
            self.cursor = skip_spaces_and_comments(self.document, end)
        return accepted

    def _open_tag(self, tag: OpenTagMatch) -> bool:
        document = self.document
        observer = self.observer

        name = Span(document, tag.name_begin, tag.name_end)
        self.stack.append(name)
        self.root_seen = True
        metrics = self.result.metrics
        metrics.max_depth = max(metrics.max_depth, len(self.stack))

        if not self._deliver(observer.enter(name, tag.self_closing), "enter"):
            return False

        seen: List[Span] = []
        attr_pos = tag.name_end
        while True:
            match = ATTRIBUTE_PATTERN.match(document, attr_pos, tag.end)
            if match is None:
                break
            attr_name = Span(document, match.start(1), match.end(1))
            value_group = 2 if match.group(2) is not None else 3
            value = Span(document, match.start(value_group), match.end(value_group))

            if not self._deliver(observer.attribute(attr_name, value), "attribute"):
                return False

            if observer.validate():
                if attr_name in seen:
                    self.fail(
                        ParseErrorKind.DUPLICATE_ATTRIBUTE,
                        MSG_DUPLICATE_ATTRIBUTE.format(name=attr_name.text),
                    )
                    return False
                seen.append(attr_name)

            attr_pos = match.end()

        if tag.self_closing:
            accepted = self._deliver(observer.exit(name, True), "exit")
            self.stack.pop()
            return accepted
        return True

    def _close_tag(self, name: Span) -> bool:
        if not self.stack:
            self.fail(ParseErrorKind.UNMATCHED_CLOSE_TAG, MSG_UNMATCHED_CLOSE_TAG)
            return False

        expected = self.stack[-1]
        if expected != name:
            self.fail(
                ParseErrorKind.CLOSE_TAG_MISMATCH,
                MSG_CLOSE_TAG_MISMATCH.format(expected=expected.text),
            )
            return False

        accepted = self._deliver(self.observer.exit(name, False), "exit")
        self.stack.pop()
        return accepted

    def _deliver(self, accepted: bool, callback: str) -> bool:
        """Account for one callback; a falsy answer cancels the scan."""
        self.result.metrics.events_emitted += 1
        if accepted:
            return True

        self.result.outcome = ParseOutcome.CANCELLED
        self.result.diagnostics.append(DiagnosticEntry(
            severity=DiagnosticSeverity.INFO,
            message=f"Scan cancelled by observer callback '{callback}'",
            component=COMPONENT,
            offset=self.cursor,
            correlation_id=self.config.correlation_id,
        ))
        self.logger.info(
            "Scan cancelled by observer",
            extra={"callback": callback, "offset": self.cursor}
        )
        return False

    def fail(
        self,
        kind: ParseErrorKind,
        message: str,
        severity: DiagnosticSeverity = DiagnosticSeverity.ERROR
    ) -> None:
        """Report an error at the cursor and mark the scan as failed."""
        offset = self.cursor
        result = self.result
        result.outcome = ParseOutcome.ERROR
        result.error_kind = kind
        result.error_message = message
        result.error_offset = offset
        result.diagnostics.append(DiagnosticEntry(
            severity=severity,
            message=message,
            component=COMPONENT,
            offset=offset,
            details={"error_kind": kind.name, "open_elements": len(self.stack)},
            correlation_id=self.config.correlation_id,
        ))
        self.logger.warning(
            "Scan failed",
            extra={"error_kind": kind.name, "error": message, "offset": offset}
        )
        self.observer.error(message, offset)


class XMLSaxParser:
    """Scanner bound to one observer.

    The observer is shared across calls but every call to :meth:`parse` or
    :meth:`scan` gets its own element stack. Using the same observer from
    overlapping scans is not supported.

    Examples:
        >>> from micro_xml_sax import EventRecorder, XMLSaxParser
        >>> recorder = EventRecorder()
        >>> XMLSaxParser(recorder).parse('<R><A p="1"/></R>')
        True
        >>> [event.kind for event in recorder.events]
        ['enter', 'enter', 'attribute', 'exit', 'exit']
    """

    def __init__(
        self,
        observer: SaxObserver,
        config: Optional[ParserConfig] = None
    ) -> None:
        """Initialize the scanner.

        Args:
            observer: Receiver of the scan events
            config: Scanner configuration; defaults to ``ParserConfig()``
        """
        self.observer = observer
        self.config = config or ParserConfig()
        self.logger = get_logger(__name__, self.config.correlation_id, COMPONENT)

    def parse(self, document: str) -> bool:
        """Scan ``document`` and report whether it succeeded.

        Returns:
            True iff the root element closed, no structural error occurred
            and no callback returned False
        """
        return self.scan(document).success

    def scan(self, document: str) -> ParseResult:
        """Scan ``document`` and return the detailed result.

        Args:
            document: The complete document

        Returns:
            ParseResult with outcome, error details, diagnostics and metrics

        Raises:
            TypeError: If document is not a str
            Exception: Whatever a pattern, helper or callback raised, unless
                ``config.catch_exceptions`` is set
        """
        if not isinstance(document, str):
            raise TypeError(
                f"document must be str, not {type(document).__name__}"
            )

        start_time = time.perf_counter()
        self.logger.debug(
            "Starting scan",
            extra={"document_length": len(document)}
        )

        scan = _DocumentScan(document, self.observer, self.config, self.logger)
        try:
            scan.run()
        except Exception as e:
            if not self.config.catch_exceptions:
                raise
            self.logger.exception(
                "Internal fault absorbed",
                extra={"offset": scan.cursor}
            )
            # An ERROR outcome here means observer.error itself raised; the
            # error it was handed stays the reported one.
            if scan.result.outcome is not ParseOutcome.ERROR:
                self._absorb_fault(scan, e)

        result = scan.result
        if self.config.enable_metrics:
            result.metrics.processing_time_ms = (
                (time.perf_counter() - start_time) * MS_PER_SECOND
            )
            result.metrics.characters_processed = scan.cursor
        self.logger.debug(
            "Scan finished",
            extra={
                "outcome": result.outcome.name,
                "events": result.metrics.events_emitted,
                "processing_time_ms": result.metrics.processing_time_ms,
            }
        )
        return result

    def _absorb_fault(self, scan: _DocumentScan, error: Exception) -> None:
        """Record ``error`` as an internal fault and report it once."""
        try:
            scan.fail(
                ParseErrorKind.INTERNAL_FAULT,
                MSG_INTERNAL_FAULT.format(error_type=type(error).__name__, error=error),
                severity=DiagnosticSeverity.CRITICAL,
            )
        except Exception:
            self.logger.exception(
                "Observer error callback raised",
                extra={"offset": scan.cursor}
            )


def parse(
    document: str,
    observer: SaxObserver,
    config: Optional[ParserConfig] = None
) -> bool:
    """Scan ``document``, reporting events to ``observer``.

    Args:
        document: The complete document
        observer: Receiver of the scan events
        config: Optional scanner configuration

    Returns:
        True iff the scan completed without error or cancellation
    """
    return XMLSaxParser(observer, config).parse(document)
