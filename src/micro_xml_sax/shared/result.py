"""Result objects and diagnostic types for SAX scanning.

A scan reports its events to an observer; what is left for the caller is the
outcome, the single error (if any) and some bookkeeping, collected here.
"""

import time
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, List, Optional

from micro_xml_sax.character.position import DocumentPosition, locate


class DiagnosticSeverity(Enum):
    """Severity levels for diagnostic entries."""

    INFO = auto()       # Informational messages (cancellation)
    ERROR = auto()      # Structural errors that stopped the scan
    CRITICAL = auto()   # Internal faults absorbed at the parse boundary


class ParseOutcome(Enum):
    """Terminal state of one scan."""

    SUCCESS = auto()    # Element stack emptied, no error, no cancellation
    ERROR = auto()      # Structural error or absorbed fault
    CANCELLED = auto()  # An observer callback returned False


class ParseErrorKind(Enum):
    """Taxonomy of errors reported through ``SaxObserver.error``."""

    SYNTAX_ERROR = auto()           # No token matches at the cursor
    UNMATCHED_CLOSE_TAG = auto()    # Closing tag with an empty element stack
    CLOSE_TAG_MISMATCH = auto()     # Closing tag differs from the open element
    DUPLICATE_ATTRIBUTE = auto()    # Same attribute twice (validate mode only)
    TRAILING_CONTENT = auto()       # Content after the root element
    INTERNAL_FAULT = auto()         # Exception absorbed by catch_exceptions


@dataclass
class DiagnosticEntry:
    """Single diagnostic entry with context information."""

    severity: DiagnosticSeverity
    message: str
    component: str
    offset: Optional[int] = None
    details: Optional[Dict[str, Any]] = None
    timestamp: float = field(default_factory=time.time)
    correlation_id: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate diagnostic entry."""
        if not self.message:
            raise ValueError("Diagnostic message cannot be empty")
        if not self.component:
            raise ValueError("Diagnostic component cannot be empty")


@dataclass
class ParseMetrics:
    """Bookkeeping collected while scanning."""

    processing_time_ms: float = 0.0
    characters_processed: int = 0
    events_emitted: int = 0
    max_depth: int = 0

    @property
    def characters_per_second(self) -> float:
        """Calculate characters processed per second."""
        if self.processing_time_ms <= 0:
            return 0.0
        return (self.characters_processed * 1000.0) / self.processing_time_ms


@dataclass
class ParseResult:
    """Outcome of :meth:`XMLSaxParser.scan`.

    ``error_position`` is resolved lazily from ``error_offset`` so that the
    line/column computation never runs while the document is being scanned.
    """

    document: str = field(repr=False)
    outcome: ParseOutcome = ParseOutcome.SUCCESS
    error_kind: Optional[ParseErrorKind] = None
    error_message: Optional[str] = None
    error_offset: Optional[int] = None
    diagnostics: List[DiagnosticEntry] = field(default_factory=list)
    metrics: ParseMetrics = field(default_factory=ParseMetrics)

    @property
    def success(self) -> bool:
        """True only when the scan completed without error or cancellation."""
        return self.outcome is ParseOutcome.SUCCESS

    @property
    def cancelled(self) -> bool:
        """True when an observer callback stopped the scan."""
        return self.outcome is ParseOutcome.CANCELLED

    @property
    def error_position(self) -> Optional[DocumentPosition]:
        """Line and column of the reported error, if any."""
        if self.error_offset is None:
            return None
        return locate(self.document, self.error_offset)

    def __bool__(self) -> bool:
        return self.success
