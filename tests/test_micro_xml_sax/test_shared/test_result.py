"""Tests for result and diagnostic types."""

import pytest

from micro_xml_sax.shared.result import (
    DiagnosticEntry,
    DiagnosticSeverity,
    ParseMetrics,
    ParseOutcome,
    ParseResult,
)


class TestDiagnosticEntry:
    """Tests for DiagnosticEntry."""

    def test_creation(self):
        """Test diagnostic creation with defaults."""
        entry = DiagnosticEntry(DiagnosticSeverity.ERROR, "bad tag", "sax_parser", offset=4)
        assert entry.offset == 4
        assert entry.details is None
        assert entry.timestamp > 0

    @pytest.mark.parametrize("message,component", [("", "sax_parser"), ("bad", "")])
    def test_requires_message_and_component(self, message, component):
        """Test diagnostic validation."""
        with pytest.raises(ValueError):
            DiagnosticEntry(DiagnosticSeverity.INFO, message, component)


class TestParseMetrics:
    """Tests for ParseMetrics."""

    def test_throughput(self):
        """Test characters per second calculation."""
        assert ParseMetrics(processing_time_ms=500.0, characters_processed=100).characters_per_second == 200.0

    def test_throughput_without_timing(self):
        """Test that zero elapsed time yields zero throughput."""
        assert ParseMetrics(characters_processed=100).characters_per_second == 0.0


class TestParseResult:
    """Tests for ParseResult."""

    def test_success(self):
        """Test the default successful result."""
        result = ParseResult(document="<a/>")
        assert result.success
        assert bool(result) is True
        assert not result.cancelled
        assert result.error_position is None

    def test_cancelled(self):
        """Test the cancelled state."""
        result = ParseResult(document="<a/>", outcome=ParseOutcome.CANCELLED)
        assert result.cancelled
        assert not result

    def test_error_position(self):
        """Test lazy line and column resolution."""
        result = ParseResult(
            document="<a>\n  <b>\n</a>",
            outcome=ParseOutcome.ERROR,
            error_offset=10,
        )
        position = result.error_position
        assert (position.line, position.column, position.offset) == (3, 1, 10)

    def test_document_not_in_repr(self):
        """Test that the document text stays out of the repr."""
        assert "secret" not in repr(ParseResult(document="<secret/>"))
