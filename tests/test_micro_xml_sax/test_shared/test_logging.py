"""Tests for correlation-aware logging."""

import logging

from micro_xml_sax.api import SaxObserver, XMLSaxParser
from micro_xml_sax.shared.config import ParserConfig
from micro_xml_sax.shared.logging import CorrelationLogger, get_logger


class TestCorrelationLogger:
    """Tests for CorrelationLogger."""

    def test_component_defaults_to_last_name_part(self):
        """Test the default component name."""
        assert CorrelationLogger("micro_xml_sax.api.parser").component == "parser"
        assert get_logger("x.y", "id", "scanner").component == "scanner"

    def test_records_carry_context(self, caplog):
        """Test that component and correlation id are attached."""
        logger = get_logger("micro_xml_sax.test", "req-7", "tests")
        with caplog.at_level(logging.DEBUG, logger="micro_xml_sax.test"):
            logger.info("hello", extra={"offset": 3})

        record = caplog.records[-1]
        assert record.getMessage() == "hello"
        assert record.component == "tests"
        assert record.correlation_id == "req-7"
        assert record.offset == 3

    def test_is_enabled_for(self):
        """Test level checks against the wrapped logger."""
        logger = get_logger("micro_xml_sax.level_check")
        logger.logger.setLevel(logging.ERROR)
        try:
            assert logger.is_enabled_for(logging.ERROR)
            assert not logger.is_enabled_for(logging.DEBUG)
        finally:
            logger.logger.setLevel(logging.NOTSET)


class TestParserLogging:
    """Tests for the records the scanner emits."""

    def test_structural_error_logged_as_warning(self, caplog):
        """Test that a failed scan logs one warning with the error kind."""
        parser = XMLSaxParser(SaxObserver(), ParserConfig(correlation_id="doc-1"))
        with caplog.at_level(logging.DEBUG, logger="micro_xml_sax"):
            assert parser.parse("<a></b>") is False

        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert len(warnings) == 1
        assert warnings[0].error_kind == "CLOSE_TAG_MISMATCH"
        assert warnings[0].correlation_id == "doc-1"
        assert warnings[0].component == "sax_parser"

    def test_successful_scan_logs_debug_only(self, caplog):
        """Test that a clean scan stays below INFO."""
        with caplog.at_level(logging.DEBUG, logger="micro_xml_sax"):
            assert XMLSaxParser(SaxObserver()).parse("<a/>")

        assert caplog.records
        assert all(r.levelno == logging.DEBUG for r in caplog.records)
