"""Shared configuration, result types and logging.

This module provides the data structures and utilities used across the
scanner, the observer API and the command-line driver.
"""

from .config import ConfigError, ConfigValidationError, ParserConfig
from .logging import CorrelationLogger, get_logger
from .result import (
    DiagnosticEntry,
    DiagnosticSeverity,
    ParseErrorKind,
    ParseMetrics,
    ParseOutcome,
    ParseResult,
)

__all__ = [
    "ConfigError",
    "ConfigValidationError",
    "ParserConfig",
    "CorrelationLogger",
    "get_logger",
    "DiagnosticEntry",
    "DiagnosticSeverity",
    "ParseErrorKind",
    "ParseMetrics",
    "ParseOutcome",
    "ParseResult",
]
