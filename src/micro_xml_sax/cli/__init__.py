"""Command-line interface module for Micro XML SAX.

This module provides the ``micro-xml-sax`` tool for validating files and
dumping their event streams.
"""

from .main import main

__all__ = ["main"]
