"""
Tools for reading Creatures world (.sfc) and sprite (.s16) files.
"""

from .parsers import (
    SfcParser,
    S16Parser,
    Document,
    SfcParseError,
    parse_document,
    parse_document_or_default,
)

__version__ = "0.1.0"
