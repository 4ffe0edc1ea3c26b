"""
Errors raised while decoding SFC world files.

Every decode failure is an SfcParseError (a ValueError, so callers that
already catch ValueError from the parsers keep working). Each error
carries the absolute byte offset of the failing field and, once it has
left the innermost record, the record path it was raised under.
"""

from typing import Optional


class SfcParseError(ValueError):
    """Base class for all SFC decode failures."""

    def __init__(self, message: str, offset: int, record_path: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.offset = offset
        self.record_path = record_path

    def __str__(self) -> str:
        where = f" at offset 0x{self.offset:X}"
        if self.record_path:
            where += f" in {self.record_path}"
        return f"{self.message}{where}"


class StructuralUnderrun(SfcParseError):
    """Buffer exhausted in the middle of a fixed-size field."""

    def __init__(self, needed: int, available: int, offset: int, field: str = ""):
        label = f" for {field}" if field else ""
        super().__init__(f"Need {needed} bytes{label}, only {available} left", offset)
        self.needed = needed
        self.available = available


class CountOutOfBounds(SfcParseError):
    """A length-prefixed count exceeds the collection ceiling."""

    def __init__(self, site: str, count: int, limit: int, offset: int):
        super().__init__(f"{site} count {count} exceeds limit {limit}", offset)
        self.site = site
        self.count = count
        self.limit = limit


class UnexpectedClassName(SfcParseError):
    """An archive header names a different class than the one expected here."""

    def __init__(self, expected: str, actual: str, offset: int):
        super().__init__(f"Expected class {expected!r}, found {actual!r}", offset)
        self.expected = expected
        self.actual = actual


class InvalidEnumValue(SfcParseError):
    """A discriminant maps to no known enumerator."""

    def __init__(self, enum_name: str, value: int, offset: int):
        super().__init__(f"Invalid {enum_name} value {value}", offset)
        self.enum_name = enum_name
        self.value = value


class InvalidArchiveTag(SfcParseError):
    """An archive object tag is missing its high-bit class marker."""

    def __init__(self, object_tag: int, offset: int):
        super().__init__(f"Archive object tag 0x{object_tag:08X} has no class marker", offset)
        self.object_tag = object_tag
