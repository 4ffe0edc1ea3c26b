"""
Class registry and decode context.

An SFC stream writes a full archive header the first time a class
appears and a two-byte tag every time after that. The ClassRegistry
remembers which classes have already been headered; the DecodeContext
bundles it with the record path used in error reports and is passed
explicitly to every record decoder. One context belongs to exactly one
parse.
"""

from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Set

from ..constants import MAX_COLLECTION_COUNT
from .errors import SfcParseError


class ClassRegistry:
    """Set of class names whose full header has been seen this parse."""

    def __init__(self):
        self._classes: Set[str] = set()

    def contains(self, name: str) -> bool:
        return name in self._classes

    def register(self, name: str) -> None:
        self._classes.add(name)

    def __contains__(self, name: str) -> bool:
        return self.contains(name)

    def __len__(self) -> int:
        return len(self._classes)

    def __repr__(self) -> str:
        return f"ClassRegistry({sorted(self._classes)})"


@dataclass
class DecodeContext:
    """
    Mutable state threaded through one parse.

    Attributes:
        registry: Classes already headered in this stream
        max_count: Ceiling for length-prefixed counts (at most 2000)
        path: Stack of record names, innermost last
    """
    registry: ClassRegistry = field(default_factory=ClassRegistry)
    max_count: int = MAX_COLLECTION_COUNT
    path: List[str] = field(default_factory=list)

    def __post_init__(self):
        if not 0 <= self.max_count <= MAX_COLLECTION_COUNT:
            raise ValueError(f"max_count {self.max_count} out of range (0-{MAX_COLLECTION_COUNT})")

    @property
    def record_path(self) -> str:
        return "/".join(self.path)

    @contextmanager
    def record(self, name: str, index: Optional[int] = None) -> Iterator[None]:
        """
        Scope a record decode so failures inside it report where they happened.

        The innermost scope stamps its full path onto an SfcParseError
        that does not carry one yet; outer scopes leave it alone.
        """
        self.path.append(name if index is None else f"{name}[{index}]")
        try:
            yield
        except SfcParseError as e:
            if e.record_path is None:
                e.record_path = self.record_path
            raise
        finally:
            self.path.pop()
