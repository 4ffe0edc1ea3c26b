"""
Dump Configuration

Parser for the INI file read by sfc-dump.

Example:
    [limits]
    max_collection_count = 500

    [output]
    include_bacteria = no
    include_objvars = no
    indent = 2

    [logging]
    log_path = sfc-dump.log
    summary = yes
"""

import configparser
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from ..constants import MAX_COLLECTION_COUNT
from ..utils import logWarning


@dataclass
class DumpConfig:
    """Settings for one sfc-dump run"""
    max_collection_count: int = MAX_COLLECTION_COUNT  # Lower ceiling for counts (never above 2000)
    include_bacteria: bool = False  # Write each room's 100 bacteria slots
    include_objvars: bool = False  # Write each object's 100 objvars
    indent: Optional[int] = 2  # JSON indent, None for compact output
    log_path: Optional[Path] = None  # Log file, None for console only
    summary: bool = True  # Print warning/error summary at the end

    def __post_init__(self):
        """Validate configuration"""
        if not 1 <= self.max_collection_count <= MAX_COLLECTION_COUNT:
            raise ValueError(
                f"max_collection_count {self.max_collection_count} out of range (1-{MAX_COLLECTION_COUNT})"
            )

        if self.indent is not None and self.indent < 0:
            raise ValueError(f"indent must not be negative: {self.indent}")

    @classmethod
    def load(cls, config_path: Union[str, Path]) -> 'DumpConfig':
        """
        Load configuration from an INI file.

        Args:
            config_path: Path to the INI file

        Returns:
            DumpConfig with defaults for anything the file leaves out
        """
        if not Path(config_path).exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        config = configparser.ConfigParser()
        config.read(config_path)

        known = {'limits', 'output', 'logging'}
        for section in config.sections():
            if section not in known:
                logWarning(f"Ignoring unknown section [{section}] in {config_path}")

        try:
            max_count = config.getint('limits', 'max_collection_count', fallback=MAX_COLLECTION_COUNT)
            include_bacteria = config.getboolean('output', 'include_bacteria', fallback=False)
            include_objvars = config.getboolean('output', 'include_objvars', fallback=False)
            indent_str = config.get('output', 'indent', fallback='2').strip()
            summary = config.getboolean('logging', 'summary', fallback=True)
        except ValueError as e:
            raise ValueError(f"Invalid value in {config_path}: {e}") from e

        indent = cls._parse_indent(indent_str)

        log_path = config.get('logging', 'log_path', fallback='').strip()

        return cls(
            max_collection_count=max_count,
            include_bacteria=include_bacteria,
            include_objvars=include_objvars,
            indent=indent,
            log_path=Path(log_path) if log_path else None,
            summary=summary,
        )

    @staticmethod
    def _parse_indent(indent_str: str) -> Optional[int]:
        """Parse indent ("none" or empty means compact)"""
        if indent_str.lower() in ('', 'none'):
            return None
        try:
            return int(indent_str)
        except ValueError:
            raise ValueError(f"Invalid indent: {indent_str!r}") from None
