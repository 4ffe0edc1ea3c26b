"""
Unified logging for the SFC tools.

Provides console output plus an optional log file.
Tracks warnings and errors for an end-of-run summary.

Usage:
    from sfctools.utils import log, logWarning, logError, logDebug, init_logging, print_summary

    # At start of a script (omit the path to stay console-only):
    init_logging(Path("sfc.log"))

    # Throughout code:
    log("Parsing Eden.sfc...")                # Info - section headers, major points
    logWarning("sprite file not found")       # May cause issues with output
    logError("parse failed")                  # Fundamentally breaks output
    logDebug("CRoom header at 0x0042")        # Log file only

    # At end:
    print_summary()  # Shows warning/error counts

The decoders only ever call logDebug, so library use without a log file
stays silent.
"""

import sys
import atexit
from pathlib import Path
from datetime import datetime
from typing import List, Optional, Tuple

# ANSI color codes
class Colors:
    YELLOW = '\033[93m'
    RED = '\033[91m'
    GREEN = '\033[92m'
    BOLD = '\033[1m'
    RESET = '\033[0m'


# Module state
_log_file = None
_log_path: Optional[Path] = None
_initialized = False
_warnings: List[str] = []
_errors: List[str] = []


def init_logging(log_path: Optional[Path] = None):
    """
    Initialize logging to the console and, optionally, a file.

    Args:
        log_path: Path to log file. None keeps logging console-only.
    """
    global _log_file, _log_path, _initialized, _warnings, _errors

    if _initialized:
        return

    # Reset tracking lists
    _warnings = []
    _errors = []
    _initialized = True

    if log_path is None:
        return

    _log_path = Path(log_path)
    _log_path.parent.mkdir(parents=True, exist_ok=True)

    try:
        _log_file = open(_log_path, 'w', encoding='utf-8')

        # Write header
        timestamp = datetime.now().strftime('%Y-%m-%d %H:%M:%S')
        _log_file.write(f"Run started: {timestamp}\n")
        _log_file.write("=" * 70 + "\n\n")
        _log_file.flush()

        atexit.register(close_logging)

    except OSError as e:
        print(f"Warning: Could not open log file {_log_path}: {e}", file=sys.stderr)
        _log_file = None


def close_logging():
    """Close the log file and reset module state, including the warning and error lists."""
    global _log_file, _log_path, _initialized, _warnings, _errors

    if _log_file is not None:
        try:
            timestamp = datetime.now().strftime('%Y-%m-%d %H:%M:%S')
            _log_file.write(f"\n{'=' * 70}\n")
            _log_file.write(f"Run finished: {timestamp}\n")
            _log_file.close()
        except OSError:
            pass
        _log_file = None

    _log_path = None
    _initialized = False
    _warnings = []
    _errors = []


def print_summary():
    """
    Print a summary of warnings and errors at the end of a run.
    Uses colors for terminal output.
    """
    log("\n" + "=" * 70)
    log("SUMMARY")
    log("=" * 70)

    if _errors:
        print(f"\n{Colors.RED}{Colors.BOLD}Errors ({len(_errors)}):{Colors.RESET}")
        for err in _errors:
            print(f"  {Colors.RED}- {err}{Colors.RESET}")
        if _log_file:
            _log_file.write(f"\nErrors ({len(_errors)}):\n")
            for err in _errors:
                _log_file.write(f"  - {err}\n")

    if _warnings:
        print(f"\n{Colors.YELLOW}{Colors.BOLD}Warnings ({len(_warnings)}):{Colors.RESET}")
        for warn in _warnings:
            print(f"  {Colors.YELLOW}- {warn}{Colors.RESET}")
        if _log_file:
            _log_file.write(f"\nWarnings ({len(_warnings)}):\n")
            for warn in _warnings:
                _log_file.write(f"  - {warn}\n")

    print()
    if _errors:
        print(f"{Colors.RED}{Colors.BOLD}{len(_errors)} Error(s){Colors.RESET}", end="")
    else:
        print(f"{Colors.GREEN}0 Errors{Colors.RESET}", end="")

    print(" | ", end="")

    if _warnings:
        print(f"{Colors.YELLOW}{Colors.BOLD}{len(_warnings)} Warning(s){Colors.RESET}")
    else:
        print(f"{Colors.GREEN}0 Warnings{Colors.RESET}")

    if _log_file:
        _log_file.write(f"\n{len(_errors)} Error(s) | {len(_warnings)} Warning(s)\n")
        _log_file.flush()


def get_counts() -> Tuple[int, int]:
    """Return (error_count, warning_count)."""
    return len(_errors), len(_warnings)


def get_log_path() -> Optional[Path]:
    """Return the active log file path, or None when console-only."""
    return _log_path if _log_file is not None else None


def _write_to_file(msg: str, end: str = "\n"):
    """Write message to log file."""
    if _log_file is not None:
        try:
            _log_file.write(msg + end)
            _log_file.flush()
        except OSError:
            pass


def log(msg: str = "", end: str = "\n"):
    """
    Log an info message to both console and file.
    Use for section headers and major points of a run.
    """
    if not _initialized:
        init_logging()

    print(msg, end=end)
    _write_to_file(msg, end)


def logWarning(msg: str, end: str = "\n"):
    """
    Log a warning message. Warnings indicate something may cause issues with output.
    Displayed in yellow. Tracked for end-of-run summary.
    """
    if not _initialized:
        init_logging()

    formatted = f"Warning: {msg}"
    print(f"{Colors.YELLOW}{formatted}{Colors.RESET}", end=end)
    _write_to_file(formatted, end)
    _warnings.append(msg)


def logError(msg: str, end: str = "\n"):
    """
    Log an error message. Errors indicate something fundamentally breaks the output.
    Displayed in red. Tracked for end-of-run summary.
    """
    if not _initialized:
        init_logging()

    formatted = f"ERROR: {msg}"
    print(f"{Colors.RED}{formatted}{Colors.RESET}", end=end, file=sys.stderr)
    _write_to_file(formatted, end)
    _errors.append(msg)


def logDebug(msg: str, end: str = "\n"):
    """
    Log a debug message. Only written to the log file, never to the console.
    Use for detailed information useful when debugging a decode.
    """
    _write_to_file(f"[DEBUG] {msg}", end)
