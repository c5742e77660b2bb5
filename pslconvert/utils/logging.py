"""
Unified logging for the level converter.

Console output for every message, plus an optional conversion log file.
Tracks warnings and errors for the end-of-run summary.

Usage:
    from pslconvert.utils import log, logWarning, logError, logDebug, init_logging, print_summary

    # Optional, enables the log file:
    init_logging(Path("convert.log"))

    log("Reading level...")                  # Info - section headers, major points
    logWarning("matcen index out of range")  # Input is odd but the graph is still usable
    logError("truncated stream")             # Conversion failed
    logDebug("read 112 walls")               # Only written to the log file

    print_summary()  # Shows warning/error counts
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
_warnings: List[str] = []
_errors: List[str] = []


def init_logging(log_path: Optional[Path] = None):
    """
    Reset the warning/error tally and optionally start writing a log file.

    Args:
        log_path: Path to the log file. None keeps output on the console only.
    """
    global _log_file, _log_path, _warnings, _errors

    close_logging()
    _warnings = []
    _errors = []

    if log_path is None:
        return

    _log_path = Path(log_path)
    _log_path.parent.mkdir(parents=True, exist_ok=True)

    try:
        _log_file = open(_log_path, 'w', encoding='utf-8')
    except OSError as e:
        print(f"Warning: Could not open log file {_log_path}: {e}", file=sys.stderr)
        _log_file = None
        return

    timestamp = datetime.now().strftime('%Y-%m-%d %H:%M:%S')
    _log_file.write(f"Conversion started: {timestamp}\n")
    _log_file.write("=" * 70 + "\n\n")
    _log_file.flush()

    atexit.register(close_logging)


def close_logging():
    """Close the log file, if one is open."""
    global _log_file

    if _log_file is None:
        return

    try:
        timestamp = datetime.now().strftime('%Y-%m-%d %H:%M:%S')
        _log_file.write(f"\n{'=' * 70}\n")
        _log_file.write(f"Conversion finished: {timestamp}\n")
        _log_file.close()
    except OSError:
        pass
    _log_file = None


def print_summary():
    """
    Print the warnings and errors collected during the run.
    Uses colors for terminal output.
    """
    log("\n" + "=" * 70)
    log("CONVERSION SUMMARY")
    log("=" * 70)

    if _errors:
        print(f"\n{Colors.RED}{Colors.BOLD}Errors ({len(_errors)}):{Colors.RESET}")
        for err in _errors:
            print(f"  {Colors.RED}- {err}{Colors.RESET}")
        _write_to_file(f"\nErrors ({len(_errors)}):")
        for err in _errors:
            _write_to_file(f"  - {err}")

    if _warnings:
        print(f"\n{Colors.YELLOW}{Colors.BOLD}Warnings ({len(_warnings)}):{Colors.RESET}")
        for warn in _warnings:
            print(f"  {Colors.YELLOW}- {warn}{Colors.RESET}")
        _write_to_file(f"\nWarnings ({len(_warnings)}):")
        for warn in _warnings:
            _write_to_file(f"  - {warn}")

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

    _write_to_file(f"\n{len(_errors)} Error(s) | {len(_warnings)} Warning(s)")


def get_counts() -> Tuple[int, int]:
    """Return (error_count, warning_count)."""
    return len(_errors), len(_warnings)


def _write_to_file(msg: str, end: str = "\n"):
    """Write message to the log file."""
    if _log_file is not None:
        try:
            _log_file.write(msg + end)
            _log_file.flush()
        except OSError:
            pass


def log(msg: str = "", end: str = "\n"):
    """
    Log an info message to the console and the log file.
    Use for section headers and major points of a conversion.
    """
    print(msg, end=end)
    _write_to_file(msg, end)


def logWarning(msg: str, end: str = "\n"):
    """
    Log a warning. Warnings flag input the reader tolerated.
    Displayed in yellow. Tracked for the summary.
    """
    formatted = f"Warning: {msg}"
    print(f"{Colors.YELLOW}{formatted}{Colors.RESET}", end=end)
    _write_to_file(formatted, end)
    _warnings.append(msg)


def logError(msg: str, end: str = "\n"):
    """
    Log an error. Errors mean the level could not be converted.
    Displayed in red. Tracked for the summary.
    """
    formatted = f"ERROR: {msg}"
    print(f"{Colors.RED}{formatted}{Colors.RESET}", end=end, file=sys.stderr)
    _write_to_file(formatted, end)
    _errors.append(msg)


def logDebug(msg: str, end: str = "\n"):
    """
    Log a debug message. Only written to the log file, not shown in console.
    """
    _write_to_file(f"[DEBUG] {msg}", end)
