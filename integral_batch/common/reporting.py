"""
Status and error reporting shared across modules.
"""

import sys
import threading

_STDERR_LOCK = threading.Lock()


def report(tag: str, message: str) -> None:
    """Print a status line prefixed with the stage tag, e.g. '[BATCH]: ...'."""
    print(f"[{tag}]: {message}")


def report_error(message: str) -> None:
    """
    Write one diagnostic line to stderr.

    Called concurrently from batch workers: the whole line goes out in a
    single write so messages from different threads never interleave.
    """
    with _STDERR_LOCK:
        sys.stderr.write(message + "\n")
        sys.stderr.flush()
