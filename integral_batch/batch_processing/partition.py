"""
Static partitioning of a file list across worker threads.

Pure arithmetic over the list length: partitions are computed once, before
any worker starts, so no shared index or counter is needed while they run.
"""

import os
from typing import List, Tuple


def detect_hardware_concurrency() -> int:
    """Number of CPUs reported by the platform, or 0 when unknown."""
    return os.cpu_count() or 0


def runs_serially(file_count: int, requested_threads: int, hardware_hint: int) -> bool:
    """True when the whole batch should run on the calling thread."""
    return (
        requested_threads == 1
        or (requested_threads == 0 and hardware_hint < 2)
        or file_count < 2
    )


def effective_thread_count(file_count: int, requested_threads: int, hardware_hint: int) -> int:
    """
    Number of partitions to split the batch into.

    An explicit request wins over the hardware hint; either is clamped to the
    number of files. Serial runs always get 1, so the result is never 0.
    """
    if runs_serially(file_count, requested_threads, hardware_hint):
        return 1
    wanted = requested_threads if requested_threads > 0 else hardware_hint
    return min(wanted, file_count)


def partition_bounds(file_count: int, thread_count: int) -> List[Tuple[int, int]]:
    """
    Split range(file_count) into `thread_count` contiguous (start, stop) slices.

    The first thread_count - 1 slices hold exactly file_count // thread_count
    files each; the last slice takes the remainder.
    """
    if not 1 <= thread_count <= max(file_count, 1):
        raise ValueError(f"Thread count must be between 1 and {file_count}, got {thread_count}")

    step = file_count // thread_count
    bounds = [(i * step, (i + 1) * step) for i in range(thread_count - 1)]
    bounds.append(((thread_count - 1) * step, file_count))
    return bounds
