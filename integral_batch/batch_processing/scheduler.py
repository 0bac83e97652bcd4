from concurrent.futures import Future, ThreadPoolExecutor
from typing import List, Optional, Sequence

from integral_batch.common.errors import BatchRunError
from integral_batch.integral_image.computer import IntegralImageComputer
from .config import BatchConfig
from .partition import (
    detect_hardware_concurrency,
    effective_thread_count,
    partition_bounds,
    runs_serially,
)
from .task import BatchTask, WorkStatus


class BatchScheduler:
    """
    Runs integral image computation over a list of files, serially or split
    into contiguous partitions across worker threads.
    """

    def __init__(self, computer=None, config: Optional[BatchConfig] = None, hardware_hint: Optional[int] = None):
        self.computer = computer or IntegralImageComputer()
        self.config = config or BatchConfig()
        self.hardware_hint = detect_hardware_concurrency() if hardware_hint is None else hardware_hint

    def _make_task(self, file_paths: Sequence[str], start: int, stop: int, position: int = 0) -> BatchTask:
        return BatchTask(
            file_paths,
            start,
            stop,
            self.computer,
            output_extension=self.config.output_extension,
            show_progress=self.config.show_progress,
            position=position,
        )

    def run(self, file_paths: Sequence[str], thread_count: int = 0) -> WorkStatus:
        """
        Process every file once and return the combined per-file status.

        The last partition runs on the calling thread; the others run on a
        thread pool that is always fully joined before this returns.

        Raises:
            BatchRunError: launching, running or joining a partition failed.
                Raised only after every launched partition has finished.
        """
        file_paths = tuple(file_paths)
        file_count = len(file_paths)

        if runs_serially(file_count, thread_count, self.hardware_hint):
            return self._make_task(file_paths, 0, file_count)()

        threads = effective_thread_count(file_count, thread_count, self.hardware_hint)
        bounds = partition_bounds(file_count, threads)
        *pooled_bounds, (last_start, last_stop) = bounds
        last_position = len(pooled_bounds)

        # One slot per partition, filled by whichever thread ends up running it
        results: List[Optional[WorkStatus]] = [None] * len(bounds)
        futures: List[Future] = []
        failure_count = 0

        def run_partition(position: int, start: int, stop: int) -> None:
            results[position] = self._make_task(file_paths, start, stop, position)()

        with ThreadPoolExecutor(max_workers=len(pooled_bounds), thread_name_prefix=self.config.thread_name_prefix) as executor:
            for position, (start, stop) in enumerate(pooled_bounds):
                try:
                    futures.append(executor.submit(run_partition, position, start, stop))
                except Exception:
                    # The work item may still be queued and picked up by a running worker
                    failure_count += 1

            try:
                run_partition(last_position, last_start, last_stop)
            except Exception:
                failure_count += 1

            for future in futures:
                try:
                    future.result()
                except Exception:
                    failure_count += 1

        status = WorkStatus.combine(result for result in results if result is not None)
        if failure_count:
            raise BatchRunError(failure_count, status)
        return status
