from dataclasses import dataclass
from typing import Iterable, Sequence, Tuple

from tqdm import tqdm

from integral_batch.common.constants import CONSTANTS
from integral_batch.common.reporting import report_error

FALLBACK_ERROR_MESSAGE = "Error occurred while processing an image."


@dataclass(frozen=True)
class WorkStatus:
    """Outcome of one or more partitions: how many files ran, and which failed."""
    processed: int = 0
    failed_paths: Tuple[str, ...] = ()

    @property
    def failed(self) -> bool:
        return bool(self.failed_paths)

    @classmethod
    def combine(cls, statuses: Iterable['WorkStatus']) -> 'WorkStatus':
        processed = 0
        failed_paths: Tuple[str, ...] = ()
        for status in statuses:
            processed += status.processed
            failed_paths += status.failed_paths
        return cls(processed=processed, failed_paths=failed_paths)


def describe_failure(path: str, error: BaseException) -> str:
    return (
        f"Error occurred during computing file {path}. "
        f"Type of exception is {type(error).__name__}, message {error}"
    )


class BatchTask:
    """
    Computes integral images for one contiguous slice of the file list.

    Every per-file failure is reported on stderr and recorded in the
    returned WorkStatus, including a SystemExit raised while computing a
    file. Only KeyboardInterrupt propagates, so Ctrl+C still stops a run
    that is processing on the calling thread.
    """

    def __init__(
        self,
        file_paths: Sequence[str],
        start: int,
        stop: int,
        computer,
        output_extension: str = CONSTANTS.OUTPUT_EXTENSION,
        show_progress: bool = False,
        position: int = 0,
    ):
        self.file_paths = file_paths
        self.start = start
        self.stop = stop
        self.computer = computer
        self.output_extension = output_extension
        self.show_progress = show_progress
        self.position = position

    def __len__(self) -> int:
        return self.stop - self.start

    def __call__(self) -> WorkStatus:
        failed_paths = []
        indices = range(self.start, self.stop)
        if self.show_progress:
            indices = tqdm(indices, desc=f'[INTEGRAL] part {self.position + 1}', position=self.position)

        for index in indices:
            path = self.file_paths[index]
            try:
                self.computer.compute(path, path + self.output_extension)
            except KeyboardInterrupt:
                raise
            except BaseException as e:
                failed_paths.append(path)
                self._report_failure(path, e)

        return WorkStatus(processed=len(self), failed_paths=tuple(failed_paths))

    @staticmethod
    def _report_failure(path: str, error: BaseException) -> None:
        try:
            message = describe_failure(path, error)
        except Exception:
            message = FALLBACK_ERROR_MESSAGE

        try:
            report_error(message)
        except Exception:
            # stderr itself is unusable; nothing left to report to
            pass
