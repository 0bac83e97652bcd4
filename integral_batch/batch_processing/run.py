from integral_batch.common.reporting import report
from integral_batch.integral_image.computer import IntegralImageComputer
from .batch_data import BatchData
from .partition import effective_thread_count
from .scheduler import BatchScheduler
from .task import WorkStatus


def run_batch(data: BatchData) -> WorkStatus:
    """Run the batch described by `data` and return the combined per-file status."""
    scheduler = BatchScheduler(IntegralImageComputer(data.integral_config), data.batch_config)
    threads = effective_thread_count(len(data.file_paths), data.thread_count, scheduler.hardware_hint)
    report('BATCH', f"Computing integral images for {len(data.file_paths)} file(s) on {threads} thread(s)...")

    status = scheduler.run(data.file_paths, data.thread_count)

    succeeded = status.processed - len(status.failed_paths)
    if status.failed:
        report('BATCH', f"Processing completed with errors: {len(status.failed_paths)} file(s) failed, {succeeded} succeeded.")
    else:
        report('BATCH', f"Processing completed successfully! {succeeded} integral image(s) saved.")
    return status
