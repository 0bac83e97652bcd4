import threading
import time
from concurrent.futures import Future

import numpy as np
import pytest

from integral_batch.batch_processing import scheduler as scheduler_module
from integral_batch.batch_processing.partition import partition_bounds
from integral_batch.batch_processing.scheduler import BatchScheduler
from integral_batch.common.errors import BatchRunError

PATHS = tuple(f'image_{i:02d}.png' for i in range(10))


class ForbiddenExecutor:
    def __init__(self, *args, **kwargs):
        raise AssertionError('no worker thread should be launched')


class InlineExecutor:
    """
    Runs submitted work immediately. A failed launch still runs the work,
    like a real pool whose queued item is taken by an already running worker.
    """

    def __init__(self, fail_submit=(), fail_join=(), **kwargs):
        self.fail_submit = set(fail_submit)
        self.fail_join = set(fail_join)
        self.submitted = 0
        self.shut_down = False

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.shut_down = True
        return False

    def submit(self, fn, *args):
        index = self.submitted
        self.submitted += 1
        result = fn(*args)
        if index in self.fail_submit:
            raise RuntimeError("can't start new thread")
        future = Future()
        if index in self.fail_join:
            future.set_exception(RuntimeError('join failed'))
        else:
            future.set_result(result)
        return future


def _read_bytes(path):
    with open(path, 'rb') as f:
        return f.read()


def _called_paths(computer):
    return [i for i, _, _ in computer.calls]


def test_single_thread_request_runs_everything_on_the_calling_thread(recording_computer, monkeypatch):
    monkeypatch.setattr(scheduler_module, 'ThreadPoolExecutor', ForbiddenExecutor)
    computer = recording_computer()

    status = BatchScheduler(computer, hardware_hint=8).run(PATHS, 1)

    assert _called_paths(computer) == list(PATHS)
    assert {ident for _, _, ident in computer.calls} == {threading.get_ident()}
    assert status.processed == len(PATHS)


@pytest.mark.parametrize('paths, requested, hint', [
    (PATHS, 0, 1),
    (PATHS, 0, 0),
    (PATHS[:1], 4, 8),
])
def test_serial_fallbacks(recording_computer, monkeypatch, paths, requested, hint):
    monkeypatch.setattr(scheduler_module, 'ThreadPoolExecutor', ForbiddenExecutor)
    computer = recording_computer()

    BatchScheduler(computer, hardware_hint=hint).run(paths, requested)

    assert _called_paths(computer) == list(paths)


def test_parallel_run_processes_each_file_once_keeping_partition_order(recording_computer):
    computer = recording_computer()

    status = BatchScheduler(computer, hardware_hint=8).run(PATHS, 3)

    called = _called_paths(computer)
    assert sorted(called) == list(PATHS)
    assert status.processed == len(PATHS)
    for start, stop in partition_bounds(len(PATHS), 3):
        positions = [called.index(p) for p in PATHS[start:stop]]
        assert positions == sorted(positions)


def test_last_partition_runs_on_the_calling_thread(recording_computer):
    computer = recording_computer()

    BatchScheduler(computer, hardware_hint=8).run(PATHS, 3)

    last_start, last_stop = partition_bounds(len(PATHS), 3)[-1]
    threads_by_path = {i: ident for i, _, ident in computer.calls}
    assert {threads_by_path[p] for p in PATHS[last_start:last_stop]} == {threading.get_ident()}


def test_thread_request_is_clamped_to_file_count(recording_computer):
    computer = recording_computer()

    BatchScheduler(computer, hardware_hint=2).run(PATHS[:3], 16)

    assert sorted(_called_paths(computer)) == list(PATHS[:3])


def test_per_file_failures_are_not_batch_failures(recording_computer, capsys):
    computer = recording_computer(failing_paths={PATHS[0], PATHS[9]})

    status = BatchScheduler(computer, hardware_hint=4).run(PATHS, 0)

    assert set(status.failed_paths) == {PATHS[0], PATHS[9]}
    assert len(_called_paths(computer)) == len(PATHS)
    err = capsys.readouterr().err
    assert PATHS[0] in err and PATHS[9] in err


def test_launch_failure_is_aggregated_and_keeps_the_work_that_ran(recording_computer, monkeypatch):
    executors = []

    def make_executor(**kwargs):
        executor = InlineExecutor(fail_submit={0}, **kwargs)
        executors.append(executor)
        return executor

    monkeypatch.setattr(scheduler_module, 'ThreadPoolExecutor', make_executor)
    computer = recording_computer(failing_paths={PATHS[1]})

    with pytest.raises(BatchRunError) as excinfo:
        BatchScheduler(computer, hardware_hint=8).run(PATHS, 3)

    assert excinfo.value.failure_count == 1
    assert _called_paths(computer) == list(PATHS)
    assert excinfo.value.status.processed == len(PATHS)
    assert excinfo.value.status.failed_paths == (PATHS[1],)
    assert executors[0].shut_down


def test_thread_start_failure_still_reports_every_file(recording_computer, monkeypatch):
    started = []
    real_start = threading.Thread.start

    def flaky_start(thread):
        started.append(thread)
        if len(started) == 2:
            raise RuntimeError("can't start new thread")
        real_start(thread)

    class SlowComputer(recording_computer):
        def compute(self, input_path, output_path):
            time.sleep(0.05)
            super().compute(input_path, output_path)

    monkeypatch.setattr(threading.Thread, 'start', flaky_start)
    computer = SlowComputer(failing_paths={PATHS[4]})

    with pytest.raises(BatchRunError) as excinfo:
        BatchScheduler(computer, hardware_hint=8).run(PATHS, 3)

    assert sorted(_called_paths(computer)) == list(PATHS)
    assert excinfo.value.status.processed == len(PATHS)
    assert excinfo.value.status.failed_paths == (PATHS[4],)


def test_join_failures_are_all_counted(recording_computer, monkeypatch):
    monkeypatch.setattr(scheduler_module, 'ThreadPoolExecutor',
                        lambda **kwargs: InlineExecutor(fail_join={0, 1}, **kwargs))
    computer = recording_computer()

    with pytest.raises(BatchRunError) as excinfo:
        BatchScheduler(computer, hardware_hint=8).run(PATHS, 3)

    assert excinfo.value.failure_count == 2
    assert sorted(_called_paths(computer)) == list(PATHS)


def test_failure_of_the_synchronous_partition_is_aggregated(recording_computer, monkeypatch):
    scheduler = BatchScheduler(recording_computer(), hardware_hint=8)
    original_make_task = scheduler._make_task

    def make_task(file_paths, start, stop, position=0):
        task = original_make_task(file_paths, start, stop, position)
        if stop == len(file_paths):
            def explode():
                raise MemoryError('out of memory')
            return explode
        return task

    monkeypatch.setattr(scheduler, '_make_task', make_task)

    with pytest.raises(BatchRunError) as excinfo:
        scheduler.run(PATHS, 2)

    assert excinfo.value.failure_count == 1
    assert excinfo.value.status.processed == 5


def test_mixed_corrupt_and_valid_files(write_image, corrupt_image, capsys):
    valid = [write_image(f'img_{i}.png', np.full((3, 4, 3), i, dtype=np.uint8)) for i in range(5)]
    paths = valid[:2] + [corrupt_image] + valid[2:]

    status = BatchScheduler(hardware_hint=4).run(paths, 0)

    assert status.failed_paths == (corrupt_image,)
    for path in valid:
        with open(path + '.integral') as f:
            assert len(f.read().split('\n\n')) == 3
    err_lines = capsys.readouterr().err.strip().split('\n')
    assert [line for line in err_lines if corrupt_image in line]


def test_repeated_runs_produce_identical_files(write_image):
    rng = np.random.default_rng(2)
    paths = [write_image(f'noise_{i}.png', rng.integers(0, 256, size=(6, 7, 3), dtype=np.uint8)) for i in range(6)]
    scheduler = BatchScheduler(hardware_hint=4)

    scheduler.run(paths, 3)
    first = [_read_bytes(p + '.integral') for p in paths]
    scheduler.run(paths, 3)
    second = [_read_bytes(p + '.integral') for p in paths]

    assert first == second
