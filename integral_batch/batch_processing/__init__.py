from .config import BatchConfig
from .batch_data import BatchData, parse_arguments, process_arguments
from .partition import effective_thread_count, partition_bounds, runs_serially
from .task import BatchTask, WorkStatus
from .scheduler import BatchScheduler
from .run import run_batch

__all__ = ['BatchConfig', 'BatchData', 'parse_arguments', 'process_arguments',
           'effective_thread_count', 'partition_bounds', 'runs_serially',
           'BatchTask', 'WorkStatus', 'BatchScheduler', 'run_batch']
