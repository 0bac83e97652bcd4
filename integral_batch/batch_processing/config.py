from dataclasses import dataclass
from integral_batch.common.constants import CONSTANTS

@dataclass
class BatchConfig:
    """Configuration for batch scheduling."""
    output_extension: str = CONSTANTS.OUTPUT_EXTENSION
    thread_name_prefix: str = CONSTANTS.THREAD_NAME_PREFIX
    show_progress: bool = False
