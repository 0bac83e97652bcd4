from typing import Optional

from integral_batch.common.constants import CONSTANTS
from .computer import IntegralImageComputer
from .config import IntegralConfig


def run_integral(input_path: str, output_path: Optional[str] = None, config: Optional[IntegralConfig] = None) -> str:
    """Compute the integral image of one file and return the output file path."""
    if output_path is None:
        output_path = input_path + CONSTANTS.OUTPUT_EXTENSION

    IntegralImageComputer(config).compute(input_path, output_path)
    return output_path
