from dataclasses import dataclass
from integral_batch.common.constants import CONSTANTS

@dataclass
class IntegralConfig:
    """Configuration for integral image computation."""
    # Image decoding
    read_mode: str = CONSTANTS.IMAGE_READ_MODE

    # Text output
    decimal_places: int = CONSTANTS.DECIMAL_PLACES
    value_separator: str = CONSTANTS.VALUE_SEPARATOR
    row_separator: str = CONSTANTS.ROW_SEPARATOR
    channel_separator: str = CONSTANTS.CHANNEL_SEPARATOR
    output_encoding: str = CONSTANTS.OUTPUT_ENCODING
