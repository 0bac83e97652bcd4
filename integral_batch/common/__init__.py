from .constants import CONSTANTS, ProcessingConstants
from .fs_utils import discard_file, get_image_group_from_folder
from .reporting import report, report_error

__all__ = ['CONSTANTS', 'ProcessingConstants', 'discard_file', 'get_image_group_from_folder', 'report', 'report_error']
