import argparse
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from integral_batch.common.constants import CONSTANTS
from integral_batch.common.errors import ParseError
from integral_batch.common.fs_utils import get_image_group_from_folder
from integral_batch.integral_image.computer import READ_MODES
from integral_batch.integral_image.config import IntegralConfig
from .config import BatchConfig

USAGE_HINT = "Usage: integral-batch -i <path_to_image1> [-i <path_to_image2> ...] [-t <threads number>]"


@dataclass
class BatchData:
    """Validated inputs for one batch run."""
    file_paths: Tuple[str, ...]
    thread_count: int
    integral_config: IntegralConfig = field(default_factory=IntegralConfig)
    batch_config: BatchConfig = field(default_factory=BatchConfig)


class _ArgumentParser(argparse.ArgumentParser):
    """Raises ParseError instead of printing usage and exiting."""

    def error(self, message):
        raise ParseError(f"{message}. {USAGE_HINT}")


class _StoreOnce(argparse.Action):
    def __call__(self, parser, namespace, values, option_string=None):
        if getattr(namespace, self.dest, None) is not None:
            raise argparse.ArgumentError(self, "Thread count should be set no more than one time!")
        setattr(namespace, self.dest, values)


def non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Error while parsing unsigned int: '{value}'") from None
    if number < 0:
        raise argparse.ArgumentTypeError("The number can't be negative.")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog='integral-batch',
        description='Compute per-channel integral images for a batch of image files. '
                    'Each result is written next to its input as <input>.integral',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  integral-batch -i ./a.png -i ./b.jpg
  integral-batch -i ./a.png -i ./b.jpg -t 2
  integral-batch -d ./images -m unchanged --progress
        """
    )

    parser.add_argument('-i', '--input', dest='inputs', action='append', default=[],
                        help='Image file to process. Repeat to add more files.')
    parser.add_argument('-d', '--directory', dest='directories', action='append', default=[],
                        help='Directory whose images (searched recursively) are added after the -i files. May be repeated.')
    parser.add_argument('-t', '--threads', type=non_negative_int, action=_StoreOnce, default=None,
                        help='Number of worker threads. 0 (the default) uses the number of CPUs; 1 runs everything on the main thread.')
    parser.add_argument('-m', '--mode', choices=sorted(READ_MODES), default=CONSTANTS.IMAGE_READ_MODE,
                        help="How to decode images: 'color' (3 channels, 8 bit), 'unchanged' (native depth and channels) or 'grayscale'.")
    parser.add_argument('--progress', action='store_true',
                        help='Show a progress bar per worker partition.')
    return parser


def parse_arguments(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    return build_parser().parse_args(argv)


def _collect_file_paths(args: argparse.Namespace) -> List[str]:
    file_paths = list(args.inputs)
    for directory in args.directories:
        try:
            file_paths.extend(get_image_group_from_folder(directory))
        except (FileNotFoundError, ValueError) as e:
            raise ParseError(str(e)) from e
    return file_paths


def process_arguments(args: argparse.Namespace) -> BatchData:
    file_paths = _collect_file_paths(args)
    if not file_paths:
        raise ParseError(f"You should specify at least one file! {USAGE_HINT}")

    thread_count = CONSTANTS.DEFAULT_THREAD_COUNT if args.threads is None else args.threads

    return BatchData(
        file_paths=tuple(file_paths),
        thread_count=thread_count,
        integral_config=IntegralConfig(read_mode=args.mode),
        batch_config=BatchConfig(show_progress=args.progress),
    )
