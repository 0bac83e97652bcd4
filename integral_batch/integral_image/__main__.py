#!/usr/bin/env python3
"""
Command line interface for the integral image module.
Usage: python3 -m integral_batch.integral_image [options]
"""

import argparse
import sys

from integral_batch.common.errors import ComputeError
from .computer import READ_MODES
from .config import IntegralConfig
from .run import run_integral


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description='Compute the per-channel integral image of a single image file.',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python3 -m integral_batch.integral_image -i ./image.png
  python3 -m integral_batch.integral_image -i ./image.tiff -o ./image.txt -m unchanged
        """
    )

    parser.add_argument('-i', '--input', required=True,
                        help='Path to the image file.')
    parser.add_argument('-o', '--output', default=None,
                        help='Path of the text file to write. Defaults to <input>.integral')
    parser.add_argument('-m', '--mode', choices=sorted(READ_MODES), default=IntegralConfig.read_mode,
                        help="How to decode the image: 'color' (3 channels, 8 bit), 'unchanged' (native depth and channels) or 'grayscale'.")

    args = parser.parse_args(argv)

    try:
        output_path = run_integral(args.input, args.output, IntegralConfig(read_mode=args.mode))
    except ComputeError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"[INTEGRAL]: Saved integral image to {output_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
