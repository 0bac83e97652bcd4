#!/usr/bin/env python3
"""
Command line interface for batch integral image computation.
Usage: python3 -m integral_batch.batch_processing [options]
"""

import sys

from integral_batch.common.errors import BatchRunError, ParseError
from .batch_data import parse_arguments, process_arguments
from .run import run_batch


def main(argv=None) -> int:
    try:
        batch_data = process_arguments(parse_arguments(argv))
    except ParseError as e:
        print(f"Error while parsing command line args: {e}", file=sys.stderr)
        return 1

    try:
        status = run_batch(batch_data)
    except BatchRunError as e:
        print(f"[BATCH]: Error occurred while working: {e}", file=sys.stderr)
        return 1

    return 1 if status.failed else 0


if __name__ == "__main__":
    sys.exit(main())
