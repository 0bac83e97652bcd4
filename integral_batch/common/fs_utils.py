"""
Filesystem utilities shared across modules.
"""

import os
from typing import Callable, List, Optional

from imutils import paths

from .reporting import report_error


def get_image_group_from_folder(image_folder: str, sort_key: Optional[Callable] = None) -> List[str]:
    """Get list of image paths from a folder with optional custom sorting."""
    if not os.path.isdir(image_folder):
        raise FileNotFoundError(f"Image folder does not exist: {image_folder}")

    image_group = list(paths.list_images(image_folder))
    if not image_group:
        raise ValueError(f"No images found in folder: {image_folder}")

    return sorted(image_group, key=sort_key)


def discard_file(path: str) -> None:
    """Best-effort removal of a partially written output file."""
    try:
        os.remove(path)
    except FileNotFoundError:
        pass
    except OSError as e:
        report_error(f"Couldn't remove partial output file {path}: {e}")
