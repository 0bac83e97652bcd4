import os
from typing import List, Optional

import cv2
import numpy as np

from integral_batch.common.errors import (
    ChannelPrintError,
    ComputeError,
    DecodeError,
    MalformedImage,
    OutputOpenError,
    WriteError,
)
from integral_batch.common.fs_utils import discard_file
from .channel_writer import ChannelIntegralWriter
from .config import IntegralConfig

# cv2.imread flag for each supported read mode
READ_MODES = {
    'color': cv2.IMREAD_COLOR,
    'unchanged': cv2.IMREAD_UNCHANGED,
    'grayscale': cv2.IMREAD_GRAYSCALE,
}


def load_image(image_path: str, read_mode: str = 'color') -> np.ndarray:
    """Decode an image file with OpenCV, raising DecodeError if it can't be read."""
    if read_mode not in READ_MODES:
        raise ValueError(f"Unknown read mode '{read_mode}'. Expected one of: {', '.join(READ_MODES)}")

    try:
        image = cv2.imread(os.fspath(image_path), READ_MODES[read_mode])
    except cv2.error as e:
        raise DecodeError(image_path, f"OpenCV failed to decode file ({e})") from e

    if image is None:
        raise DecodeError(image_path)
    return image


def split_channels(image: np.ndarray) -> List[np.ndarray]:
    """Split a decoded image into one 2D plane per channel."""
    if image.ndim == 2:
        return [image]
    return list(cv2.split(image))


def _validate_image(image: np.ndarray, image_path: str) -> None:
    if image.ndim not in (2, 3) or any(dim < 1 for dim in image.shape):
        raise MalformedImage(image_path, image.shape)


class IntegralImageComputer:
    """Computes the integral image of every channel of an image file and saves it as text."""

    def __init__(self, config: Optional[IntegralConfig] = None):
        self.config = config or IntegralConfig()
        self.writer = ChannelIntegralWriter(
            decimal_places=self.config.decimal_places,
            value_separator=self.config.value_separator,
            row_separator=self.config.row_separator,
        )

    def compute(self, input_path: str, output_path: str) -> None:
        """
        Write the integral image of `input_path` to `output_path`.

        Channels are written in index order, separated by one blank line.
        Any failure is raised as a ComputeError naming the input file, with
        the underlying error chained as its cause. A partially written output
        file is removed.
        """
        try:
            self._compute(input_path, output_path)
        except Exception as e:
            raise ComputeError(input_path, e) from e

    def _compute(self, input_path: str, output_path: str) -> None:
        image = load_image(input_path, self.config.read_mode)
        _validate_image(image, input_path)
        channels = split_channels(image)

        try:
            stream = open(output_path, 'w', encoding=self.config.output_encoding, newline='\n')
        except OSError as e:
            raise OutputOpenError(output_path, str(e)) from e

        try:
            with stream:
                self._write_channels(channels, stream)
        except OSError as e:
            discard_file(output_path)
            raise WriteError(output_path, str(e)) from e
        except Exception:
            discard_file(output_path)
            raise

    def _write_channels(self, channels: List[np.ndarray], stream) -> None:
        last_channel = len(channels) - 1
        for channel_index, plane in enumerate(channels):
            try:
                self.writer.write(plane, stream)
            except OSError:
                # Stream faults are reported for the whole file as WriteError
                raise
            except Exception as e:
                raise ChannelPrintError(channel_index, e) from e

            if channel_index != last_channel:
                stream.write(self.config.channel_separator)
