import threading

import cv2
import numpy as np
import pytest


@pytest.fixture
def write_image(tmp_path):
    """Factory writing an array to a lossless PNG under tmp_path and returning its path."""
    def _write(name: str, array: np.ndarray) -> str:
        path = tmp_path / name
        assert cv2.imwrite(str(path), array)
        return str(path)
    return _write


@pytest.fixture
def corrupt_image(tmp_path):
    path = tmp_path / 'corrupt.png'
    path.write_bytes(b'definitely not a png')
    return str(path)


class RecordingComputer:
    """Stands in for IntegralImageComputer, recording calls and failing on chosen paths."""

    def __init__(self, failing_paths=(), error=RuntimeError('boom')):
        self.failing_paths = set(failing_paths)
        self.error = error
        self.calls = []
        self._lock = threading.Lock()

    def compute(self, input_path, output_path):
        with self._lock:
            self.calls.append((input_path, output_path, threading.get_ident()))
        if input_path in self.failing_paths:
            raise self.error


@pytest.fixture
def recording_computer():
    return RecordingComputer
