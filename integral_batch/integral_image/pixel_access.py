"""
Encoding-independent access to the cells of a single-channel plane.

The encoding of a plane is resolved once, up front; the returned accessor
then reads every cell as a float64 magnitude without any further per-pixel
dispatch.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict

import numpy as np

from integral_batch.common.errors import MalformedPlane, UnsupportedEncoding


class PixelEncoding(Enum):
    """The closed set of pixel storage types an integral image can be built from."""
    UINT8 = 'uint8'
    INT8 = 'int8'
    UINT16 = 'uint16'
    INT16 = 'int16'
    INT32 = 'int32'
    FLOAT32 = 'float32'
    FLOAT64 = 'float64'

    @property
    def dtype(self) -> np.dtype:
        return np.dtype(self.value)

    @classmethod
    def from_dtype(cls, dtype) -> 'PixelEncoding':
        dtype = np.dtype(dtype)
        for encoding in cls:
            if encoding.dtype == dtype:
                return encoding
        raise UnsupportedEncoding(dtype.name)


def _widen(row: np.ndarray) -> np.ndarray:
    # Every integer type and float32 converts to float64 exactly
    return row.astype(np.float64)


def _as_float64(row: np.ndarray) -> np.ndarray:
    return row


_ROW_READERS: Dict[PixelEncoding, Callable[[np.ndarray], np.ndarray]] = {
    PixelEncoding.UINT8: _widen,
    PixelEncoding.INT8: _widen,
    PixelEncoding.UINT16: _widen,
    PixelEncoding.INT16: _widen,
    PixelEncoding.INT32: _widen,
    PixelEncoding.FLOAT32: _widen,
    PixelEncoding.FLOAT64: _as_float64,
}


@dataclass(frozen=True)
class PixelAccessor:
    """Reads cells of one plane through the reader chosen for its encoding."""
    plane: np.ndarray
    encoding: PixelEncoding
    read_row: Callable[[np.ndarray], np.ndarray]

    @property
    def rows(self) -> int:
        return self.plane.shape[0]

    @property
    def cols(self) -> int:
        return self.plane.shape[1]

    def row_values(self, row: int) -> np.ndarray:
        return self.read_row(self.plane[row])


def resolve_accessor(plane: np.ndarray) -> PixelAccessor:
    """
    Pick the reader for a plane's encoding.

    Raises:
        MalformedPlane: the plane is not a 2D grid.
        UnsupportedEncoding: the plane's dtype is outside PixelEncoding.
    """
    plane = np.asarray(plane)
    if plane.ndim != 2:
        raise MalformedPlane(plane.shape)

    encoding = PixelEncoding.from_dtype(plane.dtype)
    return PixelAccessor(plane=plane, encoding=encoding, read_row=_ROW_READERS[encoding])
