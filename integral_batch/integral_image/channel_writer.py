import io
from typing import TextIO

import numpy as np

from integral_batch.common.constants import CONSTANTS
from integral_batch.common.errors import MalformedPlane
from .pixel_access import resolve_accessor


class ChannelIntegralWriter:
    """Serializes the integral image of one single-channel plane as a text grid.

    Cell (i, j) of the output holds the sum of |pixel| over every pixel at or
    above row i and at or left of column j. Values within a row are joined by
    `value_separator`, rows by `row_separator`; there is no trailing separator
    of either kind.
    """

    def __init__(
        self,
        decimal_places: int = CONSTANTS.DECIMAL_PLACES,
        value_separator: str = CONSTANTS.VALUE_SEPARATOR,
        row_separator: str = CONSTANTS.ROW_SEPARATOR,
    ):
        self.decimal_places = decimal_places
        self.value_separator = value_separator
        self.row_separator = row_separator
        self._format_value = f"{{:.{decimal_places}f}}".format

    def write(self, plane: np.ndarray, stream: TextIO) -> None:
        """
        Write the integral grid of `plane` to `stream`.

        The scan keeps a single row buffer: for each cell,
        I(i, j) = (prev_row[j] + sum of |x| left of j in row i) + |x(i, j)|,
        which is then stored back into prev_row[j].

        Raises:
            MalformedPlane: the plane has zero rows or columns, or is not 2D.
            UnsupportedEncoding: the pixel type is not supported.
        """
        # Resolved before anything is written so an unsupported plane leaves no output
        accessor = resolve_accessor(plane)
        rows, cols = accessor.rows, accessor.cols
        if rows == 0 or cols == 0:
            raise MalformedPlane((rows, cols))

        prev_row = np.zeros(cols, dtype=np.float64)
        sums_before = np.zeros(cols, dtype=np.float64)

        for row in range(rows):
            magnitudes = np.abs(accessor.row_values(row))

            # Running row sum *before* each column, accumulated left to right
            np.cumsum(magnitudes[:-1], out=sums_before[1:])
            prev_row = (prev_row + sums_before) + magnitudes

            if row:
                stream.write(self.row_separator)
            stream.write(self.value_separator.join(map(self._format_value, prev_row.tolist())))

    def render(self, plane: np.ndarray) -> str:
        """Return the integral grid of `plane` as a string."""
        buffer = io.StringIO()
        self.write(plane, buffer)
        return buffer.getvalue()
