"""Output sinks that encoding policies write into."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Union

import numpy as np
from scipy import sparse

from string_encoding.errors import OutputShapeError


class OutputShape(str, Enum):
    """Representations an encode call can produce."""

    DENSE = "dense"
    SPARSE = "sparse"
    RAGGED = "ragged"

    @property
    def fixed_width(self) -> bool:
        return self is not OutputShape.RAGGED


class OutputSink(ABC):
    """Container that receives one row per encoded string.

    Fixed-width sinks are written cell by cell with ``set``; ragged
    sinks receive whole rows through ``extend``.
    """

    shape: OutputShape

    @abstractmethod
    def allocate(self, num_rows: int, num_cols: int) -> None:
        """Prepare storage for ``num_rows`` rows."""
        pass

    def set(self, row: int, col: int, value: float) -> None:
        raise OutputShapeError(f"{self.shape.value} output does not support set()")

    def extend(self, row: int, values: list) -> None:
        raise OutputShapeError(f"{self.shape.value} output does not support extend()")

    @abstractmethod
    def result(self) -> Any:
        """Return the finished container."""
        pass


class DenseOutput(OutputSink):
    """Rows x columns numpy array; untouched cells stay 0."""

    shape = OutputShape.DENSE

    def __init__(self, dtype: Any = np.float64) -> None:
        self.dtype = dtype
        self.matrix = np.zeros((0, 0), dtype=dtype)

    def allocate(self, num_rows: int, num_cols: int) -> None:
        self.matrix = np.zeros((num_rows, num_cols), dtype=self.dtype)

    def set(self, row: int, col: int, value: float) -> None:
        self.matrix[row, col] = value

    def result(self) -> np.ndarray:
        return self.matrix


class SparseOutput(OutputSink):
    """Rows x columns scipy sparse matrix; only written cells are stored."""

    shape = OutputShape.SPARSE

    def __init__(self, dtype: Any = np.float64) -> None:
        self.dtype = dtype
        self.matrix = sparse.lil_matrix((0, 0), dtype=dtype)

    def allocate(self, num_rows: int, num_cols: int) -> None:
        self.matrix = sparse.lil_matrix((num_rows, num_cols), dtype=self.dtype)

    def set(self, row: int, col: int, value: float) -> None:
        self.matrix[row, col] = value

    def result(self) -> sparse.csr_matrix:
        return self.matrix.tocsr()


class RaggedOutput(OutputSink):
    """One variable-length list per input string."""

    shape = OutputShape.RAGGED

    def __init__(self) -> None:
        self.rows: list[list] = []

    def allocate(self, num_rows: int, num_cols: int) -> None:
        self.rows = [[] for _ in range(num_rows)]

    def extend(self, row: int, values: list) -> None:
        self.rows[row].extend(values)

    def result(self) -> list[list]:
        return self.rows


_SINKS = {
    OutputShape.DENSE: DenseOutput,
    OutputShape.SPARSE: SparseOutput,
    OutputShape.RAGGED: RaggedOutput,
}


def make_output(output: Union[OutputShape, str, OutputSink]) -> OutputSink:
    """Return a sink for a shape name, a shape, or an existing sink."""
    if isinstance(output, OutputSink):
        return output
    try:
        shape = OutputShape(output)
    except ValueError:
        raise OutputShapeError(
            f"Unknown output shape: {output!r}. "
            f"Available: {[s.value for s in OutputShape]}"
        ) from None
    return _SINKS[shape]()
