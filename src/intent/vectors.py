"""Vector utilities: tensor shape reduction, unit normalization, cosine similarity.

Embedding backends report their raw output as one of a closed set of tagged variants
(`Flat`, `Nested`, `RowMajor2D`). Unknown shapes are a hard failure: guessing a vector length
(e.g. zero-filling) would produce false "semantic" matches.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, TypeAlias

import numpy as np
import numpy.typing as npt

from src.intent.errors import DimensionMismatch, MalformedEmbeddingOutput

Vector: TypeAlias = npt.NDArray[np.float64]

_EPSILON = 1e-10


@dataclass(frozen=True)
class Flat:
    """An already pooled, flat numeric sequence."""

    values: Sequence[float] | npt.ArrayLike


@dataclass(frozen=True)
class Nested:
    """An arbitrarily nested numeric structure (e.g. `[[[...]]]` with leading batch axes)."""

    values: Any


@dataclass(frozen=True)
class RowMajor2D:
    """A row-major `[rows, cols]` buffer: one `cols`-length vector per input token."""

    data: Sequence[float] | npt.ArrayLike
    rows: int
    cols: int


RawTensor: TypeAlias = Flat | Nested | RowMajor2D


def empty_vector() -> Vector:
    """Return the empty vector used for degenerate (empty) input."""

    return np.zeros(0, dtype=np.float64)


def _as_float_array(values: Any) -> Vector:
    try:
        return np.asarray(values, dtype=np.float64)
    except (TypeError, ValueError) as exc:
        # Ragged or non-numeric structures.
        raise MalformedEmbeddingOutput(f"not a rectangular numeric structure: {exc}") from exc


def _mean_pool(matrix: Vector) -> Vector:
    if matrix.shape[0] == 0 or matrix.shape[1] == 0:
        raise MalformedEmbeddingOutput(f"cannot mean-pool an empty matrix of shape {matrix.shape}")
    return matrix.mean(axis=0)


def flatten(raw: RawTensor) -> Vector:
    """Reduce a raw backend tensor to a single 1-D vector.

    - `Flat` passes through unchanged.
    - `RowMajor2D` is mean-pooled across the sequence (row) axis.
    - `Nested` is converted as a whole; leading singleton axes are squeezed, a 1-D result passes
      through and a 2-D result is mean-pooled.

    Raises:
        MalformedEmbeddingOutput: If the shape is not one of the above.
    """

    if isinstance(raw, Flat):
        vector = _as_float_array(raw.values)
        if vector.ndim != 1:
            raise MalformedEmbeddingOutput(f"Flat tensor must be 1-D, got shape {vector.shape}")
        return vector

    if isinstance(raw, RowMajor2D):
        if raw.rows <= 0 or raw.cols <= 0:
            raise MalformedEmbeddingOutput(f"invalid dimensions [{raw.rows}, {raw.cols}]")
        buffer = _as_float_array(raw.data).reshape(-1)
        if buffer.size != raw.rows * raw.cols:
            raise MalformedEmbeddingOutput(
                f"buffer of {buffer.size} values does not match dimensions [{raw.rows}, {raw.cols}]"
            )
        return _mean_pool(buffer.reshape(raw.rows, raw.cols))

    if isinstance(raw, Nested):
        array = _as_float_array(raw.values)
        while array.ndim > 2 and array.shape[0] == 1:
            array = array[0]
        if array.ndim == 1:
            return array
        if array.ndim == 2:
            return _mean_pool(array)
        raise MalformedEmbeddingOutput(f"unsupported nested shape {array.shape}")

    raise MalformedEmbeddingOutput(f"unknown tensor variant: {type(raw).__name__}")


def normalize(vector: Vector) -> Vector:
    """Scale a vector to unit Euclidean norm (zero/empty vectors are returned unchanged)."""

    norm = float(np.linalg.norm(vector))
    if norm == 0.0:
        return vector
    return vector / norm


def cosine_similarity(a: Vector, b: Vector) -> float:
    """Cosine similarity of two vectors of the same length.

    Returns `0.0` if either vector is empty, and never NaN for zero vectors.

    Raises:
        DimensionMismatch: If the vectors have different lengths.
    """

    if len(a) != len(b):
        raise DimensionMismatch(f"cannot compare vectors of length {len(a)} and {len(b)}")
    if len(a) == 0:
        return 0.0

    denominator = float(np.linalg.norm(a)) * float(np.linalg.norm(b))
    similarity = float(np.dot(a, b)) / max(denominator, _EPSILON)
    # Rounding can push identical vectors slightly past 1.
    return min(1.0, max(-1.0, similarity))
