"""Axis-aligned integer boxes over the sampling lattice."""

from __future__ import annotations

from typing import Sequence, Union

import numpy as np

from ._common import _I

_PointLike = Union[Sequence[int], _I]


def _point(p: _PointLike) -> _I:
    a = np.array(p, dtype=np.int64)
    if a.ndim != 1:
        raise ValueError(f"expected a 1-D lattice point, got shape {a.shape}")
    return a


class Extent:
    """Integer box given by its ``minimum`` corner and ``shape``.

    Works in any dimension; the library uses 2 (height maps) and 3
    (volumes).  Extents are immutable: every operation returns a new one.

    Examples
    --------
    >>> e = Extent.from_min_and_shape((-50, -50, -50), (100, 100, 100))
    >>> e.padded(1).shape.tolist()
    [102, 102, 102]
    """

    __slots__ = ("_minimum", "_shape")

    def __init__(self, minimum: _PointLike, shape: _PointLike) -> None:
        m = _point(minimum)
        s = _point(shape)
        if m.shape != s.shape:
            raise ValueError(f"minimum {m.tolist()} and shape {s.tolist()} differ in dimension")
        # An empty box keeps its minimum but never a negative shape.
        s = np.maximum(s, 0)
        m.setflags(write=False)
        s.setflags(write=False)
        self._minimum = m
        self._shape = s

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------

    @classmethod
    def from_min_and_shape(cls, minimum: _PointLike, shape: _PointLike) -> Extent:
        return cls(minimum, shape)

    @classmethod
    def from_min_and_max(cls, minimum: _PointLike, maximum: _PointLike) -> Extent:
        """Box covering ``minimum..=maximum`` (inclusive max corner)."""
        m = _point(minimum)
        return cls(m, _point(maximum) - m + 1)

    @classmethod
    def from_min_and_lub(cls, minimum: _PointLike, lub: _PointLike) -> Extent:
        """Box covering ``minimum..lub`` (exclusive upper bound)."""
        m = _point(minimum)
        return cls(m, _point(lub) - m)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def minimum(self) -> _I:
        return self._minimum

    @property
    def shape(self) -> _I:
        return self._shape

    @property
    def dim(self) -> int:
        return int(self._minimum.shape[0])

    @property
    def least_upper_bound(self) -> _I:
        """Exclusive max corner: ``minimum + shape``."""
        return self._minimum + self._shape

    @property
    def max(self) -> _I:
        """Inclusive max corner: ``minimum + shape - 1``."""
        return self.least_upper_bound - 1

    @property
    def volume(self) -> int:
        return int(np.prod(self._shape))

    @property
    def is_empty(self) -> bool:
        return self.volume == 0

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def padded(self, n: int) -> Extent:
        """Grow every face by *n* cells (negative *n* shrinks)."""
        return Extent(self._minimum - n, self._shape + 2 * n)

    def add_to_shape(self, delta: Union[int, _PointLike]) -> Extent:
        """Grow the max corner by *delta*, keeping the minimum fixed."""
        return Extent(self._minimum, self._shape + np.asarray(delta, dtype=np.int64))

    def intersection(self, other: Extent) -> Extent:
        """Clip to *other*.  Never larger than either operand."""
        self._check_dim(other)
        lo = np.maximum(self._minimum, other._minimum)
        hi = np.minimum(self.least_upper_bound, other.least_upper_bound)
        return Extent(lo, hi - lo)

    def contains(self, p: _PointLike) -> bool:
        q = _point(p)
        return bool(np.all(q >= self._minimum) and np.all(q < self.least_upper_bound))

    def contains_extent(self, other: Extent) -> bool:
        self._check_dim(other)
        if other.is_empty:
            return True
        return bool(
            np.all(other._minimum >= self._minimum)
            and np.all(other.least_upper_bound <= self.least_upper_bound)
        )

    def points(self) -> _I:
        """Every lattice point of the box as an ``(N, dim)`` array.

        Ordered with the *last* axis varying slowest, so the result reshapes
        to the z-first layout ``shape[::-1] + (dim,)`` used by
        :class:`~sdfmesh.array.LatticeArray`.
        """
        axes = [
            np.arange(lo, lo + n, dtype=np.int64)
            for lo, n in zip(self._minimum[::-1], self._shape[::-1])
        ]
        grids = np.meshgrid(*axes, indexing="ij")
        return np.stack(grids[::-1], axis=-1).reshape(-1, self.dim)

    # ------------------------------------------------------------------
    # Dunder helpers
    # ------------------------------------------------------------------

    def _check_dim(self, other: Extent) -> None:
        if other.dim != self.dim:
            raise ValueError(f"cannot combine {self.dim}-D and {other.dim}-D extents")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Extent):
            return NotImplemented
        return (
            self.dim == other.dim
            and np.array_equal(self._minimum, other._minimum)
            and np.array_equal(self._shape, other._shape)
        )

    def __hash__(self) -> int:
        return hash((tuple(self._minimum.tolist()), tuple(self._shape.tolist())))

    def __repr__(self) -> str:
        return f"Extent(minimum={self._minimum.tolist()}, shape={self._shape.tolist()})"
