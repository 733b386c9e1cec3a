"""Shared array helpers used across sdfmesh.

This module provides:

* **Type aliases**: :data:`_F`, :data:`_I`
* **Vector constructors**: :func:`vec2`
* **Math helpers**: :func:`length`, :func:`dot`, :func:`normalize`

Not meant to be imported directly by end users.
"""

from __future__ import annotations

import numpy as np
import numpy.typing as npt

# ---------------------------------------------------------------------------
# Type aliases
# ---------------------------------------------------------------------------
_F = npt.NDArray[np.floating]
_I = npt.NDArray[np.integer]

__all__ = [
    "_F", "_I",
    "vec2",
    "length", "dot", "normalize",
]


# ===========================================================================
# Vector constructors
# ===========================================================================

def vec2(x: _F, y: _F) -> _F:
    """Stack *x* and *y* into a ``(..., 2)`` array."""
    x, y = np.broadcast_arrays(x, y)
    return np.stack([x, y], axis=-1)


# ===========================================================================
# Math helpers
# ===========================================================================

def length(v: _F) -> _F:
    """Euclidean length along the last axis."""
    return np.linalg.norm(v, axis=-1)


def dot(a: _F, b: _F) -> _F:
    """Dot product along the last axis."""
    return np.sum(a * b, axis=-1)


def normalize(v: _F) -> _F:
    """Scale each row of *v* to unit length; zero rows stay zero."""
    n = np.linalg.norm(v, axis=-1, keepdims=True)
    return v / np.where(n > 0, n, 1.0)
