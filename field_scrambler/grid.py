"""
Grid addressing utilities shared by the patch indexer and the scrambler.

Grid points are addressed either by a coordinate tuple or by a single flat
index. Flat indices are 0-based and follow NumPy's row-major (C) order, so
``ravel_index`` and ``unravel_index`` are mutual inverses.
"""

from __future__ import annotations

import warnings
from typing import Sequence, Tuple

import numpy as np

from .errors import InvalidArgument, InvalidBoundaryPolicy, SingletonDimensionWarning

# Boundary policy token -> ``np.pad`` mode used to extend the grid.
BOUNDARY_MODES = {
    "periodic": "wrap",
    "replicate": "edge",
    "mirror": "reflect",
}


def _is_integer(value) -> bool:
    return isinstance(value, (int, np.integer)) and not isinstance(value, (bool, np.bool_))


def normalize_boundary(boundary: str) -> str:
    """Return the canonical (lower-case) boundary token or raise."""
    if not isinstance(boundary, str) or boundary.lower() not in BOUNDARY_MODES:
        raise InvalidBoundaryPolicy(
            f"boundary must be 'periodic', 'replicate', or 'mirror' (got {boundary!r})"
        )
    return boundary.lower()


def normalize_grid_size(grid_size: Sequence[int], *, stacklevel: int = 1) -> Tuple[int, ...]:
    """
    Validate axis lengths and strip singleton axes.

    Stripping is not an error: a ``SingletonDimensionWarning`` is emitted
    instead, and the squeezed shape is returned. ``stacklevel=1`` attributes
    the warning to the caller of this function, 2 to its caller, and so on.
    """
    try:
        dims = tuple(grid_size)
    except TypeError:
        raise InvalidArgument(f"grid_size must be a sequence of integers (got {grid_size!r})") from None
    if not dims or any(not _is_integer(n) or n < 1 for n in dims):
        raise InvalidArgument(f"grid_size must contain positive integers (got {dims!r})")
    dims = tuple(int(n) for n in dims)

    squeezed = tuple(n for n in dims if n != 1)
    if squeezed != dims:
        warnings.warn(
            f"singleton dimensions removed in grid_size {dims} -> {squeezed}",
            SingletonDimensionWarning,
            stacklevel=stacklevel + 1,
        )
    return squeezed


def ravel_index(coords, grid_size: Sequence[int]):
    """
    Flat (C-order) index of one or several coordinate tuples.

    ``coords`` is either a length-D sequence of ints or a length-D sequence of
    equally shaped integer arrays.
    """
    return np.ravel_multi_index(tuple(coords), tuple(grid_size))


def unravel_index(flat, grid_size: Sequence[int]) -> Tuple:
    """Coordinate tuple(s) of flat index/indices; inverse of ``ravel_index``."""
    return np.unravel_index(flat, tuple(grid_size))


def resolve_coordinate(coord, length: int, boundary: str):
    """
    Map (possibly out-of-range) coordinates along one axis back into ``[0, length)``.

    periodic wraps modulo ``length``; replicate clamps to the nearest edge;
    mirror reflects about the edge sample without repeating it, so ``-1 -> 1``
    and ``length -> length - 2``.
    """
    boundary = normalize_boundary(boundary)
    c = np.asarray(coord)
    if boundary == "periodic":
        return np.mod(c, length)
    if boundary == "replicate":
        return np.clip(c, 0, length - 1)
    if length == 1:
        return np.zeros_like(c)
    period = 2 * (length - 1)
    m = np.mod(c, period)
    return np.where(m < length, m, period - m)


def patch_offsets(patch_dim: int, ndim: int) -> np.ndarray:
    """
    Local offsets of a hypercubic patch, one row per patch member.

    Rows follow the column order of the patch index table (C order over the
    offsets ``-h..h`` on every axis, last axis fastest); the centre offset
    sits at row ``patch_dim**ndim // 2``.
    """
    half = patch_dim // 2
    axes = [np.arange(-half, half + 1)] * ndim
    mesh = np.meshgrid(*axes, indexing="ij")
    return np.stack([m.ravel() for m in mesh], axis=1)


__all__ = [
    "BOUNDARY_MODES",
    "normalize_boundary",
    "normalize_grid_size",
    "ravel_index",
    "unravel_index",
    "resolve_coordinate",
    "patch_offsets",
]
