"""
Patch index tables: for every grid point, the flat indices of the points in
its centred hypercubic neighbourhood.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import Sequence, Tuple

import numpy as np
from numpy.lib.stride_tricks import sliding_window_view

from .errors import InvalidPatchDimension, UnsupportedDimensionality
from .grid import (
    BOUNDARY_MODES,
    _is_integer,
    normalize_boundary,
    normalize_grid_size,
    ravel_index,
)

SUPPORTED_NDIM = (2, 3)


def _check_patch_dim(patch_dim) -> int:
    if not _is_integer(patch_dim) or patch_dim < 1 or patch_dim % 2 == 0:
        raise InvalidPatchDimension(f"Expecting a positive ODD patch_dim (got {patch_dim!r})")
    return int(patch_dim)


def _check_ndim(grid_size: Tuple[int, ...]) -> None:
    if len(grid_size) not in SUPPORTED_NDIM:
        raise UnsupportedDimensionality(
            f"Only 2d and 3d grids are supported (got grid_size={grid_size})"
        )


def patch_indices(grid_size: Sequence[int], patch_dim: int, boundary: str) -> np.ndarray:
    """
    Build the ``(prod(grid_size), patch_dim**D)`` array of patch member indices.

    The grid of flat indices is padded by ``patch_dim // 2`` on every side
    with the boundary policy, and each row is the C-order flattening of the
    ``patch_dim**D`` window centred on the corresponding grid point. Singleton
    axes should be removed beforehand; they are stripped with a warning
    otherwise.

    Parameters
    ----------
    grid_size : sequence[int]
        ``(M, N)`` or ``(M, N, P)``.
    patch_dim : int
        Odd patch width.
    boundary : str
        ``'periodic'``, ``'replicate'``, or ``'mirror'``.
    """
    boundary = normalize_boundary(boundary)
    patch_dim = _check_patch_dim(patch_dim)
    grid_size = normalize_grid_size(grid_size, stacklevel=2)
    _check_ndim(grid_size)

    ndim = len(grid_size)
    half = patch_dim // 2
    numel_grid = int(np.prod(grid_size))

    idx = np.arange(numel_grid, dtype=np.intp).reshape(grid_size)
    padded = np.pad(idx, half, mode=BOUNDARY_MODES[boundary])
    windows = sliding_window_view(padded, (patch_dim,) * ndim)
    # windows is (*grid_size, *patch_size); copy to get a contiguous table
    table = np.ascontiguousarray(windows.reshape(numel_grid, patch_dim**ndim))
    table.setflags(write=False)
    return table


@dataclass(frozen=True)
class PatchIndex:
    """
    Immutable patch configuration and its pre-computed index table.

    Parameters
    ----------
    grid_size : tuple[int, ...]
        Grid shape; singleton axes are removed (with a warning).
    patch_dim : int
        Odd patch width, identical along every axis.
    boundary : str
        Boundary policy used for neighbours outside the grid.
    """

    grid_size: Tuple[int, ...]
    patch_dim: int = 3
    boundary: str = "periodic"

    def __post_init__(self) -> None:
        boundary = normalize_boundary(self.boundary)
        patch_dim = _check_patch_dim(self.patch_dim)
        # post_init -> generated __init__ -> caller
        grid_size = normalize_grid_size(self.grid_size, stacklevel=3)
        _check_ndim(grid_size)
        object.__setattr__(self, "boundary", boundary)
        object.__setattr__(self, "patch_dim", patch_dim)
        object.__setattr__(self, "grid_size", grid_size)

        ndim = len(grid_size)
        numel_patch = patch_dim**ndim
        object.__setattr__(self, "ndim", ndim)
        object.__setattr__(self, "patch_size", (patch_dim,) * ndim)
        object.__setattr__(self, "half_patch", patch_dim // 2)
        object.__setattr__(self, "numel_grid", int(np.prod(grid_size)))
        object.__setattr__(self, "numel_patch", numel_patch)
        object.__setattr__(self, "center_column", numel_patch // 2)

        avg_filter = np.full(self.patch_size, 1.0 / numel_patch)
        avg_filter.setflags(write=False)
        object.__setattr__(self, "avg_filter", avg_filter)
        object.__setattr__(self, "table", patch_indices(grid_size, patch_dim, boundary))


def build_patch_index(
    grid_size: Sequence[int],
    patch_dim: int = 3,
    boundary: str = "periodic",
    *,
    stacklevel: int = 1,
) -> PatchIndex:
    """
    Build a ``PatchIndex`` for the given grid, patch width and boundary policy.

    ``stacklevel`` selects the frame a singleton-axis warning is attributed
    to (1 is the caller of this function).
    """
    boundary = normalize_boundary(boundary)
    patch_dim = _check_patch_dim(patch_dim)
    grid_size = normalize_grid_size(grid_size, stacklevel=stacklevel + 1)
    return PatchIndex(grid_size=grid_size, patch_dim=patch_dim, boundary=boundary)


@lru_cache(maxsize=16)
def _cached(grid_size: Tuple[int, ...], patch_dim: int, boundary: str) -> PatchIndex:
    return build_patch_index(grid_size, patch_dim, boundary)


def cached_patch_index(
    grid_size: Sequence[int],
    patch_dim: int = 3,
    boundary: str = "periodic",
    *,
    stacklevel: int = 1,
) -> PatchIndex:
    """
    Like ``build_patch_index`` but memoised per ``(grid_size, patch_dim, boundary)``.

    Arguments are validated and singleton axes stripped (with a warning) on
    every call, before the lookup; the cache is keyed on the squeezed shape.
    Tables are read-only, so the same instance can be handed to every caller.
    """
    boundary = normalize_boundary(boundary)
    patch_dim = _check_patch_dim(patch_dim)
    grid_size = normalize_grid_size(grid_size, stacklevel=stacklevel + 1)
    _check_ndim(grid_size)
    return _cached(grid_size, patch_dim, boundary)


def clear_patch_index_cache() -> None:
    _cached.cache_clear()


def patch_members(index: PatchIndex, coords: Sequence[int]) -> np.ndarray:
    """Flat indices of the patch centred on the grid point at ``coords``."""
    return index.table[ravel_index(coords, index.grid_size)]


__all__ = [
    "SUPPORTED_NDIM",
    "PatchIndex",
    "patch_indices",
    "build_patch_index",
    "cached_patch_index",
    "clear_patch_index_cache",
    "patch_members",
]
