"""
Patch-based scrambling of scalar fields into ensembles of pseudo-observations.
"""

from __future__ import annotations

import warnings
from typing import Union

import numpy as np

from .errors import (
    DebugModeWarning,
    FieldShapeMismatch,
    InvalidArgument,
    InvalidObservationCount,
)
from .grid import _is_integer
from .patches import PatchIndex

RandomSource = Union[np.random.Generator, int, None]


def as_generator(rng: RandomSource) -> np.random.Generator:
    """Return ``rng`` if it is a Generator, else a ``default_rng`` seeded with it."""
    if isinstance(rng, np.random.Generator):
        return rng
    if rng is None or _is_integer(rng):
        return np.random.default_rng(rng)
    raise InvalidArgument(f"rng must be a numpy Generator, an integer seed, or None (got {type(rng).__name__})")


def _flat_field(index: PatchIndex, field: np.ndarray) -> np.ndarray:
    x = np.asarray(field)
    if x.size != index.numel_grid:
        raise FieldShapeMismatch(
            f"field has {x.size} elements but the grid {index.grid_size} has {index.numel_grid}"
        )
    return x.reshape(-1)


def _check_reshape(reshape) -> bool:
    if not isinstance(reshape, (bool, np.bool_)):
        raise InvalidArgument(f"reshape must be a boolean (got {reshape!r})")
    return bool(reshape)


def draw_patch_columns(index: PatchIndex, n_obs: int, rng: RandomSource = None) -> np.ndarray:
    """
    Draw, for every grid point, ``n_obs`` patch columns uniformly with replacement.

    Draws are independent across grid points and across observations.
    """
    gen = as_generator(rng)
    return gen.integers(0, index.numel_patch, size=(index.numel_grid, n_obs))


def scramble(
    index: PatchIndex,
    field: np.ndarray,
    n_obs: int,
    reshape: bool = True,
    *,
    rng: RandomSource = None,
) -> np.ndarray:
    """
    Generate pseudo-observations by resampling every point within its own patch.

    Parameters
    ----------
    index : PatchIndex
        Patch index built for the grid of ``field``.
    field : np.ndarray
        Scalar field with ``index.numel_grid`` elements (grid-shaped or flat,
        read in C order).
    n_obs : int
        Number of pseudo-observations. ``0`` switches to the exhaustive debug
        mode: randomness is disabled and every patch member is returned,
        giving ``index.numel_patch`` observations.
    reshape : bool
        If True (default) the output is ``(*grid_size, n_obs)``, each slice
        along the last axis being one pseudo-observation. Otherwise it is the
        flat ``(numel_grid, n_obs)`` table.
    rng : numpy.random.Generator, int or None
        Random source, or a seed for ``np.random.default_rng``. Pass one
        explicitly for reproducible ensembles.
    """
    if not _is_integer(n_obs):
        raise InvalidArgument(f"n_obs must be an integer (got {n_obs!r})")
    if n_obs < 0:
        raise InvalidObservationCount(f"n_obs must be non-negative (got {n_obs})")
    reshape = _check_reshape(reshape)
    x = _flat_field(index, field)

    if n_obs == 0:
        warnings.warn(
            "scramble() is being used in debug mode (with n_obs=0), randomness disabled.",
            DebugModeWarning,
            stacklevel=2,
        )
        n_obs = index.numel_patch
        idx = index.table
    else:
        columns = draw_patch_columns(index, int(n_obs), rng)
        # idx[j, o] = table[j, columns[j, o]]
        idx = np.take_along_axis(index.table, columns, axis=1)

    psobs = x[idx]
    if reshape:
        psobs = psobs.reshape(index.grid_size + (n_obs,))
    return psobs


def patch_average(index: PatchIndex, field: np.ndarray, reshape: bool = True) -> np.ndarray:
    """
    Mean of every point's patch: the field filtered by ``index.avg_filter``.

    The boundary policy of ``index`` decides how the filter sees points
    outside the grid. The result has the field's grid shape, or is flat when
    ``reshape`` is False.
    """
    reshape = _check_reshape(reshape)
    x = _flat_field(index, field)
    large_scale = x[index.table].mean(axis=1)
    if reshape:
        large_scale = large_scale.reshape(index.grid_size)
    return large_scale


def patch_fluctuation(index: PatchIndex, field: np.ndarray, reshape: bool = True) -> np.ndarray:
    """Small-scale residual ``field - patch_average(field)``."""
    reshape = _check_reshape(reshape)
    x = _flat_field(index, field)
    residual = x - patch_average(index, x, reshape=False)
    if reshape:
        residual = residual.reshape(index.grid_size)
    return residual


__all__ = [
    "as_generator",
    "draw_patch_columns",
    "scramble",
    "patch_average",
    "patch_fluctuation",
]
