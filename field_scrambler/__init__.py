"""
Patch-based stochastic resampling of scalar fields into ensembles of
pseudo-observations.
"""

from .api import Scrambler
from .config import ScramblerConfig
from .errors import (
    DebugModeWarning,
    FieldShapeMismatch,
    InvalidArgument,
    InvalidBoundaryPolicy,
    InvalidObservationCount,
    InvalidPatchDimension,
    ScramblerError,
    ScramblerWarning,
    SingletonDimensionWarning,
    UnsupportedDimensionality,
)
from .grid import normalize_grid_size, patch_offsets, ravel_index, resolve_coordinate, unravel_index
from .patches import (
    PatchIndex,
    build_patch_index,
    cached_patch_index,
    clear_patch_index_cache,
    patch_indices,
    patch_members,
)
from .scramble import draw_patch_columns, patch_average, patch_fluctuation, scramble
from .ensemble import EnsembleStatistics, ensemble_statistics, plot_ensemble
from .fields import random_scalar_field

__all__ = [
    "Scrambler",
    "ScramblerConfig",
    "PatchIndex",
    "build_patch_index",
    "cached_patch_index",
    "clear_patch_index_cache",
    "patch_indices",
    "patch_members",
    "scramble",
    "draw_patch_columns",
    "patch_average",
    "patch_fluctuation",
    "normalize_grid_size",
    "ravel_index",
    "unravel_index",
    "resolve_coordinate",
    "patch_offsets",
    "EnsembleStatistics",
    "ensemble_statistics",
    "plot_ensemble",
    "random_scalar_field",
    "ScramblerError",
    "InvalidPatchDimension",
    "InvalidBoundaryPolicy",
    "UnsupportedDimensionality",
    "FieldShapeMismatch",
    "InvalidObservationCount",
    "InvalidArgument",
    "ScramblerWarning",
    "SingletonDimensionWarning",
    "DebugModeWarning",
]
