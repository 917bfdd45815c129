"""
High-level facade bundling a patch index, a random generator and the
scrambling/filtering operations.
"""

from __future__ import annotations

import time
from typing import List, Sequence

import numpy as np

from .config import ScramblerConfig
from .ensemble import EnsembleStatistics, ensemble_statistics, plot_ensemble
from .patches import PatchIndex, build_patch_index, cached_patch_index
from .scramble import RandomSource, as_generator, patch_average, patch_fluctuation, scramble


class Scrambler:
    """
    Patch-based scrambler for scalar fields on a fixed grid.

    The index table is built once (and cached per configuration by default)
    and reused for every field passed to ``scramble_scalar``. The only state
    that changes between calls is the random generator.
    """

    def __init__(
        self,
        grid_size: Sequence[int] = (128, 128),
        patch_dim: int = 3,
        boundary: str = "periodic",
        *,
        rng: RandomSource = None,
        cache: bool = True,
        verbose: bool = False,
    ):
        self.verbose = verbose
        start = time.perf_counter()
        if cache:
            self.index = cached_patch_index(grid_size, patch_dim, boundary, stacklevel=2)
        else:
            self.index = build_patch_index(grid_size, patch_dim, boundary, stacklevel=2)
        self.rng = as_generator(rng)
        if verbose:
            elapsed = time.perf_counter() - start
            print(
                f"Patch index ready: grid={self.index.grid_size}, patch={self.index.patch_size}, "
                f"boundary={self.index.boundary} ({elapsed:.3f} s)"
            )

    @classmethod
    def from_config(cls, config: ScramblerConfig, **kwargs) -> "Scrambler":
        kwargs.setdefault("rng", config.seed)
        return cls(config.grid_size, config.patch_dim, config.boundary, **kwargs)

    @classmethod
    def _from_index(cls, index: PatchIndex, rng: np.random.Generator, verbose: bool) -> "Scrambler":
        obj = cls.__new__(cls)
        obj.index = index
        obj.rng = rng
        obj.verbose = verbose
        return obj

    # ------------------------------------------------------------------
    # Derived properties
    # ------------------------------------------------------------------
    @property
    def grid_size(self):
        return self.index.grid_size

    @property
    def patch_dim(self) -> int:
        return self.index.patch_dim

    @property
    def boundary(self) -> str:
        return self.index.boundary

    @property
    def numel_grid(self) -> int:
        return self.index.numel_grid

    @property
    def numel_patch(self) -> int:
        return self.index.numel_patch

    @property
    def avg_filter(self) -> np.ndarray:
        return self.index.avg_filter

    @property
    def table(self) -> np.ndarray:
        return self.index.table

    # ------------------------------------------------------------------
    # Scrambling
    # ------------------------------------------------------------------
    def scramble_scalar(self, field: np.ndarray, n_obs: int, reshape: bool = True) -> np.ndarray:
        psobs = scramble(self.index, field, n_obs, reshape, rng=self.rng)
        if self.verbose:
            print(f"  Generated {psobs.shape[-1]} pseudo-observations on grid {self.index.grid_size}")
        return psobs

    def spawn(self, n: int) -> List["Scrambler"]:
        """
        Independent scramblers on child random streams, sharing this index table.

        Use one per worker when scrambling concurrently.
        """
        return [Scrambler._from_index(self.index, child, self.verbose) for child in self.rng.spawn(n)]

    # ------------------------------------------------------------------
    # Scale separation
    # ------------------------------------------------------------------
    def large_scale(self, field: np.ndarray, reshape: bool = True) -> np.ndarray:
        return patch_average(self.index, field, reshape)

    def small_scale(self, field: np.ndarray, reshape: bool = True) -> np.ndarray:
        return patch_fluctuation(self.index, field, reshape)

    # ------------------------------------------------------------------
    # Diagnostics (pass-through)
    # ------------------------------------------------------------------
    @staticmethod
    def statistics(ensemble: np.ndarray) -> EnsembleStatistics:
        return ensemble_statistics(ensemble)

    @staticmethod
    def plot_ensemble(field: np.ndarray, ensemble: np.ndarray, **kwargs):
        return plot_ensemble(field, ensemble, **kwargs)


__all__ = ["Scrambler"]
