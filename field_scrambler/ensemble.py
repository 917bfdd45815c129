"""
Summary statistics and quick-look plots for ensembles of pseudo-observations.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np
import matplotlib.pyplot as plt

from .errors import InvalidArgument


@dataclass
class EnsembleStatistics:
    """Point-wise statistics over the observation (last) axis."""

    mean: np.ndarray
    std: np.ndarray
    min: np.ndarray
    max: np.ndarray
    n_obs: int


def ensemble_statistics(ensemble: np.ndarray) -> EnsembleStatistics:
    """
    Reduce an ensemble of shape ``(..., n_obs)`` along its observation axis.

    Works for both reshaped ``(*grid_size, n_obs)`` and flat
    ``(numel_grid, n_obs)`` ensembles. The spread is the population standard
    deviation (``ddof=0``).
    """
    ens = np.asarray(ensemble)
    if ens.ndim < 2 or ens.shape[-1] == 0:
        raise InvalidArgument("ensemble must have shape (..., n_obs) with n_obs >= 1")
    return EnsembleStatistics(
        mean=ens.mean(axis=-1),
        std=ens.std(axis=-1),
        min=ens.min(axis=-1),
        max=ens.max(axis=-1),
        n_obs=int(ens.shape[-1]),
    )


def _as_image(arr: np.ndarray, slice_index: Optional[int]) -> np.ndarray:
    if arr.ndim == 2:
        return arr
    if arr.ndim == 3:
        k = arr.shape[2] // 2 if slice_index is None else slice_index
        return arr[:, :, k]
    raise InvalidArgument("only 2d and 3d fields can be plotted")


def plot_ensemble(
    field: np.ndarray,
    ensemble: np.ndarray,
    *,
    members: Sequence[int] | int = 3,
    slice_index: Optional[int] = None,
    cmap: str = "RdBu_r",
    fname: str | None = None,
    title: str | None = None,
) -> plt.Figure:
    """
    Show the reference field next to a few pseudo-observations and the spread.

    Parameters
    ----------
    field : np.ndarray
        Reference field, shaped like the grid.
    ensemble : np.ndarray
        Reshaped ensemble ``(*grid_size, n_obs)``.
    members : int or sequence[int]
        Number of leading members to show, or explicit member indices.
    slice_index : int, optional
        For 3-D grids, the index along the last spatial axis to display
        (default: middle slice).
    fname : str, optional
        Save path for the figure; when omitted the figure is shown.
    """
    ref = np.asarray(field)
    ens = np.asarray(ensemble)
    if ens.shape[:-1] != ref.shape:
        raise InvalidArgument(
            f"ensemble shape {ens.shape} does not match field shape {ref.shape} + (n_obs,)"
        )

    if isinstance(members, (int, np.integer)):
        member_ids = list(range(min(int(members), ens.shape[-1])))
    else:
        member_ids = [int(m) for m in members]
        out_of_range = [m for m in member_ids if not 0 <= m < ens.shape[-1]]
        if out_of_range:
            raise InvalidArgument(
                f"member indices {out_of_range} out of range for an ensemble of {ens.shape[-1]} members"
            )

    stats = ensemble_statistics(ens)
    vmax = float(np.max(np.abs(ref))) or 1.0

    ncols = len(member_ids) + 2
    fig, axes = plt.subplots(1, ncols, figsize=(3.0 * ncols, 3.2), dpi=140, squeeze=False)
    axes = axes[0]

    axes[0].imshow(_as_image(ref, slice_index), origin="lower", cmap=cmap, vmin=-vmax, vmax=vmax)
    axes[0].set_title("reference")
    for ax, m in zip(axes[1:-1], member_ids):
        ax.imshow(_as_image(ens[..., m], slice_index), origin="lower", cmap=cmap, vmin=-vmax, vmax=vmax)
        ax.set_title(f"member {m}")
    im = axes[-1].imshow(_as_image(stats.std, slice_index), origin="lower", cmap="viridis")
    axes[-1].set_title("ensemble std")
    fig.colorbar(im, ax=axes[-1], fraction=0.046, pad=0.04)

    for ax in axes:
        ax.set_xticks([])
        ax.set_yticks([])
    if title:
        fig.suptitle(title)

    fig.tight_layout()
    if fname:
        fig.savefig(fname, bbox_inches="tight")
        plt.close(fig)
    else:
        plt.show()
    return fig


__all__ = ["EnsembleStatistics", "ensemble_statistics", "plot_ensemble"]
