"""
Synthetic scalar fields used as input for scrambling demos and tests.

White noise is shaped in Fourier space with an isotropic power law, on 2-D or
3-D grids.
"""

from __future__ import annotations

from typing import Optional, Sequence

import numpy as np

from .errors import InvalidArgument
from .grid import _is_integer


def _wavenumber_magnitude(shape: Sequence[int]) -> np.ndarray:
    # integer wavenumbers, k=1 is the fundamental of each axis
    axes = [np.fft.fftfreq(n, d=1.0 / n) for n in shape]
    mesh = np.meshgrid(*axes, indexing="ij")
    return np.sqrt(sum(k**2 for k in mesh))


def random_scalar_field(
    grid_size: Sequence[int],
    slope: float = -5.0 / 3.0,
    *,
    seed: Optional[int] = None,
    std: float = 1.0,
    dtype=np.float64,
) -> np.ndarray:
    """
    Zero-mean Gaussian random field with power spectrum ``P(k) ~ k**slope``.

    Parameters
    ----------
    grid_size : sequence[int]
        Shape of the field.
    slope : float
        Spectral slope of the shell-summed power; steeper is smoother.
    seed : int, optional
        RNG seed.
    std : float
        Target standard deviation of the returned field.
    """
    shape = tuple(grid_size)
    if not shape or any(not _is_integer(n) or n < 1 for n in shape):
        raise InvalidArgument(f"grid_size must contain positive integers (got {shape!r})")

    rng = np.random.default_rng(seed)
    xi = rng.normal(size=shape)
    xi_hat = np.fft.fftn(xi)

    k = _wavenumber_magnitude(shape)
    amp = np.zeros_like(k)
    mask = k > 0.0
    # shell area grows like k**(D-1); divide it out of the spectral density
    amp[mask] = k[mask] ** ((slope - (len(shape) - 1)) / 2.0)

    theta = np.fft.ifftn(xi_hat * amp).real
    sigma = theta.std()
    if sigma > 0:
        theta *= std / sigma
    return theta.astype(dtype)


__all__ = ["random_scalar_field"]
