"""
Configuration for building patch indices and scrambling fields.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, Mapping, Optional, Tuple

from .errors import InvalidArgument
from .grid import _is_integer


@dataclass
class ScramblerConfig:
    """
    Recognised options for a scrambling run.

    Parameters
    ----------
    grid_size : tuple[int, ...]
        Grid shape; singleton axes are stripped (with a warning) when the
        patch index is built.
    patch_dim : int
        Odd patch width.
    boundary : str
        ``'periodic'`` (default), ``'replicate'``, or ``'mirror'``.
    n_obs : int
        Pseudo-observations per scramble; ``0`` is the exhaustive debug mode.
    reshape : bool
        Return ``(*grid_size, n_obs)`` ensembles instead of flat tables.
    seed : int, optional
        Seed for the random generator; ``None`` draws fresh entropy.
    """

    grid_size: Tuple[int, ...] = (128, 128)
    patch_dim: int = 3
    boundary: str = "periodic"
    n_obs: int = 16
    reshape: bool = True
    seed: Optional[int] = None

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any]) -> "ScramblerConfig":
        """
        Build a config from a plain mapping such as parsed JSON.

        Unknown keys and wrongly typed values raise ``InvalidArgument``; value
        ranges (odd patch width, known boundary token, ...) are checked when
        the patch index is built.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(options) - known)
        if unknown:
            raise InvalidArgument(f"unknown configuration option(s): {', '.join(unknown)}")

        values = dict(options)
        if "grid_size" in values:
            grid = values["grid_size"]
            if isinstance(grid, (str, bytes)) or not hasattr(grid, "__iter__"):
                raise InvalidArgument(f"grid_size must be a sequence of integers (got {grid!r})")
            grid = tuple(grid)
            if not all(_is_integer(n) for n in grid):
                raise InvalidArgument(f"grid_size must be a sequence of integers (got {grid!r})")
            values["grid_size"] = tuple(int(n) for n in grid)
        for name in ("patch_dim", "n_obs"):
            if name in values and not _is_integer(values[name]):
                raise InvalidArgument(f"{name} must be an integer (got {values[name]!r})")
        if "boundary" in values and not isinstance(values["boundary"], str):
            raise InvalidArgument(f"boundary must be a string (got {values['boundary']!r})")
        if "reshape" in values and not isinstance(values["reshape"], bool):
            raise InvalidArgument(f"reshape must be a boolean (got {values['reshape']!r})")
        if "seed" in values and values["seed"] is not None and not _is_integer(values["seed"]):
            raise InvalidArgument(f"seed must be an integer or null (got {values['seed']!r})")
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-serialisable view of the config."""
        out = asdict(self)
        out["grid_size"] = list(self.grid_size)
        return out


__all__ = ["ScramblerConfig"]
