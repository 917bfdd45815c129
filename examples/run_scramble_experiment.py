#!/usr/bin/env python3
"""
Turn one scalar field into an ensemble of patch-scrambled pseudo-observations.

The field is either loaded from disk (``.npy`` or ``.npz``) or drawn as a
power-law Gaussian random field. The ensemble, its point-wise statistics and
the run configuration are written to an output directory, together with an
optional quick-look figure.

Example quick test:
    python examples/run_scramble_experiment.py --grid 128 128 --n-obs 32 --seed 1

Example with an existing buoyancy snapshot:
    python examples/run_scramble_experiment.py --field-file buoy.npz --field-key b \\
        --patch-dim 5 --boundary mirror --n-obs 64
"""

from __future__ import annotations

import argparse
import json
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

REPO_ROOT = Path(__file__).resolve().parent.parent
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

import numpy as np

import matplotlib

matplotlib.use("Agg")

from field_scrambler import (  # noqa: E402
    Scrambler,
    ScramblerConfig,
    ensemble_statistics,
    plot_ensemble,
    random_scalar_field,
)


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Patch-based scrambling of a scalar field into an ensemble."
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Optional JSON file with ScramblerConfig options (command-line flags override it).",
    )
    parser.add_argument("--grid", type=int, nargs="+", help="Grid shape for the synthetic field (2 or 3 ints).")
    parser.add_argument("--patch-dim", type=int, help="Odd patch width (default: 3).")
    parser.add_argument(
        "--boundary",
        choices=("periodic", "replicate", "mirror"),
        help="Boundary policy for patches crossing the grid edge (default: periodic).",
    )
    parser.add_argument("--n-obs", type=int, help="Pseudo-observations to draw; 0 enumerates every patch member.")
    parser.add_argument("--seed", type=int, help="RNG seed for the scrambler.")
    parser.add_argument("--flat", action="store_true", help="Store the flat (numel_grid, n_obs) table.")
    parser.add_argument("--field-file", type=Path, help="Field to scramble (.npy, or .npz with --field-key).")
    parser.add_argument("--field-key", type=str, default="theta", help="Array name inside a .npz field file.")
    parser.add_argument("--field-seed", type=int, default=0, help="Seed for the synthetic field.")
    parser.add_argument("--field-slope", type=float, default=-5.0 / 3.0, help="Spectral slope of the synthetic field.")
    parser.add_argument(
        "--output-root",
        type=Path,
        default=Path("examples") / "scramble_runs",
        help="Root directory for outputs.",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        help="Explicit output directory (otherwise a timestamped folder is created).",
    )
    parser.add_argument("--no-plot", action="store_true", help="Skip the quick-look figure.")
    parser.add_argument("--quiet", action="store_true", help="Suppress progress output.")
    return parser.parse_args(argv)


def ensure_dir(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)


def build_config(args: argparse.Namespace) -> ScramblerConfig:
    options = {}
    if args.config:
        options.update(json.loads(args.config.read_text()))
    overrides = {
        "grid_size": args.grid,
        "patch_dim": args.patch_dim,
        "boundary": args.boundary,
        "n_obs": args.n_obs,
        "seed": args.seed,
    }
    options.update({k: v for k, v in overrides.items() if v is not None})
    if args.flat:
        options["reshape"] = False
    return ScramblerConfig.from_mapping(options)


def load_field(path: Path, key: str) -> np.ndarray:
    if not path.exists():
        raise FileNotFoundError(f"Provided field file does not exist: {path}")
    if path.suffix == ".npz":
        data = np.load(path)
        if key not in data:
            raise ValueError(f"Field npz at {path} has no array named '{key}'.")
        return data[key]
    return np.load(path)


def build_output_dir(args: argparse.Namespace, config: ScramblerConfig) -> Path:
    if args.output_dir:
        return args.output_dir
    timestamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
    grid = "x".join(str(n) for n in config.grid_size)
    name = f"G{grid}_P{config.patch_dim}_{config.boundary}_{timestamp}"
    return args.output_root / name


def run(args: argparse.Namespace) -> Path:
    config = build_config(args)
    verbose = not args.quiet

    if args.field_file:
        field = load_field(args.field_file, args.field_key)
        config.grid_size = tuple(int(n) for n in field.shape)
    else:
        field = random_scalar_field(config.grid_size, args.field_slope, seed=args.field_seed)

    scrambler = Scrambler.from_config(config, verbose=verbose)
    ensemble = scrambler.scramble_scalar(field, config.n_obs, config.reshape)
    stats = ensemble_statistics(ensemble)

    out_dir = build_output_dir(args, config)
    ensure_dir(out_dir)
    (out_dir / "config.json").write_text(json.dumps(config.to_dict(), indent=2, sort_keys=True))
    np.savez_compressed(
        out_dir / "ensemble.npz",
        field=field,
        ensemble=ensemble,
        mean=stats.mean,
        std=stats.std,
    )

    if not args.no_plot and config.reshape:
        squeezed = field.reshape(scrambler.grid_size)
        plot_ensemble(
            squeezed,
            ensemble,
            fname=str(out_dir / "ensemble.png"),
            title=f"patch={config.patch_dim}, boundary={scrambler.boundary}",
        )

    if verbose:
        print(f"\nRun complete in: {out_dir}")
        print(f"  grid:    {scrambler.grid_size}")
        print(f"  members: {stats.n_obs}")
        print(f"  spread:  mean std={float(stats.std.mean()):.3e}, max std={float(stats.std.max()):.3e}")
    return out_dir


def main(argv: Optional[list[str]] = None) -> int:
    args = parse_args(argv)
    run(args)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
