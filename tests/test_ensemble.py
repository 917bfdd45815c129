"""Tests for ensemble statistics, plotting and synthetic fields."""

import numpy as np
import pytest

from field_scrambler import (
    InvalidArgument,
    build_patch_index,
    ensemble_statistics,
    plot_ensemble,
    random_scalar_field,
    scramble,
)


class TestEnsembleStatistics:
    def test_known_values(self):
        ens = np.array([[1.0, 3.0], [2.0, 2.0]])
        stats = ensemble_statistics(ens)
        np.testing.assert_allclose(stats.mean, [2.0, 2.0])
        np.testing.assert_allclose(stats.std, [1.0, 0.0])
        np.testing.assert_allclose(stats.min, [1.0, 2.0])
        np.testing.assert_allclose(stats.max, [3.0, 2.0])
        assert stats.n_obs == 2

    def test_reshaped_ensemble_keeps_grid_shape(self):
        index = build_patch_index((5, 4))
        ens = scramble(index, np.arange(20.0).reshape(5, 4), 6, rng=0)
        assert ensemble_statistics(ens).mean.shape == (5, 4)

    @pytest.mark.parametrize("bad", [np.zeros(4), np.zeros((4, 0))])
    def test_invalid_shapes(self, bad):
        with pytest.raises(InvalidArgument):
            ensemble_statistics(bad)


class TestPlotEnsemble:
    def test_writes_png_2d(self, tmp_path):
        field = random_scalar_field((16, 16), seed=0)
        ens = scramble(build_patch_index((16, 16)), field, 4, rng=0)
        out = tmp_path / "ens.png"
        plot_ensemble(field, ens, members=2, fname=str(out), title="test")
        assert out.exists()

    def test_writes_png_3d_slice(self, tmp_path):
        field = random_scalar_field((8, 8, 6), seed=0)
        ens = scramble(build_patch_index((8, 8, 6)), field, 3, rng=0)
        out = tmp_path / "ens3d.png"
        plot_ensemble(field, ens, members=[0, 2], slice_index=1, fname=str(out))
        assert out.exists()

    def test_shape_mismatch(self):
        with pytest.raises(InvalidArgument, match="does not match"):
            plot_ensemble(np.zeros((4, 4)), np.zeros((4, 5, 2)), fname="unused.png")

    @pytest.mark.parametrize("members", [[0, 5], [-1], [3]])
    def test_member_out_of_range(self, members, tmp_path):
        field = random_scalar_field((8, 8), seed=0)
        ens = scramble(build_patch_index((8, 8)), field, 3, rng=0)
        with pytest.raises(InvalidArgument, match="out of range"):
            plot_ensemble(field, ens, members=members, fname=str(tmp_path / "unused.png"))


class TestRandomScalarField:
    @pytest.mark.parametrize("shape", [(32, 32), (16, 24), (8, 8, 8)])
    def test_shape_and_moments(self, shape):
        theta = random_scalar_field(shape, seed=1, std=2.0)
        assert theta.shape == shape
        assert theta.mean() == pytest.approx(0.0, abs=1e-10)
        assert theta.std() == pytest.approx(2.0)

    def test_seeded(self):
        np.testing.assert_array_equal(random_scalar_field((16, 16), seed=3), random_scalar_field((16, 16), seed=3))

    def test_steeper_slope_is_smoother(self):
        rough = random_scalar_field((64, 64), -1.0, seed=0)
        smooth = random_scalar_field((64, 64), -4.0, seed=0)
        assert np.abs(np.diff(smooth, axis=0)).mean() < np.abs(np.diff(rough, axis=0)).mean()

    def test_dtype(self):
        assert random_scalar_field((8, 8), seed=0, dtype=np.float32).dtype == np.float32

    def test_invalid_grid(self):
        with pytest.raises(InvalidArgument):
            random_scalar_field((8, 0))
