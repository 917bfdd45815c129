"""Tests for the Scrambler facade."""

from pathlib import Path

import numpy as np
import pytest

from field_scrambler import (
    DebugModeWarning,
    InvalidBoundaryPolicy,
    InvalidPatchDimension,
    Scrambler,
    ScramblerConfig,
    SingletonDimensionWarning,
    random_scalar_field,
)


class TestScrambler:
    def test_properties(self):
        s = Scrambler((12, 10), 5, "replicate", rng=0)
        assert s.grid_size == (12, 10)
        assert s.patch_dim == 5
        assert s.boundary == "replicate"
        assert s.numel_grid == 120
        assert s.numel_patch == 25
        assert s.table.shape == (120, 25)
        assert s.avg_filter.shape == (5, 5)

    def test_scramble_scalar(self):
        s = Scrambler((12, 10), rng=0)
        field = random_scalar_field((12, 10), seed=1)
        assert s.scramble_scalar(field, 6).shape == (12, 10, 6)
        assert s.scramble_scalar(field, 6, reshape=False).shape == (120, 6)

    def test_debug_mode(self):
        s = Scrambler((6, 6))
        with pytest.warns(DebugModeWarning):
            assert s.scramble_scalar(np.zeros((6, 6)), 0).shape == (6, 6, 9)

    def test_cached_index_is_shared(self):
        a = Scrambler((16, 16), 3, "mirror")
        b = Scrambler((16, 16), 3, "mirror")
        assert a.index is b.index
        c = Scrambler((16, 16), 3, "mirror", cache=False)
        assert c.index is not a.index
        assert c.index == a.index

    def test_from_config_is_reproducible(self):
        config = ScramblerConfig(grid_size=(8, 8), n_obs=5, seed=3)
        field = random_scalar_field((8, 8), seed=2)
        a = Scrambler.from_config(config).scramble_scalar(field, config.n_obs)
        b = Scrambler.from_config(config).scramble_scalar(field, config.n_obs)
        np.testing.assert_array_equal(a, b)

    def test_invalid_config_raises(self):
        with pytest.raises(InvalidPatchDimension):
            Scrambler((8, 8), 4)

    def test_spawn_shares_index_with_independent_streams(self):
        s = Scrambler((10, 10), rng=0)
        children = s.spawn(2)
        assert all(child.index is s.index for child in children)
        field = np.arange(100.0).reshape(10, 10)
        a, b = (child.scramble_scalar(field, 8) for child in children)
        assert not np.array_equal(a, b)

    def test_scale_separation(self):
        s = Scrambler((9, 9), 3, "periodic")
        field = random_scalar_field((9, 9), seed=5)
        np.testing.assert_allclose(s.large_scale(field) + s.small_scale(field), field)

    def test_statistics_passthrough(self):
        s = Scrambler((6, 6), rng=1)
        stats = s.statistics(s.scramble_scalar(np.ones((6, 6)), 4))
        assert stats.n_obs == 4
        np.testing.assert_allclose(stats.std, 0.0)

    def test_verbose_progress(self, capsys):
        s = Scrambler((6, 6), rng=0, verbose=True)
        s.scramble_scalar(np.zeros((6, 6)), 3)
        out = capsys.readouterr().out
        assert "Patch index ready" in out
        assert "Generated 3 pseudo-observations" in out

    def test_singleton_warning_on_every_construction(self):
        for _ in range(2):
            with pytest.warns(SingletonDimensionWarning) as record:
                s = Scrambler((6, 1, 5), 3, "periodic", rng=0)
            assert Path(record[0].filename).name == Path(__file__).name
        assert s.grid_size == (6, 5)

    def test_singleton_warning_without_cache(self):
        with pytest.warns(SingletonDimensionWarning) as record:
            Scrambler((6, 1, 5), cache=False)
        assert Path(record[0].filename).name == Path(__file__).name

    def test_unhashable_boundary_rejected(self):
        with pytest.raises(InvalidBoundaryPolicy):
            Scrambler((8, 8), 3, ["periodic"])

    def test_unhashable_patch_dim_rejected(self):
        with pytest.raises(InvalidPatchDimension):
            Scrambler((8, 8), np.array([3]))
