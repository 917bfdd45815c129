"""Tests for grid addressing and boundary resolution."""

import numpy as np
import pytest

from field_scrambler import (
    InvalidArgument,
    InvalidBoundaryPolicy,
    SingletonDimensionWarning,
    normalize_grid_size,
    patch_offsets,
    ravel_index,
    resolve_coordinate,
    unravel_index,
)


class TestAddressing:
    @pytest.mark.parametrize("grid_size", [(4, 5), (3, 4, 2)])
    def test_ravel_unravel_are_inverse(self, grid_size):
        flat = np.arange(int(np.prod(grid_size)))
        coords = unravel_index(flat, grid_size)
        np.testing.assert_array_equal(ravel_index(coords, grid_size), flat)

    def test_row_major_convention(self):
        assert ravel_index((1, 2), (4, 5)) == 7
        assert tuple(int(c) for c in unravel_index(7, (4, 5))) == (1, 2)


class TestNormalizeGridSize:
    def test_passthrough(self):
        assert normalize_grid_size([64, 32]) == (64, 32)

    def test_singleton_dimensions_stripped_with_warning(self):
        with pytest.warns(SingletonDimensionWarning, match="singleton"):
            assert normalize_grid_size((16, 1, 8)) == (16, 8)

    @pytest.mark.parametrize("bad", [(0, 4), (4, -2), (4.0, 4), (), "44"])
    def test_invalid_lengths(self, bad):
        with pytest.raises(InvalidArgument):
            normalize_grid_size(bad)

    def test_not_a_sequence(self):
        with pytest.raises(InvalidArgument, match="sequence"):
            normalize_grid_size(12)


class TestResolveCoordinate:
    def test_periodic_wraps(self):
        np.testing.assert_array_equal(resolve_coordinate([-2, -1, 0, 4, 5], 5, "periodic"), [3, 4, 0, 4, 0])

    def test_replicate_clamps(self):
        np.testing.assert_array_equal(resolve_coordinate([-2, -1, 0, 4, 5, 6], 5, "replicate"), [0, 0, 0, 4, 4, 4])

    def test_mirror_does_not_repeat_edge(self):
        np.testing.assert_array_equal(resolve_coordinate([-2, -1, 0, 4, 5, 6], 5, "mirror"), [2, 1, 0, 4, 3, 2])

    def test_unknown_policy(self):
        with pytest.raises(InvalidBoundaryPolicy):
            resolve_coordinate(0, 5, "symmetric")


class TestPatchOffsets:
    @pytest.mark.parametrize("patch_dim,ndim", [(1, 2), (3, 2), (5, 2), (3, 3)])
    def test_shape_and_centre(self, patch_dim, ndim):
        offsets = patch_offsets(patch_dim, ndim)
        assert offsets.shape == (patch_dim**ndim, ndim)
        np.testing.assert_array_equal(offsets[patch_dim**ndim // 2], np.zeros(ndim))

    def test_last_axis_fastest(self):
        offsets = patch_offsets(3, 2)
        np.testing.assert_array_equal(offsets[:3], [[-1, -1], [-1, 0], [-1, 1]])
        np.testing.assert_array_equal(offsets[-1], [1, 1])
