# Copyright (C) 2025 Gil Benezer
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published
# by the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU Affero General Public License for more details.
#
# You should have received a copy of the GNU Affero General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.

"""
Unit Tests for Lag and Difference Utilities

Tests differencing, inverse differencing and lag matrix construction.
"""

import numpy as np
import pytest

from arimakit.utils.lag import (
    differences_at_lag,
    differences_of_order_d,
    inverse_differences_at_lag,
    inverse_differences_of_order_d,
    lag_mat_trim_both,
)


@pytest.fixture
def random_series():
    """Random walk of length 50."""
    rng = np.random.default_rng(7)
    return np.cumsum(rng.standard_normal(50))


class TestDifferences:
    """Test differencing of order d."""

    def test_order_zero_is_copy(self, random_series):
        """d = 0 returns an equal but distinct array."""
        out = differences_of_order_d(random_series, 0)
        np.testing.assert_array_equal(out, random_series)
        assert out is not random_series

    def test_first_order(self):
        """First differences keep the first value as seed."""
        out = differences_of_order_d([1.0, 3.0, 6.0, 10.0], 1)
        np.testing.assert_array_equal(out, [1.0, 2.0, 3.0, 4.0])

    def test_second_order_layout(self):
        """Lower-order differences sit in the first d entries."""
        x = np.array([1.0, 4.0, 9.0, 16.0, 25.0])
        out = differences_of_order_d(x, 2)
        # x[0], Δx[1], then Δ²x
        np.testing.assert_array_equal(out, [1.0, 3.0, 2.0, 2.0, 2.0])

    def test_tail_matches_numpy_diff(self, random_series):
        """After dropping d entries the result equals np.diff(n=d)."""
        for d in range(4):
            out = differences_of_order_d(random_series, d)[d:]
            np.testing.assert_allclose(out, np.diff(random_series, n=d))

    def test_input_not_modified(self, random_series):
        """Differencing does not touch the caller's array."""
        original = random_series.copy()
        differences_of_order_d(random_series, 2)
        np.testing.assert_array_equal(random_series, original)

    def test_negative_order_rejected(self):
        """Negative d raises ValueError."""
        with pytest.raises(ValueError):
            differences_of_order_d([1.0, 2.0], -1)

    def test_at_lag_two(self):
        """Seasonal-style lag keeps the first `lag` values."""
        out = differences_at_lag([1.0, 2.0, 4.0, 7.0, 11.0], lag=2)
        np.testing.assert_array_equal(out, [1.0, 2.0, 3.0, 5.0, 7.0])

    def test_at_lag_explicit_start(self):
        """Entries before start_index are copied unchanged."""
        out = differences_at_lag([1.0, 2.0, 4.0, 7.0], lag=1, start_index=2)
        np.testing.assert_array_equal(out, [1.0, 2.0, 2.0, 3.0])
        restored = inverse_differences_at_lag(out, lag=1, start_index=2)
        np.testing.assert_array_equal(restored, [1.0, 2.0, 4.0, 7.0])


class TestInverseDifferences:
    """Test integration back to levels."""

    @pytest.mark.parametrize("d", [0, 1, 2, 3])
    def test_round_trip(self, random_series, d):
        """inverse(differences(x, d), d) reproduces x."""
        diffed = differences_of_order_d(random_series, d)
        restored = inverse_differences_of_order_d(diffed, d)
        np.testing.assert_allclose(restored, random_series, atol=1e-10)

    def test_at_lag_round_trip(self, random_series):
        """Lag-3 differencing is undone by its inverse."""
        diffed = differences_at_lag(random_series, lag=3)
        np.testing.assert_allclose(
            inverse_differences_at_lag(diffed, lag=3), random_series, atol=1e-10
        )

    def test_integrates_constant_difference(self):
        """Seed 5 followed by constant step 2 is an arithmetic sequence."""
        out = inverse_differences_of_order_d([5.0, 2.0, 2.0, 2.0], 1)
        np.testing.assert_array_equal(out, [5.0, 7.0, 9.0, 11.0])


class TestLagMatTrimBoth:
    """Test lagged design matrices."""

    def test_lags_only(self):
        """Row t holds x[t-1], ..., x[t-max_lag]."""
        x = np.array([1.0, 2.0, 3.0, 4.0, 5.0])
        out = lag_mat_trim_both(x, 2)
        expected = np.array([[2.0, 1.0], [3.0, 2.0], [4.0, 3.0]])
        np.testing.assert_array_equal(out, expected)

    def test_include_original(self):
        """Original value is prepended as the first column."""
        x = np.array([1.0, 2.0, 3.0, 4.0])
        out = lag_mat_trim_both(x, 1, include_original=True)
        np.testing.assert_array_equal(out, [[2.0, 1.0], [3.0, 2.0], [4.0, 3.0]])

    def test_zero_lag_has_no_columns(self):
        """max_lag = 0 yields one empty row per observation."""
        out = lag_mat_trim_both([1.0, 2.0, 3.0], 0)
        assert out.shape == (3, 0)

    def test_shape(self, random_series):
        """Shape is (n - max_lag, max_lag)."""
        assert lag_mat_trim_both(random_series, 5).shape == (45, 5)

    def test_lag_too_large(self):
        """max_lag beyond the series length raises ValueError."""
        with pytest.raises(ValueError):
            lag_mat_trim_both([1.0, 2.0], 3)
