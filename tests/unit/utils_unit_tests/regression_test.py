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
Unit Tests for Ordinary Least Squares
"""

import numpy as np
import pytest

from arimakit.utils.regression import ols_fit


class TestOLSFit:
    """Test ols_fit."""

    def test_exact_recovery_with_intercept(self):
        """Noise-free data recovers intercept and slopes exactly."""
        rng = np.random.default_rng(0)
        x = rng.standard_normal((40, 3))
        y = 1.5 + x @ np.array([2.0, -1.0, 0.5])

        params = ols_fit(x, y)

        np.testing.assert_allclose(params, [1.5, 2.0, -1.0, 0.5], atol=1e-10)

    def test_no_intercept(self):
        """Without intercept only slopes are returned."""
        rng = np.random.default_rng(1)
        x = rng.standard_normal((30, 2))
        y = x @ np.array([0.3, 0.7])

        params = ols_fit(x, y, no_intercept=True)

        assert params.shape == (2,)
        np.testing.assert_allclose(params, [0.3, 0.7], atol=1e-10)

    def test_intercept_only(self):
        """Zero predictors estimates the mean."""
        y = np.array([1.0, 2.0, 3.0, 6.0])
        params = ols_fit(np.empty((4, 0)), y)
        np.testing.assert_allclose(params, [3.0])

    def test_singular_design_raises(self):
        """Collinear columns are rejected."""
        x = np.column_stack([np.arange(10.0), 2.0 * np.arange(10.0)])
        with pytest.raises(np.linalg.LinAlgError):
            ols_fit(x, np.arange(10.0))

    def test_constant_column_collides_with_intercept(self):
        """A constant predictor is collinear with the intercept."""
        x = np.ones((10, 1))
        with pytest.raises(np.linalg.LinAlgError):
            ols_fit(x, np.arange(10.0))

    def test_row_mismatch(self):
        """Design and target lengths must agree."""
        with pytest.raises(ValueError, match="rows"):
            ols_fit(np.ones((5, 1)), np.ones(4))

    def test_not_enough_observations(self):
        """More predictors than observations is rejected."""
        with pytest.raises(ValueError, match="Not enough"):
            ols_fit(np.ones((2, 3)), np.ones(2))
