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
Unit Tests for AR(p) Models
"""

import numpy as np
import pytest

from arimakit.models.autoregression import ARModel, fit_model


@pytest.fixture
def ar2_model():
    return ARModel(1.0, [0.5, -0.2])


class TestARModel:
    """Test ARModel application."""

    def test_coefficients_read_only(self, ar2_model):
        """Stored coefficients cannot be mutated."""
        with pytest.raises(ValueError):
            ar2_model.coefficients[0] = 9.0

    def test_max_lag(self, ar2_model):
        assert ar2_model.max_lag == 2

    def test_residual_formula(self):
        """AR(1) residuals are y[i] - c - φ·y[i-1] after the first value."""
        model = ARModel(0.5, [0.3])
        y = np.array([2.0, 1.0, 4.0, 3.0])

        residuals = model.remove_time_dependent_effects(y)

        expected = [2.0 - 0.5] + [y[i] - 0.5 - 0.3 * y[i - 1] for i in range(1, 4)]
        np.testing.assert_allclose(residuals, expected)

    def test_round_trip(self, ar2_model):
        """add(remove(y)) reproduces y."""
        y = np.random.default_rng(11).standard_normal(100)

        restored = ar2_model.add_time_dependent_effects(
            ar2_model.remove_time_dependent_effects(y)
        )

        np.testing.assert_allclose(restored, y, atol=1e-10)

    def test_sample(self, ar2_model):
        """sample draws n values reproducibly from the generator."""
        first = ar2_model.sample(50, np.random.default_rng(5))
        second = ar2_model.sample(50, np.random.default_rng(5))

        assert first.shape == (50,)
        np.testing.assert_array_equal(first, second)

    def test_negative_sample_size(self, ar2_model):
        with pytest.raises(ValueError):
            ar2_model.sample(-1)


class TestFitAR:
    """Test OLS fitting of AR models."""

    def test_recovers_ar2(self, ar2_model):
        """Estimates approach the generating model on a long sample."""
        y = ar2_model.sample(5000, np.random.default_rng(42))

        fitted = fit_model(y, 2)

        assert fitted.c == pytest.approx(1.0, abs=0.1)
        np.testing.assert_allclose(fitted.coefficients, [0.5, -0.2], atol=0.05)

    def test_no_intercept(self):
        """Without intercept c is exactly zero."""
        y = ARModel(0.0, [0.6]).sample(2000, np.random.default_rng(8))

        fitted = fit_model(y, 1, no_intercept=True)

        assert fitted.c == 0.0
        assert fitted.coefficients[0] == pytest.approx(0.6, abs=0.05)

    def test_constant_series_is_singular(self):
        """A constant series gives a singular design."""
        with pytest.raises(np.linalg.LinAlgError):
            fit_model(np.full(20, 3.0), 1)

    def test_too_short(self):
        with pytest.raises(ValueError):
            fit_model([1.0, 2.0], 3)
