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
Unit Tests for Optimizer Configuration and Package Exceptions
"""

import dataclasses

import pytest

from arimakit import (
    DEFAULT_OPTIMIZER_CONFIG,
    ARIMAError,
    OptimizerConfig,
    UnsupportedMethodError,
)


class TestOptimizerConfig:
    """Test OptimizerConfig."""

    def test_defaults(self):
        """Defaults match the documented settings."""
        config = DEFAULT_OPTIMIZER_CONFIG
        assert config.max_iterations == 10_000
        assert config.max_evaluations == 10_000
        assert config.cg_relative_tolerance == 1e-7
        assert config.cg_absolute_tolerance == 1e-7
        assert config.line_search_c2 == 0.4

    def test_frozen(self):
        """Configs are immutable."""
        with pytest.raises(dataclasses.FrozenInstanceError):
            DEFAULT_OPTIMIZER_CONFIG.max_iterations = 5

    def test_trust_radii_scaled(self):
        """Start radius is 0.2·max|θ|, end radius 1e-6 of that."""
        start, end = OptimizerConfig().trust_radii([0.5, -2.0, 1.0])
        assert start == pytest.approx(0.4)
        assert end == pytest.approx(0.4e-6)

    def test_trust_radii_capped(self):
        """Large parameters cap the start radius at 0.96."""
        start, _ = OptimizerConfig().trust_radii([100.0])
        assert start == pytest.approx(0.96)

    def test_trust_radii_zero_start(self):
        """An all-zero start still gets a positive radius."""
        start, end = OptimizerConfig().trust_radii([0.0, 0.0, 0.0])
        assert start == pytest.approx(0.2)
        assert 0.0 < end < start

    @pytest.mark.parametrize(
        "kwargs",
        [{"max_iterations": 0}, {"max_evaluations": -1}, {"line_search_c2": 1.5}],
    )
    def test_invalid_settings(self, kwargs):
        """Out-of-range settings raise ValueError."""
        with pytest.raises(ValueError):
            OptimizerConfig(**kwargs)


class TestExceptions:
    """Test the exception hierarchy."""

    def test_unsupported_method(self):
        """UnsupportedMethodError carries the method and the choices."""
        error = UnsupportedMethodError("mle", ("css-bobyqa", "css-cgd"))

        assert isinstance(error, ARIMAError)
        assert isinstance(error, ValueError)
        assert error.method == "mle"
        assert error.supported == ("css-bobyqa", "css-cgd")
        assert "mle" in str(error)
        assert "css-cgd" in str(error)
