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
Numerical services consumed by the estimators.

- lag: differencing, inverse differencing and lag matrices
- regression: ordinary least squares
- roots: polynomial roots and unit-circle checks
- optimizers: derivative-free and conjugate-gradient maximizers
"""

from .lag import (
    differences_at_lag,
    differences_of_order_d,
    inverse_differences_at_lag,
    inverse_differences_of_order_d,
    lag_mat_trim_both,
)
from .optimizers import maximize_conjugate_gradient, maximize_derivative_free
from .regression import ols_fit
from .roots import all_roots_outside_unit_circle, solve_all_complex_roots

__all__ = [
    # Lag / difference
    "differences_at_lag",
    "inverse_differences_at_lag",
    "differences_of_order_d",
    "inverse_differences_of_order_d",
    "lag_mat_trim_both",
    # Regression
    "ols_fit",
    # Roots
    "solve_all_complex_roots",
    "all_roots_outside_unit_circle",
    # Optimizers
    "maximize_derivative_free",
    "maximize_conjugate_gradient",
]
