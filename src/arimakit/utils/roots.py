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
Polynomial root analysis.

Polynomials are given by their coefficients in increasing degree,

    c₀ + c₁·x + c₂·x² + ... + cₙ·xⁿ   ↔   [c₀, c₁, ..., cₙ]

which is the natural order for lag polynomials such as 1 - φ₁L - φ₂L².
Roots are computed from the companion matrix eigenvalues
(``numpy.polynomial.polynomial.polyroots``); trailing zero coefficients are
trimmed, so a vanishing highest-lag coefficient lowers the degree.
"""

import numpy as np
from numpy.polynomial import polynomial as P

from ..types.core import ArrayLike


def solve_all_complex_roots(coefficients: ArrayLike) -> np.ndarray:
    """
    All complex roots of a polynomial.

    Args:
        coefficients: Polynomial coefficients, increasing degree

    Returns:
        Complex array of roots (empty for constant polynomials)
    """
    coeffs = np.trim_zeros(np.asarray(coefficients, dtype=float).reshape(-1), "b")
    if coeffs.size <= 1:
        return np.empty(0, dtype=complex)
    return P.polyroots(coeffs).astype(complex)


def all_roots_outside_unit_circle(coefficients: ArrayLike) -> bool:
    """
    True iff every root has modulus strictly greater than 1.

    Examples
    --------
    >>> all_roots_outside_unit_circle([1.0, -0.5])   # root at 2
    True
    >>> all_roots_outside_unit_circle([1.0, -1.5])   # root at 2/3
    False
    """
    roots = solve_all_complex_roots(coefficients)
    return bool(np.all(np.abs(roots) > 1.0))


__all__ = ["solve_all_complex_roots", "all_roots_outside_unit_circle"]
