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
Core Types

Array aliases shared across the package:
- Series and coefficient vectors
- Design matrices for the regression service
- Operator and method identifiers

All numerical work is done in NumPy. Inputs typed as ``ArrayLike`` are
converted with ``np.asarray(..., dtype=float)`` at the public boundary, so
plain lists and pandas objects are accepted as well.
"""

from typing import Callable, Literal, Union

import numpy as np
from numpy.typing import ArrayLike, NDArray

# ============================================================================
# Array Types
# ============================================================================

Series = NDArray[np.float64]
"""
Univariate time series.

1-D float array, 0-indexed, fixed length once constructed.

Shapes:
- (n,)

Examples
--------
>>> y: Series = np.array([1.0, 2.0, 1.5, 1.8])
"""

CoefficientVector = NDArray[np.float64]
"""
Model coefficient vector.

ARIMA layout is fixed: [intercept?][AR_1..AR_p][MA_1..MA_q], each block in
increasing lag order.
"""

DesignMatrix = NDArray[np.float64]
"""
Regression design matrix, one row per observation.

Shapes:
- (n_obs, n_predictors), n_predictors may be 0
"""

SeriesLike = Union[Series, ArrayLike]
"""Anything ``np.asarray`` turns into a 1-D float series."""

# ============================================================================
# Operators and Identifiers
# ============================================================================

CombineOperator = Callable[[float, float], float]
"""
Binary operator folding a model term into the running value at index i.

``operator.add`` adds time-dependent effects (simulation, prediction),
``operator.sub`` removes them (residual extraction).
"""

FitMethod = Literal["css-bobyqa", "css-cgd"]
"""
CSS optimization strategy.

- 'css-bobyqa': derivative-free trust-region quadratic-model optimizer
- 'css-cgd': Fletcher-Reeves conjugate gradient with analytic gradient
"""

FIT_METHODS = ("css-bobyqa", "css-cgd")


__all__ = [
    "ArrayLike",
    "Series",
    "CoefficientVector",
    "DesignMatrix",
    "SeriesLike",
    "CombineOperator",
    "FitMethod",
    "FIT_METHODS",
]
