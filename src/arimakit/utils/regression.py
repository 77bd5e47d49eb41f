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
Ordinary least squares.

    y = β₀ + X·β + ε,   β̂ = argmin ||y - β₀ - X·β||²

Solved with ``scipy.linalg.lstsq``. Unlike a bare least-squares call, a
rank-deficient design is treated as a failure and raises
``numpy.linalg.LinAlgError`` rather than returning a minimum-norm solution,
so collinear lag structures are not silently accepted.
"""

import logging

import numpy as np
from scipy import linalg

from ..types.core import CoefficientVector, DesignMatrix, SeriesLike

logger = logging.getLogger(__name__)


def ols_fit(
    x: DesignMatrix,
    y: SeriesLike,
    no_intercept: bool = False,
) -> CoefficientVector:
    """
    Fit an ordinary least squares regression.

    Args:
        x: Design matrix (n_obs, n_predictors). n_predictors may be 0, in
            which case only the intercept is estimated.
        y: Target vector (n_obs,)
        no_intercept: Suppress the intercept column

    Returns:
        Parameter vector [β₀, β₁, ..., βₖ], or [β₁, ..., βₖ] when
        ``no_intercept`` is True

    Raises:
        ValueError: If shapes are incompatible, or there are fewer
            observations than predictors + 1
        LinAlgError: If the design matrix is rank deficient

    Examples
    --------
    >>> x = np.array([[1.0], [2.0], [3.0], [4.0]])
    >>> y = 2.0 + 3.0 * x[:, 0]
    >>> ols_fit(x, y)
    array([2., 3.])
    """
    x_np = np.asarray(x, dtype=float)
    y_np = np.asarray(y, dtype=float).reshape(-1)

    if x_np.ndim == 1:
        x_np = x_np.reshape(-1, 1)
    if x_np.ndim != 2:
        raise ValueError(f"Design matrix must be 2-D, got shape {x_np.shape}")

    n_obs, n_predictors = x_np.shape
    if y_np.size != n_obs:
        raise ValueError(
            f"Design matrix has {n_obs} rows but target has {y_np.size} values"
        )
    if n_obs == 0:
        raise ValueError("No observations to fit")
    if n_predictors + 1 > n_obs:
        raise ValueError(
            f"Not enough observations ({n_obs}) for {n_predictors} predictors"
        )

    design = x_np if no_intercept else np.column_stack([np.ones(n_obs), x_np])
    if design.shape[1] == 0:
        raise ValueError("Regression without intercept needs at least one predictor")

    # Singular values below this fraction of the largest count as zero
    cond = max(design.shape) * np.finfo(float).eps
    params, _, rank, _ = linalg.lstsq(design, y_np, cond=cond)
    if rank < design.shape[1]:
        raise np.linalg.LinAlgError(
            f"Design matrix is singular (rank {rank} < {design.shape[1]} columns)"
        )

    logger.debug("OLS fit: %d observations, %d parameters", n_obs, design.shape[1])
    return params


__all__ = ["ols_fit"]
