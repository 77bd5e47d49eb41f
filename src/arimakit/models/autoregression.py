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
Autoregressive Models - AR(p)
=============================

Pure autoregression regresses an observation on its own recent past:

    Y[t] = c + Σᵢ₌₁ᵖ φᵢ·Y[t-i] + ε[t],    ε[t] ~ i.i.d.

Estimation
----------
AR(p) is linear in its parameters, so it is fitted by a single ordinary
least squares regression of Y[p:] on the lag matrix

    row t:  Y[t-1], Y[t-2], ..., Y[t-p]

(conditional least squares, following statsmodels' ``AR`` model). No
iterative optimization is needed, which is why ARIMA(p, d, 0) fits are
routed here.

Model application
-----------------
``remove_time_dependent_effects`` and ``add_time_dependent_effects`` start
at index 0 and use whatever lags are available, so the first p innovations
are computed from a truncated history:

    ε[0] = Y[0] - c
    ε[1] = Y[1] - c - φ₁·Y[0]
    ...

Examples
--------
>>> rng = np.random.default_rng(0)
>>> true_model = ARModel(1.0, [0.5, -0.2])
>>> y = true_model.sample(5000, rng)
>>> fitted = fit_model(y, max_lag=2)
>>> fitted.c, fitted.coefficients     # ≈ 1.0, [0.5, -0.2]
"""

import logging
from dataclasses import dataclass

import numpy as np

from ..types.core import CoefficientVector, Series, SeriesLike
from ..utils.lag import lag_mat_trim_both
from ..utils.regression import ols_fit
from .base import TimeSeriesModel

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class ARModel(TimeSeriesModel):
    """
    AR(p) model with intercept ``c`` and lag coefficients φ₁..φₚ.

    Attributes
    ----------
    c : float
        Intercept (0.0 for models fitted without one)
    coefficients : np.ndarray
        Read-only array [φ₁, ..., φₚ], increasing lag order
    """

    c: float
    coefficients: CoefficientVector

    def __post_init__(self):
        coeffs = np.array(self.coefficients, dtype=float, copy=True).reshape(-1)
        coeffs.flags.writeable = False
        object.__setattr__(self, "c", float(self.c))
        object.__setattr__(self, "coefficients", coeffs)

    @property
    def max_lag(self) -> int:
        return self.coefficients.size

    def remove_time_dependent_effects(self, ts: SeriesLike) -> Series:
        """
        Residuals ε[i] = Y[i] - c - Σⱼ φⱼ·Y[i-j] over available lags.

        Args:
            ts: Observed series

        Returns:
            Innovation series of the same length
        """
        y = np.asarray(ts, dtype=float).reshape(-1)
        dest = y - self.c
        for i in range(y.size):
            n_lags = min(self.max_lag, i)
            if n_lags:
                dest[i] -= y[i - n_lags:i][::-1] @ self.coefficients[:n_lags]
        return dest

    def add_time_dependent_effects(self, ts: SeriesLike) -> Series:
        """
        Observations Y[i] = c + ε[i] + Σⱼ φⱼ·Y[i-j] over available lags.

        Args:
            ts: Innovation series

        Returns:
            Series with the autoregressive structure applied
        """
        eps = np.asarray(ts, dtype=float).reshape(-1)
        dest = eps + self.c
        for i in range(eps.size):
            n_lags = min(self.max_lag, i)
            if n_lags:
                dest[i] += dest[i - n_lags:i][::-1] @ self.coefficients[:n_lags]
        return dest


def fit_model(ts: SeriesLike, max_lag: int = 1, no_intercept: bool = False) -> ARModel:
    """
    Fit an AR(max_lag) model by ordinary least squares.

    Args:
        ts: Series to fit; must be longer than ``max_lag``
        max_lag: Autoregressive order, lags t-1 through t-max_lag are used
        no_intercept: Fit without intercept (c = 0.0)

    Returns:
        Fitted ARModel

    Raises:
        ValueError: If the series is too short for the requested order
        LinAlgError: If the lag matrix is singular (e.g. a constant series)
    """
    y = np.asarray(ts, dtype=float).reshape(-1)
    if max_lag < 0:
        raise ValueError(f"max_lag must be non-negative, got {max_lag}")

    target = y[max_lag:]
    design = lag_mat_trim_both(y, max_lag)

    params = ols_fit(design, target, no_intercept=no_intercept)
    if no_intercept:
        c, coefficients = 0.0, params
    else:
        c, coefficients = params[0], params[1:]

    logger.debug("Fitted AR(%d) on %d observations", max_lag, y.size)
    return ARModel(c, coefficients)


__all__ = ["ARModel", "fit_model"]
