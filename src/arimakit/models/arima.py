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
ARIMA Models - Autoregressive Integrated Moving Average
=======================================================

ARIMA(p, d, q) models a series whose d-th difference follows an ARMA(p, q)
process. With the lag operator L (L·Y[t] = Y[t-1]):

    (1 - φ₁L - ... - φₚLᵖ)·(1 - L)ᵈ·Y[t] = c + (1 + θ₁L + ... + θ_qL^q)·ε[t]

or, written on the differenced series y = (1 - L)ᵈ·Y,

    y[t] = c + Σᵢ₌₁ᵖ φᵢ·y[t-i] + Σⱼ₌₁^q θⱼ·ε[t-j] + ε[t]

Coefficients are stored in one fixed layout:

    [c?][φ₁ ... φₚ][θ₁ ... θ_q]

Estimation
----------
Parameters are estimated by maximizing the conditional-sum-of-squares (CSS)
log-likelihood (see ``recurrence``), which conditions on the first max(p, q)
differenced observations instead of modelling their distribution.

**Initialization (Hannan-Rissanen):**
1. Fit a long AR(m), m = max(p, q) + 1, by OLS
2. Use its residuals as estimates of the unobserved innovations ε
3. Regress y[t] on y[t-1..t-p] and ε̂[t-1..t-q] by OLS

The second-stage coefficients are the starting point for the optimizer.

**Strategies:**
- 'css-cgd' (default): Fletcher-Reeves conjugate gradient with the analytic
  CSS gradient
- 'css-bobyqa': derivative-free trust-region optimization

**Pure AR:** for q = 0 the CSS problem is linear and ARIMA(p, d, 0) is
fitted in closed form by OLS on the differenced series. No optimizer runs.

Stationarity and invertibility are checked after fitting and reported in
the result; coefficients are never transformed to enforce them.

Application
-----------
Before the recurrence reaches index max(p, q), AR lags that would reach
before the start of the (differenced) series are taken to equal the
intercept (0.0 without one) and MA errors before the start are zero.

Examples
--------
>>> rng = np.random.default_rng(42)
>>> true_model = ARIMAModel(1, 1, 1, [0.2, 0.6, 0.3])
>>> y = true_model.sample(1000, rng)
>>>
>>> result = fit_model(1, 1, 1, y)
>>> model = result['model']
>>> model.coefficients                     # ≈ [0.2, 0.6, 0.3]
>>> result['diagnostics']['is_stationary']  # True
>>>
>>> forecast = model.forecast(y, n_future=10)
>>> forecast[-10:]                          # 10 periods ahead
"""

import logging
import operator
from dataclasses import dataclass
from typing import Optional

import numpy as np

from ..config import DEFAULT_OPTIMIZER_CONFIG, OptimizerConfig
from ..exceptions import UnsupportedMethodError
from ..types.core import (
    FIT_METHODS,
    ArrayLike,
    CoefficientVector,
    FitMethod,
    Series,
    SeriesLike,
)
from ..types.results import ARIMAFitResult, OptimizationInfo
from ..utils.lag import (
    differences_of_order_d,
    inverse_differences_of_order_d,
    lag_mat_trim_both,
)
from ..utils.optimizers import maximize_conjugate_gradient, maximize_derivative_free
from ..utils.regression import ols_fit
from . import autoregression
from .base import TimeSeriesModel
from .diagnostics import diagnose, is_invertible, is_stationary
from .recurrence import (
    ARMATerms,
    ErrorDriven,
    ReferenceDriven,
    css_gradient,
    css_log_likelihood,
    iterate_arma,
)

logger = logging.getLogger(__name__)


# ============================================================================
# Model
# ============================================================================


@dataclass(frozen=True, eq=False)
class ARIMAModel(TimeSeriesModel):
    """
    Immutable ARIMA(p, d, q) model.

    Attributes
    ----------
    p : int
        AR order
    d : int
        Differencing order
    q : int
        MA order
    coefficients : np.ndarray
        Read-only [intercept?][AR_1..AR_p][MA_1..MA_q]
    has_intercept : bool
        Whether the first coefficient is an intercept

    Raises
    ------
    ValueError
        If an order is negative or the coefficient count is not
        int(has_intercept) + p + q

    Examples
    --------
    >>> # ARMA(1, 1) with intercept: y[t] = 0.5 + 0.7·y[t-1] + ε[t] + 0.2·ε[t-1]
    >>> model = ARIMAModel(1, 0, 1, [0.5, 0.7, 0.2])
    >>> model.intercept, model.ar_coefficients, model.ma_coefficients
    (0.5, array([0.7]), array([0.2]))
    """

    p: int
    d: int
    q: int
    coefficients: CoefficientVector
    has_intercept: bool = True

    def __post_init__(self):
        for name in ("p", "d", "q"):
            value = getattr(self, name)
            if value < 0:
                raise ValueError(f"{name} must be non-negative, got {value}")

        coeffs = np.array(self.coefficients, dtype=float, copy=True).reshape(-1)
        expected = int(self.has_intercept) + self.p + self.q
        if coeffs.size != expected:
            raise ValueError(
                f"ARIMA({self.p}, {self.d}, {self.q}) "
                f"{'with' if self.has_intercept else 'without'} intercept needs "
                f"{expected} coefficients, got {coeffs.size}"
            )
        coeffs.flags.writeable = False
        object.__setattr__(self, "coefficients", coeffs)
        object.__setattr__(self, "has_intercept", bool(self.has_intercept))

    # ------------------------------------------------------------------------
    # Coefficient access
    # ------------------------------------------------------------------------

    @property
    def terms(self) -> ARMATerms:
        return ARMATerms.from_coefficients(self.p, self.q, self.coefficients, self.has_intercept)

    @property
    def intercept(self) -> float:
        return float(self.coefficients[0]) if self.has_intercept else 0.0

    @property
    def ar_coefficients(self) -> CoefficientVector:
        offset = int(self.has_intercept)
        return self.coefficients[offset:offset + self.p]

    @property
    def ma_coefficients(self) -> CoefficientVector:
        return self.coefficients[int(self.has_intercept) + self.p:]

    @property
    def max_lag(self) -> int:
        return max(self.p, self.q)

    def _extend_with_intercept(self, series: Series) -> Series:
        # Stand-in for the AR history before the start of the series
        return np.concatenate([np.full(self.max_lag, self.intercept), series])

    # ------------------------------------------------------------------------
    # Likelihood
    # ------------------------------------------------------------------------

    def log_likelihood_css(self, ts: SeriesLike) -> float:
        """
        CSS log-likelihood of the ARIMA process for an undifferenced series.

        Args:
            ts: Series at its original level of integration

        Returns:
            Log-likelihood of the d-times differenced series (first d values
            dropped) under the ARMA(p, q) part
        """
        diffed = differences_of_order_d(ts, self.d)[self.d:]
        return self.log_likelihood_css_arma(diffed)

    def log_likelihood_css_arma(self, diffed_y: SeriesLike) -> float:
        """
        CSS log-likelihood of the ARMA(p, q) part.

        Args:
            diffed_y: Series already differenced d times

        Returns:
            -(n/2)·ln(2πσ²) - RSS/(2σ²), with n = len(diffed_y) - max(p, q)
        """
        return css_log_likelihood(self.terms, diffed_y)

    def gradient_log_likelihood_css_arma(self, diffed_y: SeriesLike) -> CoefficientVector:
        """
        Gradient of ``log_likelihood_css_arma`` w.r.t. the coefficients.

        Args:
            diffed_y: Series already differenced d times

        Returns:
            Gradient in the coefficient layout
        """
        return css_gradient(self.terms, diffed_y)

    # ------------------------------------------------------------------------
    # Model application
    # ------------------------------------------------------------------------

    def remove_time_dependent_effects(self, ts: SeriesLike) -> Series:
        """
        Recover the innovations ε from observations.

        The series is differenced d times (keeping the lower-order seed
        values in its first d entries) and the ARMA recurrence is applied
        backwards. AR terms before the start equal the intercept; MA terms
        before the start are zero.

        Args:
            ts: Observed series

        Returns:
            Innovation series of the same length
        """
        diffed = differences_of_order_d(ts, self.d)
        extended = self._extend_with_intercept(diffed)
        changes = iterate_arma(
            self.terms, extended, extended, operator.sub, ReferenceDriven(extended)
        )
        return changes[self.max_lag:]

    def add_time_dependent_effects(self, ts: SeriesLike) -> Series:
        """
        Build observations from innovations.

        Applies the ARMA recurrence forwards, then integrates d times. Exact
        inverse of ``remove_time_dependent_effects``.

        Args:
            ts: Innovation series

        Returns:
            Series of the same length following the ARIMA process
        """
        innovations = np.asarray(ts, dtype=float).reshape(-1)
        changes = self._extend_with_intercept(innovations)
        changes = iterate_arma(self.terms, None, changes, operator.add, ErrorDriven(changes))
        return inverse_differences_of_order_d(changes[self.max_lag:], self.d)

    def forecast(self, ts: SeriesLike, n_future: int) -> Series:
        """
        In-sample one-step-ahead fit followed by an n_future-period forecast.

        Historical values are one-step-ahead predictions: the error at i is
        ts[i] minus its prediction, and feeds the MA terms of later steps.
        Beyond the end of the series future errors are zero and AR terms use
        prior predictions. With d > 0 the first d values are copied from the
        input and the fitted differences are integrated back.

        Args:
            ts: Observed series
            n_future: Number of periods to forecast beyond the series

        Returns:
            Array of length len(ts) + n_future: fitted values followed by
            forecasts

        Examples
        --------
        >>> model = ARIMAModel(1, 0, 0, [1.0, 0.5])
        >>> model.forecast([2.0, 2.0, 2.0], 2)[-2:]
        array([2., 2.])
        """
        if n_future < 0:
            raise ValueError(f"n_future must be non-negative, got {n_future}")

        y = np.asarray(ts, dtype=float).reshape(-1)
        n, d, max_lag, q = y.size, self.d, self.max_lag, self.q
        terms = self.terms

        diffed = differences_of_order_d(y, d)[d:]
        extended = self._extend_with_intercept(diffed)
        hist_len = extended.size

        # Fitted historical values (differences when d > 0)
        hist = iterate_arma(
            terms, extended, np.zeros(hist_len), operator.add, ReferenceDriven(extended)
        )

        # Last q realized errors, most recent first, seed the forward MA window
        realized = extended - hist
        ma_seed = realized[hist_len - q:][::-1]

        # Forward curve: last max_lag observations, then zeros to be filled.
        # Future errors are zero; AR terms read the forward curve itself.
        forward = np.zeros(max_lag + n_future)
        forward[:max_lag] = extended[hist_len - max_lag:]
        forward = iterate_arma(
            terms,
            None,
            forward,
            operator.add,
            ErrorDriven(np.zeros(forward.size)),
            init_ma_terms=ma_seed,
        )

        results = np.zeros(n + n_future)
        # No differences exist for the first d values; copy them over
        results[:d] = y[:d]
        results[d:n] = hist[max_lag:]
        results[n:] = forward[max_lag:]

        if d == 0:
            return results

        # Table of differences of order 0..d, row k valid from index k
        diff_table = np.zeros((d + 1, n))
        diff_table[0] = y
        for k in range(1, d + 1):
            diff_table[k, k:] = np.diff(diff_table[k - 1, k - 1:])

        # A fitted d-th difference plus the lower-order differences at i - 1
        # gives the fitted level, e.g. d = 2:
        #   ŷ[i] = Δ²ŷ[i] + Δy[i-1] + y[i-1]
        for i in range(d, n):
            results[i] = diff_table[:d, i - 1].sum() + hist[max_lag + i - d]

        # Seed the forward integration with Δᵏy[n-d+k], k < d
        seed = np.array([diff_table[k, n - d + k] for k in range(d)])
        integrated = inverse_differences_of_order_d(
            np.concatenate([seed, forward[max_lag:]]), d
        )
        results[n:] = integrated[d:]
        return results

    # ------------------------------------------------------------------------
    # Diagnostics
    # ------------------------------------------------------------------------

    def is_stationary(self) -> bool:
        """True iff the AR polynomial has all roots outside the unit circle."""
        return is_stationary(self)

    def is_invertible(self) -> bool:
        """True iff the MA polynomial has all roots outside the unit circle."""
        return is_invertible(self)


# ============================================================================
# Fitting
# ============================================================================


def fit_model(
    p: int,
    d: int,
    q: int,
    ts: SeriesLike,
    include_intercept: bool = True,
    method: FitMethod = "css-cgd",
    user_init_params: Optional[ArrayLike] = None,
    config: Optional[OptimizerConfig] = None,
) -> ARIMAFitResult:
    """
    Fit a non-seasonal ARIMA(p, d, q) model.

    Args:
        p: Autoregressive order
        d: Differencing order
        q: Moving average order
        ts: Series to fit, at its original level of integration
        include_intercept: Fit an intercept term
        method: 'css-cgd' (conjugate gradient, default) or 'css-bobyqa'
            (derivative-free trust region). Both maximize the CSS
            log-likelihood. Ignored for pure AR (q = 0, p > 0) fits.
        user_init_params: Starting point for the optimizer in the layout
            [intercept?][AR...][MA...]. Hannan-Rissanen if None.
        config: Optimizer settings (defaults if None)

    Returns:
        ARIMAFitResult with the model, the starting point, the optimizer
        summary and stationarity / invertibility diagnostics

    Raises:
        UnsupportedMethodError: If ``method`` is unknown
        ValueError: If the series is too short for the requested orders or
            ``user_init_params`` has the wrong length
        LinAlgError: If a regression design is singular

    Examples
    --------
    >>> result = fit_model(2, 0, 1, y, method='css-bobyqa')
    >>> result['optimization']['success']
    True
    >>>
    >>> # Pure AR: closed form, no optimizer
    >>> result = fit_model(3, 1, 0, y)
    >>> result['optimization'] is None
    True
    """
    if method not in FIT_METHODS:
        raise UnsupportedMethodError(method, FIT_METHODS)

    settings = DEFAULT_OPTIMIZER_CONFIG if config is None else config

    # The first d values are not at the right level of differencing
    diffed = differences_of_order_d(ts, d)[d:]

    if p > 0 and q == 0:
        ar_model = autoregression.fit_model(diffed, p, no_intercept=not include_intercept)
        intercept = [ar_model.c] if include_intercept else []
        params = np.concatenate([intercept, ar_model.coefficients])
        model = ARIMAModel(p, d, q, params, include_intercept)
        logger.debug("ARIMA(%d, %d, 0) fitted by OLS on the differenced series", p, d)
        return _fit_result(model, None, None)

    if p == 0 and q == 0 and not include_intercept:
        # Nothing to estimate
        model = ARIMAModel(0, d, 0, [], has_intercept=False)
        return _fit_result(model, None, None)

    if user_init_params is None:
        init_params = hannan_rissanen_init(p, q, diffed, include_intercept)
    else:
        init_params = np.asarray(user_init_params, dtype=float).reshape(-1)
    logger.debug("ARIMA(%d, %d, %d) initial parameters: %s", p, d, q, init_params)

    if method == "css-bobyqa":
        optimum = fit_with_css_bobyqa(p, d, q, diffed, include_intercept, init_params, settings)
    else:
        optimum = fit_with_css_cgd(p, d, q, diffed, include_intercept, init_params, settings)

    model = ARIMAModel(p, d, q, optimum.x, include_intercept)
    optimization: OptimizationInfo = {
        "method": method,
        "success": bool(optimum.success),
        "message": str(optimum.message),
        "iterations": int(optimum.get("nit", 0)),
        "evaluations": int(optimum.nfev),
        "log_likelihood": float(optimum.fun),
    }
    return _fit_result(model, init_params, optimization)


def _fit_result(model, init_params, optimization) -> ARIMAFitResult:
    diagnostics = diagnose(model)
    for message in diagnostics["messages"]:
        logger.warning(
            "ARIMA(%d, %d, %d): %s", model.p, model.d, model.q, message
        )
    result: ARIMAFitResult = {
        "model": model,
        "initial_parameters": init_params,
        "optimization": optimization,
        "diagnostics": diagnostics,
    }
    return result


def _css_objective(p, d, q, diffed_y, include_intercept):
    def objective(params):
        return ARIMAModel(p, d, q, params, include_intercept).log_likelihood_css_arma(diffed_y)

    return objective


def fit_with_css_bobyqa(
    p: int,
    d: int,
    q: int,
    diffed_y: Series,
    include_intercept: bool,
    init_params: CoefficientVector,
    config: OptimizerConfig = DEFAULT_OPTIMIZER_CONFIG,
):
    """
    Maximize the CSS log-likelihood with a derivative-free trust region.

    The trust region starts at min(0.96, 0.2·max|θ₀|) and ends at 1e-6 of
    that (minqa defaults); the quadratic model interpolates 2·dim + 1
    points; the domain is unbounded.

    Args:
        p: Autoregressive order
        d: Differencing order
        q: Moving average order
        diffed_y: Series already differenced d times
        include_intercept: Whether the layout starts with an intercept
        init_params: Starting point
        config: Optimizer settings

    Returns:
        scipy OptimizeResult; ``x`` holds the fitted coefficients
    """
    radius_start, radius_end = config.trust_radii(init_params)
    return maximize_derivative_free(
        _css_objective(p, d, q, diffed_y, include_intercept),
        init_params,
        initial_radius=radius_start,
        final_radius=radius_end,
        max_iterations=config.max_iterations,
        max_evaluations=config.max_evaluations,
    )


def fit_with_css_cgd(
    p: int,
    d: int,
    q: int,
    diffed_y: Series,
    include_intercept: bool,
    init_params: CoefficientVector,
    config: OptimizerConfig = DEFAULT_OPTIMIZER_CONFIG,
):
    """
    Maximize the CSS log-likelihood by Fletcher-Reeves conjugate gradient.

    Uses the analytic gradient and stops on a relative / absolute change in
    log-likelihood below the configured tolerances (1e-7 by default).

    Args:
        p: Autoregressive order
        d: Differencing order
        q: Moving average order
        diffed_y: Series already differenced d times
        include_intercept: Whether the layout starts with an intercept
        init_params: Starting point
        config: Optimizer settings

    Returns:
        scipy OptimizeResult; ``x`` holds the fitted coefficients
    """

    def gradient(params):
        return ARIMAModel(p, d, q, params, include_intercept).gradient_log_likelihood_css_arma(
            diffed_y
        )

    return maximize_conjugate_gradient(
        _css_objective(p, d, q, diffed_y, include_intercept),
        gradient,
        init_params,
        relative_tolerance=config.cg_relative_tolerance,
        absolute_tolerance=config.cg_absolute_tolerance,
        max_iterations=config.max_iterations,
        max_evaluations=config.max_evaluations,
        c2=config.line_search_c2,
    )


def hannan_rissanen_init(
    p: int, q: int, y: SeriesLike, include_intercept: bool
) -> CoefficientVector:
    """
    Hannan-Rissanen initial estimates for ARMA(p, q).

    Fits a higher-order AR(m), m = max(p, q) + 1, to estimate the
    innovations, then regresses y[t] on p lags of y and q lags of the
    estimated innovations.

    Args:
        p: Autoregressive order
        q: Moving average order
        y: Series already differenced to the model's order
        include_intercept: Estimate an intercept in the second stage

    Returns:
        Initial parameters [intercept?][AR...][MA...]
    """
    series = np.asarray(y, dtype=float).reshape(-1)
    add_to_lag = 1
    # m > max(p, q)
    m = max(p, q) + add_to_lag

    ar_model = autoregression.fit_model(series, m)
    ar_terms = lag_mat_trim_both(series, m)
    y_trunc = series[m:]
    estimated = ar_terms @ ar_model.coefficients + ar_model.c
    errors = y_trunc - estimated

    # Both blocks start at the same time index
    ar_block = lag_mat_trim_both(y_trunc, p)[max(q - p, 0):]
    error_block = lag_mat_trim_both(errors, q)[max(p - q, 0):]
    design = np.hstack([ar_block, error_block])

    return ols_fit(design, y_trunc[m - add_to_lag:], no_intercept=not include_intercept)


__all__ = [
    "ARIMAModel",
    "fit_model",
    "fit_with_css_bobyqa",
    "fit_with_css_cgd",
    "hannan_rissanen_init",
]
