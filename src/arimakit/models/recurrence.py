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
ARMA Recurrence Engine
======================

Every ARMA operation (one-step prediction, residual extraction, simulation,
forecasting, CSS likelihood) is the same recurrence with different
bindings:

    for i = max(p, q), ..., n-1:
        out[i] = out[i] ⊕ c
        out[i] = out[i] ⊕ φⱼ·ts[i-j-1]          j = 0..p-1
        out[i] = out[i] ⊕ θⱼ·window[j]          j = 0..q-1
        ε[i]   = errors[i]                       (ErrorDriven)
               = reference[i] - ŷ[i]             (ReferenceDriven)
        window = [ε[i], window[0], ..., window[q-2]]

where ⊕ is the combine operator and ŷ[i] = c + Σφⱼ·ts[i-j-1] + Σθⱼ·window[j]
is the model's one-step-ahead prediction at i.

Bindings
--------
**One-step predictions** (CSS likelihood, fitted values):
    ts = y, dest = 0, ⊕ = +, ReferenceDriven(y)
    → out[i] = ŷ[i], ε[i] = y[i] - ŷ[i]

**Residual extraction** (remove time-dependent effects):
    ts = dest = y, ⊕ = -, ReferenceDriven(y)
    → out[i] = y[i] - ŷ[i] = ε[i]

**Simulation** (add time-dependent effects):
    ts = None (lags read from the output), dest = errors = ε, ⊕ = +,
    ErrorDriven(ε)
    → out[i] = ε[i] + ŷ[i]

**Forward forecast**:
    ts = None, dest = [last observations, 0, 0, ...], ⊕ = +,
    ErrorDriven(0), window seeded with the last realized errors

The rolling window holds exactly q errors, index 0 the most recent. It is
local to each pass and never written back to the caller.

CSS Likelihood and Gradient
---------------------------
With m = max(p, q), n = len(y) - m observations carrying a full lag history,

    RSS = Σᵢ₌ₘ ε[i]²,   σ² = RSS / n
    ℓ   = -(n/2)·ln(2π·σ²) - RSS / (2σ²)

Because σ² is itself RSS/n, the gradient simplifies to

    ∂ℓ/∂θ = -(1/σ²)·Σᵢ ε[i]·∂ε[i]/∂θ

and the error derivatives follow the MA feedback:

    ∂ε[i]/∂c   = -1        - Σₖ θₖ·∂ε[i-k]/∂c
    ∂ε[i]/∂φⱼ  = -y[i-j]   - Σₖ θₖ·∂ε[i-k]/∂φⱼ
    ∂ε[i]/∂θⱼ  = -ε[i-j]   - Σₖ θₖ·∂ε[i-k]/∂θⱼ

The last q rows of derivatives are kept in a (q+1) × k matrix that is
shifted down one row per step.
"""

import operator
from dataclasses import dataclass
from typing import Optional, Union

import numpy as np

from ..types.core import (
    ArrayLike,
    CoefficientVector,
    CombineOperator,
    Series,
    SeriesLike,
)


# ============================================================================
# Error Sources
# ============================================================================


@dataclass(frozen=True, eq=False)
class ReferenceDriven:
    """
    Error at i is ``reference[i]`` minus the model's prediction at i.

    Attributes
    ----------
    reference : array_like
        Series the one-step-ahead predictions are compared against
    """

    reference: SeriesLike


@dataclass(frozen=True, eq=False)
class ErrorDriven:
    """
    Error at i is taken directly from ``errors[i]``.

    Attributes
    ----------
    errors : array_like
        Innovation series
    """

    errors: SeriesLike


ErrorSource = Union[ReferenceDriven, ErrorDriven]


# ============================================================================
# Coefficient Layout
# ============================================================================


@dataclass(frozen=True, eq=False)
class ARMATerms:
    """
    ARMA coefficients split out of the [intercept?][AR][MA] layout.

    Attributes
    ----------
    p : int
        AR order
    q : int
        MA order
    has_intercept : bool
        Whether the layout starts with an intercept
    intercept : float
        Intercept value (0.0 if absent)
    ar : np.ndarray
        AR coefficients φ₁..φₚ
    ma : np.ndarray
        MA coefficients θ₁..θ_q
    """

    p: int
    q: int
    has_intercept: bool
    intercept: float
    ar: CoefficientVector
    ma: CoefficientVector

    @classmethod
    def from_coefficients(
        cls, p: int, q: int, coefficients: ArrayLike, has_intercept: bool = True
    ) -> "ARMATerms":
        coeffs = np.asarray(coefficients, dtype=float).reshape(-1)
        offset = 1 if has_intercept else 0
        if coeffs.size != offset + p + q:
            raise ValueError(
                f"Expected {offset + p + q} coefficients for p={p}, q={q}, "
                f"intercept={has_intercept}; got {coeffs.size}"
            )
        return cls(
            p=p,
            q=q,
            has_intercept=has_intercept,
            intercept=float(coeffs[0]) if has_intercept else 0.0,
            ar=coeffs[offset:offset + p],
            ma=coeffs[offset + p:],
        )

    @property
    def max_lag(self) -> int:
        return max(self.p, self.q)

    @property
    def n_coefficients(self) -> int:
        return int(self.has_intercept) + self.p + self.q


# ============================================================================
# Recurrence
# ============================================================================


def update_ma_errors(window: ArrayLike, new_error: float) -> np.ndarray:
    """
    Push a new error into the MA window.

    Args:
        window: Errors for t-1, ..., t-q (index 0 most recent)
        new_error: Error at time t

    Returns:
        New window [new_error, window[0], ..., window[q-2]]. The oldest error
        falls off the end. An empty window stays empty.

    Examples
    --------
    >>> update_ma_errors([0.3, 0.2, 0.1], 0.4)
    array([0.4, 0.3, 0.2])
    """
    errs = np.asarray(window, dtype=float).reshape(-1)
    if errs.size == 0:
        return errs.copy()
    return np.concatenate(([float(new_error)], errs[:-1]))


def iterate_arma(
    terms: ARMATerms,
    ts: Optional[SeriesLike],
    dest: SeriesLike,
    combine: CombineOperator,
    source: ErrorSource,
    init_ma_terms: Optional[ArrayLike] = None,
) -> Series:
    """
    Run the ARMA recurrence from index max(p, q) to the end of ``dest``.

    Args:
        terms: Model coefficients
        ts: Series supplying the AR lags. None reads the lags from the
            output as it is built (recursive application).
        dest: Initial value at each index; copied, never modified
        combine: Operator folding each model term into the running value
        source: ``ReferenceDriven`` or ``ErrorDriven`` error source
        init_ma_terms: Initial MA window of length q, most recent first.
            Zeros if None.

    Returns:
        New series holding the combined values

    Raises:
        TypeError: If ``source`` is not a ReferenceDriven / ErrorDriven
        ValueError: If series lengths disagree or the MA seed has the wrong
            length
    """
    out = np.array(dest, dtype=float, copy=True).reshape(-1)
    n = out.size

    if ts is None:
        lags = out
    else:
        lags = np.asarray(ts, dtype=float).reshape(-1)
        if lags.size != n:
            raise ValueError(f"ts has length {lags.size}, dest has length {n}")

    if isinstance(source, ReferenceDriven):
        reference = np.asarray(source.reference, dtype=float).reshape(-1)
        errors = None
        if reference.size != n:
            raise ValueError(f"reference has length {reference.size}, dest has length {n}")
    elif isinstance(source, ErrorDriven):
        reference = None
        errors = np.asarray(source.errors, dtype=float).reshape(-1)
        if errors.size != n:
            raise ValueError(f"errors has length {errors.size}, dest has length {n}")
    else:
        raise TypeError(
            f"source must be ReferenceDriven or ErrorDriven, got {type(source).__name__}"
        )

    if init_ma_terms is None:
        window = np.zeros(terms.q)
    else:
        window = np.array(init_ma_terms, dtype=float, copy=True).reshape(-1)
        if window.size != terms.q:
            raise ValueError(f"MA seed must have length q={terms.q}, got {window.size}")

    for i in range(terms.max_lag, n):
        prediction = terms.intercept
        out[i] = combine(out[i], terms.intercept)

        for j in range(min(terms.p, i)):
            term = lags[i - j - 1] * terms.ar[j]
            out[i] = combine(out[i], term)
            prediction += term

        for j in range(terms.q):
            term = window[j] * terms.ma[j]
            out[i] = combine(out[i], term)
            prediction += term

        error = errors[i] if errors is not None else reference[i] - prediction
        window = update_ma_errors(window, error)

    return out


def one_step_predictions(terms: ARMATerms, y: SeriesLike) -> Series:
    """One-step-ahead predictions ŷ[i] for i ≥ max(p, q); zeros before."""
    y_np = np.asarray(y, dtype=float).reshape(-1)
    return iterate_arma(terms, y_np, np.zeros(y_np.size), operator.add, ReferenceDriven(y_np))


# ============================================================================
# Conditional Sum of Squares
# ============================================================================


def css_log_likelihood(terms: ARMATerms, diffed_y: SeriesLike) -> float:
    """
    Conditional-sum-of-squares log-likelihood of an ARMA process.

    The first max(p, q) observations only seed the lags; they enter neither
    the residual sum of squares nor the observation count n.

    Args:
        terms: Model coefficients
        diffed_y: Series already differenced to the model's order

    Returns:
        ℓ = -(n/2)·ln(2πσ²) - RSS/(2σ²), σ² = RSS/n
    """
    y = np.asarray(diffed_y, dtype=float).reshape(-1)
    y_hat = one_step_predictions(terms, y)

    max_lag = terms.max_lag
    n = y.size - max_lag
    css = float(np.sum((y[max_lag:] - y_hat[max_lag:]) ** 2))
    sigma2 = css / n
    return -n / 2.0 * np.log(2.0 * np.pi * sigma2) - css / (2.0 * sigma2)


def css_gradient(terms: ARMATerms, diffed_y: SeriesLike) -> CoefficientVector:
    """
    Analytic gradient of ``css_log_likelihood`` w.r.t. the coefficients.

    Args:
        terms: Model coefficients
        diffed_y: Series already differenced to the model's order

    Returns:
        Gradient in the [intercept?][AR][MA] layout
    """
    y = np.asarray(diffed_y, dtype=float).reshape(-1)
    p, q = terms.p, terms.q
    offset = int(terms.has_intercept)
    k = terms.n_coefficients
    max_lag = terms.max_lag

    window = np.zeros(q)
    # Row r holds ∂ε/∂θ at time t - r
    d_errors = np.zeros((q + 1, k))
    gradient = np.zeros(k)
    css = 0.0

    for i in range(max_lag, y.size):
        # Chain rule through the MA feedback
        d_errors[0] = -(terms.ma @ d_errors[1:])
        if terms.has_intercept:
            d_errors[0, 0] -= 1.0

        ar_lags = y[i - p:i][::-1]
        d_errors[0, offset:offset + p] -= ar_lags
        d_errors[0, offset + p:] -= window

        prediction = terms.intercept + ar_lags @ terms.ar + window @ terms.ma
        error = y[i] - prediction
        css += error * error

        gradient += d_errors[0] * error
        window = update_ma_errors(window, error)
        d_errors[1:] = d_errors[:-1].copy()
        d_errors[0] = 0.0

    sigma2 = css / (y.size - max_lag)
    return gradient / -sigma2


__all__ = [
    "ReferenceDriven",
    "ErrorDriven",
    "ErrorSource",
    "ARMATerms",
    "update_ma_errors",
    "iterate_arma",
    "one_step_predictions",
    "css_log_likelihood",
    "css_gradient",
]
