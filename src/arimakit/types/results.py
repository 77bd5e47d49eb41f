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
Fit and Diagnostic Result Types

Result types returned by the estimation routines:
- Stationarity / invertibility diagnostics
- Optimizer termination information
- ARIMA fit result (model + diagnostics)

Fitting never prints or raises for model-quality problems. A non-stationary
AR part or a non-invertible MA part is reported in ``ModelDiagnostics`` and
the caller decides how to surface it.

Usage
-----
>>> from arimakit.models.arima import fit_model
>>>
>>> result = fit_model(1, 0, 1, y)
>>> model = result['model']
>>> if not result['diagnostics']['is_stationary']:
...     print(result['diagnostics']['messages'])
"""

from typing import TYPE_CHECKING, List, Optional

from typing_extensions import TypedDict

from .core import CoefficientVector, FitMethod

if TYPE_CHECKING:
    import numpy as np

    from ..models.arima import ARIMAModel


# ============================================================================
# Diagnostics
# ============================================================================


class ModelDiagnostics(TypedDict):
    """
    Stationarity and invertibility diagnostics of an ARIMA model.

    Fields
    ------
    is_stationary : bool
        All roots of 1 - φ₁x - ... - φₚxᵖ lie outside the unit circle
        (always True for p = 0)
    is_invertible : bool
        All roots of 1 + θ₁x + ... + θ_qx^q lie outside the unit circle
        (always True for q = 0)
    ar_roots : np.ndarray
        Complex roots of the AR polynomial (empty for p = 0)
    ma_roots : np.ndarray
        Complex roots of the MA polynomial (empty for q = 0)
    messages : List[str]
        One human-readable message per failed check
    """

    is_stationary: bool
    is_invertible: bool
    ar_roots: "np.ndarray"
    ma_roots: "np.ndarray"
    messages: List[str]


# ============================================================================
# Optimization
# ============================================================================


class OptimizationInfo(TypedDict):
    """
    Termination summary of a CSS optimization run.

    Reaching the iteration or evaluation cap is not an error: ``success`` is
    False, ``message`` says why, and the best point found is still used.

    Fields
    ------
    method : FitMethod
        'css-bobyqa' or 'css-cgd'
    success : bool
        Whether the optimizer reported convergence
    message : str
        Optimizer termination message
    iterations : int
        Iterations performed
    evaluations : int
        Objective evaluations performed
    log_likelihood : float
        CSS log-likelihood at the returned point
    """

    method: FitMethod
    success: bool
    message: str
    iterations: int
    evaluations: int
    log_likelihood: float


# ============================================================================
# ARIMA Fit
# ============================================================================


class ARIMAFitResult(TypedDict):
    """
    Result of ``arimakit.models.arima.fit_model``.

    Fields
    ------
    model : ARIMAModel
        Fitted, immutable model
    initial_parameters : Optional[CoefficientVector]
        Starting point handed to the optimizer (user-supplied or
        Hannan-Rissanen). None when the pure-AR path was taken.
    optimization : Optional[OptimizationInfo]
        Optimizer summary. None when the pure-AR path was taken.
    diagnostics : ModelDiagnostics
        Stationarity / invertibility report of the fitted model

    Examples
    --------
    >>> result = fit_model(2, 1, 1, y, method='css-bobyqa')
    >>> result['model'].coefficients
    >>> result['optimization']['log_likelihood']
    """

    model: "ARIMAModel"
    initial_parameters: Optional[CoefficientVector]
    optimization: Optional[OptimizationInfo]
    diagnostics: ModelDiagnostics


__all__ = [
    "ModelDiagnostics",
    "OptimizationInfo",
    "ARIMAFitResult",
]
