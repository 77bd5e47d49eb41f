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
Stationarity and Invertibility Diagnostics

**Stationarity** (AR part):
    The process is stationary iff every root of

        Φ(x) = 1 - φ₁x - φ₂x² - ... - φₚxᵖ

    lies strictly outside the unit circle. We check the roots themselves,
    not their inverses, so the test is |root| > 1.

**Invertibility** (MA part):
    The process is invertible iff every root of

        Θ(x) = 1 + θ₁x + θ₂x² + ... + θ_qx^q

    lies strictly outside the unit circle.

A model without AR terms is always stationary and a model without MA terms
is always invertible; both are explicit base cases below.

These checks never raise. ``diagnose`` returns a structured report and
``warn_stationarity_and_invertibility`` turns a report into Python
warnings for callers that want them.

Examples
--------
>>> model = ARIMAModel(1, 0, 1, [0.0, 1.5, 0.5])
>>> is_stationary(model), is_invertible(model)
(False, True)
>>> diagnose(model)['messages']
['AR parameters are not stationary']
"""

import warnings

import numpy as np

from ..exceptions import ModelDiagnosticWarning
from ..types.results import ModelDiagnostics
from ..utils.roots import all_roots_outside_unit_circle, solve_all_complex_roots

NON_STATIONARY_MESSAGE = "AR parameters are not stationary"
NON_INVERTIBLE_MESSAGE = "MA parameters are not invertible"


def ar_polynomial(model) -> np.ndarray:
    """Coefficients of 1 - φ₁x - ... - φₚxᵖ, increasing degree."""
    return np.concatenate([[1.0], -np.asarray(model.ar_coefficients, dtype=float)])


def ma_polynomial(model) -> np.ndarray:
    """Coefficients of 1 + θ₁x + ... + θ_qx^q, increasing degree."""
    return np.concatenate([[1.0], np.asarray(model.ma_coefficients, dtype=float)])


def ar_roots(model) -> np.ndarray:
    if model.p == 0:
        return np.empty(0, dtype=complex)
    return solve_all_complex_roots(ar_polynomial(model))


def ma_roots(model) -> np.ndarray:
    if model.q == 0:
        return np.empty(0, dtype=complex)
    return solve_all_complex_roots(ma_polynomial(model))


def is_stationary(model) -> bool:
    """
    Whether the model's AR part is stationary.

    Args:
        model: ARIMAModel (anything exposing ``p`` and ``ar_coefficients``)

    Returns:
        True for p = 0; otherwise whether all AR roots satisfy |root| > 1
    """
    if model.p == 0:
        return True
    return all_roots_outside_unit_circle(ar_polynomial(model))


def is_invertible(model) -> bool:
    """
    Whether the model's MA part is invertible.

    Args:
        model: ARIMAModel (anything exposing ``q`` and ``ma_coefficients``)

    Returns:
        True for q = 0; otherwise whether all MA roots satisfy |root| > 1
    """
    if model.q == 0:
        return True
    return all_roots_outside_unit_circle(ma_polynomial(model))


def diagnose(model) -> ModelDiagnostics:
    """
    Stationarity and invertibility report for a model.

    Returns:
        ModelDiagnostics with both flags, the polynomial roots and one
        message per failed check
    """
    stationary = is_stationary(model)
    invertible = is_invertible(model)

    messages = []
    if not stationary:
        messages.append(NON_STATIONARY_MESSAGE)
    if not invertible:
        messages.append(NON_INVERTIBLE_MESSAGE)

    result: ModelDiagnostics = {
        "is_stationary": stationary,
        "is_invertible": invertible,
        "ar_roots": ar_roots(model),
        "ma_roots": ma_roots(model),
        "messages": messages,
    }
    return result


def warn_stationarity_and_invertibility(diagnostics: ModelDiagnostics) -> None:
    """
    Emit a ``ModelDiagnosticWarning`` for each failed check.

    Examples
    --------
    >>> result = fit_model(1, 0, 1, y)
    >>> warn_stationarity_and_invertibility(result['diagnostics'])
    """
    for message in diagnostics["messages"]:
        warnings.warn(message, ModelDiagnosticWarning, stacklevel=2)


__all__ = [
    "ar_polynomial",
    "ma_polynomial",
    "ar_roots",
    "ma_roots",
    "is_stationary",
    "is_invertible",
    "diagnose",
    "warn_stationarity_and_invertibility",
]
