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
Nonlinear Optimizers

Two maximizers used by the CSS estimators:

**Derivative-free:**
- ``maximize_derivative_free`` - Powell's trust-region method with quadratic
  interpolation models (SciPy's COBYQA, the successor of BOBYQA). The model
  is built on 2n+1 interpolation points. The trust radius shrinks from
  ``initial_radius`` to ``final_radius``.

**Gradient-based:**
- ``maximize_conjugate_gradient`` - nonlinear conjugate gradient with the
  Fletcher-Reeves update

      β_k = ||g_{k+1}||² / ||g_k||²
      d_{k+1} = -g_{k+1} + β_k·d_k

  and a strong-Wolfe line search (``scipy.optimize.line_search``). The
  direction is reset to steepest descent every n iterations and whenever it
  stops being a descent direction. Iteration stops when the objective
  changes by less than the relative or absolute tolerance:

      |f_k - f_{k+1}| ≤ max(rtol·max(|f_k|, |f_{k+1}|), atol)

Both work on the negated objective internally and return a
``scipy.optimize.OptimizeResult`` in the maximization sense (``fun`` is the
maximized value). Running into the iteration or evaluation cap is reported
through ``success=False`` and ``message``; the best point found is returned.
"""

import logging
from typing import Callable

import numpy as np
from scipy.optimize import OptimizeResult, line_search, minimize

from ..types.core import ArrayLike

logger = logging.getLogger(__name__)

ObjectiveFunction = Callable[[np.ndarray], float]
GradientFunction = Callable[[np.ndarray], np.ndarray]


# ============================================================================
# Derivative-Free Trust Region
# ============================================================================


def maximize_derivative_free(
    objective: ObjectiveFunction,
    x0: ArrayLike,
    initial_radius: float,
    final_radius: float,
    max_iterations: int = 10_000,
    max_evaluations: int = 10_000,
) -> OptimizeResult:
    """
    Maximize an objective without derivatives, unbounded domain.

    Args:
        objective: Scalar function to maximize
        x0: Initial guess
        initial_radius: Starting trust-region radius
        final_radius: Trust-region radius at which iteration stops
        max_iterations: Iteration cap
        max_evaluations: Objective evaluation cap

    Returns:
        OptimizeResult with ``x`` the best point and ``fun`` its objective
        value
    """
    x_start = np.asarray(x0, dtype=float).reshape(-1)

    result = minimize(
        lambda params: -objective(params),
        x_start,
        method="COBYQA",
        options={
            "initial_tr_radius": initial_radius,
            "final_tr_radius": final_radius,
            "maxiter": max_iterations,
            "maxfev": max_evaluations,
        },
    )
    result.fun = -float(result.fun)

    logger.debug(
        "Trust-region optimizer stopped after %d evaluations: %s",
        result.nfev,
        result.message,
    )
    return result


# ============================================================================
# Fletcher-Reeves Conjugate Gradient
# ============================================================================


def _values_converged(previous: float, current: float, rtol: float, atol: float) -> bool:
    difference = abs(previous - current)
    size = max(abs(previous), abs(current))
    return difference <= rtol * size or difference <= atol


def maximize_conjugate_gradient(
    objective: ObjectiveFunction,
    gradient: GradientFunction,
    x0: ArrayLike,
    relative_tolerance: float = 1e-7,
    absolute_tolerance: float = 1e-7,
    max_iterations: int = 10_000,
    max_evaluations: int = 10_000,
    c2: float = 0.4,
) -> OptimizeResult:
    """
    Maximize a smooth objective with Fletcher-Reeves conjugate gradient.

    Args:
        objective: Scalar function to maximize
        gradient: Gradient of ``objective``
        x0: Initial guess
        relative_tolerance: Relative objective-change tolerance
        absolute_tolerance: Absolute objective-change tolerance
        max_iterations: Iteration cap
        max_evaluations: Objective evaluation cap
        c2: Curvature constant of the strong Wolfe conditions

    Returns:
        OptimizeResult with ``x``, ``fun`` (maximized value), ``jac``,
        ``nit``, ``nfev``, ``njev``, ``success`` and ``message``

    Examples
    --------
    >>> f = lambda x: -((x[0] - 1.0) ** 2 + 2.0 * (x[1] + 0.5) ** 2)
    >>> g = lambda x: np.array([-2.0 * (x[0] - 1.0), -4.0 * (x[1] + 0.5)])
    >>> result = maximize_conjugate_gradient(f, g, [0.0, 0.0])
    >>> np.round(result.x, 4)
    array([ 1. , -0.5])
    """

    def neg_f(params):
        with np.errstate(over="ignore", invalid="ignore"):
            value = -float(objective(params))
        # Overflowing trial points are rejected by the line search
        return value if np.isfinite(value) else np.inf

    def neg_g(params):
        with np.errstate(over="ignore", invalid="ignore"):
            return -np.asarray(gradient(params), dtype=float)

    x = np.asarray(x0, dtype=float).reshape(-1).copy()
    n = x.size
    f_x = neg_f(x)
    g_x = neg_g(x)
    nfev, njev = 1, 1

    if not np.isfinite(f_x) or not np.all(np.isfinite(g_x)):
        return OptimizeResult(
            x=x,
            fun=-f_x,
            jac=-g_x,
            nit=0,
            nfev=nfev,
            njev=njev,
            success=False,
            message="Objective is not finite at the initial point",
        )

    # Makes the first trial step 1/||g|| long instead of 1
    f_previous = f_x + np.linalg.norm(g_x) / 2.0
    direction = -g_x
    success = False
    message = "Maximum number of iterations reached"
    restarted = True
    iteration = 0

    while iteration < max_iterations:
        if not np.any(g_x):
            success = True
            message = "Gradient vanished"
            break
        if nfev >= max_evaluations:
            message = "Maximum number of function evaluations reached"
            break

        alpha, fc, gc, f_new, _, g_new = line_search(
            neg_f,
            neg_g,
            x,
            direction,
            gfk=g_x,
            old_fval=f_x,
            old_old_fval=f_previous,
            c2=c2,
        )
        nfev += fc
        njev += gc

        if alpha is not None and g_new is None:
            g_new = neg_g(x + alpha * direction)
            njev += 1
        step_ok = (
            alpha is not None
            and f_new is not None
            and np.isfinite(f_new)
            and np.all(np.isfinite(g_new))
        )

        if not step_ok:
            if restarted:
                message = "Line search could not find an acceptable step"
                break
            # Retry once along steepest descent
            direction = -g_x
            restarted = True
            continue

        # Accepted steps satisfy sufficient decrease, so x is always the
        # best point seen so far
        iteration += 1
        x = x + alpha * direction

        converged = _values_converged(f_x, f_new, relative_tolerance, absolute_tolerance)
        f_previous, f_x = f_x, f_new

        if converged:
            g_x = g_new
            success = True
            message = "Objective value change below tolerance"
            break

        beta = float(g_new @ g_new) / float(g_x @ g_x)
        g_x = g_new
        if iteration % n == 0:
            direction = -g_x
            restarted = True
        else:
            direction = -g_x + beta * direction
            restarted = False
            if direction @ g_x >= 0:
                direction = -g_x
                restarted = True

    logger.debug(
        "Conjugate gradient stopped after %d iterations, %d evaluations: %s",
        iteration,
        nfev,
        message,
    )

    return OptimizeResult(
        x=x,
        fun=-f_x,
        jac=-g_x,
        nit=iteration,
        nfev=nfev,
        njev=njev,
        success=success,
        message=message,
    )


__all__ = ["maximize_derivative_free", "maximize_conjugate_gradient"]
