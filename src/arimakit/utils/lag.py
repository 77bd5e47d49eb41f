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
Lag and Difference Utilities

Pure data transforms used by the estimators:

- ``differences_of_order_d`` / ``inverse_differences_of_order_d``
- ``differences_at_lag`` / ``inverse_differences_at_lag``
- ``lag_mat_trim_both`` - lagged design matrix

Differencing keeps the series length. After differencing of order d the
first d entries hold the lower-order differences at those positions:

    out[k] = Δᵏ x[k]   for k < d
    out[t] = Δᵈ x[t]   for t ≥ d

which is exactly the seed that ``inverse_differences_of_order_d`` needs to
rebuild the original series. Estimators drop those first d entries.

Examples
--------
>>> x = np.array([1.0, 4.0, 9.0, 16.0, 25.0])
>>> differences_of_order_d(x, 2)
array([1., 3., 2., 2., 2.])
>>> inverse_differences_of_order_d(differences_of_order_d(x, 2), 2)
array([ 1.,  4.,  9., 16., 25.])
"""

from typing import Optional

import numpy as np

from ..types.core import DesignMatrix, Series, SeriesLike


def _as_series(ts: SeriesLike) -> Series:
    return np.array(ts, dtype=float, copy=True).reshape(-1)


def differences_at_lag(
    ts: SeriesLike, lag: int = 1, start_index: Optional[int] = None
) -> Series:
    """
    Lagged differences x[i] - x[i - lag] for i ≥ start_index.

    Entries before ``start_index`` are copied unchanged. ``start_index``
    defaults to ``lag``.
    """
    if lag < 1:
        raise ValueError(f"lag must be positive, got {lag}")
    start = lag if start_index is None else start_index
    if start < lag:
        raise ValueError(f"start_index must be at least lag={lag}, got {start}")

    x = _as_series(ts)
    out = x.copy()
    out[start:] = x[start:] - x[start - lag:x.size - lag]
    return out


def inverse_differences_at_lag(
    diffed_ts: SeriesLike, lag: int = 1, start_index: Optional[int] = None
) -> Series:
    """
    Inverse of ``differences_at_lag``: out[i] = out[i - lag] + diffed[i].

    Entries before ``start_index`` are taken as already integrated.
    """
    if lag < 1:
        raise ValueError(f"lag must be positive, got {lag}")
    start = lag if start_index is None else start_index
    if start < lag:
        raise ValueError(f"start_index must be at least lag={lag}, got {start}")

    out = _as_series(diffed_ts)
    # Each residue class modulo lag is an independent running sum
    for i in range(start, out.size):
        out[i] = out[i - lag] + out[i]
    return out


def differences_of_order_d(ts: SeriesLike, d: int) -> Series:
    """
    Difference a series d times at lag 1.

    Args:
        ts: Series to difference
        d: Differencing order (d ≥ 0)

    Returns:
        Series of the same length. The first d entries carry the
        lower-order differences Δᵏx[k] needed to undo the operation.

    Raises:
        ValueError: If d is negative
    """
    if d < 0:
        raise ValueError(f"Differencing order must be non-negative, got {d}")

    diffed = _as_series(ts)
    # Starting at index i preserves the first i lower-order values
    for i in range(1, d + 1):
        diffed = differences_at_lag(diffed, 1, i)
    return diffed


def inverse_differences_of_order_d(diffed_ts: SeriesLike, d: int) -> Series:
    """
    Undo ``differences_of_order_d``.

    ``diffed_ts`` must carry the lower-order seed values in its first d
    entries, in the layout produced by ``differences_of_order_d``.

    Args:
        diffed_ts: Differenced series with seed prefix
        d: Differencing order (d ≥ 0)

    Returns:
        Integrated series of the same length
    """
    if d < 0:
        raise ValueError(f"Differencing order must be non-negative, got {d}")

    added = _as_series(diffed_ts)
    for i in range(d, 0, -1):
        added = inverse_differences_at_lag(added, 1, i)
    return added


def lag_mat_trim_both(
    x: SeriesLike, max_lag: int, include_original: bool = False
) -> DesignMatrix:
    """
    Matrix of lagged values, dropping rows without a full lag history.

    Row r corresponds to time index t = max_lag + r and holds

        [x[t]]  (only if include_original)
        x[t-1], x[t-2], ..., x[t-max_lag]

    Args:
        x: Series to lag
        max_lag: Number of lags (≥ 0); 0 gives no lag columns
        include_original: Prepend the unlagged value as first column

    Returns:
        Array of shape (len(x) - max_lag, max_lag [+ 1])

    Raises:
        ValueError: If max_lag is negative or exceeds the series length

    Examples
    --------
    >>> lag_mat_trim_both([1.0, 2.0, 3.0, 4.0], 2)
    array([[2., 1.],
           [3., 2.]])
    """
    series = _as_series(x)
    n = series.size
    if max_lag < 0:
        raise ValueError(f"max_lag must be non-negative, got {max_lag}")
    if max_lag > n:
        raise ValueError(f"max_lag={max_lag} exceeds series length {n}")

    n_rows = n - max_lag
    first_lag = 0 if include_original else 1
    columns = [
        series[max_lag - lag:n - lag] for lag in range(first_lag, max_lag + 1)
    ]
    if not columns:
        return np.empty((n_rows, 0))
    return np.column_stack(columns)


__all__ = [
    "differences_at_lag",
    "inverse_differences_at_lag",
    "differences_of_order_d",
    "inverse_differences_of_order_d",
    "lag_mat_trim_both",
]
