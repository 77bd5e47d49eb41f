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
Time series models.

Note that ``autoregression.fit_model`` and ``arima.fit_model`` share a name;
they are re-exported here as ``fit_ar`` and ``fit_arima``.
"""

from .arima import (
    ARIMAModel,
    fit_with_css_bobyqa,
    fit_with_css_cgd,
    hannan_rissanen_init,
)
from .arima import fit_model as fit_arima
from .autoregression import ARModel
from .autoregression import fit_model as fit_ar
from .base import TimeSeriesModel
from .diagnostics import (
    diagnose,
    is_invertible,
    is_stationary,
    warn_stationarity_and_invertibility,
)
from .recurrence import (
    ARMATerms,
    ErrorDriven,
    ReferenceDriven,
    css_gradient,
    css_log_likelihood,
    iterate_arma,
    update_ma_errors,
)

__all__ = [
    # Base
    "TimeSeriesModel",
    # AR
    "ARModel",
    "fit_ar",
    # ARIMA
    "ARIMAModel",
    "fit_arima",
    "fit_with_css_bobyqa",
    "fit_with_css_cgd",
    "hannan_rissanen_init",
    # Recurrence
    "ARMATerms",
    "ReferenceDriven",
    "ErrorDriven",
    "iterate_arma",
    "update_ma_errors",
    "css_log_likelihood",
    "css_gradient",
    # Diagnostics
    "diagnose",
    "is_stationary",
    "is_invertible",
    "warn_stationarity_and_invertibility",
]
