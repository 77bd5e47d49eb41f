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
arimakit: ARIMA Estimation, Simulation and Forecasting

Conditional-sum-of-squares fitting of ARIMA(p, d, q) and AR(p) models for
univariate series, built on NumPy and SciPy.
"""

# Submodules
from . import models, types, utils

from .config import DEFAULT_OPTIMIZER_CONFIG, OptimizerConfig
from .exceptions import ARIMAError, ModelDiagnosticWarning, UnsupportedMethodError
from .models import (
    ARIMAModel,
    ARModel,
    TimeSeriesModel,
    diagnose,
    fit_ar,
    fit_arima,
    warn_stationarity_and_invertibility,
)

# Types for type hints
from .types import (
    ARIMAFitResult,
    FitMethod,
    ModelDiagnostics,
    OptimizationInfo,
    Series,
)

__version__ = "1.0.0"

__all__ = [
    # Version
    "__version__",
    # Submodules
    "models",
    "types",
    "utils",
    # Models
    "TimeSeriesModel",
    "ARModel",
    "ARIMAModel",
    "fit_ar",
    "fit_arima",
    "diagnose",
    "warn_stationarity_and_invertibility",
    # Configuration
    "OptimizerConfig",
    "DEFAULT_OPTIMIZER_CONFIG",
    # Errors
    "ARIMAError",
    "UnsupportedMethodError",
    "ModelDiagnosticWarning",
    # Types
    "Series",
    "FitMethod",
    "ARIMAFitResult",
    "ModelDiagnostics",
    "OptimizationInfo",
]
