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
Type definitions for arimakit.

Array aliases live in ``core``; result structures in ``results``.
"""

from .core import (
    FIT_METHODS,
    ArrayLike,
    CoefficientVector,
    CombineOperator,
    DesignMatrix,
    FitMethod,
    Series,
    SeriesLike,
)
from .results import ARIMAFitResult, ModelDiagnostics, OptimizationInfo

__all__ = [
    # Core
    "ArrayLike",
    "Series",
    "SeriesLike",
    "CoefficientVector",
    "DesignMatrix",
    "CombineOperator",
    "FitMethod",
    "FIT_METHODS",
    # Results
    "ModelDiagnostics",
    "OptimizationInfo",
    "ARIMAFitResult",
]
