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
Exceptions and warnings raised by arimakit.

Numerical failures from NumPy/SciPy (``numpy.linalg.LinAlgError`` for a
singular regression design, for instance) are propagated unchanged.
"""


class ARIMAError(Exception):
    """Base class for arimakit errors."""


class UnsupportedMethodError(ARIMAError, ValueError):
    """Requested estimation method is not one of the supported CSS strategies."""

    def __init__(self, method, supported):
        self.method = method
        self.supported = tuple(supported)
        super().__init__(
            f"Unsupported fitting method '{method}'. "
            f"Choose one of: {', '.join(self.supported)}"
        )


class ModelDiagnosticWarning(UserWarning):
    """Fitted model is non-stationary or non-invertible."""
