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
Abstract base for all univariate time series models.

A model maps between an observed series and the i.i.d. innovations that
drive it:

    remove_time_dependent_effects:  observations → innovations
    add_time_dependent_effects:     innovations  → observations

Both directions return new arrays; inputs are never modified.
"""

from abc import ABC, abstractmethod
from typing import Optional

import numpy as np

from ..types.core import Series, SeriesLike


class TimeSeriesModel(ABC):
    """Common interface of AR and ARIMA models."""

    @abstractmethod
    def remove_time_dependent_effects(self, ts: SeriesLike) -> Series:
        """Recover the innovations implied by the model from observations."""

    @abstractmethod
    def add_time_dependent_effects(self, ts: SeriesLike) -> Series:
        """Build observations from innovations by applying the model."""

    def sample(self, n: int, rng: Optional[np.random.Generator] = None) -> Series:
        """
        Draw a series of length n driven by standard normal innovations.

        Args:
            n: Number of observations
            rng: NumPy random generator (a fresh default generator if None)

        Returns:
            Simulated series of length n
        """
        if n < 0:
            raise ValueError(f"n must be non-negative, got {n}")
        generator = np.random.default_rng() if rng is None else rng
        return self.add_time_dependent_effects(generator.standard_normal(n))


__all__ = ["TimeSeriesModel"]
