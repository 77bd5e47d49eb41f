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
Optimizer configuration for CSS estimation.

The defaults reproduce the classic settings of the CSS fitting routine:
10,000 iteration / evaluation caps, 1e-7 value tolerances for conjugate
gradient, and a trust region starting at min(0.96, 0.2·max|θ₀|) and ending
six orders of magnitude smaller for the derivative-free optimizer (the
defaults suggested for BOBYQA in R's minqa).
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class OptimizerConfig:
    """
    Settings shared by both CSS optimization strategies.

    Attributes
    ----------
    max_iterations : int
        Hard iteration ceiling. Reaching it is not an error.
    max_evaluations : int
        Hard objective-evaluation ceiling. Reaching it is not an error.
    cg_relative_tolerance : float
        Relative change in objective value below which CG stops
    cg_absolute_tolerance : float
        Absolute change in objective value below which CG stops
    line_search_c2 : float
        Curvature constant of the strong Wolfe line search used by CG
    trust_radius_cap : float
        Upper bound on the starting trust-region radius
    trust_radius_scale : float
        Starting radius is this fraction of the largest |initial parameter|
    trust_radius_end_ratio : float
        Final radius as a fraction of the starting radius
    """

    max_iterations: int = 10_000
    max_evaluations: int = 10_000
    cg_relative_tolerance: float = 1e-7
    cg_absolute_tolerance: float = 1e-7
    line_search_c2: float = 0.4
    trust_radius_cap: float = 0.96
    trust_radius_scale: float = 0.2
    trust_radius_end_ratio: float = 1e-6

    def __post_init__(self):
        if self.max_iterations <= 0:
            raise ValueError(f"max_iterations must be positive, got {self.max_iterations}")
        if self.max_evaluations <= 0:
            raise ValueError(f"max_evaluations must be positive, got {self.max_evaluations}")
        if not 0 < self.line_search_c2 < 1:
            raise ValueError(f"line_search_c2 must be in (0, 1), got {self.line_search_c2}")

    def trust_radii(self, initial_parameters) -> tuple:
        """
        (start, end) trust-region radii for a given starting point.

        An all-zero starting point is treated as if its largest entry were 1.
        """
        largest = max((abs(float(v)) for v in initial_parameters), default=0.0)
        if largest == 0.0:
            largest = 1.0
        start = min(self.trust_radius_cap, self.trust_radius_scale * largest)
        return start, start * self.trust_radius_end_ratio


DEFAULT_OPTIMIZER_CONFIG = OptimizerConfig()
