# SPDX-FileCopyrightText: Copyright (c) 2025 - 2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
# http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

r"""
Wolf Splitting Function
=======================

Damped, shifted Coulomb potential of Wolf et al.:

.. math::

    s(q) = \text{erfc}(\tilde\alpha q) - q \, \text{erfc}(\tilde\alpha),
    \qquad \tilde\alpha = \alpha R_c

The shift makes the potential vanish exactly at the cut-off, :math:`s(1) = 0`.

References
----------
- Wolf et al., J. Chem. Phys. 110, 8254 (1999)
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any

from ..base import Scheme, SchemeParameterError, ShortRangeScheme
from ._parameters import required_float

__all__ = ["Wolf"]

SQRT_PI = math.sqrt(math.pi)


class Wolf(ShortRangeScheme):
    """Wolf scheme.

    Parameters
    ----------
    cutoff : float
        Cut-off distance.
    alpha : float
        Damping parameter (inverse length units).
    """

    scheme = Scheme.WOLF
    name = "Wolf"
    doi = "10.1063/1.478738"

    def __init__(self, cutoff: float, alpha: float):
        super().__init__(cutoff)
        alpha = float(alpha)
        if not alpha > 0.0:
            raise SchemeParameterError(
                "alpha", f"alpha must be larger than zero, got {alpha}"
            )
        self.alpha = alpha
        self._alpha_red = alpha * self.cutoff
        self._erfc_alpha_red = math.erfc(self._alpha_red)
        self._finalize(
            (
                -self._alpha_red / SQRT_PI,
                -(self._alpha_red**3) * 2.0 / 3.0 / SQRT_PI,
            )
        )

    def short_range_function(self, q: float) -> float:
        return math.erfc(self._alpha_red * q) - q * self._erfc_alpha_red

    def short_range_function_derivative(self, q: float) -> float:
        a = self._alpha_red
        return -2.0 * math.exp(-a * a * q * q) * a / SQRT_PI - self._erfc_alpha_red

    def short_range_function_second_derivative(self, q: float) -> float:
        a = self._alpha_red
        return 4.0 * math.exp(-a * a * q * q) * a**3 * q / SQRT_PI

    def short_range_function_third_derivative(self, q: float) -> float:
        a = self._alpha_red
        return -8.0 * math.exp(-a * a * q * q) * a**3 * (a * a * q * q - 0.5) / SQRT_PI

    def _scheme_fields(self) -> dict[str, Any]:
        return {"alpha": self.alpha}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Wolf:
        return cls(required_float(data, "cutoff"), required_float(data, "alpha"))
