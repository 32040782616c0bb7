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
Ewald Real-Space Splitting Function
===================================

The real-space part of the Ewald summation, optionally for a screened
(Yukawa) potential. With the reduced damping parameter
:math:`\tilde\alpha = \alpha R_c` and :math:`\beta = \kappa / (2\alpha)`:

.. math::

    s(q) = \frac{1}{2}\left[
        \text{erfc}(\tilde\alpha q + \beta) e^{4\tilde\alpha\beta q}
        + \text{erfc}(\tilde\alpha q - \beta) \right]

For an infinite Debye length :math:`\beta = 0` and this reduces to the usual
:math:`s(q) = \text{erfc}(\tilde\alpha q)`. Multiplied by the Yukawa factor
:math:`e^{-\kappa r}` applied in the generic layer, the potential becomes the
screened Ewald real-space kernel
:math:`[\text{erfc}(\alpha r + \beta)e^{\kappa r} + \text{erfc}(\alpha r - \beta)e^{-\kappa r}] / 2r`.

References
----------
- Ewald, Ann. Phys. 369, 253 (1921)
- Salin & Caillol, J. Chem. Phys. 113, 10459 (2000) - Yukawa Ewald sums
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any

from ..base import Scheme, SchemeParameterError, ShortRangeScheme
from ._parameters import optional_float, required_float

__all__ = ["Ewald"]

SQRT_PI = math.sqrt(math.pi)


class Ewald(ShortRangeScheme):
    """Ewald real-space scheme.

    Parameters
    ----------
    cutoff : float
        Cut-off distance.
    alpha : float
        Damping parameter (inverse length units).
    eps_sur : float, default=math.inf
        Dielectric constant of the surrounding medium; values below one are
        treated as conducting (tin-foil) boundary conditions.
    debye_length : float, default=math.inf
        Debye screening length.
    """

    scheme = Scheme.EWALD
    name = "Ewald real-space"

    def __init__(
        self,
        cutoff: float,
        alpha: float,
        eps_sur: float = math.inf,
        debye_length: float = math.inf,
    ):
        super().__init__(cutoff, debye_length)
        alpha = float(alpha)
        if not alpha > 0.0:
            raise SchemeParameterError(
                "alpha", f"alpha must be larger than zero, got {alpha}"
            )
        eps_sur = float(eps_sur)
        if eps_sur < 1.0:
            eps_sur = math.inf
        self.alpha = alpha
        self.eps_sur = eps_sur
        self._alpha_red = alpha * self.cutoff
        self._beta = self.kappa / (2.0 * alpha)

        alpha_red = self._alpha_red
        beta = self._beta
        beta2 = beta * beta
        self_energy_prefactor = (
            -alpha_red / SQRT_PI * (math.exp(-beta2) + SQRT_PI * beta * math.erf(beta)),
            -(alpha_red**3)
            * 2.0
            / 3.0
            / SQRT_PI
            * (
                2.0 * SQRT_PI * beta2 * beta * math.erfc(beta)
                + (1.0 - 2.0 * beta2) * math.exp(-beta2)
            ),
        )
        if math.isinf(eps_sur):
            T0 = 1.0
        else:
            T0 = 2.0 * (eps_sur - 1.0) / (2.0 * eps_sur + 1.0)
        self._finalize(self_energy_prefactor, T0)

    def _terms(self, q: float) -> tuple[float, float]:
        """Gaussian and screened-erfc terms shared by all derivatives."""
        a = self._alpha_red
        beta = self._beta
        gaussian = math.exp(-((a * q - beta) ** 2))
        screened_erfc = math.erfc(a * q + beta) * math.exp(4.0 * a * beta * q)
        return gaussian, screened_erfc

    def short_range_function(self, q: float) -> float:
        a = self._alpha_red
        beta = self._beta
        return 0.5 * (
            math.erfc(a * q + beta) * math.exp(4.0 * a * beta * q)
            + math.erfc(a * q - beta)
        )

    def short_range_function_derivative(self, q: float) -> float:
        a = self._alpha_red
        beta = self._beta
        gaussian, screened_erfc = self._terms(q)
        return -2.0 * a / SQRT_PI * gaussian + 2.0 * a * beta * screened_erfc

    def short_range_function_second_derivative(self, q: float) -> float:
        a = self._alpha_red
        beta = self._beta
        gaussian, screened_erfc = self._terms(q)
        return (
            4.0 * a * a / SQRT_PI * (a * q - 2.0 * beta) * gaussian
            + 8.0 * a * a * beta * beta * screened_erfc
        )

    def short_range_function_third_derivative(self, q: float) -> float:
        a = self._alpha_red
        beta = self._beta
        gaussian, screened_erfc = self._terms(q)
        return (
            4.0
            * a**3
            / SQRT_PI
            * (1.0 - 2.0 * (a * q - 2.0 * beta) * (a * q - beta) - 4.0 * beta * beta)
            * gaussian
            + 32.0 * a**3 * beta**3 * screened_erfc
        )

    def _scheme_fields(self) -> dict[str, Any]:
        return {
            "alpha": self.alpha,
            "epss": "inf" if math.isinf(self.eps_sur) else self.eps_sur,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Ewald:
        return cls(
            required_float(data, "cutoff"),
            required_float(data, "alpha"),
            optional_float(data, "epss"),
            optional_float(data, "debyelength"),
        )
