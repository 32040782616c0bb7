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
Poisson Splitting Functions
===========================

A two-parameter family of polynomial splitting functions that cancel
:math:`C` derivatives at the origin (starting from the second) and
:math:`D` derivatives at the cut-off (starting from the zeroth):

.. math::

    S(x) = (1 - x)^{D+1} \sum_{c=0}^{C-1} \binom{D-1+c}{c} \frac{C-c}{C} x^c

with closed-form higher derivatives

.. math::

    S''(x) = \binom{C+D}{C} D \, (1-x)^{D-1} x^{C-1}

For a finite Debye length the polynomial is evaluated at the remapped
variable

.. math::

    x(q) = \frac{1 - e^{2\tilde\kappa q}}{1 - e^{2\tilde\kappa}},
    \qquad \tilde\kappa = \kappa R_c

and differentiated through the chain rule, which makes the scheme exact for
Yukawa potentials.

For an infinite Debye length the following known schemes are recovered:

=============  =====  =====  ==========================================
Type            C      D     Reference
=============  =====  =====  ==========================================
plain           1      -1    Plain Coulomb
wolf            1      0     Undamped Wolf, 10.1063/1.478738
fennell         1      1     Levitt / undamped Fennell, 10.1063/1.2206581
kale            1      2     Kale, 10.1021/ct200392u
mccann          1      3     McCann, 10.1021/ct300961
fukuda          2      1     Undamped Fukuda, 10.1063/1.3582791
markland        2      2     Markland, 10.1016/j.cplett.2008.09.019
stenqvist       3      3     Stenqvist, 10.1088/1367-2630/ab1ec1
fanourgakis     4      3     Fanourgakis, 10.1063/1.3216520
=============  =====  =====  ==========================================
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any

from coulombops.math.combinatorics import binomial, powi

from ..base import Scheme, SchemeParameterError, ShortRangeScheme
from ._parameters import optional_float, required_float, required_int

__all__ = ["PoissonSimple", "Poisson"]

# below this reduced inverse Debye length the remapping is the identity
YUKAWA_THRESHOLD = 1e-6


class _PoissonPolynomial:
    """The polynomial :math:`S(x)` and its first three derivatives.

    Terms with a vanishing integer coefficient are skipped so that negative
    powers of :math:`(1 - x)` or :math:`x` are never evaluated, keeping all
    derivatives finite at both ends of the interval.
    """

    def __init__(self, C: int, D: int):
        if int(C) != C or int(D) != D:
            raise SchemeParameterError(
                "poisson", f"`C` and `D` must be integers, got C={C} and D={D}"
            )
        C, D = int(C), int(D)
        if C < 1 or D < -1:
            raise SchemeParameterError(
                "poisson",
                "`C` must be larger than zero and `D` must be larger or equal "
                f"to negative one, got C={C} and D={D}",
            )
        self.C = C
        self.D = D
        self.coefficients = [
            binomial(D - 1 + c, c) * (C - c) / C for c in range(C)
        ]
        self.binom_cdc = binomial(C + D, C) * D

    def value(self, x: float) -> float:
        tmp = 0.0
        for c, coefficient in enumerate(self.coefficients):
            tmp += coefficient * powi(x, c)
        return powi(1.0 - x, self.D + 1) * tmp

    def first(self, x: float) -> float:
        C, D = self.C, self.D
        tmp1 = 0.0
        tmp2 = 0.0
        for c, coefficient in enumerate(self.coefficients):
            tmp1 += coefficient * powi(x, c)
            if c > 0:
                tmp2 += coefficient * c * powi(x, c - 1)
        result = powi(1.0 - x, D + 1) * tmp2
        if D + 1 != 0:
            result -= (D + 1) * powi(1.0 - x, D) * tmp1
        return result

    def second(self, x: float) -> float:
        if self.binom_cdc == 0:
            return 0.0
        return self.binom_cdc * powi(1.0 - x, self.D - 1) * powi(x, self.C - 1)

    def third(self, x: float) -> float:
        C, D = self.C, self.D
        if self.binom_cdc == 0:
            return 0.0
        result = 0.0
        if D != 1:
            result -= (D - 1) * powi(1.0 - x, D - 2) * powi(x, C - 1)
        if C != 1:
            result += (C - 1) * powi(1.0 - x, D - 1) * powi(x, C - 2)
        return self.binom_cdc * result


class PoissonSimple(ShortRangeScheme):
    """Poisson scheme without Yukawa screening.

    Parameters
    ----------
    cutoff : float
        Cut-off distance.
    C : int
        Number of cancelled derivatives at the origin, starting from the
        second derivative. Must be at least one.
    D : int
        Number of cancelled derivatives at the cut-off, starting from the
        zeroth derivative. Must be at least negative one.

    Raises
    ------
    SchemeParameterError
        If ``C`` or ``D`` is not an integer, ``C < 1`` or ``D < -1``.
    """

    scheme = Scheme.POISSONSIMPLE
    name = "poissonsimple"
    doi = "10.1088/1367-2630/ab1ec1"

    def __init__(self, cutoff: float, C: int, D: int):
        super().__init__(cutoff)
        self._polynomial = _PoissonPolynomial(C, D)
        self.C = self._polynomial.C
        self.D = self._polynomial.D
        a1 = -float(self.C + self.D) / float(self.C)
        self._finalize((a1, a1))

    def short_range_function(self, q: float) -> float:
        return self._polynomial.value(q)

    def short_range_function_derivative(self, q: float) -> float:
        return self._polynomial.first(q)

    def short_range_function_second_derivative(self, q: float) -> float:
        return self._polynomial.second(q)

    def short_range_function_third_derivative(self, q: float) -> float:
        return self._polynomial.third(q)

    def _scheme_fields(self) -> dict[str, Any]:
        return {"C": self.C, "D": self.D}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> PoissonSimple:
        return cls(
            required_float(data, "cutoff"),
            required_int(data, "C"),
            required_int(data, "D"),
        )


class Poisson(ShortRangeScheme):
    """Poisson scheme, also valid for Yukawa potentials.

    Parameters
    ----------
    cutoff : float
        Cut-off distance.
    C : int
        Number of cancelled derivatives at the origin, starting from the
        second derivative. Must be at least one.
    D : int
        Number of cancelled derivatives at the cut-off, starting from the
        zeroth derivative. Must be at least negative one.
    debye_length : float, default=math.inf
        Debye screening length.

    Raises
    ------
    SchemeParameterError
        If ``C`` or ``D`` is not an integer, ``C < 1`` or ``D < -1``.
    """

    scheme = Scheme.POISSON
    name = "poisson"
    doi = "10.1088/1367-2630/ab1ec1"

    def __init__(self, cutoff: float, C: int, D: int, debye_length: float = math.inf):
        super().__init__(cutoff, debye_length)
        self._polynomial = _PoissonPolynomial(C, D)
        self.C = self._polynomial.C
        self.D = self._polynomial.D
        a1 = -float(self.C + self.D) / float(self.C)

        self._kappa_red = self.cutoff / self.debye_length
        self._yukawa = abs(self._kappa_red) > YUKAWA_THRESHOLD
        self._yukawa_denom = 0.0
        if self._yukawa:
            self._yukawa_denom = 1.0 / (1.0 - math.exp(2.0 * self._kappa_red))
            a1 *= -2.0 * self._kappa_red * self._yukawa_denom
        # T0 is taken from the remapped splitting function as-is; whether this
        # holds for Yukawa interactions is unverified
        self._finalize((a1, a1))

    def _remap(self, q: float) -> tuple[float, float, float, float]:
        """Remapped variable and its first three derivatives with respect to ``q``."""
        if not self._yukawa:
            return q, 1.0, 0.0, 0.0
        k = self._kappa_red
        exp2kq = math.exp(2.0 * k * q)
        x = (1.0 - exp2kq) * self._yukawa_denom
        dx = -2.0 * k * exp2kq * self._yukawa_denom
        return x, dx, 2.0 * k * dx, 4.0 * k * k * dx

    def short_range_function(self, q: float) -> float:
        x = self._remap(q)[0]
        return self._polynomial.value(x)

    def short_range_function_derivative(self, q: float) -> float:
        x, dx, _, _ = self._remap(q)
        return self._polynomial.first(x) * dx

    def short_range_function_second_derivative(self, q: float) -> float:
        x, dx, ddx, _ = self._remap(q)
        result = self._polynomial.second(x) * dx * dx
        if self._yukawa:
            result += self._polynomial.first(x) * ddx
        return result

    def short_range_function_third_derivative(self, q: float) -> float:
        x, dx, ddx, dddx = self._remap(q)
        result = self._polynomial.third(x) * dx * dx * dx
        if self._yukawa:
            result += (
                3.0 * self._polynomial.second(x) * dx * ddx
                + self._polynomial.first(x) * dddx
            )
        return result

    def _scheme_fields(self) -> dict[str, Any]:
        return {"C": self.C, "D": self.D}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Poisson:
        return cls(
            required_float(data, "cutoff"),
            required_int(data, "C"),
            required_int(data, "D"),
            optional_float(data, "debyelength"),
        )
