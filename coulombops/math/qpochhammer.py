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
q-Pochhammer Symbol
===================

The truncated q-Pochhammer symbol used by the moment-cancelling q-potential
splitting function, together with its first three derivatives in :math:`q`.

Mathematical Formulation
------------------------

For a normalized distance :math:`q \in [0, 1]`, base-interaction index
:math:`l` (0 ion-ion, 1 ion-dipole, 2 dipole-dipole, ...) and truncation
order :math:`P`:

.. math::

    (q^l; q)_P = \prod_{n=1}^{P} \left(1 - q^{n+l}\right)
               = (1 - q)^P \prod_{n=1}^{P} g_n(q),
    \qquad g_n(q) = \sum_{k=0}^{n+l-1} q^k

The derivatives follow from the logarithmic derivative of the product,

.. math::

    \frac{d}{dq} \prod_n g_n = \left(\prod_n g_n\right) \sum_n \frac{g_n'}{g_n}

carried to third order and combined with the derivatives of :math:`(1-q)^P`
through the Leibniz rule.

The factor :math:`(1 - q)` is multiplied into each :math:`g_n` while the
product is accumulated, so every partial product stays bounded by one and
the symbol is exactly zero at :math:`q = 1` for :math:`P \geq 1`.

References
----------
- http://mathworld.wolfram.com/q-PochhammerSymbol.html
"""

from __future__ import annotations

__all__ = [
    "qpochhammer_symbol",
    "qpochhammer_symbol_derivative",
    "qpochhammer_symbol_second_derivative",
    "qpochhammer_symbol_third_derivative",
    "qpochhammer_symbol_derivatives",
]

# P = 300 gives an error of about 1e-17 for l < 4
DEFAULT_ORDER = 300


def qpochhammer_symbol_derivatives(
    q: float, l: int = 0, P: int = DEFAULT_ORDER
) -> tuple[float, float, float, float]:
    """Evaluate the q-Pochhammer symbol and its first three derivatives.

    Parameters
    ----------
    q : float
        Normalized distance, :math:`q = r / R_c`, in [0, 1].
    l : int, default=0
        Type of base interaction (0 ion-ion, 1 ion-dipole, ...).
    P : int, default=300
        Truncation order, i.e. the number of higher order moments to cancel.

    Returns
    -------
    tuple[float, float, float, float]
        The symbol and its first, second and third derivative with respect
        to ``q``.
    """
    if l < 0:
        raise ValueError(f"l must be non-negative, got {l}")
    if P < 0:
        raise ValueError(f"P must be non-negative, got {P}")

    q = float(q)
    one_minus_q = 1.0 - q

    # g_n and its derivatives, grown one power of q at a time
    g = 0.0
    dg = 0.0
    ddg = 0.0
    dddg = 0.0
    k = 0

    # products[i] = prod_n g_n * (1 - q)^(P - i), i.e. the i'th derivative of
    # (1 - q)^P up to its integer coefficient
    products = [1.0, 1.0, 1.0, 1.0]

    # log-derivative sums: DS = sum g'/g and its first two derivatives
    DS = 0.0
    dDS = 0.0
    ddDS = 0.0

    for n in range(1, P + 1):
        while k < n + l:
            g += q**k
            if k >= 1:
                dg += k * q ** (k - 1)
            if k >= 2:
                ddg += k * (k - 1) * q ** (k - 2)
            if k >= 3:
                dddg += k * (k - 1) * (k - 2) * q ** (k - 3)
            k += 1

        for i in range(4):
            if n <= P - i:
                products[i] *= one_minus_q * g
            else:
                products[i] *= g

        DS += dg / g
        dDS += (ddg * g - dg * dg) / (g * g)
        ddDS += (dddg * g * g - 3.0 * dg * ddg * g + 2.0 * dg * dg * dg) / (g * g * g)

    # derivatives of prod_n g_n, in units of the product itself
    d1 = DS
    d2 = DS * DS + dDS
    d3 = DS * DS * DS + 3.0 * DS * dDS + ddDS

    value = products[0]
    first = products[0] * d1
    second = products[0] * d2
    third = products[0] * d3

    if P > 0:
        dDt = -P * products[1]
        first += dDt
        second += 2.0 * d1 * dDt
        third += 3.0 * d2 * dDt
    if P > 1:
        ddDt = P * (P - 1) * products[2]
        second += ddDt
        third += 3.0 * d1 * ddDt
    if P > 2:
        third += -P * (P - 1) * (P - 2) * products[3]

    return value, first, second, third


def qpochhammer_symbol(q: float, l: int = 0, P: int = DEFAULT_ORDER) -> float:
    """q-Pochhammer symbol :math:`(q^l; q)_P`.

    ``P = 0`` gives 1, ``q = 1`` gives 0 for any ``P >= 1``.
    """
    return qpochhammer_symbol_derivatives(q, l, P)[0]


def qpochhammer_symbol_derivative(q: float, l: int = 0, P: int = DEFAULT_ORDER) -> float:
    """First derivative of the q-Pochhammer symbol with respect to ``q``."""
    return qpochhammer_symbol_derivatives(q, l, P)[1]


def qpochhammer_symbol_second_derivative(
    q: float, l: int = 0, P: int = DEFAULT_ORDER
) -> float:
    """Second derivative of the q-Pochhammer symbol with respect to ``q``."""
    return qpochhammer_symbol_derivatives(q, l, P)[2]


def qpochhammer_symbol_third_derivative(
    q: float, l: int = 0, P: int = DEFAULT_ORDER
) -> float:
    """Third derivative of the q-Pochhammer symbol with respect to ``q``."""
    return qpochhammer_symbol_derivatives(q, l, P)[3]
