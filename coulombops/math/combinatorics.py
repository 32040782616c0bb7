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

"""
Integer Arithmetic Helpers
==========================

Small pure functions used by the polynomial splitting functions: integer
powers, factorials and (generalized) binomial coefficients.
"""

from __future__ import annotations

__all__ = ["powi", "factorial", "binomial"]


def powi(x: float, n: int) -> float:
    """Return ``x`` raised to the non-negative integer power ``n``.

    ``powi(0.0, 0)`` is 1.0.
    """
    if n < 0:
        raise ValueError(f"powi requires a non-negative exponent, got {n}")
    result = 1.0
    base = float(x)
    while n:
        if n & 1:
            result *= base
        base *= base
        n >>= 1
    return result


def factorial(n: int) -> int:
    """Factorial of a non-negative integer; ``factorial(0) == 1``."""
    if n < 0:
        raise ValueError(f"factorial requires a non-negative integer, got {n}")
    result = 1
    for i in range(2, n + 1):
        result *= i
    return result


def binomial(n: int, k: int) -> int:
    """Generalized binomial coefficient :math:`\\binom{n}{k}`.

    Computed as the falling factorial :math:`n(n-1)\\cdots(n-k+1)/k!`, which
    agrees with the usual definition for :math:`0 \\le k \\le n`, is zero for
    :math:`0 \\le n < k`, and stays well defined for negative ``n``
    (e.g. :math:`\\binom{-1}{1} = -1`).

    Parameters
    ----------
    n : int
        Upper index, any integer.
    k : int
        Lower index, must be non-negative.

    Returns
    -------
    int
    """
    if k < 0:
        raise ValueError(f"binomial requires a non-negative lower index, got {k}")
    numerator = 1
    for i in range(k):
        numerator *= n - i
    return numerator // factorial(k)
