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
Fanourgakis Splitting Function
==============================

.. math::

    s(q) = (1 - q)^4 \left(1 + \frac{9}{4} q + 3 q^2 + \frac{5}{2} q^3\right)

Algebraically identical to the Poisson scheme with :math:`C = 4, D = 3`;
the derivatives are written out in closed form.

References
----------
- Fanourgakis, DOI: 10.1063/1.3216520
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..base import Scheme, ShortRangeScheme
from ._parameters import required_float

__all__ = ["Fanourgakis"]


class Fanourgakis(ShortRangeScheme):
    """Fanourgakis scheme.

    Parameters
    ----------
    cutoff : float
        Cut-off distance.
    """

    scheme = Scheme.FANOURGAKIS
    name = "fanourgakis"
    doi = "10.1063/1.3216520"

    def __init__(self, cutoff: float):
        super().__init__(cutoff)
        self._finalize((-1.0, -1.0))

    def short_range_function(self, q: float) -> float:
        return (1.0 - q) ** 4 * (1.0 + 2.25 * q + 3.0 * q * q + 2.5 * q * q * q)

    def short_range_function_derivative(self, q: float) -> float:
        return -1.75 + 26.25 * q**4 - 42.0 * q**5 + 17.5 * q**6

    def short_range_function_second_derivative(self, q: float) -> float:
        return 105.0 * q**3 * (q - 1.0) ** 2

    def short_range_function_third_derivative(self, q: float) -> float:
        return 525.0 * q**2 * (q - 0.6) * (q - 1.0)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Fanourgakis:
        return cls(required_float(data, "cutoff"))
