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
q-Potential Splitting Function
==============================

Moment-cancelling splitting function built from the q-Pochhammer symbol,

.. math::

    s(q) = (q; q)_P = \prod_{n=1}^{P} \left(1 - q^n\right)

where the order :math:`P` is the number of higher order moments cancelled at
the cut-off. :math:`s(0) = 1` and for :math:`P > k` the :math:`k`'th
derivative vanishes at :math:`q = 1`.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from coulombops.math.qpochhammer import (
    qpochhammer_symbol,
    qpochhammer_symbol_derivative,
    qpochhammer_symbol_derivatives,
    qpochhammer_symbol_second_derivative,
    qpochhammer_symbol_third_derivative,
)

from ..base import Scheme, SchemeParameterError, ShortRangeScheme, SplittingValues
from ._parameters import required_float, required_int

__all__ = ["QPotential"]


class QPotential(ShortRangeScheme):
    """q-potential scheme.

    Parameters
    ----------
    cutoff : float
        Cut-off distance.
    order : int
        Number of moments to cancel.
    """

    scheme = Scheme.QPOTENTIAL
    name = "qpotential"

    def __init__(self, cutoff: float, order: int):
        super().__init__(cutoff)
        if int(order) != order or order < 0:
            raise SchemeParameterError(
                "order", f"order must be a non-negative integer, got {order}"
            )
        self.order = int(order)
        self._finalize((-1.0, -1.0))

    def short_range_function(self, q: float) -> float:
        return qpochhammer_symbol(q, 0, self.order)

    def short_range_function_derivative(self, q: float) -> float:
        return qpochhammer_symbol_derivative(q, 0, self.order)

    def short_range_function_second_derivative(self, q: float) -> float:
        return qpochhammer_symbol_second_derivative(q, 0, self.order)

    def short_range_function_third_derivative(self, q: float) -> float:
        return qpochhammer_symbol_third_derivative(q, 0, self.order)

    def splitting_values(self, q: float) -> SplittingValues:
        # one pass over the product gives all four
        return SplittingValues(*qpochhammer_symbol_derivatives(q, 0, self.order))

    def _scheme_fields(self) -> dict[str, Any]:
        return {"order": self.order}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> QPotential:
        return cls(required_float(data, "cutoff"), required_int(data, "order"))
