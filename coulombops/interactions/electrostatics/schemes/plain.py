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

"""Plain Coulomb interactions without truncation."""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any

from ..base import Scheme, ShortRangeScheme
from ._parameters import optional_float

__all__ = ["Plain"]


class Plain(ShortRangeScheme):
    """No truncation scheme; the cut-off is infinite and :math:`s(q) = 1`.

    Parameters
    ----------
    debye_length : float, default=math.inf
        Optional Debye screening length giving a plain Yukawa potential.
    """

    scheme = Scheme.PLAIN
    name = "plain"
    doi = "Premier mémoire sur l'électricité et le magnétisme by Charles-Augustin de Coulomb"

    def __init__(self, debye_length: float = math.inf):
        super().__init__(math.inf, debye_length)
        self._finalize((0.0, 0.0))

    def short_range_function(self, q: float) -> float:
        return 1.0

    def short_range_function_derivative(self, q: float) -> float:
        return 0.0

    def short_range_function_second_derivative(self, q: float) -> float:
        return 0.0

    def short_range_function_third_derivative(self, q: float) -> float:
        return 0.0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Plain:
        return cls(optional_float(data, "debyelength"))
