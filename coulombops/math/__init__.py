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
Mathematical Utilities
======================

Scalar helpers shared by the splitting functions.

Available Submodules
--------------------

combinatorics
    Integer powers, factorials and generalized binomial coefficients used by
    the polynomial (Poisson-family) splitting functions.

qpochhammer
    The truncated q-Pochhammer symbol :math:`(q^l; q)_P` and its first three
    derivatives, the building block of the q-potential.
"""

from .combinatorics import binomial, factorial, powi
from .qpochhammer import (
    qpochhammer_symbol,
    qpochhammer_symbol_derivative,
    qpochhammer_symbol_derivatives,
    qpochhammer_symbol_second_derivative,
    qpochhammer_symbol_third_derivative,
)

__all__ = [
    # Combinatorics
    "powi",
    "factorial",
    "binomial",
    # q-Pochhammer symbol
    "qpochhammer_symbol",
    "qpochhammer_symbol_derivative",
    "qpochhammer_symbol_second_derivative",
    "qpochhammer_symbol_third_derivative",
    "qpochhammer_symbol_derivatives",
]
