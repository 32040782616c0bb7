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
Truncated Electrostatics Module
===============================

This module provides short-range (truncated) electrostatic pair interactions.
Every scheme is described by a splitting function :math:`s(q)` on the
normalized distance :math:`q = r / R_c`; potentials, fields, energies, forces,
self-energies and the dielectric constant follow generically from
:math:`s` and its first three derivatives.

Architecture
------------
- ``base``: ``ShortRangeScheme`` with the generic pair expressions
- ``schemes``: one class per truncation scheme
- ``factory``: selection by name and (de)serialization
- ``tabulated``: Warp kernels evaluating tabulated schemes for batches of pairs

For PyTorch bindings, see ``coulombops.torch.interactions.electrostatics``.

Available Schemes
-----------------

1. **Plain** - untruncated Coulomb, optionally Yukawa screened
2. **Ewald** - real-space part of Ewald summation
3. **Wolf** - damped, shifted Coulomb
4. **q-potential** - moment cancelling via the q-Pochhammer symbol
5. **PoissonSimple / Poisson** - polynomial family cancelling ``C`` moments
   with ``D`` vanishing derivatives; ``Poisson`` supports Yukawa screening
6. **Fanourgakis** - fixed polynomial, equal to Poisson with C=4, D=3

Examples
--------
>>> pot = Poisson(cutoff=29.0, C=4, D=3)
>>> pot.ion_potential(2.0, 23.0)  # doctest: +ELLIPSIS
0.000943065...
"""

from .base import Scheme, SchemeParameterError, ShortRangeScheme, SplittingValues
from .factory import SCHEMES, create_scheme, scheme_from_dict, scheme_type
from .schemes import (
    Ewald,
    Fanourgakis,
    Plain,
    Poisson,
    PoissonSimple,
    QPotential,
    Wolf,
)
from .tabulated import SplittingTable, dipole_dipole_energy, ion_ion_energy_forces

__all__ = [
    # Base
    "Scheme",
    "SchemeParameterError",
    "ShortRangeScheme",
    "SplittingValues",
    # Schemes
    "Plain",
    "Ewald",
    "Wolf",
    "QPotential",
    "PoissonSimple",
    "Poisson",
    "Fanourgakis",
    # Registry
    "SCHEMES",
    "scheme_type",
    "create_scheme",
    "scheme_from_dict",
    # Tabulated pair kernels - Warp launchers
    "SplittingTable",
    "ion_ion_energy_forces",
    "dipole_dipole_energy",
]
