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
coulombops
==========

Truncated short-range electrostatics: splitting functions for the common
truncation schemes and the pair potentials, fields, energies and forces
derived from them.

Subpackages
-----------
math
    q-Pochhammer symbol and integer arithmetic helpers.
interactions.electrostatics
    Truncation schemes, the scheme registry and tabulated Warp pair kernels.
torch
    PyTorch bindings for the Warp kernels (requires ``torch``).
"""

__version__ = "0.1.0"
