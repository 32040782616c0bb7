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
Tabulated Short-Range Pair Kernels - PyTorch Bindings
=====================================================

This module provides PyTorch bindings for the tabulated pair kernels. It
wraps the framework-agnostic Warp launchers from
``coulombops.interactions.electrostatics.tabulated``.

Public API
----------
- ``tabulated_ion_ion_energy_forces()``: Per-pair ion-ion energies and forces
- ``tabulated_dipole_dipole_energy()``: Per-pair dipole-dipole energies

Outputs are computed in float64 and returned in the dtype of
``separations``. Gradients are not propagated through the kernels.

Examples
--------
>>> scheme = Poisson(cutoff=29.0, C=4, D=3)
>>> energies, forces = tabulated_ion_ion_energy_forces(
...     scheme, charges_a, charges_b, separations
... )
"""

from __future__ import annotations

import torch
import warp as wp

from coulombops.interactions.electrostatics.base import ShortRangeScheme
from coulombops.interactions.electrostatics.tabulated import (
    DEFAULT_NUM_POINTS,
    SplittingTable,
    dipole_dipole_energy,
    ion_ion_energy_forces,
)

__all__ = [
    "tabulated_ion_ion_energy_forces",
    "tabulated_dipole_dipole_energy",
]


def _as_table(
    scheme_or_table: ShortRangeScheme | SplittingTable, num_points: int
) -> SplittingTable:
    if isinstance(scheme_or_table, SplittingTable):
        return scheme_or_table
    if isinstance(scheme_or_table, ShortRangeScheme):
        return SplittingTable.from_scheme(scheme_or_table, num_points)
    raise TypeError(
        "Expected a ShortRangeScheme or SplittingTable, got "
        f"{type(scheme_or_table).__name__}"
    )


def _check_pairs(separations: torch.Tensor, *per_pair: torch.Tensor) -> int:
    if separations.ndim != 2 or separations.shape[1] != 3:
        raise ValueError(
            f"separations must have shape (M, 3), got {tuple(separations.shape)}"
        )
    num_pairs = separations.shape[0]
    for tensor in per_pair:
        if tensor.shape[0] != num_pairs:
            raise ValueError(
                f"Expected {num_pairs} entries per pair input, got {tensor.shape[0]}"
            )
    return num_pairs


def tabulated_ion_ion_energy_forces(
    scheme_or_table: ShortRangeScheme | SplittingTable,
    charges_a: torch.Tensor,
    charges_b: torch.Tensor,
    separations: torch.Tensor,
    num_points: int = DEFAULT_NUM_POINTS,
) -> tuple[torch.Tensor, torch.Tensor]:
    """Compute truncated ion-ion energies and forces for a batch of pairs.

    Parameters
    ----------
    scheme_or_table : ShortRangeScheme | SplittingTable
        Truncation scheme (tabulated on the fly) or a prepared table.
    charges_a, charges_b : torch.Tensor, shape (M,)
        Charges of the two partners of each pair.
    separations : torch.Tensor, shape (M, 3)
        Separation vectors :math:`{\\bf r}_B - {\\bf r}_A`.
    num_points : int, default=2048
        Grid size used when a scheme is passed.

    Returns
    -------
    energies : torch.Tensor, shape (M,)
        Pair energies :math:`z_B \\Phi(z_A, r)`.
    forces : torch.Tensor, shape (M, 3)
        Force on B for each pair.

    Raises
    ------
    ValueError
        If the input shapes disagree or the scheme has no finite cut-off.
    TypeError
        If ``scheme_or_table`` is neither a scheme nor a table.
    """
    table = _as_table(scheme_or_table, num_points)
    num_pairs = _check_pairs(separations, charges_a, charges_b)
    out_dtype = separations.dtype

    energies = torch.zeros(num_pairs, device=separations.device, dtype=torch.float64)
    forces = torch.zeros((num_pairs, 3), device=separations.device, dtype=torch.float64)
    if num_pairs == 0:
        return energies.to(out_dtype), forces.to(out_dtype)

    device = wp.device_from_torch(separations.device)
    wp_charges_a = wp.from_torch(
        charges_a.to(torch.float64).contiguous(), dtype=wp.float64
    )
    wp_charges_b = wp.from_torch(
        charges_b.to(torch.float64).contiguous(), dtype=wp.float64
    )
    wp_separations = wp.from_torch(
        separations.to(torch.float64).contiguous(), dtype=wp.vec3d
    )
    wp_energies = wp.from_torch(energies, dtype=wp.float64)
    wp_forces = wp.from_torch(forces, dtype=wp.vec3d)

    ion_ion_energy_forces(
        wp_charges_a,
        wp_charges_b,
        wp_separations,
        table,
        wp_energies,
        wp_forces,
        device=device,
    )
    return energies.to(out_dtype), forces.to(out_dtype)


def tabulated_dipole_dipole_energy(
    scheme_or_table: ShortRangeScheme | SplittingTable,
    dipoles_a: torch.Tensor,
    dipoles_b: torch.Tensor,
    separations: torch.Tensor,
    num_points: int = DEFAULT_NUM_POINTS,
) -> torch.Tensor:
    """Compute truncated dipole-dipole energies for a batch of pairs.

    Parameters
    ----------
    scheme_or_table : ShortRangeScheme | SplittingTable
        Truncation scheme (tabulated on the fly) or a prepared table.
    dipoles_a, dipoles_b : torch.Tensor, shape (M, 3)
        Dipole moments of the two partners of each pair.
    separations : torch.Tensor, shape (M, 3)
        Separation vectors :math:`{\\bf r}_B - {\\bf r}_A`.
    num_points : int, default=2048
        Grid size used when a scheme is passed.

    Returns
    -------
    torch.Tensor, shape (M,)
        Pair energies :math:`-\\mu_A \\cdot {\\bf E}(\\mu_B, {\\bf r})`.
    """
    table = _as_table(scheme_or_table, num_points)
    num_pairs = _check_pairs(separations, dipoles_a, dipoles_b)
    out_dtype = separations.dtype

    energies = torch.zeros(num_pairs, device=separations.device, dtype=torch.float64)
    if num_pairs == 0:
        return energies.to(out_dtype)

    device = wp.device_from_torch(separations.device)
    wp_dipoles_a = wp.from_torch(
        dipoles_a.to(torch.float64).contiguous(), dtype=wp.vec3d
    )
    wp_dipoles_b = wp.from_torch(
        dipoles_b.to(torch.float64).contiguous(), dtype=wp.vec3d
    )
    wp_separations = wp.from_torch(
        separations.to(torch.float64).contiguous(), dtype=wp.vec3d
    )
    wp_energies = wp.from_torch(energies, dtype=wp.float64)

    dipole_dipole_energy(
        wp_dipoles_a,
        wp_dipoles_b,
        wp_separations,
        table,
        wp_energies,
        device=device,
    )
    return energies.to(out_dtype)
