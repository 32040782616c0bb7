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
Tabulated Short-Range Pair Kernels - Warp Kernel Implementation
===============================================================

Batched evaluation of truncated pair interactions on GPU/CPU with Warp. The
splitting function of any scheme is sampled once on a uniform grid in
:math:`q = r / R_c` together with its derivatives, and evaluated inside the
kernels by cubic Hermite interpolation, so a single pair of kernels serves
every truncation scheme.

Architecture
------------
1. **Tables** (numpy):
   - ``SplittingTable.from_scheme()`` samples :math:`s, s', s'', s'''`

2. **Warp Kernels** (pure Warp, framework-agnostic):
   - ``_ion_ion_energy_forces_kernel``
   - ``_dipole_dipole_energy_kernel``

3. **Warp Launchers** (framework-agnostic API):
   - ``ion_ion_energy_forces()``
   - ``dipole_dipole_energy()``

For PyTorch integration, see
``coulombops.torch.interactions.electrostatics.tabulated``.

Mathematical Formulation
------------------------

On the grid :math:`q_i = i / (N - 1)` with spacing :math:`h`, a quantity
:math:`f` with known slope :math:`f'` is interpolated on
:math:`[q_i, q_{i+1}]` with :math:`u = (q - q_i) / h` as

.. math::

    f(q) \approx h_{00}(u) f_i + h h_{10}(u) f'_i
        + h_{01}(u) f_{i+1} + h h_{11}(u) f'_{i+1}

Each tabulated derivative uses the next one as its slope, so :math:`s`,
:math:`s'` and :math:`s''` are all cubic accurate.

The kernels then apply the same closed-form pair expressions as
:class:`~coulombops.interactions.electrostatics.base.ShortRangeScheme`, with
a hard cut-off at :math:`R_c`. All outputs are per pair; nothing is
accumulated per atom.
"""

from __future__ import annotations

import math
import warnings
from dataclasses import dataclass, field

import numpy as np
import warp as wp

from .base import ShortRangeScheme

__all__ = [
    "SplittingTable",
    "ion_ion_energy_forces",
    "dipole_dipole_energy",
]

DEFAULT_NUM_POINTS = 2048
# Below this the interpolation error of s'' exceeds ~1e-4 for the steeper schemes
MIN_RECOMMENDED_POINTS = 64


@dataclass(frozen=True)
class SplittingTable:
    """Splitting function sampled on a uniform grid in ``q``.

    Attributes
    ----------
    s, ds, dds, ddds : np.ndarray, shape (N,), dtype=float64
        :math:`s(q_i)` and its first three derivatives at
        :math:`q_i = i / (N - 1)`.
    cutoff : float
        Cut-off distance of the sampled scheme.
    kappa : float
        Inverse Debye length of the sampled scheme.
    """

    s: np.ndarray
    ds: np.ndarray
    dds: np.ndarray
    ddds: np.ndarray
    cutoff: float
    kappa: float
    _warp_arrays: dict[str, tuple[wp.array, ...]] = field(
        default_factory=dict, init=False, repr=False, compare=False
    )

    @property
    def num_points(self) -> int:
        return self.s.shape[0]

    @classmethod
    def from_scheme(
        cls, scheme: ShortRangeScheme, num_points: int = DEFAULT_NUM_POINTS
    ) -> SplittingTable:
        """Sample ``scheme`` on ``num_points`` equally spaced values of ``q``.

        Parameters
        ----------
        scheme : ShortRangeScheme
            Any truncation scheme with a finite cut-off.
        num_points : int, default=2048
            Number of grid points, including both end points.

        Returns
        -------
        SplittingTable

        Raises
        ------
        ValueError
            If the scheme has no finite cut-off or fewer than two points are
            requested.
        """
        if not math.isfinite(scheme.cutoff):
            raise ValueError(
                f"Cannot tabulate {type(scheme).__name__} without a finite cutoff"
            )
        if num_points < 2:
            raise ValueError(f"num_points must be at least 2, got {num_points}")
        if num_points < MIN_RECOMMENDED_POINTS:
            warnings.warn(
                f"Tabulating with {num_points} points; at least "
                f"{MIN_RECOMMENDED_POINTS} are recommended for accurate forces.",
                UserWarning,
                stacklevel=2,
            )

        q = np.linspace(0.0, 1.0, num_points)
        values = np.array([scheme.splitting_values(qi) for qi in q], dtype=np.float64)
        return cls(
            s=values[:, 0].copy(),
            ds=values[:, 1].copy(),
            dds=values[:, 2].copy(),
            ddds=values[:, 3].copy(),
            cutoff=scheme.cutoff,
            kappa=scheme.kappa,
        )

    def to_warp(self, device: str | None = None) -> tuple[wp.array, ...]:
        """Copy the four columns to Warp arrays of dtype ``wp.float64``.

        The arrays are copied once per device and reused by later calls.
        """
        key = str(wp.get_device(device))
        arrays = self._warp_arrays.get(key)
        if arrays is None:
            arrays = tuple(
                wp.array(column, dtype=wp.float64, device=device)
                for column in (self.s, self.ds, self.dds, self.ddds)
            )
            self._warp_arrays[key] = arrays
        return arrays


# ==============================================================================
# Warp Functions
# ==============================================================================


@wp.func
def _hermite(
    values: wp.array(dtype=wp.float64),
    slopes: wp.array(dtype=wp.float64),
    q: wp.float64,
) -> wp.float64:
    """Cubic Hermite interpolation of a uniformly tabulated function on [0, 1].

    Parameters
    ----------
    values : wp.array, dtype=wp.float64
        Function values at :math:`q_i = i / (N - 1)`.
    slopes : wp.array, dtype=wp.float64
        Derivatives at the same grid points.
    q : wp.float64
        Evaluation point; values outside [0, 1] are extrapolated from the
        nearest interval.

    Returns
    -------
    wp.float64
    """
    num_intervals = values.shape[0] - 1
    h = wp.float64(1.0) / wp.float64(num_intervals)
    t = q * wp.float64(num_intervals)
    i = wp.int32(wp.floor(t))
    i = wp.max(wp.min(i, num_intervals - 1), wp.int32(0))
    u = t - wp.float64(i)

    one = wp.float64(1.0)
    two = wp.float64(2.0)
    three = wp.float64(3.0)
    u2 = u * u
    u3 = u2 * u

    h00 = two * u3 - three * u2 + one
    h10 = u3 - two * u2 + u
    h01 = three * u2 - two * u3
    h11 = u3 - u2

    return (
        h00 * values[i]
        + h * h10 * slopes[i]
        + h01 * values[i + 1]
        + h * h11 * slopes[i + 1]
    )


# ==============================================================================
# Warp Kernels
# ==============================================================================


@wp.kernel
def _ion_ion_energy_forces_kernel(
    charges_a: wp.array(dtype=wp.float64),
    charges_b: wp.array(dtype=wp.float64),
    separations: wp.array(dtype=wp.vec3d),
    s_table: wp.array(dtype=wp.float64),
    ds_table: wp.array(dtype=wp.float64),
    dds_table: wp.array(dtype=wp.float64),
    cutoff: wp.float64,
    kappa: wp.float64,
    energies: wp.array(dtype=wp.float64),
    forces: wp.array(dtype=wp.vec3d),
):
    """Compute ion-ion energy and the force on B for every pair.

    Launch Grid: dim = [num_pairs]
    ``separations[k]`` points from charge A to charge B. Pairs at or beyond
    the cut-off, and coincident pairs, leave their (zeroed) outputs untouched.
    """
    k = wp.tid()
    r_vec = separations[k]
    r = wp.length(r_vec)

    if r >= cutoff or r < wp.float64(1e-10):
        return

    q = r / cutoff
    s = _hermite(s_table, ds_table, q)
    ds = _hermite(ds_table, dds_table, q)
    screening = wp.exp(-kappa * r)
    zz = charges_a[k] * charges_b[k]

    energies[k] = zz / r * s * screening

    weight = s * (wp.float64(1.0) + kappa * r) - q * ds
    forces[k] = (zz * weight * screening / (r * r * r)) * r_vec


@wp.kernel
def _dipole_dipole_energy_kernel(
    dipoles_a: wp.array(dtype=wp.vec3d),
    dipoles_b: wp.array(dtype=wp.vec3d),
    separations: wp.array(dtype=wp.vec3d),
    s_table: wp.array(dtype=wp.float64),
    ds_table: wp.array(dtype=wp.float64),
    dds_table: wp.array(dtype=wp.float64),
    ddds_table: wp.array(dtype=wp.float64),
    cutoff: wp.float64,
    kappa: wp.float64,
    energies: wp.array(dtype=wp.float64),
):
    """Compute dipole-dipole energy :math:`-\\mu_A \\cdot E(\\mu_B, r)` for every pair.

    Launch Grid: dim = [num_pairs]
    """
    k = wp.tid()
    r_vec = separations[k]
    r2 = wp.dot(r_vec, r_vec)
    r1 = wp.sqrt(r2)

    if r1 >= cutoff or r1 < wp.float64(1e-10):
        return

    r3 = r1 * r2
    q = r1 / cutoff
    s = _hermite(s_table, ds_table, q)
    ds = _hermite(ds_table, dds_table, q)
    dds = _hermite(dds_table, ddds_table, q)

    one = wp.float64(1.0)
    three = wp.float64(3.0)
    kr = kappa * r1

    w_direct = (
        s * (one + kr + kr * kr / three)
        - q * ds * (one + wp.float64(2.0) / three * kr)
        + q * q / three * dds
    )
    w_indirect = (s * kr * kr - wp.float64(2.0) * kr * q * ds + dds * q * q) / three

    mu_a = dipoles_a[k]
    mu_b = dipoles_b[k]
    mu_b_dot_r = wp.dot(mu_b, r_vec)

    field = (three * mu_b_dot_r / r2 * r_vec - mu_b) * (w_direct / r3)
    field += mu_b * (w_indirect / r3)

    energies[k] = -wp.dot(mu_a, field) * wp.exp(-kr)


# ==============================================================================
# Warp Launchers
# ==============================================================================


def ion_ion_energy_forces(
    charges_a: wp.array,
    charges_b: wp.array,
    separations: wp.array,
    table: SplittingTable,
    energies: wp.array,
    forces: wp.array,
    device: str | None = None,
) -> None:
    """Launch the tabulated ion-ion energy and force kernel.

    Parameters
    ----------
    charges_a, charges_b : wp.array, shape (M,), dtype=wp.float64
        Charges of the two partners of each pair.
    separations : wp.array, shape (M,), dtype=wp.vec3d
        Separation vectors :math:`{\\bf r}_B - {\\bf r}_A`.
    table : SplittingTable
        Tabulated splitting function of the scheme to apply.
    energies : wp.array, shape (M,), dtype=wp.float64
        OUTPUT: Pair energies. Must be pre-allocated and zeroed.
    forces : wp.array, shape (M,), dtype=wp.vec3d
        OUTPUT: Force on B for each pair. Must be pre-allocated and zeroed.
    device : str, optional
        Warp device. If None, inferred from separations.

    Returns
    -------
    None
        Results are written to energies and forces arrays in-place.
    """
    num_pairs = separations.shape[0]
    if device is None:
        device = str(separations.device)
    if num_pairs == 0:
        return

    s_table, ds_table, dds_table, _ = table.to_warp(device)

    wp.launch(
        _ion_ion_energy_forces_kernel,
        dim=num_pairs,
        inputs=[
            charges_a,
            charges_b,
            separations,
            s_table,
            ds_table,
            dds_table,
            wp.float64(table.cutoff),
            wp.float64(table.kappa),
            energies,
            forces,
        ],
        device=device,
    )


def dipole_dipole_energy(
    dipoles_a: wp.array,
    dipoles_b: wp.array,
    separations: wp.array,
    table: SplittingTable,
    energies: wp.array,
    device: str | None = None,
) -> None:
    """Launch the tabulated dipole-dipole energy kernel.

    Parameters
    ----------
    dipoles_a, dipoles_b : wp.array, shape (M,), dtype=wp.vec3d
        Dipole moments of the two partners of each pair.
    separations : wp.array, shape (M,), dtype=wp.vec3d
        Separation vectors :math:`{\\bf r}_B - {\\bf r}_A`.
    table : SplittingTable
        Tabulated splitting function of the scheme to apply.
    energies : wp.array, shape (M,), dtype=wp.float64
        OUTPUT: Pair energies. Must be pre-allocated and zeroed.
    device : str, optional
        Warp device. If None, inferred from separations.
    """
    num_pairs = separations.shape[0]
    if device is None:
        device = str(separations.device)
    if num_pairs == 0:
        return

    s_table, ds_table, dds_table, ddds_table = table.to_warp(device)

    wp.launch(
        _dipole_dipole_energy_kernel,
        dim=num_pairs,
        inputs=[
            dipoles_a,
            dipoles_b,
            separations,
            s_table,
            ds_table,
            dds_table,
            ddds_table,
            wp.float64(table.cutoff),
            wp.float64(table.kappa),
            energies,
        ],
        device=device,
    )
