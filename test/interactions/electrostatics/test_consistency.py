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
Scheme-independent consistency tests for the generic pair interactions.

Every scheme is checked for:
- Fields equal to the negative gradient of the potentials
- Dipole-dipole force equal to the gradient of the dipole-dipole energy
- Agreement with a dipole modelled as two opposite point charges
- Exactly zero interactions at and beyond the cut-off
- Self-energy, torque and dielectric constant helpers
"""

from __future__ import annotations

import numpy as np
import pytest

from coulombops.interactions.electrostatics import (
    Ewald,
    Fanourgakis,
    Plain,
    Poisson,
    PoissonSimple,
    QPotential,
    Wolf,
)

ALL_SCHEMES = [
    Plain(),
    Plain(debye_length=23.0),
    Ewald(29.0, 0.1),
    Ewald(29.0, 0.1, debye_length=23.0),
    Wolf(29.0, 0.1),
    QPotential(29.0, 5),
    PoissonSimple(29.0, 2, 1),
    Poisson(29.0, 3, 3),
    Poisson(29.0, 4, 3, debye_length=23.0),
    Fanourgakis(29.0),
]

TRUNCATED_SCHEMES = [scheme for scheme in ALL_SCHEMES if np.isfinite(scheme.cutoff)]

# Off-axis separation inside the cut-off
R = np.array([13.0, -9.0, 11.0])
MU_A = np.array([19.0, 7.0, 11.0])
MU_B = np.array([13.0, 17.0, 5.0])


def gradient(fn, r, h=1e-4):
    """Central difference gradient of a scalar function of a 3-vector."""
    grad = np.zeros(3)
    for i in range(3):
        step = np.zeros(3)
        step[i] = h
        grad[i] = (fn(r + step) - fn(r - step)) / (2.0 * h)
    return grad


def as_two_charges(mu, center, d=1e-3):
    """Replace dipole ``mu`` at ``center`` by charges +-|mu|/(2d) at center +-d*mu_hat."""
    norm = np.linalg.norm(mu)
    offset = mu / norm * d
    z = norm / (2.0 * d)
    return [(z, center + offset), (-z, center - offset)]


@pytest.mark.parametrize("scheme", ALL_SCHEMES, ids=repr)
class TestGradients:
    """Test that fields and forces are gradients of potentials and energies."""

    def test_ion_field(self, scheme):
        z = 2.0
        expected = -gradient(lambda r: scheme.ion_potential(z, np.linalg.norm(r)), R)
        np.testing.assert_allclose(scheme.ion_field(z, R), expected, rtol=1e-6)

    def test_dipole_field(self, scheme):
        expected = -gradient(lambda r: scheme.dipole_potential(MU_A, r), R)
        np.testing.assert_allclose(
            scheme.dipole_field(MU_A, R), expected, rtol=1e-6, atol=1e-14
        )

    def test_dipole_dipole_force(self, scheme):
        expected = gradient(lambda r: scheme.dipole_dipole_energy(MU_A, MU_B, r), R)
        np.testing.assert_allclose(
            scheme.dipole_dipole_force(MU_A, MU_B, R), expected, rtol=1e-6, atol=1e-14
        )

    def test_ion_ion_force(self, scheme):
        zA, zB = 2.0, -3.0
        expected = -gradient(
            lambda r: scheme.ion_ion_energy(zA, zB, np.linalg.norm(r)), R
        )
        np.testing.assert_allclose(
            scheme.ion_ion_force(zA, zB, R), expected, rtol=1e-6
        )


@pytest.mark.parametrize("scheme", ALL_SCHEMES, ids=repr)
class TestDipoleAsTwoCharges:
    """Test the dipole expressions against two closely spaced point charges."""

    def test_potential(self, scheme):
        charges = as_two_charges(MU_A, np.zeros(3))
        expected = sum(
            scheme.ion_potential(z, np.linalg.norm(R - position))
            for z, position in charges
        )
        assert scheme.dipole_potential(MU_A, R) == pytest.approx(expected, rel=1e-5)

    def test_field(self, scheme):
        charges = as_two_charges(MU_A, np.zeros(3))
        expected = sum(scheme.ion_field(z, R - position) for z, position in charges)
        np.testing.assert_allclose(scheme.dipole_field(MU_A, R), expected, rtol=1e-5)

    def test_ion_dipole_energy(self, scheme):
        # charge at the origin, dipole at R
        z = 3.0
        charges = as_two_charges(MU_B, R)
        expected = sum(
            scheme.ion_ion_energy(zi, z, np.linalg.norm(position))
            for zi, position in charges
        )
        assert scheme.ion_dipole_energy(z, MU_B, R) == pytest.approx(
            expected, rel=1e-5
        )

    def test_dipole_dipole_energy(self, scheme):
        charges_a = as_two_charges(MU_A, np.zeros(3))
        charges_b = as_two_charges(MU_B, R)
        expected = sum(
            scheme.ion_ion_energy(za, zb, np.linalg.norm(rb - ra))
            for za, ra in charges_a
            for zb, rb in charges_b
        )
        assert scheme.dipole_dipole_energy(MU_A, MU_B, R) == pytest.approx(
            expected, rel=1e-5
        )

    def test_dipole_dipole_force(self, scheme):
        charges_a = as_two_charges(MU_A, np.zeros(3))
        charges_b = as_two_charges(MU_B, R)
        # force on the charges of A from the charges of B
        expected = sum(
            scheme.ion_ion_force(zb, za, ra - rb)
            for za, ra in charges_a
            for zb, rb in charges_b
        )
        np.testing.assert_allclose(
            scheme.dipole_dipole_force(MU_A, MU_B, R), expected, rtol=1e-5
        )


@pytest.mark.parametrize("scheme", TRUNCATED_SCHEMES, ids=repr)
class TestHardCutoff:
    """Test that all interactions vanish at and beyond the cut-off."""

    @pytest.mark.parametrize("factor", [1.0, 1.5])
    def test_zero_beyond_cutoff(self, scheme, factor):
        r1 = scheme.cutoff * factor
        r = np.array([r1, 0.0, 0.0])
        assert scheme.ion_potential(2.0, r1) == 0.0
        assert scheme.dipole_potential(MU_A, r) == 0.0
        assert scheme.ion_ion_energy(2.0, 3.0, r1) == 0.0
        assert scheme.ion_dipole_energy(2.0, MU_B, r) == 0.0
        assert scheme.dipole_dipole_energy(MU_A, MU_B, r) == 0.0
        assert np.all(scheme.ion_field(2.0, r) == 0.0)
        assert np.all(scheme.dipole_field(MU_A, r) == 0.0)
        assert np.all(scheme.ion_ion_force(2.0, 3.0, r) == 0.0)
        assert np.all(scheme.ion_dipole_force(3.0, MU_A, r) == 0.0)
        assert np.all(scheme.dipole_dipole_force(MU_A, MU_B, r) == 0.0)

    def test_nonzero_inside_cutoff(self, scheme):
        assert scheme.ion_potential(2.0, 0.5 * scheme.cutoff) != 0.0


class TestHelpers:
    """Test self-energy, torque and dielectric helpers."""

    def test_self_energy_requires_two_moments(self):
        pot = Poisson(29.0, 3, 3)
        with pytest.raises(ValueError, match="not equal in size"):
            pot.self_energy([4.0])
        with pytest.raises(ValueError):
            pot.self_energy([4.0, 1.0, 1.0])

    def test_self_energy(self):
        pot = Fanourgakis(10.0)
        assert pot.self_energy([4.0, 0.0]) == pytest.approx(-0.4)
        assert pot.self_energy([0.0, 1000.0]) == pytest.approx(-1.0)

    def test_dipole_torque(self):
        pot = Poisson(29.0, 3, 3)
        field = pot.dipole_field(MU_B, R)
        torque = pot.dipole_torque(MU_A, field)
        np.testing.assert_allclose(torque, np.cross(MU_A, field))
        assert np.dot(torque, MU_A) == pytest.approx(0.0, abs=1e-12)

    def test_torque_vanishes_for_parallel_field(self):
        pot = Plain()
        np.testing.assert_allclose(pot.dipole_torque(MU_A, 2.0 * MU_A), 0.0)

    def test_dielectric_tinfoil(self):
        ewald = Ewald(29.0, 0.1)
        for M2V in (0.0, 0.5, 3.0):
            assert ewald.calc_dielectric(M2V) == pytest.approx(3.0 * M2V + 1.0)

    def test_dielectric_vacuum(self):
        ewald = Ewald(29.0, 0.1, eps_sur=1.0)
        M2V = 0.25
        assert ewald.calc_dielectric(M2V) == pytest.approx(
            (2.0 * M2V + 1.0) / (1.0 - M2V)
        )

    def test_vector_shape_checked(self):
        with pytest.raises(ValueError, match="length 3"):
            Plain().dipole_potential([1.0, 2.0], R)

    def test_coincident_particles_are_not_finite(self):
        with np.errstate(all="ignore"):
            assert not np.isfinite(Plain().ion_potential(1.0, 0.0))
            assert not np.all(np.isfinite(Plain().ion_field(1.0, np.zeros(3))))
