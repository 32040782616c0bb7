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
Unit tests for the Ewald real-space and Wolf schemes.

Tests cover:
- Splitting function values and derivatives against hardcoded values
- Screened (Yukawa) Ewald
- Surrounding dielectric handling and T0
- Self-energy prefactors
- Parameter validation
"""

from __future__ import annotations

import math

import pytest

from coulombops.interactions.electrostatics import (
    Ewald,
    SchemeParameterError,
    Wolf,
)


class TestEwaldSplitting:
    """Test the Ewald real-space splitting function."""

    def test_values(self):
        ewald = Ewald(29.0, 0.1)
        expected = (0.04030497436, -0.399713585, 3.36159125, -21.54779991)
        for value, reference in zip(ewald.splitting_values(0.5), expected):
            assert value == pytest.approx(reference, rel=1e-8)

    def test_screened_values(self):
        ewald = Ewald(29.0, 0.1, debye_length=23.0)
        expected = (0.07306333588, -0.63444119, 4.423133599, -19.85937171)
        for value, reference in zip(ewald.splitting_values(0.5), expected):
            assert value == pytest.approx(reference, rel=1e-8)

    def test_reduces_to_erfc(self):
        ewald = Ewald(10.0, 0.3)
        for q in (0.0, 0.1, 0.5, 0.9):
            assert ewald.short_range_function(q) == pytest.approx(
                math.erfc(3.0 * q), rel=1e-14
            )

    def test_screened_origin_is_one(self):
        ewald = Ewald(29.0, 0.1, debye_length=23.0)
        assert ewald.short_range_function(0.0) == pytest.approx(1.0, rel=1e-14)


class TestEwaldConstants:
    """Test T0, the surrounding dielectric and self-energy prefactors."""

    def test_tinfoil_T0(self):
        assert Ewald(29.0, 0.1).T0 == 1.0

    def test_finite_dielectric_T0(self):
        ewald = Ewald(29.0, 0.1, eps_sur=80.0)
        assert ewald.eps_sur == 80.0
        assert ewald.T0 == pytest.approx(2.0 * 79.0 / 161.0)

    def test_dielectric_below_one_is_conducting(self):
        ewald = Ewald(29.0, 0.1, eps_sur=0.5)
        assert math.isinf(ewald.eps_sur)
        assert ewald.T0 == 1.0

    def test_vacuum_T0_is_zero(self):
        assert Ewald(29.0, 0.1, eps_sur=1.0).T0 == 0.0

    def test_self_energy_prefactor(self):
        ewald = Ewald(29.0, 0.1)
        alpha_red = 2.9
        assert ewald.self_energy_prefactor[0] == pytest.approx(
            -alpha_red / math.sqrt(math.pi)
        )
        assert ewald.self_energy_prefactor[1] == pytest.approx(
            -(alpha_red**3) * 2.0 / 3.0 / math.sqrt(math.pi)
        )

    def test_self_energy(self):
        ewald = Ewald(29.0, 0.1)
        expected = -0.1 / math.sqrt(math.pi) * 4.0
        expected += -(0.1**3) * 2.0 / 3.0 / math.sqrt(math.pi) * 9.0
        assert ewald.self_energy([4.0, 9.0]) == pytest.approx(expected)

    def test_to_dict(self):
        assert Ewald(29.0, 0.1).to_dict() == {
            "type": "ewald",
            "alpha": 0.1,
            "epss": "inf",
            "cutoff": 29.0,
        }
        data = Ewald(29.0, 0.1, eps_sur=80.0, debye_length=23.0).to_dict()
        assert data["epss"] == 80.0
        assert data["debyelength"] == 23.0


class TestEwaldValidation:
    """Test parameter validation."""

    @pytest.mark.parametrize("alpha", [0.0, -0.1])
    def test_invalid_alpha(self, alpha):
        with pytest.raises(SchemeParameterError) as excinfo:
            Ewald(29.0, alpha)
        assert excinfo.value.kind == "alpha"

    @pytest.mark.parametrize("cutoff", [0.0, -1.0])
    def test_invalid_cutoff(self, cutoff):
        with pytest.raises(SchemeParameterError) as excinfo:
            Ewald(cutoff, 0.1)
        assert excinfo.value.kind == "cutoff"

    def test_error_is_value_error(self):
        with pytest.raises(ValueError):
            Ewald(29.0, -1.0)


class TestWolf:
    """Test the Wolf scheme."""

    def test_values(self):
        wolf = Wolf(29.0, 0.1)
        expected = (0.04028442542, -0.3997546829, 3.36159125, -21.54779991)
        for value, reference in zip(wolf.splitting_values(0.5), expected):
            assert value == pytest.approx(reference, rel=1e-8)

    def test_vanishes_at_cutoff(self):
        wolf = Wolf(29.0, 0.1)
        assert wolf.short_range_function(1.0) == 0.0
        assert wolf.ion_potential(1.0, 29.0 - 1e-12) == pytest.approx(0.0, abs=1e-12)

    def test_shares_curvature_with_ewald(self):
        wolf = Wolf(29.0, 0.1)
        ewald = Ewald(29.0, 0.1)
        for q in (0.1, 0.4, 0.8):
            assert wolf.short_range_function_second_derivative(q) == pytest.approx(
                ewald.short_range_function_second_derivative(q), rel=1e-12
            )
            assert wolf.short_range_function_third_derivative(q) == pytest.approx(
                ewald.short_range_function_third_derivative(q), rel=1e-12
            )

    def test_self_energy_matches_unscreened_ewald(self):
        wolf = Wolf(29.0, 0.1)
        ewald = Ewald(29.0, 0.1)
        assert wolf.self_energy_prefactor == pytest.approx(ewald.self_energy_prefactor)

    def test_metadata(self):
        wolf = Wolf(29.0, 0.1)
        assert wolf.doi == "10.1063/1.478738"
        assert wolf.to_dict() == {
            "type": "wolf",
            "alpha": 0.1,
            "cutoff": 29.0,
            "doi": "10.1063/1.478738",
        }

    def test_invalid_alpha(self):
        with pytest.raises(SchemeParameterError) as excinfo:
            Wolf(29.0, 0.0)
        assert excinfo.value.kind == "alpha"
