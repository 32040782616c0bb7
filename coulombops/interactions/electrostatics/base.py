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
Short-Range Electrostatics - Generic Pair Interactions
======================================================

This module implements the scheme-independent part of truncated
electrostatics. A truncation scheme only has to provide its splitting
(short-range) function :math:`s(q)` and the first three derivatives on the
normalized distance :math:`q = r / R_c`; every potential, field, energy,
force and self-energy is then derived here by closed-form expressions that
are the same for all schemes.

Mathematical Formulation
------------------------

With :math:`\kappa = 1/\lambda_D` the inverse Debye length (zero when
unscreened), :math:`r = |{\bf r}|` and :math:`q = r/R_c`:

1. Ion potential and field:

   .. math::

       \Phi(z, r) = \frac{z}{r} s(q) e^{-\kappa r}

       {\bf E}(z, {\bf r}) = \frac{z \hat{\bf r}}{r^2}
           \left[ s(q)(1 + \kappa r) - q s'(q) \right] e^{-\kappa r}

2. Dipole potential:

   .. math::

       \Phi(\boldsymbol{\mu}, {\bf r}) = \frac{\boldsymbol{\mu}\cdot\hat{\bf r}}{r^2}
           \left[ s(q)(1 + \kappa r) - q s'(q) \right] e^{-\kappa r}

3. Dipole field, split into a direct and an indirect part:

   .. math::

       {\bf E}(\boldsymbol{\mu}, {\bf r}) = \left[
           \frac{3(\boldsymbol{\mu}\cdot\hat{\bf r})\hat{\bf r} - \boldsymbol{\mu}}{r^3} w_D
           + \frac{\boldsymbol{\mu}}{r^3} w_I \right] e^{-\kappa r}

   with

   .. math::

       w_D = s\left(1 + \kappa r + \frac{\kappa^2 r^2}{3}\right)
             - q s' \left(1 + \frac{2}{3}\kappa r\right) + \frac{q^2}{3} s''

       w_I = \frac{1}{3}\left( s \kappa^2 r^2 - 2 \kappa r q s' + q^2 s'' \right)

Beyond the cut-off every potential, field, energy and force is exactly zero.

Conventions
-----------
- ``r`` vectors point from the source (A) to the receiver (B):
  :math:`{\bf r} = {\bf r}_B - {\bf r}_A`.
- Energies and forces are in electrostatic units, i.e. without the
  :math:`1/(4\pi\varepsilon_0)` prefactor.
- Vectors are accepted as any array-like of length 3 and returned as
  ``numpy.ndarray`` of dtype float64.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from enum import Enum
from typing import Any, NamedTuple

import numpy as np

__all__ = [
    "Scheme",
    "SchemeParameterError",
    "SplittingValues",
    "ShortRangeScheme",
]


class Scheme(Enum):
    """Available truncation schemes; values are the serialized type names."""

    PLAIN = "plain"
    EWALD = "ewald"
    WOLF = "wolf"
    POISSONSIMPLE = "poissonsimple"
    POISSON = "poisson"
    QPOTENTIAL = "qpotential"
    FANOURGAKIS = "fanourgakis"


class SchemeParameterError(ValueError):
    """Raised when a scheme is constructed from inadmissible parameters.

    Attributes
    ----------
    kind : str
        Short machine-readable category, e.g. ``"cutoff"``, ``"alpha"``,
        ``"poisson"``, ``"order"`` or ``"missing"``.
    """

    def __init__(self, kind: str, message: str):
        super().__init__(message)
        self.kind = kind


class SplittingValues(NamedTuple):
    """Splitting function and its first three derivatives at a single ``q``."""

    s: float
    ds: float
    dds: float
    ddds: float


def _as_vec3(x: Any) -> np.ndarray:
    vec = np.asarray(x, dtype=np.float64)
    if vec.shape != (3,):
        raise ValueError(f"Expected a vector of length 3, got shape {vec.shape}")
    return vec


class ShortRangeScheme(ABC):
    """Base class for truncation schemes.

    Subclasses implement the four splitting-function methods, call
    ``super().__init__`` first and finish their own ``__init__`` with
    :meth:`_finalize`, after which the instance is read-only.

    Parameters
    ----------
    cutoff : float
        Cut-off distance :math:`R_c`; ``math.inf`` for no truncation.
    debye_length : float, default=math.inf
        Debye screening length :math:`\\lambda_D`. Infinite means no
        screening.

    Attributes
    ----------
    scheme : Scheme
        Enumeration member identifying the scheme.
    name : str
        Descriptive name.
    doi : str
        DOI (or citation) of the original reference; may be empty.
    cutoff : float
    debye_length : float
    kappa : float
        Inverse Debye length, zero when unscreened.
    self_energy_prefactor : tuple[float, float]
        Prefactors for the monopole and dipole self-energy.
    T0 : float
        Spatial Fourier transformed modified interaction tensor used for the
        dielectric constant.
    """

    scheme: Scheme
    name: str = ""
    doi: str = ""

    def __init__(self, cutoff: float, debye_length: float = math.inf):
        cutoff = float(cutoff)
        debye_length = float(debye_length)
        if not cutoff > 0.0:
            raise SchemeParameterError(
                "cutoff", f"cutoff must be larger than zero, got {cutoff}"
            )
        if not debye_length > 0.0:
            raise SchemeParameterError(
                "debye_length",
                f"debye_length must be larger than zero, got {debye_length}",
            )
        self.cutoff = cutoff
        self.debye_length = debye_length
        self.kappa = 1.0 / debye_length
        self._inv_cutoff = 1.0 / cutoff
        self._cutoff2 = cutoff * cutoff
        self.self_energy_prefactor: tuple[float, float] = (0.0, 0.0)
        self.T0 = 0.0

    def _finalize(
        self, self_energy_prefactor: Sequence[float], T0: float | None = None
    ) -> None:
        """Store derived constants and make the instance read-only.

        ``T0`` defaults to :math:`s'(1) - s(1) + s(0)`.
        """
        self.self_energy_prefactor = tuple(float(p) for p in self_energy_prefactor)
        if T0 is None:
            T0 = (
                self.short_range_function_derivative(1.0)
                - self.short_range_function(1.0)
                + self.short_range_function(0.0)
            )
        self.T0 = float(T0)
        object.__setattr__(self, "_frozen", True)

    def __setattr__(self, key: str, value: Any) -> None:
        if self.__dict__.get("_frozen", False):
            raise AttributeError(
                f"{type(self).__name__} is immutable; cannot set attribute {key!r}"
            )
        object.__setattr__(self, key, value)

    # ------------------------------------------------------------------
    # Splitting function interface
    # ------------------------------------------------------------------

    @abstractmethod
    def short_range_function(self, q: float) -> float:
        """Splitting function :math:`s(q)`."""

    @abstractmethod
    def short_range_function_derivative(self, q: float) -> float:
        """First derivative :math:`s'(q)`."""

    @abstractmethod
    def short_range_function_second_derivative(self, q: float) -> float:
        """Second derivative :math:`s''(q)`."""

    @abstractmethod
    def short_range_function_third_derivative(self, q: float) -> float:
        """Third derivative :math:`s'''(q)`."""

    def splitting_values(self, q: float) -> SplittingValues:
        """Evaluate :math:`s, s', s'', s'''` at ``q``."""
        return SplittingValues(
            self.short_range_function(q),
            self.short_range_function_derivative(q),
            self.short_range_function_second_derivative(q),
            self.short_range_function_third_derivative(q),
        )

    # ------------------------------------------------------------------
    # Potentials and fields
    # ------------------------------------------------------------------

    def ion_potential(self, z: float, r: float) -> float:
        """Potential from a charge ``z`` at distance ``r``.

        .. math::

            \\Phi(z, r) = \\frac{z}{r} s(q) e^{-\\kappa r}
        """
        r = np.float64(r)
        if r >= self.cutoff:
            return 0.0
        q = r * self._inv_cutoff
        return float(z / r * self.short_range_function(q) * np.exp(-self.kappa * r))

    def dipole_potential(self, mu: Any, r: Any) -> float:
        """Potential from dipole ``mu`` at separation vector ``r``."""
        mu = _as_vec3(mu)
        r = _as_vec3(r)
        r2 = np.dot(r, r)
        if r2 >= self._cutoff2:
            return 0.0
        r1 = np.sqrt(r2)
        q = r1 * self._inv_cutoff
        weight = self.short_range_function(q) * (
            1.0 + self.kappa * r1
        ) - q * self.short_range_function_derivative(q)
        return float(np.dot(mu, r) / (r2 * r1) * weight * np.exp(-self.kappa * r1))

    def ion_field(self, z: float, r: Any) -> np.ndarray:
        """Field from charge ``z`` at separation vector ``r``."""
        r = _as_vec3(r)
        r2 = np.dot(r, r)
        if r2 >= self._cutoff2:
            return np.zeros(3)
        r1 = np.sqrt(r2)
        q = r1 * self._inv_cutoff
        weight = self.short_range_function(q) * (
            1.0 + self.kappa * r1
        ) - q * self.short_range_function_derivative(q)
        return z * r / (r2 * r1) * weight * np.exp(-self.kappa * r1)

    def dipole_field(self, mu: Any, r: Any) -> np.ndarray:
        """Field from dipole ``mu`` at separation vector ``r``.

        Sum of the direct term :math:`(3(\\mu\\cdot\\hat r)\\hat r - \\mu)/r^3`
        and the indirect term :math:`\\mu/r^3`, weighted as described in the
        module docstring.
        """
        mu = _as_vec3(mu)
        r = _as_vec3(r)
        r2 = np.dot(r, r)
        if r2 >= self._cutoff2:
            return np.zeros(3)
        r1 = np.sqrt(r2)
        r3 = r1 * r2
        q = r1 * self._inv_cutoff
        kappa = self.kappa
        s = self.short_range_function(q)
        ds = self.short_range_function_derivative(q)
        dds = self.short_range_function_second_derivative(q)

        field_direct = (3.0 * np.dot(mu, r) * r / r2 - mu) / r3
        field_direct *= (
            s * (1.0 + kappa * r1 + kappa * kappa * r2 / 3.0)
            - q * ds * (1.0 + 2.0 / 3.0 * kappa * r1)
            + q * q / 3.0 * dds
        )
        field_indirect = mu / r3
        field_indirect *= (
            s * kappa * kappa * r2 - 2.0 * kappa * r1 * q * ds + dds * q * q
        ) / 3.0
        return (field_direct + field_indirect) * np.exp(-kappa * r1)

    # ------------------------------------------------------------------
    # Energies
    # ------------------------------------------------------------------

    def ion_ion_energy(self, zA: float, zB: float, r: float) -> float:
        """Interaction energy between two charges, :math:`z_B \\Phi(z_A, r)`."""
        return zB * self.ion_potential(zA, r)

    def ion_dipole_energy(self, z: float, mu: Any, r: Any) -> float:
        """Interaction energy between a charge and a dipole.

        ``r`` points from the charge to the dipole; the energy is the
        potential of the dipole at the location of the charge,
        :math:`z \\Phi(\\mu, -{\\bf r})`.
        """
        return z * self.dipole_potential(mu, -_as_vec3(r))

    def dipole_dipole_energy(self, muA: Any, muB: Any, r: Any) -> float:
        """Interaction energy between two dipoles, :math:`-\\mu_A \\cdot {\\bf E}(\\mu_B, {\\bf r})`."""
        return float(-np.dot(_as_vec3(muA), self.dipole_field(muB, r)))

    # ------------------------------------------------------------------
    # Forces and torque
    # ------------------------------------------------------------------

    def ion_ion_force(self, zA: float, zB: float, r: Any) -> np.ndarray:
        """Force on charge B from charge A, :math:`z_B {\\bf E}(z_A, {\\bf r})`."""
        return zB * self.ion_field(zA, r)

    def ion_dipole_force(self, z: float, mu: Any, r: Any) -> np.ndarray:
        """Force on charge ``z`` from dipole ``mu``, :math:`z {\\bf E}(\\mu, {\\bf r})`."""
        return z * self.dipole_field(mu, r)

    def dipole_dipole_force(self, muA: Any, muB: Any, r: Any) -> np.ndarray:
        """Force between two dipoles.

        .. math::

            {\\bf F} = \\left[ {\\bf F}_D w_D + {\\bf F}_I w_I \\right] e^{-\\kappa r}

        with the direct contribution

        .. math::

            {\\bf F}_D = 3\\frac{ (5 (\\mu_A\\cdot\\hat r)(\\mu_B\\cdot\\hat r)
                - \\mu_A\\cdot\\mu_B)\\hat r - (\\mu_B\\cdot\\hat r)\\mu_A
                - (\\mu_A\\cdot\\hat r)\\mu_B }{r^4}

        and the indirect contribution
        :math:`{\\bf F}_I = (\\mu_A\\cdot\\hat r)(\\mu_B\\cdot\\hat r)\\hat r / r^4`.
        """
        muA = _as_vec3(muA)
        muB = _as_vec3(muB)
        r = _as_vec3(r)
        r2 = np.dot(r, r)
        if r2 >= self._cutoff2:
            return np.zeros(3)
        r1 = np.sqrt(r2)
        rh = r / r1
        q = r1 * self._inv_cutoff
        q2 = q * q
        r4 = r2 * r2
        kappa = self.kappa
        muA_dot_rh = np.dot(muA, rh)
        muB_dot_rh = np.dot(muB, rh)
        s, ds, dds, ddds = self.splitting_values(q)

        force_direct = (
            3.0
            * (
                (5.0 * muA_dot_rh * muB_dot_rh - np.dot(muA, muB)) * rh
                - muB_dot_rh * muA
                - muA_dot_rh * muB
            )
            / r4
        )
        force_direct *= (
            s * (1.0 + kappa * r1 + kappa * kappa * r2 / 3.0)
            - q * ds * (1.0 + 2.0 / 3.0 * kappa * r1)
            + q2 / 3.0 * dds
        )
        force_indirect = muA_dot_rh * muB_dot_rh * rh / r4
        force_indirect *= (
            s * (1.0 + kappa * r1) * kappa * kappa * r2
            - q * ds * (3.0 * kappa * r1 + 2.0) * kappa * r1
            + dds * (1.0 + 3.0 * kappa * r1) * q2
            - q2 * q * ddds
        )
        return (force_direct + force_indirect) * np.exp(-kappa * r1)

    def dipole_torque(self, mu: Any, E: Any) -> np.ndarray:
        """Torque on dipole ``mu`` in field ``E``, :math:`\\mu \\times {\\bf E}`."""
        return np.cross(_as_vec3(mu), _as_vec3(E))

    # ------------------------------------------------------------------
    # Self-energy and dielectric constant
    # ------------------------------------------------------------------

    def self_energy(self, m2: Sequence[float]) -> float:
        """Self-energy of a particle.

        .. math::

            u_{self} = p_0 \\frac{z^2}{R_c} + p_1 \\frac{|\\mu|^2}{R_c^3}

        Parameters
        ----------
        m2 : Sequence[float]
            Squared moments, ``(z**2, |mu|**2)``.

        Returns
        -------
        float

        Raises
        ------
        ValueError
            If ``m2`` does not have one entry per self-energy prefactor.
        """
        if len(m2) != len(self.self_energy_prefactor):
            raise ValueError(
                "Vectors of self energy prefactors and squared moments are not "
                f"equal in size ({len(self.self_energy_prefactor)} != {len(m2)})"
            )
        e_self = 0.0
        for i, (prefactor, moment) in enumerate(zip(self.self_energy_prefactor, m2)):
            e_self += prefactor * moment * self._inv_cutoff ** (2 * i + 1)
        return e_self

    def calc_dielectric(self, M2V: float) -> float:
        """Dielectric constant from the reduced dipole fluctuation.

        .. math::

            \\varepsilon_r = \\frac{M2V \\, T_0 + 2 M2V + 1}{M2V \\, T_0 - M2V + 1},
            \\qquad M2V = \\frac{\\langle M^2 \\rangle}{3 \\varepsilon_0 V k_B T}
        """
        return (M2V * self.T0 + 2.0 * M2V + 1.0) / (M2V * self.T0 - M2V + 1.0)

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def _scheme_fields(self) -> dict[str, Any]:
        return {}

    def to_dict(self) -> dict[str, Any]:
        """JSON-compatible description accepted by ``scheme_from_dict``."""
        data: dict[str, Any] = {"type": self.scheme.value}
        data.update(self._scheme_fields())
        if math.isfinite(self.cutoff):
            data["cutoff"] = self.cutoff
        if self.doi:
            data["doi"] = self.doi
        if math.isfinite(self.debye_length):
            data["debyelength"] = self.debye_length
        return data

    @classmethod
    @abstractmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ShortRangeScheme:
        """Construct the scheme from a mapping produced by :meth:`to_dict`."""

    def __repr__(self) -> str:
        fields = ", ".join(
            f"{key}={value!r}"
            for key, value in self.to_dict().items()
            if key not in ("type", "doi")
        )
        return f"{type(self).__name__}({fields})"
