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
Scheme Registry
===============

Maps a :class:`~coulombops.interactions.electrostatics.base.Scheme` selector
(or its string value) to the class implementing it, and builds schemes from
positional arguments or from a JSON-compatible configuration mapping.

Examples
--------
>>> pot = create_scheme("poisson", 29.0, 3, 3, debye_length=23.0)
>>> same = scheme_from_dict(pot.to_dict())
>>> json.dumps(pot.to_dict())  # doctest: +SKIP
'{"type": "poisson", "C": 3, "D": 3, "cutoff": 29.0, ...}'
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .base import Scheme, ShortRangeScheme
from .schemes import Ewald, Fanourgakis, Plain, Poisson, PoissonSimple, QPotential, Wolf

__all__ = ["SCHEMES", "scheme_type", "create_scheme", "scheme_from_dict"]

SCHEMES: dict[Scheme, type[ShortRangeScheme]] = {
    Scheme.PLAIN: Plain,
    Scheme.EWALD: Ewald,
    Scheme.WOLF: Wolf,
    Scheme.POISSONSIMPLE: PoissonSimple,
    Scheme.POISSON: Poisson,
    Scheme.QPOTENTIAL: QPotential,
    Scheme.FANOURGAKIS: Fanourgakis,
}


def scheme_type(selector: Scheme | str) -> type[ShortRangeScheme] | None:
    """Class implementing ``selector``, or None if it is not recognized."""
    if isinstance(selector, str):
        try:
            selector = Scheme(selector.lower())
        except ValueError:
            return None
    return SCHEMES.get(selector)


def create_scheme(
    selector: Scheme | str, *args: Any, **kwargs: Any
) -> ShortRangeScheme | None:
    """Create a truncation scheme.

    Parameters
    ----------
    selector : Scheme | str
        Scheme to create, e.g. ``Scheme.EWALD`` or ``"ewald"``.
    *args, **kwargs
        Passed to the constructor of the selected class.

    Returns
    -------
    ShortRangeScheme | None
        The constructed scheme, or None if ``selector`` is not recognized.

    Raises
    ------
    SchemeParameterError
        If the parameters are not admissible for the selected scheme.
    """
    cls = scheme_type(selector)
    if cls is None:
        return None
    return cls(*args, **kwargs)


def scheme_from_dict(data: Mapping[str, Any]) -> ShortRangeScheme | None:
    """Create a truncation scheme from a configuration mapping.

    The ``type`` key selects the scheme; remaining recognized keys are
    ``cutoff``, ``alpha``, ``C``, ``D``, ``order``, ``debyelength`` and
    ``epss``. Extra keys such as ``doi`` are ignored.

    Returns
    -------
    ShortRangeScheme | None
        The constructed scheme, or None if ``type`` is missing or not
        recognized.

    Raises
    ------
    SchemeParameterError
        If a required key is missing or a parameter is not admissible.
    """
    selector = data.get("type")
    if selector is None:
        return None
    cls = scheme_type(selector)
    if cls is None:
        return None
    return cls.from_dict(data)
