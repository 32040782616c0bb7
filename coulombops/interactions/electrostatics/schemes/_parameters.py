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

"""Helpers for reading scheme parameters from configuration mappings."""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any

from ..base import SchemeParameterError


def _to_float(key: str, value: Any) -> float:
    # "inf" is how infinite values are written to JSON
    try:
        return float(value)
    except (TypeError, ValueError) as err:
        raise SchemeParameterError(
            "invalid", f"`{key}` must be a number, got {value!r}"
        ) from err


def required_float(data: Mapping[str, Any], key: str) -> float:
    if key not in data:
        raise SchemeParameterError("missing", f"required keyword `{key}` not found")
    return _to_float(key, data[key])


def optional_float(data: Mapping[str, Any], key: str, default: float = math.inf) -> float:
    if key not in data or data[key] is None:
        return default
    return _to_float(key, data[key])


def required_int(data: Mapping[str, Any], key: str) -> int:
    value = required_float(data, key)
    if not value.is_integer():
        raise SchemeParameterError(
            "invalid", f"`{key}` must be an integer, got {data[key]!r}"
        )
    return int(value)
