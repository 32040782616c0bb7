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
Pytest fixtures for truncated electrostatics tests.

This module contains:
- The reference pair geometry used by the regression values
- Device fixtures for the Warp kernel tests
"""

from __future__ import annotations

import numpy as np
import pytest
import warp as wp


def pytest_configure(config):
    """Configure pytest for electrostatics tests."""
    config.addinivalue_line("markers", "gpu: marks tests that require GPU")
    config.addinivalue_line("markers", "warp: marks tests that require Warp")


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers based on test names."""
    for item in items:
        if "cuda" in item.name.lower() or "gpu" in item.name.lower():
            item.add_marker(pytest.mark.gpu)


@pytest.fixture(scope="session", autouse=True)
def setup_warp():
    """Initialize Warp before any test touches its runtime."""
    wp.init()
    yield


@pytest.fixture(scope="session")
def pair_geometry():
    """Charges, dipoles and separations used by the regression values.

    - Charges zA = 2, zB = 3
    - Dipoles muA = (19, 7, 11), muB = (13, 17, 5)
    - Separation r = (23, 0, 0), and r_far = (30, 0, 0) used with an
      infinite cut-off

    Returns
    -------
    dict
    """
    return {
        "zA": 2.0,
        "zB": 3.0,
        "muA": np.array([19.0, 7.0, 11.0]),
        "muB": np.array([13.0, 17.0, 5.0]),
        "r": np.array([23.0, 0.0, 0.0]),
        "r_far": np.array([30.0, 0.0, 0.0]),
        "cutoff": 29.0,
    }


@pytest.fixture(params=["cpu", "cuda:0"], ids=["cpu", "gpu"])
def device(request):
    """Fixture providing both CPU and GPU devices.

    GPU tests are skipped if CUDA is not available.

    Returns
    -------
    str
        Device name ("cpu" or "cuda:0")
    """
    device_name = request.param
    if device_name == "cuda:0" and not wp.is_cuda_available():
        pytest.skip("CUDA not available")
    return device_name
