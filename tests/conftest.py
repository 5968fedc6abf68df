# -*- coding: utf-8 -*-
"""
Shared pytest fixtures for recursive Gaussian filter tests.

Synthetic lines and images with known analytic responses: impulses,
constants and polynomial ramps on isotropic and anisotropic grids.

Author
------
Duane Smalley, PhD
duane.d.smalley@gmail.com

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.

Created
-------
2026-10-19

Modified
--------
2026-10-19
"""

import numpy as np
import pytest


@pytest.fixture
def rng():
    """Seeded random generator."""
    return np.random.default_rng(12345)


@pytest.fixture
def random_image(rng):
    """(48, 64) float64 image with values in [0, 1)."""
    return rng.random((48, 64))


@pytest.fixture
def random_volume(rng):
    """(12, 20, 16) float64 volume."""
    return rng.standard_normal((12, 20, 16))


@pytest.fixture
def impulse_line():
    """Length-11 line with a single sample of 10 at index 5."""
    line = np.zeros(11)
    line[5] = 10.0
    return line


@pytest.fixture
def impulse_image():
    """(41, 41) image with a unit impulse at the center."""
    image = np.zeros((41, 41))
    image[20, 20] = 1.0
    return image


@pytest.fixture
def sampled_gaussian():
    """Factory for unit-mass Gaussians sampled at integer offsets."""
    def _make(n: int, center: int, sigma: float) -> np.ndarray:
        x = np.arange(n) - center
        return np.exp(-0.5 * (x / sigma) ** 2) / (sigma * np.sqrt(2.0 * np.pi))
    return _make
