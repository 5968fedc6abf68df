# -*- coding: utf-8 -*-
"""
Recursive Line and Axis Filtering Tests.

Tests for ``filter_line``, ``filter_along_axis``, ``axis_coefficients``
and ``smooth_axis``: gain and impulse response, antisymmetry, derivative
slopes in physical units, worker independence, short lines, dtype
handling and argument validation.

Dependencies
------------
pytest

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

import logging

import numpy as np
import pytest

from recgauss.exceptions import InvalidParameter, NumericOverflow
from recgauss.image_processing.filters.coefficients import compute_coefficients
from recgauss.image_processing.filters.recursive import (
    MIN_LINE_LENGTH,
    axis_coefficients,
    filter_along_axis,
    filter_line,
    smooth_axis,
)
from recgauss.vocabulary import DerivativeOrder

_LOGGER = 'recgauss.image_processing.filters.recursive'


# ---------------------------------------------------------------------------
# filter_line
# ---------------------------------------------------------------------------

class TestFilterLineGain:
    """Unit DC gain away from the zero-padded boundaries."""

    @pytest.mark.parametrize('sigma', [0.5, 1.0, 2.5, 5.0, 10.0])
    def test_constant_line_interior(self, sigma):
        margin = int(8 * sigma) + 4
        line = np.full(2 * margin + 20, 3.0)
        result = filter_line(line, compute_coefficients(sigma))
        np.testing.assert_allclose(result[margin:-margin], 3.0, rtol=1e-3)

    def test_boundary_attenuated(self):
        """Zero padding pulls the end samples towards zero."""
        line = np.ones(60)
        result = filter_line(line, compute_coefficients(3.0))
        assert result[0] < 0.75
        assert result[-1] < 0.75


class TestFilterLineImpulse:
    """Impulse response shape."""

    def test_spreads_energy(self, impulse_line):
        result = filter_line(impulse_line, compute_coefficients(2.0))
        assert result.shape == (11,)
        assert int(np.argmax(result)) == 5
        assert 0.0 < result[5] < 10.0
        np.testing.assert_allclose(result.sum(), 10.0, rtol=0.05)

    def test_symmetric_about_impulse(self, impulse_line):
        result = filter_line(impulse_line, compute_coefficients(2.0))
        np.testing.assert_allclose(result, result[::-1], atol=1e-12)

    def test_monotonic_decay_from_peak(self):
        sigma = 2.0
        line = np.zeros(81)
        line[40] = 1.0
        result = filter_line(line, compute_coefficients(sigma))
        right = result[40:40 + int(3 * sigma) + 1]
        assert np.all(np.diff(right) < 0)
        left = result[40 - int(3 * sigma):41]
        assert np.all(np.diff(left) > 0)

    def test_approximates_sampled_gaussian(self, sampled_gaussian):
        sigma = 4.0
        line = np.zeros(101)
        line[50] = 1.0
        result = filter_line(line, compute_coefficients(sigma))
        expected = sampled_gaussian(101, 50, sigma)
        np.testing.assert_allclose(result, expected, atol=2e-3)

    def test_linear_in_input(self, rng):
        coeffs = compute_coefficients(1.5)
        a = rng.standard_normal(40)
        b = rng.standard_normal(40)
        np.testing.assert_allclose(
            filter_line(2.0 * a + b, coeffs),
            2.0 * filter_line(a, coeffs) + filter_line(b, coeffs),
            atol=1e-12,
        )


class TestFilterLineAntisymmetric:
    """First-derivative kernel on symmetric input."""

    def test_output_antisymmetric(self):
        n = 41
        x = np.arange(n) - n // 2
        line = np.exp(-0.5 * (x / 5.0) ** 2)
        result = filter_line(line, compute_coefficients(2.0, symmetric=False))
        np.testing.assert_allclose(result, -result[::-1], atol=1e-10)
        assert result[n // 2] == pytest.approx(0.0, abs=1e-10)

    def test_impulse_response_antisymmetric(self):
        line = np.zeros(31)
        line[15] = 1.0
        result = filter_line(line, compute_coefficients(3.0, symmetric=False))
        np.testing.assert_allclose(result[:15], -result[:15:-1], atol=1e-12)
        assert result[15] == pytest.approx(0.0, abs=1e-12)

    def test_unit_slope_on_ramp(self):
        sigma = 2.0
        margin = int(12 * sigma) + 4
        line = np.arange(2 * margin + 30, dtype=np.float64)
        result = filter_line(line, compute_coefficients(sigma, symmetric=False))
        np.testing.assert_allclose(result[margin:-margin], 1.0, rtol=1e-3)


class TestFilterLineEdgeCases:
    """Degenerate lengths, dtypes and argument errors."""

    @pytest.mark.parametrize('length', [1, 2, 3])
    def test_short_lines_finite(self, length):
        line = np.arange(1, length + 1, dtype=np.float64)
        result = filter_line(line, compute_coefficients(2.0))
        assert result.shape == (length,)
        assert np.all(np.isfinite(result))

    def test_empty_line(self):
        result = filter_line(np.zeros(0), compute_coefficients(2.0))
        assert result.shape == (0,)

    def test_float32_preserved(self):
        line = np.ones(32, dtype=np.float32)
        result = filter_line(line, compute_coefficients(2.0))
        assert result.dtype == np.float32

    @pytest.mark.parametrize('sigma', [40.0, 80.0, 300.0, 1000.0])
    def test_float32_wide_kernel_unit_gain(self, sigma):
        length = int(24 * sigma)
        coeffs = compute_coefficients(sigma)
        single = filter_line(np.ones(length, dtype=np.float32), coeffs)
        double = filter_line(np.ones(length), coeffs)
        assert single.dtype == np.float32
        assert np.all(np.isfinite(single))
        assert float(single[length // 2]) == pytest.approx(1.0, rel=1e-4)
        np.testing.assert_array_equal(single, double.astype(np.float32))

    def test_integer_promoted_to_float64(self):
        line = np.arange(16, dtype=np.int16)
        result = filter_line(line, compute_coefficients(2.0))
        assert result.dtype == np.float64

    def test_input_not_modified(self, rng):
        line = rng.standard_normal(25)
        before = line.copy()
        filter_line(line, compute_coefficients(2.0))
        np.testing.assert_array_equal(line, before)

    def test_rejects_raw_tuple_coefficients(self):
        with pytest.raises(TypeError, match="CoefficientSet"):
            filter_line(np.ones(8), ((1, 0, 0, 0), (0, 0, 0, 0)))

    def test_rejects_2d(self):
        with pytest.raises(InvalidParameter, match="1D"):
            filter_line(np.ones((4, 4)), compute_coefficients(2.0))

    def test_rejects_complex(self):
        with pytest.raises(InvalidParameter, match="complex"):
            filter_line(np.ones(8, dtype=np.complex128),
                        compute_coefficients(2.0))


# ---------------------------------------------------------------------------
# filter_along_axis
# ---------------------------------------------------------------------------

class TestFilterAlongAxis:
    """Every line parallel to one axis shares one coefficient set."""

    @pytest.mark.parametrize('axis', [0, 1, 2])
    def test_matches_per_line(self, random_volume, axis):
        coeffs = compute_coefficients(1.5)
        result = filter_along_axis(random_volume, axis, coeffs)
        expected = np.apply_along_axis(filter_line, axis, random_volume, coeffs)
        np.testing.assert_allclose(result, expected, rtol=1e-12, atol=1e-14)

    @pytest.mark.parametrize('workers', [2, 3, 7, 64])
    def test_worker_count_independent(self, random_volume, workers):
        coeffs = compute_coefficients(2.0)
        serial = filter_along_axis(random_volume, 1, coeffs, workers=1)
        parallel = filter_along_axis(random_volume, 1, coeffs, workers=workers)
        np.testing.assert_array_equal(serial, parallel)

    def test_two_axis_passes_worker_independent(self, random_image):
        coeffs = compute_coefficients(1.2)
        serial = filter_along_axis(
            filter_along_axis(random_image, 0, coeffs), 1, coeffs)
        parallel = filter_along_axis(
            filter_along_axis(random_image, 0, coeffs, workers=4), 1, coeffs,
            workers=4)
        np.testing.assert_array_equal(serial, parallel)

    def test_writes_into_out(self, random_image):
        coeffs = compute_coefficients(2.0)
        out = np.empty_like(random_image)
        result = filter_along_axis(random_image, 1, coeffs, out=out)
        assert result is out
        np.testing.assert_array_equal(
            out, filter_along_axis(random_image, 1, coeffs))

    def test_in_place(self, random_image):
        coeffs = compute_coefficients(2.0)
        expected = filter_along_axis(random_image, 0, coeffs)
        data = random_image.copy()
        filter_along_axis(data, 0, coeffs, out=data)
        np.testing.assert_array_equal(data, expected)

    def test_fresh_output_is_contiguous(self, random_image):
        result = filter_along_axis(random_image, 0, compute_coefficients(2.0))
        assert result.flags['C_CONTIGUOUS']
        assert result.shape == random_image.shape

    def test_input_not_modified(self, random_image):
        before = random_image.copy()
        filter_along_axis(random_image, 1, compute_coefficients(2.0), workers=2)
        np.testing.assert_array_equal(random_image, before)

    def test_float32_preserved(self, random_image):
        data = random_image.astype(np.float32)
        result = filter_along_axis(data, 0, compute_coefficients(2.0))
        assert result.dtype == np.float32

    def test_float32_wide_kernel_matches_double(self):
        coeffs = compute_coefficients(80.0)
        data = np.ones((3, 1920), dtype=np.float32)
        single = filter_along_axis(data, 1, coeffs, workers=2)
        double = filter_along_axis(data.astype(np.float64), 1, coeffs)
        assert single.dtype == np.float32
        np.testing.assert_array_equal(single, double.astype(np.float32))
        np.testing.assert_allclose(single[:, 960], 1.0, rtol=1e-4)

    def test_empty_axis(self):
        data = np.zeros((0, 5))
        result = filter_along_axis(data, 0, compute_coefficients(2.0))
        assert result.shape == (0, 5)

    def test_short_axis_warns(self, caplog):
        data = np.ones((3, 10))
        with caplog.at_level(logging.WARNING, logger=_LOGGER):
            result = filter_along_axis(data, 0, compute_coefficients(1.0))
        assert np.all(np.isfinite(result))
        assert any(r.levelno == logging.WARNING for r in caplog.records)

    def test_long_axis_does_not_warn(self, caplog):
        data = np.ones((MIN_LINE_LENGTH, 10))
        with caplog.at_level(logging.WARNING, logger=_LOGGER):
            filter_along_axis(data, 0, compute_coefficients(1.0))
        assert not caplog.records

    @pytest.mark.parametrize('axis', [-1, 2, 3])
    def test_axis_out_of_range(self, random_image, axis):
        with pytest.raises(InvalidParameter, match="direction"):
            filter_along_axis(random_image, axis, compute_coefficients(2.0))

    @pytest.mark.parametrize('workers', [0, -2])
    def test_invalid_workers(self, random_image, workers):
        with pytest.raises(InvalidParameter, match="workers"):
            filter_along_axis(random_image, 0, compute_coefficients(2.0),
                              workers=workers)

    def test_out_shape_mismatch_leaves_out_untouched(self, random_image):
        out = np.full((10, 10), -7.0)
        with pytest.raises(InvalidParameter, match="shape"):
            filter_along_axis(random_image, 0, compute_coefficients(2.0),
                              out=out)
        np.testing.assert_array_equal(out, -7.0)


# ---------------------------------------------------------------------------
# axis_coefficients / smooth_axis
# ---------------------------------------------------------------------------

class TestAxisCoefficients:
    """Physical sigma and spacing to sample-unit coefficients."""

    def test_effective_sigma(self):
        coeffs = axis_coefficients(3.0, spacing=0.5)
        assert coeffs.sigma == 6.0
        assert coeffs == compute_coefficients(6.0)

    def test_derivative_scaled_by_spacing(self):
        base = compute_coefficients(4.0, symmetric=False)
        coeffs = axis_coefficients(2.0, spacing=0.5, symmetric=False)
        assert coeffs.k == pytest.approx(base.k / 0.5)

    def test_second_derivative_scaled_by_spacing_squared(self):
        base = compute_coefficients(4.0, order=DerivativeOrder.SECOND)
        coeffs = axis_coefficients(8.0, spacing=2.0, order=2)
        assert coeffs.k == pytest.approx(base.k / 4.0)

    @pytest.mark.parametrize('spacing', [0.0, -1.0, float('nan')])
    def test_invalid_spacing(self, spacing):
        with pytest.raises(InvalidParameter, match="spacing"):
            axis_coefficients(1.0, spacing=spacing)

    def test_ratio_overflow(self):
        with pytest.raises(NumericOverflow):
            axis_coefficients(1e300, spacing=1e-300)

    def test_ratio_underflow(self):
        with pytest.raises(NumericOverflow):
            axis_coefficients(1e-300, spacing=1e300)


class TestSmoothAxis:
    """End-to-end single-axis filtering."""

    def test_matches_explicit_coefficients(self, random_image):
        result = smooth_axis(random_image, 1, sigma=3.0, spacing=1.5)
        expected = filter_along_axis(random_image, 1, compute_coefficients(2.0))
        np.testing.assert_array_equal(result, expected)

    def test_derivative_per_physical_unit(self):
        spacing = 0.25
        sigma = 1.0
        margin = int(12 * sigma / spacing) + 4
        x = np.arange(2 * margin + 30) * spacing
        result = smooth_axis(2.5 * x, 0, sigma=sigma, spacing=spacing,
                             symmetric=False)
        np.testing.assert_allclose(result[margin:-margin], 2.5, rtol=1e-3)

    def test_second_derivative_per_physical_unit(self):
        spacing = 0.5
        sigma = 1.5
        margin = int(12 * sigma / spacing) + 4
        x = (np.arange(2 * margin + 31) - (margin + 15)) * spacing
        result = smooth_axis(1.5 * x ** 2, 0, sigma=sigma, spacing=spacing,
                             order=DerivativeOrder.SECOND)
        np.testing.assert_allclose(result[margin:-margin], 3.0, rtol=1e-3)

    def test_validates_axis_before_solving(self, random_image):
        with pytest.raises(InvalidParameter, match="direction"):
            smooth_axis(random_image, 5, sigma=-1.0)
