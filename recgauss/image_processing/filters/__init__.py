# -*- coding: utf-8 -*-
"""
Recursive Gaussian Filters - Deriche 4th-order IIR smoothing and derivatives.

Coefficients
    ``compute_coefficients`` -- solves the recursion weights for one sigma
    ``CoefficientSet`` -- immutable weights shared by both passes

Recursion
    ``filter_line`` -- causal + anticausal pass over a single line
    ``filter_along_axis`` -- every line parallel to one axis, threaded
    ``smooth_axis`` -- sigma/spacing conversion plus ``filter_along_axis``

Transforms
    ``RecursiveGaussianFilter`` -- smoothing along one axis
    ``RecursiveGaussianFirstDerivative`` -- first derivative along one axis
    ``RecursiveGaussianSecondDerivative`` -- second derivative along one axis
    ``SmoothingRecursiveGaussian`` -- smoothing along every axis

Dependencies
------------
scipy
joblib

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

from recgauss.image_processing.filters.coefficients import (
    CoefficientSet,
    compute_coefficients,
)
from recgauss.image_processing.filters.recursive import (
    axis_coefficients,
    filter_along_axis,
    filter_line,
    smooth_axis,
)
from recgauss.image_processing.filters.gaussian import (
    RecursiveGaussianFilter,
    RecursiveGaussianFirstDerivative,
    RecursiveGaussianSecondDerivative,
    SmoothingRecursiveGaussian,
)

__all__ = [
    'CoefficientSet',
    'compute_coefficients',
    'axis_coefficients',
    'filter_line',
    'filter_along_axis',
    'smooth_axis',
    'RecursiveGaussianFilter',
    'RecursiveGaussianFirstDerivative',
    'RecursiveGaussianSecondDerivative',
    'SmoothingRecursiveGaussian',
]
