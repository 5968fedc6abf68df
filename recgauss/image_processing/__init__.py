# -*- coding: utf-8 -*-
"""
Image Processing Module - Recursive Gaussian transforms and their plumbing.

All processors inherit from ``ImageProcessor``, which provides version
checking and ``typing.Annotated`` tunable parameters resolved at call
time through ``**kwargs``.

Sub-modules
-----------
filters/
    Deriche coefficient solver, line and axis recursion, and the
    recursive Gaussian smoothing and derivative transforms.
pipeline.py
    Sequential composition of ``ImageTransform`` steps.
versioning.py
    ``@processor_version`` and ``@processor_tags`` decorators.
params.py
    ``Range``, ``Options``, ``Desc`` constraint markers for tunable
    parameters via ``Annotated`` type hints.

Usage
-----
First derivative along the columns of an anisotropic image:

    >>> from recgauss.image_processing import RecursiveGaussianFirstDerivative
    >>> deriv = RecursiveGaussianFirstDerivative(sigma=1.5, direction=1)
    >>> gx = deriv.apply(image, spacing=(0.5, 0.25))

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

from recgauss.image_processing.base import ImageProcessor, ImageTransform
from recgauss.image_processing.filters import (
    CoefficientSet,
    RecursiveGaussianFilter,
    RecursiveGaussianFirstDerivative,
    RecursiveGaussianSecondDerivative,
    SmoothingRecursiveGaussian,
    compute_coefficients,
    filter_along_axis,
    filter_line,
    smooth_axis,
)
from recgauss.image_processing.pipeline import Pipeline
from recgauss.image_processing.versioning import (
    processor_version,
    processor_tags,
)
from recgauss.image_processing.params import (
    Range,
    Options,
    Desc,
    ParamSpec,
)
from recgauss.vocabulary import DerivativeOrder, ProcessorCategory

__all__ = [
    'ImageProcessor',
    'ImageTransform',
    'Pipeline',
    'CoefficientSet',
    'compute_coefficients',
    'filter_line',
    'filter_along_axis',
    'smooth_axis',
    'RecursiveGaussianFilter',
    'RecursiveGaussianFirstDerivative',
    'RecursiveGaussianSecondDerivative',
    'SmoothingRecursiveGaussian',
    'processor_version',
    'processor_tags',
    'Range',
    'Options',
    'Desc',
    'ParamSpec',
    'DerivativeOrder',
    'ProcessorCategory',
]
