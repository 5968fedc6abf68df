# -*- coding: utf-8 -*-
"""
recgauss - Recursive (IIR) Gaussian filtering of N-dimensional images.

Smooths or differentiates N-D sample arrays along one axis at a time with
R. Deriche's 4th-order recursive approximation of the Gaussian, at a
cost per sample that does not depend on sigma.

Dependencies
------------
numpy
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

__version__ = "0.1.0"
__author__ = "Duane Smalley"

from recgauss.exceptions import (
    RecgaussError,
    InvalidParameter,
    NumericOverflow,
)
from recgauss.vocabulary import (
    DerivativeOrder,
    ProcessorCategory,
)
from recgauss.image import SampledImage

__all__ = [
    'RecgaussError',
    'InvalidParameter',
    'NumericOverflow',
    'DerivativeOrder',
    'ProcessorCategory',
    'SampledImage',
]
