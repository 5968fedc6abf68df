# -*- coding: utf-8 -*-
"""
Recgauss Exception Hierarchy - Domain-specific exceptions for recursive filtering.

Provides a small exception hierarchy that lets callers catch recgauss
errors distinctly from Python built-in exceptions. Every recgauss
exception subclasses both ``RecgaussError`` and the closest built-in
exception, so code written against ``ValueError`` keeps working.

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


class RecgaussError(Exception):
    """Base exception for all recgauss errors."""


class InvalidParameter(RecgaussError, ValueError):
    """Invalid filter configuration or input array.

    Raised for non-positive or non-finite sigma, non-positive spacing,
    axis indices outside ``[0, ndim - 1]``, mismatched output shapes and
    complex-valued input. Always raised before any recursion runs.
    """


class NumericOverflow(RecgaussError, ArithmeticError):
    """Recursion coefficients could not be represented as finite numbers.

    Raised when a pathological sigma/spacing ratio drives a derived
    coefficient or the normalization factor to infinity or NaN.
    """

