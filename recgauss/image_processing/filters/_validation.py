# -*- coding: utf-8 -*-
"""
Filter Validation Helpers - Shared sigma, axis, spacing and array checks.

Provides reusable validation functions for the recursive Gaussian
filters. Every public entry point calls these helpers before any
recursion runs, so invalid configurations never produce partial output.

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

# Standard library
import math
import numbers
from typing import Optional, Sequence, Tuple, Union

# Third-party
import numpy as np

# recgauss internal
from recgauss.exceptions import InvalidParameter


def _is_real_number(value) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def validate_sigma(sigma: float, name: str = 'sigma') -> float:
    """Validate that a kernel width is a positive, finite real number.

    Parameters
    ----------
    sigma : float
        Kernel width to validate.
    name : str
        Parameter name for error messages. Default ``'sigma'``.

    Returns
    -------
    float
        *sigma* as a Python float.

    Raises
    ------
    InvalidParameter
        If *sigma* is not a real number, is non-finite, or is <= 0.
    """
    if not _is_real_number(sigma):
        raise InvalidParameter(
            f"{name} must be a real number, got {type(sigma).__name__}"
        )
    sigma = float(sigma)
    if not math.isfinite(sigma):
        raise InvalidParameter(f"{name} must be finite, got {sigma!r}")
    if sigma <= 0.0:
        raise InvalidParameter(f"{name} must be > 0, got {sigma!r}")
    return sigma


def validate_direction(direction: int, ndim: int) -> int:
    """Validate that an axis index lies in ``[0, ndim - 1]``.

    Raises
    ------
    InvalidParameter
        If *direction* is not an integer or is out of range.
    """
    if not isinstance(direction, numbers.Integral) or isinstance(direction, bool):
        raise InvalidParameter(
            f"direction must be an integer, got {type(direction).__name__}"
        )
    if not 0 <= direction < ndim:
        raise InvalidParameter(
            f"direction must be in [0, {ndim - 1}] for a {ndim}-D array, "
            f"got {direction}"
        )
    return int(direction)


def validate_spacing(
    spacing: Optional[Union[float, Sequence[float]]],
    ndim: int,
) -> Tuple[float, ...]:
    """Normalize and validate per-axis physical spacing.

    Parameters
    ----------
    spacing : float, Sequence[float], or None
        ``None`` means unit spacing on every axis; a scalar is broadcast
        to every axis; a sequence must have one entry per axis.
    ndim : int
        Number of array axes.

    Returns
    -------
    Tuple[float, ...]
        One positive, finite spacing per axis.

    Raises
    ------
    InvalidParameter
        If the length does not match *ndim* or any entry is not a
        positive, finite real number.
    """
    if spacing is None:
        return (1.0,) * ndim
    if _is_real_number(spacing):
        spacing = (spacing,) * ndim
    spacing = tuple(spacing)
    if len(spacing) != ndim:
        raise InvalidParameter(
            f"spacing must have {ndim} entries, got {len(spacing)}"
        )
    return tuple(validate_sigma(s, name='spacing') for s in spacing)


def validate_workers(workers: int) -> int:
    """Validate the number of parallel line workers (integer >= 1)."""
    if not isinstance(workers, numbers.Integral) or isinstance(workers, bool):
        raise InvalidParameter(
            f"workers must be an integer, got {type(workers).__name__}"
        )
    if workers < 1:
        raise InvalidParameter(f"workers must be >= 1, got {workers}")
    return int(workers)


def validate_real_array(array: np.ndarray) -> np.ndarray:
    """Check that *array* holds real numbers.

    Raises
    ------
    InvalidParameter
        If *array* is complex-valued or not numeric.
    """
    array = np.asarray(array)
    if np.iscomplexobj(array):
        raise InvalidParameter("complex-valued input is not supported")
    if not (np.issubdtype(array.dtype, np.number)
            or np.issubdtype(array.dtype, np.bool_)):
        raise InvalidParameter(
            f"input must be numeric, got dtype {array.dtype}"
        )
    return array


def working_dtype(dtype: np.dtype) -> np.dtype:
    """Floating type of the filtered output for samples of *dtype*.

    float32 input comes back as float32; every other real type as
    float64. The recursion itself always runs in float64.
    """
    if np.dtype(dtype) == np.float32:
        return np.dtype(np.float32)
    return np.dtype(np.float64)
