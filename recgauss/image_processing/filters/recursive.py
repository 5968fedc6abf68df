# -*- coding: utf-8 -*-
"""
Recursive Line Filtering - Causal/anticausal IIR passes along array axes.

Applies the two recursive passes described by a ``CoefficientSet`` to a
single 1D line (``filter_line``) or to every line of an N-D array parallel
to one axis (``filter_along_axis``). Both passes run through
``scipy.signal.lfilter`` with zero initial state, which is the
zero-padding boundary condition::

    causal[i] = n0 x[i] + n1 x[i-1] + n2 x[i-2] + n3 x[i-3]
              - d1 causal[i-1] - ... - d4 causal[i-4]
    anti[i]   = m1 x[i+1] + ... + m4 x[i+4]
              - d1 anti[i+1] - ... - d4 anti[i+4]
    y[i]      = K (causal[i] + anti[i])

Lines are independent. ``filter_along_axis`` splits them into disjoint
chunks and runs the chunks on a joblib thread pool; ``lfilter`` releases
the GIL, and every line goes through the same arithmetic regardless of
the chunking, so results are bit-identical for any worker count.

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

# Standard library
import logging
import math
from typing import List, Optional, Union

# Third-party
import numpy as np
from joblib import Parallel, delayed
from scipy.signal import lfilter

# recgauss internal
from recgauss.exceptions import InvalidParameter, NumericOverflow
from recgauss.image_processing.filters._validation import (
    validate_direction,
    validate_real_array,
    validate_sigma,
    validate_workers,
    working_dtype,
)
from recgauss.image_processing.filters.coefficients import (
    CoefficientSet,
    compute_coefficients,
)
from recgauss.vocabulary import DerivativeOrder

logger = logging.getLogger(__name__)

#: Causal history length of the 4th-order recursion.
MIN_LINE_LENGTH = 4


def _check_coefficients(coefficients: CoefficientSet) -> None:
    if not isinstance(coefficients, CoefficientSet):
        raise TypeError(
            f"coefficients must be a CoefficientSet, "
            f"got {type(coefficients).__name__}"
        )


def _recursive_passes(
    data: np.ndarray,
    coefficients: CoefficientSet,
    dtype: np.dtype,
) -> np.ndarray:
    """Run both passes along the last axis of *data*, returning *dtype*.

    The recursion always runs in float64; only the result takes *dtype*.
    """
    data = np.asarray(data, dtype=np.float64)
    a = np.asarray(coefficients.denominator, dtype=np.float64)
    causal = lfilter(coefficients.causal_numerator, a, data, axis=-1)
    anticausal = lfilter(
        coefficients.anticausal_numerator, a, data[..., ::-1], axis=-1,
    )[..., ::-1]
    result = causal + anticausal
    result *= coefficients.k
    return result.astype(dtype, copy=False)


def filter_line(
    line: np.ndarray,
    coefficients: CoefficientSet,
) -> np.ndarray:
    """Filter one line of samples with a causal and an anticausal pass.

    Parameters
    ----------
    line : np.ndarray
        1D real-valued samples, length ``L``.
    coefficients : CoefficientSet
        Coefficients from a single ``compute_coefficients`` call.

    Returns
    -------
    np.ndarray
        Filtered line, length ``L``; float32 for float32 input, float64
        otherwise.

    Raises
    ------
    TypeError
        If *coefficients* is not a ``CoefficientSet``.
    InvalidParameter
        If *line* is not 1D or not real-valued.
    """
    _check_coefficients(coefficients)
    line = validate_real_array(line)
    if line.ndim != 1:
        raise InvalidParameter(f"line must be 1D, got {line.ndim}D")
    dtype = working_dtype(line.dtype)
    if line.size == 0:
        return line.astype(dtype)
    return _recursive_passes(line, coefficients, dtype)


def _chunk_slices(n_lines: int, workers: int) -> List[slice]:
    n_chunks = max(1, min(workers, n_lines))
    bounds = np.linspace(0, n_lines, n_chunks + 1).astype(int)
    return [slice(int(lo), int(hi))
            for lo, hi in zip(bounds[:-1], bounds[1:]) if hi > lo]


def filter_along_axis(
    array: np.ndarray,
    axis: int,
    coefficients: CoefficientSet,
    out: Optional[np.ndarray] = None,
    workers: int = 1,
) -> np.ndarray:
    """Filter every line of *array* parallel to *axis*.

    Parameters
    ----------
    array : np.ndarray
        Real-valued N-D samples. Not modified unless passed as *out*.
    axis : int
        Axis along which lines are extracted, in ``[0, ndim - 1]``.
    coefficients : CoefficientSet
        Coefficients shared by every line.
    out : np.ndarray, optional
        Destination with the same shape as *array*. Written only after
        all lines have been filtered. May be *array* itself.
    workers : int
        Number of threads the lines are spread over. Default 1.

    Returns
    -------
    np.ndarray
        *out* when given, otherwise a new float32/float64 array.

    Raises
    ------
    InvalidParameter
        If *axis* is out of range, *workers* < 1, or *out* has a
        different shape.
    """
    _check_coefficients(coefficients)
    array = validate_real_array(array)
    axis = validate_direction(axis, array.ndim)
    workers = validate_workers(workers)
    if out is not None and out.shape != array.shape:
        raise InvalidParameter(
            f"out must have shape {array.shape}, got {out.shape}"
        )

    length = array.shape[axis]
    if 0 < length < MIN_LINE_LENGTH:
        logger.warning(
            "Lines along axis %d have %d samples, fewer than the %d-sample "
            "recursion history; accuracy near the boundary is degraded",
            axis, length, MIN_LINE_LENGTH,
        )

    dtype = working_dtype(array.dtype)
    if array.size == 0:
        result = array.astype(dtype)
    else:
        moved = np.moveaxis(array, axis, -1)
        lines = moved.reshape(-1, length)
        filtered = np.empty(lines.shape, dtype=dtype)

        def _run(rows: slice) -> None:
            filtered[rows] = _recursive_passes(lines[rows], coefficients,
                                               dtype)

        slices = _chunk_slices(lines.shape[0], workers)
        logger.debug(
            "Filtering %d lines of length %d along axis %d in %d chunk(s)",
            lines.shape[0], length, axis, len(slices),
        )
        if len(slices) == 1:
            _run(slices[0])
        else:
            Parallel(n_jobs=workers, backend='threading')(
                delayed(_run)(rows) for rows in slices
            )
        result = np.moveaxis(filtered.reshape(moved.shape), -1, axis)

    if out is None:
        return np.ascontiguousarray(result)
    out[...] = result
    return out


def axis_coefficients(
    sigma: float,
    spacing: float = 1.0,
    symmetric: bool = True,
    order: Optional[Union[int, DerivativeOrder]] = None,
) -> CoefficientSet:
    """Solve coefficients for a physical *sigma* on an axis with *spacing*.

    The kernel width in samples is ``sigma / spacing``. Derivative
    kernels are rescaled by ``spacing ** -order`` so they differentiate
    with respect to physical coordinates.

    Raises
    ------
    InvalidParameter
        If *sigma* or *spacing* is not positive and finite.
    NumericOverflow
        If the ratio ``sigma / spacing`` or a coefficient overflows.
    """
    sigma = validate_sigma(sigma)
    spacing = validate_sigma(spacing, name='spacing')
    effective_sigma = sigma / spacing
    if not math.isfinite(effective_sigma) or effective_sigma == 0.0:
        raise NumericOverflow(
            f"sigma/spacing ratio {sigma!r}/{spacing!r} is not representable"
        )
    coefficients = compute_coefficients(effective_sigma, symmetric, order)
    if coefficients.order is not DerivativeOrder.ZERO:
        try:
            factor = spacing ** -coefficients.order.value
        except OverflowError:
            raise NumericOverflow(
                f"spacing {spacing!r} overflows the derivative scale"
            ) from None
        coefficients = coefficients.scaled(factor)
    return coefficients


def smooth_axis(
    array: np.ndarray,
    axis: int,
    sigma: float,
    spacing: float = 1.0,
    symmetric: bool = True,
    order: Optional[Union[int, DerivativeOrder]] = None,
    out: Optional[np.ndarray] = None,
    workers: int = 1,
) -> np.ndarray:
    """Recursive Gaussian filtering of *array* along one axis.

    Converts *sigma* (physical units) to sample units with the axis
    *spacing*, solves the coefficients once, and filters every line.

    Parameters
    ----------
    array : np.ndarray
        Real-valued N-D samples.
    axis : int
        Axis to filter along.
    sigma : float
        Kernel width in physical units.
    spacing : float
        Physical distance between samples along *axis*. Default 1.0.
    symmetric : bool
        False selects the first-derivative kernel. Default True.
    order : int or DerivativeOrder, optional
        Explicit derivative order, see ``compute_coefficients``.
    out : np.ndarray, optional
        Destination array with the same shape.
    workers : int
        Number of line-filtering threads. Default 1.

    Returns
    -------
    np.ndarray

    Examples
    --------
    >>> smoothed = smooth_axis(volume, axis=2, sigma=1.5, spacing=0.75)
    """
    array = validate_real_array(array)
    validate_direction(axis, array.ndim)
    validate_workers(workers)
    coefficients = axis_coefficients(sigma, spacing, symmetric, order)
    return filter_along_axis(array, axis, coefficients, out=out,
                             workers=workers)
