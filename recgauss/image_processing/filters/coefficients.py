# -*- coding: utf-8 -*-
"""
Recursive Gaussian Coefficients - Deriche 4th-order IIR coefficient solver.

Derives the recursion coefficients of a two-pass (causal + anticausal)
4th-order IIR filter approximating convolution with a sampled Gaussian or
one of its first two derivatives, following R. Deriche, "Fast algorithms
for low-level vision", IEEE-PAMI 12(1), 1990, and "Recursively
implementing the Gaussian and its derivatives", INRIA RR-1893, 1993.

The one-sided kernel is modelled as a sum of two damped complex
exponentials::

    h(x) = (a0 cos(w0 x/s) + a1 sin(w0 x/s)) exp(-b0 x/s)
         + (c0 cos(w1 x/s) + c1 sin(w1 x/s)) exp(-b1 x/s),   x >= 0

whose z-transform is a ratio of a cubic (``n0..n3``) and a quartic
(``1, d1..d4``). The anticausal half mirrors it with the sign of the
kernel's symmetry. All three derivative orders share the same poles, so
``d1..d4`` depend on sigma only.

The normalization factor ``K`` is solved from the moments of the combined
two-sided response rather than from the continuous Gaussian, so the
discrete filter has exactly unit DC gain (order 0), unit ramp gain
(order 1) or unit gain on ``x**2 / 2`` (order 2).

Dependencies
------------
None beyond the standard library.

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
import dataclasses
import logging
import math
from dataclasses import dataclass
from typing import Dict, NamedTuple, Optional, Sequence, Tuple, Union

# recgauss internal
from recgauss.exceptions import InvalidParameter, NumericOverflow
from recgauss.image_processing.filters._validation import validate_sigma
from recgauss.vocabulary import DerivativeOrder

logger = logging.getLogger(__name__)

Quad = Tuple[float, float, float, float]


class ExponentialSeries(NamedTuple):
    """Published fit parameters of one kernel order (sigma-normalized)."""

    a0: float
    a1: float
    b0: float
    b1: float
    c0: float
    c1: float
    w0: float
    w1: float


_POLES = dict(b0=1.3932, b1=1.3732, w0=0.6681, w1=2.0787)

EXPONENTIAL_SERIES: Dict[DerivativeOrder, ExponentialSeries] = {
    DerivativeOrder.ZERO: ExponentialSeries(
        a0=1.3530, a1=1.8151, c0=-0.3531, c1=0.0902, **_POLES),
    DerivativeOrder.FIRST: ExponentialSeries(
        a0=-0.6724, a1=-3.4327, c0=0.6724, c1=0.6494, **_POLES),
    DerivativeOrder.SECOND: ExponentialSeries(
        a0=-1.3563, a1=5.2318, c0=0.3446, c1=-2.2355, **_POLES),
}


@dataclass(frozen=True)
class CoefficientSet:
    """Immutable recursion coefficients from a single solver call.

    Parameters
    ----------
    sigma : float
        Kernel width in sample units the coefficients were solved for.
    order : DerivativeOrder
        Derivative order of the approximated kernel.
    n : Quad
        Causal feed-forward weights ``n0..n3``.
    d : Quad
        Pole weights ``d1..d4``, shared by both passes.
    m : Quad
        Anticausal feed-forward weights ``m1..m4``.
    k : float
        Normalization factor applied to the summed passes.
    """

    sigma: float
    order: DerivativeOrder
    n: Quad
    d: Quad
    m: Quad
    k: float

    @property
    def symmetric(self) -> bool:
        """Whether the two-sided kernel is symmetric (even order)."""
        return self.order.symmetric

    @property
    def causal_numerator(self) -> Tuple[float, ...]:
        """``lfilter`` numerator of the causal pass."""
        return self.n

    @property
    def anticausal_numerator(self) -> Tuple[float, ...]:
        """``lfilter`` numerator of the (reversed) anticausal pass."""
        return (0.0, *self.m)

    @property
    def denominator(self) -> Tuple[float, ...]:
        """``lfilter`` denominator shared by both passes."""
        return (1.0, *self.d)

    def scaled(self, factor: float) -> 'CoefficientSet':
        """Copy with the normalization factor multiplied by *factor*."""
        k = self.k * factor
        if not math.isfinite(k):
            raise NumericOverflow(
                f"scaled normalization factor is not finite ({k!r})"
            )
        return dataclasses.replace(self, k=k)


def _resolve_order(
    symmetric: bool,
    order: Optional[Union[int, DerivativeOrder]],
) -> DerivativeOrder:
    if order is None:
        return DerivativeOrder.ZERO if symmetric else DerivativeOrder.FIRST
    try:
        order = DerivativeOrder(order)
    except ValueError:
        raise InvalidParameter(
            f"order must be 0, 1 or 2, got {order!r}"
        ) from None
    if order.symmetric != bool(symmetric):
        kind = 'symmetric' if order.symmetric else 'antisymmetric'
        raise InvalidParameter(
            f"order {order.value} kernels are {kind}, "
            f"got symmetric={symmetric!r}"
        )
    return order


def _causal_weights(series: ExponentialSeries, sigma: float) -> Quad:
    a0, a1, b0, b1, c0, c1, w0, w1 = series
    e0 = math.exp(-b0 / sigma)
    e1 = math.exp(-b1 / sigma)
    cos0, sin0 = math.cos(w0 / sigma), math.sin(w0 / sigma)
    cos1, sin1 = math.cos(w1 / sigma), math.sin(w1 / sigma)

    n0 = a0 + c0
    n1 = (e1 * (c1 * sin1 - (c0 + 2 * a0) * cos1)
          + e0 * (a1 * sin0 - (a0 + 2 * c0) * cos0))
    n2 = (2 * e0 * e1 * ((a0 + c0) * cos1 * cos0
                         - a1 * cos1 * sin0 - c1 * cos0 * sin1)
          + c0 * e0 * e0 + a0 * e1 * e1)
    n3 = (e1 * e0 * e0 * (c1 * sin1 - c0 * cos1)
          + e0 * e1 * e1 * (a1 * sin0 - a0 * cos0))
    return (n0, n1, n2, n3)


def _pole_weights(series: ExponentialSeries, sigma: float) -> Quad:
    e0 = math.exp(-series.b0 / sigma)
    e1 = math.exp(-series.b1 / sigma)
    cos0 = math.cos(series.w0 / sigma)
    cos1 = math.cos(series.w1 / sigma)

    d1 = -2 * (e1 * cos1 + e0 * cos0)
    d2 = 4 * cos1 * cos0 * e0 * e1 + e0 * e0 + e1 * e1
    d3 = -2 * cos0 * e0 * e1 * e1 - 2 * cos1 * e1 * e0 * e0
    d4 = e0 * e0 * e1 * e1
    return (d1, d2, d3, d4)


def _anticausal_weights(n: Quad, d: Quad, symmetric: bool) -> Quad:
    n0, n1, n2, n3 = n
    d1, d2, d3, d4 = d
    m = (n1 - d1 * n0, n2 - d2 * n0, n3 - d3 * n0, -d4 * n0)
    if symmetric:
        return m
    return tuple(-v for v in m)


def _series_moments(
    numerator: Sequence[float],
    denominator: Sequence[float],
) -> Tuple[float, float, float]:
    """Moments ``sum(k**p * h[k])``, p = 0, 1, 2, of the series ``N(u)/D(u)``."""
    p0 = sum(numerator)
    p1 = sum(j * v for j, v in enumerate(numerator))
    p2 = sum(j * (j - 1) * v for j, v in enumerate(numerator))
    q0 = sum(denominator)
    q1 = sum(j * v for j, v in enumerate(denominator))
    q2 = sum(j * (j - 1) * v for j, v in enumerate(denominator))
    if q0 == 0.0:
        raise NumericOverflow("recursive filter has a pole at z = 1")

    dn = p1 * q0 - p0 * q1
    first = dn / q0 ** 2
    second = (p2 * q0 - p0 * q2) / q0 ** 2 - 2 * q1 * dn / q0 ** 3
    return p0 / q0, first, first + second


def _kernel_moments(n: Quad, d: Quad, m: Quad) -> Tuple[float, float, float]:
    """Moments of the two-sided kernel; the anticausal half sits at -k."""
    denominator = (1.0, *d)
    c0, c1, c2 = _series_moments(n, denominator)
    g0, g1, g2 = _series_moments((0.0, *m), denominator)
    return c0 + g0, c1 - g1, c2 + g2


def _normalization(
    order: DerivativeOrder, moments: Tuple[float, float, float]
) -> float:
    mu0, mu1, mu2 = moments
    if order is DerivativeOrder.ZERO:
        gain = mu0
    elif order is DerivativeOrder.FIRST:
        # y = K * sum(h[k] * x[i-k]) on x[i] = i gives -K * mu1
        gain = -mu1
    else:
        gain = mu2 / 2.0
    if gain == 0.0 or not math.isfinite(gain):
        raise NumericOverflow(
            f"cannot normalize order {order.value} kernel (gain={gain!r})"
        )
    return 1.0 / gain


def compute_coefficients(
    effective_sigma: float,
    symmetric: bool = True,
    order: Optional[Union[int, DerivativeOrder]] = None,
) -> CoefficientSet:
    """Solve the recursion coefficients for one kernel width.

    Parameters
    ----------
    effective_sigma : float
        Gaussian standard deviation in sample units. Must be positive and
        finite. Values below ~0.5 are accepted but the 4th-order fit
        degrades.
    symmetric : bool
        True for the smoothing kernel, False for the antisymmetric first
        derivative. Default True.
    order : int or DerivativeOrder, optional
        Explicit derivative order (0, 1 or 2). Defaults to 0 when
        *symmetric* is True and 1 otherwise; must agree with *symmetric*.

    Returns
    -------
    CoefficientSet

    Raises
    ------
    InvalidParameter
        If *effective_sigma* is not positive and finite, or *order*
        contradicts *symmetric*.
    NumericOverflow
        If a derived coefficient or the normalization factor is not
        finite.

    Examples
    --------
    >>> coeffs = compute_coefficients(2.0)
    >>> coeffs.symmetric
    True
    """
    sigma = validate_sigma(effective_sigma, name='effective_sigma')
    order = _resolve_order(symmetric, order)

    if not math.isfinite(max(_POLES.values()) / sigma):
        raise NumericOverflow(
            f"effective_sigma {sigma!r} is too small to represent"
        )

    series = EXPONENTIAL_SERIES[order]
    d = _pole_weights(series, sigma)
    n = _causal_weights(series, sigma)
    m = _anticausal_weights(n, d, order.symmetric)

    if order is DerivativeOrder.SECOND:
        # Mix in the smoothing kernel so the DC gain is exactly zero.
        n_smooth = _causal_weights(EXPONENTIAL_SERIES[DerivativeOrder.ZERO], sigma)
        m_smooth = _anticausal_weights(n_smooth, d, True)
        dc_smooth = _kernel_moments(n_smooth, d, m_smooth)[0]
        if dc_smooth == 0.0:
            raise NumericOverflow("smoothing kernel has zero DC gain")
        beta = -_kernel_moments(n, d, m)[0] / dc_smooth
        n = tuple(a + beta * b for a, b in zip(n, n_smooth))
        m = _anticausal_weights(n, d, True)

    k = _normalization(order, _kernel_moments(n, d, m))

    if not all(math.isfinite(v) for v in (*n, *d, *m, k)):
        raise NumericOverflow(
            f"non-finite recursion coefficients for effective_sigma={sigma!r}"
        )

    logger.debug(
        "Deriche coefficients: sigma=%g order=%d K=%.6g",
        sigma, order.value, k,
    )
    return CoefficientSet(sigma=sigma, order=order, n=n, d=d, m=m, k=k)
