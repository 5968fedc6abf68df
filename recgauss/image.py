# -*- coding: utf-8 -*-
"""
Sampled Image - N-dimensional sample array with per-axis physical spacing.

``SampledImage`` is the image container consumed by
``RecursiveGaussianFilter.execute``. It pairs a numpy array with the
physical distance between adjacent samples along each axis, which is
what converts a sigma given in physical units into sample units.

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
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

# Third-party
import numpy as np

# recgauss internal
from recgauss.image_processing.filters._validation import validate_spacing


@dataclass(frozen=True)
class SampledImage:
    """N-D sample array with physical spacing.

    Parameters
    ----------
    array : numpy.ndarray
        Sample values, any number of dimensions.
    spacing : Tuple[float, ...]
        Physical distance between adjacent samples along each axis.
        Length must equal ``array.ndim``; every entry positive and
        finite. Defaults to unit spacing when omitted.
    """

    array: np.ndarray
    spacing: Optional[Tuple[float, ...]] = None

    def __post_init__(self) -> None:
        array = np.asarray(self.array)
        spacing = validate_spacing(self.spacing, array.ndim)
        object.__setattr__(self, 'array', array)
        object.__setattr__(self, 'spacing', spacing)

    @property
    def shape(self) -> Tuple[int, ...]:
        """Extent of the image along each axis."""
        return self.array.shape

    @property
    def ndim(self) -> int:
        """Number of axes."""
        return self.array.ndim

    def extent(self, axis: int) -> int:
        """Number of samples along *axis*."""
        return self.array.shape[axis]

    def allocate_like(self, dtype: Optional[np.dtype] = None) -> 'SampledImage':
        """Allocate a zero-filled image with matching shape and spacing.

        Parameters
        ----------
        dtype : numpy.dtype, optional
            Sample type of the new image. Defaults to this image's dtype.

        Returns
        -------
        SampledImage
        """
        dtype = self.array.dtype if dtype is None else dtype
        return SampledImage(np.zeros(self.array.shape, dtype=dtype),
                            self.spacing)

    @classmethod
    def from_array(
        cls,
        array: np.ndarray,
        spacing: Optional[Sequence[float]] = None,
    ) -> 'SampledImage':
        """Wrap *array* with optional *spacing*."""
        return cls(np.asarray(array),
                   None if spacing is None else tuple(spacing))
