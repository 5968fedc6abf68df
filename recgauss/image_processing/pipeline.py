# -*- coding: utf-8 -*-
"""
Pipeline - Ordered chain of image transforms.

A separable N-D Gaussian is one recursive pass per axis, each pass reading
the previous pass's output. ``Pipeline`` expresses that chain: keywords
such as ``spacing`` reach every step, a caller's ``out`` buffer is filled
by the last step only, and per-step progress is mapped onto the whole run.

Author
------
Steven Siebert

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
from typing import Any, Callable, Dict, List, Optional, Sequence

# Third-party
import numpy as np

# recgauss internal
from recgauss.image_processing.base import ImageTransform

logger = logging.getLogger(__name__)


def _step_progress(
    callback: Callable[[float], None], index: int, total: int,
) -> Callable[[float], None]:
    """Map a step's [0, 1] progress into its slice of the pipeline."""
    def report(fraction: float) -> None:
        callback((index + fraction) / total)
    return report


class Pipeline(ImageTransform):
    """Apply transforms one after another.

    Parameters
    ----------
    steps : Sequence[ImageTransform]
        Transforms in application order; at least one.

    Examples
    --------
    >>> pipe = Pipeline([
    ...     RecursiveGaussianFilter(sigma=2.0, direction=0),
    ...     RecursiveGaussianFilter(sigma=2.0, direction=1),
    ... ])
    >>> smoothed = pipe.apply(image, spacing=(0.5, 1.0))
    """

    __processor_version__ = '1.0.0'

    def __init__(self, steps: Sequence[ImageTransform]) -> None:
        steps = list(steps)
        if not steps:
            raise ValueError("Pipeline requires at least one transform")
        bad = [i for i, s in enumerate(steps) if not isinstance(s, ImageTransform)]
        if bad:
            raise TypeError(
                f"Step {bad[0]} is not an ImageTransform: "
                f"{type(steps[bad[0]]).__name__}"
            )
        self._steps: List[ImageTransform] = steps

    @property
    def steps(self) -> List[ImageTransform]:
        """Copy of the step list."""
        return list(self._steps)

    def __len__(self) -> int:
        return len(self._steps)

    def __repr__(self) -> str:
        return f"Pipeline({[type(s).__name__ for s in self._steps]})"

    def apply(self, source: np.ndarray, **kwargs: Any) -> np.ndarray:
        """Run every step on the previous step's output.

        ``progress_callback`` receives overall progress; ``out`` is passed
        to the final step only. All other keywords go to every step.
        """
        callback: Optional[Callable[[float], None]] = kwargs.pop(
            'progress_callback', None)
        out = kwargs.pop('out', None)
        total = len(self._steps)
        last = total - 1

        result = source
        for index, step in enumerate(self._steps):
            logger.debug("Pipeline step %d/%d: %s", index + 1, total,
                         type(step).__qualname__)
            step_kwargs: Dict[str, Any] = dict(kwargs)
            if callback is not None:
                step_kwargs['progress_callback'] = _step_progress(
                    callback, index, total)
            if out is not None and index == last:
                step_kwargs['out'] = out

            result = step.apply(result, **step_kwargs)

            if callback is not None:
                callback((index + 1) / total)
        return result
