# -*- coding: utf-8 -*-
"""
Image Processing Base Classes - Processor contract for recursive filters.

``ImageProcessor`` carries the machinery every filter shares: the
``__param_specs__`` table built from ``Annotated`` class fields, the
generated keyword-only constructor, per-call parameter overrides and the
optional ``progress_callback``. ``ImageTransform`` adds the single
``apply(source, **kwargs)`` entry point that axis filters, separable
smoothers and pipelines implement.

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
import warnings
from abc import ABC, abstractmethod
from typing import Any, Dict, Tuple

# Third-party
import numpy as np

# recgauss internal
from recgauss.image_processing.params import ParamSpec, collect_param_specs, _make_init

logger = logging.getLogger(__name__)


def _needs_version_warning(cls: type) -> bool:
    if getattr(cls, '__processor_version__', None):
        return False
    return not getattr(cls, '__abstractmethods__', None)


class ImageProcessor(ABC):
    """
    Base of every processor in the package.

    A concrete subclass without ``@processor_version`` warns once, the
    first time it is instantiated. The check lives in ``__new__`` because
    class decorators run after ``__init_subclass__``.

    Class-body fields annotated with ``Range``/``Options``/``Desc`` become
    ``__param_specs__``; a keyword-only ``__init__`` is generated from
    them unless the class writes one.
    """

    # Classes already checked for a version stamp.
    _version_warned_classes: set = set()

    __param_specs__: Tuple[ParamSpec, ...] = ()

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        specs = collect_param_specs(cls)
        cls.__param_specs__ = specs
        if specs and '__init__' not in vars(cls):
            cls.__init__ = _make_init(specs)

    def __new__(cls, *args: Any, **kwargs: Any) -> 'ImageProcessor':
        seen = ImageProcessor._version_warned_classes
        if cls not in seen:
            seen.add(cls)
            if _needs_version_warning(cls):
                warnings.warn(
                    f"{cls.__qualname__} has no processor version; "
                    f"decorate it with @processor_version('x.y.z').",
                    UserWarning,
                    stacklevel=2,
                )
        logger.debug("Instantiating %s", cls.__qualname__)
        return super().__new__(cls)

    def _resolve_params(self, kwargs: Dict[str, Any]) -> Dict[str, Any]:
        """Current value of every declared parameter for one call.

        A keyword in *kwargs* overrides the instance attribute without
        mutating it. Other keywords such as ``spacing`` or ``out`` are
        left alone. All values are validated, so an attribute assigned
        after construction is still checked here.

        Raises
        ------
        TypeError
            If a value has the wrong type.
        InvalidParameter
            If a value is non-finite or violates its constraints.
        """
        resolved: Dict[str, Any] = {}
        for spec in type(self).__param_specs__:
            value = kwargs.get(spec.name, getattr(self, spec.name))
            spec.validate(value)
            resolved[spec.name] = value
        return resolved

    def _report_progress(
        self, kwargs: Dict[str, Any], fraction: float
    ) -> None:
        """Forward *fraction* to ``kwargs['progress_callback']`` if present."""
        callback = kwargs.get('progress_callback')
        if callback is not None:
            callback(float(fraction))


class ImageTransform(ImageProcessor):
    """
    Processor mapping a sample array to an output of the same shape.

    Per-axis physical spacing travels as the ``spacing`` keyword and a
    caller-owned destination as ``out``.
    """

    @abstractmethod
    def apply(self, source: np.ndarray, **kwargs: Any) -> np.ndarray:
        """
        Filter *source* and return the result.

        Parameters
        ----------
        source : np.ndarray
            Input samples, any number of dimensions.

        Returns
        -------
        np.ndarray
            Filtered samples.
        """
        ...
