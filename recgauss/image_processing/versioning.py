# -*- coding: utf-8 -*-
"""
Processor Versioning - Version stamps and catalogue tags for filters.

``@processor_version`` records which revision of a filter's numerics
produced a result. ``@processor_tags`` files a filter under a
``ProcessorCategory`` (smoothing filters versus derivative edge filters).

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
import importlib.metadata
from typing import Optional, Type, TypeVar

# recgauss internal
from recgauss.vocabulary import ProcessorCategory

T = TypeVar('T')


def _distribution_version() -> str:
    try:
        return importlib.metadata.version('recgauss')
    except importlib.metadata.PackageNotFoundError:
        return "unknown"


def processor_version(version: Optional[str] = None):
    """Stamp ``__processor_version__`` on a processor class.

    Parameters
    ----------
    version : str, optional
        Semantic version such as ``'1.0.0'``. Defaults to the installed
        ``recgauss`` version.

    Examples
    --------
    >>> @processor_version('1.0.0')
    ... class Identity(ImageTransform):
    ...     def apply(self, source, **kwargs):
    ...         return source
    >>> Identity.__processor_version__
    '1.0.0'
    """
    def stamp(cls: Type[T]) -> Type[T]:
        cls.__processor_version__ = version or _distribution_version()
        return cls
    return stamp


def processor_tags(
    category: Optional[ProcessorCategory] = None,
    description: Optional[str] = None,
):
    """Stamp ``__processor_tags__`` (category and description) on a class.

    Raises
    ------
    TypeError
        If *category* is given but is not a ``ProcessorCategory``.
    """
    if not (category is None or isinstance(category, ProcessorCategory)):
        raise TypeError(
            f"category must be a ProcessorCategory, got {category!r}"
        )
    tags = {'category': category, 'description': description}

    def stamp(cls: Type[T]) -> Type[T]:
        cls.__processor_tags__ = dict(tags)
        return cls
    return stamp
