# -*- coding: utf-8 -*-
"""
Vocabulary - Canonical enums for the recgauss framework.

Defines the controlled vocabularies used across recgauss: processor
categories for catalogue tagging and the derivative order of a recursive
Gaussian kernel.

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

from enum import Enum


class ProcessorCategory(Enum):
    """Processing categories for processor tagging."""

    FILTERS = "filters"
    EDGES = "edges"


class DerivativeOrder(Enum):
    """Order of the Gaussian derivative a recursive kernel approximates.

    Even orders give symmetric kernels, odd orders antisymmetric ones.
    """

    ZERO = 0
    FIRST = 1
    SECOND = 2

    @property
    def symmetric(self) -> bool:
        """Whether the kernel is symmetric about its origin."""
        return self.value % 2 == 0
