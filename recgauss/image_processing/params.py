# -*- coding: utf-8 -*-
"""
Tunable Parameters - Constraint markers for ``typing.Annotated`` fields.

Filter settings such as ``sigma`` and ``direction`` are declared as
class-body annotations carrying ``Range``, ``Options`` and ``Desc``
markers::

    class RecursiveGaussianFilter(ImageTransform):
        sigma: Annotated[float, Range(min=0.0, exclusive=True),
                         Desc('Gaussian standard deviation')] = 1.0

``ImageProcessor.__init_subclass__`` turns them into ``ParamSpec`` objects
(``collect_param_specs``) and, unless the class writes its own, a
keyword-only ``__init__`` (``_make_init``). Numeric values must be finite
and bools never count as numbers; constraint violations raise
``InvalidParameter``.

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
import inspect
import math
import numbers
from dataclasses import dataclass
from typing import (
    Annotated,
    Any,
    Optional,
    Tuple,
    Union,
    get_origin,
    get_type_hints,
)

# recgauss internal
from recgauss.exceptions import InvalidParameter

Number = Union[int, float]

_NUMERIC_KINDS = {float: numbers.Real, int: numbers.Integral}


class ParamMeta:
    """Base marker for tunable parameter metadata in ``Annotated`` types."""


@dataclass(frozen=True)
class Range(ParamMeta):
    """Numeric bounds. ``exclusive=True`` rejects values equal to a bound."""

    min: Optional[Number] = None
    max: Optional[Number] = None
    exclusive: bool = False


class Options(ParamMeta):
    """Discrete set of allowed values."""

    __slots__ = ('choices',)

    def __init__(self, *choices: Any) -> None:
        if not choices:
            raise ValueError("Options requires at least one choice")
        self.choices = choices

    def __repr__(self) -> str:
        return f"Options{self.choices!r}"


@dataclass(frozen=True)
class Desc(ParamMeta):
    """Human-readable parameter description."""

    text: str


@dataclass(frozen=True)
class ParamSpec:
    """Resolved constraints of one tunable parameter.

    Attributes
    ----------
    name : str
        Attribute and keyword name.
    param_type : type
        ``float``, ``int``, ``str``, ``bool`` or ``object`` (no type check).
    default : Any
        Default value; meaningless when ``has_default`` is False.
    has_default : bool
        Whether the field declared a default.
    description : str
        Text from ``Desc``.
    min_value, max_value : int, float, or None
        Bounds from ``Range``.
    choices : tuple or None
        Allowed values from ``Options``.
    exclusive : bool
        Whether the bounds themselves are rejected.
    """

    name: str
    param_type: type
    default: Any
    has_default: bool
    description: str
    min_value: Optional[Number]
    max_value: Optional[Number]
    choices: Optional[Tuple[Any, ...]]
    exclusive: bool = False

    @property
    def required(self) -> bool:
        """Whether the parameter must be passed at construction."""
        return not self.has_default

    def validate(self, value: Any) -> None:
        """Check *value* against the declared type and constraints.

        Raises
        ------
        TypeError
            If *value* has the wrong type.
        InvalidParameter
            If *value* is non-finite, out of range or not an allowed
            choice.
        """
        self._check_type(value)
        self._check_bounds(value)
        if self.choices is not None and value not in self.choices:
            raise InvalidParameter(
                f"Parameter '{self.name}' value {value!r} "
                f"is not in allowed choices {self.choices!r}"
            )

    def _check_type(self, value: Any) -> None:
        kind = _NUMERIC_KINDS.get(self.param_type)
        if kind is not None:
            ok = isinstance(value, kind) and not isinstance(value, bool)
        elif self.param_type is object:
            ok = True
        else:
            ok = isinstance(value, self.param_type)
        if not ok:
            raise TypeError(
                f"Parameter '{self.name}' must be "
                f"{self.param_type.__name__}, got {type(value).__name__}"
            )
        if kind is not None and not math.isfinite(value):
            raise InvalidParameter(
                f"Parameter '{self.name}' must be finite, got {value!r}"
            )

    def _check_bounds(self, value: Any) -> None:
        lo, hi = self.min_value, self.max_value
        if self.exclusive:
            if lo is not None and value <= lo:
                self._out_of_range(value, '>', lo)
            if hi is not None and value >= hi:
                self._out_of_range(value, '<', hi)
        else:
            if lo is not None and value < lo:
                self._out_of_range(value, '>=', lo)
            if hi is not None and value > hi:
                self._out_of_range(value, '<=', hi)

    def _out_of_range(self, value: Any, op: str, bound: Number) -> None:
        raise InvalidParameter(
            f"Parameter '{self.name}' value {value!r} must be {op} {bound!r}"
        )

    @classmethod
    def from_hint(cls, owner: type, name: str, hint: Any) -> Optional['ParamSpec']:
        """Build a spec from an ``Annotated`` hint, or None if untagged."""
        if get_origin(hint) is not Annotated:
            return None
        markers = [m for m in hint.__metadata__ if isinstance(m, ParamMeta)]
        if not markers:
            return None

        bounds = next((m for m in markers if isinstance(m, Range)), None)
        options = next((m for m in markers if isinstance(m, Options)), None)
        desc = next((m for m in markers if isinstance(m, Desc)), None)
        if bounds is not None and options is not None:
            raise TypeError(
                f"Parameter '{name}' on {owner.__qualname__}: "
                f"Range and Options are mutually exclusive."
            )

        default = getattr(owner, name, _MISSING)
        return cls(
            name=name,
            param_type=hint.__args__[0],
            default=None if default is _MISSING else default,
            has_default=default is not _MISSING,
            description=desc.text if desc else '',
            min_value=bounds.min if bounds else None,
            max_value=bounds.max if bounds else None,
            choices=options.choices if options else None,
            exclusive=bounds.exclusive if bounds else False,
        )

    def __repr__(self) -> str:
        parts = [f"name={self.name!r}",
                 f"param_type={self.param_type.__name__}",
                 f"required={self.required!r}"]
        if self.has_default:
            parts.append(f"default={self.default!r}")
        for label in ('min_value', 'max_value', 'choices'):
            if getattr(self, label) is not None:
                parts.append(f"{label}={getattr(self, label)!r}")
        if self.exclusive:
            parts.append("exclusive=True")
        return f"ParamSpec({', '.join(parts)})"


_MISSING = object()


def collect_param_specs(cls: type) -> Tuple[ParamSpec, ...]:
    """Collect ``ParamSpec`` objects from the ``Annotated`` fields of *cls*.

    Fields are ordered parent-first along the MRO; a subclass redeclaring
    a field replaces the parent's constraints.

    Raises
    ------
    TypeError
        If a field carries both ``Range`` and ``Options``.
    """
    try:
        hints = get_type_hints(cls, include_extras=True)
    except (NameError, TypeError):
        return ()

    names: dict = {}
    for klass in reversed(cls.__mro__):
        for name in getattr(klass, '__annotations__', {}):
            if name in hints:
                names.setdefault(name, None)

    specs = (ParamSpec.from_hint(cls, name, hints[name]) for name in names)
    return tuple(spec for spec in specs if spec is not None)


def _make_init(param_specs: Tuple[ParamSpec, ...]):
    """Keyword-only ``__init__`` that validates and stores each parameter.

    ``__post_init__`` runs afterwards when the class defines one.
    """
    by_name = {spec.name: spec for spec in param_specs}

    def __init__(self, **kwargs):
        unexpected = sorted(set(kwargs) - set(by_name))
        if unexpected:
            raise TypeError(
                f"{type(self).__name__}() got unexpected "
                f"keyword arguments: {', '.join(unexpected)}"
            )
        for name, spec in by_name.items():
            if name in kwargs:
                value = kwargs[name]
            elif spec.has_default:
                value = spec.default
            else:
                raise TypeError(
                    f"{type(self).__name__}() missing required "
                    f"keyword argument: '{name}'"
                )
            spec.validate(value)
            object.__setattr__(self, name, value)

        if hasattr(self, '__post_init__'):
            self.__post_init__()

    __init__.__signature__ = inspect.Signature(
        [inspect.Parameter('self', inspect.Parameter.POSITIONAL_OR_KEYWORD)]
        + [inspect.Parameter(
            spec.name, inspect.Parameter.KEYWORD_ONLY,
            **({'default': spec.default} if spec.has_default else {}),
        ) for spec in param_specs]
    )
    __init__.__qualname__ = '__init__'
    return __init__
