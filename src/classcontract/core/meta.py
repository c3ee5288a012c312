"""Class meta information needed by the contract engine.

Python classes already carry everything required: ``__mro__`` gives the
contributing classes in lookup order and each class ``__dict__`` holds the
functions it declares. This module turns that into the two operations the
registry works with: enumerate methods, and replace methods with wrappers.
"""

import logging
import types
from dataclasses import dataclass
from typing import Callable, Iterable, List

from classcontract.contracts.wrapper import ContractedMethod

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MethodInfo:
    """A method visible on a class and the class that declares it."""
    name: str
    owner: type
    func: Callable


def _is_method(value) -> bool:
    return isinstance(value, (types.FunctionType, ContractedMethod))


def list_methods(cls: type) -> List[MethodInfo]:
    """All instance methods of ``cls``, inherited ones included.

    The first definition along the MRO wins, as it does for attribute
    lookup. Attributes that are not plain functions (properties,
    staticmethods, classmethods, data) are not methods here and also hide
    same-named methods further down the MRO. ``object`` contributes nothing.
    """
    methods = []
    seen = set()
    for klass in cls.__mro__:
        if klass is object:
            continue
        for name, value in vars(klass).items():
            if name in seen:
                continue
            seen.add(name)
            if _is_method(value):
                methods.append(MethodInfo(name, klass, value))
    return methods


def wrap_method_around(
    cls: type,
    names: Iterable[str],
    factory: Callable[[MethodInfo], Callable],
) -> List[str]:
    """Replace each named method of ``cls`` with ``factory(info)``.

    The wrapper is set on ``cls`` itself even when the method is inherited,
    so base classes are left untouched.

    Raises
    ------
    LookupError
        If a name does not resolve to a method of ``cls``.
    """
    methods = {info.name: info for info in list_methods(cls)}
    wrapped = []
    for name in names:
        info = methods.get(name)
        if info is None:
            raise LookupError(f"{cls.__name__} has no method '{name}'")
        setattr(cls, name, factory(info))
        wrapped.append(name)
        logger.debug("Wrapped %s.%s (declared on %s)", cls.__name__, name, info.owner.__name__)
    return wrapped
