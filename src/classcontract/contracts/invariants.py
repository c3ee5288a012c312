"""Class invariants.

An invariant is a check over object state that runs after every call to
every public method of a class. expand_invariant() works out that method set
and hands it to attach() as an ``invar``-only contract.

Covered methods are the public ones (no leading underscore) declared on the
class itself, plus those declared on any contributing class named in the
declaration, typically mixins. Methods inherited from other bases, and
methods added after the declaration, are not covered.
"""

import logging
from typing import Any, Callable, List, Optional, Tuple, Union

from classcontract.contracts.failure import ContractDefinitionError
from classcontract.contracts.registry import attach
from classcontract.core.meta import list_methods
from classcontract.schemas.settings import ContractSettings, resolve_settings

logger = logging.getLogger(__name__)


def _contributor(cls: type, item: Union[str, type]) -> type:
    if isinstance(item, str):
        for klass in cls.__mro__:
            if klass.__name__ == item:
                return klass
        raise ContractDefinitionError(
            f"Invariant on {cls.__name__}: no class named '{item}' in its hierarchy"
        )
    if item not in cls.__mro__:
        raise ContractDefinitionError(
            f"Invariant on {cls.__name__}: {item.__name__} does not contribute methods to it"
        )
    return item


def split_invariant_items(cls: type, raw: Tuple[Any, ...]) -> Tuple[List[Callable], List[type]]:
    """Separate invariant checks from contributing classes."""
    checks = []
    contributors = []
    for item in raw:
        if isinstance(item, (type, str)):
            contributors.append(_contributor(cls, item))
        elif callable(item):
            checks.append(item)
        else:
            raise ContractDefinitionError(
                f"Invariant on {cls.__name__}: check must be callable, got {type(item).__name__}"
            )
    return checks, contributors


def covered_methods(cls: type, contributors: List[type]) -> List[str]:
    """Public methods of ``cls`` declared on it or on a contributing class."""
    owners = {cls, *contributors}
    return [
        info.name
        for info in list_methods(cls)
        if info.owner in owners and not info.name.startswith("_")
    ]


def expand_invariant(
    cls: type,
    *raw: Any,
    settings: Optional[Union[dict, ContractSettings]] = None,
) -> List[str]:
    """Attach invariant checks to every public method of ``cls``.

    Parameters
    ----------
    cls : type
        Class whose state the invariant describes.
    *raw
        Checks (callables taking the receiver) and contributing classes,
        given as class objects or as names of classes in ``cls.__mro__``.
    settings : dict or ContractSettings, optional
        Explicit settings; the environment switch still applies.

    Returns
    -------
    list of str
        Names of the covered methods.

    Raises
    ------
    ContractDefinitionError
        If no check is given, a check is not callable, or a contributing
        class is not part of ``cls``.
    """
    resolved = resolve_settings(settings)
    if not resolved.enabled:
        logger.info("Contracts disabled: no invariant installed on %s", cls.__name__)
        return []

    checks, contributors = split_invariant_items(cls, raw)
    if not checks:
        raise ContractDefinitionError(f"Invariant on {cls.__name__} has no checks")

    names = covered_methods(cls, contributors)
    logger.debug("Invariant on %s covers: %s", cls.__name__, ", ".join(names) or "nothing")
    return attach(cls, names, invar=checks, settings=resolved)


def invariant(
    *raw: Any,
    settings: Optional[Union[dict, ContractSettings]] = None,
) -> Callable[[type], type]:
    """Class decorator form of expand_invariant().

    Usage
    -----
        @invariant(assert_that(lambda self: self.value >= 0, "value >= 0"))
        class Counter:
            ...

        @invariant(assert_that(lambda self: self.size >= 0), "Resizable")
        class Buffer(Resizable):
            ...
    """
    def decorator(cls: type) -> type:
        expand_invariant(cls, *raw, settings=settings)
        return cls

    return decorator
