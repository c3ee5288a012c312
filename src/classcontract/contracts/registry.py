"""Attaching contracts to class methods.

attach() is the single entrypoint that installs contracts. It resolves the
settings, builds a bundle from the declaration clauses, resolves the method
selector against the class as it is right now, and installs one
ContractedMethod per selected method. Declaring again for the same method
extends the installed bundle instead of wrapping the method twice.

Selectors
---------
- ``"deposit"``: one method
- ``["deposit", "withdraw"]``: several methods
- ``re.compile(r"^set_")``: every current method whose name matches

Methods added to the class after the declaration are not covered.
"""

import logging
import re
from types import MappingProxyType
from typing import Any, Callable, List, Mapping, Optional, Union

from classcontract.contracts.bundle import ContractBundle, build_bundle
from classcontract.contracts.failure import ContractDefinitionError
from classcontract.contracts.wrapper import ContractedMethod
from classcontract.core.meta import MethodInfo, list_methods, wrap_method_around
from classcontract.schemas.settings import ContractSettings, resolve_settings

logger = logging.getLogger(__name__)

Selector = Union[str, list, tuple, set, frozenset, re.Pattern]


def resolve_selector(cls: type, selector: Selector) -> List[str]:
    """Names of the methods of ``cls`` matched by ``selector``.

    Raises
    ------
    ContractDefinitionError
        If the selector has an unsupported type, or names a method that
        ``cls`` does not have. A pattern matching nothing is not an error.
    """
    available = [info.name for info in list_methods(cls)]

    if isinstance(selector, re.Pattern):
        return [name for name in available if selector.search(name)]

    if isinstance(selector, str):
        requested = [selector]
    elif isinstance(selector, (set, frozenset)):
        requested = sorted(selector)
    elif isinstance(selector, (list, tuple)):
        requested = list(selector)
    else:
        raise ContractDefinitionError(
            f"Method selector must be a name, a list of names or a compiled pattern, "
            f"got {type(selector).__name__}"
        )

    names = []
    for name in requested:
        if not isinstance(name, str):
            raise ContractDefinitionError(f"Method names must be strings, got {name!r}")
        if name not in available:
            raise ContractDefinitionError(
                f"Cannot attach contract: {cls.__name__} has no method '{name}'"
            )
        if name not in names:
            names.append(name)
    return names


def attach(
    cls: type,
    selector: Selector,
    *clauses: Any,
    settings: Optional[Union[dict, ContractSettings]] = None,
    **kind_checks: Any,
) -> List[str]:
    """Install a contract on the methods of ``cls`` matched by ``selector``.

    Parameters
    ----------
    cls : type
        Class to install the contract on.
    selector : str, list of str or compiled pattern
        Methods to cover, resolved now.
    *clauses
        ``(kind, check)`` pairs such as ``accepts("Int")``, or flat
        ``"pre", check`` runs.
    settings : dict or ContractSettings, optional
        Explicit settings; the environment switch still applies.
    **kind_checks
        ``pre=``, ``post=``, ``invar=``: a check or a list of checks.

    Returns
    -------
    list of str
        Names of the methods now under contract. Empty when contracts are
        disabled, in which case nothing was validated or installed.

    Raises
    ------
    ContractDefinitionError
        On a malformed declaration or a selector naming a missing method.

    Examples
    --------
    >>> attach(Account, "deposit", accepts("Num"), returns(void()))
    ['deposit']
    """
    if not isinstance(cls, type):
        raise ContractDefinitionError(f"Contracts attach to classes, got {cls!r}")

    resolved = resolve_settings(settings)
    if not resolved.enabled:
        logger.info("Contracts disabled: nothing installed on %s", cls.__name__)
        return []

    bundle = build_bundle(clauses, kind_checks)
    names = resolve_selector(cls, selector)

    def install(info: MethodInfo) -> ContractedMethod:
        existing = cls.__dict__.get(info.name)
        if isinstance(existing, ContractedMethod) and existing.owner is cls:
            existing.bundle = existing.bundle.merge(bundle)
            return existing
        return ContractedMethod(info.func, cls, info.name, bundle)

    wrap_method_around(cls, names, install)

    for name in names:
        logger.debug(
            "Contract installed: %s.%s (%s)",
            cls.__name__, name, cls.__dict__[name].bundle.describe(),
        )
    return names


def contract(
    selector: Selector,
    *clauses: Any,
    settings: Optional[Union[dict, ContractSettings]] = None,
    **kind_checks: Any,
) -> Callable[[type], type]:
    """Class decorator form of attach().

    Stacked decorators apply bottom-up, so the declaration nearest the class
    statement has its checks run first.

    Usage
    -----
        @contract("add_even", accepts("EvenInt"), returns(void()))
        @contract(["push", "pop"], invar=assert_that(lambda self: len(self) <= 10))
        class Stack:
            ...
    """
    def decorator(cls: type) -> type:
        attach(cls, selector, *clauses, settings=settings, **kind_checks)
        return cls

    return decorator


def contracts_of(cls: type) -> Mapping[str, ContractBundle]:
    """Read-only view of the bundles installed directly on ``cls``."""
    return MappingProxyType({
        name: value.bundle
        for name, value in vars(cls).items()
        if isinstance(value, ContractedMethod)
    })
