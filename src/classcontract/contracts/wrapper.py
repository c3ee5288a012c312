"""Execution wrapper run on every call to a contracted method.

One ContractedMethod is installed per (class, method name). Each call walks
the same stages:

    PRE -> BODY -> POST -> INVARIANT -> RETURN

PRE, POST and INVARIANT abort the call with a ContractViolation on the first
failing check. POST is skipped when the caller asked for no value; INVARIANT
always runs.

Python has no implicit calling context, so the caller states it by picking
an entry point on the bound method:

    account.balance()          # one value    (CallContext.SCALAR)
    account.history.many()     # tuple        (CallContext.LIST)
    account.deposit.void(10)   # no value     (CallContext.VOID)
"""

import functools
import inspect
import logging
from enum import Enum
from typing import Any, Callable, Optional, Tuple

from classcontract.contracts.base import describe_failure
from classcontract.contracts.bundle import ContractBundle
from classcontract.contracts.failure import VIOLATIONS

logger = logging.getLogger(__name__)


class CallContext(str, Enum):
    """What the caller expects back from a call."""
    VOID = "void"
    SCALAR = "scalar"
    LIST = "list"


def capture_values(result: Any, context: CallContext) -> Tuple[Any, ...]:
    """Values a result stands for in the given context.

    SCALAR always yields the result itself, ``None`` included. In LIST
    context a tuple or list result is spread into its items and ``None`` is
    an empty sequence.
    """
    if context is CallContext.VOID:
        return ()
    if context is CallContext.SCALAR:
        return (result,)
    if result is None:
        return ()
    if isinstance(result, (tuple, list)):
        return tuple(result)
    return (result,)


def _signature_of(func: Callable) -> Optional[inspect.Signature]:
    try:
        return inspect.signature(func)
    except (TypeError, ValueError):
        return None


class ContractedMethod:
    """Descriptor dispatching calls through a method's contract.

    Parameters
    ----------
    func : callable
        The original method. May itself be a ContractedMethod inherited from
        a base class, in which case the base contract runs inside this one.
    owner : type
        Class the wrapper is installed on.
    name : str
        Attribute name of the method.
    bundle : ContractBundle
        Checks to run. Replaced (never mutated) when more checks are declared.
    """

    def __init__(self, func: Callable, owner: type, name: str, bundle: ContractBundle = ContractBundle()):
        functools.update_wrapper(self, func, updated=())
        self.func = func
        self.owner = owner
        self.name = name
        self.bundle = bundle
        self.qualname = f"{owner.__name__}.{name}"
        self._signature = _signature_of(func)

    def __get__(self, instance, owner=None):
        if instance is None:
            return self
        return BoundContractedMethod(self, instance)

    def __call__(self, receiver, *args, **kwargs):
        return self.invoke(receiver, args, kwargs, CallContext.SCALAR)

    def void(self, receiver, *args, **kwargs) -> None:
        return self.invoke(receiver, args, kwargs, CallContext.VOID)

    def many(self, receiver, *args, **kwargs) -> Tuple[Any, ...]:
        return self.invoke(receiver, args, kwargs, CallContext.LIST)

    def __repr__(self) -> str:
        return f"<ContractedMethod {self.qualname} ({self.bundle.describe()})>"

    def arguments(self, receiver, args: tuple, kwargs: dict) -> Tuple[Any, ...]:
        """Call arguments in positional order.

        Keyword arguments naming positional parameters take their place in
        the sequence; defaults are not filled in. Arguments that do not bind
        to the reported signature (a decorator may supply some of them) are
        passed as given, positionals only.
        """
        if self._signature is None:
            return args
        try:
            bound = self._signature.bind(receiver, *args, **kwargs)
        except TypeError:
            logger.debug("Arguments do not bind to %s; checking positionals as given", self.qualname)
            return args
        return bound.args[1:]

    def invoke(self, receiver, args: tuple, kwargs: dict, context: CallContext) -> Any:
        """Run one call through PRE, BODY, POST, INVARIANT and RETURN."""
        bundle = self.bundle

        if bundle.pre:
            self._run("pre", bundle.pre, receiver, self.arguments(receiver, args, kwargs))

        if isinstance(self.func, ContractedMethod):
            result = self.func.invoke(receiver, args, kwargs, context)
        else:
            result = self.func(receiver, *args, **kwargs)

        values = capture_values(result, context)
        if context is not CallContext.VOID:
            self._run("post", bundle.post, receiver, values)

        self._run("invar", bundle.invar, receiver, ())

        if context is CallContext.VOID:
            return None
        if context is CallContext.LIST:
            return values
        return result

    def _run(self, stage: str, checks: tuple, receiver, values: tuple) -> None:
        for check in checks:
            try:
                check(receiver, *values)
            except Exception as exc:
                reason = describe_failure(exc)
                logger.debug("%s check failed for %s: %s", stage, self.qualname, reason)
                raise VIOLATIONS[stage](self.qualname, reason) from exc


class BoundContractedMethod:
    """A ContractedMethod bound to its receiver, like a bound method."""

    __slots__ = ("__func__", "__self__")

    def __init__(self, method: ContractedMethod, receiver):
        self.__func__ = method
        self.__self__ = receiver

    def __call__(self, *args, **kwargs):
        return self.__func__.invoke(self.__self__, args, kwargs, CallContext.SCALAR)

    def void(self, *args, **kwargs) -> None:
        """Call without expecting a value; postconditions are not checked."""
        return self.__func__.invoke(self.__self__, args, kwargs, CallContext.VOID)

    def many(self, *args, **kwargs) -> Tuple[Any, ...]:
        """Call expecting a sequence of values, returned as a tuple."""
        return self.__func__.invoke(self.__self__, args, kwargs, CallContext.LIST)

    def __getattr__(self, name):
        return getattr(self.__func__, name)

    def __eq__(self, other) -> bool:
        if not isinstance(other, BoundContractedMethod):
            return NotImplemented
        return self.__func__ is other.__func__ and self.__self__ is other.__self__

    def __hash__(self) -> int:
        return hash((id(self.__func__), id(self.__self__)))

    def __repr__(self) -> str:
        return f"<bound contracted method {self.__func__.qualname} of {self.__self__!r}>"
