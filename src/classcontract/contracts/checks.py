"""Check builders.

A check is any callable ``check(receiver, *values)``. It passes by returning
and fails by raising. The builders here cover the common cases:

- identity(): truthiness of a predicate, generic reason
- assert_that(): truthiness of a predicate, caller-supplied reason
- sequence_check(): positional type validation with an arity guard
- void(): no values at all

accepts()/returns() pair a check with the stage it belongs to, producing the
clauses that contract() consumes.
"""

import functools
from typing import Any, Callable, NamedTuple, Optional, Sequence

from classcontract.constraints.registry import TypeRegistry, default_registry
from classcontract.contracts.base import require
from classcontract.contracts.failure import CheckFailure, ContractDefinitionError

CheckFunction = Callable[..., None]


class Clause(NamedTuple):
    """A check tagged with its stage: ``"pre"``, ``"post"`` or ``"invar"``."""
    kind: str
    check: CheckFunction


def _mark(check: CheckFunction) -> CheckFunction:
    check.__contract_check__ = True
    return check


def is_check(obj: Any) -> bool:
    """True for checks produced by the builders in this module."""
    return callable(obj) and getattr(obj, "__contract_check__", False) is True


def _ensure_callable(predicate: Any, builder: str) -> None:
    if not callable(predicate):
        raise ContractDefinitionError(
            f"{builder}() needs a callable predicate, got {type(predicate).__name__}"
        )


def identity(predicate: Callable[..., Any]) -> CheckFunction:
    """Wrap a raw predicate; a falsy result fails with a generic reason."""
    _ensure_callable(predicate, "identity")

    @functools.wraps(predicate)
    def check(receiver, *values):
        require(predicate(receiver, *values), "check failed")

    return _mark(check)


def assert_that(predicate: Callable[..., Any], message: str = "assertion failed") -> CheckFunction:
    """Wrap a predicate; a falsy result fails with ``message``.

    Exceptions raised by the predicate itself are not replaced by
    ``message``: their own text becomes the reason, so a broken predicate is
    distinguishable from a violated one.

    Examples
    --------
    >>> non_negative = assert_that(lambda self: self.value >= 0, "value >= 0")
    """
    _ensure_callable(predicate, "assert_that")

    @functools.wraps(predicate)
    def check(receiver, *values):
        require(predicate(receiver, *values), message)

    return _mark(check)


def sequence_check(
    kind: str,
    descriptors: Sequence[Any],
    registry: Optional[TypeRegistry] = None,
) -> CheckFunction:
    """Validate values positionally against type descriptors.

    Descriptors are resolved now, so an unknown type fails the declaration
    rather than the first call.

    Parameters
    ----------
    kind : str
        Prefix for failure reasons, typically ``"accepts"`` or ``"returns"``.
    descriptors : sequence
        Type names, annotations or TypeConstraint objects, one per position.
    registry : TypeRegistry, optional
        Where names are looked up (default: the module-level registry).

    Notes
    -----
    Arity is checked before any value: fewer values than descriptors fails
    immediately. Values beyond the last descriptor are ignored. Validation
    stops at the first value that fails.

    Raises
    ------
    UnknownTypeError
        If a descriptor cannot be resolved.
    ContractDefinitionError
        If ``descriptors`` is a single string rather than a sequence of them.
    """
    if isinstance(descriptors, str):
        raise ContractDefinitionError(
            f"{kind}: descriptors must be a sequence of type descriptors, "
            f"got the single string {descriptors!r}; wrap it in a list"
        )
    if registry is None:
        registry = default_registry
    constraints = tuple(registry.resolve(descriptor) for descriptor in descriptors)
    expected = len(constraints)

    def check(receiver, *values):
        require(
            len(values) >= expected,
            f"{kind}: expected at least {expected} value(s), got {len(values)}",
        )
        for position, (constraint, value) in enumerate(zip(constraints, values), start=1):
            reason = constraint.validate(value)
            if reason is not None:
                raise CheckFailure(f"{kind}: value {position}: {reason}")

    check.__name__ = f"{kind}_check"
    return _mark(check)


def void() -> CheckFunction:
    """Check that fails unless zero values were supplied."""
    def check(receiver, *values):
        require(not values, f"expected no values, got {len(values)}")

    return _mark(check)


def _stage_clause(kind: str, label: str, descriptors: tuple, registry: Optional[TypeRegistry]) -> Clause:
    if len(descriptors) == 1 and is_check(descriptors[0]):
        return Clause(kind, descriptors[0])
    return Clause(kind, sequence_check(label, descriptors, registry))


def accepts(*descriptors: Any, registry: Optional[TypeRegistry] = None) -> Clause:
    """Precondition over call arguments.

    ``accepts("Int", "Str")`` validates the first two arguments;
    ``accepts(void())`` requires that no arguments were passed.
    """
    return _stage_clause("pre", "accepts", descriptors, registry)


def returns(*descriptors: Any, registry: Optional[TypeRegistry] = None) -> Clause:
    """Postcondition over returned values.

    ``returns("Int")`` validates a single result; ``returns(void())``
    requires that nothing was returned.
    """
    return _stage_clause("post", "returns", descriptors, registry)


def accepts_nothing() -> Clause:
    return Clause("pre", void())


def returns_nothing() -> Clause:
    return Clause("post", void())
