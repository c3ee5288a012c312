"""`classcontract` - Design by Contract for Python classes.

Subpackages:
- contracts: checks, contract declarations and the per-call wrapper
- constraints: named type constraints validated by pydantic
- schemas: settings and the process-wide enforcement switch
- core: class meta information used to find and wrap methods

Usage
-----
    from classcontract import accepts, assert_that, contract, invariant, returns, void

    @invariant(assert_that(lambda self: self.value >= 0, "value >= 0"))
    @contract("decrement", accepts(), returns(void()))
    class Counter:
        def __init__(self, value=0):
            self.value = value

        def decrement(self):
            self.value -= 1

    Counter(1).decrement.void()     # no value asked for, nothing returned
"""

__version__ = "0.1.0"

from classcontract.contracts import (
    CallContext,
    CheckFailure,
    Clause,
    ContractBundle,
    ContractDefinitionError,
    ContractViolation,
    ContractedMethod,
    InvariantViolation,
    PostconditionViolation,
    PreconditionViolation,
    UnknownTypeError,
    accepts,
    accepts_nothing,
    assert_that,
    attach,
    contract,
    contracts_of,
    expand_invariant,
    identity,
    invariant,
    require,
    returns,
    returns_nothing,
    sequence_check,
    void,
)
from classcontract.constraints import TypeConstraint, TypeRegistry, register_type, resolve_type
from classcontract.schemas import ContractSettings, resolve_settings

__all__ = [
    "CallContext",
    "CheckFailure",
    "Clause",
    "ContractBundle",
    "ContractDefinitionError",
    "ContractViolation",
    "ContractedMethod",
    "InvariantViolation",
    "PostconditionViolation",
    "PreconditionViolation",
    "UnknownTypeError",
    "accepts",
    "accepts_nothing",
    "assert_that",
    "attach",
    "contract",
    "contracts_of",
    "expand_invariant",
    "identity",
    "invariant",
    "require",
    "returns",
    "returns_nothing",
    "sequence_check",
    "void",
    "TypeConstraint",
    "TypeRegistry",
    "register_type",
    "resolve_type",
    "ContractSettings",
    "resolve_settings",
]
