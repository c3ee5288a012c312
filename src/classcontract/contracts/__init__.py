"""Method contracts: preconditions, postconditions and class invariants.

Contracts are declared when a class is defined and enforced on every call.
They fail immediately and loudly: a violated contract means the caller or the
method is wrong, not that something recoverable happened.

Key principle:
- Pydantic validates values (``accepts``/``returns`` type constraints)
- Checks validate behaviour (``assert_that`` predicates)
- The engine decides when each check runs
"""

from classcontract.contracts.failure import (
    CheckFailure,
    ContractDefinitionError,
    ContractViolation,
    InvariantViolation,
    PostconditionViolation,
    PreconditionViolation,
    UnknownTypeError,
)
from classcontract.contracts.base import require
from classcontract.contracts.checks import (
    Clause,
    accepts,
    accepts_nothing,
    assert_that,
    identity,
    returns,
    returns_nothing,
    sequence_check,
    void,
)
from classcontract.contracts.bundle import ContractBundle, build_bundle
from classcontract.contracts.wrapper import CallContext, ContractedMethod
from classcontract.contracts.registry import attach, contract, contracts_of
from classcontract.contracts.invariants import expand_invariant, invariant

__all__ = [
    "CheckFailure",
    "ContractDefinitionError",
    "ContractViolation",
    "InvariantViolation",
    "PostconditionViolation",
    "PreconditionViolation",
    "UnknownTypeError",
    "require",
    "Clause",
    "accepts",
    "accepts_nothing",
    "assert_that",
    "identity",
    "returns",
    "returns_nothing",
    "sequence_check",
    "void",
    "ContractBundle",
    "build_bundle",
    "CallContext",
    "ContractedMethod",
    "attach",
    "contract",
    "contracts_of",
    "expand_invariant",
    "invariant",
]
