"""Centralized failure taxonomy for contract declarations and violations.

Contracts fail fast, loud, and once. Declaration mistakes surface while the
class is being defined; violations surface to the caller of the contracted
method. Nothing is retried, suppressed or rolled back.
"""


class ContractDefinitionError(ValueError):
    """Raised while declaring or attaching a contract.

    Unknown check kinds, dangling clauses, non-callable checks and selectors
    naming methods the class does not have all end up here. The error escapes
    the class decorator, so the class definition itself fails.
    """
    pass


class UnknownTypeError(ContractDefinitionError):
    """Raised when a type descriptor cannot be resolved."""
    pass


class CheckFailure(AssertionError):
    """Raised by a check whose predicate did not hold.

    Any other exception escaping a check means the check itself is broken.
    Both become the reason of a ContractViolation; the original exception is
    kept as ``__cause__`` so callers can tell them apart.
    """
    pass


class ContractViolation(RuntimeError):
    """Raised when a contracted method breaks its contract at call time.

    Key distinction:
    - ContractDefinitionError: the contract was declared wrongly
    - ContractViolation: the code under contract misbehaved (programmer error)

    Attributes
    ----------
    method : str
        Qualified name of the contracted method, e.g. ``Counter.decrement``.
    stage : str
        One of ``"pre"``, ``"post"``, ``"invar"``.
    reason : str
        Message of the failing check.
    """

    label = "Contract"
    stage = ""

    def __init__(self, method: str, reason: str):
        self.method = method
        self.reason = reason
        super().__init__(f"{self.label} contract violated: {method}: {reason}")


class PreconditionViolation(ContractViolation):
    """A ``pre`` check failed; the method body did not run."""
    label = "Pre"
    stage = "pre"


class PostconditionViolation(ContractViolation):
    """A ``post`` check failed after the method body ran."""
    label = "Post"
    stage = "post"


class InvariantViolation(ContractViolation):
    """An ``invar`` check failed after the method body ran."""
    label = "Invariant"
    stage = "invar"


VIOLATIONS = {
    "pre": PreconditionViolation,
    "post": PostconditionViolation,
    "invar": InvariantViolation,
}
