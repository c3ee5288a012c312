"""Base contract enforcement utilities.

The require() function is the single failure primitive for all built checks.
Hand-written checks may use it too, or raise anything else: the execution
wrapper treats every exception escaping a check as a failed check.
"""

from classcontract.contracts.failure import CheckFailure


def require(condition: bool, message: str) -> None:
    """Fail the running check unless ``condition`` holds.

    Parameters
    ----------
    condition : bool
        The predicate that must be true. If falsy, CheckFailure is raised.

    message : str
        Reason reported in the resulting ContractViolation.

    Raises
    ------
    CheckFailure
        If condition is falsy.

    Examples
    --------
    >>> def positive_balance(account):
    ...     require(account.balance >= 0, "balance must not go negative")
    """
    if not condition:
        raise CheckFailure(message)


def describe_failure(exc: BaseException) -> str:
    """Reason string for an exception raised by a check.

    A single string argument is used as written, unquoted.
    """
    if len(exc.args) == 1 and isinstance(exc.args[0], str):
        message = exc.args[0]
    else:
        message = str(exc)
    if message:
        return message
    return type(exc).__name__
