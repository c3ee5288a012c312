"""Contract bundles: the pre/post/invar checks attached to one method.

Bundles are immutable. Declaring more checks for a method merges a new bundle
into the installed one, so checks accumulate in declaration order instead of
replacing each other.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from classcontract.contracts.checks import CheckFunction
from classcontract.contracts.failure import ContractDefinitionError

KINDS = ("pre", "post", "invar")


@dataclass(frozen=True)
class ContractBundle:
    """Ordered checks for one method, grouped by stage."""

    pre: Tuple[CheckFunction, ...] = ()
    post: Tuple[CheckFunction, ...] = ()
    invar: Tuple[CheckFunction, ...] = ()

    def merge(self, other: "ContractBundle") -> "ContractBundle":
        """Return a bundle running this bundle's checks, then ``other``'s."""
        return ContractBundle(
            pre=self.pre + other.pre,
            post=self.post + other.post,
            invar=self.invar + other.invar,
        )

    @property
    def is_empty(self) -> bool:
        return not (self.pre or self.post or self.invar)

    def describe(self) -> str:
        return f"pre={len(self.pre)}, post={len(self.post)}, invar={len(self.invar)}"


def _add_check(collected: Dict[str, List[CheckFunction]], kind: Any, check: Any) -> None:
    if kind not in collected:
        raise ContractDefinitionError(
            f"Unknown contract kind {kind!r} (expected one of: {', '.join(KINDS)})"
        )
    if not callable(check):
        raise ContractDefinitionError(
            f"Contract '{kind}' check must be callable, got {type(check).__name__}"
        )
    collected[kind].append(check)


def build_bundle(clauses: Sequence[Any] = (), kind_checks: Optional[Mapping[str, Any]] = None) -> ContractBundle:
    """Build a bundle from declaration clauses.

    Parameters
    ----------
    clauses : sequence
        Any mix of ``(kind, check)`` pairs (what accepts()/returns() produce)
        and flat ``kind, check`` runs such as ``["pre", f, "post", g]``.
    kind_checks : mapping, optional
        ``{"pre": check_or_list, ...}``, appended after ``clauses``.

    Raises
    ------
    ContractDefinitionError
        On an unknown kind, a kind with no check after it, a pair of the
        wrong length, or a check that is not callable.
    """
    collected: Dict[str, List[CheckFunction]] = {kind: [] for kind in KINDS}

    items = list(clauses)
    index = 0
    while index < len(items):
        item = items[index]
        if isinstance(item, str):
            if index + 1 >= len(items):
                raise ContractDefinitionError(
                    f"Odd number of elements in contract clauses: {item!r} has no check"
                )
            _add_check(collected, item, items[index + 1])
            index += 2
        elif isinstance(item, tuple):
            if len(item) != 2:
                raise ContractDefinitionError(
                    f"Malformed contract clause {item!r}: expected a (kind, check) pair"
                )
            _add_check(collected, *item)
            index += 1
        else:
            raise ContractDefinitionError(
                f"Malformed contract clause {item!r}: expected a (kind, check) pair"
            )

    for kind, checks in (kind_checks or {}).items():
        if isinstance(checks, (list, tuple)):
            for check in checks:
                _add_check(collected, kind, check)
        else:
            _add_check(collected, kind, checks)

    return ContractBundle(**{kind: tuple(checks) for kind, checks in collected.items()})
