"""Type constraints for ``accepts``/``returns`` clauses.

Pydantic does the validation; this package only names, parameterizes and
caches the validators.
"""

from classcontract.constraints.registry import (
    BUILTIN_TYPES,
    TypeConstraint,
    TypeRegistry,
    default_registry,
    register_type,
    resolve_type,
)

__all__ = [
    "BUILTIN_TYPES",
    "TypeConstraint",
    "TypeRegistry",
    "default_registry",
    "register_type",
    "resolve_type",
]
