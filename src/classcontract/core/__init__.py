"""Host object system adapters for the contract engine."""

from classcontract.core.meta import MethodInfo, list_methods, wrap_method_around

__all__ = ["MethodInfo", "list_methods", "wrap_method_around"]
