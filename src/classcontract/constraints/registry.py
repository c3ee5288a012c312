"""Named and structural type constraints backed by pydantic validators.

A TypeConstraint wraps a single annotation (``int``, ``list[str]``,
``Annotated[int, AfterValidator(...)]``, a user class) together with the
pydantic ``TypeAdapter`` that validates it. Validation is strict by default:
values are checked, never coerced.

Constraints are resolved from one of:
- a registered name (``"Int"``, ``"EvenInt"``)
- a parameterized name built on the fly (``"List[Int]"``, ``"Maybe[Str]"``)
- any annotation pydantic can build a validator for
"""

import logging
import re
from typing import Any, Callable, Dict, List, Optional, Tuple, Union, get_args

from pydantic import ConfigDict, TypeAdapter, ValidationError
from pydantic.errors import PydanticSchemaGenerationError, PydanticUserError

from classcontract.contracts.failure import ContractDefinitionError, UnknownTypeError

logger = logging.getLogger(__name__)

_PARAMETERIZED = re.compile(r"^(\w+)\[(.*)\]$")


BUILTIN_TYPES: Dict[str, Any] = {
    "Any": Any,
    "Bool": bool,
    "Int": int,
    "Num": Union[int, float],
    "Str": str,
    "None": None,
    "List": list,
    "Dict": dict,
    "Callable": Callable,
}

# Type constructors usable as Name[Param, ...]
PARAMETERIZED_TYPES: Dict[str, Callable[..., Any]] = {
    "List": lambda item: List[item],
    "Dict": lambda value: Dict[str, value],
    "Maybe": lambda item: Optional[item],
    "Tuple": lambda *items: Tuple[items],
}


def _annotation_name(annotation: Any) -> str:
    if isinstance(annotation, type) and not get_args(annotation):
        return annotation.__name__
    return repr(annotation)


def _split_params(params: str) -> List[str]:
    """Split ``"Int, Dict[Str]"`` on top-level commas."""
    parts = []
    depth = 0
    current = []
    for char in params:
        if char == "[":
            depth += 1
        elif char == "]":
            depth -= 1
        if char == "," and depth == 0:
            parts.append("".join(current))
            current = []
        else:
            current.append(char)
    parts.append("".join(current))
    return parts


def _build_adapter(name: str, annotation: Any) -> TypeAdapter:
    try:
        return TypeAdapter(annotation)
    except PydanticSchemaGenerationError:
        # Plain user classes validate as isinstance checks
        pass
    try:
        return TypeAdapter(annotation, config=ConfigDict(arbitrary_types_allowed=True))
    except (PydanticUserError, TypeError) as exc:
        raise UnknownTypeError(
            f"Cannot build a validator for type constraint '{name}': {exc}"
        ) from exc


class TypeConstraint:
    """A resolved, reusable description of an acceptable value.

    Parameters
    ----------
    name : str
        Name used in failure reasons.
    annotation : Any
        Annotation validated by pydantic.
    strict : bool, optional
        Validate in pydantic strict mode (default True).

    Raises
    ------
    UnknownTypeError
        If pydantic cannot build a validator for ``annotation``.
    """

    def __init__(self, name: str, annotation: Any, strict: bool = True):
        self.name = name
        self.annotation = annotation
        self.strict = strict
        self._adapter = _build_adapter(name, annotation)

    def validate(self, value: Any) -> Optional[str]:
        """Return None if ``value`` is acceptable, else the failure reason."""
        try:
            self._adapter.validate_python(value, strict=self.strict)
        except ValidationError as exc:
            details = []
            for error in exc.errors():
                location = ".".join(str(part) for part in error["loc"])
                if location:
                    details.append(f"{location}: {error['msg']}")
                else:
                    details.append(error["msg"])
            return f"{value!r} is not a valid {self.name}: {'; '.join(details)}"
        return None

    def __repr__(self) -> str:
        return f"TypeConstraint({self.name!r})"


class TypeRegistry:
    """Name lookup and cache for type constraints.

    Usage
    -----
        types = TypeRegistry()
        types.register("EvenInt", Annotated[int, AfterValidator(must_be_even)])

        types.resolve("EvenInt").validate(3)
        # "3 is not a valid EvenInt: Value error, 3 is not even"

        types.resolve("List[EvenInt]")   # built on the fly, then cached
    """

    def __init__(self, strict: bool = True, builtins: bool = True):
        self.strict = strict
        self._annotations: Dict[str, Any] = dict(BUILTIN_TYPES) if builtins else {}
        self._resolved: Dict[str, TypeConstraint] = {}

    def register(self, name: str, annotation: Any) -> None:
        """Register ``annotation`` under ``name``.

        Registering the same annotation twice is a no-op; rebinding a name
        to a different annotation is rejected.
        """
        if not isinstance(name, str) or not name.isidentifier():
            raise ContractDefinitionError(f"Invalid type constraint name: {name!r}")
        if name in self._annotations:
            if self._annotations[name] == annotation:
                return
            raise ContractDefinitionError(
                f"Type constraint '{name}' is already registered as "
                f"{_annotation_name(self._annotations[name])}"
            )
        self._annotations[name] = annotation
        logger.debug("Type constraint registered: %s", name)

    def __contains__(self, name: str) -> bool:
        return name in self._annotations

    def names(self) -> List[str]:
        return sorted(self._annotations)

    def resolve(self, spec: Any) -> TypeConstraint:
        """Resolve a name, parameterized name, annotation or constraint.

        Raises
        ------
        UnknownTypeError
            If a name is not registered or an annotation cannot be validated.
        """
        if isinstance(spec, TypeConstraint):
            return spec
        if isinstance(spec, str):
            return self._resolve_name("".join(spec.split()))
        return TypeConstraint(_annotation_name(spec), spec, strict=self.strict)

    def _resolve_name(self, name: str) -> TypeConstraint:
        constraint = self._resolved.get(name)
        if constraint is None:
            constraint = TypeConstraint(name, self._annotation_for(name), strict=self.strict)
            self._resolved[name] = constraint
        return constraint

    def _annotation_for(self, name: str) -> Any:
        if name in self._annotations:
            return self._annotations[name]

        match = _PARAMETERIZED.match(name)
        if match is None:
            raise UnknownTypeError(f"Unknown type constraint '{name}'")

        outer, params = match.groups()
        factory = PARAMETERIZED_TYPES.get(outer)
        if factory is None:
            raise UnknownTypeError(f"Type constraint '{outer}' does not take parameters")

        args = [self._annotation_for(part) for part in _split_params(params)]
        try:
            return factory(*args)
        except TypeError as exc:
            raise UnknownTypeError(f"Bad parameters for type constraint '{name}': {exc}") from exc


default_registry = TypeRegistry()


def register_type(name: str, annotation: Any) -> None:
    """Register a named type in the default registry."""
    default_registry.register(name, annotation)


def resolve_type(spec: Any) -> TypeConstraint:
    """Resolve a type descriptor against the default registry."""
    return default_registry.resolve(spec)
