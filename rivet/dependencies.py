"""Dependency model for components that declare GraphQL data requirements.

A dependency handle is anything a caller hands to `fetch`: a component
class, a function, an instance or a plain mapping. Handles that carry a
`FragmentSpec` contribute fragment text and variable requirements to the
request, every other handle is ignored.

Handles are probed exactly once, in `classify_dependency`, and turned into
either a `SpecDependency` or an `OpaqueDependency`. The collectors only
ever see `SpecDependency` values.
"""

from __future__ import annotations

import json
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, TypeVar

from graphql import parse

from .errors import InvalidDependenciesError


T = TypeVar("T")

# Attribute/key names a handle may carry its spec under
SPEC_ATTRIBUTES = ("fragment_spec", "fragmentSpec")

ANONYMOUS_FRAGMENT = "<anonymous>"


@dataclass(frozen=True)
class FragmentSpec:
    """Data requirements declared by a single component.

    Attributes:
        fragment: GraphQL fragment source text, may be omitted when the spec
            only exists to carry nested dependencies or variables
        dependencies: Nested dependency handles, in declaration order
        required_variables: Variable name to GraphQL type signature,
            e.g. ``{"productId": "ItemId!"}``
    """

    fragment: str | None = None
    dependencies: tuple[Any, ...] = ()
    required_variables: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_value(cls, value: Any) -> FragmentSpec:
        """Coerce a spec or a spec-shaped mapping into a `FragmentSpec`."""
        if isinstance(value, FragmentSpec):
            return value
        if isinstance(value, Mapping):
            required = value.get("required_variables")
            if required is None:
                required = value.get("requiredVariables")
            return cls(
                fragment=value.get("fragment"),
                dependencies=_as_sequence(value.get("dependencies") or ()),
                required_variables=dict(required or {}),
            )
        raise InvalidDependenciesError(value, render_value(value))

    @property
    def name(self) -> str:
        """Declared name of the fragment, used in error messages."""
        return fragment_name(self.fragment) or ANONYMOUS_FRAGMENT


@dataclass(frozen=True)
class SpecDependency:
    """A handle that carries a `FragmentSpec`."""

    handle: Any
    spec: FragmentSpec


@dataclass(frozen=True)
class OpaqueDependency:
    """A handle without data requirements."""

    handle: Any


Dependency = SpecDependency | OpaqueDependency


def render_value(value: Any) -> str:
    """Textual rendering of an arbitrary value for error messages.

    JSON where possible, `repr` for anything JSON cannot encode.
    """
    try:
        return json.dumps(value, separators=(",", ":"), default=repr)
    except (TypeError, ValueError):
        return repr(value)


def fragment_name(fragment: str | None) -> str | None:
    """Parse the declared name out of fragment source text.

    Args:
        fragment: Fragment source, e.g. ``"fragment c1 on Test { test }"``

    Returns:
        The name of the first definition (``"c1"``), or None without text

    Raises:
        GraphQLSyntaxError: If the fragment text does not parse
    """
    if not fragment:
        return None
    document = parse(fragment, no_location=True)
    name = getattr(document.definitions[0], "name", None)
    return name.value if name is not None else None


def _as_sequence(dependencies: Any) -> tuple[Any, ...]:
    """Validate the shape of a dependency list."""
    if isinstance(dependencies, (str, bytes, Mapping)) or not isinstance(
        dependencies, Sequence
    ):
        raise InvalidDependenciesError(dependencies, render_value(dependencies))
    return tuple(dependencies)


def _spec_value(handle: Any) -> Any:
    if isinstance(handle, Mapping):
        for key in SPEC_ATTRIBUTES:
            if handle.get(key) is not None:
                return handle[key]
        return None
    for attribute in SPEC_ATTRIBUTES:
        value = getattr(handle, attribute, None)
        if value is not None:
            return value
    return None


def classify_dependency(handle: Any) -> Dependency:
    """Turn a caller-supplied handle into a tagged dependency.

    Args:
        handle: Component class, function, instance or mapping

    Returns:
        `SpecDependency` when the handle carries a spec, otherwise
        `OpaqueDependency`
    """
    value = _spec_value(handle)
    if value is None:
        return OpaqueDependency(handle)
    return SpecDependency(handle, FragmentSpec.from_value(value))


def extract_fragment_specs(dependencies: Any) -> list[SpecDependency]:
    """Keep the dependencies that carry a fragment spec, in input order.

    Args:
        dependencies: List (or tuple) of dependency handles

    Returns:
        The handles carrying a spec, paired with their `FragmentSpec`

    Raises:
        InvalidDependenciesError: If `dependencies` is not a list
    """
    return [
        dependency
        for dependency in map(classify_dependency, _as_sequence(dependencies))
        if isinstance(dependency, SpecDependency)
    ]


def fragment_spec(
    fragment: str | None = None,
    *,
    dependencies: Sequence[Any] = (),
    required_variables: Mapping[str, str] | None = None,
) -> Callable[[T], T]:
    """Decorator attaching a `FragmentSpec` to a component.

    Examples:
        @fragment_spec(
            "fragment productCard on Product { id title }",
            dependencies=[Price],
            required_variables={"productId": "ItemId!"},
        )
        class ProductCard:
            ...
    """
    spec = FragmentSpec(
        fragment=fragment,
        dependencies=_as_sequence(dependencies),
        required_variables=dict(required_variables or {}),
    )

    def decorator(component: T) -> T:
        component.fragment_spec = spec  # type: ignore[attr-defined]
        return component

    return decorator
