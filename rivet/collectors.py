"""Dependency tree traversals.

Both traversals walk the tree pre-order, depth-first: a dependency's own
contribution comes first, then its nested dependencies, then the next
sibling. A single accumulator is threaded through each walk, so the first
occurrence of a fragment or variable fixes its position.
"""

from __future__ import annotations

from typing import Any

from .dependencies import FragmentSpec, SpecDependency, extract_fragment_specs
from .errors import CyclicDependencyError, VariableMismatchError
from .logging import pipeline_logger as logger


def _enter(dependency: SpecDependency, path: list[SpecDependency]) -> None:
    """Push a dependency on the recursion path, refusing cycles."""
    for index, visited in enumerate(path):
        if visited.handle is dependency.handle:
            cycle = [d.spec.name for d in path[index:]] + [dependency.spec.name]
            raise CyclicDependencyError(cycle)
    path.append(dependency)


def _walk_fragments(
    dependencies: Any,
    collected: dict[str, None],
    path: list[SpecDependency],
) -> dict[str, None]:
    for dependency in extract_fragment_specs(dependencies):
        _enter(dependency, path)
        spec = dependency.spec
        if spec.fragment:
            collected.setdefault(spec.fragment, None)
        if spec.dependencies:
            _walk_fragments(spec.dependencies, collected, path)
        path.pop()
    return collected


def collect_fragments(dependencies: Any) -> list[str]:
    """Collect the fragment text a dependency tree needs.

    Args:
        dependencies: List of dependency handles

    Returns:
        Fragment sources in pre-order, depth-first order, each exactly once

    Raises:
        InvalidDependenciesError: If a dependency list is not a list
        CyclicDependencyError: If a dependency depends on itself
    """
    fragments = list(_walk_fragments(dependencies, {}, []))
    logger.debug(f"Collected {len(fragments)} fragment(s) from dependencies")
    return fragments


def _check_variables(spec: FragmentSpec, variables: dict[str, Any] | None) -> None:
    """Raise on the first variable the caller did not supply."""
    if variables is None:
        raise VariableMismatchError(spec.name, list(spec.required_variables))

    for name in spec.required_variables:
        if name not in variables:
            raise VariableMismatchError(spec.name, [name], specific=True)


def _walk_variables(
    dependencies: Any,
    variables: dict[str, Any] | None,
    required: dict[str, str],
    path: list[SpecDependency],
) -> dict[str, str]:
    for dependency in extract_fragment_specs(dependencies):
        _enter(dependency, path)
        spec = dependency.spec
        if spec.required_variables:
            _check_variables(spec, variables)
            # Later declarations win, the first one fixes the position
            required.update(spec.required_variables)
        if spec.dependencies:
            _walk_variables(spec.dependencies, variables, required, path)
        path.pop()
    return required


def collect_variables(
    dependencies: Any,
    variables: dict[str, Any] | None = None,
) -> dict[str, str]:
    """Collect the variables a dependency tree requires.

    Args:
        dependencies: List of dependency handles
        variables: Variables passed to `fetch`, None when none were passed

    Returns:
        Variable name to type signature, in first-seen order

    Raises:
        VariableMismatchError: On the first dependency whose variables were
            not passed, naming its fragment
        InvalidDependenciesError: If a dependency list is not a list
        CyclicDependencyError: If a dependency depends on itself
    """
    required = _walk_variables(dependencies, variables, {}, [])
    if required:
        logger.debug(f"Dependencies require variables: {', '.join(required)}")
    return required
