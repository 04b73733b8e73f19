"""Errors/Exceptions"""

from typing import Any


# region Constants

EXIT_SUCCESS: int = 0
EXIT_ERROR: int = -1
UNEXPECTED_ERROR: int = -3
CONFIG_ERROR: int = -5
REQUEST_ERROR: int = -8

# endregion

# region Exceptions


class RivetError(RuntimeError):
    """Base class for all errors raised while assembling a request.

    Transport failures are never wrapped in this class, they reach the
    caller exactly as the transport raised them.
    """

    def __init__(self, *args: Any) -> None:
        super().__init__(*args)


class MissingQueryError(RivetError):
    """This error is raised when `fetch` is called without query text."""

    def __init__(self) -> None:
        self.message = 'The "query" parameter is required'
        super().__init__(self.message)


class InvalidDependenciesError(RivetError):
    """This error is raised when the "dependencies" argument is not a list.

    The offending value is kept on the exception for diagnostics.
    """

    def __init__(self, dependencies: Any, rendered: str) -> None:
        self.dependencies = dependencies
        self.message = (
            'The "dependencies" argument must be a list, the following '
            f"dependency argument is not valid: {rendered}"
        )
        super().__init__(self.message)


class CyclicDependencyError(RivetError):
    """Raised when a dependency is (transitively) its own dependency."""

    def __init__(self, cycle: list[str]) -> None:
        self.cycle = cycle
        self.message = (
            "Circular fragment dependency detected: " + " -> ".join(cycle)
        )
        super().__init__(self.message)


class VariableMismatchError(RivetError):
    """This error is raised when a fragment requires variables that were
    not passed to `fetch`.

    Either no variables were passed at all (`missing` lists every variable
    the fragment requires) or one specific variable is absent (`missing`
    holds just that one).
    """

    def __init__(
        self,
        fragment_name: str,
        missing: list[str],
        specific: bool = False,
    ) -> None:
        self.fragment_name = fragment_name
        self.missing = missing
        quoted = ", ".join(f'"{name}"' for name in missing)
        requirement = (
            f'the variable "{missing[0]}"' if specific else f"variables {quoted}"
        )
        self.message = (
            f'The fragment "{fragment_name}" requires {requirement}, but it is '
            'not provided. Make sure you are passing "variables" as an argument '
            f'to "fetch", and that it defines {quoted}.'
        )
        super().__init__(self.message)


class OperationError(RivetError):
    """Base class for query texts variables cannot be injected into."""

    def __init__(self, *args: Any) -> None:
        super().__init__(*args)


class MultipleOperationsError(OperationError):
    """Raised when variables must be injected into a query text that
    defines more than one operation.

    GraphQL rejects both unused declared variables and used undeclared ones,
    so declaring a variable on the wrong operation breaks the request.
    Picking a target would be a guess, hence the refusal.
    """

    def __init__(self, count: int) -> None:
        self.count = count
        self.message = (
            f"You have defined {count} operations in one request and are also "
            "using variables. At the moment, variables are only supported with "
            "a single operation per request. Please consolidate to one "
            "operation per request."
        )
        super().__init__(self.message)


class MissingOperationError(OperationError):
    """Raised when variables must be injected into a query text that
    defines no operation at all."""

    def __init__(self) -> None:
        self.message = (
            "The query does not define an operation, so the variables required "
            "by its dependencies cannot be declared."
        )
        super().__init__(self.message)


class ConfigError(RuntimeError):
    """This error is raised when configuration data is invalid.

    Invalid data may have been provided by config.ini or by keyword
    arguments passed to `rivet.create`.
    """

    def __init__(self, *args: Any) -> None:
        super().__init__(*args)


# endregion


__all__ = [
    "CONFIG_ERROR",
    "EXIT_ERROR",
    "EXIT_SUCCESS",
    "REQUEST_ERROR",
    "UNEXPECTED_ERROR",
    "ConfigError",
    "CyclicDependencyError",
    "InvalidDependenciesError",
    "MissingOperationError",
    "MissingQueryError",
    "MultipleOperationsError",
    "OperationError",
    "RivetError",
    "VariableMismatchError",
]
