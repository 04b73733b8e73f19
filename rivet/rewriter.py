"""Variable injection into the root query.

Fragments that use variables are only valid when the operation they end up
in declares those variables. The rewrite works on the parsed document:
a new operation node is built with the extra declarations and printed back
to source text, the parsed input is left untouched.
"""

from __future__ import annotations

from collections.abc import Mapping

from graphql import (
    DocumentNode,
    NameNode,
    OperationDefinitionNode,
    VariableDefinitionNode,
    VariableNode,
    parse,
    parse_type,
    print_ast,
)

from .errors import MissingOperationError, MultipleOperationsError
from .logging import pipeline_logger as logger


def variable_definition(name: str, type_signature: str) -> VariableDefinitionNode:
    """Build the AST node for ``$name: type_signature``."""
    return VariableDefinitionNode(
        variable=VariableNode(name=NameNode(value=name)),
        type=parse_type(type_signature, no_location=True),
        default_value=None,
        directives=(),
    )


def _single_operation(document: DocumentNode) -> OperationDefinitionNode:
    operations = [
        definition
        for definition in document.definitions
        if isinstance(definition, OperationDefinitionNode)
    ]
    if len(operations) > 1:
        raise MultipleOperationsError(len(operations))
    if not operations:
        raise MissingOperationError()
    return operations[0]


def _with_variables(
    operation: OperationDefinitionNode,
    required: Mapping[str, str],
) -> OperationDefinitionNode:
    existing = tuple(operation.variable_definitions or ())
    declared = {definition.variable.name.value for definition in existing}

    added = []
    for name, type_signature in required.items():
        if name in declared:
            logger.debug(f'Variable "${name}" already declared by the query')
            continue
        added.append(variable_definition(name, type_signature))

    fields = {key: getattr(operation, key) for key in operation.keys}
    fields["variable_definitions"] = existing + tuple(added)
    return OperationDefinitionNode(**fields)


def inject_variables(query: str, required: Mapping[str, str]) -> str:
    """Declare the required variables on the query's operation.

    Args:
        query: Root query source text
        required: Variable name to GraphQL type signature

    Returns:
        The query unchanged when nothing is required, otherwise the printed
        query with the declarations appended to the operation's variables

    Raises:
        MultipleOperationsError: If the query defines several operations
        MissingOperationError: If the query defines no operation
        GraphQLSyntaxError: If the query or a type signature does not parse
    """
    if not required:
        return query

    document = parse(query)
    operation = _single_operation(document)
    rewritten = _with_variables(operation, required)

    definitions = tuple(
        rewritten if definition is operation else definition
        for definition in document.definitions
    )
    return print_ast(DocumentNode(definitions=definitions, loc=document.loc))
