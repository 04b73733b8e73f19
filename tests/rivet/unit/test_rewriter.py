"""Unit tests for variable injection."""

import pytest
from graphql import (
    GraphQLSyntaxError,
    ListTypeNode,
    NamedTypeNode,
    NonNullTypeNode,
    OperationDefinitionNode,
    parse,
    print_ast,
)

from rivet.errors import MissingOperationError, MultipleOperationsError
from rivet.rewriter import _with_variables, inject_variables, variable_definition


def declared_variables(text: str) -> dict[str, str]:
    """Map variable name to printed type for the query's operation."""
    document = parse(text)
    operation = next(
        d for d in document.definitions if isinstance(d, OperationDefinitionNode)
    )
    return {
        definition.variable.name.value: print_ast(definition.type)
        for definition in operation.variable_definitions
    }


class TestInjectVariables:
    """Test inject_variables()."""

    @pytest.mark.parametrize(
        "query",
        [
            "query Foo { alert { wow } }",
            "query   Foo{alert{wow}}\n\n# comment\n",
            "not even graphql",
            "query A { a } query B { b }",
        ],
    )
    def test_no_variables_returns_input_unchanged(self, query) -> None:
        assert inject_variables(query, {}) is query

    def test_declares_variables(self) -> None:
        result = inject_variables(
            "query Foo { alert { wow } }",
            {"productId": "ItemId!", "tags": "[String!]", "limit": "Int"},
        )
        assert declared_variables(result) == {
            "productId": "ItemId!",
            "tags": "[String!]",
            "limit": "Int",
        }

    def test_printed_layout(self) -> None:
        result = inject_variables(
            "query Foo { alert { wow } }", {"other": "String!", "foo": "Bar"}
        )
        assert result.startswith("query Foo($other: String!, $foo: Bar) {\n  alert {")
        assert result.rstrip().endswith("}")

    def test_keeps_existing_declarations_first(self) -> None:
        result = inject_variables(
            "query Foo($first: Int = 10) { items(first: $first) { id } }",
            {"after": "String"},
        )
        assert list(declared_variables(result).items()) == [
            ("first", "Int"),
            ("after", "String"),
        ]
        assert "$first: Int = 10" in result

    def test_already_declared_variable_not_repeated(self) -> None:
        result = inject_variables(
            "query Foo($id: ID!) { node(id: $id) { id } }",
            {"id": "ID!", "locale": "String"},
        )
        assert result.count("$id:") == 1
        assert list(declared_variables(result)) == ["id", "locale"]

    def test_anonymous_query(self) -> None:
        result = inject_variables("{ alert { wow } }", {"id": "ID"})
        assert declared_variables(result) == {"id": "ID"}
        assert result.startswith("query ($id: ID)")

    def test_mutation(self) -> None:
        result = inject_variables(
            "mutation Save { save { ok } }", {"input": "SaveInput!"}
        )
        assert result.startswith("mutation Save($input: SaveInput!)")

    def test_fragment_definitions_in_query_are_kept(self) -> None:
        query = "query Foo { alert { ...f } }\nfragment f on Alert { wow }"
        result = inject_variables(query, {"id": "ID"})
        assert declared_variables(result) == {"id": "ID"}
        assert "fragment f on Alert" in result

    def test_multiple_operations(self) -> None:
        with pytest.raises(MultipleOperationsError) as exc_info:
            inject_variables("query A { a }\nquery B { b }", {"id": "ID"})
        assert exc_info.value.count == 2

    def test_no_operation(self) -> None:
        with pytest.raises(MissingOperationError):
            inject_variables("fragment f on Alert { wow }", {"id": "ID"})

    def test_invalid_query(self) -> None:
        with pytest.raises(GraphQLSyntaxError):
            inject_variables("query Foo {", {"id": "ID"})

    def test_invalid_type_signature(self) -> None:
        with pytest.raises(GraphQLSyntaxError):
            inject_variables("query Foo { a }", {"id": "!ID"})


class TestVariableDefinition:
    """Test AST node construction."""

    def test_non_null_list(self) -> None:
        node = variable_definition("ids", "[ID!]!")
        assert node.variable.name.value == "ids"
        assert isinstance(node.type, NonNullTypeNode)
        assert isinstance(node.type.type, ListTypeNode)
        assert print_ast(node) == "$ids: [ID!]!"

    def test_named(self) -> None:
        node = variable_definition("limit", "Int")
        assert isinstance(node.type, NamedTypeNode)
        assert node.type.name.value == "Int"

    def test_original_operation_is_not_mutated(self) -> None:
        document = parse("query Foo($a: Int) { a }")
        operation = document.definitions[0]
        before = operation.variable_definitions

        rewritten = _with_variables(operation, {"b": "Int"})

        assert operation.variable_definitions is before
        assert len(operation.variable_definitions) == 1
        assert len(rewritten.variable_definitions) == 2
        assert rewritten.selection_set is operation.selection_set
        assert print_ast(document).rstrip("\n") == "query Foo($a: Int) {\n  a\n}"
