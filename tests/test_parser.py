"""Tests for the GraphQL schema parser."""

import pytest
from graphql import GraphQLSyntaxError

from gql_resolvergen.core.ir import GraphQLKind
from gql_resolvergen.core.parser import SchemaParser


SCHEMA_SDL = '''
scalar DateTime

type User implements Node {
  id: ID!
  createdAt: DateTime
  role: Role!
  tags: [String!]!
  matrix: [[Int]]
  search(term: String = "all", filter: SearchInput!): [SearchResult]
}

interface Node {
  id: ID!
}

input SearchInput {
  limit: Int
}

enum Role {
  ADMIN
}

union SearchResult = User

extend type User {
  nickname: String
  id: ID!
}
'''


@pytest.fixture
def schema():
    return SchemaParser.from_sdl(SCHEMA_SDL)


def field_of(schema, type_name, field_name):
    ir_type = schema.get_type_by_name(type_name)
    return next(f for f in ir_type.fields if f.name == field_name)


class TestSchemaParser:
    """Tests for SchemaParser."""

    def test_definition_order(self, schema):
        assert [t.name for t in schema.types] == [
            "DateTime", "User", "Node", "SearchInput", "Role", "SearchResult",
        ]

    def test_kinds(self, schema):
        kinds = {t.name: t.kind for t in schema.types}
        assert kinds["User"] is GraphQLKind.OBJECT
        assert kinds["Node"] is GraphQLKind.INTERFACE
        assert kinds["SearchInput"] is GraphQLKind.INPUT
        assert kinds["Role"] is GraphQLKind.ENUM
        assert kinds["SearchResult"] is GraphQLKind.UNION
        assert kinds["DateTime"] is GraphQLKind.SCALAR

    def test_object_and_input_lists(self, schema):
        assert [t.name for t in schema.object_types] == ["User"]
        assert [t.name for t in schema.types if t.is_input] == ["SearchInput"]

    def test_builtin_scalar_reference(self, schema):
        ref = field_of(schema, "User", "id").type
        assert ref.kind is GraphQLKind.SCALAR
        assert ref.is_optional is False
        assert ref.is_list is False

    def test_custom_scalar_reference(self, schema):
        ref = field_of(schema, "User", "createdAt").type
        assert ref.kind is GraphQLKind.SCALAR
        assert ref.is_optional is True

    def test_enum_reference(self, schema):
        assert field_of(schema, "User", "role").type.kind is GraphQLKind.ENUM

    def test_required_list(self, schema):
        ref = field_of(schema, "User", "tags").type
        assert ref.is_list is True
        assert ref.is_optional is False

    def test_nested_list_collapses(self, schema):
        ref = field_of(schema, "User", "matrix").type
        assert ref.name == "Int"
        assert ref.is_list is True
        assert ref.is_optional is True

    def test_arguments(self, schema):
        search = field_of(schema, "User", "search")
        assert search.type.kind is GraphQLKind.UNION
        term, filter_arg = search.arguments
        assert term.name == "term"
        assert filter_arg.type.kind is GraphQLKind.INPUT
        assert filter_arg.type.is_optional is False

    def test_extension_merges_fields(self, schema):
        names = [f.name for f in schema.get_type_by_name("User").fields]
        assert names[-1] == "nickname"
        assert names.count("id") == 1

    def test_extension_before_definition(self):
        schema = SchemaParser.from_sdl(
            "extend type Query { b: Int }\ntype Query { a: Int }\n"
        )
        assert [t.name for t in schema.types] == ["Query"]
        assert [f.name for f in schema.types[0].fields] == ["b", "a"]

    def test_undefined_reference_is_object(self):
        schema = SchemaParser.from_sdl("type Query { thing: Missing }")
        assert schema.types[0].fields[0].type.kind is GraphQLKind.OBJECT


class TestSchemaFiles:
    """Tests for reading schema files from disk."""

    def test_directory(self, tmp_path):
        (tmp_path / "b.graphqls").write_text("type User { id: ID! }\n")
        (tmp_path / "a.graphql").write_text("type Query { me: User }\n")
        (tmp_path / "notes.txt").write_text("not a schema")
        schema = SchemaParser(str(tmp_path)).parse_all()
        assert [t.name for t in schema.types] == ["Query", "User"]
        assert schema.types[0].fields[0].type.kind is GraphQLKind.OBJECT

    def test_single_file(self, tmp_path):
        schema_file = tmp_path / "schema.graphql"
        schema_file.write_text("type Query { ok: Boolean }\n")
        schema = SchemaParser(str(schema_file)).parse_all()
        assert [t.name for t in schema.types] == ["Query"]

    def test_syntax_error(self, tmp_path):
        (tmp_path / "broken.graphql").write_text("type Query {")
        with pytest.raises(GraphQLSyntaxError):
            SchemaParser(str(tmp_path)).parse_all()
