"""GraphQL schema parser using graphql-core.

Parses .graphql/.graphqls files and produces an IRSchema.
"""

import logging
import os

from graphql import (
    DocumentNode,
    EnumTypeDefinitionNode,
    EnumTypeExtensionNode,
    InputObjectTypeDefinitionNode,
    InputObjectTypeExtensionNode,
    InterfaceTypeDefinitionNode,
    InterfaceTypeExtensionNode,
    ListTypeNode,
    NamedTypeNode,
    NonNullTypeNode,
    ObjectTypeDefinitionNode,
    ObjectTypeExtensionNode,
    ScalarTypeDefinitionNode,
    TypeNode,
    UnionTypeDefinitionNode,
    UnionTypeExtensionNode,
    parse,
)

from .ir import GraphQLKind, IRArgument, IRField, IRSchema, IRType, IRTypeRef
from .scalars import BUILTIN_SCALARS

logger = logging.getLogger(__name__)

SCHEMA_EXTENSIONS = (".graphql", ".graphqls")

# Definition and extension node classes for each kind of named type
_KIND_NODES = (
    ((ScalarTypeDefinitionNode,), GraphQLKind.SCALAR),
    ((ObjectTypeDefinitionNode, ObjectTypeExtensionNode), GraphQLKind.OBJECT),
    ((InterfaceTypeDefinitionNode, InterfaceTypeExtensionNode), GraphQLKind.INTERFACE),
    ((InputObjectTypeDefinitionNode, InputObjectTypeExtensionNode), GraphQLKind.INPUT),
    ((EnumTypeDefinitionNode, EnumTypeExtensionNode), GraphQLKind.ENUM),
    ((UnionTypeDefinitionNode, UnionTypeExtensionNode), GraphQLKind.UNION),
)


def _kind_of(definition) -> GraphQLKind | None:
    for node_classes, kind in _KIND_NODES:
        if isinstance(definition, node_classes):
            return kind
    return None


class SchemaParser:
    """Parses GraphQL schema files into IR."""

    def __init__(self, schema_path: str):
        """Initialize a parser with a path to a schema file or directory."""
        self.schema_path = schema_path
        self.ir = IRSchema()
        self.kinds: dict[str, GraphQLKind] = {
            name: GraphQLKind.SCALAR for name in BUILTIN_SCALARS
        }
        self._types: dict[str, IRType] = {}

    def parse_all(self) -> IRSchema:
        """Parse all schema files and return the complete IR."""
        documents = []
        for file_path in self._collect_schema_files():
            current_file = os.path.basename(file_path)
            with open(file_path) as f:
                content = f.read()
            try:
                documents.append(parse(content))
            except Exception as e:
                logger.error("Error parsing %s: %s", current_file, e)
                raise
        return self.parse_documents(documents)

    def parse_documents(self, documents: list[DocumentNode]) -> IRSchema:
        """Build the IR from already parsed documents.

        All type names are collected first so that field references can
        be resolved to their kind regardless of definition order.
        """
        for document in documents:
            self._collect_kinds(document)
        for document in documents:
            self._process_ast(document)
        return self.ir

    @classmethod
    def from_sdl(cls, sdl: str) -> IRSchema:
        """Parse a schema given as a single SDL string."""
        return cls("").parse_documents([parse(sdl)])

    def _collect_schema_files(self) -> list[str]:
        """Collect all schema files from path."""
        files = []
        if os.path.isfile(self.schema_path):
            if self.schema_path.endswith(SCHEMA_EXTENSIONS):
                files.append(self.schema_path)
        else:
            for root, _, filenames in os.walk(self.schema_path):
                for filename in filenames:
                    if filename.endswith(SCHEMA_EXTENSIONS):
                        files.append(os.path.join(root, filename))
        return sorted(files)

    def _collect_kinds(self, ast: DocumentNode):
        for definition in ast.definitions:
            kind = _kind_of(definition)
            if kind is not None:
                self.kinds.setdefault(definition.name.value, kind)

    def _process_ast(self, ast: DocumentNode):
        """Process GraphQL AST and populate IR."""
        for definition in ast.definitions:
            kind = _kind_of(definition)
            if kind is None:
                continue
            name = definition.name.value
            fields = self._process_fields(getattr(definition, "fields", None) or [])
            if name in self._types:
                self._merge_fields(self._types[name], fields)
                continue
            ir_type = IRType(name=name, kind=kind, fields=fields)
            self._types[name] = ir_type
            self.ir.types.append(ir_type)

    @staticmethod
    def _merge_fields(existing: IRType, fields: list[IRField]):
        """Merge fields from an extension (or a late base definition) into a type."""
        existing_names = {f.name for f in existing.fields}
        for field in fields:
            if field.name not in existing_names:
                existing.fields.append(field)
                existing_names.add(field.name)

    def _process_fields(self, field_nodes) -> list[IRField]:
        """Process field definitions into the IRField list."""
        fields = []
        for node in field_nodes:
            args = []
            if hasattr(node, "arguments") and node.arguments:
                for arg_node in node.arguments:
                    args.append(
                        IRArgument(
                            name=arg_node.name.value,
                            type=self._get_type_ref(arg_node.type),
                        )
                    )
            fields.append(
                IRField(
                    name=node.name.value,
                    type=self._get_type_ref(node.type),
                    arguments=args,
                )
            )
        return fields

    def _get_type_ref(self, type_node: TypeNode) -> IRTypeRef:
        """Extract the type name, kind, is_list, and is_optional from the type node."""
        is_optional = True
        is_list = False

        # NonNull wrapper means not optional
        if isinstance(type_node, NonNullTypeNode):
            is_optional = False
            type_node = type_node.type

        # Unwrap any depth of lists, [[Type!]!] collapses to a single list
        while isinstance(type_node, (ListTypeNode, NonNullTypeNode)):
            if isinstance(type_node, ListTypeNode):
                is_list = True
            type_node = type_node.type

        # After unwrapping, we should have a NamedTypeNode
        assert isinstance(type_node, NamedTypeNode), f"Expected NamedTypeNode, got {type(type_node)}"

        name = type_node.name.value
        kind = self.kinds.get(name)
        if kind is None:
            logger.debug("Reference to undefined type %s, treating it as an object", name)
            kind = GraphQLKind.OBJECT

        return IRTypeRef(name=name, kind=kind, is_list=is_list, is_optional=is_optional)
