"""Introspection of TypeScript model files.

Only a small surface is needed to synthesize default resolvers: the named
top-level declarations of a file and, for each one, its direct members
tagged as property or not. ``SourceParser`` describes that surface;
``TypeScriptSourceParser`` implements it with tree-sitter.

Example usage:
    names = read_model_properties(model)  # ["id", "name"]
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Protocol, runtime_checkable

import tree_sitter_typescript as ts_typescript
from tree_sitter import Language, Node, Parser

from .ir import IRModel

logger = logging.getLogger(__name__)


class ModelNotFoundError(ValueError):
    """Raised when a model file does not declare the mapped model type."""

    def __init__(self, model_type_name: str, file_path: str):
        super().__init__(f"No interface found for name {model_type_name} in {file_path}")
        self.model_type_name = model_type_name
        self.file_path = file_path


class MemberKind(Enum):
    PROPERTY = "property"
    OTHER = "other"


@dataclass
class Member:
    name: str
    kind: MemberKind


@dataclass
class Declaration:
    """A named top-level declaration (interface, class or type alias)."""
    name: str
    kind: str
    members: list[Member] = field(default_factory=list)

    @property
    def property_names(self) -> list[str]:
        return [m.name for m in self.members if m.kind is MemberKind.PROPERTY]


@runtime_checkable
class SourceParser(Protocol):
    """Protocol for model source parsers."""

    def parse_source(self, text: str) -> list[Declaration]:
        """Return the named top-level declarations of a source file, in order."""
        ...


# tree-sitter node types
_DECLARATION_BODIES = {
    "interface_declaration": "body",
    "class_declaration": "body",
    "abstract_class_declaration": "body",
    "type_alias_declaration": "value",
}
_PROPERTY_NODES = {"property_signature", "public_field_definition"}


class TypeScriptSourceParser:
    """Extracts declarations from TypeScript sources using tree-sitter."""

    def __init__(self, tsx: bool = False):
        self.tsx = tsx
        language = ts_typescript.language_tsx() if tsx else ts_typescript.language_typescript()
        self._parser = Parser(Language(language))

    @classmethod
    def for_file(cls, file_path: str | Path) -> "TypeScriptSourceParser":
        """Return a parser using the TSX grammar for ``.tsx`` files."""
        return cls(tsx=Path(file_path).suffix.lower() == ".tsx")

    def parse_source(self, text: str) -> list[Declaration]:
        tree = self._parser.parse(text.encode("utf-8"))
        declarations = []
        for node in tree.root_node.named_children:
            # `export interface X` wraps the declaration
            if node.type == "export_statement":
                node = node.child_by_field_name("declaration")
                if node is None:
                    continue
            declaration = self._to_declaration(node)
            if declaration is not None:
                declarations.append(declaration)
        return declarations

    @staticmethod
    def _to_declaration(node: Node) -> Declaration | None:
        body_field = _DECLARATION_BODIES.get(node.type)
        if body_field is None:
            return None
        name_node = node.child_by_field_name("name")
        if name_node is None:
            return None
        declaration = Declaration(name=_text(name_node), kind=node.type)
        body = node.child_by_field_name(body_field)
        # Aliases of anything but an object literal type have no members
        if body is None or body.type not in ("interface_body", "object_type", "class_body"):
            return declaration
        for child in body.named_children:
            name = child.child_by_field_name("name")
            if name is None:
                continue
            if child.type in _PROPERTY_NODES and name.type == "property_identifier":
                kind = MemberKind.PROPERTY
            else:
                kind = MemberKind.OTHER
            declaration.members.append(Member(name=_text(name), kind=kind))
        return declaration


def _text(node: Node) -> str:
    return node.text.decode("utf-8")


def find_declaration(declarations: list[Declaration], name: str) -> Declaration | None:
    """Return the first declaration with the given name."""
    for declaration in declarations:
        if declaration.name == name:
            return declaration
    return None


def read_model_properties(model: IRModel, parser: SourceParser | None = None) -> list[str]:
    """Return the property names declared by a model, in source order.

    Without a parser, the grammar is picked from the model file extension.

    Raises:
        ModelNotFoundError: If the file does not declare ``model.model_type_name``
        OSError: If the model file cannot be read
    """
    source = Path(model.absolute_file_path).read_text(encoding="utf-8")
    if parser is None:
        parser = TypeScriptSourceParser.for_file(model.absolute_file_path)
    declaration = find_declaration(parser.parse_source(source), model.model_type_name)
    if declaration is None:
        raise ModelNotFoundError(model.model_type_name, model.absolute_file_path)
    properties = declaration.property_names
    logger.debug(
        "Found %d properties on %s (%s)",
        len(properties), model.model_type_name, model.absolute_file_path,
    )
    return properties
