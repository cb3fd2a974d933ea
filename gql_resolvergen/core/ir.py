"""Intermediate Representation (IR) for GraphQL schemas.

This module defines dataclasses that represent GraphQL schema constructs
in a language-agnostic way, suitable for resolver type generation.
"""

from dataclasses import dataclass, field
from enum import Enum

class GraphQLKind(Enum):
    """The kind of named type a reference points at."""
    SCALAR = "scalar"
    OBJECT = "object"
    INTERFACE = "interface"
    INPUT = "input"
    ENUM = "enum"
    UNION = "union"


@dataclass
class IRTypeRef:
    """A reference to a named type, with its list and nullability wrappers.

    Nested lists are flattened to a single ``is_list`` flag and only the
    outer-most non-null marker is kept.
    """
    name: str
    kind: GraphQLKind
    is_list: bool = False
    is_optional: bool = True  # True if nullable (no ! in GraphQL)

    @property
    def is_scalar(self) -> bool:
        return self.kind is GraphQLKind.SCALAR

    @property
    def is_input(self) -> bool:
        return self.kind is GraphQLKind.INPUT


@dataclass
class IRArgument:
    """Represents an argument to a field."""
    name: str
    type: IRTypeRef


@dataclass
class IRField:
    """Represents a field in a GraphQL object, interface or input type."""
    name: str
    type: IRTypeRef
    arguments: list[IRArgument] = field(default_factory=list)


@dataclass
class IRType:
    """Represents a named GraphQL type.

    Scalars, enums and unions carry no fields.
    """
    name: str
    kind: GraphQLKind
    fields: list[IRField] = field(default_factory=list)

    @property
    def is_object(self) -> bool:
        return self.kind is GraphQLKind.OBJECT

    @property
    def is_input(self) -> bool:
        return self.kind is GraphQLKind.INPUT


@dataclass
class IRModel:
    """A TypeScript model type backing a GraphQL type.

    Attributes:
        model_type_name: Name of the interface/class in the model source file
        absolute_file_path: Where the model is declared
        import_path: Module specifier relative to the generated file
    """
    model_type_name: str
    absolute_file_path: str
    import_path: str


# GraphQL type name -> backing model
ModelMap = dict[str, IRModel]


@dataclass
class IRSchema:
    """Complete intermediate representation of a GraphQL schema.

    Types keep the order in which they were defined; generated output
    follows that order.
    """
    types: list[IRType] = field(default_factory=list)

    def get_type_by_name(self, name: str) -> IRType | None:
        """Look up a type by name."""
        for ir_type in self.types:
            if ir_type.name == name:
                return ir_type
        return None

    @property
    def object_types(self) -> list[IRType]:
        """Return object types in definition order."""
        return [t for t in self.types if t.is_object]

    def count(self, kind: GraphQLKind) -> int:
        """Count the types of a given kind."""
        return sum(1 for t in self.types if t.kind is kind)
