"""Core modules for GraphQL resolver type generation."""

from .generator import (
    ResolverGenerator,
    build_associations,
    build_input_catalog,
    map_field_type,
    render_namespace,
    resolve_model_name,
    synthesize_defaults,
)
from .hooks import (
    AddHeaderHook,
    FilterTypesHook,
    HookRunner,
    PostGenerateHook,
    PreGenerateHook,
    PrettierFormatHook,
)
from .introspect import (
    Declaration,
    Member,
    MemberKind,
    ModelNotFoundError,
    SourceParser,
    TypeScriptSourceParser,
)
from .ir import (
    GraphQLKind,
    IRArgument,
    IRField,
    IRModel,
    IRSchema,
    IRType,
    IRTypeRef,
    ModelMap,
)
from .model_map import build_model_map, parse_model_definition
from .parser import SchemaParser
from .scalars import ts_scalar_type

__all__ = [
    # Hooks
    "PreGenerateHook",
    "PostGenerateHook",
    "AddHeaderHook",
    "FilterTypesHook",
    "PrettierFormatHook",
    "HookRunner",
    # IR types
    "GraphQLKind",
    "IRArgument",
    "IRField",
    "IRModel",
    "IRSchema",
    "IRType",
    "IRTypeRef",
    "ModelMap",
    # Parser
    "SchemaParser",
    # Models
    "build_model_map",
    "parse_model_definition",
    "Declaration",
    "Member",
    "MemberKind",
    "ModelNotFoundError",
    "SourceParser",
    "TypeScriptSourceParser",
    # Generator
    "ResolverGenerator",
    "build_associations",
    "build_input_catalog",
    "map_field_type",
    "render_namespace",
    "resolve_model_name",
    "synthesize_defaults",
    "ts_scalar_type",
]
