"""Resolver type generator for GraphQL schemas.

Renders Jinja2 templates to produce TypeScript resolver declarations from
IR: one ``<Type>Resolvers`` namespace per object type, and an
``IResolvers`` interface binding them together.

Supports custom templates via the template_dir parameter:
    generator = ResolverGenerator(ir, model_map, "./context", template_dir="./my_templates")

Template lookup order:
1. User's template directory (if provided)
2. Package default templates
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from jinja2 import ChoiceLoader, Environment, FileSystemLoader, PackageLoader, select_autoescape

from .introspect import SourceParser, read_model_properties
from .ir import IRField, IRSchema, IRType, IRTypeRef, ModelMap
from .scalars import ts_scalar_type

logger = logging.getLogger(__name__)

# Type used when there is nothing better, e.g. the parent of Query
EMPTY_SHAPE = "{}"


def capitalize(name: str) -> str:
    """Upper-case the first letter and lower-case the rest (``userId`` -> ``Userid``)."""
    return name.capitalize()


def resolve_model_name(type_name: str, model_map: ModelMap) -> str:
    """Return the model type backing a GraphQL type, or the empty shape.

    It's usually assumed that every GraphQL type has a model associated
    except for the ``Query``, ``Mutation`` and ``Subscription`` types.
    """
    model = model_map.get(type_name)
    if model is None:
        return EMPTY_SHAPE
    return model.model_type_name


def map_type_ref(type_ref: IRTypeRef, model_map: ModelMap) -> str:
    """Map a GraphQL type reference to a TypeScript type expression."""
    if type_ref.is_scalar:
        ts_type = ts_scalar_type(type_ref.name)
    elif type_ref.is_input:
        ts_type = type_ref.name
    else:
        ts_type = resolve_model_name(type_ref.name, model_map)

    if type_ref.is_list:
        ts_type = f"{ts_type}[]"
    if type_ref.is_optional:
        ts_type = f"{ts_type} | null"
    return ts_type


def map_field_type(field: IRField, model_map: ModelMap) -> str:
    """Map a field's (or argument's) GraphQL type to a TypeScript type expression."""
    return map_type_ref(field.type, model_map)


def build_input_catalog(types: list[IRType]) -> dict[str, IRType]:
    """Index input types by name."""
    return {t.name: t for t in types if t.is_input}


def build_associations(types: list[IRType]) -> dict[str, str]:
    """Map each object type to the input type consumed by its field arguments.

    Only one input type is kept per object type: when several fields take
    different input types, the last one found wins. Object types without
    input-typed arguments are left out.
    """
    associations: dict[str, str] = {}
    for ir_type in types:
        if not ir_type.is_object:
            continue
        for ir_field in ir_type.fields:
            for arg in ir_field.arguments:
                if arg.type.is_input:
                    associations[ir_type.name] = arg.type.name
    return associations


def args_interface_name(field: IRField) -> str:
    return f"Args{capitalize(field.name)}"


def resolver_type_name(field: IRField) -> str:
    return f"{capitalize(field.name)}Resolver"


def resolver_signature(field: IRField, parent_type: IRType, model_map: ModelMap) -> str:
    """Render the function type of a field resolver.

    Resolvers may always return their result directly or as a promise.
    """
    args_type = args_interface_name(field) if field.arguments else EMPTY_SHAPE
    result_type = map_field_type(field, model_map)
    return (
        f"(parent: {resolve_model_name(parent_type.name, model_map)}, "
        f"args: {args_type}, ctx: Context, info: GraphQLResolveInfo) "
        f"=> {result_type} | Promise<{result_type}>"
    )


def synthesize_defaults(
    ir_type: IRType,
    model_map: ModelMap,
    source_parser: Optional[SourceParser] = None,
) -> str:
    """Render the ``defaultResolvers`` block of a type.

    Every property declared by the type's model gets a resolver reading it
    straight off the parent. Types without a model get an empty map.
    Without a ``source_parser`` the model file is read with the TypeScript
    or TSX grammar according to its extension.

    Raises:
        ModelNotFoundError: If the model file does not declare the model type
    """
    model = model_map.get(ir_type.name)
    if model is None:
        return f"export const defaultResolvers = {EMPTY_SHAPE}"

    properties = read_model_properties(model, source_parser)
    if not properties:
        return f"export const defaultResolvers = {EMPTY_SHAPE}"
    lines = ["export const defaultResolvers = {"]
    lines.extend(f"  {name}: parent => parent.{name}," for name in properties)
    lines.append("}")
    return "\n".join(lines)


@dataclass
class InterfaceBlock:
    """An ``export interface`` with pre-rendered ``name: type`` lines."""
    name: str
    fields: list[str] = field(default_factory=list)


@dataclass
class ResolverBlock:
    field_name: str
    type_name: str
    signature: str


def _interface_lines(fields: list[IRField], model_map: ModelMap) -> list[str]:
    return [f"{f.name}: {map_field_type(f, model_map)}" for f in fields]


def _input_interface_lines(input_type: IRType) -> list[str]:
    """Type the fields of an associated input by scalar name alone.

    No list or null suffixes are added. Every non-scalar field, nested
    inputs and enums included, becomes ``string``.
    """
    return [f"{f.name}: {ts_scalar_type(f.type.name)}" for f in input_type.fields]


def namespace_context(
    ir_type: IRType,
    associations: dict[str, str],
    input_catalog: dict[str, IRType],
    model_map: ModelMap,
    source_parser: Optional[SourceParser],
) -> dict:
    """Collect everything the namespace template needs for one object type."""
    input_block = None
    associated = associations.get(ir_type.name)
    if associated:
        input_type = input_catalog[associated]
        input_block = InterfaceBlock(
            name=input_type.name,
            fields=_input_interface_lines(input_type),
        )

    return {
        "type_name": ir_type.name,
        "default_resolvers": synthesize_defaults(ir_type, model_map, source_parser),
        "input_type": input_block,
        "arg_interfaces": [
            InterfaceBlock(
                name=args_interface_name(f),
                fields=_interface_lines(f.arguments, model_map),
            )
            for f in ir_type.fields
            if f.arguments
        ],
        "resolvers": [
            ResolverBlock(
                field_name=f.name,
                type_name=resolver_type_name(f),
                signature=resolver_signature(f, ir_type, model_map),
            )
            for f in ir_type.fields
        ],
    }


def create_environment(template_dir: Optional[str] = None) -> Environment:
    """Build the Jinja2 environment, custom templates take precedence."""
    loaders = []
    if template_dir:
        template_path = Path(template_dir)
        if template_path.is_dir():
            loaders.append(FileSystemLoader(str(template_path)))
        else:
            logger.warning("Template directory %s does not exist, using built-in templates", template_dir)
    loaders.append(PackageLoader("gql_resolvergen", "templates"))

    return Environment(
        loader=ChoiceLoader(loaders),
        autoescape=select_autoescape(default_for_string=False),
        trim_blocks=True,
        lstrip_blocks=True,
    )


def render_namespace(
    ir_type: IRType,
    associations: dict[str, str],
    input_catalog: dict[str, IRType],
    model_map: ModelMap,
    source_parser: Optional[SourceParser] = None,
    env: Optional[Environment] = None,
) -> str:
    """Render the ``<Type>Resolvers`` namespace of an object type."""
    env = env or create_environment()
    context = namespace_context(ir_type, associations, input_catalog, model_map, source_parser)
    return env.get_template("namespace.ts.j2").render(context)


class ResolverGenerator:
    """Generates TypeScript resolver types from GraphQL IR.

    Supports custom templates via the template_dir parameter.
    Templates in template_dir take precedence over built-in templates.

    Available templates to override:
        - resolvers.ts.j2: Header, namespaces and the IResolvers interface
        - namespace.ts.j2: A single ``<Type>Resolvers`` namespace

    Example:
        generator = ResolverGenerator(
            ir=schema,
            model_map=models,
            context_path="./context",
        )
        code = generator.generate_code()
    """

    def __init__(
        self,
        ir: IRSchema,
        model_map: ModelMap,
        context_path: str,
        template_dir: Optional[str] = None,
        source_parser: Optional[SourceParser] = None,
    ):
        """Initialize the resolver generator.

        Args:
            ir: The intermediate representation of the GraphQL schema
            model_map: Models backing GraphQL types, keyed by type name
            context_path: Module the resolver ``Context`` type is imported from
            template_dir: Optional directory with custom Jinja2 templates.
                          Templates here override the built-in templates.
            source_parser: Parser used to read model files. Defaults to the
                           tree-sitter grammar matching each file extension
        """
        self.ir = ir
        self.model_map = model_map
        self.context_path = context_path
        self.source_parser = source_parser
        self.env = create_environment(template_dir)

    def _model_imports(self) -> list[dict[str, str]]:
        """One import per distinct (model, module) pair, in model map order."""
        seen = set()
        imports = []
        for model in self.model_map.values():
            key = (model.model_type_name, model.import_path)
            if key in seen:
                continue
            seen.add(key)
            imports.append({"name": model.model_type_name, "path": model.import_path})
        return imports

    def generate_code(self) -> str:
        """Generate the complete resolver types module."""
        associations = build_associations(self.ir.types)
        input_catalog = build_input_catalog(self.ir.types)
        object_types = self.ir.object_types

        namespaces = []
        for ir_type in object_types:
            logger.debug("Rendering %sResolvers", ir_type.name)
            namespaces.append(
                render_namespace(
                    ir_type,
                    associations,
                    input_catalog,
                    self.model_map,
                    self.source_parser,
                    env=self.env,
                )
            )

        template = self.env.get_template("resolvers.ts.j2")
        code = template.render(
            context_path=self.context_path,
            models=self._model_imports(),
            namespaces=namespaces,
            type_names=[t.name for t in object_types],
        )
        return code + "\n"
