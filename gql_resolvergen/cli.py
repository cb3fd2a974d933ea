"""Command-line interface for gql-resolvergen."""

import logging
import shlex
import shutil
import tarfile
import tempfile
import zipfile
from pathlib import Path

import click

from .core.generator import ResolverGenerator
from .core.hooks import AddHeaderHook, FilterTypesHook, HookRunner, PrettierFormatHook
from .core.introspect import ModelNotFoundError
from .core.ir import GraphQLKind
from .core.model_map import build_model_map
from .core.parser import SchemaParser

ARCHIVE_SUFFIXES = (".zip", ".tar.gz", ".tgz")

logger = logging.getLogger(__name__)


def extract_archive(archive_path: Path) -> str:
    """Extract archive to temp directory. Returns path to extracted content."""
    temp_dir = tempfile.mkdtemp()
    if archive_path.suffix == ".zip":
        with zipfile.ZipFile(archive_path, "r") as zip_ref:
            zip_ref.extractall(temp_dir)
    elif archive_path.name.endswith((".tar.gz", ".tgz")):
        with tarfile.open(archive_path, "r:gz") as tar_ref:
            tar_ref.extractall(temp_dir, filter="data")
    else:
        shutil.rmtree(temp_dir)
        raise ValueError(f"Unsupported archive format: {archive_path.suffix}")
    return temp_dir


def parse_model_options(ctx, param, values) -> dict[str, str]:
    """Turn repeated ``TYPE=FILE[:MODEL]`` options into a dict."""
    definitions = {}
    for value in values:
        type_name, sep, definition = value.partition("=")
        if not sep or not type_name.strip() or not definition.strip():
            raise click.BadParameter(
                f"expected TYPE=FILE[:MODEL], got {value!r}", ctx=ctx, param=param
            )
        definitions[type_name.strip()] = definition.strip()
    return definitions


@click.group()
@click.version_option()
def main():
    """GraphQL resolver type generator for TypeScript.

    Generate typed resolver declarations from GraphQL schemas.
    """
    pass


@main.command()
@click.option(
    "--schema",
    "-s",
    required=True,
    type=click.Path(exists=True),
    help="Path to GraphQL schema file, directory, or archive (.zip, .tar.gz, .tgz).",
)
@click.option(
    "--output",
    "-o",
    required=True,
    type=click.Path(dir_okay=False),
    help="Output file for generated resolver types (e.g., generated/resolvers.ts).",
)
@click.option(
    "--context",
    "-c",
    "context_path",
    required=True,
    help="Module the resolver Context type is imported from (e.g., ./context).",
)
@click.option(
    "--model",
    "-m",
    "models",
    multiple=True,
    callback=parse_model_options,
    help="Model backing a GraphQL type, as TYPE=FILE[:MODEL]. Repeatable.",
)
@click.option(
    "--template-dir",
    type=click.Path(file_okay=False),
    help="Directory with custom templates overriding the built-in ones.",
)
@click.option("--header", help="Text to prepend to the generated file.")
@click.option("--exclude-prefix", help="Skip GraphQL types whose name starts with this prefix.")
@click.option(
    "--prettier",
    "prettier_command",
    default="prettier",
    show_default=True,
    help="Command used to format the output.",
)
@click.option("--no-format", is_flag=True, help="Write the output without running prettier.")
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output.",
)
def generate(
    schema: str,
    output: str,
    context_path: str,
    models: dict[str, str],
    template_dir: str | None,
    header: str | None,
    exclude_prefix: str | None,
    prettier_command: str,
    no_format: bool,
    verbose: bool,
):
    """Generate TypeScript resolver types from a GraphQL schema.

    Examples:

        gql-resolvergen generate -s ./schema.graphql -o ./generated/resolvers.ts -c ./context

        gql-resolvergen generate -s ./schema -o ./generated/resolvers.ts -c ./context \\
            -m User=./src/models.ts:UserModel -m Post=./src/models.ts
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    schema_path = Path(schema).resolve()
    output_path = Path(output).resolve()
    temp_dir = None

    try:
        # Handle archives
        actual_schema_path = schema_path
        if schema_path.is_file() and schema_path.name.lower().endswith(ARCHIVE_SUFFIXES):
            click.echo(f"Extracting archive {schema_path.name}...")
            temp_dir = extract_archive(schema_path)
            actual_schema_path = Path(temp_dir)
            if verbose:
                click.echo(f"  Extracted to: {temp_dir}")

        if verbose:
            click.echo(f"Schema: {actual_schema_path}")
            click.echo(f"Output: {output_path}")

        # Parse schema
        click.echo("Parsing schema...")
        parser = SchemaParser(str(actual_schema_path))
        ir = parser.parse_all()
        for type_name in models:
            if ir.get_type_by_name(type_name) is None:
                logger.warning("Model given for unknown type %s", type_name)

        hooks = HookRunner()
        if exclude_prefix:
            hooks.add_pre_hook(FilterTypesHook(exclude_prefix=exclude_prefix))
        if not no_format:
            hooks.add_post_hook(PrettierFormatHook(command=shlex.split(prettier_command)))
        if header:
            hooks.add_post_hook(AddHeaderHook(header))
        ir = hooks.run_pre_hooks(ir)

        if verbose:
            click.echo(f"  Objects: {ir.count(GraphQLKind.OBJECT)}")
            click.echo(f"  Inputs: {ir.count(GraphQLKind.INPUT)}")
            click.echo(f"  Enums: {ir.count(GraphQLKind.ENUM)}")
            click.echo(f"  Unions: {ir.count(GraphQLKind.UNION)}")
            click.echo(f"  Scalars: {ir.count(GraphQLKind.SCALAR)}")
            click.echo(f"  Models: {len(models)}")

        try:
            model_map = build_model_map(models, output_path, base_dir=Path.cwd())
        except ValueError as e:
            raise click.BadParameter(str(e), param_hint="'--model'")

        # Generate code
        click.echo("Generating resolver types...")
        generator = ResolverGenerator(ir, model_map, context_path, template_dir=template_dir)
        try:
            code = generator.generate_code()
        except (ModelNotFoundError, OSError) as e:
            raise click.ClickException(str(e))
        code = hooks.run_post_hooks(output_path.name, code)

        # Create output directory if needed
        output_path.parent.mkdir(parents=True, exist_ok=True)

        click.echo(f"Writing to {output_path}...")
        with open(output_path, "w") as f:
            f.write(code)

        click.echo(f"Done! Generated resolvers for {len(ir.object_types)} types.")
    finally:
        # Clean up temp directory
        if temp_dir:
            shutil.rmtree(temp_dir)


if __name__ == "__main__":
    main()
