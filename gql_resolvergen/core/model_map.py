"""Building the GraphQL type -> TypeScript model map.

Models are given as ``path/to/file.ts:ModelName``. When the model name is
left out the GraphQL type name is used, so ``User=./src/models.ts`` maps
``User`` to the ``User`` interface of ``./src/models.ts``.
"""

import os
from pathlib import Path, PurePosixPath

from .ir import IRModel, ModelMap

# Longest first so ".d.ts" wins over ".ts"
TS_EXTENSIONS = (".d.ts", ".tsx", ".ts")


def import_path_for(model_file: Path, output_path: Path) -> str:
    """Return the module specifier to import ``model_file`` from ``output_path``."""
    relative = os.path.relpath(model_file, output_path.parent)
    relative = PurePosixPath(*Path(relative).parts).as_posix()
    for extension in TS_EXTENSIONS:
        if relative.endswith(extension):
            relative = relative[: -len(extension)]
            break
    if not relative.startswith("."):
        relative = f"./{relative}"
    return relative


def parse_model_definition(
    type_name: str,
    definition: str,
    output_path: str | Path,
    base_dir: str | Path = ".",
) -> IRModel:
    """Parse a ``file[:ModelName]`` definition into an IRModel.

    Args:
        type_name: The GraphQL type the model backs
        definition: Path to the model file, optionally followed by ``:ModelName``
        output_path: Path of the generated file, imports are relative to it
        base_dir: Directory relative model paths are resolved from

    Raises:
        ValueError: If the definition has no file path or an empty model name
    """
    file_part, sep, model_name = definition.rpartition(":")
    if not sep:
        file_part, model_name = definition, type_name
    # Windows drive letters ("C:\\models.ts") have nothing after the colon
    elif "/" in model_name or "\\" in model_name:
        file_part, model_name = definition, type_name
    file_part, model_name = file_part.strip(), model_name.strip()
    if not file_part:
        raise ValueError(f"Model definition for {type_name} has no file path: {definition!r}")
    if not model_name:
        raise ValueError(f"Model definition for {type_name} has an empty model name: {definition!r}")

    model_file = (Path(base_dir) / file_part).resolve()
    return IRModel(
        model_type_name=model_name,
        absolute_file_path=str(model_file),
        import_path=import_path_for(model_file, Path(output_path).resolve()),
    )


def build_model_map(
    definitions: dict[str, str],
    output_path: str | Path,
    base_dir: str | Path = ".",
) -> ModelMap:
    """Build a ModelMap from ``{type name: "file[:ModelName]"}`` definitions."""
    return {
        type_name: parse_model_definition(type_name, definition, output_path, base_dir)
        for type_name, definition in definitions.items()
    }
