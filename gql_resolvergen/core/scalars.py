"""GraphQL scalar to TypeScript primitive mapping.

The mapping is closed: every scalar becomes one of ``number``, ``boolean``
or ``string``. Scalars that are not listed here, custom ones included
(``DateTime``, ``JSON``...), fall back to ``string``.

Example usage:
    from gql_resolvergen.core.scalars import ts_scalar_type

    ts_scalar_type("Int")       # "number"
    ts_scalar_type("DateTime")  # "string"
"""

BUILTIN_SCALARS = ("Int", "Float", "String", "Boolean", "ID")

DEFAULT_SCALAR_TYPE = "string"

SCALAR_TYPES: dict[str, str] = {
    "Int": "number",
    "Float": "number",
    "Boolean": "boolean",
    "String": "string",
    "ID": "string",
}


def ts_scalar_type(scalar_name: str) -> str:
    """Return the TypeScript primitive used for a GraphQL scalar."""
    return SCALAR_TYPES.get(scalar_name, DEFAULT_SCALAR_TYPE)
