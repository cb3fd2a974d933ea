"""Tests for scalar mapping."""

import pytest

from gql_resolvergen.core.scalars import DEFAULT_SCALAR_TYPE, ts_scalar_type


class TestTsScalarType:
    """Tests for ts_scalar_type."""

    def test_numbers(self):
        assert ts_scalar_type("Int") == "number"
        assert ts_scalar_type("Float") == "number"

    def test_boolean(self):
        assert ts_scalar_type("Boolean") == "boolean"

    def test_strings(self):
        assert ts_scalar_type("String") == "string"
        assert ts_scalar_type("ID") == "string"

    @pytest.mark.parametrize("name", ["DateTime", "JSON", "Upload", "int", ""])
    def test_unknown_defaults_to_string(self, name):
        assert ts_scalar_type(name) == DEFAULT_SCALAR_TYPE == "string"
