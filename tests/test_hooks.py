"""Tests for generation hooks."""

import subprocess

import pytest

from gql_resolvergen.core.hooks import (
    AddHeaderHook,
    FilterTypesHook,
    HookRunner,
    PostGenerateHook,
    PreGenerateHook,
    PrettierFormatHook,
)
from gql_resolvergen.core.ir import GraphQLKind, IRSchema, IRType


@pytest.fixture
def sample_ir():
    """Create a sample IR schema for testing."""
    return IRSchema(
        types=[
            IRType(name="Status", kind=GraphQLKind.ENUM),
            IRType(name="_Internal", kind=GraphQLKind.ENUM),
            IRType(name="User", kind=GraphQLKind.OBJECT),
            IRType(name="_Meta", kind=GraphQLKind.OBJECT),
            IRType(name="Product", kind=GraphQLKind.OBJECT),
            IRType(name="CreateUserInput", kind=GraphQLKind.INPUT),
            IRType(name="_DebugInput", kind=GraphQLKind.INPUT),
        ],
    )


class TestAddHeaderHook:
    """Tests for AddHeaderHook."""

    def test_adds_header(self):
        hook = AddHeaderHook("// Auto-generated")
        result = hook.post_generate("resolvers.ts", "export interface IResolvers {}")
        assert result.startswith("// Auto-generated\n\n")

    def test_preserves_content(self):
        hook = AddHeaderHook("// Header")
        content = "export interface IResolvers {}"
        result = hook.post_generate("resolvers.ts", content)
        assert content in result

    def test_handles_header_with_newline(self):
        hook = AddHeaderHook("// Header\n")
        result = hook.post_generate("resolvers.ts", "code")
        # Should not double-up newlines
        assert result == "// Header\n\ncode"


class TestFilterTypesHook:
    """Tests for FilterTypesHook."""

    def test_exclude_prefix(self, sample_ir):
        hook = FilterTypesHook(exclude_prefix="_")
        result = hook.pre_generate(sample_ir)

        type_names = [t.name for t in result.object_types]
        assert type_names == ["User", "Product"]

    def test_exclude_suffix(self, sample_ir):
        hook = FilterTypesHook(exclude_suffix="Input")
        result = hook.pre_generate(sample_ir)

        assert [t for t in result.types if t.is_input] == []

    def test_include_prefix(self, sample_ir):
        hook = FilterTypesHook(include_prefix="Create")
        result = hook.pre_generate(sample_ir)

        assert [t.name for t in result.types] == ["CreateUserInput"]

    def test_filters_enums(self, sample_ir):
        hook = FilterTypesHook(exclude_prefix="_")
        result = hook.pre_generate(sample_ir)

        enum_names = [t.name for t in result.types if t.kind is GraphQLKind.ENUM]
        assert enum_names == ["Status"]


class TestPrettierFormatHook:
    """Tests for PrettierFormatHook."""

    def test_returns_formatted_code(self, monkeypatch):
        calls = []

        def fake_run(args, **kwargs):
            calls.append((args, kwargs))
            return subprocess.CompletedProcess(args, 0, stdout="formatted;\n", stderr="")

        monkeypatch.setattr(subprocess, "run", fake_run)
        result = PrettierFormatHook(command=("npx", "prettier")).post_generate("resolvers.ts", "code")

        assert result == "formatted;\n"
        args, kwargs = calls[0]
        assert args == ["npx", "prettier", "--parser", "typescript"]
        assert kwargs["input"] == "code"

    def test_syntax_error_keeps_code(self, monkeypatch, caplog):
        def fake_run(args, **kwargs):
            raise subprocess.CalledProcessError(2, args, stderr="SyntaxError: ';' expected")

        monkeypatch.setattr(subprocess, "run", fake_run)
        with caplog.at_level("WARNING"):
            result = PrettierFormatHook().post_generate("resolvers.ts", "broken {")

        assert result == "broken {"
        assert "syntax error" in caplog.text

    def test_missing_prettier_keeps_code(self, monkeypatch, caplog):
        def fake_run(args, **kwargs):
            raise FileNotFoundError(args[0])

        monkeypatch.setattr(subprocess, "run", fake_run)
        with caplog.at_level("WARNING"):
            result = PrettierFormatHook(command=("no-such-prettier",)).post_generate("a.ts", "code")

        assert result == "code"
        assert "no-such-prettier" in caplog.text


class TestHookRunner:
    """Tests for HookRunner."""

    def test_run_pre_hooks(self, sample_ir):
        runner = HookRunner()
        runner.add_pre_hook(FilterTypesHook(exclude_prefix="_"))

        result = runner.run_pre_hooks(sample_ir)
        type_names = [t.name for t in result.types]
        assert "_Meta" not in type_names

    def test_run_post_hooks(self):
        runner = HookRunner()
        runner.add_post_hook(AddHeaderHook("// Header"))

        result = runner.run_post_hooks("resolvers.ts", "code")
        assert result.startswith("// Header")

    def test_multiple_pre_hooks(self, sample_ir):
        runner = HookRunner()
        runner.add_pre_hook(FilterTypesHook(exclude_prefix="_"))

        class CountTypesHook:
            def pre_generate(self, ir):
                ir.type_count = len(ir.types)
                return ir

        runner.add_pre_hook(CountTypesHook())

        result = runner.run_pre_hooks(sample_ir)
        assert result.type_count == 4

    def test_multiple_post_hooks(self):
        runner = HookRunner()
        runner.add_post_hook(AddHeaderHook("// Line 1"))
        runner.add_post_hook(AddHeaderHook("// Line 0"))

        result = runner.run_post_hooks("resolvers.ts", "code")
        assert result.index("// Line 0") < result.index("// Line 1")


class TestProtocolCompliance:
    """Tests for protocol compliance."""

    def test_add_header_is_post_hook(self):
        assert isinstance(AddHeaderHook("header"), PostGenerateHook)

    def test_prettier_is_post_hook(self):
        assert isinstance(PrettierFormatHook(), PostGenerateHook)

    def test_filter_types_is_pre_hook(self):
        assert isinstance(FilterTypesHook(), PreGenerateHook)

    def test_custom_pre_hook(self):
        class CustomPreHook:
            def pre_generate(self, ir):
                return ir

        assert isinstance(CustomPreHook(), PreGenerateHook)
