"""Tests for spoon.registry module."""

import pytest

from spoon.errors import ConfigurationError, DuplicateNameError, UnknownFormatterError
from spoon.formatters import BaseFormatter, CompositeFormatter
from spoon.formatters.dot import DotFormatter
from spoon.registry import (
    BUILTIN_FORMATTERS,
    FormatterRegistry,
    build_formatter,
    build_formatters,
    formatter,
    get_formatter_registry,
    parse_formatter_option,
    reset_formatter_registry,
)


class DummyFormatter(BaseFormatter):
    """Minimal formatter for testing."""

    def __init__(self, suite_name="default", output_file=None, *, verbosity=0, **kwargs):
        super().__init__(suite_name, output_file, **kwargs)
        self.verbosity = verbosity


class TestFormatterRegistry:
    """Tests for FormatterRegistry."""

    def test_register_and_get(self):
        registry = FormatterRegistry()
        descriptor = registry.register("dummy", description="for tests")

        assert registry.get("dummy") is descriptor
        assert "dummy" in registry
        assert len(registry) == 1

    def test_duplicate_name_raises(self):
        registry = FormatterRegistry()
        registry.register("dot", description="dots")

        with pytest.raises(DuplicateNameError, match="dot"):
            registry.register("dot", description="more dots")

        assert registry.get("dot").description == "dots"

    def test_list_is_sorted_and_stable(self):
        registry = FormatterRegistry()
        for name in ("tap", "dot", "junit"):
            registry.register(name, description=name)

        assert [d.name for d in registry.list()] == ["dot", "junit", "tap"]
        assert registry.list() == registry.list()

    def test_second_default_rejected(self):
        registry = FormatterRegistry()
        registry.register("dot", description="dots", default=True)

        with pytest.raises(ConfigurationError, match="already is"):
            registry.register("clean", description="clean", default=True)

        assert "clean" not in registry
        assert registry.default_name() == "dot"

    def test_default_name_without_default(self):
        registry = FormatterRegistry()
        registry.register("dot", description="dots")

        with pytest.raises(ConfigurationError, match="exactly one default"):
            registry.default_name()

    def test_get_unknown_lists_available(self):
        registry = FormatterRegistry()
        registry.register("dot", description="dots")

        with pytest.raises(UnknownFormatterError) as excinfo:
            registry.get("progress")

        assert excinfo.value.available == ["dot"]
        assert "Available: dot" in str(excinfo.value)

    def test_derived_import_path(self):
        registry = FormatterRegistry()
        descriptor = registry.register("swayze_or_oprah", description="quotes")

        assert descriptor.import_path == "spoon.formatters.swayze_or_oprah:SwayzeOrOprahFormatter"

    def test_invalid_import_string_not_registered(self):
        registry = FormatterRegistry()

        with pytest.raises(ConfigurationError, match="Invalid import path"):
            registry.register("broken", description="x", implementation="nodots")

        assert "broken" not in registry

    def test_resolve_loads_once(self):
        registry = FormatterRegistry()
        registry.register("dot", description="dots")

        first = registry.resolve("dot")

        assert first is DotFormatter
        assert registry.resolve("dot") is first

    def test_resolve_factory(self):
        registry = FormatterRegistry()
        registry.register("dummy", description="x", implementation=DummyFormatter)

        assert registry.resolve("dummy") is DummyFormatter

    def test_resolve_bad_module_raises(self):
        registry = FormatterRegistry()
        registry.register("ghost", description="x", implementation="spoon.formatters.ghost:Ghost")

        with pytest.raises(ConfigurationError, match="Cannot import"):
            registry.resolve("ghost")

    def test_resolve_missing_class_raises(self):
        registry = FormatterRegistry()
        registry.register("ghost", description="x", implementation="spoon.formatters.dot:Ghost")

        with pytest.raises(ConfigurationError, match="not a formatter class"):
            registry.resolve("ghost")


class TestBuiltins:
    """Tests for the built-in catalog."""

    def test_catalog(self):
        registry = get_formatter_registry()

        assert registry.names() == sorted(name for name, _, _ in BUILTIN_FORMATTERS)
        assert registry.default_name() == "dot"

    @pytest.mark.parametrize("name", [name for name, _, _ in BUILTIN_FORMATTERS])
    def test_every_builtin_resolves(self, name, output):
        instance = build_formatter(name, "default", stream=output)

        assert isinstance(instance, BaseFormatter)

    def test_reset_drops_custom_formatters(self):
        get_formatter_registry().register("dummy", description="x", implementation=DummyFormatter)

        registry = reset_formatter_registry()

        assert "dummy" not in registry
        assert "dot" in registry


class TestFormatterDecorator:
    """Tests for the @formatter decorator."""

    def test_registers_class(self):
        @formatter("progress", description="progress bar")
        class ProgressFormatter(DummyFormatter):
            pass

        registry = get_formatter_registry()
        assert "progress" in registry
        assert registry.resolve("progress") is ProgressFormatter

    def test_returns_original_class(self):
        @formatter("progress", description="progress bar")
        class ProgressFormatter(DummyFormatter):
            pass

        assert ProgressFormatter.__name__ == "ProgressFormatter"

    def test_duplicate_builtin_name(self):
        with pytest.raises(DuplicateNameError):

            @formatter("dot", description="more dots")
            class OtherDotFormatter(DummyFormatter):
                pass


class TestBuildFormatter:
    """Tests for build_formatter."""

    def test_from_registry_with_kwargs(self):
        @formatter("dummy", description="x")
        class ConfigurableFormatter(DummyFormatter):
            pass

        instance = build_formatter("dummy", verbosity=2, color=False)

        assert isinstance(instance, ConfigurableFormatter)
        assert instance.verbosity == 2

    def test_import_string_colon(self):
        instance = build_formatter("spoon.formatters.tap:TapFormatter", color=False)
        from spoon.formatters.tap import TapFormatter

        assert isinstance(instance, TapFormatter)

    def test_import_string_dot(self):
        instance = build_formatter("spoon.formatters.tap.TapFormatter", color=False)
        from spoon.formatters.tap import TapFormatter

        assert isinstance(instance, TapFormatter)

    def test_unknown_raises(self):
        with pytest.raises(UnknownFormatterError, match="Unknown formatter: progress"):
            build_formatter("progress")

    def test_invalid_import_raises(self):
        with pytest.raises(ConfigurationError):
            build_formatter("nonexistent.module:Formatter")


class TestParseFormatterOption:
    """Tests for parse_formatter_option."""

    def test_name_only(self):
        assert parse_formatter_option("dot") == ("dot", None)

    def test_with_output_file(self):
        assert parse_formatter_option("junit>reports/junit.xml") == ("junit", "reports/junit.xml")

    def test_empty_name_raises(self):
        with pytest.raises(ConfigurationError):
            parse_formatter_option(">out.xml")


class TestBuildFormatters:
    """Tests for build_formatters."""

    def test_default_when_empty(self):
        composite = build_formatters([], color=False)

        assert isinstance(composite, CompositeFormatter)
        assert [type(f) for f in composite] == [DotFormatter]

    def test_comma_separated_string(self, tmp_path):
        composite = build_formatters(
            f"dot,junit>{tmp_path / 'junit.xml'}", suite_name="models", color=False
        )

        dot, junit = composite.formatters
        assert dot.output_file is None
        assert junit.output_file == tmp_path / "junit.xml"
        assert junit.suite_name == "models"

    def test_list_of_selections(self):
        composite = build_formatters(["tap", "json"], color=False)

        assert len(composite) == 2

    def test_unknown_selection_raises(self):
        with pytest.raises(UnknownFormatterError):
            build_formatters(["dot", "progress"])
