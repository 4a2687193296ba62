"""Formatter registry with deferred loading.

Each formatter is described by a :class:`FormatterDescriptor` and registered
under a unique short name. Registering never imports the implementation: the
descriptor holds an import string (or a factory) that is only loaded the
first time the formatter is resolved.
"""

from __future__ import annotations

import importlib
import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, TypeVar

from spoon.errors import ConfigurationError, DuplicateNameError, UnknownFormatterError
from spoon.formatters.composite import CompositeFormatter

if TYPE_CHECKING:
    from spoon.formatters.base import Formatter

logger = logging.getLogger(__name__)

FormatterFactory = Callable[..., "Formatter"]
T = TypeVar("T")

BUILTIN_FORMATTERS: tuple[tuple[str, str, bool], ...] = (
    ("clean", "like dots but doesn't log re-run commands", False),
    ("documentation", "descriptive documentation", False),
    ("dot", "dots", True),
    ("json", "json formatter (raw events)", False),
    ("junit", "junit compatible formatter", False),
    ("pride", "yay rainbows!", False),
    ("rspec_html", "RSpec inspired HTML format", False),
    ("snowday", "makes you feel warm inside", False),
    ("swayze_or_oprah", "quote from either Patrick Swayze or Oprah Winfrey", False),
    ("tap", "test anything protocol formatter", False),
    ("tap_y", "tap_yaml, format used by tapout", False),
    ("teamcity", "teamcity compatible formatter", False),
)


@dataclass(frozen=True)
class FormatterDescriptor:
    """Registry entry for one formatter.

    Attributes:
        name: Unique short name used for selection.
        description: One line shown in listings.
        default: Whether this is the formatter used when none is selected.
        implementation: Import string ``"module:Class"`` or a factory.
            Derived from the name when omitted.
    """

    name: str
    description: str
    default: bool = False
    implementation: str | FormatterFactory | None = None

    @property
    def class_name(self) -> str:
        if callable(self.implementation):
            return getattr(self.implementation, "__name__", repr(self.implementation))
        if isinstance(self.implementation, str):
            return _split_import_path(self.implementation)[1]
        camel = "".join(part.capitalize() for part in self.name.split("_"))
        return f"{camel}Formatter"

    @property
    def module_path(self) -> str:
        if callable(self.implementation):
            return getattr(self.implementation, "__module__", "")
        if isinstance(self.implementation, str):
            return _split_import_path(self.implementation)[0]
        return f"spoon.formatters.{self.name}"

    @property
    def import_path(self) -> str:
        return f"{self.module_path}:{self.class_name}"


class FormatterRegistry:
    """Catalog of known formatters, keyed by name."""

    def __init__(self) -> None:
        self._descriptors: dict[str, FormatterDescriptor] = {}
        self._factories: dict[str, FormatterFactory] = {}

    def register(
        self,
        name: str,
        *,
        description: str,
        default: bool = False,
        implementation: str | FormatterFactory | None = None,
    ) -> FormatterDescriptor:
        """Add a formatter.

        Raises:
            DuplicateNameError: If ``name`` is already registered.
            ConfigurationError: If ``default`` is set and another formatter
                is already the default.
        """
        name = str(name)
        if name in self._descriptors:
            raise DuplicateNameError(name)
        if default:
            current = [d.name for d in self._descriptors.values() if d.default]
            if current:
                msg = f"Cannot make {name} the default formatter, {current[0]} already is"
                raise ConfigurationError(msg)

        descriptor = FormatterDescriptor(
            name=name,
            description=description,
            default=default,
            implementation=implementation,
        )
        import_path = descriptor.import_path
        self._descriptors[name] = descriptor
        logger.debug("Registered formatter %s -> %s", name, import_path)
        return descriptor

    def list(self) -> list[FormatterDescriptor]:
        """All descriptors, sorted by name."""
        return [self._descriptors[name] for name in sorted(self._descriptors)]

    def names(self) -> list[str]:
        return sorted(self._descriptors)

    def get(self, name: str) -> FormatterDescriptor:
        try:
            return self._descriptors[name]
        except KeyError:
            raise UnknownFormatterError(name, self.names()) from None

    def resolve(self, name: str) -> FormatterFactory:
        """Return the factory for ``name``, loading it on first use."""
        descriptor = self.get(name)
        if name not in self._factories:
            if callable(descriptor.implementation):
                factory = descriptor.implementation
            else:
                factory = _import_formatter_class(descriptor.import_path)
            self._factories[name] = factory
            logger.debug("Loaded formatter %s from %s", name, descriptor.import_path)
        return self._factories[name]

    def default_name(self) -> str:
        """Name of the single default formatter."""
        defaults = [d.name for d in self.list() if d.default]
        if len(defaults) != 1:
            msg = f"Expected exactly one default formatter, found {len(defaults)}"
            if defaults:
                msg += f": {', '.join(defaults)}"
            raise ConfigurationError(msg)
        return defaults[0]

    def __contains__(self, name: object) -> bool:
        return name in self._descriptors

    def __len__(self) -> int:
        return len(self._descriptors)


def _split_import_path(import_path: str) -> tuple[str, str]:
    """Split ``"module.path:Class"`` or ``"module.path.Class"``."""
    if ":" in import_path:
        module_path, class_name = import_path.rsplit(":", 1)
    elif "." in import_path:
        module_path, class_name = import_path.rsplit(".", 1)
    else:
        msg = f"Invalid import path: {import_path}"
        raise ConfigurationError(msg)
    return module_path, class_name


def _import_formatter_class(import_path: str) -> FormatterFactory:
    module_path, class_name = _split_import_path(import_path)
    try:
        module = importlib.import_module(module_path)
    except ImportError as exc:
        msg = f"Cannot import formatter module {module_path}: {exc}"
        raise ConfigurationError(msg) from exc

    factory = getattr(module, class_name, None)
    if factory is None or not callable(factory):
        msg = f"{import_path} is not a formatter class"
        raise ConfigurationError(msg)
    return factory


def register_builtins(registry: FormatterRegistry) -> FormatterRegistry:
    """Add the built-in catalog to ``registry``."""
    for name, description, default in BUILTIN_FORMATTERS:
        registry.register(name, description=description, default=default)
    return registry


_formatter_registry: FormatterRegistry | None = None


def get_formatter_registry() -> FormatterRegistry:
    """Get the process-wide registry, creating it on first use."""
    global _formatter_registry
    if _formatter_registry is None:
        _formatter_registry = register_builtins(FormatterRegistry())
    return _formatter_registry


def reset_formatter_registry() -> FormatterRegistry:
    """Replace the process-wide registry with one holding only built-ins."""
    global _formatter_registry
    _formatter_registry = register_builtins(FormatterRegistry())
    return _formatter_registry


def formatter(
    name: str,
    *,
    description: str,
    default: bool = False,
) -> Callable[[T], T]:
    """Register the decorated class on the process-wide registry.

        @formatter("progress", description="progress bar")
        class ProgressFormatter(BaseFormatter): ...
    """

    def decorator(cls: T) -> T:
        get_formatter_registry().register(
            name,
            description=description,
            default=default,
            implementation=cls,  # type: ignore[arg-type]
        )
        return cls

    return decorator


def build_formatter(name: str, *args: Any, **kwargs: Any) -> Formatter:
    """Instantiate a formatter by registry name or import string.

    Args:
        name: Registry name (``"dot"``) or import string
            (``"myapp.reports:ProgressFormatter"``).
        *args: Passed to the formatter constructor.
        **kwargs: Passed to the formatter constructor.
    """
    registry = get_formatter_registry()
    if name in registry:
        return registry.resolve(name)(*args, **kwargs)
    if ":" in name or "." in name:
        return _import_formatter_class(name)(*args, **kwargs)
    raise UnknownFormatterError(name, registry.names())


def parse_formatter_option(option: str) -> tuple[str, str | None]:
    """Split ``"junit>reports/junit.xml"`` into name and output file."""
    name, _, output_file = option.partition(">")
    name = name.strip()
    if not name:
        msg = f"Invalid formatter selection: {option!r}"
        raise ConfigurationError(msg)
    return name, output_file.strip() or None


def build_formatters(
    options: str | Sequence[str] | None,
    *,
    suite_name: str = "default",
    color: bool | None = None,
) -> CompositeFormatter:
    """Build a composite from a formatter selection.

    ``options`` is a comma separated string or a list of selections. The
    default formatter is used when nothing is selected.
    """
    if isinstance(options, str):
        selections = options.split(",")
    else:
        selections = [part for option in options or () for part in option.split(",")]
    selections = [part.strip() for part in selections if part.strip()]
    if not selections:
        selections = [get_formatter_registry().default_name()]

    composite = CompositeFormatter()
    for selection in selections:
        name, output_file = parse_formatter_option(selection)
        composite.add(build_formatter(name, suite_name, output_file, color=color))
    return composite


__all__ = [
    "BUILTIN_FORMATTERS",
    "FormatterDescriptor",
    "FormatterRegistry",
    "build_formatter",
    "build_formatters",
    "formatter",
    "get_formatter_registry",
    "parse_formatter_option",
    "register_builtins",
    "reset_formatter_registry",
]
