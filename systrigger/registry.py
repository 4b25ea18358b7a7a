"""Ordered, validated set of handlers for a run."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from types import ModuleType

from systrigger.config import Config
from systrigger.errors import ConfigurationError, DuplicateHandlerError
from systrigger.handlers import (
    desktop_files,
    fonts,
    glib2,
    hwdb,
    icon_cache,
    ldconfig,
    mime,
    sysusers,
    tmpfiles,
)
from systrigger.handlers.base import Handler, HandlerProtocol
from systrigger.resolver import GlobResolver, PathResolver
from systrigger.triggers import load_trigger_dir, to_handler

# Execution order: files and users first, then caches that may depend on them.
BUILTIN_HANDLERS: tuple[ModuleType, ...] = (
    tmpfiles,
    sysusers,
    hwdb,
    ldconfig,
    glib2,
    mime,
    desktop_files,
    fonts,
    icon_cache,
)


class Registry:
    """Ordered collection of uniquely named handlers.

    Registration order is execution order. Once sealed (the dispatcher seals
    the registry it runs) no further handlers can be added.
    """

    def __init__(self, resolver: PathResolver | None = None) -> None:
        self.resolver: PathResolver = resolver or GlobResolver()
        self._handlers: dict[str, Handler] = {}
        self._sealed = False

    def register(
        self,
        name: str,
        interest_paths: Sequence[str],
        exec_fn: HandlerProtocol,
        description: str = "",
    ) -> Handler:
        """Validate and append a handler.

        Raises:
            ConfigurationError: On an empty name or interest set, or when the
                registry is sealed.
            DuplicateHandlerError: If *name* is already registered.
            PatternError: If an interest glob is malformed.
        """
        if self._sealed:
            raise ConfigurationError(f"Cannot register '{name}': registry is sealed")
        if not name or not name.strip():
            raise ConfigurationError("Handler name must not be empty")
        if name in self._handlers:
            raise DuplicateHandlerError(name)
        paths = tuple(interest_paths)
        if not paths:
            raise ConfigurationError(f"Handler '{name}' has no interest paths")
        self.resolver.validate(paths)

        handler = Handler(name=name, paths=paths, exec=exec_fn, description=description)
        self._handlers[name] = handler
        return handler

    def add(self, handler: Handler) -> Handler:
        """Register an already built :class:`Handler`."""
        return self.register(handler.name, handler.paths, handler.exec, handler.description)

    def seal(self) -> Registry:
        self._sealed = True
        return self

    @property
    def sealed(self) -> bool:
        return self._sealed

    @property
    def handlers(self) -> tuple[Handler, ...]:
        return tuple(self._handlers.values())

    def names(self) -> list[str]:
        return list(self._handlers)

    def get(self, name: str) -> Handler | None:
        return self._handlers.get(name)

    def select(self, names: Iterable[str]) -> Registry:
        """Return a sealed registry holding only *names*, in registry order.

        Raises:
            ConfigurationError: If a name is not registered.
        """
        wanted = set(names)
        unknown = sorted(wanted - set(self._handlers))
        if unknown:
            raise ConfigurationError(f"Unknown handler(s): {', '.join(unknown)}")
        return self._subset(h for h in self._handlers.values() if h.name in wanted)

    def exclude(self, names: Iterable[str]) -> Registry:
        """Return a sealed registry without *names*; unknown names are ignored."""
        unwanted = set(names)
        return self._subset(h for h in self._handlers.values() if h.name not in unwanted)

    def _subset(self, handlers: Iterable[Handler]) -> Registry:
        subset = Registry(self.resolver)
        for handler in handlers:
            subset.add(handler)
        return subset.seal()

    def __iter__(self) -> Iterator[Handler]:
        return iter(self.handlers)

    def __len__(self) -> int:
        return len(self._handlers)

    def __contains__(self, name: object) -> bool:
        return name in self._handlers


def register_builtins(registry: Registry) -> Registry:
    """Register the built-in handlers in their fixed order."""
    for module in BUILTIN_HANDLERS:
        registry.register(module.NAME, module.PATHS, module.run, module.DESCRIPTION)
    return registry


def default_registry(config: Config | None = None) -> Registry:
    """Built-in handlers, then declarative triggers from *config*.

    Triggers from ``triggers_dir`` come after inline ``triggers``. Handlers
    listed in ``disabled_handlers`` are dropped. The result is sealed.

    Raises:
        ConfigurationError: On duplicate names, malformed globs or invalid
            trigger files.
    """
    config = config or Config()
    registry = register_builtins(Registry())

    specs = list(config.triggers)
    if config.triggers_dir:
        specs.extend(load_trigger_dir(config.triggers_dir))
    for spec in specs:
        registry.add(to_handler(spec))

    return registry.exclude(config.disabled_handlers)
