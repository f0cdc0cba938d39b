from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass
from typing import (
    TYPE_CHECKING,
    Any,
    TypeVar,
    overload,
)

from . import _metadata
from ._errors import CircularDependencyError, NoProviderError, NotInjectableError
from ._keys import InjectionToken, display_name, is_type_key
from ._providers import (
    ClassProvider,
    Provider,
    is_class_provider,
    is_factory_provider,
    is_value_provider,
)


logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    T = TypeVar("T")


@dataclass
class _Frame:
    """One in-progress construction on the resolution path."""

    key: Any
    cls: type
    index: int = 0


class Container:
    """Dependency injection container.

    - register value, factory or class providers for types and tokens
    - resolve with constructor injection, recursively
    - injectable classes without a provider are constructed directly
    - circular constructor dependencies are detected while resolving

    Nothing is cached: every ``inject`` builds class providers again.
    """

    def __init__(
        self,
        *,
        is_injectable: Callable[[Any], bool] = _metadata.is_injectable,
        get_param_types: Callable[[type], Sequence[Any]] = _metadata.get_param_types,
        get_param_override: Callable[[type, int], Any | None] = _metadata.get_param_override,
    ) -> None:
        self._providers: dict[Any, Provider] = {}
        self._is_injectable = is_injectable
        self._get_param_types = get_param_types
        self._get_param_override = get_param_override

    def add_provider(self, provider: Provider) -> None:
        """Register ``provider`` for ``provider.provide``, replacing any previous one.

        Example:
          container.add_provider(ValueProvider(Config, config))
          container.add_provider(ClassProvider(Repository, SqlRepository))

        """
        if is_class_provider(provider) and not self._is_injectable(provider.use_class):
            raise NotInjectableError(provider.provide, provider.use_class)

        if provider.provide in self._providers:
            logger.debug("Replacing provider for %s", display_name(provider.provide))
        self._providers[provider.provide] = provider
        logger.debug("Registered %s for %s", type(provider).__name__, display_name(provider.provide))

    def add_providers(self, *providers: Provider) -> None:
        for provider in providers:
            self.add_provider(provider)

    def get_provider(self, key: Any) -> Provider | None:
        return self._providers.get(key)

    def has_provider(self, key: Any) -> bool:
        return key in self._providers

    @overload
    def inject(self, key: type[T]) -> T: ...

    @overload
    def inject(self, key: InjectionToken[T]) -> T: ...

    @overload
    def inject(self, key: Any) -> Any: ...

    def inject(self, key: Any) -> Any:
        """Resolve ``key`` to a value.

        - value provider: the registered object itself
        - factory provider: a fresh call to the factory
        - class provider: a new instance, constructor parameters resolved recursively
        - no provider: an injectable class is constructed as its own class provider,
          anything else raises ``NoProviderError``.
        """
        return self._resolve(key, [])

    def _resolve(self, key: Any, path: list[_Frame]) -> Any:
        provider = self._providers.get(key)

        if provider is None:
            if is_type_key(key) and self._is_injectable(key):
                logger.debug("No provider for %s, constructing it directly", display_name(key))
                provider = ClassProvider(key, key)
            else:
                raise NoProviderError(key)

        if is_value_provider(provider):
            return provider.use_value

        if is_factory_provider(provider):
            return provider.use_factory()

        return Constructor(self).construct(key, provider.use_class, path)

    def _resolve_param(self, cls: type, index: int, declared: Any, path: list[_Frame]) -> Any:
        """Resolve one constructor parameter, failing fast on a cycle.

        Resolution precedence:
        1. explicit ``Inject`` override for the parameter
        2. declared parameter type.
        """
        override = self._get_param_override(cls, index)
        effective = declared if override is None else override

        for frame in path:
            if frame.key == effective:
                raise CircularDependencyError(frame.cls, frame.index, tuple(f.key for f in path))

        return self._resolve(effective, path)


class Constructor:
    def __init__(self, resolver: Container) -> None:
        self._resolver = resolver

    def construct(self, key: Any, cls: type[T], path: list[_Frame]) -> T:
        frame = _Frame(key=key, cls=cls)
        path.append(frame)
        try:
            values = []
            for index, declared in enumerate(self._resolver._get_param_types(cls)):  # noqa: SLF001
                frame.index = index
                values.append(self._resolver._resolve_param(cls, index, declared, path))  # noqa: SLF001
        finally:
            path.pop()

        args, kwargs = self._materialize_call(_metadata.get_params(cls), values)
        logger.debug("Constructing %s for %s", cls.__name__, display_name(key))
        return cls(*args, **kwargs)

    def _materialize_call(
        self, params: list[inspect.Parameter], values: list[Any]
    ) -> tuple[list[Any], dict[str, Any]]:
        args, kwargs = [], {}

        for index, value in enumerate(values):
            p = params[index] if index < len(params) else None
            # keyword-only parameters can't be passed positionally
            if p is not None and p.kind is p.KEYWORD_ONLY:
                kwargs[p.name] = value
            else:
                args.append(value)

        return args, kwargs
