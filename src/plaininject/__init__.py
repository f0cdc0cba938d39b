"""Minimal dependency injection container.

This package resolves and constructs object graphs on request from a set of
declared providers. A key is either a class or an `InjectionToken`; each key
can be provided by a fixed value, a zero-argument factory or a substitute
injectable class. Classes marked `@injectable` are constructed directly when
no provider is registered for them.

Exports:
- `Container`: Provider registry and resolution engine (`add_provider`, `inject`).
- `InjectionToken`: Symbolic key for values without a class of their own.
- `ValueProvider`, `FactoryProvider`, `ClassProvider`: Provider declarations.
- `injectable`: Decorator marking a class as eligible for automatic construction.
- `Inject`: `Annotated` marker overriding the key used for a constructor parameter.
- `InjectionError` and subclasses: `NotInjectableError`, `NoProviderError`,
  `CircularDependencyError`.
"""

from ._container import Container
from ._errors import CircularDependencyError, InjectionError, NoProviderError, NotInjectableError
from ._keys import InjectionToken, display_name
from ._metadata import Inject, get_param_override, get_param_types, injectable, is_injectable
from ._providers import (
    ClassProvider,
    FactoryProvider,
    Provider,
    ValueProvider,
    is_class_provider,
    is_factory_provider,
    is_value_provider,
)


__all__ = [
    "CircularDependencyError",
    "ClassProvider",
    "Container",
    "FactoryProvider",
    "Inject",
    "InjectionError",
    "InjectionToken",
    "NoProviderError",
    "NotInjectableError",
    "Provider",
    "ValueProvider",
    "display_name",
    "get_param_override",
    "get_param_types",
    "injectable",
    "is_class_provider",
    "is_factory_provider",
    "is_injectable",
    "is_value_provider",
]
