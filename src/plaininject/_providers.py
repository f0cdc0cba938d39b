from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, TypeGuard


if TYPE_CHECKING:
    from collections.abc import Callable


@dataclass(frozen=True)
class ValueProvider:
    provide: Any
    use_value: Any


@dataclass(frozen=True)
class FactoryProvider:
    provide: Any
    use_factory: Callable[[], Any]


@dataclass(frozen=True)
class ClassProvider:
    provide: Any
    use_class: type


Provider = ValueProvider | FactoryProvider | ClassProvider


def is_value_provider(provider: Provider) -> TypeGuard[ValueProvider]:
    return isinstance(provider, ValueProvider)


def is_factory_provider(provider: Provider) -> TypeGuard[FactoryProvider]:
    return isinstance(provider, FactoryProvider)


def is_class_provider(provider: Provider) -> TypeGuard[ClassProvider]:
    return isinstance(provider, ClassProvider)
